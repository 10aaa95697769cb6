"""Escape-aware string helpers for delimited text."""

from .escape import index_with_esc, split_with_esc, unescape

__all__ = ["index_with_esc", "split_with_esc", "unescape"]
