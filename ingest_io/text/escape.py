"""Escape-aware indexing, splitting and unescaping of strings.

A character preceded by the escape character is taken literally, so an
escaped delimiter neither matches nor splits. Offsets are character
offsets.

These are plain nested scans (O(n*m) for delimiter length m). Delimiters
are usually a single character, so the simple loop costs next to nothing.
"""
from __future__ import annotations

from typing import List, Optional


def _check_esc(esc: Optional[str]) -> None:
    if esc is not None and len(esc) != 1:
        raise ValueError(f"escape must be a single character, got {esc!r}")


def index_with_esc(s: str, delim: str, esc: Optional[str] = None) -> int:
    """Find the first unescaped occurrence of delim in s.

    Args:
        s: String to search
        delim: Delimiter to look for
        esc: Escape character, or None for a plain search

    Returns:
        Offset of the first unescaped delim, 0 if delim is empty,
        -1 if not found

    Examples:
        >>> index_with_esc("abc%|efg|xyz", "|", "%")
        8
        >>> index_with_esc("abc", "", "%")
        0
    """
    _check_esc(esc)
    if not delim:
        return 0
    if not s:
        return -1
    if esc is None:
        return s.find(delim)

    i = 0
    last = len(s) - len(delim)
    while i <= last:
        if s[i] == esc:
            # Skip the escape and the character it protects.
            i += 2
            continue
        if s.startswith(delim, i):
            return i
        i += 1
    return -1


def split_with_esc(s: str, delim: str, esc: Optional[str] = None) -> List[str]:
    """Split s on every unescaped delim.

    Escape characters are kept in the resulting pieces; see unescape().
    An empty delim splits s into single characters.

    Examples:
        >>> split_with_esc("a*bc/*d*efg", "*", "/")
        ['a', 'bc/*d', 'efg']
    """
    _check_esc(esc)
    if not delim:
        return list(s)
    if esc is None:
        return s.split(delim)

    parts = []
    index = index_with_esc(s, delim, esc)
    while index >= 0:
        parts.append(s[:index])
        s = s[index + len(delim):]
        index = index_with_esc(s, delim, esc)
    parts.append(s)
    return parts


def unescape(s: str, esc: Optional[str] = None) -> str:
    """Drop escape characters, keeping each escaped character verbatim.

    A trailing escape with nothing after it is dropped.

    Examples:
        >>> unescape("abc%|efg", "%")
        'abc|efg'
        >>> unescape("ξξabcξdξ", "ξ")
        'ξabcd'
    """
    _check_esc(esc)
    if esc is None or esc not in s:
        return s

    out = []
    escaped = False
    for ch in s:
        if ch == esc and not escaped:
            escaped = True
            continue
        out.append(ch)
        escaped = False
    return "".join(out)
