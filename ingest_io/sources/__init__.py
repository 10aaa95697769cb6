"""Concrete upstream byte sources."""

from .serial_source import SerialSource, DEFAULT_BAUDRATE, READ_TIMEOUT, READ_CHUNK_SIZE

__all__ = [
    "SerialSource",
    "DEFAULT_BAUDRATE",
    "READ_TIMEOUT",
    "READ_CHUNK_SIZE",
]
