"""Upstream byte source interface.

A byte source is anything that can fill a caller-provided buffer:
files opened in binary mode, io.BytesIO, socket streams, or another
filtering reader. Nothing richer than that is required, so stages can be
chained freely.

A raw serial.Serial is not a usable source: a read that times out returns
no bytes, which looks like end of stream. Wrap serial ports in
ingest_io.sources.SerialSource instead.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class ByteSource(ABC):
    """Abstract "read into a byte buffer" capability.

    Classes do not need to inherit from ByteSource: any object exposing
    ``readinto()`` or ``read()`` is recognised by isinstance() checks.

    Contract of ``readinto(b)``:
    - returns the number of bytes written into ``b`` (0 means end of stream)
    - may return fewer bytes than ``len(b)``
    - may return None when no data is available yet (non-blocking sources)
    - raises on upstream failure
    """

    @abstractmethod
    def readinto(self, b) -> Optional[int]:
        """Read up to len(b) bytes into b.

        Args:
            b: Writable bytes-like object (bytearray, memoryview)

        Returns:
            Number of bytes read, 0 at end of stream, or None if no data
            is available yet
        """
        pass

    @classmethod
    def __subclasshook__(cls, C):
        if cls is ByteSource:
            for attr in ("readinto", "read"):
                if any(attr in B.__dict__ and B.__dict__[attr] is not None for B in C.__mro__):
                    return True
        return NotImplemented


def read_into(source, view: memoryview) -> Optional[int]:
    """Fill ``view`` from ``source`` using the best method it offers.

    Prefers ``readinto()``; falls back to ``read(len(view))`` and copies.

    Returns:
        Number of bytes written into view, 0 at end of stream, or None
        if the source has no data available yet
    """
    readinto = getattr(source, "readinto", None)
    if readinto is not None:
        return readinto(view)

    data = source.read(len(view))
    if data is None:
        return None
    n = len(data)
    if n > len(view):
        raise ValueError(f"source returned {n} bytes, at most {len(view)} requested")
    view[:n] = data
    return n
