"""Stream filters over upstream byte sources."""

from .base import ByteSource, read_into
from .replacing import BytesReplacingReader, DEFAULT_BUF_SIZE

__all__ = ["ByteSource", "read_into", "BytesReplacingReader", "DEFAULT_BUF_SIZE"]
