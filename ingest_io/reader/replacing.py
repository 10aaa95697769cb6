"""Streaming search-and-replace byte reader.

Wraps an upstream byte source and rewrites every non-overlapping
occurrence of a search token with a replacement token while the data is
being read, using one bounded internal buffer.

Buffer layout:
    _buf[0:_buf0]      processed bytes, search-free and ready to deliver
    _buf[_buf0:_buf1]  bytes read from upstream but not yet final
    _buf[_buf1:_max]   free space upstream reads may fill

Not thread-safe: a reader instance serves a single consumer at a time.
"""
from __future__ import annotations

import io
import logging
from typing import Optional

from ..errors import ConfigurationError
from .base import ByteSource, read_into

logger = logging.getLogger(__name__)

DEFAULT_BUF_SIZE = 4096  # bytes

_BYTES_LIKE = (bytes, bytearray, memoryview)


class BytesReplacingReader(io.RawIOBase):
    """Byte stream filter replacing ``search`` with ``replace`` on the fly.

    The replacement may be shorter, equal to, or longer than the search
    token, or empty (every match is deleted). Matches are found left to
    right and never overlap; replacement bytes are not rescanned.

    End of stream and upstream errors are latched and only reported once
    every buffered byte has been delivered. Errors are re-raised as the
    original exception object.

    Example:
        >>> src = io.BytesIO(b'r = Foo(Bar.Baz("a,b,c"))')
        >>> BytesReplacingReader(src, b'"', b"'").readall()
        b"r = Foo(Bar.Baz('a,b,c'))"

    Instances can be recycled with reset() to reuse the internal buffer.
    """

    def __init__(self,
                 source,
                 search: bytes,
                 replace: Optional[bytes] = b"",
                 buf_size: int = DEFAULT_BUF_SIZE):
        """Initialize reader.

        Args:
            source: Upstream byte source (anything with readinto() or read())
            search: Token to find, must not be empty
            replace: Token written in place of each match, may be empty
            buf_size: Minimum internal buffer size in bytes
        """
        super().__init__()
        if not isinstance(buf_size, int) or buf_size <= 0:
            raise ConfigurationError(f"buf_size must be a positive integer, got {buf_size!r}")
        self._buf_size = buf_size
        self._buf: Optional[bytearray] = None
        self.reset(source, search, replace)

    def reset(self, source, search: bytes, replace: Optional[bytes] = b"") -> BytesReplacingReader:
        """Reconfigure the reader for a new source and/or tokens.

        Keeps the internal buffer when it is large enough. Must not be
        called while a read is in progress.

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: source is None or unreadable, a token is not
                bytes-like, or search is empty
        """
        if self.closed:
            raise ValueError("cannot reset a closed reader")
        if source is None:
            raise ConfigurationError("source cannot be None")
        if not isinstance(source, ByteSource):
            raise ConfigurationError(
                f"source must provide readinto() or read(), got {type(source).__name__}")
        if search is None:
            raise ConfigurationError("search token cannot be None/empty")
        if not isinstance(search, _BYTES_LIKE):
            raise ConfigurationError(
                f"search token must be bytes-like, got {type(search).__name__}")
        if replace is not None and not isinstance(replace, _BYTES_LIKE):
            raise ConfigurationError(
                f"replace token must be bytes-like, got {type(replace).__name__}")
        search = bytes(search)
        replace = bytes(replace) if replace is not None else b""
        if not search:
            raise ConfigurationError("search token cannot be None/empty")

        self._source = source
        self._search = search
        self._replace = replace
        self._search_len = len(self._search)
        self._replace_len = len(self._replace)
        self._len_delta = self._replace_len - self._search_len  # may be negative

        self._eof = False
        self._error: Optional[Exception] = None
        self._error_tb = None

        buf_size = max(self._buf_size, self._search_len, self._replace_len)
        if self._buf is None or len(self._buf) < buf_size:
            self._buf = bytearray(buf_size)
        self._buf0 = 0
        self._buf1 = 0

        self._max = len(self._buf)
        if self._search_len < self._replace_len:
            # Worst case the whole fill is back-to-back matches, each growing
            # by len_delta; the expanded result must still fit in _buf.
            self._max = len(self._buf) * self._search_len // self._replace_len

        logger.debug(
            f"Reader configured: search={self._search_len} bytes, replace={self._replace_len} bytes, "
            f"buffer={len(self._buf)}, fill ceiling={self._max}"
        )
        return self

    @property
    def search(self) -> bytes:
        """Token being searched for."""
        return self._search

    @property
    def replace(self) -> bytes:
        """Token written in place of each match."""
        return self._replace

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> Optional[int]:
        """Read up to len(b) rewritten bytes into b.

        May return fewer bytes than requested. Returns 0 at end of stream
        and None if a non-blocking source has nothing available yet.

        Raises:
            Exception: the latched upstream error, once the buffer is drained
        """
        if self.closed:
            raise ValueError("I/O operation on closed reader")

        with memoryview(b) as view, view.cast("B") as dest:
            if not len(dest):
                return 0

            while True:
                if self._buf0 > 0:
                    return self._drain(dest)
                if self._eof:
                    return 0
                if self._error is not None:
                    raise self._error.with_traceback(self._error_tb)
                if self._fill() is None:
                    return None

    def _drain(self, dest: memoryview) -> int:
        """Copy processed bytes to dest and compact the buffer."""
        n = min(len(dest), self._buf0)
        dest[:n] = self._buf[:n]
        self._buf0 -= n
        self._buf1 -= n
        if self._buf1:
            self._buf[:self._buf1] = self._buf[n:n + self._buf1]
        return n

    def _fill(self) -> Optional[int]:
        """Pull more bytes from upstream and rewrite any matches.

        Returns:
            Number of bytes pulled, or None if the source had no data yet
        """
        try:
            n = read_into(self._source, memoryview(self._buf)[self._buf1:self._max])
        except Exception as e:
            logger.debug(f"Upstream read failed, deferring {e!r} until {self._buf1} buffered bytes drain")
            self._error = e
            self._error_tb = e.__traceback__
            n = 0
        else:
            if n is None:
                return None
            if n == 0:
                logger.debug(f"Upstream exhausted, {self._buf1} bytes left to deliver")
                self._eof = True

        if n > 0:
            self._buf1 += n
            self._scan()

        if self._eof or self._error is not None:
            # No more upstream data; a partial token can never complete.
            self._buf0 = self._buf1
        return n

    def _scan(self) -> None:
        """Replace every match in the unprocessed region of the buffer."""
        buf = self._buf
        while True:
            index = buf.find(self._search, self._buf0, self._buf1)
            if index < 0:
                # The last search_len - 1 bytes may start a match that
                # completes with the next fill.
                self._buf0 = max(self._buf0, self._buf1 - self._search_len + 1)
                return

            if self._len_delta:
                buf[index + self._replace_len:self._buf1 + self._len_delta] = \
                    buf[index + self._search_len:self._buf1]
            buf[index:index + self._replace_len] = self._replace
            self._buf0 = index + self._replace_len
            self._buf1 += self._len_delta
