"""CSV record reader that reports the current line number.

Accepts text streams or byte streams, so it can sit directly downstream of
a BytesReplacingReader:

    >>> raw = open("export.csv", "rb")
    >>> fixed = BytesReplacingReader(raw, b";", b",")
    >>> for record in LineNumReportingCsvReader(fixed):
    ...     ...
"""
from __future__ import annotations

import csv
import io
import logging
from typing import Iterator, List, Optional

from ..errors import CsvParseError

logger = logging.getLogger(__name__)


def open_text(source, encoding: str = "utf-8") -> io.TextIOBase:
    """Return a text stream over source, decoding byte streams.

    Byte streams are wrapped with newline="" as the csv module requires.
    Text streams are returned unchanged.
    """
    if isinstance(source, io.TextIOBase):
        return source
    if isinstance(source, io.RawIOBase):
        source = io.BufferedReader(source)
    return io.TextIOWrapper(source, encoding=encoding, newline="")


class LineNumReportingCsvReader:
    """CSV reader exposing the number of physical lines consumed.

    Attributes:
        line_num: Lines read from the source so far. A quoted field that
            spans several lines counts every one of them.
    """

    def __init__(self, source, encoding: str = "utf-8", **fmtparams):
        """Initialize reader.

        Args:
            source: Text stream, or byte stream decoded with encoding
            encoding: Encoding used when source yields bytes
            **fmtparams: Dialect options forwarded to csv.reader
                (delimiter, quotechar, escapechar, ...)
        """
        self._stream = open_text(source, encoding=encoding)
        self._reader = csv.reader(self._stream, **fmtparams)

    @property
    def line_num(self) -> int:
        return self._reader.line_num

    def read(self) -> Optional[List[str]]:
        """Read the next record.

        Returns:
            List of fields, or None at end of stream

        Raises:
            CsvParseError: Malformed record, with the offending line number
        """
        try:
            return next(self._reader)
        except StopIteration:
            return None
        except csv.Error as e:
            logger.warning(f"CSV parse error on line {self.line_num}: {e}")
            raise CsvParseError(str(e), self.line_num) from e

    def __iter__(self) -> Iterator[List[str]]:
        return self

    def __next__(self) -> List[str]:
        record = self.read()
        if record is None:
            raise StopIteration
        return record

    def close(self) -> None:
        """Close the underlying text stream."""
        self._stream.close()

    def __enter__(self) -> LineNumReportingCsvReader:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
