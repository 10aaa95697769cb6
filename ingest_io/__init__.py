"""ingest_io - Stream-oriented byte and text primitives for ingestion pipelines."""

from .errors import (
    ConfigurationError,
    CsvParseError,
    MultiplePortsError,
    PortNotFoundError,
)
from .reader import ByteSource, BytesReplacingReader, DEFAULT_BUF_SIZE
from .text import index_with_esc, split_with_esc, unescape
from .delimited import LineNumReportingCsvReader

__all__ = [
    "ConfigurationError",
    "CsvParseError",
    "MultiplePortsError",
    "PortNotFoundError",
    "ByteSource",
    "BytesReplacingReader",
    "DEFAULT_BUF_SIZE",
    "index_with_esc",
    "split_with_esc",
    "unescape",
    "LineNumReportingCsvReader",
]
