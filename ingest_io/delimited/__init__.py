"""Delimited-text (CSV) reading on top of byte streams."""

from .csv_reader import LineNumReportingCsvReader, open_text

__all__ = ["LineNumReportingCsvReader", "open_text"]
