#!/usr/bin/env python3
"""
CSV Quote Normalization Script.

Reads a CSV file whose fields are quoted with single quotes, rewrites the
quotes on the fly and prints each record with its line number.

Usage:
    python examples/replace_csv_quotes.py data.csv
"""

import sys
import logging
from pathlib import Path

# Add package to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ingest_io import BytesReplacingReader, LineNumReportingCsvReader, CsvParseError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)

def main():
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} <file.csv>")
        return 1

    path = Path(sys.argv[1])
    with open(path, "rb") as raw:
        fixed = BytesReplacingReader(raw, b"'", b'"')
        reader = LineNumReportingCsvReader(fixed)
        try:
            for record in reader:
                print(f"[line {reader.line_num}] {record}")
        except CsvParseError as e:
            print(f"Malformed input in {path}: {e}")
            return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
