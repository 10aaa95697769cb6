#!/usr/bin/env python3
"""
Serial CSV Capture Script.

Connects to a serial data logger, normalizes its semicolon separated output
to commas and prints the parsed records until the logger goes quiet.

Usage:
    python examples/serial_capture.py [port]
"""

import sys
import logging
from pathlib import Path

# Add package to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import serial

from ingest_io import BytesReplacingReader, LineNumReportingCsvReader
from ingest_io.sources import SerialSource

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)

def main():
    port = sys.argv[1] if len(sys.argv) > 1 else None

    print("Opening serial source (auto-detect if no port given)...")
    try:
        source = SerialSource(port=port, baudrate=115200, idle_timeout=5.0).open()
    except Exception as e:
        print(f"Failed to open serial source: {e}")
        return 1

    print(f"Reading from {source.port}, stops after 5s of silence (Ctrl+C to stop)...")
    try:
        reader = LineNumReportingCsvReader(BytesReplacingReader(source, b";", b","))
        for record in reader:
            print(f"[{reader.line_num}] {record}")
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    except serial.SerialException as e:
        print(f"\nSerial error: {e}")
    finally:
        source.close()
        print("Done.")
    return 0

if __name__ == "__main__":
    sys.exit(main())
