#!/usr/bin/env python3
"""
Replacing reader benchmark.

Compares draining a reused BytesReplacingReader (reset per run) against a
plain readall() on the same in-memory input, for three input sizes with a
sprinkling of single-byte targets.
"""

import io
import random
import sys
import timeit
from pathlib import Path

# Add package to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from ingest_io import BytesReplacingReader

SEARCH = b"\x07"
REPLACE = b"\x08"
# maps any byte to 10..109
_REGULAR_BYTES = bytes(10 + i % 100 for i in range(256))

def create_test_input(length: int, num_targets: int) -> bytes:
    """Random bytes >= 10 with num_targets bytes set to the search token."""
    rng = random.Random(1234)  # fixed seed for stable runs
    data = bytearray(rng.randbytes(length).translate(_REGULAR_BYTES))
    targets = rng.sample(range(length), num_targets)
    for index in targets:
        data[index] = SEARCH[0]
    return bytes(data)

def bench(name: str, data: bytes, number: int):
    reader = BytesReplacingReader(io.BytesIO(b""), SEARCH, REPLACE)

    def replacing():
        reader.reset(io.BytesIO(data), SEARCH, REPLACE).readall()

    def regular():
        io.BytesIO(data).read()

    for label, func in (("BytesReplacingReader", replacing), ("RegularReader", regular)):
        elapsed = timeit.timeit(func, number=number)
        print(f"{label:<22} {name:<22} {elapsed / number * 1e6:12.1f} us/op")

def main():
    print("Building inputs...")
    scenarios = [
        ("1KB_20Targets", create_test_input(1024, 20), 2000),
        ("50KB_1000Targets", create_test_input(50 * 1024, 1000), 200),
        ("70MB_500Targets", create_test_input(70 * 1024 * 1024, 500), 1),
    ]
    for name, data, number in scenarios:
        bench(name, data, number)

if __name__ == "__main__":
    main()
