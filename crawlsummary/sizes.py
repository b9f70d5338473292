"""
Size histogram helpers.

Buckets grow by powers of eight; labels are printed in powers of 1024. The two
don't line up (a bucket of 32768 prints as "32 KiB", 262144 as "256 KiB"), and
the exponent is one larger than the smallest power of eight that holds the
size. Existing reports depend on these exact boundaries, so the arithmetic is
kept as-is, floats and all.
"""

import math

_UNITS = "KMGTPE"


def size_bucket(size: int) -> int:
    """
    Histogram bucket for a byte count: 8 ** (ceil(log8(size)) + 1).

    Zero and negative sizes land in bucket 0 (log of 0 is -inf, and 8 ** -inf is 0).
    """
    if size <= 0:
        return 0
    return int(math.pow(8, math.ceil(math.log(size) / math.log(8)) + 1))


def human_size(n: int) -> str:
    """1023 -> "1023 B", 32768 -> "32 KiB". Truncates, never rounds."""
    if n < 1024:
        return f"{n} B"
    e = int(math.log(n) / math.log(1024))
    return f"{int(n / math.pow(1024, e))} {_UNITS[e - 1]}iB"
