"""
Tests for crawlsummary/sizes.py.

The bucket formula is kept exactly as existing reports compute it, so these pin
concrete values as well as the ordering properties.
"""

import pytest

from crawlsummary.sizes import human_size, size_bucket


@pytest.mark.parametrize("size,bucket", [
    (-5, 0),
    (0, 0),
    (1, 8),
    (2, 64),
    (7, 64),
    (8, 64),
    (9, 512),
    (100, 4096),
    (1000, 32768),
    (5000, 262144),
    (1_000_000, 16777216),
])
def test_bucket_values(size, bucket):
    assert size_bucket(size) == bucket


@pytest.mark.parametrize("n,label", [
    (0, "0 B"),
    (8, "8 B"),
    (1023, "1023 B"),
    (1024, "1 KiB"),
    (4096, "4 KiB"),
    (32768, "32 KiB"),
    (262144, "256 KiB"),
    (2097152, "2 MiB"),
    (1073741824 * 3, "3 GiB"),
])
def test_human_size(n, label):
    assert human_size(n) == label


def _sizes():
    out = list(range(0, 5000))
    out += [8 ** k + d for k in range(1, 15) for d in (-1, 0, 1)]
    out += [10 ** k for k in range(4, 16)]
    return sorted(set(out))


def test_bucket_is_monotonic():
    sizes = _sizes()
    buckets = [size_bucket(s) for s in sizes]
    assert all(a <= b for a, b in zip(buckets, buckets[1:]))


def test_bucket_always_exceeds_size():
    for s in _sizes():
        if s > 0:
            assert size_bucket(s) > s


def test_buckets_are_powers_of_eight():
    for s in _sizes():
        b = size_bucket(s)
        if b:
            while b % 8 == 0 and b > 1:
                b //= 8
            assert b == 1
