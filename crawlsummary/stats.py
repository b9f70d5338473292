"""
Counter bucket for one value of one dimension (one status code, one mime type, ...).

Duplicates are detected by content digest: the first record with a given digest
in a bucket counts towards uniqueCount/uniqueBytes, later ones only towards
count/bytes. Records without a digest can't be proven duplicates, so they always
count as unique.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Set

from .crawllog import CrawlRecord


class Stats:
    __slots__ = ("count", "unique_count", "bytes", "unique_bytes",
                 "millis", "first_time", "last_time", "label", "_digests")

    def __init__(self, label: Optional[str] = None):
        self.count = 0
        self.unique_count = 0
        self.bytes = 0
        self.unique_bytes = 0
        self.millis = 0  # summed fetch durations
        self.first_time: Optional[datetime] = None
        self.last_time: Optional[datetime] = None
        self.label = label
        self._digests: Set[str] = set()

    def add(self, record: CrawlRecord) -> None:
        size = max(record.size, 0)
        self.count += 1
        self.bytes += size

        if record.digest is None or record.digest not in self._digests:
            if record.digest is not None:
                self._digests.add(record.digest)
            self.unique_count += 1
            self.unique_bytes += size

        self.millis += record.duration_ms or 0

        ts = record.timestamp
        if ts is not None:
            if self.first_time is None or ts < self.first_time:
                self.first_time = ts
            if self.last_time is None or ts > self.last_time:
                self.last_time = ts

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "count": self.count,
            "uniqueCount": self.unique_count,
            "bytes": self.bytes,
            "uniqueBytes": self.unique_bytes,
            "millis": self.millis,
            "firstTime": self.first_time,
            "lastTime": self.last_time,
            "label": self.label,
        }
        return {k: v for k, v in out.items() if v is not None}

    def __repr__(self) -> str:
        return f"Stats(count={self.count}, unique_count={self.unique_count}, bytes={self.bytes})"
