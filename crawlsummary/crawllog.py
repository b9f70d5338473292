# crawlsummary/crawllog.py
"""
Reader for Heritrix-style crawl.log files.

What this file does
-------------------
• Turns one log line into a CrawlRecord (or None if the line is junk)
• Wraps a log file in CrawlLog, an iterable you can walk as many times as you like.
  Every pass re-opens the file, so the summarizer can read it once to build the
  seed map and again to fold records into statistics.

Line layout (whitespace separated, "-" means "not present")
-----------------------------------------------------------
0 timestamp    1 status    2 size    3 url    4 hop path    5 via (parent url)
6 mime type    7 thread    8 fetch start+duration    9 digest    10 source tag
11 annotations    12+ optional JSON extra

Only the first ten columns are mandatory. Columns are padded with spaces for
alignment, so we split on runs of whitespace rather than single spaces.
"""

from __future__ import annotations

import gzip
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

MIN_FIELDS = 10
_ABSENT = "-"
_TIMESTAMP_FORMATS = ("%Y-%m-%dT%H:%M:%S.%fZ", "%Y-%m-%dT%H:%M:%SZ")


def normalize_discovery_path(hop_path: Optional[str]) -> str:
    """None, "" and "-" all mean "this is a seed"; collapse them to ""."""
    if not hop_path or hop_path == _ABSENT:
        return ""
    return hop_path


def _opt(value: str) -> Optional[str]:
    return None if value == _ABSENT else value


def parse_duration(value: str) -> Optional[int]:
    """Milliseconds from the "start+duration" column, e.g. "20240301095959999+250" -> 250."""
    _, plus, millis = value.rpartition("+")
    if not plus:
        return None
    try:
        return int(millis)
    except ValueError:
        return None


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse the log's ISO-8601 UTC timestamp; None if it isn't one."""
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


@dataclass(frozen=True)
class CrawlRecord:
    """
    One fetch attempt as logged by the crawler.

    thread, seed and annotations are kept for callers that want them; the
    statistics never look at them.
    """

    timestamp: Optional[datetime]
    status_code: int
    size: int
    url: str
    hop_path: Optional[str]
    via: Optional[str]
    mime_type: Optional[str]
    thread: Optional[str] = None
    duration_ms: Optional[int] = None
    digest: Optional[str] = None
    seed: Optional[str] = None
    annotations: Optional[str] = None

    @property
    def discovery_path(self) -> str:
        return normalize_discovery_path(self.hop_path)

    @property
    def parent_url(self) -> Optional[str]:
        return self.via


def parse_line(line: str) -> Optional[CrawlRecord]:
    """
    Parse a single crawl.log line.

    Returns None for blank lines and for lines that don't look like a log entry
    (too few columns, non-numeric status). The caller decides whether to count
    or report those.
    """
    fields = line.split()
    if len(fields) < MIN_FIELDS:
        return None

    try:
        status = int(fields[1])
    except ValueError:
        return None

    try:
        size = int(fields[2]) if fields[2] != _ABSENT else 0
    except ValueError:
        return None

    return CrawlRecord(
        timestamp=parse_timestamp(fields[0]),
        status_code=status,
        size=size,
        url=fields[3],
        hop_path=_opt(fields[4]),
        via=_opt(fields[5]),
        mime_type=_opt(fields[6]),
        thread=_opt(fields[7]),
        duration_ms=parse_duration(fields[8]),
        digest=_opt(fields[9]),
        seed=_opt(fields[10]) if len(fields) > 10 else None,
        annotations=_opt(fields[11]) if len(fields) > 11 else None,
    )


class CrawlLog:
    """
    Re-iterable view over a crawl.log file.

    Typical usage:
        log = CrawlLog("crawl.log")
        for record in log:      # first pass
            ...
        for record in log:      # second pass, file opened again
            ...

    Each pass owns its own file handle inside a generator, so the handle is
    closed when the pass finishes or when the caller stops iterating early.
    """

    def __init__(self, path: str):
        self.path = str(path)
        self.skipped = 0  # malformed lines seen on the most recent pass

    def _open(self):
        if self.path.endswith(".gz"):
            return gzip.open(self.path, "rt", encoding="utf-8", errors="replace")
        return open(self.path, "r", encoding="utf-8", errors="replace")

    def __iter__(self) -> Iterator[CrawlRecord]:
        self.skipped = 0
        with self._open() as f:
            for lineno, line in enumerate(f, 1):
                if not line.strip():
                    continue
                record = parse_line(line)
                if record is None:
                    self.skipped += 1
                    logger.warning("Skipping malformed line %d in %s", lineno, self.path)
                    continue
                yield record

    def __repr__(self) -> str:
        return f"CrawlLog({self.path!r})"
