import sys
from pathlib import Path

# Ensure project root on path (main.py lives there)
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from crawlsummary.crawllog import CrawlRecord, parse_timestamp
from crawlsummary.domains import make_extractor


def log_line(url, hop="-", via="-", status=200, size=100, mime="text/html",
             digest="-", ts="2024-03-01T10:00:00.000Z"):
    """One crawl.log line with the column padding the crawler uses."""
    return (f"{ts} {status:>5} {size:>10} {url} {hop} {via} {mime} #001 "
            f"20240301095959999+12 {digest} - -")


@pytest.fixture(scope="session")
def extract():
    return make_extractor(include_private=True, fetch_suffix_list=False)


@pytest.fixture
def make_record():
    def _make(url, hop="", via=None, status=200, size=100, mime="text/html",
              digest=None, ts="2024-03-01T10:00:00.000Z", duration_ms=None):
        return CrawlRecord(
            timestamp=parse_timestamp(ts) if ts else None,
            status_code=status,
            size=size,
            url=url,
            hop_path=hop,
            via=via,
            mime_type=mime,
            digest=digest,
            duration_ms=duration_ms,
        )
    return _make


@pytest.fixture
def write_log(tmp_path):
    def _write(lines, name="crawl.log"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
