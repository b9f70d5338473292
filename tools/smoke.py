# tools/smoke.py
"""
Zero-network smoke checks to make sure the project is wired correctly.

What it does:
  1) Imports all modules (fails fast if paths/packaging are broken).
  2) Builds a Config with overrides and prints key fields.
  3) Sanity-checks the domain and size helpers.
  4) Summarizes a three-line crawl log written to a temp file.

What it does NOT do:
  - No suffix list download, no network. Keep it safe/offline.

Usage:
    python3 tools/smoke.py
"""

import os
import tempfile

from crawlsummary import Config, CrawlLog, GroupBy, summarize_log
from crawlsummary.domains import make_extractor, registered_domain
from crawlsummary.sizes import human_size, size_bucket

SAMPLE_LOG = """\
2024-03-01T10:00:00.000Z   200       1200 http://a.example.com/ - - text/html #001 20240301095959999+12 sha1:AAAA - -
2024-03-01T10:00:01.000Z   200        900 http://a.example.com/x L http://a.example.com/ text/html #002 20240301100000500+10 sha1:BBBB - -
2024-03-01T10:00:02.000Z   404        120 http://a.example.com/x/y LL http://a.example.com/x text/html #003 20240301100001500+9 sha1:CCCC - -
"""


def check_imports_and_config():
    print("[1] Imports OK")
    cfg = Config().with_overrides(group_by=GroupBy.NONE, top_n=5, max_resolve_depth=50)
    cfg.validate()
    print("[2] Config OK")
    print(f"    group_by={cfg.group_by.value}, top_n={cfg.top_n}, max_resolve_depth={cfg.max_resolve_depth}")
    return cfg


def check_helpers(extract):
    print("[3] Helper sanity")
    d = registered_domain("http://www.example.co.uk:8080/index.html", extract)
    print(f"    registered domain: {d}")
    assert d == "example.co.uk"
    assert registered_domain("dns:example.com", extract) == "dns"
    assert size_bucket(1000) == 32768
    assert human_size(32768) == "32 KiB"


def check_summary(cfg, extract):
    print("[4] Summary smoke")
    fd, path = tempfile.mkstemp(suffix=".log")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(SAMPLE_LOG)
        summary = summarize_log(CrawlLog(path), cfg.max_resolve_depth, extract=extract)
    finally:
        os.remove(path)
    print(f"    seeds: {list(summary.seed_stats)}")
    assert list(summary.seed_stats) == ["http://a.example.com/"]
    assert summary.totals.count == 3


def main():
    cfg = check_imports_and_config()
    extract = make_extractor(cfg.include_private_suffixes, fetch_suffix_list=False)
    check_helpers(extract)
    check_summary(cfg, extract)
    print("\nSmoke tests passed. If this works, your project structure is sane.")


if __name__ == "__main__":
    main()
