"""
Tests for crawlsummary/crawllog.py: line parsing and the re-iterable log.
"""

import gzip
import logging
from datetime import datetime, timezone

from conftest import log_line
from crawlsummary.crawllog import CrawlLog, parse_duration, parse_line, parse_timestamp


class TestParseLine:

    def test_full_line(self):
        line = ("2024-03-01T10:00:01.250Z   200      12345 http://a.example/x L http://a.example/ "
                "text/html;charset=utf-8 #042 20240301100000999+250 sha1:ABCDEF http://a.example/ "
                "content-size:12500 {\"warcFilename\":\"x.warc.gz\"}")
        r = parse_line(line)
        assert r.url == "http://a.example/x"
        assert r.status_code == 200
        assert r.size == 12345
        assert r.hop_path == "L"
        assert r.discovery_path == "L"
        assert r.via == r.parent_url == "http://a.example/"
        assert r.mime_type == "text/html;charset=utf-8"
        assert r.thread == "#042"
        assert r.duration_ms == 250
        assert r.digest == "sha1:ABCDEF"
        assert r.seed == "http://a.example/"
        assert r.annotations == "content-size:12500"
        assert r.timestamp == datetime(2024, 3, 1, 10, 0, 1, 250000, tzinfo=timezone.utc)

    def test_dashes_mean_absent(self):
        r = parse_line(log_line("dns:a.example", status=1, size="-", mime="-"))
        assert r.hop_path is None
        assert r.discovery_path == ""
        assert r.via is None
        assert r.mime_type is None
        assert r.digest is None
        assert r.size == 0

    def test_negative_status(self):
        r = parse_line(log_line("http://gone.example/", status=-1, size="-"))
        assert r.status_code == -1

    def test_too_few_fields(self):
        assert parse_line("2024-03-01T10:00:00.000Z 200 100 http://a.example/") is None

    def test_non_numeric_status(self):
        assert parse_line(log_line("http://a.example/", status="OK")) is None

    def test_bad_timestamp_is_kept_as_none(self):
        r = parse_line(log_line("http://a.example/", ts="yesterday"))
        assert r is not None
        assert r.timestamp is None


class TestParseDuration:

    def test_millis_after_plus(self):
        assert parse_duration("20240301095959999+12") == 12
        assert parse_line(log_line("http://a.example/")).duration_ms == 12

    def test_missing_or_garbled(self):
        assert parse_duration("-") is None
        assert parse_duration("20240301095959999") is None
        assert parse_duration("20240301095959999+") is None
        assert parse_duration("20240301095959999+abc") is None


class TestParseTimestamp:

    def test_with_and_without_millis(self):
        assert parse_timestamp("2024-03-01T10:00:00.123Z").microsecond == 123000
        assert parse_timestamp("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_garbage(self):
        assert parse_timestamp("-") is None


class TestCrawlLog:

    def test_can_be_read_twice(self, write_log):
        path = write_log([
            log_line("http://a.example/"),
            log_line("http://a.example/x", hop="L", via="http://a.example/"),
        ])
        log = CrawlLog(path)
        first = [r.url for r in log]
        second = [r.url for r in log]
        assert first == second == ["http://a.example/", "http://a.example/x"]

    def test_skips_blank_and_malformed_lines(self, write_log, caplog):
        path = write_log([
            log_line("http://a.example/"),
            "",
            "garbage line",
            log_line("http://a.example/x", hop="L", via="http://a.example/"),
        ])
        log = CrawlLog(path)
        with caplog.at_level(logging.WARNING):
            records = list(log)
        assert len(records) == 2
        assert log.skipped == 1
        assert "malformed line 3" in caplog.text

    def test_reads_gzip(self, tmp_path):
        path = tmp_path / "crawl.log.gz"
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write(log_line("http://a.example/") + "\n")
        assert [r.url for r in CrawlLog(path)] == ["http://a.example/"]

    def test_abandoned_pass_releases_file(self, write_log):
        path = write_log([log_line(f"http://a.example/{i}") for i in range(3)])
        it = iter(CrawlLog(path))
        next(it)
        it.close()
        # a fresh pass still starts at the top
        assert next(iter(CrawlLog(path))).url == "http://a.example/0"
