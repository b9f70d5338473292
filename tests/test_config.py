"""
Tests for crawlsummary/config.py and crawlsummary/logs.py.
"""

import logging
import sys

import pytest

import crawlsummary.logs as logs
from crawlsummary.config import Config
from crawlsummary.grouping import GroupBy
from crawlsummary.seeds import SeedResolver


class TestConfig:

    def test_default_depth_matches_resolver(self):
        assert Config().max_resolve_depth == SeedResolver().max_depth == 50

    def test_with_overrides_leaves_original_alone(self):
        base = Config()
        cfg = base.with_overrides(group_by=GroupBy.SEED, top_n=5)
        assert cfg.group_by is GroupBy.SEED
        assert cfg.top_n == 5
        assert base.group_by is GroupBy.NONE

    @pytest.mark.parametrize("field,value", [
        ("max_resolve_depth", 0),
        ("top_n", -1),
        ("indent", -2),
    ])
    def test_validate_rejects(self, field, value):
        with pytest.raises(ValueError):
            Config().with_overrides(**{field: value}).validate()


class TestSetupLogging:

    @pytest.fixture
    def calls(self, monkeypatch):
        seen = []
        monkeypatch.setattr(logs.logging, "basicConfig", lambda **kw: seen.append(kw))
        return seen

    def test_goes_to_stderr(self, calls):
        logs.setup_logging("debug")
        assert calls[0]["level"] == logging.DEBUG
        assert calls[0]["stream"] is sys.stderr

    def test_level_from_environment(self, calls, monkeypatch):
        monkeypatch.setenv("CRAWLSUMMARY_LOG_LEVEL", "warning")
        logs.setup_logging()
        assert calls[0]["level"] == logging.WARNING

    def test_unknown_name_means_info(self, calls):
        logs.setup_logging("chatty")
        assert calls[0]["level"] == logging.INFO
