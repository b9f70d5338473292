"""
Crawl log summarizer package.

Exposes the main public surface so callers can do:
    from crawlsummary import Config, CrawlLog, SeedResolver, summarize
"""
from .config import Config
from .crawllog import CrawlLog, CrawlRecord
from .grouping import GroupBy
from .seeds import DiscoveryKey, SeedResolver
from .stats import Stats
from .summary import CrawlSummary, summarize, summarize_log

__all__ = [
    "Config", "CrawlLog", "CrawlRecord", "GroupBy", "DiscoveryKey",
    "SeedResolver", "Stats", "CrawlSummary", "summarize", "summarize_log",
]
__version__ = "0.1.0"
