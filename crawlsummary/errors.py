"""Exceptions raised by the summarizer. Only main.py turns these into exit codes."""


class CrawlSummaryError(Exception):
    """Base class for summarizer failures."""


class SeedNotFoundError(CrawlSummaryError):
    """
    A record's discovery key has no entry in the resolved seed map.

    That means the accumulation pass saw a record the build pass never saw
    (log changed between passes, or a different file), so seed statistics
    can't be trusted.
    """

    def __init__(self, key):
        self.key = key
        super().__init__(f"Did not find seed for item {key}")
