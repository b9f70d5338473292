# crawlsummary/config.py
"""
Central configuration for the summarizer.
Keep policy and tunables here so the resolver and summary classes stay lean.
"""

from dataclasses import dataclass, replace
from typing import Optional

from .grouping import GroupBy
from .seeds import DEFAULT_MAX_DEPTH


@dataclass(frozen=True)
class Config:
    # Seed resolution
    max_resolve_depth: int = DEFAULT_MAX_DEPTH  # steps per key before a chain is pathological

    # Shape of the output
    group_by: GroupBy = GroupBy.NONE
    top_n: int = 0  # 0 keeps every bucket

    # Public suffix policy
    # Private registries (blogspot.com, github.io, ...) count as suffixes,
    # so each blog/site is its own registered domain.
    include_private_suffixes: bool = True
    # Use the suffix list snapshot bundled with tldextract unless asked to go online.
    fetch_suffix_list: bool = False

    # Output
    output_path: Optional[str] = None  # None writes to stdout
    indent: int = 2

    # Diagnostics
    log_level: Optional[str] = None  # None defers to CRAWLSUMMARY_LOG_LEVEL, then INFO

    def with_overrides(self, **kwargs) -> "Config":
        """Return a copy with specific fields overridden."""
        return replace(self, **kwargs)

    def validate(self) -> None:
        if self.max_resolve_depth < 1:
            raise ValueError("max_resolve_depth must be >= 1")
        if self.top_n < 0:
            raise ValueError("top_n must be >= 0")
        if self.indent < 0:
            raise ValueError("indent must be >= 0")
