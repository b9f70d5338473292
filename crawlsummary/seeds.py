# crawlsummary/seeds.py
"""
Seed attribution: which seed URL ultimately caused each fetched URL to be crawled.

How the crawler records ancestry
--------------------------------
Every log line carries a hop path, a string of hop markers such as "LLE"
(link, link, embed). Each hop appends one character, so:

  • hop path ""  (logged as "-") means the URL is a seed
  • the parent of (url, "LLE") is (via, "LL"), where via is the logged parent URL

The same URL can be reached along different paths, so the identity of one node
in the discovery forest is the pair (url, discovery path), a DiscoveryKey.

The algorithm (two phases, no file I/O in the second)
-----------------------------------------------------
Build:   one pass over the log, parent[key] = key of whoever discovered it
         (seeds point at themselves).
Resolve: for every key, repeatedly replace parent[key] with parent[parent[key]]
         until it points at a root (empty discovery path). This is the "find"
         of a union-find with eager path compression: nodes resolved earlier
         make later chains shorter, so a log written in crawl order resolves in
         roughly one step per key.

Guards
------
• Depth ceiling (default 50 steps per key): a longer chain is logged as
  pathological and the key is left pointing at whatever ancestor was reached.
• Missing parent: if an ancestor was never logged itself, that ancestor's URL
  is treated as a seed for the chain. A non-seed logged with no via at all
  becomes its own seed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Set

from .crawllog import CrawlRecord, normalize_discovery_path

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 50


@dataclass(frozen=True)
class DiscoveryKey:
    """One occurrence of a URL at a specific position in the discovery graph."""

    url: str
    discovery_path: str = ""

    @property
    def is_root(self) -> bool:
        return self.discovery_path == ""

    def parent_path(self) -> str:
        """Discovery path with the last hop marker removed."""
        return self.discovery_path[:-1]

    @classmethod
    def of(cls, record: CrawlRecord) -> "DiscoveryKey":
        return cls(record.url, normalize_discovery_path(record.hop_path))

    def __str__(self) -> str:
        return f"{self.url} [{self.discovery_path or '-'}]"


@dataclass
class ResolveReport:
    """Counters from one resolve() run, handy for logging and tests."""

    keys: int = 0
    steps: int = 0
    pathological: int = 0
    missing_parents: int = 0


class SeedResolver:
    """
    Owns the discovery forest for one log.

    Typical usage:
        seeds = SeedResolver()
        seeds.build(CrawlLog(path))     # pass 1
        seeds.resolve()                 # in memory
        seeds.seed_of(record)           # during pass 2
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth
        self._parent: Dict[DiscoveryKey, DiscoveryKey] = {}
        self._orphans: Set[DiscoveryKey] = set()  # non-seeds logged without a via
        self._resolved = False

    # --------------------------------- build ---------------------------------

    def add(self, record: CrawlRecord) -> DiscoveryKey:
        """
        Record who discovered this record. Seeds point at themselves.
        A key seen twice keeps the last parent logged for it.

        A non-seed logged without a via has no ancestor to follow, so its own
        URL stands in as the seed, same as any other missing parent.
        """
        key = DiscoveryKey.of(record)
        self._orphans.discard(key)
        if key.is_root:
            self._parent[key] = key
        elif not record.via:
            logger.warning("No parent logged for %s, treating it as a seed", key)
            self._orphans.add(key)
            self._parent[key] = DiscoveryKey(key.url, "")
        else:
            self._parent[key] = DiscoveryKey(record.via, key.parent_path())
        self._resolved = False
        return key

    def build(self, records: Iterable[CrawlRecord]) -> "SeedResolver":
        for record in records:
            self.add(record)
        logger.info("Seed map built: %d discovery keys", len(self._parent))
        return self

    # -------------------------------- resolve --------------------------------

    def resolve(self) -> ResolveReport:
        """
        Point every key straight at its root. Safe to call again; a resolved map
        needs zero steps.
        """
        report = ResolveReport(keys=len(self._parent), missing_parents=len(self._orphans))
        parent = self._parent
        # Values change while we walk, keys don't; iterate over a snapshot of keys.
        for key in list(parent):
            steps = 0
            while not parent[key].is_root:
                if steps >= self.max_depth:
                    report.pathological += 1
                    logger.warning(
                        "Looks pathological for %s: no seed within %d steps, stopping at %s",
                        key, self.max_depth, parent[key],
                    )
                    break
                steps += 1
                ancestor = parent[key]
                next_parent = parent.get(ancestor)
                if next_parent is None:
                    # The ancestor was never logged on its own line; call it a seed.
                    report.missing_parents += 1
                    logger.warning("No parent for %s (needed by %s), treating it as a seed", ancestor, key)
                    parent[key] = DiscoveryKey(ancestor.url, "")
                    break
                parent[key] = next_parent
            report.steps += steps

        self._resolved = True
        logger.info(
            "Seed map resolved: %d keys, %d steps, %d pathological, %d missing parents",
            report.keys, report.steps, report.pathological, report.missing_parents,
        )
        return report

    # -------------------------------- lookup ---------------------------------

    def lookup(self, key: DiscoveryKey) -> Optional[DiscoveryKey]:
        """Root (after resolve) for a key, or None if the key was never added."""
        return self._parent.get(key)

    def seed_of(self, record: CrawlRecord) -> Optional[str]:
        root = self.lookup(DiscoveryKey.of(record))
        return root.url if root is not None else None

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    def __len__(self) -> int:
        return len(self._parent)

    def __contains__(self, key: object) -> bool:
        return key in self._parent

    def items(self):
        return self._parent.items()
