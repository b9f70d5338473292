# crawlsummary/summary.py
"""
Multi-dimensional crawl statistics.

A CrawlSummary keeps one Stats bucket per value in each dimension:

    totals              everything
    statusCodes         200, 404, -1 (DNS failure), ...
    mimeTypes           canonical mime type
    sizeHisto           power-of-eight size bucket
    registeredDomains   example.co.uk, ...
    seeds               the seed URL each record was ultimately discovered from

Every record lands in exactly one bucket per dimension, so the counts in any
one dimension add up to totals.count.

Seed attribution needs a resolved SeedResolver. It is handed in explicitly;
a summary never builds or mutates the seed map itself.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Union

from .crawllog import CrawlRecord
from .domains import registered_domain
from .errors import SeedNotFoundError
from .grouping import GroupBy, key_function
from .mime import canonicalize_mime_type
from .seeds import DiscoveryKey, SeedResolver
from .sizes import human_size, size_bucket
from .stats import Stats
from .status_codes import describe

logger = logging.getLogger(__name__)


class CrawlSummary:

    def __init__(self, seeds: SeedResolver, extract=None):
        self.seeds = seeds
        self.extract = extract
        self.totals = Stats()
        self.status_codes: Dict[int, Stats] = {}
        self.mime_types: Dict[str, Stats] = {}
        self.size_histo: Dict[int, Stats] = {}
        self.registered_domains: Dict[str, Stats] = {}
        self.seed_stats: Dict[str, Stats] = {}

    def add(self, record: CrawlRecord) -> None:
        """
        Fold one record into totals and every dimension.

        The seed is looked up first: if it's missing we raise before touching any
        counter, so a failed record never leaves the summary half-updated.
        """
        seed = self.seeds.seed_of(record)
        if seed is None:
            raise SeedNotFoundError(DiscoveryKey.of(record))

        mime = canonicalize_mime_type(record.mime_type)
        bucket = size_bucket(record.size)
        domain = registered_domain(record.url, self.extract)
        code = record.status_code

        if seed not in self.seed_stats:
            self.seed_stats[seed] = Stats()
        self.seed_stats[seed].add(record)

        if mime not in self.mime_types:
            self.mime_types[mime] = Stats()
        self.mime_types[mime].add(record)

        if code not in self.status_codes:
            self.status_codes[code] = Stats(describe(code))
        self.status_codes[code].add(record)

        if bucket not in self.size_histo:
            self.size_histo[bucket] = Stats(human_size(bucket))
        self.size_histo[bucket].add(record)

        if domain not in self.registered_domains:
            self.registered_domains[domain] = Stats()
        self.registered_domains[domain].add(record)

        self.totals.add(record)

    # ------------------------------- views -----------------------------------

    def top_n(self, n: int) -> "CrawlSummary":
        """
        Copy with status codes, mime types, registered domains and seeds cut to
        the n largest buckets by count. Totals and the size histogram are shared.
        """
        out = CrawlSummary(self.seeds, self.extract)
        out.totals = self.totals
        out.size_histo = self.size_histo
        out.status_codes = _largest(self.status_codes, n)
        out.mime_types = _largest(self.mime_types, n)
        out.registered_domains = _largest(self.registered_domains, n)
        out.seed_stats = _largest(self.seed_stats, n)
        return out

    def to_dict(self) -> dict:
        return {
            "totals": self.totals.to_dict(),
            "statusCodes": {code: s.to_dict() for code, s in _sorted(self.status_codes)},
            "mimeTypes": {m: s.to_dict() for m, s in self.mime_types.items()},
            "sizeHisto": {b: s.to_dict() for b, s in _sorted(self.size_histo)},
            "registeredDomains": {d: s.to_dict() for d, s in self.registered_domains.items()},
            "seeds": {u: s.to_dict() for u, s in self.seed_stats.items()},
        }


def _sorted(buckets: Dict):
    return sorted(buckets.items(), key=lambda kv: kv[0])


def _largest(buckets: Dict, n: int) -> Dict:
    ranked = sorted(buckets.items(), key=lambda kv: -kv[1].count)
    return dict(ranked[:n])


# ------------------------------- builders ------------------------------------

def build(records: Iterable[CrawlRecord], seeds: SeedResolver, extract=None) -> CrawlSummary:
    """One summary for the whole log."""
    summary = CrawlSummary(seeds, extract)
    for record in records:
        summary.add(record)
    return summary


def grouped_by(records: Iterable[CrawlRecord], seeds: SeedResolver, group_by: GroupBy,
               extract=None) -> Dict[str, CrawlSummary]:
    """One independent summary per distinct group key."""
    key_of = key_function(group_by)
    if key_of is None:
        raise ValueError(f"{group_by} does not split records into groups")

    groups: Dict[str, CrawlSummary] = {}
    for record in records:
        key = key_of(record, seeds, extract)
        if key not in groups:
            groups[key] = CrawlSummary(seeds, extract)
        groups[key].add(record)
    logger.info("Grouped by %s into %d summaries", group_by.value, len(groups))
    return groups


def summarize(records: Iterable[CrawlRecord], seeds: SeedResolver,
              group_by: GroupBy = GroupBy.NONE, extract=None,
              top_n: int = 0) -> Union[CrawlSummary, Dict[str, CrawlSummary]]:
    """
    Second pass over the log. Needs a resolved seed map.

    Returns a CrawlSummary for GroupBy.NONE, otherwise {group key: CrawlSummary}.
    top_n > 0 trims the per-dimension maps of every summary.
    """
    if not seeds.is_resolved:
        raise ValueError("seed map must be resolved before summarizing")

    if group_by is GroupBy.NONE:
        summary = build(records, seeds, extract)
        return summary.top_n(top_n) if top_n > 0 else summary

    groups = grouped_by(records, seeds, group_by, extract)
    if top_n > 0:
        groups = {k: s.top_n(top_n) for k, s in groups.items()}
    return groups


def to_dict(result: Union[CrawlSummary, Dict[str, CrawlSummary]]) -> dict:
    if isinstance(result, CrawlSummary):
        return result.to_dict()
    return {key: s.to_dict() for key, s in result.items()}


def summarize_log(log: Iterable[CrawlRecord], max_depth: Optional[int] = None,
                  group_by: GroupBy = GroupBy.NONE, extract=None, top_n: int = 0):
    """
    Full pipeline over a re-iterable log: build seed map, resolve, summarize.
    The log is iterated twice.
    """
    seeds = SeedResolver() if max_depth is None else SeedResolver(max_depth)
    logger.info("Building seed map")
    seeds.build(log)
    logger.info("Starting seed detection")
    seeds.resolve()
    logger.info("Summarizing")
    return summarize(log, seeds, group_by, extract, top_n)
