"""
The closed set of ways a summary can be split up.

Each strategy is a plain key function of (record, seed resolver, suffix extractor).
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional

from .crawllog import CrawlRecord
from .domains import host_of, registered_domain
from .errors import SeedNotFoundError
from .seeds import DiscoveryKey, SeedResolver


class GroupBy(Enum):
    NONE = "none"
    HOST = "host"
    REGISTERED_DOMAIN = "registered-domain"
    SEED = "seed"


def host_key(record: CrawlRecord, seeds: SeedResolver, extract=None) -> str:
    return host_of(record.url)


def registered_domain_key(record: CrawlRecord, seeds: SeedResolver, extract=None) -> str:
    return registered_domain(record.url, extract)


def seed_key(record: CrawlRecord, seeds: SeedResolver, extract=None) -> str:
    seed = seeds.seed_of(record)
    if seed is None:
        raise SeedNotFoundError(DiscoveryKey.of(record))
    return seed


KEY_FUNCTIONS: Dict[GroupBy, Callable[..., str]] = {
    GroupBy.HOST: host_key,
    GroupBy.REGISTERED_DOMAIN: registered_domain_key,
    GroupBy.SEED: seed_key,
}


def key_function(group_by: GroupBy) -> Optional[Callable[..., str]]:
    """None for GroupBy.NONE: everything goes into one summary."""
    return KEY_FUNCTIONS.get(group_by)
