# crawlsummary/domains.py
"""
URL -> host and URL -> registered domain helpers.

The registered domain is the public-suffix-aware "site" a host belongs to:
    www.example.co.uk  -> example.co.uk
    a.b.example.com    -> example.com
    192.0.2.7          -> 192.0.2.7   (IPs have no suffix, keep as-is)
    localhost          -> localhost   (single label, keep as-is)

Crawl logs are full of oddities (dns: lookups, broken IPv6 literals, URLs with
spaces), so registered_domain() never raises. When all else fails it returns
UNKNOWN_DOMAIN and logs a warning.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import urlsplit

import tldextract

logger = logging.getLogger(__name__)

UNKNOWN_DOMAIN = "unknown"

# Non-fetch schemes the crawler logs (prerequisite lookups). They have no host worth grouping on.
PSEUDO_SCHEMES: Dict[str, str] = {
    "dns": "dns",
    "whois": "whois",
}

_default_extract: Optional[tldextract.TLDExtract] = None


def make_extractor(include_private: bool = True, fetch_suffix_list: bool = False) -> tldextract.TLDExtract:
    """
    Build a suffix extractor.

    By default we never touch the network: no suffix list URLs, no disk cache,
    just the snapshot that ships inside tldextract.
    """
    if fetch_suffix_list:
        return tldextract.TLDExtract(include_psl_private_domains=include_private)
    return tldextract.TLDExtract(
        cache_dir=None,
        suffix_list_urls=(),
        fallback_to_snapshot=True,
        include_psl_private_domains=include_private,
    )


def default_extractor() -> tldextract.TLDExtract:
    global _default_extract
    if _default_extract is None:
        _default_extract = make_extractor()
    return _default_extract


def host_of(url: str) -> str:
    """Return hostname of a URL or empty string if parsing fails."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def _authority_fallback(url: str) -> str:
    """
    Last-ditch host guess for URLs urlsplit refuses (e.g. unbalanced "[").
    "scheme://user@host:port/path" -> "host". A bracketed IPv6 authority is
    kept whole, up to and including "]" when there is one.
    """
    parts = url.split("/")
    if len(parts) < 3:
        return ""
    authority = parts[2].rsplit("@", 1)[-1]
    if authority.startswith("["):
        end = authority.find("]")
        return (authority if end < 0 else authority[:end + 1]).lower()
    return authority.split(":", 1)[0].lower()


def _scheme_and_host(url: str):
    try:
        p = urlsplit(url)
    except ValueError:
        logger.debug("urlsplit rejected %r, falling back to authority split", url)
        scheme = url.split(":", 1)[0].lower() if ":" in url else ""
        return scheme, _authority_fallback(url)
    # hostname drops userinfo and port; netloc is the raw authority when there's no host.
    return p.scheme.lower(), p.hostname or p.netloc


def registered_domain(url: str, extract: Optional[tldextract.TLDExtract] = None) -> str:
    """
    Public-suffix-aware registered domain for a URL.

    Steps:
      1) Split the URL; if that blows up, take the authority between the 2nd and 3rd "/".
      2) Pseudo-schemes (dns:, whois:) return their fixed label.
      3) Ask tldextract for domain + suffix. If there's no suffix (IP, single label,
         host that *is* a suffix) return the host unchanged.
      4) Anything else that goes wrong -> UNKNOWN_DOMAIN plus a warning.
    """
    try:
        scheme, host = _scheme_and_host(url)
        if scheme in PSEUDO_SCHEMES:
            return PSEUDO_SCHEMES[scheme]
        if not scheme or not host:
            logger.warning("No scheme or host in %r, using %r", url, UNKNOWN_DOMAIN)
            return UNKNOWN_DOMAIN
        if host.startswith("["):
            # IPv6 literal urlsplit could not parse; no suffix to look up
            return host

        ext = (extract or default_extractor())(host)
        if ext.domain and ext.suffix:
            return f"{ext.domain}.{ext.suffix}"
        return host
    except Exception as e:
        logger.warning("Could not resolve registered domain for %r: %s", url, e)
        return UNKNOWN_DOMAIN
