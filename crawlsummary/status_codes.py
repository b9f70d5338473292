"""
Human labels for fetch status codes.

Positive codes are plain HTTP statuses. Zero and negative codes are the crawler's
own bookkeeping (DNS failures, connection errors, scope and quota decisions).
"""

from http import HTTPStatus
from typing import Dict

UNKNOWN_STATUS = "Unknown"

CRAWLER_CODES: Dict[int, str] = {
    1: "Successful DNS lookup",
    0: "Fetch never tried",
    -1: "DNS lookup failed",
    -2: "HTTP connect failed",
    -3: "HTTP connect broken",
    -4: "HTTP timeout",
    -5: "Unexpected runtime exception",
    -6: "Prerequisite domain-lookup failed",
    -7: "URI recognized as unsupported or illegal",
    -8: "Multiple retries failed",
    -50: "Temporary status assigned to URIs awaiting preconditions",
    -60: "Failure status assigned to URIs which could not be queued",
    -61: "Prerequisite robots.txt fetch failed",
    -62: "Some other prerequisite failed",
    -63: "A prerequisite could not be scheduled",
    -404: "Empty HTTP response interpreted as a 404",
    -3000: "Severe Java error condition",
    -4000: "Chaff detection of traps/content with negligible value",
    -4001: "Too many link hops away from seed",
    -4002: "Too many embed/transitive hops away from last URI in scope",
    -5000: "Out of scope upon reexamination",
    -5001: "Blocked from fetch by user setting",
    -5002: "Blocked by a custom processor",
    -5003: "Blocked due to exceeding an established quota",
    -5004: "Blocked due to exceeding an established runtime",
    -6000: "Deleted from frontier by user",
    -7000: "Processing thread was killed by the operator",
    -9998: "Robots.txt rules precluded fetch",
}


def describe(code: int) -> str:
    """Return a label for any integer; unmapped codes get "Unknown"."""
    if code in CRAWLER_CODES:
        return CRAWLER_CODES[code]
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return UNKNOWN_STATUS
