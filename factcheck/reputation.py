"""
Reputation tables for news and academic domains.

The tables are loaded once at import and never modified. They are exposed
as tuples (ordered tier lists) and as a read-only mapping from domain to
tier, so other modules and tests can reuse them.

Tier hierarchy (from most to least trusted):
1. Global wire services and major outlets (Reuters, AP, BBC, NYT...)
2. Reputable major outlets (NPR, The Guardian, Bloomberg...)
3. Specialized or regional outlets, plus science journals

Matching is done by substring on the hostname, so "www.reuters.com"
and "uk.reuters.com" both match "reuters.com".
"""

from types import MappingProxyType
from typing import Mapping


# =============================================================================
# TIER TABLES
# =============================================================================

TIER_1_DOMAINS: tuple[str, ...] = (
    "reuters.com",
    "ap.org",
    "apnews.com",
    "bbc.com",
    "bbc.co.uk",
    "nytimes.com",
    "wsj.com",
    "afp.com",
)

TIER_2_DOMAINS: tuple[str, ...] = (
    "npr.org",
    "theguardian.com",
    "bloomberg.com",
    "dw.com",
    "ft.com",
)

TIER_3_DOMAINS: tuple[str, ...] = (
    "nature.com",
    "science.org",
    "thelancet.com",
    "nejm.org",
    "aljazeera.com",
    "cbs.com",
    "nbcnews.com",
    "abcnews.go.com",
    "cnn.com",
    "foxnews.com",
    "msnbc.com",
)

# Evaluation order matters: the first tier that matches wins
TIERS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (1, TIER_1_DOMAINS),
    (2, TIER_2_DOMAINS),
    (3, TIER_3_DOMAINS),
)

# Domain -> tier, read-only
DOMAIN_TIERS: Mapping[str, int] = MappingProxyType({
    domain: tier
    for tier, domains in TIERS
    for domain in domains
})

# Peer-reviewed journals get a bonus on top of their tier
ACADEMIC_JOURNAL_DOMAINS: tuple[str, ...] = (
    "nature.com",
    "science.org",
    "thelancet.com",
    "nejm.org",
)

# Official domain suffixes
OFFICIAL_SUFFIXES: tuple[str, ...] = (".gov", ".edu")

# Substrings that suggest informal or user-generated content
INFORMAL_MARKERS: tuple[str, ...] = ("blog", "free")


# =============================================================================
# LOOKUPS
# =============================================================================

def _contains_any(hostname: str, needles: tuple[str, ...]) -> bool:
    # An empty hostname never matches anything
    return bool(hostname) and any(needle in hostname for needle in needles)


def match_tier(hostname: str) -> int | None:
    """
    Find the trust tier of a hostname.

    Args:
        hostname: Lower-cased hostname (e.g., "www.bbc.co.uk")

    Returns:
        1, 2 or 3 for the first tier with a matching domain, None otherwise

    Example:
        >>> match_tier("www.reuters.com")
        1
        >>> match_tier("example.com") is None
        True
    """
    for tier, domains in TIERS:
        if _contains_any(hostname, domains):
            return tier
    return None


def is_official_domain(hostname: str) -> bool:
    """True for .gov and .edu hostnames."""
    return hostname.endswith(OFFICIAL_SUFFIXES)


def is_academic_journal(hostname: str) -> bool:
    """True if the hostname belongs to a known peer-reviewed journal."""
    return _contains_any(hostname, ACADEMIC_JOURNAL_DOMAINS)


def is_informal_platform(hostname: str) -> bool:
    """True if the hostname looks like a blog or free hosting platform."""
    return _contains_any(hostname, INFORMAL_MARKERS)
