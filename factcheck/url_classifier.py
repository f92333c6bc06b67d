"""
Domain Reputation Classifier - Scores a URL by the reputation of its domain.

What we check (in this order):
1. Official domains - .gov and .edu hostnames
2. Trust tiers - known news organizations, first matching tier wins
3. Academic journals - peer-reviewed publishers (can stack with Tier 3)
4. Informal platforms - blogs and free hosting
5. A small random jitter (0-2 points), purely cosmetic

The URL is never fetched: only the hostname (and the path extension,
for the media flag) is looked at.
"""

import logging
import random
import re
from urllib.parse import urlsplit

from factcheck.errors import InvalidUrlError
from factcheck.models import AnalysisResult
from factcheck.reputation import (
    is_academic_journal,
    is_informal_platform,
    is_official_domain,
    match_tier,
)
from factcheck.scoring import create_url_result

logger = logging.getLogger(__name__)


# =============================================================================
# SCORE ADJUSTMENTS
# =============================================================================

OFFICIAL_DOMAIN_BONUS = 40
TIER_BONUSES = {1: 85, 2: 70, 3: 60}
ACADEMIC_JOURNAL_BONUS = 20
INFORMAL_PLATFORM_PENALTY = 10

# Jitter is floor(random * JITTER_RANGE), so 0, 1 or 2
JITTER_RANGE = 3


# =============================================================================
# FACTOR SENTENCES
# =============================================================================

OFFICIAL_DOMAIN_FACTOR = "Official government or educational domain"

TIER_FACTORS: dict[int, tuple[str, ...]] = {
    1: (
        "Tier 1 - Highly trusted news organization",
        "Known for factual reporting and strong editorial standards",
        "Extensive fact-checking and verification processes",
        "Global reputation for journalistic excellence",
    ),
    2: (
        "Tier 2 - Generally reputable news source",
        "Reliable reporting with established editorial standards",
        "Regular fact-checking practices",
    ),
    3: (
        "Tier 3 - Specialized or regional news source",
        "Credibility varies by topic or program",
        "Subject to editorial oversight and fact-checking",
    ),
}

ACADEMIC_JOURNAL_FACTORS = (
    "Peer-reviewed academic journal",
    "Rigorous scientific review process",
)

INFORMAL_PLATFORM_FACTOR = "Informal or user-generated content platform"


# =============================================================================
# URL PARSING
# =============================================================================

# RFC 3986 scheme, followed by ":"
SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

# Schemes that cannot exist without a host
HOST_REQUIRED_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def parse_hostname(url: str) -> str:
    """
    Validate an absolute URL and return its lower-cased hostname.

    Args:
        url: The URL as typed by the user (already trimmed)

    Returns:
        The hostname, or an empty string for URLs without one (e.g., "mailto:")

    Raises:
        InvalidUrlError: If the string is not a valid absolute URL

    Example:
        >>> parse_hostname("https://WWW.Reuters.com/world")
        'www.reuters.com'
    """
    if not url or not SCHEME_PATTERN.match(url):
        raise InvalidUrlError(url, "missing scheme")

    try:
        parts = urlsplit(url)
        # Accessing .port validates it (non-numeric or out of range raises)
        _ = parts.port
    except ValueError as e:
        raise InvalidUrlError(url, str(e)) from e

    # Spaces are tolerated in the path, query and fragment, never in the host
    if any(char.isspace() for char in parts.netloc):
        raise InvalidUrlError(url, "whitespace in host")

    hostname = (parts.hostname or "").lower()
    if not hostname and parts.scheme.lower() in HOST_REQUIRED_SCHEMES:
        raise InvalidUrlError(url, "missing host")

    return hostname


# =============================================================================
# MAIN CLASSIFIER
# =============================================================================

def classify_url(url: str, rng=random) -> AnalysisResult:
    """
    Score a URL by the reputation of its domain.

    Args:
        url: Absolute URL to classify
        rng: Source of randomness for the jitter (anything with a random()
            method). Defaults to the random module.

    Returns:
        AnalysisResult with credibility score, summary, factors and a
        shallow media analysis if the path ends in a media extension

    Raises:
        InvalidUrlError: If the string is not a valid absolute URL

    Example:
        >>> result = classify_url("https://www.reuters.com/world/")
        >>> 85 <= result.score <= 100
        True
    """
    hostname = parse_hostname(url)

    score = 0
    factors: list[str] = []

    if is_official_domain(hostname):
        score += OFFICIAL_DOMAIN_BONUS
        factors.append(OFFICIAL_DOMAIN_FACTOR)

    tier = match_tier(hostname)
    if tier is not None:
        logger.debug(f"{hostname} matched tier {tier}")
        score += TIER_BONUSES[tier]
        factors.extend(TIER_FACTORS[tier])

    # Checked independently from the tier, so journals also get their tier bonus
    if is_academic_journal(hostname):
        score += ACADEMIC_JOURNAL_BONUS
        factors.extend(ACADEMIC_JOURNAL_FACTORS)

    if is_informal_platform(hostname):
        score -= INFORMAL_PLATFORM_PENALTY
        factors.append(INFORMAL_PLATFORM_FACTOR)

    score += int(rng.random() * JITTER_RANGE)

    result = create_url_result(url, score, factors)
    logger.debug(f"Classified {hostname or url}: raw={score}, final={result.score}")
    return result
