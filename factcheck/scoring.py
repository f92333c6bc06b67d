"""
Result Assembler - Turns raw classifier findings into an AnalysisResult.

This module only clamps scores, picks summary sentences by score band
and shapes the result objects. The business rules that produce the
score and factors live in url_classifier.py and media.py.

Credibility bands (URLs):
- HIGHLY_TRUSTED (80-100): Highly trusted source
- RELIABLE (65-79): Generally reliable source
- MIXED (45-64): Mixed indicators of reliability
- MISINFORMATION (0-44): Potential misinformation

Authenticity (media) uses a single threshold at 50.
"""

import math
import re
from typing import Iterable, Literal
from urllib.parse import urlsplit

from factcheck.models import (
    AnalysisResult,
    FileMetadata,
    FacialAnalysis,
    MediaAnalysis,
    MediaAnalysisDetails,
    MediaType,
)


CredibilityBand = Literal["HIGHLY_TRUSTED", "RELIABLE", "MIXED", "MISINFORMATION"]


# =============================================================================
# THRESHOLDS
# =============================================================================

MIN_SCORE = 0
MAX_SCORE = 100

HIGHLY_TRUSTED_THRESHOLD = 80
RELIABLE_THRESHOLD = 65
MIXED_THRESHOLD = 45

# Below this, media is considered manipulated
AUTHENTICITY_THRESHOLD = 50


# =============================================================================
# SUMMARY AND DETAIL SENTENCES
# =============================================================================

CREDIBILITY_SUMMARIES: dict[str, str] = {
    "HIGHLY_TRUSTED": (
        "This content comes from a highly trusted source with established "
        "credibility, rigorous fact-checking, and strong editorial standards."
    ),
    "RELIABLE": (
        "This content is from a generally reliable source with established "
        "editorial practices and fact-checking procedures."
    ),
    "MIXED": (
        "This content shows mixed indicators of reliability. "
        "Consider cross-referencing with other sources."
    ),
    "MISINFORMATION": (
        "This content contains several indicators of potential misinformation "
        "or lacks credible sourcing."
    ),
}

AUTHENTIC_SUMMARY = "Analysis suggests this media is likely authentic."
MANIPULATED_SUMMARY = (
    "Analysis indicates potential digital manipulation or synthetic generation."
)

# Media details for uploaded files (deep analysis)
FILE_MANIPULATED_DETAILS = "Multiple indicators of digital manipulation detected"
# Media details for URLs pointing to a media file (path-based only)
URL_MANIPULATED_DETAILS = "Digital artifacts detected in media analysis"
NO_MANIPULATION_DETAILS = "No significant signs of manipulation detected"


# =============================================================================
# MEDIA EXTENSIONS
# =============================================================================

IMAGE_PATH_PATTERN = re.compile(r"\.(jpg|jpeg|png|gif)$", re.IGNORECASE)
VIDEO_PATH_PATTERN = re.compile(r"\.(mp4|mov|avi)$", re.IGNORECASE)


# =============================================================================
# SCORE HELPERS
# =============================================================================

def clamp_score(score: float) -> int:
    """
    Keep a score within 0-100.

    Args:
        score: Raw score, possibly out of range

    Returns:
        Integer score between 0 and 100
    """
    return int(max(MIN_SCORE, min(MAX_SCORE, score)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (Python's round() goes to even)."""
    return math.floor(value + 0.5)


def get_credibility_band(score: int) -> CredibilityBand:
    """
    Convert a credibility score to its band.

    Args:
        score: Credibility score (0-100)

    Returns:
        Band name

    Thresholds:
        80-100: HIGHLY_TRUSTED
        65-79:  RELIABLE
        45-64:  MIXED
        0-44:   MISINFORMATION
    """
    if score >= HIGHLY_TRUSTED_THRESHOLD:
        return "HIGHLY_TRUSTED"
    elif score >= RELIABLE_THRESHOLD:
        return "RELIABLE"
    elif score >= MIXED_THRESHOLD:
        return "MIXED"
    else:
        return "MISINFORMATION"


def credibility_summary(score: int) -> str:
    """Summary sentence for a URL credibility score."""
    return CREDIBILITY_SUMMARIES[get_credibility_band(score)]


def is_manipulated(score: int) -> bool:
    """True if an authenticity score indicates likely manipulation."""
    return score < AUTHENTICITY_THRESHOLD


def authenticity_summary(score: int) -> str:
    """Summary sentence for a media authenticity score."""
    return MANIPULATED_SUMMARY if is_manipulated(score) else AUTHENTIC_SUMMARY


# =============================================================================
# MEDIA SHAPING
# =============================================================================

def media_type_from_path(url: str) -> MediaType | None:
    """
    Guess the media type from the URL path extension.

    Only the path is checked, so query strings and fragments are ignored.
    This is not an inspection of the referenced content.

    Args:
        url: A URL already known to be valid

    Returns:
        "image", "video", or None if the path has no known media extension

    Example:
        >>> media_type_from_path("https://example.com/x.JPG")
        'image'
    """
    path = urlsplit(url).path
    if IMAGE_PATH_PATTERN.search(path):
        return "image"
    if VIDEO_PATH_PATTERN.search(path):
        return "video"
    return None


def build_media_analysis(
    media_type: MediaType,
    score: int,
    deep_analysis: MediaAnalysisDetails | None = None,
) -> MediaAnalysis:
    """
    Build the media verdict consistent with the score.

    The details sentence depends on the source: uploaded files (with a deep
    analysis) and URL paths have different wording for manipulated content.
    """
    manipulation = is_manipulated(score)
    if manipulation:
        details = FILE_MANIPULATED_DETAILS if deep_analysis else URL_MANIPULATED_DETAILS
    else:
        details = NO_MANIPULATION_DETAILS

    return MediaAnalysis(
        type=media_type,
        manipulation=manipulation,
        details=details,
        deep_analysis=deep_analysis,
    )


# =============================================================================
# MAIN ASSEMBLY FUNCTIONS
# =============================================================================

def create_url_result(
    url: str,
    raw_score: float,
    factors: Iterable[str],
) -> AnalysisResult:
    """
    Create the final result for a URL analysis.

    Args:
        url: The analyzed URL (used for the path-based media check)
        raw_score: Score from the reputation rules, before clamping
        factors: Factors from the reputation rules, in evaluation order

    Returns:
        AnalysisResult with clamped score, band summary and optional
        shallow media analysis
    """
    score = clamp_score(raw_score)
    factors = list(factors)

    summary = credibility_summary(score)
    # The lowest band always explains itself
    if get_credibility_band(score) == "MISINFORMATION":
        factors.append("Limited source verification")
        factors.append("Consider fact-checking with established news sources")

    media_type = media_type_from_path(url)
    media_analysis = build_media_analysis(media_type, score) if media_type else None

    return AnalysisResult(
        score=score,
        summary=summary,
        factors=tuple(factors),
        media_analysis=media_analysis,
    )


def create_media_result(
    media_type: MediaType,
    metadata: FileMetadata,
    manipulation_score: float,
    confidence: float,
    factors: Iterable[str],
    visual_artifacts: Iterable[str] = (),
    contextual_clues: Iterable[str] = (),
    facial_analysis: FacialAnalysis | None = None,
) -> AnalysisResult:
    """
    Create the final result for an uploaded media file.

    The authenticity score is the inverse of the manipulation score.

    Args:
        media_type: "image" or "video"
        metadata: File properties copied from the upload
        manipulation_score: Likelihood of manipulation (0-100)
        confidence: Confidence in the analysis
        factors: Contributing factors, in evaluation order
        visual_artifacts: Visual findings
        contextual_clues: Contextual findings
        facial_analysis: Optional facial findings

    Returns:
        AnalysisResult with authenticity score and deep media analysis
    """
    score = clamp_score(round_half_up(100 - manipulation_score))

    deep_analysis = MediaAnalysisDetails(
        metadata=metadata,
        visual_artifacts=tuple(visual_artifacts),
        facial_analysis=facial_analysis,
        contextual_clues=tuple(contextual_clues),
        manipulation_score=manipulation_score,
        confidence=confidence,
    )

    return AnalysisResult(
        score=score,
        summary=authenticity_summary(score),
        factors=tuple(factors),
        media_analysis=build_media_analysis(media_type, score, deep_analysis),
    )
