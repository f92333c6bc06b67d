"""
Media Signal Synthesizer - Authenticity analysis of uploaded images and videos.

What we produce:
1. Manipulation score - Likelihood that the media was altered (0-100)
2. Visual artifacts - Pixel patterns, noise, compression traces
3. Facial analysis - Feature asymmetry, eye alignment, skin texture (images only)
4. Contextual clues - Lighting and shadow consistency

The current signals are heuristic placeholders drawn at random: no file
content is parsed. The contract (FileDescriptor in, AnalysisResult out)
is what a real forensic detector must keep when it replaces them.
"""

import asyncio
import logging
import random
from contextlib import asynccontextmanager
from typing import AsyncIterator, BinaryIO

from factcheck.models import AnalysisResult, FacialAnalysis, FileDescriptor, MediaType
from factcheck.scoring import create_media_result

logger = logging.getLogger(__name__)


# =============================================================================
# PARAMETERS
# =============================================================================

# Above this manipulation score, findings are reported
MANIPULATION_THRESHOLD = 50

# Confidence is drawn from [CONFIDENCE_FLOOR, CONFIDENCE_FLOOR + CONFIDENCE_SPAN)
CONFIDENCE_FLOOR = 70
CONFIDENCE_SPAN = 30

# Chance that an image gets a facial analysis
FACIAL_ANALYSIS_PROBABILITY = 0.5


# =============================================================================
# FINDING SENTENCES
# =============================================================================

VISUAL_ARTIFACTS = (
    "Irregular pixel patterns detected at edges",
    "Inconsistent noise distribution",
    "Unusual compression artifacts",
)

CONTEXTUAL_CLUES = (
    "Lighting inconsistencies detected",
    "Shadow angles appear unnatural",
)

FACIAL_INCONSISTENCIES = (
    "Asymmetrical facial features detected",
    "Irregular eye alignment",
    "Unnatural skin texture patterns",
)

MANIPULATED_FACTORS = (
    "Digital manipulation artifacts detected",
    "Inconsistent lighting and shadows",
)
FACIAL_ANOMALY_FACTOR = "Facial feature anomalies present"

AUTHENTIC_FACTORS = (
    "Natural image characteristics present",
    "Consistent lighting and shadows",
)
NATURAL_FACIAL_FACTOR = "Natural facial features detected"


# =============================================================================
# HELPERS
# =============================================================================

def classify_media_type(mime_type: str) -> MediaType:
    """
    Decide whether a file is an image or a video.

    Anything that is not "image/*" is treated as a video.
    """
    return "image" if mime_type.startswith("image/") else "video"


@asynccontextmanager
async def staged_bytes(file: FileDescriptor) -> AsyncIterator[BinaryIO | None]:
    """
    Hold the file's byte stream for the duration of an analysis.

    The stream is closed on every exit path, including when the awaiting
    task is cancelled. Yields None when the descriptor carries no stream.
    """
    stream = file.open_stream() if file.open_stream is not None else None
    try:
        # Give the event loop a chance to run (and the caller to cancel)
        await asyncio.sleep(0)
        yield stream
    finally:
        if stream is not None:
            stream.close()
            logger.debug(f"Released stream for {file.name}")


def build_factors(
    manipulation_score: float,
    facial_analysis: FacialAnalysis | None,
) -> list[str]:
    """
    Build the list of contributing factors.

    Args:
        manipulation_score: Likelihood of manipulation (0-100)
        facial_analysis: Facial findings, if any

    Returns:
        Factors in evaluation order
    """
    factors: list[str] = []

    if manipulation_score > MANIPULATION_THRESHOLD:
        factors.extend(MANIPULATED_FACTORS)
        if facial_analysis is not None and facial_analysis.inconsistencies:
            factors.append(FACIAL_ANOMALY_FACTOR)
    else:
        factors.extend(AUTHENTIC_FACTORS)
        if facial_analysis is not None and not facial_analysis.inconsistencies:
            factors.append(NATURAL_FACIAL_FACTOR)

    return factors


# =============================================================================
# MAIN ANALYSIS FUNCTION
# =============================================================================

async def analyze_media(file: FileDescriptor, rng=random) -> AnalysisResult:
    """
    Analyze an uploaded image or video for signs of manipulation.

    Never fails for a well-formed descriptor: any MIME type is accepted.

    Args:
        file: The uploaded file
        rng: Source of randomness (anything with a random() method).
            Defaults to the random module.

    Returns:
        AnalysisResult with authenticity score (100 - manipulation score)
        and a deep media analysis

    Example:
        >>> result = asyncio.run(analyze_media(descriptor))
        >>> result.media_analysis.manipulation == (result.score < 50)
        True
    """
    async with staged_bytes(file):
        media_type = classify_media_type(file.type)
        if not file.type.startswith(("image/", "video/")):
            logger.warning(f"Unexpected MIME type {file.type!r} for {file.name}, treating as video")

        manipulation_score = rng.random() * 100
        confidence = CONFIDENCE_FLOOR + rng.random() * CONFIDENCE_SPAN
        suspicious = manipulation_score > MANIPULATION_THRESHOLD

        visual_artifacts = VISUAL_ARTIFACTS if suspicious else ()
        contextual_clues = CONTEXTUAL_CLUES if suspicious else ()

        facial_analysis = None
        if media_type == "image" and rng.random() > FACIAL_ANALYSIS_PROBABILITY:
            facial_analysis = FacialAnalysis(
                inconsistencies=FACIAL_INCONSISTENCIES if suspicious else (),
                confidence=confidence,
            )

        result = create_media_result(
            media_type=media_type,
            metadata=file.metadata,
            manipulation_score=manipulation_score,
            confidence=confidence,
            factors=build_factors(manipulation_score, facial_analysis),
            visual_artifacts=visual_artifacts,
            contextual_clues=contextual_clues,
            facial_analysis=facial_analysis,
        )

    logger.info(f"Media analysis complete: {file.name} score={result.score}")
    return result
