"""
Tests for the media signal synthesizer.

The synthesizer draws three values in order:
1. manipulation score (random * 100)
2. confidence (70 + random * 30)
3. facial analysis inclusion (images only, random > 0.5)

A scripted random source lets us pin the thresholds. The async function
is driven with asyncio.run, no plugin needed.
"""

import asyncio
import io

import pytest
from factcheck.media import (
    AUTHENTIC_FACTORS,
    CONTEXTUAL_CLUES,
    FACIAL_ANOMALY_FACTOR,
    FACIAL_INCONSISTENCIES,
    MANIPULATED_FACTORS,
    NATURAL_FACIAL_FACTOR,
    VISUAL_ARTIFACTS,
    analyze_media,
    build_factors,
    classify_media_type,
)
from factcheck.models import FacialAnalysis, FileDescriptor
from factcheck.scoring import (
    AUTHENTIC_SUMMARY,
    FILE_MANIPULATED_DETAILS,
    MANIPULATED_SUMMARY,
    NO_MANIPULATION_DETAILS,
)


# =============================================================================
# HELPERS
# =============================================================================

class ScriptedRandom:
    """Stand-in for the random module: returns preset values in order."""

    def __init__(self, *values: float):
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


class BrokenRandom:
    """Random source that fails, to exercise the error path."""

    def random(self) -> float:
        raise RuntimeError("detector crashed")


def make_descriptor(mime_type: str = "image/png", **kwargs) -> FileDescriptor:
    """Shortcut to create a FileDescriptor for testing."""
    return FileDescriptor(
        type=mime_type,
        size=kwargs.pop("size", 1048576),
        last_modified=kwargs.pop("last_modified", 1700000000000),
        name=kwargs.pop("name", "photo.png"),
        **kwargs,
    )


def analyze(descriptor: FileDescriptor, *draws: float):
    """Run the analysis with scripted draws (or the real random module)."""
    rng = ScriptedRandom(*draws) if draws else None
    if rng is None:
        return asyncio.run(analyze_media(descriptor))
    return asyncio.run(analyze_media(descriptor, rng=rng))


# =============================================================================
# TEST classify_media_type
# =============================================================================

class TestClassifyMediaType:

    @pytest.mark.parametrize("mime_type, expected", [
        ("image/png", "image"),
        ("image/jpeg", "image"),
        ("video/mp4", "video"),
        ("application/pdf", "video"),   # anything else counts as video
        ("", "video"),
    ])
    def test_types(self, mime_type, expected):
        assert classify_media_type(mime_type) == expected


# =============================================================================
# TEST build_factors
# =============================================================================

class TestBuildFactors:

    def test_manipulated_without_face(self):
        assert build_factors(80.0, None) == list(MANIPULATED_FACTORS)

    def test_manipulated_with_face_anomalies(self):
        facial = FacialAnalysis(inconsistencies=FACIAL_INCONSISTENCIES, confidence=80.0)
        assert build_factors(80.0, facial) == list(MANIPULATED_FACTORS) + [FACIAL_ANOMALY_FACTOR]

    def test_authentic_without_face(self):
        assert build_factors(20.0, None) == list(AUTHENTIC_FACTORS)

    def test_authentic_with_natural_face(self):
        facial = FacialAnalysis(inconsistencies=(), confidence=80.0)
        assert build_factors(20.0, facial) == list(AUTHENTIC_FACTORS) + [NATURAL_FACIAL_FACTOR]

    def test_threshold_is_exclusive(self):
        """Exactly 50 is not above the threshold."""
        assert build_factors(50.0, None) == list(AUTHENTIC_FACTORS)


# =============================================================================
# TEST analyze_media
# =============================================================================

class TestAnalyzeMedia:

    def test_manipulated_image_with_face(self):
        result = analyze(make_descriptor(), 0.8, 0.5, 0.9)

        assert result.score == 20
        assert result.summary == MANIPULATED_SUMMARY
        assert result.factors == MANIPULATED_FACTORS + (FACIAL_ANOMALY_FACTOR,)

        media = result.media_analysis
        assert media.type == "image"
        assert media.manipulation is True
        assert media.details == FILE_MANIPULATED_DETAILS

        deep = media.deep_analysis
        assert deep.manipulation_score == pytest.approx(80.0)
        assert deep.confidence == pytest.approx(85.0)
        assert deep.visual_artifacts == VISUAL_ARTIFACTS
        assert deep.contextual_clues == CONTEXTUAL_CLUES
        assert deep.facial_analysis.inconsistencies == FACIAL_INCONSISTENCIES
        assert deep.facial_analysis.confidence == deep.confidence

    def test_authentic_image_with_natural_face(self):
        result = analyze(make_descriptor(), 0.2, 0.0, 0.9)

        assert result.score == 80
        assert result.summary == AUTHENTIC_SUMMARY
        assert result.factors == AUTHENTIC_FACTORS + (NATURAL_FACIAL_FACTOR,)

        media = result.media_analysis
        assert media.manipulation is False
        assert media.details == NO_MANIPULATION_DETAILS
        assert media.deep_analysis.visual_artifacts == ()
        assert media.deep_analysis.contextual_clues == ()
        assert media.deep_analysis.facial_analysis.inconsistencies == ()
        assert media.deep_analysis.confidence == pytest.approx(70.0)

    def test_image_without_face(self):
        """A draw of 0.5 or less skips the facial analysis."""
        result = analyze(make_descriptor(), 0.2, 0.0, 0.5)
        assert result.media_analysis.deep_analysis.facial_analysis is None
        assert result.factors == AUTHENTIC_FACTORS

    def test_video_never_has_facial_analysis(self):
        """Videos only consume two draws."""
        rng = ScriptedRandom(0.9, 0.5)
        result = asyncio.run(analyze_media(make_descriptor("video/mp4", name="clip.mp4"), rng=rng))
        assert result.media_analysis.type == "video"
        assert result.media_analysis.deep_analysis.facial_analysis is None
        assert result.factors == MANIPULATED_FACTORS
        assert rng.values == []

    def test_artifacts_and_verdict_use_different_thresholds(self):
        """
        50.3 is above the artifact threshold, but 100 - 50.3 rounds to 50,
        which is not below the verdict threshold.
        """
        result = analyze(make_descriptor(), 0.503, 0.5, 0.0)
        assert result.score == 50
        assert result.media_analysis.manipulation is False
        assert result.media_analysis.deep_analysis.visual_artifacts == VISUAL_ARTIFACTS

    def test_score_bounds(self):
        assert analyze(make_descriptor(), 0.0, 0.0, 0.0).score == 100
        assert analyze(make_descriptor(), 0.999999, 0.0, 0.0).score == 0

    def test_metadata_copied_verbatim(self):
        descriptor = make_descriptor("image/jpeg", size=123, last_modified=42, name="a.jpg")
        result = analyze(descriptor, 0.1, 0.1, 0.1)
        metadata = result.media_analysis.deep_analysis.metadata
        assert (metadata.type, metadata.size, metadata.last_modified, metadata.name) == (
            "image/jpeg", 123, 42, "a.jpg",
        )

    def test_unexpected_mime_type_accepted(self):
        result = analyze(make_descriptor("application/octet-stream"), 0.1, 0.1)
        assert result.media_analysis.type == "video"

    def test_random_invariants(self):
        """With the real random module, the contract holds on every run."""
        descriptor = make_descriptor("image/png", size=1048576)
        for _ in range(50):
            result = analyze(descriptor)
            deep = result.media_analysis.deep_analysis
            assert 0 <= result.score <= 100
            assert result.media_analysis.manipulation == (result.score < 50)
            assert (len(deep.visual_artifacts) > 0) == (deep.manipulation_score > 50)
            assert (len(deep.contextual_clues) > 0) == (deep.manipulation_score > 50)
            assert 70 <= deep.confidence < 100
            assert result.factors


# =============================================================================
# TEST stream handling
# =============================================================================

class TestStreamHandling:
    """The staged stream must be released on every exit path."""

    def test_stream_closed_after_analysis(self):
        stream = io.BytesIO(b"\x89PNG")
        analyze(make_descriptor(open_stream=lambda: stream), 0.1, 0.1, 0.1)
        assert stream.closed

    def test_stream_closed_on_error(self):
        stream = io.BytesIO(b"\x89PNG")
        descriptor = make_descriptor(open_stream=lambda: stream)
        with pytest.raises(RuntimeError):
            asyncio.run(analyze_media(descriptor, rng=BrokenRandom()))
        assert stream.closed

    def test_stream_closed_on_cancellation(self):
        stream = io.BytesIO(b"\x89PNG")
        descriptor = make_descriptor(open_stream=lambda: stream)

        async def run_and_cancel():
            task = asyncio.create_task(analyze_media(descriptor))
            # Let the task open the stream and reach its suspension point
            await asyncio.sleep(0)
            assert not stream.closed
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(run_and_cancel())
        assert stream.closed

    def test_descriptor_without_stream(self):
        result = analyze(make_descriptor(), 0.1, 0.1, 0.1)
        assert result.score == 90
