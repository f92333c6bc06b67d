"""
Data structures used across all Fact Check modules.

These dataclasses define the standard format for analysis results.
Both classifiers (URL reputation and media synthesis) return an
AnalysisResult, so the presentation layer only needs to know one shape.

All result objects are frozen: they are built once per request and
never modified afterwards.
"""

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Literal


# Kind of media the analysis refers to
MediaType = Literal["image", "video"]


@dataclass(frozen=True)
class FileMetadata:
    """
    File properties copied verbatim from the uploaded file.

    Attributes:
        type: MIME type reported by the uploader (e.g., "image/png")
        size: Size in bytes
        last_modified: Last modification time in milliseconds since epoch
        name: Original file name
    """
    type: str
    size: int
    last_modified: int
    name: str


@dataclass(frozen=True)
class FileDescriptor:
    """
    An uploaded file, as handed over by the file-selection layer.

    The analysis never parses the file content. The bytes are only
    "staged" (opened and released) so that a real detector can later
    consume them behind the same interface.

    Attributes:
        type: MIME type (e.g., "image/jpeg", "video/mp4")
        size: Size in bytes
        last_modified: Last modification time in milliseconds since epoch
        name: File name
        open_stream: Optional zero-argument callable returning a binary
            stream with the file content. Whoever calls it owns the stream.

    Example:
        >>> descriptor = FileDescriptor(
        ...     type="image/png",
        ...     size=1048576,
        ...     last_modified=1700000000000,
        ...     name="photo.png",
        ... )
    """
    type: str
    size: int
    last_modified: int
    name: str
    open_stream: Callable[[], BinaryIO] | None = field(default=None, compare=False, repr=False)

    @property
    def metadata(self) -> FileMetadata:
        return FileMetadata(
            type=self.type,
            size=self.size,
            last_modified=self.last_modified,
            name=self.name,
        )

    @classmethod
    def from_path(cls, path: str | Path) -> "FileDescriptor":
        """
        Build a descriptor for a file on the local disk.

        The MIME type is guessed from the extension (empty string if unknown),
        and the file is only opened when the stream is requested.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(path)
        stat = path.stat()
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            type=mime_type or "",
            size=stat.st_size,
            last_modified=int(stat.st_mtime * 1000),
            name=path.name,
            open_stream=lambda: open(path, "rb"),
        )


@dataclass(frozen=True)
class FacialAnalysis:
    """
    Facial findings for images that may contain faces.

    Attributes:
        inconsistencies: Facial anomalies found. Empty list = natural features.
        confidence: Confidence of the facial analysis (0-100)
    """
    inconsistencies: tuple[str, ...] = ()
    confidence: float = 0.0


@dataclass(frozen=True)
class MediaAnalysisDetails:
    """
    Deep report, only produced for uploaded files.

    Attributes:
        metadata: File properties copied from the upload
        visual_artifacts: Visual findings. Non-empty only when the
            manipulation score is above the threshold.
        facial_analysis: Optional facial findings (images only)
        contextual_clues: Contextual findings (lighting, shadows).
            Non-empty only when the manipulation score is above the threshold.
        manipulation_score: Likelihood of manipulation (0-100)
        confidence: Overall confidence in the analysis (70-100)
    """
    metadata: FileMetadata
    visual_artifacts: tuple[str, ...] = ()
    facial_analysis: FacialAnalysis | None = None
    contextual_clues: tuple[str, ...] = ()
    manipulation_score: float = 0.0
    confidence: float = 0.0


@dataclass(frozen=True)
class MediaAnalysis:
    """
    Media verdict attached to an analysis result.

    Attributes:
        type: "image" or "video"
        manipulation: True if the content is likely manipulated (score < 50)
        details: Fixed sentence matching the manipulation verdict
        deep_analysis: Detailed report (uploaded files only, None for URLs)
    """
    type: MediaType
    manipulation: bool
    details: str
    deep_analysis: MediaAnalysisDetails | None = None


@dataclass(frozen=True)
class AnalysisResult:
    """
    Final result of an analysis. This is what the user sees.

    Attributes:
        score: Credibility (URL) or authenticity (media) score, 0-100
        summary: Human-readable verdict derived from the score
        factors: Contributing factors, in the order the rules fired
        media_analysis: Media verdict (uploaded files, or URLs pointing
            to an image/video file)

    Example:
        >>> result = AnalysisResult(
        ...     score=87,
        ...     summary="This content comes from a highly trusted source...",
        ...     factors=("Tier 1 - Highly trusted news organization",),
        ... )
    """
    score: int
    summary: str
    factors: tuple[str, ...] = ()
    media_analysis: MediaAnalysis | None = None

    def to_dict(self) -> dict:
        """
        Convert to the plain structure consumed by the presentation layer.

        Keys use camelCase and optional parts are left out when absent.

        Example:
            >>> result.to_dict()
            {'score': 87, 'summary': '...', 'factors': [...]}
        """
        data = {
            "score": self.score,
            "summary": self.summary,
            "factors": list(self.factors),
        }
        if self.media_analysis is not None:
            data["mediaAnalysis"] = _media_analysis_to_dict(self.media_analysis)
        return data


def _media_analysis_to_dict(media: MediaAnalysis) -> dict:
    data = {
        "type": media.type,
        "manipulation": media.manipulation,
        "details": media.details,
    }
    deep = media.deep_analysis
    if deep is None:
        return data

    deep_data = {
        "metadata": {
            "type": deep.metadata.type,
            "size": deep.metadata.size,
            "lastModified": deep.metadata.last_modified,
            "name": deep.metadata.name,
        },
        "visualArtifacts": list(deep.visual_artifacts),
        "contextualClues": list(deep.contextual_clues),
        "manipulationScore": deep.manipulation_score,
        "confidence": deep.confidence,
    }
    if deep.facial_analysis is not None:
        deep_data["facialAnalysis"] = {
            "inconsistencies": list(deep.facial_analysis.inconsistencies),
            "confidence": deep.facial_analysis.confidence,
        }
    data["deepAnalysis"] = deep_data
    return data
