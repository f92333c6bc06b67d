"""
Fact Check AI - Content Credibility Scorer

A Streamlit web application that scores the credibility of a URL
or the authenticity of an uploaded image/video.

Run with: streamlit run app.py
"""

import html
import io
import logging
import time
from datetime import datetime

import streamlit as st
from PIL import Image, UnidentifiedImageError

from factcheck.analyzer import FactChecker
from factcheck.errors import InvalidUrlError, NoInputError
from factcheck.models import AnalysisResult, FileDescriptor
from factcheck.scoring import get_credibility_band

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("factcheck.app")


# =============================================================================
# HELPERS
# =============================================================================

# Score colors, one per credibility band
BAND_COLORS = {
    "HIGHLY_TRUSTED": "#16a34a",
    "RELIABLE": "#2563eb",
    "MIXED": "#ca8a04",
    "MISINFORMATION": "#dc2626",
}

PREVIEW_SIZE = (480, 480)


def descriptor_from_upload(uploaded_file) -> FileDescriptor:
    """
    Build a FileDescriptor from a Streamlit UploadedFile.

    Streamlit doesn't expose the file's modification time, so the upload
    time is used instead.
    """
    data = uploaded_file.getvalue()
    return FileDescriptor(
        type=uploaded_file.type or "",
        size=uploaded_file.size,
        last_modified=int(time.time() * 1000),
        name=uploaded_file.name,
        open_stream=lambda: io.BytesIO(data),
    )


def render_preview(data: bytes) -> Image.Image | None:
    """
    Create a thumbnail of an uploaded image.

    Returns:
        The thumbnail, or None if Pillow can't read the file
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.thumbnail(PREVIEW_SIZE)
            return img.copy()
    except (UnidentifiedImageError, OSError) as e:
        logger.warning(f"Could not render preview: {e}")
        return None


def format_size(size: int) -> str:
    return f"{size / 1024 / 1024:.2f} MB"


def format_timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def render_list(items) -> str:
    return "".join(f"<li>{html.escape(item)}</li>" for item in items)


# =============================================================================
# PAGE CONFIG
# =============================================================================

st.set_page_config(
    page_title="Fact Check AI",
    page_icon=":shield:",
    layout="centered",
)

st.markdown("""
<style>
    .score-label { font-size: 1.1rem; font-weight: 600; color: #555; text-align: center; }
    .score-value { font-size: 2.6rem; font-weight: bold; text-align: center; margin-bottom: 1rem; }
    .media-box { background: #f6f7f9; border-radius: 8px; padding: 1rem; }
    .media-box h4 { margin: 0.8rem 0 0.3rem 0; font-size: 0.95rem; color: #444; }
    .media-box ul { margin: 0; font-size: 0.85rem; color: #555; }
</style>
""", unsafe_allow_html=True)

st.markdown("## :shield: Fact Check AI")


# =============================================================================
# INPUT FORM
# =============================================================================

with st.form("analyze_form"):
    url_input = st.text_input("URL", placeholder="Enter URL to analyze...")
    st.markdown('<div style="text-align:center; color:#888;">- OR -</div>', unsafe_allow_html=True)
    uploaded_file = st.file_uploader(
        "Upload Image or Video",
        type=["jpg", "jpeg", "png", "gif", "webp", "mp4", "mov", "avi", "webm"],
    )
    submitted = st.form_submit_button("Analyze")


def render_result(result: AnalysisResult) -> None:
    """Display an analysis result. Scores are shown as-is, never altered."""
    media = result.media_analysis
    label = "Authenticity Score" if media else "Credibility Score"
    color = BAND_COLORS[get_credibility_band(result.score)]

    st.markdown(f'<div class="score-label">{label}</div>', unsafe_allow_html=True)
    st.markdown(
        f'<div class="score-value" style="color:{color};">{result.score}/100</div>',
        unsafe_allow_html=True,
    )

    st.subheader("Analysis Summary")
    st.write(result.summary)

    st.subheader("Key Factors")
    for factor in result.factors:
        st.markdown(f":warning: {factor}")

    if media is None:
        return

    st.subheader("Media Analysis")
    icon = ":x:" if media.manipulation else ":white_check_mark:"
    kind = "Image" if media.type == "image" else "Video"
    st.markdown(f"**{kind} Analysis:** {icon}  \n{media.details}")

    deep = media.deep_analysis
    if deep is None:
        return

    sections = (
        f"<h4>File Metadata</h4>"
        f"<ul><li>Type: {html.escape(deep.metadata.type)}</li>"
        f"<li>Size: {format_size(deep.metadata.size)}</li>"
        f"<li>Last Modified: {format_timestamp(deep.metadata.last_modified)}</li></ul>"
    )
    if deep.visual_artifacts:
        sections += f"<h4>Visual Analysis</h4><ul>{render_list(deep.visual_artifacts)}</ul>"
    if deep.facial_analysis:
        sections += (
            f"<h4>Facial Analysis</h4>"
            f"<div>Confidence: {deep.facial_analysis.confidence:.1f}%</div>"
        )
        if deep.facial_analysis.inconsistencies:
            sections += f"<ul>{render_list(deep.facial_analysis.inconsistencies)}</ul>"
    if deep.contextual_clues:
        sections += f"<h4>Contextual Analysis</h4><ul>{render_list(deep.contextual_clues)}</ul>"
    sections += (
        f"<h4>Analysis Confidence</h4>"
        f"<div>Overall confidence in analysis: {deep.confidence:.1f}%</div>"
    )

    st.markdown(f'<div class="media-box">{sections}</div>', unsafe_allow_html=True)


# =============================================================================
# ANALYSIS
# =============================================================================

if submitted:
    url = url_input.strip()
    descriptor = None
    if not url and uploaded_file is not None:
        descriptor = descriptor_from_upload(uploaded_file)

    result = None
    try:
        # The spinner is released on every exit path, errors included
        with st.spinner("Analyzing..."):
            result = FactChecker().analyze_sync(url=url or None, file=descriptor)
    except InvalidUrlError as e:
        logger.info(f"Rejected input: {e}")
        st.error("Please enter a valid URL")
    except NoInputError as e:
        st.warning(str(e))

    if result is not None:
        st.markdown("---")
        if descriptor is not None and result.media_analysis and result.media_analysis.type == "image":
            preview = render_preview(uploaded_file.getvalue())
            if preview is not None:
                st.image(preview, caption=uploaded_file.name)
        render_result(result)
