"""
Fact Check Analyzer - Main entry point for content credibility scoring.

This module picks the right classifier for the input and returns the result.

Usage:
    from factcheck.analyzer import FactChecker

    checker = FactChecker()
    result = checker.check_url("https://www.reuters.com/world/")

    print(f"Credibility Score: {result.score}/100")
    print(result.summary)
"""

import asyncio
import logging
import random
import time
from typing import Optional

from factcheck.errors import NoInputError
from factcheck.media import analyze_media
from factcheck.models import AnalysisResult, FileDescriptor
from factcheck.url_classifier import classify_url

logger = logging.getLogger(__name__)


class FactChecker:
    """
    Runs the URL or media analysis and returns a unified result.

    Attributes:
        rng: Source of randomness passed to the classifiers

    Example:
        >>> checker = FactChecker()
        >>> result = checker.analyze_sync(url="https://apnews.com/article/x")
        >>> print(f"Score: {result.score}")
    """

    def __init__(self, rng=random):
        """
        Initialize the checker.

        Args:
            rng: Anything with a random() method. Defaults to the random module.
        """
        self.rng = rng

    def check_url(self, url: str) -> AnalysisResult:
        """
        Score a URL by the reputation of its domain.

        Args:
            url: Absolute URL (surrounding whitespace already trimmed)

        Returns:
            AnalysisResult with credibility score

        Raises:
            InvalidUrlError: If the URL cannot be parsed
        """
        start_time = time.time()
        logger.info(f"Analyzing URL: {url}")

        result = classify_url(url, rng=self.rng)

        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info(f"URL analysis complete: score={result.score} ({elapsed_ms} ms)")
        return result

    async def check_file(self, file: FileDescriptor) -> AnalysisResult:
        """
        Analyze an uploaded image or video.

        Args:
            file: The uploaded file descriptor

        Returns:
            AnalysisResult with authenticity score and deep media analysis
        """
        logger.info(f"Analyzing file: {file.name} ({file.type}, {file.size} bytes)")
        return await analyze_media(file, rng=self.rng)

    async def analyze(
        self,
        url: Optional[str] = None,
        file: Optional[FileDescriptor] = None,
    ) -> AnalysisResult:
        """
        Analyze whichever input was supplied.

        If both are given, the URL wins (the file is ignored).

        Args:
            url: URL to classify
            file: Uploaded file to analyze

        Returns:
            AnalysisResult from the matching classifier

        Raises:
            NoInputError: If neither a URL nor a file was supplied
            InvalidUrlError: If the URL cannot be parsed
        """
        if url:
            if file is not None:
                logger.debug(f"Both URL and file supplied, ignoring file {file.name}")
            return self.check_url(url)
        if file is not None:
            return await self.check_file(file)
        raise NoInputError()

    def analyze_sync(
        self,
        url: Optional[str] = None,
        file: Optional[FileDescriptor] = None,
    ) -> AnalysisResult:
        """Blocking version of analyze() for callers without an event loop."""
        return asyncio.run(self.analyze(url=url, file=file))


def quick_check(url: str) -> dict:
    """
    Quick URL check for simple use cases.

    Returns a plain dict instead of an AnalysisResult.

    Args:
        url: Absolute URL to classify

    Returns:
        Dict with score, summary, factors (and mediaAnalysis if any)

    Example:
        >>> quick_check("https://www.bbc.co.uk/news")["score"] >= 85
        True
    """
    return FactChecker().check_url(url).to_dict()
