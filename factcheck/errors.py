"""
Errors raised by the Fact Check analysis core.

Both errors end the current request: nothing is retried internally,
the caller must call again with corrected input.
"""


class FactCheckError(Exception):
    """Base class for all Fact Check errors."""


class InvalidUrlError(FactCheckError, ValueError):
    """
    The supplied string is not a valid absolute URL.

    Subclasses ValueError so callers catching the builtin still work.

    Attributes:
        url: The rejected input
    """

    def __init__(self, url: str, reason: str = "not a valid absolute URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL {url!r}: {reason}")


class NoInputError(FactCheckError):
    """Neither a URL nor a file was supplied."""

    def __init__(self, message: str = "Please enter a URL or upload a file"):
        super().__init__(message)
