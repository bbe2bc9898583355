"""
Error taxonomy for the fetch-and-summarize pipeline.

Per-source errors (FetchError, SummarizationError) are recorded on the
source's result and never abort a sibling source. ConfigurationError and
ValidationError fail the whole request and are mapped to HTTP responses by
the handlers registered in server.py.
"""


class SummarizerError(Exception):
    """Base class for all pipeline errors."""
    pass


class FetchError(SummarizerError):
    """Transport failure, timeout or non-2xx status while retrieving a page or feed."""

    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class SummarizationError(SummarizerError):
    """The completion service errored or returned no usable text."""
    pass


class ConfigurationError(SummarizerError):
    """A required setting (usually the completion API key) is missing."""
    pass


class ValidationError(SummarizerError):
    """The caller supplied no usable input."""
    pass
