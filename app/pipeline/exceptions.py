class PipelineError(Exception):
    """Base exception for pipeline collaborators."""


class ContentUnavailableError(PipelineError):
    """Raised when document bytes cannot be loaded from storage."""
