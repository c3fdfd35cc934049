from app.status.models import ErrorKind


class AnalysisError(Exception):
    """Base for analysis stage failures.

    ``raw_payload`` keeps the offending service output (or transport error
    text) for diagnosis.
    """

    kind: ErrorKind = ErrorKind.EXTERNAL_SERVICE_ERROR

    def __init__(self, message: str, raw_payload: str | None = None) -> None:
        super().__init__(message)
        self.raw_payload = raw_payload


class ExternalServiceError(AnalysisError):
    """Raised on transport failures, timeouts and non-2xx responses."""

    kind = ErrorKind.EXTERNAL_SERVICE_ERROR


class MalformedResponseError(AnalysisError):
    """Raised when the service response is not a JSON object."""

    kind = ErrorKind.MALFORMED_RESPONSE


class ValidationFailureError(AnalysisError):
    """Raised when parsed JSON does not satisfy the result schema."""

    kind = ErrorKind.VALIDATION_FAILURE


class InvalidDocumentTypeError(ValueError):
    """Raised when a prompt is requested for an unknown document type."""

    kind = ErrorKind.INVALID_DOCUMENT_TYPE


class PromptTemplateError(Exception):
    """Raised when a bundled prompt template cannot be loaded."""
