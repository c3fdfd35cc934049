from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class ProcessingStatus(str, Enum):
    PENDING = "PENDING"
    QUEUED = "QUEUED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    WARNING = "WARNING"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {ProcessingStatus.COMPLETED, ProcessingStatus.WARNING, ProcessingStatus.FAILED}
)

# Terminal -> PENDING is the explicit "new analysis request" reset.
# QUEUED -> PENDING hands an unstarted claim back when a worker stops.
ALLOWED_TRANSITIONS: dict[ProcessingStatus, frozenset[ProcessingStatus]] = {
    ProcessingStatus.PENDING: frozenset(
        {ProcessingStatus.QUEUED, ProcessingStatus.PROCESSING, ProcessingStatus.FAILED}
    ),
    ProcessingStatus.QUEUED: frozenset(
        {ProcessingStatus.PENDING, ProcessingStatus.PROCESSING, ProcessingStatus.FAILED}
    ),
    ProcessingStatus.PROCESSING: TERMINAL_STATUSES,
    ProcessingStatus.COMPLETED: frozenset({ProcessingStatus.PENDING}),
    ProcessingStatus.WARNING: frozenset({ProcessingStatus.PENDING}),
    ProcessingStatus.FAILED: frozenset({ProcessingStatus.PENDING}),
}


def is_allowed(current: ProcessingStatus, next_status: ProcessingStatus) -> bool:
    return next_status in ALLOWED_TRANSITIONS[current]


class ErrorKind(str, Enum):
    """Why a record ended up FAILED or WARNING."""

    CONTENT_UNAVAILABLE = "ContentUnavailable"
    EXTRACTION_FAILURE = "ExtractionFailure"
    EXTRACTION_WARNING = "ExtractionWarning"
    INVALID_DOCUMENT_TYPE = "InvalidDocumentType"
    EXTERNAL_SERVICE_ERROR = "ExternalServiceError"
    MALFORMED_RESPONSE = "MalformedResponse"
    VALIDATION_FAILURE = "ValidationFailure"


@dataclass(frozen=True)
class TransitionPayload:
    """Fields written together with a status change.

    Every transition overwrites all of them, so a reset to PENDING with the
    default payload clears the previous result and error in the same write.
    """

    analysis_result: dict[str, Any] | None = None
    error_message: str | None = None
    error_kind: ErrorKind | None = None
    error_detail: str | None = None


@dataclass(frozen=True)
class ProcessingRecord:
    """Pipeline state of one document."""

    document_id: str
    status: ProcessingStatus
    last_updated_at: datetime
    analysis_result: dict[str, Any] | None = None
    error_message: str | None = None
    error_kind: ErrorKind | None = None
    error_detail: str | None = None

    def to_status_view(self) -> dict[str, Any]:
        """Payload of the status query interface."""
        view: dict[str, Any] = {
            "status": self.status.value,
            "lastUpdatedAt": self.last_updated_at.isoformat(),
        }
        if self.analysis_result is not None:
            view["analysisResult"] = self.analysis_result
        if self.error_message is not None:
            view["errorMessage"] = self.error_message
        if self.error_kind is not None:
            view["errorKind"] = self.error_kind.value
        return view
