from dataclasses import dataclass
from typing import Any

from app.status.models import TERMINAL_STATUSES, ProcessingStatus


@dataclass(frozen=True)
class StatusSnapshot:
    """One observation of a document's processing record."""

    status: ProcessingStatus
    last_updated_at: str | None = None
    analysis_result: dict[str, Any] | None = None
    error_message: str | None = None
    error_kind: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @classmethod
    def from_status_view(cls, view: dict[str, Any]) -> "StatusSnapshot":
        """Build from the ``{status, lastUpdatedAt, ...}`` status payload.

        Raises:
            ValueError: if ``status`` is missing or unknown.
        """
        raw_status = view.get("status")
        if raw_status is None:
            raise ValueError("Status payload has no 'status' field")
        return cls(
            status=ProcessingStatus(raw_status),
            last_updated_at=view.get("lastUpdatedAt"),
            analysis_result=view.get("analysisResult"),
            error_message=view.get("errorMessage"),
            error_kind=view.get("errorKind"),
        )


@dataclass(frozen=True)
class PollOutcome:
    """How a polling session ended."""

    snapshot: StatusSnapshot | None
    polls: int
    failures: int
    cancelled: bool = False
    gave_up: bool = False
