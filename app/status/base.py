from abc import ABC, abstractmethod

from app.status.exceptions import IllegalTransitionError
from app.status.models import ProcessingRecord, ProcessingStatus, TransitionPayload, is_allowed


class BaseStatusStore(ABC):
    """Contract for ProcessingRecord persistence.

    ``transition`` is the only mutator of an existing record and the single
    place where state-machine legality is enforced.
    """

    @abstractmethod
    def register(self, document_id: str) -> ProcessingRecord:
        """Create a PENDING record, or return the existing one unchanged."""

    @abstractmethod
    def get(self, document_id: str) -> ProcessingRecord | None:
        """Return the record, or None if the document is not registered."""

    def transition(
        self,
        document_id: str,
        expected_current: ProcessingStatus,
        next_status: ProcessingStatus,
        payload: TransitionPayload | None = None,
    ) -> bool:
        """Move a record from ``expected_current`` to ``next_status``.

        Returns:
            True if the record was updated. False if the stored status no
            longer matches ``expected_current`` or the record is gone.

        Raises:
            IllegalTransitionError: if the state machine forbids the move.
            StatusStoreError: on storage-layer faults.
        """
        if not is_allowed(expected_current, next_status):
            raise IllegalTransitionError(
                f"Transition {expected_current.value} -> {next_status.value} is not allowed"
            )
        return self._compare_and_set(
            document_id, expected_current, next_status, payload or TransitionPayload()
        )

    @abstractmethod
    def find_by_status(self, status: ProcessingStatus, limit: int) -> list[str]:
        """Return up to ``limit`` document ids in ``status``, oldest first."""

    @abstractmethod
    def delete(self, document_id: str) -> None:
        """Drop the record of a deleted document."""

    @abstractmethod
    def _compare_and_set(
        self,
        document_id: str,
        expected_current: ProcessingStatus,
        next_status: ProcessingStatus,
        payload: TransitionPayload,
    ) -> bool:
        """Atomically apply the transition if the stored status matches."""
