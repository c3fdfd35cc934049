from typing import Any

from app.logging.logger import Log
from app.pipeline.documents import BaseDocumentsRepository
from app.pipeline.orchestrator import PipelineOrchestrator
from app.status.base import BaseStatusStore
from app.status.models import ProcessingStatus


class PipelineService:
    """Entry points used by the surrounding API layer: status query and trigger."""

    def __init__(
        self,
        status_store: BaseStatusStore,
        documents: BaseDocumentsRepository,
        orchestrator: PipelineOrchestrator,
    ) -> None:
        self._store = status_store
        self._documents = documents
        self._orchestrator = orchestrator

    def register(self, document_id: str) -> None:
        """Create the PENDING record for a freshly uploaded document."""
        record = self._store.register(document_id)
        Log.info("Document registered", document_id=document_id, status=record.status.value)

    def get_status(self, document_id: str) -> dict[str, Any] | None:
        record = self._store.get(document_id)
        return record.to_status_view() if record is not None else None

    def request_analysis(self, document_id: str) -> dict[str, bool]:
        """Ask for a (new) analysis run.

        A document without a record gets a PENDING one. A terminal record is
        reset to PENDING, which clears the previous result and error in the
        same write. A run already waiting or in progress is left alone.
        """
        if self._documents.is_deleted(document_id):
            Log.warning("Analysis requested for a deleted document", document_id=document_id)
            return {"accepted": False}

        record = self._store.get(document_id)
        if record is None:
            self._store.register(document_id)
            accepted = True
        elif record.status.is_terminal:
            accepted = self._store.transition(
                document_id, record.status, ProcessingStatus.PENDING
            )
        else:
            accepted = False

        Log.info("Analysis requested", document_id=document_id, accepted=accepted)
        return {"accepted": accepted}

    def analyze_now(self, document_id: str) -> ProcessingStatus | None:
        """Trigger analysis and run it synchronously in the calling thread."""
        if not self.request_analysis(document_id)["accepted"]:
            return None
        return self._orchestrator.run(document_id)

    def discard(self, document_id: str) -> None:
        """Drop the record of a deleted document.

        A run still in flight finds no record afterwards and its writes are discarded.
        """
        self._store.delete(document_id)
        Log.info("Processing record discarded", document_id=document_id)
