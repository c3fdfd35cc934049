from app.logging.logger import Log
from app.pipeline.orchestrator import PipelineOrchestrator
from app.status.models import ProcessingStatus


class JobRunner:
    """Run one claimed document through the pipeline and contain crashes."""

    def __init__(self, orchestrator: PipelineOrchestrator) -> None:
        self._orchestrator = orchestrator

    def run(self, document_id: str) -> ProcessingStatus | None:
        """Execute a single pipeline run with error handling."""
        Log.info("Running pipeline", document_id=document_id)
        try:
            status = self._orchestrator.run(document_id)
        except Exception as exc:
            self._handle_failure(document_id, exc)
            return None
        if status is None:
            Log.info("Pipeline run discarded", document_id=document_id)
        return status

    def _handle_failure(self, document_id: str, exc: Exception) -> None:
        """Fail the record so it does not stay stuck in a non-terminal status."""
        Log.exception("Pipeline run crashed", document_id=document_id)
        try:
            abandoned = self._orchestrator.abandon(document_id, f"{type(exc).__name__}: {exc}")
        except Exception:
            Log.exception("Could not mark crashed run as failed", document_id=document_id)
            return
        if abandoned:
            Log.warning("Crashed run marked as failed", document_id=document_id)

    def abandon(self, document_id: str, reason: str) -> bool:
        return self._orchestrator.abandon(document_id, reason)
