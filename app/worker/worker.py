import time

from app.config.settings import Settings
from app.logging.logger import Log
from app.status.base import BaseStatusStore
from app.status.exceptions import StatusStoreError
from app.status.models import ProcessingStatus
from app.worker.job_runner import JobRunner


class Worker:
    """Poll loop: sleep -> claim -> dispatch."""

    def __init__(
        self,
        status_store: BaseStatusStore,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._store = status_store
        self._job_runner = job_runner
        self._settings = settings

    def run(self, max_jobs: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_jobs is set, stop after processing that many documents (for testing).
        """
        Log.info("Worker started, polling for pending documents")
        jobs_done = 0
        claimed: str | None = None
        try:
            while True:
                if max_jobs is not None and jobs_done >= max_jobs:
                    break
                claimed = self._try_claim_document()
                if claimed:
                    self._job_runner.run(claimed)
                    claimed = None
                    jobs_done += 1
                else:
                    Log.debug("No pending documents, sleeping")
                    time.sleep(self._settings.worker_poll_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
            if claimed is not None:
                self._release(claimed)

    def _try_claim_document(self) -> str | None:
        """Claim one PENDING document by moving it to QUEUED.

        Candidates another worker claimed first are skipped. Storage errors
        are logged and the loop retries on the next tick.
        """
        try:
            candidates = self._store.find_by_status(
                ProcessingStatus.PENDING, self._settings.worker_claim_candidates
            )
            for document_id in candidates:
                if self._store.transition(
                    document_id, ProcessingStatus.PENDING, ProcessingStatus.QUEUED
                ):
                    return document_id
            return None
        except StatusStoreError as exc:
            Log.warning("Status store error, will retry", error=exc)
            return None

    def _release(self, document_id: str) -> None:
        """Hand back a claim interrupted by shutdown.

        A document that has not started goes back to PENDING for the next
        worker. One caught mid-run is failed so it can be requested again.
        """
        try:
            if self._store.transition(
                document_id, ProcessingStatus.QUEUED, ProcessingStatus.PENDING
            ):
                Log.info("Returned unstarted document to pending", document_id=document_id)
            elif self._job_runner.abandon(document_id, "Worker shut down during processing"):
                Log.warning("Interrupted run marked as failed", document_id=document_id)
        except StatusStoreError as exc:
            Log.warning("Could not release claimed document", document_id=document_id, error=exc)
