"""Client-side status polling.

Fetches a document's status on a fixed interval until it reaches a terminal
status or the caller cancels. Fetch failures are logged and polling goes on;
they are never reported as a pipeline failure.
"""

import threading
from typing import Callable

from app.logging.logger import Log
from app.polling.exceptions import PollingError, StatusFetchError
from app.polling.models import PollOutcome, StatusSnapshot
from app.status.base import BaseStatusStore
from app.status.exceptions import StatusStoreError

StatusFetcher = Callable[[str], StatusSnapshot]
UpdateCallback = Callable[[StatusSnapshot], None]


class PollingCoordinator:
    def __init__(
        self,
        fetch: StatusFetcher,
        interval_seconds: float = 5.0,
        max_consecutive_failures: int | None = None,
    ) -> None:
        if interval_seconds < 0:
            raise ValueError("interval_seconds must not be negative")
        self._fetch = fetch
        self._interval_seconds = interval_seconds
        self._max_consecutive_failures = max_consecutive_failures

    def poll(
        self,
        document_id: str,
        on_update: UpdateCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> PollOutcome:
        """Poll in the calling thread until terminal, cancelled or given up.

        The next fetch is issued only after the previous one has returned.
        """
        cancel_event = cancel_event or threading.Event()
        snapshot: StatusSnapshot | None = None
        polls = failures = consecutive_failures = 0

        while not cancel_event.is_set():
            polls += 1
            try:
                latest = self._fetch(document_id)
            except StatusFetchError as exc:
                failures += 1
                consecutive_failures += 1
                Log.warning(
                    "Status fetch failed, will retry",
                    document_id=document_id,
                    error=exc,
                    consecutive_failures=consecutive_failures,
                )
                if (
                    self._max_consecutive_failures is not None
                    and consecutive_failures >= self._max_consecutive_failures
                ):
                    Log.error("Giving up status polling", document_id=document_id)
                    return PollOutcome(snapshot, polls, failures, gave_up=True)
            else:
                snapshot = latest
                consecutive_failures = 0
                if on_update is not None:
                    on_update(snapshot)
                if snapshot.is_terminal:
                    Log.debug(
                        "Terminal status observed, polling stopped",
                        document_id=document_id,
                        status=snapshot.status.value,
                    )
                    return PollOutcome(snapshot, polls, failures)

            if cancel_event.wait(self._interval_seconds):
                break

        Log.debug("Status polling cancelled", document_id=document_id)
        return PollOutcome(snapshot, polls, failures, cancelled=True)

    def start(
        self, document_id: str, on_update: UpdateCallback | None = None
    ) -> "PollingHandle":
        """Poll on a background daemon thread."""
        handle = PollingHandle(self, document_id, on_update)
        handle.start()
        return handle


class PollingHandle:
    """Background polling session; ``cancel()`` stops it without waiting out the interval."""

    def __init__(
        self,
        coordinator: PollingCoordinator,
        document_id: str,
        on_update: UpdateCallback | None,
    ) -> None:
        self._coordinator = coordinator
        self._document_id = document_id
        self._on_update = on_update
        self._cancel_event = threading.Event()
        self._outcome: PollOutcome | None = None
        self._error: BaseException | None = None
        self._thread = threading.Thread(
            target=self._run, name=f"status-poll-{document_id}", daemon=True
        )

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._cancel_event.set()

    def join(self, timeout: float | None = None) -> PollOutcome | None:
        self._thread.join(timeout)
        if self._error is not None:
            raise PollingError(f"Polling {self._document_id} crashed") from self._error
        return self._outcome

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive()

    @property
    def outcome(self) -> PollOutcome | None:
        return self._outcome

    def _run(self) -> None:
        try:
            self._outcome = self._coordinator.poll(
                self._document_id, self._on_update, self._cancel_event
            )
        except Exception as exc:
            Log.exception("Status polling crashed", document_id=self._document_id)
            self._error = exc


def store_fetcher(status_store: BaseStatusStore) -> StatusFetcher:
    """Fetcher reading straight from a status store, for in-process callers."""

    def fetch(document_id: str) -> StatusSnapshot:
        try:
            record = status_store.get(document_id)
        except StatusStoreError as exc:
            raise StatusFetchError(f"Status store read failed for {document_id}: {exc}") from exc
        if record is None:
            raise StatusFetchError(f"No processing record for {document_id}")
        return StatusSnapshot.from_status_view(record.to_status_view())

    return fetch
