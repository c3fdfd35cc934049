from unittest.mock import MagicMock, patch

from app.status.exceptions import StatusStoreError
from app.status.memory_store import InMemoryStatusStore
from app.status.models import ProcessingStatus
from app.worker.job_runner import JobRunner
from app.worker.worker import Worker


def _make_worker(
    store: object | None = None, runner: object | None = None
) -> tuple[Worker, MagicMock]:
    """Create a Worker with a mocked runner."""
    mock_runner = runner or MagicMock()
    settings = MagicMock(worker_poll_interval_seconds=1, worker_claim_candidates=10)
    worker = Worker(store or InMemoryStatusStore(), mock_runner, settings)
    return worker, mock_runner


def _statuses(store: InMemoryStatusStore, *doc_ids: str) -> dict[str, ProcessingStatus]:
    return {doc_id: store.get(doc_id).status for doc_id in doc_ids}  # type: ignore[union-attr]


class TestWorkerDispatch:
    def test_dispatches_claimed_document(self) -> None:
        worker, mock_runner = _make_worker()

        with patch.object(worker, "_try_claim_document", side_effect=["d1", KeyboardInterrupt]):
            worker.run()

        mock_runner.run.assert_called_once_with("d1")

    def test_dispatches_multiple_documents(self) -> None:
        worker, mock_runner = _make_worker()

        with patch.object(
            worker, "_try_claim_document", side_effect=["d1", "d2", "d3", KeyboardInterrupt]
        ):
            worker.run()

        assert mock_runner.run.call_count == 3

    def test_max_jobs_stops_loop(self) -> None:
        store = InMemoryStatusStore()
        for doc_id in ("a", "b", "c"):
            store.register(doc_id)
        worker, mock_runner = _make_worker(store)

        worker.run(max_jobs=2)

        assert mock_runner.run.call_count == 2
        assert store.find_by_status(ProcessingStatus.PENDING, 10) == ["c"]

    def test_each_document_claimed_just_before_it_runs(self) -> None:
        store = InMemoryStatusStore()
        for doc_id in ("a", "b", "c"):
            store.register(doc_id)
        seen: list[dict[str, ProcessingStatus]] = []
        runner = MagicMock()
        runner.run.side_effect = lambda doc_id: seen.append(_statuses(store, "a", "b", "c"))
        worker, _runner = _make_worker(store, runner)

        worker.run(max_jobs=1)

        assert seen == [
            {
                "a": ProcessingStatus.QUEUED,
                "b": ProcessingStatus.PENDING,
                "c": ProcessingStatus.PENDING,
            }
        ]


class TestWorkerClaim:
    def test_claims_pending_as_queued(self) -> None:
        store = InMemoryStatusStore()
        store.register("d1")
        worker, _runner = _make_worker(store)

        assert worker._try_claim_document() == "d1"
        record = store.get("d1")
        assert record is not None
        assert record.status == ProcessingStatus.QUEUED

    def test_claims_a_single_document(self) -> None:
        store = InMemoryStatusStore()
        for doc_id in ("a", "b"):
            store.register(doc_id)
        worker, _runner = _make_worker(store)

        assert worker._try_claim_document() == "a"
        assert store.find_by_status(ProcessingStatus.PENDING, 10) == ["b"]

    def test_skips_documents_claimed_elsewhere(self) -> None:
        store = MagicMock()
        store.find_by_status.return_value = ["d1", "d2"]
        store.transition.side_effect = [False, True]
        worker, _runner = _make_worker(store)

        assert worker._try_claim_document() == "d2"

    def test_nothing_claimable(self) -> None:
        store = MagicMock()
        store.find_by_status.return_value = ["d1"]
        store.transition.return_value = False
        worker, _runner = _make_worker(store)

        assert worker._try_claim_document() is None

    def test_store_error_is_retried_later(self) -> None:
        store = MagicMock()
        store.find_by_status.side_effect = StatusStoreError("db down")
        worker, _runner = _make_worker(store)

        assert worker._try_claim_document() is None


class TestWorkerSleep:
    def test_sleeps_when_nothing_pending(self) -> None:
        worker, _runner = _make_worker()

        with (
            patch.object(worker, "_try_claim_document", side_effect=[None, KeyboardInterrupt]),
            patch("app.worker.worker.time.sleep") as mock_sleep,
        ):
            worker.run()

        mock_sleep.assert_called_once_with(1)


class TestWorkerShutdown:
    def test_handles_keyboard_interrupt(self) -> None:
        worker, _runner = _make_worker()

        with patch.object(worker, "_try_claim_document", side_effect=KeyboardInterrupt):
            worker.run()  # Should not raise

    def test_interrupt_before_start_returns_claim_to_pending(self) -> None:
        store = InMemoryStatusStore()
        for doc_id in ("a", "b", "c"):
            store.register(doc_id)
        runner = MagicMock()
        runner.run.side_effect = KeyboardInterrupt
        worker, _runner = _make_worker(store, runner)

        worker.run()

        assert _statuses(store, "a", "b", "c") == {
            "a": ProcessingStatus.PENDING,
            "b": ProcessingStatus.PENDING,
            "c": ProcessingStatus.PENDING,
        }
        runner.abandon.assert_not_called()

    def test_interrupt_mid_run_fails_the_document(self) -> None:
        store = InMemoryStatusStore()
        store.register("d1")
        orchestrator = MagicMock()

        def interrupted_run(document_id: str) -> None:
            store.transition(document_id, ProcessingStatus.QUEUED, ProcessingStatus.PROCESSING)
            raise KeyboardInterrupt

        orchestrator.run.side_effect = interrupted_run
        worker, _runner = _make_worker(store, JobRunner(orchestrator))

        worker.run()

        orchestrator.abandon.assert_called_once_with("d1", "Worker shut down during processing")

    def test_release_store_error_does_not_propagate(self) -> None:
        store = MagicMock()
        store.find_by_status.return_value = ["d1"]
        store.transition.side_effect = [True, StatusStoreError("db down")]
        runner = MagicMock()
        runner.run.side_effect = KeyboardInterrupt
        worker, _runner = _make_worker(store, runner)

        worker.run()  # Should not raise

        runner.abandon.assert_not_called()
