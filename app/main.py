from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.processing_records_repository import PostgresStatusStore
from app.logging.logger import Log
from app.pipeline.orchestrator import build_orchestrator
from app.worker.job_runner import JobRunner
from app.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        status_store = PostgresStatusStore()
        orchestrator = build_orchestrator(settings, status_store=status_store)
        worker = Worker(status_store, JobRunner(orchestrator), settings)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
