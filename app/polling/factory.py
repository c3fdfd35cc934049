from app.config.settings import Settings
from app.polling.client import StatusApiClient
from app.polling.coordinator import PollingCoordinator, StatusFetcher, store_fetcher
from app.status.base import BaseStatusStore


class PollingFactory:
    """Creates status polling collaborators from settings."""

    @staticmethod
    def create_client(settings: Settings) -> StatusApiClient:
        return StatusApiClient(
            base_url=settings.status_api_base_url,
            timeout_seconds=settings.status_fetch_timeout_seconds,
        )

    @classmethod
    def create(
        cls,
        settings: Settings,
        *,
        status_store: BaseStatusStore | None = None,
        fetch: StatusFetcher | None = None,
    ) -> PollingCoordinator:
        """Build a coordinator.

        The fetcher is ``fetch`` if given, else a direct read of
        ``status_store``, else the HTTP status endpoint.
        """
        if fetch is None:
            if status_store is not None:
                fetch = store_fetcher(status_store)
            else:
                fetch = cls.create_client(settings).fetch
        return PollingCoordinator(fetch, interval_seconds=settings.status_poll_interval_seconds)
