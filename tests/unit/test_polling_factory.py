from unittest.mock import MagicMock, patch

from app.polling.client import StatusApiClient
from app.polling.coordinator import PollingCoordinator
from app.polling.factory import PollingFactory
from app.status.memory_store import InMemoryStatusStore
from app.status.models import ProcessingStatus


def _make_settings() -> MagicMock:
    return MagicMock(
        status_api_base_url="http://api.local/api",
        status_poll_interval_seconds=0.5,
        status_fetch_timeout_seconds=3.0,
    )


class TestPollingFactory:
    def test_client_uses_configured_endpoint(self) -> None:
        with patch("app.polling.factory.StatusApiClient") as mock_client:
            PollingFactory.create_client(_make_settings())

        mock_client.assert_called_once_with(
            base_url="http://api.local/api", timeout_seconds=3.0
        )

    def test_defaults_to_http_fetcher(self) -> None:
        coordinator = PollingFactory.create(_make_settings())

        assert isinstance(coordinator, PollingCoordinator)
        assert coordinator._interval_seconds == 0.5
        assert isinstance(coordinator._fetch.__self__, StatusApiClient)  # type: ignore[attr-defined]

    def test_status_store_fetcher(self) -> None:
        store = InMemoryStatusStore()
        store.register("d1")

        coordinator = PollingFactory.create(_make_settings(), status_store=store)

        assert coordinator._fetch("d1").status == ProcessingStatus.PENDING

    def test_explicit_fetcher_wins(self) -> None:
        fetch = MagicMock()

        coordinator = PollingFactory.create(
            _make_settings(), status_store=InMemoryStatusStore(), fetch=fetch
        )

        assert coordinator._fetch is fetch
