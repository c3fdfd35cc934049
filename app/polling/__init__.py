from app.polling.client import StatusApiClient
from app.polling.coordinator import PollingCoordinator, PollingHandle, store_fetcher
from app.polling.exceptions import PollingError, StatusFetchError
from app.polling.factory import PollingFactory
from app.polling.models import PollOutcome, StatusSnapshot

__all__ = [
    "PollOutcome",
    "PollingCoordinator",
    "PollingError",
    "PollingFactory",
    "PollingHandle",
    "StatusApiClient",
    "StatusFetchError",
    "StatusSnapshot",
    "store_fetcher",
]
