import httpx

from app.polling.exceptions import StatusFetchError
from app.polling.models import StatusSnapshot


class StatusApiClient:
    """Fetches ``GET {base_url}/documents/{id}/status``."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(timeout=timeout_seconds, transport=transport)

    def fetch(self, document_id: str) -> StatusSnapshot:
        url = f"{self._base_url}/documents/{document_id}/status"
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise StatusFetchError(f"Status request failed: {exc}") from exc

        if not response.is_success:
            raise StatusFetchError(f"Status endpoint returned HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            raise StatusFetchError("Status response is not JSON") from exc
        if not isinstance(body, dict):
            raise StatusFetchError("Status response is not a JSON object")

        try:
            return StatusSnapshot.from_status_view(body)
        except ValueError as exc:
            raise StatusFetchError(f"Invalid status response: {exc}") from exc

    def close(self) -> None:
        self._client.close()
