"""Completion client for a plain HTTP structured-completion endpoint.

Wire contract::

    POST {base_url}
    {"systemPrompt": "...", "userPrompt": "...", "responseFormat": "json",
     "model": "...", "temperature": 0.3}
    -> 200 {"content": "<json text>"}
"""

import httpx

from app.analysis.client_base import BaseCompletionClient
from app.analysis.exceptions import ExternalServiceError, MalformedResponseError

_ERROR_BODY_PREVIEW_CHARS = 500


class HttpCompletionClient(BaseCompletionClient):
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: float,
        api_key: str = "",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._base_url = base_url
        self._client = httpx.Client(
            timeout=timeout_seconds, headers=headers, transport=transport
        )

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        try:
            response = self._client.post(
                self._base_url,
                json={
                    "systemPrompt": system_prompt,
                    "userPrompt": user_prompt,
                    "responseFormat": "json",
                    "model": model,
                    "temperature": temperature,
                },
            )
        except httpx.HTTPError as exc:
            raise ExternalServiceError(
                f"Analysis service network error: {exc}", raw_payload=str(exc)
            ) from exc

        if not response.is_success:
            raise ExternalServiceError(
                f"Analysis service returned HTTP {response.status_code}",
                raw_payload=response.text[:_ERROR_BODY_PREVIEW_CHARS],
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                "Analysis service envelope is not JSON", raw_payload=response.text
            ) from exc
        content = body.get("content") if isinstance(body, dict) else None
        if not isinstance(content, str):
            raise MalformedResponseError(
                "Analysis service envelope has no 'content' string", raw_payload=response.text
            )
        return content

    def close(self) -> None:
        self._client.close()
