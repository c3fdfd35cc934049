import httpx
import openai

from app.analysis.client_base import BaseCompletionClient
from app.analysis.exceptions import ExternalServiceError, MalformedResponseError


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
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
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExternalServiceError(
                f"Analysis service network error: {exc}", raw_payload=str(exc)
            ) from exc
        except openai.APIError as exc:
            raise ExternalServiceError(
                f"Analysis service API error: {exc}", raw_payload=str(exc)
            ) from exc

        if not response.choices:
            raise MalformedResponseError("Analysis service returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise MalformedResponseError("Analysis service returned empty response")
        return content
