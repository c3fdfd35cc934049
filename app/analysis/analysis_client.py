"""Runs one structured-completion call and turns the response into an AnalysisResult."""

import json

from app.analysis.client_base import BaseCompletionClient
from app.analysis.exceptions import MalformedResponseError, ValidationFailureError
from app.analysis.models import AnalysisResult, Prompt
from app.analysis.validator import validate_and_build
from app.logging.logger import Log


class AnalysisClient:
    """Single deterministic call with one failure surface; never retries.

    Raises ExternalServiceError, MalformedResponseError or
    ValidationFailureError, each carrying the raw payload.
    """

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.3,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))

    def analyze(self, prompt: Prompt) -> AnalysisResult:
        Log.debug(f"Analysis prompt:\n{prompt.user_prompt}")
        raw_response = self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=prompt.system_prompt,
            user_prompt=prompt.user_prompt,
        )
        Log.debug(f"Analysis raw response:\n{raw_response}")

        parsed = self._parse_json(raw_response)
        try:
            result = validate_and_build(parsed, prompt.document_type)
        except ValidationFailureError as exc:
            exc.raw_payload = raw_response
            raise

        Log.info(
            "Analysis complete",
            document_type=result.document_type.value,
            confidence=result.confidence,
            summary_length=len(result.summary),
        )
        return result

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(
                f"Invalid JSON response: {exc}", raw_payload=raw
            ) from exc

        if not isinstance(parsed, dict):
            raise MalformedResponseError("JSON response must be an object", raw_payload=raw)
        return parsed
