from typing import ClassVar

from app.analysis.analysis_client import AnalysisClient
from app.analysis.client_base import BaseCompletionClient
from app.analysis.example_client_adapter import ExampleClientAdapter
from app.analysis.http_client_adapter import HttpCompletionClient
from app.analysis.openai_client_adapter import OpenAIClientAdapter
from app.analysis.prompt_builder import AnalysisPromptBuilder
from app.config.settings import Settings


class AnalysisClientFactory:
    """Creates the configured analysis client and prompt builder."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> AnalysisClient:
        provider = settings.analysis_provider.lower()
        return AnalysisClient(
            client=cls._create_completion_client(provider, settings),
            model=settings.analysis_model_name,
            temperature=settings.analysis_temperature,
        )

    @classmethod
    def create_prompt_builder(cls, settings: Settings) -> AnalysisPromptBuilder:
        return AnalysisPromptBuilder(
            max_text_chars=settings.analysis_max_prompt_chars,
            max_summary_words=settings.analysis_max_summary_words,
        )

    @classmethod
    def _create_completion_client(
        cls, provider: str, settings: Settings
    ) -> BaseCompletionClient:
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "http":
            return HttpCompletionClient(
                base_url=cls._require_base_url(provider, settings),
                timeout_seconds=settings.analysis_timeout_seconds,
                api_key=settings.analysis_api_key,
            )
        return OpenAIClientAdapter(
            api_key=settings.analysis_api_key,
            timeout_seconds=settings.analysis_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            return cls._require_base_url(provider, settings)
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.analysis_base_url.strip() or default_base_url
        supported = [
            "example",
            "http",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {supported}"
        )

    @staticmethod
    def _require_base_url(provider: str, settings: Settings) -> str:
        url = settings.analysis_base_url.strip()
        if not url:
            raise ValueError(
                f"analysis_base_url is required for analysis_provider={provider}"
            )
        return url
