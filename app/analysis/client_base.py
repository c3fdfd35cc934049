from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific structured-completion clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Request JSON-formatted output and return the raw response text.

        Raises:
            ExternalServiceError: on transport failure, timeout or non-2xx status.
            MalformedResponseError: if the provider returned no content at all.
        """
