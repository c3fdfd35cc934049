from abc import ABC, abstractmethod

from app.extraction.models import FormatExtraction


class BaseFormatExtractor(ABC):
    """Contract for all per-format text extraction adapters."""

    engine_name: str = "base"

    @abstractmethod
    def extract(self, content: bytes) -> FormatExtraction:
        """Extract plain text from raw document bytes.

        Args:
            content: Raw, non-empty file content.

        Returns:
            FormatExtraction with the text and any non-fatal warnings.

        Raises:
            ExtractionError: if the content cannot be decoded.
        """
