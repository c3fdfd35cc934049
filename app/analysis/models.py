from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DocumentType(str, Enum):
    CONTRACT = "CONTRACT"
    REPORT = "REPORT"
    POLICY = "POLICY"
    PRESENTATION = "PRESENTATION"
    AGREEMENT = "AGREEMENT"
    CORRESPONDENCE = "CORRESPONDENCE"
    INVOICE = "INVOICE"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Prompt:
    """Everything the analysis client needs for one completion call."""

    document_type: DocumentType
    system_prompt: str
    user_prompt: str
    result_fields: tuple[str, ...]
    original_length: int
    truncated: bool = False


@dataclass(frozen=True)
class AnalysisResult:
    """Validated structured metadata returned by the analysis service."""

    document_type: DocumentType
    summary: str
    confidence: float
    fields: dict[str, list[Any]] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready form stored in the processing record."""
        return {
            "documentType": self.document_type.value,
            "summary": self.summary,
            "confidence": self.confidence,
            **self.fields,
        }
