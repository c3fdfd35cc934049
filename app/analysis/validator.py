"""Validates parsed analysis JSON against the result schema."""

from typing import Any

from app.analysis.exceptions import ValidationFailureError
from app.analysis.models import AnalysisResult, DocumentType
from app.analysis.schemas import FIELDS_BY_TYPE

MAX_SUMMARY_CHARS = 5000


def validate_and_build(data: dict[str, Any], document_type: DocumentType) -> AnalysisResult:
    """Validate parsed JSON and build an AnalysisResult.

    Confidence is never clamped: a missing or out-of-range value fails validation.
    Type-specific fields default to an empty list when the model omits them.

    Raises:
        ValidationFailureError: on any schema violation.
    """
    summary = _build_summary(data.get("summary"))
    confidence = _build_confidence(data.get("confidence"))
    fields = {
        name: _build_list_field(name, data.get(name))
        for name in FIELDS_BY_TYPE[document_type]
    }
    return AnalysisResult(
        document_type=document_type,
        summary=summary,
        confidence=confidence,
        fields=fields,
    )


def _build_summary(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationFailureError("'summary' must be a non-empty string")
    if len(raw) > MAX_SUMMARY_CHARS:
        raise ValidationFailureError(
            f"'summary' is too long: {len(raw)} chars (max {MAX_SUMMARY_CHARS})"
        )
    return raw.strip()


def _build_confidence(raw: Any) -> float:
    if raw is None:
        raise ValidationFailureError("Missing required field: confidence")
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValidationFailureError(f"'confidence' must be a number, got {raw!r}")
    if not 0.0 <= raw <= 1.0:
        raise ValidationFailureError(f"'confidence' must be within [0, 1], got {raw}")
    return float(raw)


def _build_list_field(name: str, raw: Any) -> list[Any]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationFailureError(f"'{name}' must be a list")
    return raw
