"""Builds the per-document-type analysis prompt."""

from pathlib import Path

from app.analysis.exceptions import InvalidDocumentTypeError
from app.analysis.models import DocumentType, Prompt
from app.analysis.prompt_loader import load_prompt_template, load_system_prompt
from app.analysis.schemas import DEFAULT_SUBJECT, FIELDS_BY_TYPE, SUBJECT_BY_TYPE, describe_fields

TRUNCATION_MARKER = "...[truncated]"


class AnalysisPromptBuilder:
    """Deterministic prompt construction keyed by document type.

    This is the one place where oversized extracted text is cut: the text is
    truncated to ``max_text_chars`` before it is embedded in the prompt.
    """

    def __init__(
        self,
        *,
        max_text_chars: int = 15_000,
        max_summary_words: int = 150,
        prompt_template_path: Path | None = None,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._max_text_chars = max_text_chars
        self._max_summary_words = max_summary_words
        self._template = load_prompt_template(prompt_template_path)
        self._system_prompt = load_system_prompt(system_prompt_path)

    def build(self, document_type: DocumentType | str, title: str, text: str) -> Prompt:
        doc_type = self._resolve_type(document_type)
        embedded, truncated = self._truncate(text)
        user_prompt = self._template.format(
            document_label=doc_type.value.lower(),
            title=title,
            subject=SUBJECT_BY_TYPE.get(doc_type, DEFAULT_SUBJECT),
            field_list=describe_fields(doc_type),
            max_summary_words=self._max_summary_words,
            document_text=embedded,
        )
        return Prompt(
            document_type=doc_type,
            system_prompt=self._system_prompt,
            user_prompt=user_prompt,
            result_fields=tuple(FIELDS_BY_TYPE[doc_type]),
            original_length=len(text),
            truncated=truncated,
        )

    def _truncate(self, text: str) -> tuple[str, bool]:
        if len(text) <= self._max_text_chars:
            return text, False
        return text[: self._max_text_chars] + TRUNCATION_MARKER, True

    @staticmethod
    def _resolve_type(document_type: DocumentType | str) -> DocumentType:
        if isinstance(document_type, DocumentType):
            return document_type
        try:
            return DocumentType(document_type)
        except ValueError as exc:
            raise InvalidDocumentTypeError(
                f"Unknown document type {document_type!r}. "
                f"Choose from: {[t.value for t in DocumentType]}"
            ) from exc
