"""Dispatches raw document bytes to the format extractor for their MIME type."""

import time

from app.extraction.base import BaseFormatExtractor
from app.extraction.exceptions import ExtractionError
from app.extraction.models import ExtractionOptions, ExtractionOutcome, FormatExtraction
from app.logging.logger import Log

EMPTY_CONTENT_REASON = "Document content is empty"


class TextExtractor:
    """Converts document bytes into plain text.

    Never raises for bad input: empty content and decode errors are reported
    through ``ExtractionOutcome.failed``. Oversized text is returned in full
    with a warning; cutting it down is the prompt builder's job.
    """

    def __init__(self, extractors: dict[str, BaseFormatExtractor]) -> None:
        self._extractors = extractors

    def extract(
        self,
        content: bytes,
        canonical_mime: str,
        file_name: str,
        options: ExtractionOptions | None = None,
    ) -> ExtractionOutcome:
        options = options or ExtractionOptions()
        started = time.perf_counter()

        if not content:
            Log.error(EMPTY_CONTENT_REASON, mime_type=canonical_mime, file_name=file_name)
            return ExtractionOutcome.failure(EMPTY_CONTENT_REASON, canonical_mime)

        Log.info(
            "Extracting text from document",
            mime_type=canonical_mime,
            file_size=len(content),
            file_name=file_name,
        )

        extractor = self._extractors.get(canonical_mime)
        try:
            if extractor is None:
                result = self._unsupported(canonical_mime, file_name)
                engine = "unsupported"
            else:
                result = extractor.extract(content)
                engine = extractor.engine_name
        except ExtractionError as exc:
            duration_ms = self._elapsed_ms(started)
            Log.error(
                "Text extraction failed",
                mime_type=canonical_mime,
                file_name=file_name,
                error=exc,
                duration_ms=duration_ms,
            )
            return ExtractionOutcome.failure(
                f"Text extraction failed: {exc}", canonical_mime, duration_ms
            )

        warnings = list(result.warnings)
        text = result.text
        if len(text) > options.max_content_length:
            warnings.append(
                f"Extracted text length {len(text)} exceeds maximum content length "
                f"{options.max_content_length}"
            )
            Log.warning(
                "Document content exceeds maximum size",
                text_length=len(text),
                max_content_length=options.max_content_length,
                file_name=file_name,
            )

        duration_ms = self._elapsed_ms(started)
        if options.include_metadata_footer:
            text += self._metadata_footer(canonical_mime, len(content), duration_ms, engine)

        Log.info(
            "Text extraction completed",
            mime_type=canonical_mime,
            text_length=len(text),
            warnings=len(warnings),
            duration_ms=duration_ms,
            file_name=file_name,
        )
        return ExtractionOutcome(
            text=text,
            canonical_mime=canonical_mime,
            warnings=warnings,
            duration_ms=duration_ms,
        )

    @staticmethod
    def _unsupported(canonical_mime: str, file_name: str) -> FormatExtraction:
        Log.warning(
            "Unsupported document type for text extraction",
            mime_type=canonical_mime,
            file_name=file_name,
        )
        return FormatExtraction(
            text=(
                f"Text extraction from {canonical_mime} documents is not currently supported.\n"
                "Please convert this document to PDF format for analysis."
            ),
            warnings=[f"Unsupported document type: {canonical_mime}"],
        )

    @staticmethod
    def _metadata_footer(
        canonical_mime: str, size_bytes: int, duration_ms: float, engine: str
    ) -> str:
        return (
            "\n\n--- Document Extraction Metadata ---\n"
            f"File Type: {canonical_mime}\n"
            f"File Size: {size_bytes / 1024:.2f} KB\n"
            f"Extraction Time: {duration_ms:.0f}ms\n"
            f"Extraction Engine: {engine}\n"
        )

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 3)
