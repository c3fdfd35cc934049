import pytest

from app.extraction import mime
from app.extraction.base import BaseFormatExtractor
from app.extraction.exceptions import ExtractionError
from app.extraction.markup import HtmlExtractor, JsonExtractor, PlainTextExtractor
from app.extraction.models import ExtractionOptions, FormatExtraction
from app.extraction.pdf import PdfPlumberExtractor
from app.extraction.text_extractor import EMPTY_CONTENT_REASON, TextExtractor
from app.extraction.word import DocxExtractor


class _ExplodingExtractor(BaseFormatExtractor):
    engine_name = "exploding"

    def extract(self, content: bytes) -> FormatExtraction:
        raise ExtractionError("corrupt stream")


def _make_extractor() -> TextExtractor:
    return TextExtractor(
        {
            mime.PDF: PdfPlumberExtractor(),
            mime.WORD: DocxExtractor(),
            mime.HTML: HtmlExtractor(),
            mime.JSON: JsonExtractor(),
            mime.PLAIN_TEXT: PlainTextExtractor(),
        }
    )


class TestEmptyContent:
    @pytest.mark.parametrize(
        "canonical_mime", [*sorted(mime.CANONICAL_TYPES), "image/png"]
    )
    def test_empty_content_fails_for_every_type(self, canonical_mime: str) -> None:
        outcome = _make_extractor().extract(b"", canonical_mime, "empty.bin")
        assert outcome.failed is True
        assert outcome.failure_reason == EMPTY_CONTENT_REASON
        assert outcome.text == ""


class TestSupportedTypes:
    def test_pdf(self, sample_pdf_bytes: bytes) -> None:
        outcome = _make_extractor().extract(sample_pdf_bytes, mime.PDF, "a.pdf")
        assert outcome.failed is False
        assert "Hello PDF World" in outcome.text
        assert outcome.failure_reason is None

    def test_word(self, sample_docx_bytes: bytes) -> None:
        outcome = _make_extractor().extract(sample_docx_bytes, mime.WORD, "a.docx")
        assert outcome.failed is False
        assert "Employment Agreement" in outcome.text

    def test_plain_text_is_identity(self) -> None:
        outcome = _make_extractor().extract(b"Employment Agreement", mime.PLAIN_TEXT, "a.txt")
        assert outcome.text == "Employment Agreement"
        assert outcome.warnings == []
        assert outcome.canonical_mime == mime.PLAIN_TEXT

    def test_html(self) -> None:
        outcome = _make_extractor().extract(b"<p>Hello</p>", mime.HTML, "a.html")
        assert outcome.failed is False
        assert outcome.text == "Hello"

    def test_invalid_json_is_a_warning(self) -> None:
        outcome = _make_extractor().extract(b"{oops", mime.JSON, "a.json")
        assert outcome.failed is False
        assert outcome.text.startswith("Raw content:")
        assert len(outcome.warnings) == 1

    def test_records_duration(self) -> None:
        outcome = _make_extractor().extract(b"abc", mime.PLAIN_TEXT, "a.txt")
        assert outcome.duration_ms >= 0.0


class TestUnsupportedTypes:
    def test_returns_placeholder_with_warning(self) -> None:
        outcome = _make_extractor().extract(b"\x89PNG", "image/png", "scan.png")
        assert outcome.failed is False
        assert "image/png documents is not currently supported" in outcome.text
        assert outcome.warnings == ["Unsupported document type: image/png"]

    def test_spreadsheet_is_unsupported(self) -> None:
        outcome = _make_extractor().extract(b"data", mime.SPREADSHEET, "sheet.xlsx")
        assert outcome.failed is False
        assert outcome.warnings == [f"Unsupported document type: {mime.SPREADSHEET}"]


class TestDecodeFailure:
    def test_broken_pdf_fails(self) -> None:
        outcome = _make_extractor().extract(b"not a pdf", mime.PDF, "broken.pdf")
        assert outcome.failed is True
        assert outcome.failure_reason is not None
        assert outcome.failure_reason.startswith("Text extraction failed:")

    def test_extractor_error_is_not_raised(self) -> None:
        extractor = TextExtractor({mime.PDF: _ExplodingExtractor()})
        outcome = extractor.extract(b"%PDF", mime.PDF, "x.pdf")
        assert outcome.failed is True
        assert "corrupt stream" in (outcome.failure_reason or "")


class TestContentLength:
    def test_oversized_text_is_kept_with_warning(self) -> None:
        text = "a" * 50
        outcome = _make_extractor().extract(
            text.encode(), mime.PLAIN_TEXT, "big.txt", ExtractionOptions(max_content_length=10)
        )
        assert outcome.failed is False
        assert outcome.text == text
        assert outcome.warnings == [
            "Extracted text length 50 exceeds maximum content length 10"
        ]

    def test_text_at_limit_has_no_warning(self) -> None:
        outcome = _make_extractor().extract(
            b"a" * 10, mime.PLAIN_TEXT, "ok.txt", ExtractionOptions(max_content_length=10)
        )
        assert outcome.warnings == []


class TestMetadataFooter:
    def test_footer_appended_when_enabled(self) -> None:
        outcome = _make_extractor().extract(
            b"body", mime.PLAIN_TEXT, "a.txt", ExtractionOptions(include_metadata_footer=True)
        )
        assert outcome.text.startswith("body\n\n--- Document Extraction Metadata ---")
        assert "File Type: text/plain" in outcome.text
        assert "Extraction Engine: plain-text" in outcome.text

    def test_no_footer_by_default(self) -> None:
        outcome = _make_extractor().extract(b"body", mime.PLAIN_TEXT, "a.txt")
        assert outcome.text == "body"
