import io

import pdfplumber
import pymupdf

from app.extraction.base import BaseFormatExtractor
from app.extraction.exceptions import ExtractionError
from app.extraction.models import FormatExtraction

_NO_TEXT_WARNING = "PDF contains no extractable text (it may be a scanned image)"


def _pdf_result(pages: list[str]) -> FormatExtraction:
    text = "\n".join(pages).strip()
    if not text:
        return FormatExtraction(text="", warnings=[_NO_TEXT_WARNING])
    return FormatExtraction(text=text)


class PdfPlumberExtractor(BaseFormatExtractor):
    """Extracts text from PDF using pdfplumber."""

    engine_name = "pdfplumber"

    def extract(self, content: bytes) -> FormatExtraction:
        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise ExtractionError(f"pdfplumber could not read PDF: {exc}") from exc
        return _pdf_result(pages)


class PyMuPdfExtractor(BaseFormatExtractor):
    """Extracts text from PDF using PyMuPDF."""

    engine_name = "pymupdf"

    def extract(self, content: bytes) -> FormatExtraction:
        try:
            with pymupdf.open(stream=content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise ExtractionError(f"pymupdf could not read PDF: {exc}") from exc
        return _pdf_result(pages)
