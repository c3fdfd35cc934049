from app.config.settings import Settings
from app.extraction import mime
from app.extraction.base import BaseFormatExtractor
from app.extraction.markup import HtmlExtractor, JsonExtractor, PlainTextExtractor
from app.extraction.models import ExtractionOptions
from app.extraction.pdf import PdfPlumberExtractor, PyMuPdfExtractor
from app.extraction.text_extractor import TextExtractor
from app.extraction.word import DocxExtractor


class TextExtractorFactory:
    """Creates a TextExtractor with the configured PDF engine."""

    PDF_ENGINES: dict[str, type[BaseFormatExtractor]] = {
        "pdfplumber": PdfPlumberExtractor,
        "pymupdf": PyMuPdfExtractor,
    }

    @classmethod
    def create(cls, settings: Settings) -> TextExtractor:
        return TextExtractor(
            {
                mime.PDF: cls.create_pdf_extractor(settings),
                mime.WORD: DocxExtractor(),
                mime.HTML: HtmlExtractor(),
                mime.JSON: JsonExtractor(),
                mime.PLAIN_TEXT: PlainTextExtractor(),
            }
        )

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BaseFormatExtractor:
        engine = settings.pdf_engine.lower()
        extractor_cls = cls.PDF_ENGINES.get(engine)
        if extractor_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ENGINES)}"
            )
        return extractor_cls()

    @staticmethod
    def options(settings: Settings) -> ExtractionOptions:
        return ExtractionOptions(
            max_content_length=settings.extraction_max_content_length,
            include_metadata_footer=settings.extraction_include_metadata_footer,
        )
