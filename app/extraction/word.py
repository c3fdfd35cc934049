import io

from docx import Document as DocxDocument

from app.extraction.base import BaseFormatExtractor
from app.extraction.exceptions import ExtractionError
from app.extraction.models import FormatExtraction


class DocxExtractor(BaseFormatExtractor):
    """Extracts paragraphs and table rows from Word (.docx) files."""

    engine_name = "python-docx"

    def extract(self, content: bytes) -> FormatExtraction:
        try:
            doc = DocxDocument(io.BytesIO(content))
        except Exception as exc:
            raise ExtractionError(f"python-docx could not read document: {exc}") from exc

        lines = [p.text for p in doc.paragraphs if p.text.strip()]
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))

        text = "\n".join(lines)
        if not text:
            return FormatExtraction(text="", warnings=["Word document contains no text"])
        return FormatExtraction(text=text)
