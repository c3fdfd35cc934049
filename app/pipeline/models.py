from dataclasses import dataclass

from app.analysis.models import DocumentType


@dataclass(frozen=True)
class Document:
    """Uploaded document as seen by the pipeline (subset of DB columns)."""

    id: str
    storage_key: str
    mime_type: str
    document_type: DocumentType | str
    title: str
    file_name: str = ""

    @property
    def display_name(self) -> str:
        return self.title or self.file_name or self.id
