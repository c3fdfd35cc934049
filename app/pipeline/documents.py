import threading
from abc import ABC, abstractmethod

from app.pipeline.models import Document


class BaseDocumentsRepository(ABC):
    """Read access to uploaded documents, owned by the surrounding system."""

    @abstractmethod
    def find_by_id(self, document_id: str) -> Document | None:
        """Return the document, or None if it does not exist or was deleted."""

    @abstractmethod
    def is_deleted(self, document_id: str) -> bool:
        """True once the document has been deleted (or never existed)."""


class InMemoryDocumentsRepository(BaseDocumentsRepository):
    """Document registry kept in process memory."""

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}
        self._lock = threading.Lock()

    def add(self, document: Document) -> None:
        with self._lock:
            self._documents[document.id] = document

    def remove(self, document_id: str) -> None:
        with self._lock:
            self._documents.pop(document_id, None)

    def find_by_id(self, document_id: str) -> Document | None:
        with self._lock:
            return self._documents.get(document_id)

    def is_deleted(self, document_id: str) -> bool:
        with self._lock:
            return document_id not in self._documents
