import threading
from abc import ABC, abstractmethod
from pathlib import Path

from app.pipeline.exceptions import ContentUnavailableError


class BaseContentStorage(ABC):
    """Opaque byte store keyed by storage key."""

    @abstractmethod
    def load_bytes(self, storage_key: str) -> bytes:
        """Return the stored bytes.

        Raises:
            ContentUnavailableError: if the content cannot be read.
        """


class LocalContentStorage(BaseContentStorage):
    """Reads document bytes from ``{files_root}/{storage_key}``."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def load_bytes(self, storage_key: str) -> bytes:
        path = self._resolve_path(storage_key)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ContentUnavailableError(f"Cannot read {storage_key}: {exc}") from exc

    def _resolve_path(self, storage_key: str) -> Path:
        root = self._files_root.resolve()
        path = (root / storage_key).resolve()
        if not path.is_relative_to(root):
            raise ContentUnavailableError(f"Storage key escapes files root: {storage_key}")
        return path


class InMemoryContentStorage(BaseContentStorage):
    """Byte store kept in process memory."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def put(self, storage_key: str, content: bytes) -> None:
        with self._lock:
            self._blobs[storage_key] = content

    def load_bytes(self, storage_key: str) -> bytes:
        with self._lock:
            content = self._blobs.get(storage_key)
        if content is None:
            raise ContentUnavailableError(f"No content stored under {storage_key}")
        return content
