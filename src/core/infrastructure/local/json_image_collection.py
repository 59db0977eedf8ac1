"""JSON-file-backed implementation of ImageCollectionRepository."""

import json
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.filesystem_adapter import (
    FileSystemAdapter,
    FileSystemAdapterProtocol,
)
from core.models.errors import CorruptDocumentError, StorageError
from core.models.image import ImageCollection
from core.repositories.collection_repository import ImageCollectionRepository
from core.utils.constants import (
    COLLECTION_KEY,
    ERROR_CODE_DOCUMENT_READ_FAILED,
    ERROR_CODE_DOCUMENT_WRITE_FAILED,
)

logger = Logger(UTC=True)

_registry_lock = threading.Lock()
_document_locks: dict[Path, threading.Lock] = {}


def document_lock(path: Path) -> threading.Lock:
    """Return the process-wide lock guarding the document at ``path``."""
    key = path.resolve()
    with _registry_lock:
        lock = _document_locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _document_locks[key] = lock
        return lock


class JsonImageCollection(ImageCollectionRepository):
    """Image collection persisted as one JSON document.

    Every read-modify-write cycle runs under a lock shared by all instances
    pointing at the same file. Writers in other processes are not serialized.
    """

    def __init__(
        self,
        path: Path,
        adapter: FileSystemAdapterProtocol | None = None,
    ) -> None:
        self._path = path
        self._fs: FileSystemAdapterProtocol = adapter or FileSystemAdapter()
        self._lock = document_lock(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ImageCollection:
        with self._lock:
            return self._read()

    def save(self, collection: ImageCollection) -> None:
        with self._lock:
            self._write(collection)

    @contextmanager
    def transaction(self) -> Iterator[ImageCollection]:
        with self._lock:
            collection = self._read()
            yield collection
            self._write(collection)

    def _read(self) -> ImageCollection:
        try:
            raw = self._fs.read_text(self._path)
        except OSError as exc:
            logger.exception("Failed to read image document", extra={"path": str(self._path)})
            raise StorageError(
                message="Unable to read image data",
                error_code=ERROR_CODE_DOCUMENT_READ_FAILED,
                details={"reason": str(exc)},
            ) from exc

        if raw is None:
            logger.debug("Image document missing, starting empty", extra={"path": str(self._path)})
            return ImageCollection()

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Image document is not valid JSON", extra={"path": str(self._path)})
            raise CorruptDocumentError(
                message="Image data is corrupted",
                details={"reason": str(exc)},
            ) from exc

        if not isinstance(document, dict) or not isinstance(document.get(COLLECTION_KEY), list):
            logger.error("Image document has unexpected shape", extra={"path": str(self._path)})
            raise CorruptDocumentError(
                message="Image data is corrupted",
                details={"reason": f"document must be an object with a '{COLLECTION_KEY}' list"},
            )

        try:
            return ImageCollection.model_validate(document)
        except PydanticValidationError as exc:
            logger.error(
                "Image document failed schema validation",
                extra={"path": str(self._path), "errors": exc.error_count()},
            )
            raise CorruptDocumentError(
                message="Image data is corrupted",
                details={"reason": str(exc)},
            ) from exc

    def _write(self, collection: ImageCollection) -> None:
        content = json.dumps(collection.to_document(), indent=2)

        try:
            self._fs.write_text_atomic(self._path, content)
        except OSError as exc:
            logger.exception("Failed to write image document", extra={"path": str(self._path)})
            raise StorageError(
                message="Unable to save image data",
                error_code=ERROR_CODE_DOCUMENT_WRITE_FAILED,
                details={"reason": str(exc)},
            ) from exc

        logger.debug(
            "Image document written",
            extra={"path": str(self._path), "count": len(collection.property_images)},
        )
