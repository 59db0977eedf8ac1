"""Read-only access to the properties JSON document."""

import json
from pathlib import Path
from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.adapters.filesystem_adapter import (
    FileSystemAdapter,
    FileSystemAdapterProtocol,
)
from core.models.errors import CorruptDocumentError, StorageError
from core.utils.constants import ERROR_CODE_DOCUMENT_READ_FAILED, PROPERTY_ID_KEYS

Property = dict[str, Any]

logger = Logger(UTC=True)


class JsonPropertyStore:
    """Property listings persisted as a JSON array.

    Listings are keyed by their ``"OFFER NO"`` (older documents use ``"id"``).
    Ids are compared as strings because offer numbers are stored as numbers.
    """

    def __init__(
        self,
        path: Path,
        adapter: FileSystemAdapterProtocol | None = None,
    ) -> None:
        self._path = path
        self._fs: FileSystemAdapterProtocol = adapter or FileSystemAdapter()

    def list_properties(self) -> list[Property]:
        try:
            raw = self._fs.read_text(self._path)
        except OSError as exc:
            logger.exception("Failed to read properties document")
            raise StorageError(
                message="Unable to read property data",
                error_code=ERROR_CODE_DOCUMENT_READ_FAILED,
                details={"reason": str(exc)},
            ) from exc

        if raw is None:
            return []

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Properties document is not valid JSON")
            raise CorruptDocumentError(
                message="Property data is corrupted",
                details={"reason": str(exc)},
            ) from exc

        if not isinstance(document, list) or not all(isinstance(p, dict) for p in document):
            raise CorruptDocumentError(
                message="Property data is corrupted",
                details={"reason": "document must be a list of objects"},
            )

        return document

    def get_property(self, property_id: str) -> Property | None:
        for prop in self.list_properties():
            for key in PROPERTY_ID_KEYS:
                if key in prop and str(prop[key]) == property_id:
                    return prop
        return None

    def exists(self, property_id: str) -> bool:
        return self.get_property(property_id) is not None
