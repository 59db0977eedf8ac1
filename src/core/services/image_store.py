"""Business logic for property image management.

``ImageStoreService`` is the only component that touches the image collection
document and the upload tree. Each public method is one operation; every
mutation runs as a single read-modify-write cycle under the document lock,
and any failure outside the domain taxonomy surfaces as ``StorageError``.
"""

import json
import re
import uuid
from pathlib import Path
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.local.json_image_collection import JsonImageCollection
from core.infrastructure.local.json_property_store import JsonPropertyStore
from core.infrastructure.local.local_image_storage import LocalImageStorage
from core.models.errors import (
    FileSizeError,
    ImageServiceError,
    MIMETypeError,
    NotFoundError,
    ValidationError,
)
from core.models.image import ImageCollection, ImageRecord, ImageRecordMetadata
from core.repositories.collection_repository import ImageCollectionRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    ALLOWED_EXTENSIONS,
    ALLOWED_MIME_TYPES,
    COLLECTION_KEY,
    DEFAULT_IMAGE_TYPE,
    ERROR_CODE_IMAGE_NOT_FOUND,
    ERROR_CODE_INVALID_IMPORT,
    ERROR_CODE_INVALID_REORDER,
    ERROR_CODE_PROPERTY_NOT_FOUND,
    IMAGE_ID_PREFIX,
    MAX_BULK_FILES,
    MAX_FILE_SIZE,
    MIME_TYPE_EXTENSION_MAP,
    PROPERTY_ID_MAX_LENGTH,
    PROPERTY_ID_PATTERN,
    URL_SOURCE,
    format_file_size,
    get_max_file_size_mb,
)
from core.utils.decorators import operation_boundary
from core.utils.mime import detect_mime_type
from core.utils.settings import StoreSettings
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)

_PROPERTY_ID_RE = re.compile(PROPERTY_ID_PATTERN)


class UploadedFile(BaseModel):
    """Raw bytes of one uploaded file and the name the client gave it."""

    model_config = ConfigDict(frozen=True)

    file_name: str = Field(..., description="Client-side file name")
    data: bytes = Field(..., description="File content")


class _InspectedUpload(BaseModel):
    upload: UploadedFile
    mime_type: str
    extension: str


class ImageStoreService:
    """Application service responsible for property images.

    This service orchestrates:
    - Input validation (property ids, file size and type)
    - Moving uploads into place and deriving thumbnails
    - Persisting image records in the collection document
    - Optional property existence checks
    """

    def __init__(
        self,
        settings: StoreSettings | None = None,
        *,
        collection: ImageCollectionRepository | None = None,
        storage: ImageStorageRepository | None = None,
        properties: JsonPropertyStore | None = None,
    ) -> None:
        """Initialize the service and bootstrap the storage directories."""
        self.settings = settings or StoreSettings.from_env()
        self.collection = collection or JsonImageCollection(self.settings.images_file)
        self.storage = storage or LocalImageStorage(self.settings)
        self.properties = properties or JsonPropertyStore(self.settings.properties_file)

        self.storage.ensure_directories()

    @staticmethod
    def generate_image_id() -> str:
        """Generate a unique image identifier."""
        return f"{IMAGE_ID_PREFIX}{uuid.uuid4()}"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @operation_boundary("Unable to list images")
    def list_images(self) -> list[ImageRecord]:
        return self.collection.load().property_images

    @operation_boundary("Unable to list property images")
    def list_property_images(self, property_id: str) -> list[ImageRecord]:
        self._check_property_id(property_id)
        return self.collection.load().for_property(property_id)

    @operation_boundary("Unable to export images")
    def export_images(self, property_id: str | None = None) -> dict[str, Any]:
        """Return the collection document, optionally limited to one property."""
        collection = self.collection.load()

        if property_id:
            images = collection.for_property(property_id)
        else:
            images = collection.property_images

        logger.info(
            "Images exported",
            extra={"property_id": property_id, "count": len(images)},
        )
        return {COLLECTION_KEY: [img.to_document() for img in images]}

    @operation_boundary("Unable to list properties")
    def list_properties(self) -> list[dict[str, Any]]:
        return self.properties.list_properties()

    @operation_boundary("Unable to get property")
    def get_property(self, property_id: str) -> dict[str, Any]:
        """Return one property listing.

        Raises:
            NotFoundError: If no listing carries this id
        """
        prop = self.properties.get_property(property_id)
        if prop is None:
            raise NotFoundError(
                message="Property not found",
                error_code=ERROR_CODE_PROPERTY_NOT_FOUND,
                details={"property_id": property_id},
            )
        return prop

    # ------------------------------------------------------------------
    # Single-image mutations
    # ------------------------------------------------------------------

    @operation_boundary("Unable to add image")
    def add_uploaded_image(
        self,
        property_id: str,
        *,
        file_data: bytes | None,
        file_name: str,
        description: str | None = None,
        image_type: str | None = None,
    ) -> ImageRecord:
        """Store an uploaded image, derive its thumbnail and append its record.

        The flow is:
        1. Validate the property and the file (size, MIME type)
        2. Stage the bytes in the temp directory
        3. Move the staged file into the property's original directory
        4. Derive the thumbnail from the stored original
        5. Append the record with order = existing count + 1

        If step 5 fails the stored files remain on disk.

        Raises:
            ValidationError: If the file is missing, too large or not an image
            NotFoundError: If property validation is enabled and it is unknown
            StorageError: If files or the document cannot be written
        """
        self._check_property_id(property_id)
        if not file_data:
            raise ValidationError(message="No image file uploaded")
        self._check_property_exists(property_id)

        inspected = self._inspect_upload(UploadedFile(file_name=file_name, data=file_data))

        with self.collection.transaction() as collection:
            image_id = self.generate_image_id()
            record = self._store_upload(
                property_id,
                image_id=image_id,
                inspected=inspected,
                description=description,
                image_type=image_type,
                order=len(collection.for_property(property_id)) + 1,
            )
            collection.property_images.append(record)

        logger.info(
            "Image uploaded",
            extra={"property_id": property_id, "image_id": record.id, "order": record.order},
        )
        return record

    @operation_boundary("Unable to add image URL")
    def add_image_url(
        self,
        property_id: str,
        *,
        url: str | None,
        description: str | None = None,
        image_type: str | None = None,
    ) -> ImageRecord:
        """Append a record that references an external image.

        Raises:
            ValidationError: If the URL is missing
            NotFoundError: If property validation is enabled and it is unknown
        """
        self._check_property_id(property_id)
        if not url or not url.strip():
            raise ValidationError(message="Image URL is required")
        self._check_property_exists(property_id)

        url = url.strip()

        with self.collection.transaction() as collection:
            record = ImageRecord(
                id=self.generate_image_id(),
                property_id=property_id,
                url=url,
                thumbnail_url=url,
                description=description or "",
                type=image_type or DEFAULT_IMAGE_TYPE,
                order=len(collection.for_property(property_id)) + 1,
                timestamp=utc_now_iso(),
                metadata=ImageRecordMetadata(source=URL_SOURCE),
            )
            collection.property_images.append(record)

        logger.info(
            "Image URL added",
            extra={"property_id": property_id, "image_id": record.id},
        )
        return record

    @operation_boundary("Unable to update image")
    def update_image(
        self,
        property_id: str,
        image_id: str,
        *,
        description: str | None = None,
        order: int | None = None,
        image_type: str | None = None,
    ) -> ImageRecord:
        """Overwrite the provided fields and refresh the timestamp.

        Raises:
            NotFoundError: If no record matches both ids
        """
        self._check_property_id(property_id)

        with self.collection.transaction() as collection:
            record = self._find_or_raise(collection, property_id, image_id)

            if description is not None:
                record.description = description
            if order is not None:
                record.order = order
            if image_type is not None:
                record.type = image_type
            record.timestamp = utc_now_iso()

        logger.info(
            "Image updated",
            extra={"property_id": property_id, "image_id": image_id},
        )
        return record

    @operation_boundary("Unable to delete image")
    def delete_image(self, property_id: str, image_id: str) -> ImageRecord:
        """Remove the record and, for uploads, its original and thumbnail.

        File removal is best-effort and never fails the operation.

        Raises:
            NotFoundError: If no record matches both ids
        """
        self._check_property_id(property_id)

        with self.collection.transaction() as collection:
            record = self._find_or_raise(collection, property_id, image_id)
            collection.property_images.remove(record)

        filename = record.stored_filename
        if filename:
            self.storage.remove_files(property_id=property_id, filename=filename)

        logger.info(
            "Image deleted",
            extra={"property_id": property_id, "image_id": image_id},
        )
        return record

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    @operation_boundary("Unable to bulk upload images")
    def bulk_upload(
        self,
        property_id: str,
        *,
        uploads: list[UploadedFile],
        descriptions: list[str | None] | None = None,
        image_types: list[str | None] | None = None,
    ) -> list[ImageRecord]:
        """Store several uploads and append all records with one document write.

        Every file is validated before any is stored. Orders continue from the
        property's current maximum. A storage failure partway through leaves
        the files of earlier items on disk and the document unchanged.

        Raises:
            ValidationError: If no files, too many files, or an invalid file
        """
        self._check_property_id(property_id)
        if not uploads:
            raise ValidationError(message="No image files uploaded")
        if len(uploads) > MAX_BULK_FILES:
            raise ValidationError(
                message=f"Too many files. Maximum {MAX_BULK_FILES} images per request",
                details={"count": len(uploads)},
            )
        self._check_property_exists(property_id)

        inspected = [self._inspect_upload(upload) for upload in uploads]
        descriptions = descriptions or []
        image_types = image_types or []

        with self.collection.transaction() as collection:
            current_max = max(
                (img.order for img in collection.for_property(property_id)),
                default=0,
            )

            records: list[ImageRecord] = []
            for index, item in enumerate(inspected):
                records.append(
                    self._store_upload(
                        property_id,
                        image_id=self.generate_image_id(),
                        inspected=item,
                        description=_positional(descriptions, index),
                        image_type=_positional(image_types, index),
                        order=current_max + index + 1,
                    )
                )

            collection.property_images.extend(records)

        logger.info(
            "Bulk upload completed",
            extra={"property_id": property_id, "count": len(records)},
        )
        return records

    @operation_boundary("Unable to import images")
    def import_images(self, file_data: bytes | None) -> dict[str, int]:
        """Merge records from an uploaded JSON document.

        Incoming records whose ``(id, propertyId)`` pair already exists are
        skipped, never overwritten. The staged upload is always removed.

        Returns:
            ``{"imported": n, "skipped": m}``

        Raises:
            ValidationError: If no file, invalid JSON, or invalid structure
        """
        if not file_data:
            raise ValidationError(message="No JSON file uploaded")

        with self.storage.staged_file(file_data=file_data, suffix=".json") as staged:
            incoming = self._parse_import(staged)

        imported = 0
        skipped = 0

        with self.collection.transaction() as collection:
            seen = {(img.id, img.property_id) for img in collection.property_images}

            for record in incoming:
                key = (record.id, record.property_id)
                if key in seen:
                    skipped += 1
                    continue
                seen.add(key)
                collection.property_images.append(record)
                imported += 1

        logger.info(
            "Images imported",
            extra={"imported": imported, "skipped": skipped},
        )
        return {"imported": imported, "skipped": skipped}

    @operation_boundary("Unable to reorder images")
    def reorder_images(
        self,
        property_id: str,
        *,
        order_map: dict[str, int] | None = None,
        image_ids: list[str] | None = None,
    ) -> list[ImageRecord]:
        """Apply new display positions to a property's images.

        Map form sets ``order`` for each listed id. List form requires every
        image of the property exactly once and assigns positions 1..N.

        Raises:
            ValidationError: If neither or both forms are given, or the list
                does not match the property's images
            NotFoundError: If the property has no matching images
        """
        self._check_property_id(property_id)

        if (order_map is None) == (image_ids is None):
            raise ValidationError(
                message="Provide either orderMap or imageIds",
                error_code=ERROR_CODE_INVALID_REORDER,
            )

        with self.collection.transaction() as collection:
            images = collection.for_property(property_id)

            if order_map is not None:
                updated = [img for img in images if img.id in order_map]
                if not updated:
                    raise NotFoundError(
                        message="No images found for the given property ID",
                        error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                        details={"property_id": property_id},
                    )
                for img in updated:
                    img.order = order_map[img.id]
            elif image_ids is not None:
                updated = self._apply_ordered_ids(property_id, images, image_ids)

        logger.info(
            "Images reordered",
            extra={"property_id": property_id, "count": len(updated)},
        )
        return sorted(images, key=lambda img: img.order)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _store_upload(
        self,
        property_id: str,
        *,
        image_id: str,
        inspected: _InspectedUpload,
        description: str | None,
        image_type: str | None,
        order: int,
    ) -> ImageRecord:
        filename = f"{image_id}.{inspected.extension}"

        with self.storage.staged_file(
            file_data=inspected.upload.data, suffix=f".{inspected.extension}"
        ) as staged:
            url = self.storage.store_original(
                property_id=property_id, staged=staged, filename=filename
            )

        try:
            thumbnail_url = self.storage.store_thumbnail(
                property_id=property_id, filename=filename
            )
        except ImageServiceError:
            logger.warning(
                "Removing original after thumbnail failure",
                extra={"property_id": property_id, "image_id": image_id},
            )
            self.storage.remove_files(property_id=property_id, filename=filename)
            raise

        return ImageRecord(
            id=image_id,
            property_id=property_id,
            url=url,
            thumbnail_url=thumbnail_url,
            description=description or "",
            type=image_type or DEFAULT_IMAGE_TYPE,
            order=order,
            timestamp=utc_now_iso(),
            metadata=ImageRecordMetadata(
                filename=filename,
                original_name=inspected.upload.file_name,
                size=len(inspected.upload.data),
                mimetype=inspected.mime_type,
            ),
        )

    @staticmethod
    def _inspect_upload(upload: UploadedFile) -> _InspectedUpload:
        size = len(upload.data)

        if size == 0:
            raise ValidationError(
                message="Uploaded file is empty",
                details={"file_name": upload.file_name},
            )

        if size > MAX_FILE_SIZE:
            raise FileSizeError(
                message=f"File size exceeds {get_max_file_size_mb()}MB limit",
                details={"file_name": upload.file_name, "size": format_file_size(size)},
            )

        try:
            mime_type = detect_mime_type(upload.data)
        except ValueError as exc:
            raise MIMETypeError(
                message="Only image files are allowed",
                details={"file_name": upload.file_name},
            ) from exc

        if mime_type not in ALLOWED_MIME_TYPES:
            raise MIMETypeError(
                message="Only image files are allowed",
                details={"file_name": upload.file_name, "mime_type": mime_type},
            )

        suffix = Path(upload.file_name).suffix.lower().lstrip(".")
        extension = suffix if suffix in ALLOWED_EXTENSIONS else MIME_TYPE_EXTENSION_MAP[mime_type][0]

        return _InspectedUpload(upload=upload, mime_type=mime_type, extension=extension)

    @staticmethod
    def _parse_import(staged: Path) -> list[ImageRecord]:
        try:
            document = json.loads(staged.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValidationError(
                message="Invalid JSON file",
                error_code=ERROR_CODE_INVALID_IMPORT,
            ) from exc

        if not isinstance(document, dict) or not isinstance(document.get(COLLECTION_KEY), list):
            raise ValidationError(
                message="Invalid JSON structure",
                error_code=ERROR_CODE_INVALID_IMPORT,
                details={"expected": f"object with a '{COLLECTION_KEY}' list"},
            )

        records: list[ImageRecord] = []
        for index, raw in enumerate(document[COLLECTION_KEY]):
            try:
                records.append(ImageRecord.model_validate(raw))
            except PydanticValidationError as exc:
                raise ValidationError(
                    message=f"Invalid image record at position {index}",
                    error_code=ERROR_CODE_INVALID_IMPORT,
                    details={"index": index, "errors": exc.error_count()},
                ) from exc

        return records

    @staticmethod
    def _apply_ordered_ids(
        property_id: str, images: list[ImageRecord], image_ids: list[str]
    ) -> list[ImageRecord]:
        if not images:
            raise NotFoundError(
                message="No images found for the given property ID",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"property_id": property_id},
            )

        if len(image_ids) != len(images):
            raise ValidationError(
                message="Image list length does not match the property's image count",
                error_code=ERROR_CODE_INVALID_REORDER,
                details={"expected": len(images), "received": len(image_ids)},
            )

        by_id = {img.id: img for img in images}
        if len(set(image_ids)) != len(image_ids) or set(image_ids) != set(by_id):
            raise ValidationError(
                message="Image list must contain each image of the property exactly once",
                error_code=ERROR_CODE_INVALID_REORDER,
            )

        for position, image_id in enumerate(image_ids, start=1):
            by_id[image_id].order = position

        return images

    @staticmethod
    def _find_or_raise(
        collection: ImageCollection, property_id: str, image_id: str
    ) -> ImageRecord:
        record = collection.find(property_id, image_id)
        if record is None:
            logger.warning(
                "Image not found",
                extra={"property_id": property_id, "image_id": image_id},
            )
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"property_id": property_id, "image_id": image_id},
            )
        return record

    @staticmethod
    def _check_property_id(property_id: str) -> None:
        if (
            not property_id
            or len(property_id) > PROPERTY_ID_MAX_LENGTH
            or not _PROPERTY_ID_RE.fullmatch(property_id)
        ):
            raise ValidationError(
                message="Invalid property ID",
                details={"property_id": property_id},
            )

    def _check_property_exists(self, property_id: str) -> None:
        if not self.settings.validate_property_ids:
            return

        if not self.properties.exists(property_id):
            raise NotFoundError(
                message="Property not found",
                error_code=ERROR_CODE_PROPERTY_NOT_FOUND,
                details={"property_id": property_id},
            )


def _positional(values: list[str | None], index: int) -> str | None:
    """Value at ``index`` or None when the list is shorter."""
    if index < len(values):
        return values[index]
    return None
