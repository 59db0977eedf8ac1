"""Local-disk implementation of ImageStorageRepository.

Layout under the uploads root::

    temp/                                   staged uploads
    properties/<property_id>/original/      full-resolution files
    properties/<property_id>/thumbnails/    thumb-<filename>
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from aws_lambda_powertools import Logger

from core.infrastructure.adapters.filesystem_adapter import (
    FileSystemAdapter,
    FileSystemAdapterProtocol,
)
from core.infrastructure.local.thumbnails import (
    ThumbnailDeriver,
    get_thumbnail_deriver,
)
from core.models.errors import StorageError, ValidationError
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    ERROR_CODE_THUMBNAIL_FAILED,
    ORIGINAL_DIR_NAME,
    PROPERTIES_DIR_NAME,
    THUMBNAIL_PREFIX,
    THUMBNAILS_DIR_NAME,
)
from core.utils.settings import StoreSettings

logger = Logger(UTC=True)


class LocalImageStorage(ImageStorageRepository):
    """Image files stored in a per-property directory tree."""

    def __init__(
        self,
        settings: StoreSettings,
        adapter: FileSystemAdapterProtocol | None = None,
        thumbnail_deriver: ThumbnailDeriver | None = None,
    ) -> None:
        self._settings = settings
        self._fs: FileSystemAdapterProtocol = adapter or FileSystemAdapter()
        self._derive_thumbnail: ThumbnailDeriver = thumbnail_deriver or get_thumbnail_deriver(
            settings.thumbnail_mode, settings.thumbnail_size
        )

    def ensure_directories(self) -> None:
        for directory in (
            self._settings.uploads_dir,
            self._settings.temp_dir,
            self._settings.properties_upload_dir,
            self._settings.data_dir,
        ):
            try:
                self._fs.make_dirs(directory)
            except OSError as exc:
                logger.exception("Failed to create directory", extra={"path": str(directory)})
                raise StorageError(
                    message="Unable to prepare storage directories",
                    details={"reason": str(exc)},
                ) from exc

    @contextmanager
    def staged_file(self, *, file_data: bytes, suffix: str = "") -> Iterator[Path]:
        try:
            staged = self._fs.write_temp_file(self._settings.temp_dir, file_data, suffix)
        except OSError as exc:
            logger.exception("Failed to stage upload")
            raise StorageError(
                message="Unable to receive uploaded file",
                error_code=ERROR_CODE_IMAGE_UPLOAD_FAILED,
                details={"reason": str(exc)},
            ) from exc

        try:
            yield staged
        finally:
            try:
                if self._fs.remove(staged):
                    logger.debug("Removed staged file", extra={"path": staged.name})
            except OSError:
                logger.warning("Failed to remove staged file", extra={"path": staged.name})

    def store_original(self, *, property_id: str, staged: Path, filename: str) -> str:
        destination = self.original_path(property_id, filename)

        logger.debug(
            "Storing original",
            extra={"property_id": property_id, "file": filename},
        )

        try:
            self._fs.move(staged, destination)
        except OSError as exc:
            logger.exception(
                "Failed to store original",
                extra={"property_id": property_id, "file": filename},
            )
            raise StorageError(
                message="Unable to store uploaded image",
                error_code=ERROR_CODE_IMAGE_UPLOAD_FAILED,
                details={"reason": str(exc)},
            ) from exc

        return self.original_url(property_id, filename)

    def store_thumbnail(self, *, property_id: str, filename: str) -> str:
        source = self.original_path(property_id, filename)
        destination = self.thumbnail_path(property_id, filename)

        try:
            self._fs.make_dirs(destination.parent)
            self._derive_thumbnail(source, destination)
        except ValidationError:
            raise
        except Exception as exc:
            logger.exception(
                "Failed to derive thumbnail",
                extra={"property_id": property_id, "file": filename},
            )
            raise StorageError(
                message="Unable to create thumbnail",
                error_code=ERROR_CODE_THUMBNAIL_FAILED,
                details={"reason": str(exc)},
            ) from exc

        return self.thumbnail_url(property_id, filename)

    def remove_files(self, *, property_id: str, filename: str) -> None:
        # filenames may come from imported documents
        if Path(filename).name != filename or filename in ("", ".", ".."):
            logger.warning(
                "Refusing to delete file outside the property directory",
                extra={"property_id": property_id, "file": filename},
            )
            return

        for path in (
            self.original_path(property_id, filename),
            self.thumbnail_path(property_id, filename),
        ):
            try:
                if not self._fs.remove(path):
                    logger.info(
                        "Image file already absent",
                        extra={"property_id": property_id, "file": path.name},
                    )
            except OSError:
                logger.exception(
                    "Failed to delete image file",
                    extra={"property_id": property_id, "file": path.name},
                )

    def original_path(self, property_id: str, filename: str) -> Path:
        return self._property_dir(property_id) / ORIGINAL_DIR_NAME / filename

    def thumbnail_path(self, property_id: str, filename: str) -> Path:
        return self._property_dir(property_id) / THUMBNAILS_DIR_NAME / f"{THUMBNAIL_PREFIX}{filename}"

    def original_url(self, property_id: str, filename: str) -> str:
        return f"{self._property_url(property_id)}/{ORIGINAL_DIR_NAME}/{filename}"

    def thumbnail_url(self, property_id: str, filename: str) -> str:
        return (
            f"{self._property_url(property_id)}/{THUMBNAILS_DIR_NAME}/"
            f"{THUMBNAIL_PREFIX}{filename}"
        )

    def _property_dir(self, property_id: str) -> Path:
        return self._settings.properties_upload_dir / property_id

    def _property_url(self, property_id: str) -> str:
        return f"{self._settings.uploads_url_prefix}/{PROPERTIES_DIR_NAME}/{property_id}"
