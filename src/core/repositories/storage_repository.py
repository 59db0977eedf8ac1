"""Abstract contract for image file storage."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path


class ImageStorageRepository(ABC):
    """Contract for storing and removing image files.

    Implementations could be local disk, a mounted network share, etc.
    The service depends on this interface, not the implementation.
    """

    @abstractmethod
    def ensure_directories(self) -> None:
        """Create the directory tree the store relies on. Idempotent."""

    @abstractmethod
    def staged_file(
        self, *, file_data: bytes, suffix: str = ""
    ) -> AbstractContextManager[Path]:
        """Write bytes to a temporary file that is removed when the block exits.

        Raises:
            StorageError: If the temporary file cannot be written
        """

    @abstractmethod
    def store_original(self, *, property_id: str, staged: Path, filename: str) -> str:
        """Move a staged upload into the property's original directory.

        Returns:
            Public URL of the stored original

        Raises:
            StorageError: If the file cannot be moved
        """

    @abstractmethod
    def store_thumbnail(self, *, property_id: str, filename: str) -> str:
        """Derive the thumbnail of a stored original.

        Returns:
            Public URL of the thumbnail

        Raises:
            ValidationError: If the original cannot be decoded as an image
            StorageError: If the thumbnail cannot be written
        """

    @abstractmethod
    def remove_files(self, *, property_id: str, filename: str) -> None:
        """Remove the original and thumbnail of an upload.

        Missing files are ignored. Other failures are logged, never raised.
        """
