"""Abstract contract for image collection persistence."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from core.models.image import ImageCollection


class ImageCollectionRepository(ABC):
    """Contract for loading and saving the image collection document.

    Implementations could be a JSON file, a key-value store, etc.
    The service depends on this interface, not the implementation.
    """

    @abstractmethod
    def load(self) -> ImageCollection:
        """Read the current collection.

        Returns:
            The collection, empty if nothing has been persisted yet

        Raises:
            CorruptDocumentError: If the persisted document is malformed
            StorageError: If the document cannot be read
        """

    @abstractmethod
    def save(self, collection: ImageCollection) -> None:
        """Replace the persisted collection.

        Raises:
            StorageError: If the document cannot be written
        """

    @abstractmethod
    def transaction(self) -> AbstractContextManager[ImageCollection]:
        """Hold exclusive access for a read-modify-write cycle.

        The yielded collection is persisted when the block exits normally
        and discarded when it raises.
        """

