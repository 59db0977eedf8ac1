"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_INVALID_IMPORT = "INVALID_IMPORT"
ERROR_CODE_INVALID_REORDER = "INVALID_REORDER"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"
ERROR_CODE_PROPERTY_NOT_FOUND = "PROPERTY_NOT_FOUND"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_THUMBNAIL_FAILED = "THUMBNAIL_FAILED"
ERROR_CODE_DOCUMENT_READ_FAILED = "DOCUMENT_READ_FAILED"
ERROR_CODE_DOCUMENT_WRITE_FAILED = "DOCUMENT_WRITE_FAILED"
ERROR_CODE_DOCUMENT_INVALID_FORMAT = "DOCUMENT_INVALID_FORMAT"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB in bytes
MAX_BULK_FILES = 20


MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
}

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset(
    ext for extensions in MIME_TYPE_EXTENSION_MAP.values() for ext in extensions
)


# ============================================================================
# Image Record Constraints
# ============================================================================

PROPERTY_ID_PATTERN = r"^[A-Za-z0-9_-]+$"
PROPERTY_ID_MAX_LENGTH = 100
IMAGE_ID_PREFIX = "img-"
DEFAULT_IMAGE_TYPE = "exterior"
URL_SOURCE = "url"
THUMBNAIL_PREFIX = "thumb-"
MAX_DESCRIPTION_LENGTH = 1000

# ============================================================================
# Storage Layout
# ============================================================================

COLLECTION_KEY = "property_images"
IMAGES_DOCUMENT_NAME = "property_images.json"
PROPERTIES_DOCUMENT_NAME = "properties.json"
TEMP_DIR_NAME = "temp"
PROPERTIES_DIR_NAME = "properties"
ORIGINAL_DIR_NAME = "original"
THUMBNAILS_DIR_NAME = "thumbnails"
PROPERTY_ID_KEYS: Final[tuple[str, ...]] = ("OFFER NO", "id")

THUMBNAIL_MODE_COPY = "copy"
THUMBNAIL_MODE_RESIZE = "resize"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length,Content-Disposition"
DEFAULT_CONTENT_TYPE = "application/json"
EXPORT_FILENAME = "property_images.json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_IMAGE_DATA_DIR = "IMAGE_DATA_DIR"
ENV_IMAGE_COLLECTION_FILE = "IMAGE_COLLECTION_FILE"
ENV_PROPERTIES_FILE = "PROPERTIES_FILE"
ENV_UPLOADS_DIR = "UPLOADS_DIR"
ENV_UPLOADS_URL_PREFIX = "UPLOADS_URL_PREFIX"
ENV_THUMBNAIL_MODE = "THUMBNAIL_MODE"
ENV_THUMBNAIL_SIZE = "THUMBNAIL_SIZE"
ENV_VALIDATE_PROPERTY_IDS = "VALIDATE_PROPERTY_IDS"

DEFAULT_DATA_DIR = "data"
DEFAULT_UPLOADS_DIR = "uploads"
DEFAULT_UPLOADS_URL_PREFIX = "/uploads"
DEFAULT_THUMBNAIL_SIZE = "320x240"

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted file size string
    """
    size: float = float(size_bytes)

    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0

    return f"{size:.1f} TB"
