"""Thumbnail derivation strategies.

A deriver takes the path of a stored original and the destination path and
writes the thumbnail. ``copy_thumbnail`` keeps the byte-for-byte behaviour
existing clients rely on; ``resize_thumbnail`` produces a real preview.
"""

import shutil
from collections.abc import Callable
from functools import partial
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from core.models.errors import ValidationError
from core.utils.constants import THUMBNAIL_MODE_RESIZE

ThumbnailDeriver = Callable[[Path, Path], None]


def copy_thumbnail(source: Path, destination: Path) -> None:
    shutil.copyfile(source, destination)


def resize_thumbnail(source: Path, destination: Path, *, size: tuple[int, int]) -> None:
    """Write a copy of ``source`` scaled down to fit inside ``size``.

    The original format is kept so the thumbnail name keeps a truthful
    extension.
    """
    try:
        with Image.open(source) as img:
            image_format = img.format
            preview = img.copy()
    except UnidentifiedImageError as exc:
        raise ValidationError(
            message="Image file could not be decoded",
            details={"filename": source.name},
        ) from exc

    preview.thumbnail(size)
    if image_format == "JPEG" and preview.mode not in ("RGB", "L"):
        preview = preview.convert("RGB")
    preview.save(destination, image_format)


def get_thumbnail_deriver(mode: str, size: tuple[int, int]) -> ThumbnailDeriver:
    if mode == THUMBNAIL_MODE_RESIZE:
        return partial(resize_thumbnail, size=size)
    return copy_thumbnail
