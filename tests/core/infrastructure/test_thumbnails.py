from functools import partial
from pathlib import Path

import pytest
from PIL import Image

from core.infrastructure.local.thumbnails import (
    copy_thumbnail,
    get_thumbnail_deriver,
    resize_thumbnail,
)
from core.models.errors import ValidationError


def write(path: Path, data: bytes) -> Path:
    path.write_bytes(data)
    return path


class TestCopyThumbnail:
    def test_copies_bytes(self, tmp_path: Path) -> None:
        source = write(tmp_path / "a.bin", b"\x89PNG\r\n\x1a\nfake")

        copy_thumbnail(source, tmp_path / "thumb-a.bin")

        assert (tmp_path / "thumb-a.bin").read_bytes() == source.read_bytes()


class TestResizeThumbnail:
    def test_fits_bounding_box_and_keeps_format(self, tmp_path: Path, sample_jpeg_bytes: bytes) -> None:
        source = write(tmp_path / "a.jpg", sample_jpeg_bytes)
        destination = tmp_path / "thumb-a.jpg"

        resize_thumbnail(source, destination, size=(320, 240))

        with Image.open(destination) as thumb:
            assert thumb.format == "JPEG"
            assert thumb.size == (320, 240)

    def test_small_image_is_not_enlarged(self, tmp_path: Path, sample_gif_bytes: bytes) -> None:
        source = write(tmp_path / "a.gif", sample_gif_bytes)
        destination = tmp_path / "thumb-a.gif"

        resize_thumbnail(source, destination, size=(320, 240))

        with Image.open(destination) as thumb:
            assert thumb.format == "GIF"
            assert thumb.size == (10, 10)

    def test_undecodable_image(self, tmp_path: Path) -> None:
        source = write(tmp_path / "a.png", b"plain text, not an image")

        with pytest.raises(ValidationError):
            resize_thumbnail(source, tmp_path / "thumb-a.png", size=(320, 240))


def test_get_thumbnail_deriver() -> None:
    assert get_thumbnail_deriver("copy", (1, 1)) is copy_thumbnail

    deriver = get_thumbnail_deriver("resize", (100, 50))
    assert isinstance(deriver, partial)
    assert deriver.keywords == {"size": (100, 50)}
