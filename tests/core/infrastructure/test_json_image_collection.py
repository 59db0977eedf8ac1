import json
import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from core.infrastructure.adapters.filesystem_adapter import FileSystemAdapter
from core.infrastructure.local.json_image_collection import JsonImageCollection, document_lock
from core.models.errors import CorruptDocumentError, StorageError
from core.models.image import ImageCollection, ImageRecord


class TestJsonImageCollection:
    def test_missing_document_is_empty(self, tmp_path: Path) -> None:
        collection = JsonImageCollection(tmp_path / "images.json").load()

        assert collection.property_images == []

    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "images.json"
        repo = JsonImageCollection(path)

        repo.save(
            ImageCollection(
                property_images=[ImageRecord(id="img-1", property_id="P1", url="/u/1.jpg", order=1)]
            )
        )

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["property_images"][0]["propertyId"] == "P1"
        assert repo.load().property_images[0].id == "img-1"

    def test_transaction_does_not_write_on_error(self, tmp_path: Path, sample_record) -> None:
        path = tmp_path / "images.json"
        path.write_text(json.dumps({"property_images": [sample_record("img-1")]}), encoding="utf-8")
        before = path.read_text(encoding="utf-8")

        with pytest.raises(RuntimeError):
            with JsonImageCollection(path).transaction() as collection:
                collection.property_images.clear()
                raise RuntimeError("abort")

        assert path.read_text(encoding="utf-8") == before

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[]",
            '{"images": []}',
            '{"property_images": {}}',
            '{"property_images": [{"id": "img-1"}]}',
        ],
    )
    def test_malformed_document_raises_and_is_left_untouched(
        self, tmp_path: Path, content: str
    ) -> None:
        path = tmp_path / "images.json"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(CorruptDocumentError):
            JsonImageCollection(path).load()

        assert path.read_text(encoding="utf-8") == content

    def test_read_failure_becomes_storage_error(self, tmp_path: Path) -> None:
        adapter = MagicMock(spec=FileSystemAdapter)
        adapter.read_text.side_effect = PermissionError("denied")

        with pytest.raises(StorageError) as exc_info:
            JsonImageCollection(tmp_path / "images.json", adapter=adapter).load()

        assert exc_info.value.error_code == "DOCUMENT_READ_FAILED"

    def test_write_failure_becomes_storage_error(self, tmp_path: Path) -> None:
        adapter = MagicMock(spec=FileSystemAdapter)
        adapter.read_text.return_value = None
        adapter.write_text_atomic.side_effect = OSError("disk full")

        repo = JsonImageCollection(tmp_path / "images.json", adapter=adapter)

        with pytest.raises(StorageError) as exc_info:
            with repo.transaction():
                pass

        assert exc_info.value.error_code == "DOCUMENT_WRITE_FAILED"

    def test_lock_is_shared_per_resolved_path(self, tmp_path: Path) -> None:
        first = document_lock(tmp_path / "images.json")
        second = document_lock(tmp_path / "sub" / ".." / "images.json")

        assert first is second
        assert document_lock(tmp_path / "other.json") is not first

    def test_concurrent_transactions_do_not_lose_updates(self, tmp_path: Path) -> None:
        path = tmp_path / "images.json"

        def add(index: int) -> None:
            with JsonImageCollection(path).transaction() as collection:
                collection.property_images.append(
                    ImageRecord(id=f"img-{index}", property_id="P1", url=f"/u/{index}.jpg")
                )

        threads = [threading.Thread(target=add, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = {img.id for img in JsonImageCollection(path).load().property_images}
        assert ids == {f"img-{i}" for i in range(20)}
