from pathlib import Path
from unittest.mock import patch

import pytest

from core.infrastructure.adapters.filesystem_adapter import FileSystemAdapter


class TestFileSystemAdapter:
    def test_read_text_missing_file_returns_none(self, tmp_path: Path) -> None:
        assert FileSystemAdapter().read_text(tmp_path / "missing.json") is None

    def test_write_text_atomic_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "doc.json"

        FileSystemAdapter().write_text_atomic(target, '{"a": 1}')

        assert target.read_text(encoding="utf-8") == '{"a": 1}'
        assert list(target.parent.iterdir()) == [target]

    def test_write_text_atomic_keeps_old_content_on_failure(self, tmp_path: Path) -> None:
        target = tmp_path / "doc.json"
        target.write_text("old", encoding="utf-8")

        with patch("core.infrastructure.adapters.filesystem_adapter.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                FileSystemAdapter().write_text_atomic(target, "new")

        assert target.read_text(encoding="utf-8") == "old"
        assert list(tmp_path.iterdir()) == [target]

    def test_write_temp_file_and_move(self, tmp_path: Path) -> None:
        fs = FileSystemAdapter()
        staged = fs.write_temp_file(tmp_path / "temp", b"data", ".png")

        assert staged.suffix == ".png"
        assert staged.read_bytes() == b"data"

        destination = tmp_path / "a" / "b" / "file.png"
        fs.move(staged, destination)

        assert destination.read_bytes() == b"data"
        assert not staged.exists()

    def test_remove_reports_missing_file(self, tmp_path: Path) -> None:
        fs = FileSystemAdapter()
        path = tmp_path / "file"
        path.write_bytes(b"x")

        assert fs.remove(path) is True
        assert fs.remove(path) is False
