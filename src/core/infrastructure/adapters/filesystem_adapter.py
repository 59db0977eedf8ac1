"""Thin adapter for interacting with the local filesystem."""

import os
import tempfile
from pathlib import Path
from typing import Protocol


class FileSystemAdapterProtocol(Protocol):
    """Minimal filesystem adapter protocol (repository-facing)."""

    def make_dirs(self, path: Path) -> None: ...

    def read_text(self, path: Path) -> str | None: ...

    def write_text_atomic(self, path: Path, content: str) -> None: ...

    def write_temp_file(self, directory: Path, data: bytes, suffix: str) -> Path: ...

    def move(self, source: Path, destination: Path) -> None: ...

    def remove(self, path: Path) -> bool: ...


class FileSystemAdapter:
    """Low-level filesystem operations (mechanical, no error handling).

    This adapter:
    - Wraps pathlib/os calls
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def read_text(self, path: Path) -> str | None:
        """Return file content, or None when the file does not exist."""
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write_text_atomic(self, path: Path, content: str) -> None:
        """Write to a sibling temporary file then rename it over ``path``.

        Readers see either the old or the new content, never a partial one.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def write_temp_file(self, directory: Path, data: bytes, suffix: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(suffix=suffix, dir=directory)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return Path(tmp_name)

    def move(self, source: Path, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        os.replace(source, destination)

    def remove(self, path: Path) -> bool:
        """Delete a file. Returns False when it was already gone."""
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True
