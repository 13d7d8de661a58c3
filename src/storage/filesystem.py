"""Local filesystem resources.

This module is the default fallback for locations that do not use the
storage marker. Relative paths resolve against the configured local root.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO

from core.constants import FILE_PROTOCOL_PREFIX, WILDCARD_CHARACTERS
from core.errors import SiftResourceNotFoundError


class FileSystemResource:
    """Resource backed by a local file path."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    @property
    def description(self) -> str:
        return f"File resource [{self._path}]"

    def exists(self) -> bool:
        return self._path.exists()

    def size(self) -> int:
        return self._required_stat().st_size

    def last_modified(self) -> datetime:
        return datetime.fromtimestamp(self._required_stat().st_mtime, tz=timezone.utc)

    def self_reference(self) -> str:
        self._required_stat()
        return self._path.resolve().as_uri()

    def open_for_read(self) -> BinaryIO:
        """Open the file for binary reading.

        Raises:
            SiftResourceNotFoundError: If the file does not exist.
        """
        try:
            return self._path.open("rb")
        except FileNotFoundError as error:
            raise SiftResourceNotFoundError(
                f"File {self._path} not found. Provide an existing file path."
            ) from error

    def open_for_write(self) -> BinaryIO:
        """Open the file for binary writing, creating parent directories."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        return self._path.open("wb")

    def delete(self) -> bool:
        if not self._path.is_file():
            return False
        self._path.unlink()
        return True

    def relative(self, relative_path: str) -> "FileSystemResource":
        return FileSystemResource(self._path / relative_path)

    def _required_stat(self):
        try:
            return self._path.stat()
        except FileNotFoundError as error:
            raise SiftResourceNotFoundError(
                f"File {self._path} not found. Provide an existing file path."
            ) from error

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileSystemResource):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __repr__(self) -> str:
        return f"FileSystemResource({str(self._path)!r})"


class FileSystemResourceLoader:
    """Loader and glob resolver for local paths."""

    def __init__(self, root: Path) -> None:
        """Create loader.

        Args:
            root: Directory that relative locations resolve against.
        """
        self._root = root

    def get_resource(self, location: str) -> FileSystemResource:
        """Map a path or ``file:`` location onto a file resource."""
        return FileSystemResource(self._resolve_path(location))

    def get_resources(self, location_pattern: str) -> tuple[FileSystemResource, ...]:
        """Expand a local glob pattern.

        Args:
            location_pattern: Path or glob, absolute or relative to the root.

        Returns:
            Matching paths sorted by name; a literal path yields itself when
            it exists.
        """
        path = self._resolve_path(location_pattern)
        if not any(char in str(path) for char in WILDCARD_CHARACTERS):
            return (FileSystemResource(path),) if path.exists() else ()
        anchor = Path(path.anchor)
        matches = sorted(anchor.glob(str(path.relative_to(anchor))))
        return tuple(FileSystemResource(match) for match in matches)

    def _resolve_path(self, location: str) -> Path:
        raw_path = location.removeprefix(FILE_PROTOCOL_PREFIX)
        if raw_path.startswith("//"):
            raw_path = raw_path[2:]
        path = Path(raw_path).expanduser()
        if path.is_absolute():
            return path
        return self._root / path
