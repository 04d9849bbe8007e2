"""
Local filesystem storage backend implementation.
"""

from __future__ import annotations

import os
import json
import tempfile
from pathlib import Path

from flatstore.core.interfaces.storage import CorruptStorageError, Record, StorageError


class JsonFileStorage:
    """
    JSON file storage backend.

    Stores one collection as a JSON array of objects in a single file.
    The file and its parent directory are created on the first write.
    Every write replaces the whole file through a temporary sibling, so
    readers never observe a half-written collection.

    Usage:
        storage = JsonFileStorage("./data/Bookmarks.json")

        if storage.exists():
            records = storage.read()

        records.append({"Id": 1, "Name": "Python"})
        storage.write(records)
    """

    def __init__(
        self,
        path: str | Path,
        encoding: str = "utf-8",
        indent: int | None = None,
    ):
        """
        Initialize JSON file storage.

        Args:
            path: File holding the collection
            encoding: Text encoding of the file
            indent: JSON indentation (None writes a compact single line)
        """
        self.path = Path(path)
        self.encoding = encoding
        self.indent = indent

    @property
    def location(self) -> str:
        return str(self.path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> list[Record]:
        """Read the full collection."""
        try:
            raw = self.path.read_text(encoding=self.encoding)
        except UnicodeDecodeError as e:
            raise CorruptStorageError(f"Cannot decode {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStorageError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise CorruptStorageError(f"{self.path} does not contain a list of records")

        return data

    def write(self, records: list[Record]) -> None:
        """Replace the file contents with ``records``."""
        try:
            payload = json.dumps(records, indent=self.indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Records for {self.path} are not JSON serializable: {e}") from e

        # Create parent directories
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding=self.encoding) as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
