"""
Collection storage protocol.
Implementations: JsonFileStorage, MemoryStorage
"""
from __future__ import annotations

from typing import Any, Protocol


Record = dict[str, Any]


class StorageError(Exception):
    """Raised when a collection cannot be read or written."""


class CorruptStorageError(StorageError):
    """Raised when stored content exists but is not a list of records."""


class CollectionStorage(Protocol):
    """
    Protocol for whole-collection storage backends.

    A backend holds exactly one collection. Reads and writes always
    move the full ordered list of records; there are no partial writes.
    """

    @property
    def location(self) -> str:
        """Human-readable location used in log events."""
        ...

    def exists(self) -> bool:
        """Check if the collection has ever been written."""
        ...

    def read(self) -> list[Record]:
        """
        Read the full collection.

        Raises:
            FileNotFoundError: nothing has been written yet
            CorruptStorageError: stored content is not a list of records
        """
        ...

    def write(self, records: list[Record]) -> None:
        """Replace the stored collection with ``records``."""
        ...
