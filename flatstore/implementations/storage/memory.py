"""
In-memory storage backend for development and testing.
"""

from __future__ import annotations

import copy

from flatstore.core.interfaces.storage import Record


class MemoryStorage:
    """
    In-memory collection storage.

    Note: Not suitable for production. Data is not persisted and not
    shared between processes. Stored records are deep-copied on the way
    in and out, so callers cannot mutate the "durable" copy by accident.

    Usage:
        storage = MemoryStorage()
        storage.write([{"Id": 1, "Name": "Python"}])
        records = storage.read()
    """

    def __init__(self, records: list[Record] | None = None, name: str = "memory"):
        self.name = name
        self._records: list[Record] | None = copy.deepcopy(records) if records is not None else None
        self.write_count = 0

    @property
    def location(self) -> str:
        return f"memory://{self.name}"

    def exists(self) -> bool:
        return self._records is not None

    def read(self) -> list[Record]:
        if self._records is None:
            raise FileNotFoundError(f"Collection not found: {self.location}")
        return copy.deepcopy(self._records)

    def write(self, records: list[Record]) -> None:
        self._records = copy.deepcopy(records)
        self.write_count += 1
