"""
Record model protocol.

A model is the per-entity collaborator a repository is built around.
It names the collection, decides whether a record is acceptable and
optionally declares a field whose value must be unique.
"""
from __future__ import annotations

from typing import Any, Protocol


class RecordModelProtocol(Protocol):
    """
    Protocol for record models.

    Attributes:
        class_name: Entity type name; the collection is named ``class_name + "s"``
        key: Uniqueness-key field name, or None when records need not be unique
        name_field: Field matched by ``name``/``title`` sorts and the ``Name`` filter
    """

    class_name: str
    key: str | None

    @property
    def name_field(self) -> str:
        ...

    def is_valid(self, record: dict[str, Any]) -> bool:
        """Return True if the record may be stored."""
        ...
