"""
Operation results returned by repositories.

Repositories never raise for expected failures. ``update`` returns an
``UpdateResult`` status and ``get_all`` returns a tagged ``Ok``/``Err``
so callers branch on the tag instead of the value shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

NO_SEARCH_RESULTS = "No search results found."


class UpdateResult(IntEnum):
    """Outcome of ``Repository.update``."""
    OK = 0
    CONFLICT = 1
    NOT_FOUND = 2
    INVALID = 3
    UNAVAILABLE = 4  # Storage write failed, nothing changed


class QueryError(str, Enum):
    """Why ``get_all`` produced no list."""
    MULTI_VALUED = "multi_valued"
    UNKNOWN_SORT = "unknown_sort"
    NO_RESULTS = "no_results"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def payload(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    reason: str
    kind: QueryError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_malformed(self) -> bool:
        """True for rejected queries, False for a well-formed query with no matches."""
        return self.kind is not QueryError.NO_RESULTS

    @property
    def payload(self) -> str:
        return self.reason


QueryResult = Union[Ok[list[dict[str, Any]]], Err]
