"""
Repository pattern for data access.
"""

from flatstore.repositories.base import Repository
from flatstore.repositories.results import (
    NO_SEARCH_RESULTS,
    Err,
    Ok,
    QueryError,
    QueryResult,
    UpdateResult,
)

__all__ = [
    "Repository",
    "NO_SEARCH_RESULTS",
    "Err",
    "Ok",
    "QueryError",
    "QueryResult",
    "UpdateResult",
]
