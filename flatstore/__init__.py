"""
Flat-file record repositories.
"""

from flatstore.models.base import RecordModel, SchemaRecordModel
from flatstore.repositories import (
    NO_SEARCH_RESULTS,
    Err,
    Ok,
    QueryError,
    QueryResult,
    Repository,
    UpdateResult,
)

__version__ = "0.1.0"

__all__ = [
    "RecordModel",
    "SchemaRecordModel",
    "Repository",
    "NO_SEARCH_RESULTS",
    "Err",
    "Ok",
    "QueryError",
    "QueryResult",
    "UpdateResult",
]
