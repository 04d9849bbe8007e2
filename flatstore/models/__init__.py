"""
Record models.
"""

from flatstore.models.base import RecordModel, SchemaRecordModel
from flatstore.models.bookmark import BookmarkModel, BookmarkSchema

__all__ = [
    "RecordModel",
    "SchemaRecordModel",
    "BookmarkModel",
    "BookmarkSchema",
]
