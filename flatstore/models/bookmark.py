"""
Bookmark model.
"""

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from flatstore.models.base import SchemaRecordModel


class BookmarkSchema(BaseModel):
    """Shape of a stored bookmark."""
    model_config = ConfigDict(extra="allow")

    Id: int | None = Field(None, ge=1)
    Name: str = Field(min_length=1, max_length=255)
    Url: HttpUrl
    Category: str = Field(min_length=1, max_length=100)


class BookmarkModel(SchemaRecordModel):
    """Bookmarks are unique by name."""

    class_name = "Bookmark"
    schema = BookmarkSchema
    key = "Name"
