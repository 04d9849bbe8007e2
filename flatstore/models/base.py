"""
Base record model classes.

Standard models for flat-file collections:
- RecordModel: field-presence validation, declared name/title field
- SchemaRecordModel: validation delegated to a Pydantic schema
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError


class RecordModel:
    """
    Base class for all record models.

    Subclasses declare the collection name, the fields a record must
    carry and, optionally, a uniqueness key.

    Usage:
        class NoteModel(RecordModel):
            class_name = "Note"
            fields = ("Title", "Category")
            key = "Title"

        repo = Repository(NoteModel())
    """

    class_name: ClassVar[str] = "Record"
    key: ClassVar[str | None] = None

    # Fields every record must carry (Id excluded, it is assigned by the repository)
    fields: ClassVar[tuple[str, ...]] = ()

    @property
    def name_field(self) -> str:
        """Field used by ``name``/``title`` sorts and the ``Name`` filter."""
        return "Title" if "Title" in self.fields else "Name"

    def is_valid(self, record: dict[str, Any]) -> bool:
        """Check that the record is a mapping carrying every declared field."""
        if not isinstance(record, dict):
            return False
        return all(field in record for field in self.fields)


class SchemaRecordModel(RecordModel):
    """
    Record model validated against a Pydantic schema.

    Field names are taken from the schema, so ``name_field`` follows
    whatever the schema declares.

    Usage:
        class BookmarkSchema(BaseModel):
            Name: str
            Url: HttpUrl

        class BookmarkModel(SchemaRecordModel):
            class_name = "Bookmark"
            schema = BookmarkSchema
            key = "Name"
    """

    schema: ClassVar[type[BaseModel]]

    @property
    def fields(self) -> tuple[str, ...]:  # type: ignore[override]
        return tuple(self.schema.model_fields)

    def is_valid(self, record: dict[str, Any]) -> bool:
        if not isinstance(record, dict):
            return False
        try:
            self.schema.model_validate(record)
        except ValidationError:
            return False
        return True
