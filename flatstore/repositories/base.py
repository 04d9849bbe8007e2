"""
Base repository providing CRUD operations on a flat-file record collection.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Mapping

import structlog

from flatstore.core.config import StoreSettings, get_settings
from flatstore.core.interfaces.model import RecordModelProtocol
from flatstore.core.interfaces.storage import CollectionStorage, Record, StorageError
from flatstore.implementations.storage.local import JsonFileStorage
from flatstore.repositories.query import (
    CATEGORY_FIELD,
    UNKNOWN_SORT_MESSAGE,
    check_single_valued,
    filter_records,
    resolve_sort,
    sort_records,
)
from flatstore.repositories.results import (
    NO_SEARCH_RESULTS,
    Err,
    Ok,
    QueryError,
    QueryResult,
    UpdateResult,
)

ExtraDataBinder = Callable[[Record], Record]


class Repository:
    """
    Repository over one collection of records, persisted as a whole.

    The collection is read lazily on first access and cached. Every
    mutation builds a new list, writes it through to storage and only
    then replaces the cache, so memory and storage agree whenever a
    call returns. Not safe for concurrent writers, in-process or not.

    Records handed out are copies; mutating them does not touch the cache.

    Usage:
        repo = Repository(BookmarkModel())

        stored = repo.add({"Name": "Python", "Url": "https://python.org", "Category": "Dev"})
        repo.update({**stored, "Category": "Languages"})

        result = repo.get_all({"sort": "name,desc", "Category": "lang*"})
        if result.is_ok:
            bookmarks = result.value
    """

    def __init__(
        self,
        model: RecordModelProtocol,
        storage: CollectionStorage | None = None,
        settings: StoreSettings | None = None,
        logger: Any | None = None,
    ):
        """
        Initialize repository.

        Args:
            model: Record model (collection name, validity, uniqueness key)
            storage: Storage backend; defaults to ``<data_dir>/<ClassName>s.json``
            settings: Store settings used to build the default backend
            logger: structlog logger; bound with the collection name
        """
        self.model = model
        self.objects_name = f"{model.class_name}s"

        if storage is None:
            settings = settings or get_settings().store
            storage = JsonFileStorage(
                settings.collection_path(self.objects_name),
                encoding=settings.encoding,
                indent=settings.indent,
            )
        self.storage = storage

        self.logger = (logger or structlog.get_logger(__name__)).bind(
            collection=self.objects_name,
        )
        self._records: list[Record] | None = None
        self._bind_extra_data: ExtraDataBinder | None = None

    def set_extra_data_binder(self, binder: ExtraDataBinder | None) -> None:
        """Register a callback enriching every record returned by get/get_all."""
        self._bind_extra_data = binder

    # ==================== Storage ====================

    def _collection(self) -> list[Record]:
        if self._records is None:
            self._records = self._load()
        return self._records

    def _load(self) -> list[Record]:
        if not self.storage.exists():
            self.logger.warning(
                "Collection does not exist, it will be created on demand",
                location=self.storage.location,
            )
            return []

        try:
            records = self.storage.read()
        except (StorageError, OSError) as e:
            self.logger.error(
                "Failed to read collection, continuing with an empty one",
                location=self.storage.location,
                error=str(e),
            )
            return []

        self.logger.debug("Collection loaded", count=len(records))
        return records

    def _commit(self, records: list[Record]) -> bool:
        """Write ``records`` and make them the cached collection."""
        try:
            self.storage.write(records)
        except (StorageError, OSError) as e:
            self.logger.error(
                "Failed to write collection",
                location=self.storage.location,
                error=str(e),
            )
            return False

        self._records = records
        return True

    def invalidate(self) -> None:
        """Drop the cached collection; the next access re-reads storage."""
        self._records = None

    # ==================== Identity ====================

    def next_id(self) -> int:
        """One more than the highest Id in the collection (1 when empty)."""
        return max((record.get("Id", 0) for record in self._collection()), default=0) + 1

    def _is_valid(self, record: Record) -> bool:
        try:
            return bool(self.model.is_valid(record))
        except Exception:
            self.logger.exception("Record validation failed")
            return False

    # ==================== CRUD ====================

    def add(self, record: Record) -> Record | None:
        """
        Store a new record under a fresh Id.

        Returns:
            The stored record; None if invalid or storage failed;
            a copy of the candidate marked ``conflict: True`` if its key is taken.
        """
        if not self._is_valid(record):
            return None

        key = self.model.key
        if key and self.find_by_field(key, record.get(key)) is not None:
            self.logger.info("Add rejected, key already used", key=key)
            return {**record, "conflict": True}

        stored = copy.deepcopy(record)
        stored["Id"] = self.next_id()
        if not self._commit([*self._collection(), stored]):
            return None

        self.logger.info("Record added", id=stored["Id"])
        return copy.deepcopy(stored)

    def update(self, record: Record) -> UpdateResult:
        """Replace the record carrying the same Id (full overwrite, not a merge)."""
        if not self._is_valid(record):
            return UpdateResult.INVALID

        record_id = record.get("Id")
        key = self.model.key
        if key and self.find_by_field(key, record.get(key), excluded_id=record_id) is not None:
            return UpdateResult.CONFLICT

        records = self._collection()
        for index, existing in enumerate(records):
            if existing.get("Id") == record_id:
                updated = list(records)
                updated[index] = copy.deepcopy(record)
                if not self._commit(updated):
                    return UpdateResult.UNAVAILABLE
                self.logger.info("Record updated", id=record_id)
                return UpdateResult.OK

        return UpdateResult.NOT_FOUND

    def remove(self, record_id: int) -> bool:
        """Remove the record with this Id. Returns True if one was removed."""
        records = self._collection()
        for index, existing in enumerate(records):
            if existing.get("Id") == record_id:
                removed = self._commit(records[:index] + records[index + 1:])
                if removed:
                    self.logger.info("Record removed", id=record_id)
                return removed
        return False

    def remove_by_index(self, indices: Iterable[int]) -> int:
        """
        Remove records at the given collection positions, writing once.

        Positions outside the collection are ignored.

        Returns:
            Number of records removed
        """
        positions = set(indices)
        if not positions:
            return 0

        records = self._collection()
        kept = [record for index, record in enumerate(records) if index not in positions]
        removed = len(records) - len(kept)
        if removed == 0 or not self._commit(kept):
            return 0

        self.logger.info("Records removed", count=removed)
        return removed

    def get(self, record_id: int) -> Record | None:
        """Get record by Id."""
        for record in self._collection():
            if record.get("Id") == record_id:
                return self._bound(record)
        return None

    def get_all(self, params: Mapping[str, Any] | None = None) -> QueryResult:
        """
        Get all records, optionally sorted and filtered.

        The query runs in a fixed order: single-value check, sort,
        ``Name`` filter, ``Category`` filter.

        Args:
            params: Query parameters; a list or tuple value means the
                parameter was given more than once

        Returns:
            Ok(records), or Err with a descriptive reason when the query
            is malformed or nothing matched
        """
        records = [self._bound(record) for record in self._collection()]

        if params:
            error = check_single_valued(params)
            if error is not None:
                return error

            sort = params.get("sort")
            if sort:
                resolved = resolve_sort(sort, self.model.name_field)
                if resolved is None:
                    return Err(UNKNOWN_SORT_MESSAGE, QueryError.UNKNOWN_SORT)
                field, descending = resolved
                records = sort_records(records, field, descending)

            name = params.get("Name")
            if name:
                records = filter_records(records, self.model.name_field, name)

            category = params.get("Category")
            if category:
                records = filter_records(records, CATEGORY_FIELD, category)

        if not records:
            return Err(NO_SEARCH_RESULTS, QueryError.NO_RESULTS)
        return Ok(records)

    def find_by_field(
        self,
        field_name: str,
        value: Any,
        excluded_id: int | None = None,
    ) -> Record | None:
        """
        First record whose field equals ``value`` exactly, skipping ``excluded_id``.

        Values of different types never match, so 1, 1.0 and True are distinct keys.
        """
        if not field_name:
            return None
        for record in self._collection():
            stored = record.get(field_name)
            if type(stored) is type(value) and stored == value and (
                excluded_id is None or record.get("Id") != excluded_id
            ):
                return copy.deepcopy(record)
        return None

    def _bound(self, record: Record) -> Record:
        record = copy.deepcopy(record)
        if self._bind_extra_data is not None:
            return self._bind_extra_data(record)
        return record
