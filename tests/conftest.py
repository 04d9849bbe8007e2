"""
Pytest fixtures for testing.

Provides:
- Store settings pointing at a temporary data directory
- Record models with and without a uniqueness key
- Factory fixture for repositories seeded with records
"""

import json
import locale
from pathlib import Path
from typing import Any

import pytest
import structlog

from flatstore.core.config import StoreSettings
from flatstore.models.base import RecordModel
from flatstore.repositories.base import Repository


class NoteModel(RecordModel):
    """Titled records, unique by title."""
    class_name = "Note"
    fields = ("Title", "Category")
    key = "Title"


class ItemModel(RecordModel):
    """Named records without a uniqueness key."""
    class_name = "Item"
    fields = ("Name",)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo structlog configuration done by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def restore_collation():
    """Undo collation locale changes done by a test or by create_app."""
    previous = locale.setlocale(locale.LC_COLLATE)
    yield
    locale.setlocale(locale.LC_COLLATE, previous)


@pytest.fixture
def store_settings(tmp_path: Path) -> StoreSettings:
    """Store settings writing into a per-test directory."""
    return StoreSettings(data_dir=str(tmp_path / "data"))


@pytest.fixture
def note_model() -> NoteModel:
    return NoteModel()


@pytest.fixture
def item_model() -> ItemModel:
    return ItemModel()


# ============ Factory Fixtures ============


class RepositoryFactory:
    """Factory for repositories backed by JSON files."""

    def __init__(self, settings: StoreSettings):
        self.settings = settings

    def path_for(self, model: RecordModel) -> Path:
        return self.settings.collection_path(f"{model.class_name}s")

    def seed(self, model: RecordModel, records: list[dict[str, Any]]) -> Path:
        """Write records straight to the model's collection file."""
        path = self.path_for(model)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    def create(
        self,
        model: RecordModel,
        records: list[dict[str, Any]] | None = None,
    ) -> Repository:
        """Create a repository, optionally seeding its file first."""
        if records is not None:
            self.seed(model, records)
        return Repository(model, settings=self.settings)

    def reload(self, repository: Repository) -> list[dict[str, Any]]:
        """Read the collection back from disk, bypassing the cache."""
        return json.loads(self.path_for(repository.model).read_text(encoding="utf-8"))


@pytest.fixture
def repo_factory(store_settings: StoreSettings) -> RepositoryFactory:
    """Fixture that provides RepositoryFactory."""
    return RepositoryFactory(store_settings)


@pytest.fixture
def items_repo(repo_factory: RepositoryFactory, item_model: ItemModel) -> Repository:
    """Two unkeyed items, as in the basic query scenario."""
    return repo_factory.create(
        item_model,
        [
            {"Id": 1, "Name": "Zeta", "Category": "x"},
            {"Id": 2, "Name": "Alpha", "Category": "y"},
        ],
    )


@pytest.fixture
def notes_repo(repo_factory: RepositoryFactory, note_model: NoteModel) -> Repository:
    """Titled notes unique by title."""
    return repo_factory.create(
        note_model,
        [
            {"Id": 1, "Title": "Groceries", "Category": "home"},
            {"Id": 2, "Title": "Budget", "Category": "finance"},
            {"Id": 3, "Title": "Garden", "Category": "home"},
        ],
    )
