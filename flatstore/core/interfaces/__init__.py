"""
Core interfaces (protocols) for extensibility.
Storage backends and record models must implement these protocols to be swappable.
"""

from .storage import CollectionStorage, CorruptStorageError, Record, StorageError
from .model import RecordModelProtocol

__all__ = [
    "CollectionStorage",
    "CorruptStorageError",
    "Record",
    "StorageError",
    "RecordModelProtocol",
]
