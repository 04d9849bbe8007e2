"""
Collection storage backends.
"""

from .local import JsonFileStorage
from .memory import MemoryStorage

__all__ = ["JsonFileStorage", "MemoryStorage"]
