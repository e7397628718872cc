"""
Storage Services Package

Provides the abstract persistence interface and its implementations.
JSON files are the default backend; the in-memory backend serves tests.
"""

from moneybook.services.storage.interface import (
    CATEGORIES,
    EXPENSES,
    CategoryLookup,
    CorruptDataError,
    ExpenseStorageInterface,
    RecordStorage,
    StorageError,
    relink_categories,
)
from moneybook.services.storage.json_files import JsonFileStorage
from moneybook.services.storage.memory import InMemoryStorage

__all__ = [
    # Interfaces
    "CATEGORIES",
    "EXPENSES",
    "CategoryLookup",
    "ExpenseStorageInterface",
    "RecordStorage",
    "relink_categories",
    # Exceptions
    "CorruptDataError",
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
