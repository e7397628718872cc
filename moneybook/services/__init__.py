"""Services package."""

from moneybook.services.storage import (
    CorruptDataError,
    ExpenseStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
)

__all__ = [
    # Storage services
    "CorruptDataError",
    "ExpenseStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageError",
]
