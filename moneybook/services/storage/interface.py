"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for persistence.
This allows us to:
1. Swap the JSON files for another backend later
2. Use in-memory storage for testing
3. Keep the stores decoupled from any storage detail

RecordStorage implements the shared rules once (empty saves are skipped,
missing stores load as empty, expense categories are re-linked by name);
backends only move raw JSON-ready records.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from moneybook.models.audit import AuditEvent, AuditEventBuilder, EventListener
from moneybook.models.expense import Category, Expense


CATEGORIES = "categories"
EXPENSES = "expenses"

# Resolves a category name to a live category, or None.
CategoryLookup = Callable[[str], Optional[Category]]

_categories_adapter = TypeAdapter(list[Category])
_expenses_adapter = TypeAdapter(list[Expense])


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """A store exists but its content cannot be decoded."""
    pass


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for category and expense persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def save_categories(self, categories: Optional[list[Category]]) -> bool:
        """
        Persist the category list.

        Returns:
            True if written, False if the list was empty (nothing is
            overwritten in that case)

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def save_expenses(self, expenses: Optional[list[Expense]]) -> bool:
        """Persist the expense list. Same contract as save_categories."""
        pass

    @abstractmethod
    def load_categories(self) -> list[Category]:
        """
        Load the category list.

        Returns:
            The stored categories, or [] if the store is missing or empty

        Raises:
            CorruptDataError: If the store cannot be decoded
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    def load_expenses(self, category_lookup: CategoryLookup) -> list[Expense]:
        """
        Load the expense list.

        Each expense's category is re-resolved by name through
        category_lookup; an unknown name leaves the expense uncategorized.
        """
        pass


def relink_categories(expenses: list[Expense], category_lookup: CategoryLookup) -> None:
    """Point each expense at the live category of the same name (or None)."""
    for expense in expenses:
        if expense.category is not None:
            expense.category = category_lookup(expense.category.name)


class RecordStorage(ExpenseStorageInterface):
    """
    Storage that reads and writes lists of JSON-ready records.

    Subclasses provide _write_records, _read_records and _location.
    """

    def __init__(self, listener: Optional[EventListener] = None):
        self._listener = listener
        self._logger = structlog.get_logger(type(self).__name__)

    # Backend hooks ---------------------------------------------------------

    @abstractmethod
    def _write_records(self, resource: str, records: list[dict[str, Any]]) -> None:
        pass

    @abstractmethod
    def _read_records(self, resource: str) -> Optional[list[Any]]:
        """Return the stored records, or None if the store is missing or empty."""
        pass

    @abstractmethod
    def _location(self, resource: str) -> str:
        pass

    # Interface -------------------------------------------------------------

    def save_categories(self, categories: Optional[list[Category]]) -> bool:
        return self._save(CATEGORIES, categories, _categories_adapter)

    def save_expenses(self, expenses: Optional[list[Expense]]) -> bool:
        return self._save(EXPENSES, expenses, _expenses_adapter)

    def load_categories(self) -> list[Category]:
        return self._load(CATEGORIES, _categories_adapter)

    def load_expenses(self, category_lookup: CategoryLookup) -> list[Expense]:
        expenses = self._load(EXPENSES, _expenses_adapter)
        relink_categories(expenses, category_lookup)
        return expenses

    # Helpers ---------------------------------------------------------------

    def _save(self, resource: str, items: Optional[list], adapter: TypeAdapter) -> bool:
        if not items:
            self._logger.warning("save_skipped", resource=resource)
            self._emit(AuditEventBuilder.save_skipped(resource))
            return False

        records = adapter.dump_python(list(items), mode="json")
        # Fields assigned after construction bypass validation; recheck before writing.
        try:
            adapter.validate_python(records)
        except ValidationError as e:
            raise StorageError(f"Refusing to save invalid {resource}: {e}") from e
        self._write_records(resource, records)
        self._emit(AuditEventBuilder.store_saved(resource, len(records), self._location(resource)))
        return True

    def _load(self, resource: str, adapter: TypeAdapter) -> list:
        location = self._location(resource)
        records = self._read_records(resource)
        if records is None:
            self._logger.warning("load_empty", resource=resource, location=location)
            self._emit(AuditEventBuilder.load_empty(resource, location))
            return []

        if not isinstance(records, list):
            raise CorruptDataError(f"Expected a list of {resource} in {location}")
        try:
            items = adapter.validate_python(records)
        except ValidationError as e:
            raise CorruptDataError(f"Invalid {resource} data in {location}: {e}") from e

        self._emit(AuditEventBuilder.store_loaded(resource, len(items), location))
        return items

    def _emit(self, event: AuditEvent) -> None:
        if self._listener is not None:
            self._listener(event)
