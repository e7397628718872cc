"""In-memory stores package."""

from moneybook.stores.base import ObservableStore
from moneybook.stores.categories import CategoryStore
from moneybook.stores.expenses import ExpenseStore

__all__ = ["CategoryStore", "ExpenseStore", "ObservableStore"]
