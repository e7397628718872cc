"""
Category Store

Owns the session's categories.

INVARIANTS (held on every mutating path):
1. The default category always exists and is never renamed, recolored
   or removed
2. Names are unique, compared case-insensitively

Rejected mutations are no-ops that return False; nothing here raises for
a duplicate name, an unknown category or the protected default.
"""

from typing import Iterable, Iterator, Optional

from moneybook.models.audit import AuditEventBuilder
from moneybook.models.expense import (
    DEFAULT_CATEGORY_NAME,
    Category,
    same_category,
)
from moneybook.stores.base import ObservableStore
from moneybook.stores.expenses import ExpenseStore


def _is_default_name(name: str) -> bool:
    return name.lower() == DEFAULT_CATEGORY_NAME.lower()


class CategoryStore(ObservableStore):
    """In-memory category collection for one session."""

    def __init__(
        self,
        expense_store: Optional[ExpenseStore] = None,
        categories: Optional[Iterable[Category]] = None,
    ):
        """
        Args:
            expense_store: Store whose references are redirected when a
                           category is removed or edited.
            categories: Initial categories; the default one is added if missing.
        """
        super().__init__()
        self._expense_store = expense_store
        self._categories: list[Category] = [Category.default()]
        if categories is not None:
            self._replace(categories)

    def bind_expenses(self, expense_store: ExpenseStore) -> None:
        self._expense_store = expense_store

    @property
    def categories(self) -> list[Category]:
        """Snapshot of all categories in insertion order."""
        with self._lock:
            return list(self._categories)

    @property
    def default(self) -> Category:
        with self._lock:
            return next(c for c in self._categories if _is_default_name(c.name))

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get_by_name(name) is not None

    def names(self) -> list[str]:
        return [category.name for category in self.categories]

    def get_by_name(self, name: Optional[str]) -> Optional[Category]:
        """Case-insensitive exact lookup; None if absent."""
        if name is None:
            return None
        needle = name.lower()
        with self._lock:
            for category in self._categories:
                if category.name.lower() == needle:
                    return category
        return None

    def sorted_for_display(self) -> list[Category]:
        """Default category first, then by name (case-insensitive)."""
        return sorted(
            self.categories,
            key=lambda c: (not _is_default_name(c.name), c.name.lower()),
        )

    # Mutations -------------------------------------------------------------

    def add(self, category: Category) -> bool:
        """Insert category unless its name is taken."""
        with self._lock:
            if self.get_by_name(category.name) is not None:
                self._logger.debug("category_add_skipped", name=category.name)
                return False
            self._categories.append(category)
        self._publish(AuditEventBuilder.category_added(category.id, category.name))
        return True

    def remove(self, category: Category) -> bool:
        """
        Delete category and move its expenses to the default category.

        The default category itself is never removed.
        """
        if _is_default_name(category.name):
            return False
        with self._lock:
            stored = next((c for c in self._categories if same_category(c, category)), None)
            if stored is None or _is_default_name(stored.name):
                return False
            self._categories.remove(stored)
            default = self.default
        self._publish(AuditEventBuilder.category_removed(stored.id, stored.name))
        if self._expense_store is not None:
            self._expense_store.reassign_category(stored, default)
        return True

    def update(self, old_name: str, new_category: Category) -> bool:
        """
        Apply new_category's name, color and limit to the category called old_name.

        Skipped when old_name is the default category, when no category has
        that name, or when the new name belongs to a different category.
        The edited object keeps its id and stays in place; expense
        references to it are then refreshed.
        """
        if _is_default_name(old_name):
            return False
        with self._lock:
            existing = self.get_by_name(old_name)
            if existing is None:
                return False
            renamed = new_category.name.lower() != old_name.lower()
            if renamed and self.get_by_name(new_category.name) is not None:
                return False
            existing.apply(new_category)
        self._publish(AuditEventBuilder.category_updated(existing.id, old_name, existing.name))
        if self._expense_store is not None:
            self._expense_store.reassign_category(existing, existing)
        return True

    def replace_all(self, categories: Optional[Iterable[Category]]) -> None:
        """Replace every category; the default category is synthesized if missing."""
        with self._lock:
            synthesized = self._replace(categories or [])
            count = len(self._categories)
        self._publish(AuditEventBuilder.categories_replaced(count, synthesized))

    def _replace(self, categories: Iterable[Category]) -> bool:
        self._categories = []
        seen: set[str] = set()
        for category in categories:
            key = category.name.lower()
            if key in seen:
                self._logger.warning("duplicate_category_dropped", name=category.name)
                continue
            seen.add(key)
            self._categories.append(category)

        if DEFAULT_CATEGORY_NAME.lower() not in seen:
            self._categories.append(Category.default())
            return True
        return False
