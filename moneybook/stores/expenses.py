"""
Expense Store

Owns the session's expense records and answers filtered queries.

Filters combine with AND:
- text: location or description contains the search text (case-insensitive)
- categories: the expense's category is one of the selected ones
- period: the expense date lies in the period around the reference date

An empty or missing filter lets everything through. Results keep the
store's insertion order and are always a new list.
"""

from datetime import date
from typing import Iterable, Iterator, Optional
from uuid import UUID

from moneybook.models.audit import AuditEventBuilder
from moneybook.models.expense import Category, Expense, same_category
from moneybook.queries.periods import PeriodKind, period_range
from moneybook.stores.base import ObservableStore


class ExpenseStore(ObservableStore):
    """In-memory expense collection for one session."""

    def __init__(self, expenses: Optional[Iterable[Expense]] = None):
        super().__init__()
        self._expenses: list[Expense] = list(expenses or [])

    @property
    def expenses(self) -> list[Expense]:
        """Snapshot of all expenses in insertion order."""
        with self._lock:
            return list(self._expenses)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(self.expenses)

    def get(self, expense_id: UUID) -> Optional[Expense]:
        with self._lock:
            index = self._index_of(expense_id)
            return self._expenses[index] if index is not None else None

    # Mutations -------------------------------------------------------------

    def add(self, expense: Expense) -> bool:
        """Append expense. No-op (False) if its id is already stored."""
        with self._lock:
            if self._index_of(expense.id) is not None:
                return False
            self._expenses.append(expense)
        self._publish(AuditEventBuilder.expense_added(expense.id, expense.amount))
        return True

    def remove(self, expense: Expense) -> bool:
        with self._lock:
            index = self._index_of(expense.id)
            if index is None:
                return False
            del self._expenses[index]
        self._publish(AuditEventBuilder.expense_removed(expense.id))
        return True

    def update(self, expense: Expense) -> bool:
        """Replace the stored expense with the same id. Never inserts."""
        with self._lock:
            index = self._index_of(expense.id)
            if index is None:
                return False
            self._expenses[index] = expense
        self._publish(AuditEventBuilder.expense_updated(expense.id, expense.amount))
        return True

    def replace_all(self, expenses: Optional[Iterable[Expense]]) -> None:
        with self._lock:
            self._expenses = list(expenses or [])
            count = len(self._expenses)
        self._publish(AuditEventBuilder.expenses_replaced(count))

    def reassign_category(self, old_category: Category, new_category: Optional[Category]) -> int:
        """
        Point every expense in old_category at new_category.

        Also used with old_category is new_category after an in-place
        category edit, to refresh the references.

        Returns:
            Number of expenses touched
        """
        with self._lock:
            touched = 0
            for expense in self._expenses:
                if same_category(expense.category, old_category):
                    expense.category = new_category
                    touched += 1
        new_name = new_category.name if new_category else "no category"
        self._publish(AuditEventBuilder.expenses_reassigned(old_category.name, new_name, touched))
        return touched

    # Queries ---------------------------------------------------------------

    def query(
        self,
        search_text: Optional[str] = None,
        selected_categories: Optional[Iterable[Category]] = None,
        period: Optional[PeriodKind] = None,
        reference_date: Optional[date] = None,
    ) -> list[Expense]:
        """
        Expenses passing every active filter, in insertion order.

        Args:
            search_text: Substring to look for in location or description
            selected_categories: Categories to keep; uncategorized expenses
                                 fail when this is non-empty
            period: Granularity of the date window
            reference_date: Date the window is built around (default today)
        """
        categories = list(selected_categories or [])
        window = None
        if period is not None:
            window = period_range(period, reference_date or date.today())

        return [
            expense for expense in self.expenses
            if self._passes_search(expense, search_text)
            and self._passes_categories(expense, categories)
            and self._passes_period(expense, window)
        ]

    def total(self, expenses: Optional[Iterable[Expense]] = None) -> float:
        """Sum of amounts (of the given expenses, or of the whole store)."""
        items = self.expenses if expenses is None else expenses
        return sum((expense.amount for expense in items), 0.0)

    @staticmethod
    def _passes_search(expense: Expense, search_text: Optional[str]) -> bool:
        if not search_text:
            return True
        return expense.matches_text(search_text)

    @staticmethod
    def _passes_categories(expense: Expense, categories: list[Category]) -> bool:
        if not categories:
            return True
        return any(same_category(expense.category, category) for category in categories)

    @staticmethod
    def _passes_period(expense: Expense, window: Optional[tuple[date, date]]) -> bool:
        if window is None:
            return True
        start, end = window
        return start <= expense.date <= end

    def _index_of(self, expense_id: UUID) -> Optional[int]:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index
        return None
