"""
Application Context for Moneybook

This module ties the pieces together for one session:
1. Load (storage → categories → expenses re-linked by category name)
2. Edit (stores mutate, every change is audited)
3. Commit (limit check → user confirmation if over → add or update)
4. Save (both stores written back through the storage gateway)

DESIGN DECISION: There are no process-wide singletons. A front end builds
one AppContext with create_app_context() and passes it around; tests build
their own against InMemoryStorage.
"""

from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Union

import structlog

from moneybook.audit import AuditLogger
from moneybook.limits import LimitEvaluator
from moneybook.models.expense import Category, Expense, LimitCheck
from moneybook.queries.periods import PeriodCursor
from moneybook.services.storage import ExpenseStorageInterface, JsonFileStorage
from moneybook.stores import CategoryStore, ExpenseStore
from moneybook.validation import InputValidator


logger = structlog.get_logger("moneybook.context")


class AppContext:
    """
    Everything one session works with.

    Attributes:
        storage: Gateway the stores are loaded from and saved to
        category_store: The session's categories
        expense_store: The session's expenses
        limit_evaluator: Checks candidate expenses against category limits
        audit_logger: Receives every store, storage and limit event
        cursor: Period currently shown in the list view
        validator: Checks raw form input
        current_expense: Expense being created or edited, if any
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.audit_logger = audit_logger or AuditLogger()
        self.storage = storage
        self.expense_store = ExpenseStore()
        self.category_store = CategoryStore(expense_store=self.expense_store)
        self.limit_evaluator = LimitEvaluator(listener=self.audit_logger)
        self.cursor = PeriodCursor()
        self.validator = InputValidator()
        self.current_expense: Optional[Expense] = None

        self.category_store.subscribe(self.audit_logger)
        self.expense_store.subscribe(self.audit_logger)

    # Lifecycle -------------------------------------------------------------

    def load(self) -> None:
        """
        Replace both stores with what the storage holds.

        Categories are loaded first so expenses can be re-linked to the
        live Category objects by name.

        Raises:
            CorruptDataError: If a stored collection cannot be decoded
        """
        self.category_store.replace_all(self.storage.load_categories())
        self.expense_store.replace_all(
            self.storage.load_expenses(self.category_store.get_by_name)
        )
        logger.info(
            "context_loaded",
            categories=len(self.category_store),
            expenses=len(self.expense_store),
        )

    def save(self) -> None:
        """
        Write both stores to storage.

        Raises:
            StorageError: If a write fails
        """
        self.storage.save_categories(self.category_store.categories)
        self.storage.save_expenses(self.expense_store.expenses)

    def shutdown(self) -> None:
        self.end_edit()
        self.save()
        logger.info("context_shutdown")

    # Expense session -------------------------------------------------------

    def begin_edit(self, expense: Optional[Expense] = None) -> Expense:
        """Start editing expense, or a fresh one dated today."""
        if expense is None:
            expense = Expense(
                date=date.today(),
                amount=0.0,
                category=self.category_store.default,
            )
        self.current_expense = expense
        return expense

    def end_edit(self) -> None:
        self.current_expense = None

    @property
    def is_editing(self) -> bool:
        return self.current_expense is not None

    # Limits and commit -----------------------------------------------------

    def check_limit(self, expense: Expense) -> LimitCheck:
        """
        Evaluate expense against its category's monthly limit.

        An expense that is already stored is excluded from the month's
        spend, so editing it does not count its old amount twice.
        """
        category = expense.category or self.category_store.default
        excluding = expense.id if self.expense_store.get(expense.id) is not None else None
        return self.limit_evaluator.evaluate(
            category,
            expense.amount,
            self.expense_store.expenses,
            excluding_expense_id=excluding,
        )

    def commit_expense(self, expense: Expense, confirmed: bool = False) -> LimitCheck:
        """
        Add or update expense if it stays within its category limit.

        Over-limit expenses are committed only when confirmed is True,
        after the user has seen the returned LimitCheck.

        Returns:
            The limit check the decision was based on
        """
        if expense.category is None:
            expense.category = self.category_store.default

        check = self.check_limit(expense)
        if not check.within_limit and not confirmed:
            logger.info(
                "commit_needs_confirmation",
                expense_id=str(expense.id),
                category=check.category_name,
                overage=check.overage_amount,
            )
            return check

        if self.expense_store.get(expense.id) is not None:
            self.expense_store.update(expense)
        else:
            self.expense_store.add(expense)
        if self.current_expense is not None and self.current_expense.id == expense.id:
            self.end_edit()
        return check

    # Queries ---------------------------------------------------------------

    def visible_expenses(
        self,
        search_text: Optional[str] = None,
        selected_categories: Optional[Iterable[Category]] = None,
    ) -> list[Expense]:
        """Expenses matching the filters within the cursor's period."""
        return self.expense_store.query(
            search_text=search_text,
            selected_categories=selected_categories,
            period=self.cursor.kind,
            reference_date=self.cursor.reference,
        )


def create_app_context(
    data_dir: Optional[Union[str, Path]] = None,
    storage: Optional[ExpenseStorageInterface] = None,
) -> AppContext:
    """
    Factory function to create and load an application context.

    Args:
        data_dir: Directory for the JSON files (default from settings).
                  Ignored when storage is given.
        storage: Storage gateway to use instead of JSON files.

    Returns:
        A loaded AppContext
    """
    audit_logger = AuditLogger()
    if storage is None:
        storage = JsonFileStorage(base_path=data_dir, listener=audit_logger)

    context = AppContext(storage, audit_logger=audit_logger)
    context.load()
    return context
