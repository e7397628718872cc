"""
Category Limit Evaluation

A category's limit is a monthly ceiling; 0 means unlimited. The evaluator
only computes: whether a candidate amount would push the current month's
spend over the limit, and by how much. The caller decides whether to block
or to proceed after the user confirms.
"""

from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from moneybook.models.audit import AuditEventBuilder, EventListener
from moneybook.models.expense import (
    Category,
    Expense,
    LimitCheck,
    LimitSummary,
    same_category,
)


# Limits below this count as "no limit" when summarizing a selection.
NO_LIMIT_EPSILON = 0.001


class LimitEvaluator:
    """Month-to-date spend and overage against category limits."""

    def __init__(self, listener: Optional[EventListener] = None):
        """
        Args:
            listener: Receives a LIMIT_EXCEEDED event for each failed check.
        """
        self._listener = listener

    def spend_this_month(
        self,
        category: Category,
        expenses: Iterable[Expense],
        today: Optional[date] = None,
        excluding_expense_id: Optional[UUID] = None,
    ) -> float:
        """Sum of this month's expenses in category."""
        today = today or date.today()
        return sum(
            (
                expense.amount for expense in expenses
                if same_category(expense.category, category)
                and expense.in_month(today.year, today.month)
                and expense.id != excluding_expense_id
            ),
            0.0,
        )

    def evaluate(
        self,
        category: Category,
        candidate_amount: float,
        expenses: Iterable[Expense],
        excluding_expense_id: Optional[UUID] = None,
        today: Optional[date] = None,
    ) -> LimitCheck:
        """
        Check candidate_amount against category's monthly limit.

        Args:
            category: Category the candidate expense belongs to
            candidate_amount: Amount of the new or edited expense
            expenses: Everything recorded so far
            excluding_expense_id: The expense being edited, so its old
                                  amount is not counted twice
            today: Date that defines "this month" (default today)
        """
        if not category.has_limit:
            return LimitCheck(
                category_name=category.name,
                limit=category.limit,
                spent=0.0,
                candidate_amount=candidate_amount,
                within_limit=True,
            )

        spent = self.spend_this_month(
            category, expenses, today=today, excluding_expense_id=excluding_expense_id
        )
        total = spent + candidate_amount
        within = total <= category.limit
        check = LimitCheck(
            category_name=category.name,
            limit=category.limit,
            spent=spent,
            candidate_amount=candidate_amount,
            within_limit=within,
            overage_amount=0.0 if within else total - category.limit,
        )

        if not within and self._listener is not None:
            self._listener(AuditEventBuilder.limit_exceeded(
                category.id, category.name, category.limit, check.overage_amount
            ))
        return check

    def summarize(
        self,
        categories: Iterable[Category],
        expenses: Iterable[Expense],
        today: Optional[date] = None,
    ) -> Optional[LimitSummary]:
        """
        Combined this-month spend against the summed limits of categories.

        Returns None when no category is given or any of them is unlimited,
        since there is no meaningful combined ceiling then.
        """
        selected = list(categories)
        if not selected:
            return None
        if any(category.limit < NO_LIMIT_EPSILON for category in selected):
            return None

        items = list(expenses)
        total_limit = sum(category.limit for category in selected)
        total_spent = sum(
            self.spend_this_month(category, items, today=today) for category in selected
        )
        return LimitSummary(
            total_limit=total_limit,
            total_spent=total_spent,
            overspent=max(total_spent - total_limit, 0.0),
            progress=min(total_spent / total_limit, 1.0),
        )
