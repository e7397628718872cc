"""
Reports over Expenses

Read-only aggregations a front end renders: totals per category for a
date range (pie and bar charts), the grand total of a list, page slicing
for list views, and human-readable range and amount labels.

Every function takes the expenses to work on; none of them touches a store.
"""

import math
from datetime import date
from typing import Iterable, Optional, Sequence

from moneybook.config import get_settings
from moneybook.models.expense import DEFAULT_CATEGORY_NAME, Expense, Page
from moneybook.queries.periods import PeriodKind, period_range


def total_amount(expenses: Iterable[Expense]) -> float:
    return sum((expense.amount for expense in expenses), 0.0)


def category_totals(
    expenses: Iterable[Expense],
    start: date,
    end: date,
) -> dict[str, float]:
    """
    Sum amounts per category name for expenses dated start..end (inclusive).

    Uncategorized expenses are counted under the default category's name.
    Keys appear in order of first occurrence.
    """
    totals: dict[str, float] = {}
    for expense in expenses:
        if not start <= expense.date <= end:
            continue
        key = expense.category.name if expense.category else DEFAULT_CATEGORY_NAME
        totals[key] = totals.get(key, 0.0) + expense.amount
    return totals


def category_totals_for_period(
    kind: PeriodKind,
    reference: date,
    expenses: Iterable[Expense],
) -> dict[str, float]:
    start, end = period_range(kind, reference)
    return category_totals(expenses, start, end)


def paginate(
    items: Sequence,
    page_index: int = 0,
    page_size: Optional[int] = None,
) -> Page:
    """
    Slice one page out of items.

    page_index is clamped into the valid range, so asking for a page past
    the end returns the last page.
    """
    size = page_size or get_settings().app.page_size
    if size < 1:
        raise ValueError("page_size must be at least 1")

    total = len(items)
    page_count = math.ceil(total / size)
    index = max(0, min(page_index, page_count - 1))
    from_index = index * size
    to_index = min(from_index + size, total)

    return Page(
        items=list(items[from_index:to_index]),
        page_index=index,
        page_count=page_count,
        total_items=total,
        from_index=from_index,
        to_index=to_index,
    )


def format_amount(value: float, pattern: Optional[str] = None) -> str:
    """Format an amount for display, e.g. 12.5 -> '12.50'."""
    return (pattern or get_settings().app.amount_pattern) % value


def describe_range(date_from: Optional[date], date_to: Optional[date]) -> str:
    """Format a date range for labels."""
    if date_from and date_to:
        if date_from == date_to:
            return f"on {date_from.strftime('%d %b %Y')}"
        elif date_from.month == date_to.month and date_from.year == date_to.year:
            return f"in {date_from.strftime('%B %Y')}"
        elif date_from.year == date_to.year:
            return f"from {date_from.strftime('%b')} to {date_to.strftime('%b %Y')}"
        else:
            return f"from {date_from.strftime('%b %Y')} to {date_to.strftime('%b %Y')}"
    elif date_from:
        return f"from {date_from.strftime('%d %b %Y')}"
    elif date_to:
        return f"until {date_to.strftime('%d %b %Y')}"
    return ""
