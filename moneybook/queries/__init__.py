"""Period resolution and reporting package."""

from moneybook.queries.periods import (
    PeriodCursor,
    PeriodKind,
    advance,
    contains,
    display_text,
    end_of,
    period_range,
    start_of,
)
from moneybook.queries.reports import (
    category_totals,
    category_totals_for_period,
    describe_range,
    format_amount,
    paginate,
    total_amount,
)

__all__ = [
    # Periods
    "PeriodCursor",
    "PeriodKind",
    "advance",
    "contains",
    "display_text",
    "end_of",
    "period_range",
    "start_of",
    # Reports
    "category_totals",
    "category_totals_for_period",
    "describe_range",
    "format_amount",
    "paginate",
    "total_amount",
]
