"""Input validation package."""

from moneybook.validation.validator import (
    InputValidator,
    ValidationError,
    parse_amount,
    parse_color,
    parse_date,
    parse_limit,
    parse_name,
    parse_time,
)

__all__ = [
    "InputValidator",
    "ValidationError",
    "parse_amount",
    "parse_color",
    "parse_date",
    "parse_limit",
    "parse_name",
    "parse_time",
]
