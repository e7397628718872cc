"""
Input Validation

DESIGN DECISION: Raw form input is checked here, before anything reaches
a store. The stores and models never hold invalid numeric state (negative
amounts, non-numeric limits), so every entry point must come through:

- the parse_* helpers, which raise ValidationError on bad input, or
- InputValidator, which collects every problem of a form into a
  ValidationResult so the front end can show them all at once.

Validation NEVER silently fixes bad values. It only normalizes harmless
formatting (surrounding whitespace, a decimal comma).
"""

import math
from datetime import date, datetime, time
from typing import Any, Callable, Optional

from moneybook.config import get_settings
from moneybook.models.color import Color, ColorCodec
from moneybook.models.expense import (
    Category,
    Expense,
    ValidationIssue,
    ValidationResult,
)


class ValidationError(ValueError):
    """Raised when user input does not meet validation requirements."""

    def __init__(self, message: str, issues: Optional[list[ValidationIssue]] = None):
        super().__init__(message)
        self.issues = issues or []


def parse_amount(raw: Any, field: str = "amount") -> float:
    """Parse a non-negative, finite amount ("12.50", "12,50", 12.5)."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError(f"{field} is required")
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        value = float(raw.strip().replace(",", ".")) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{field} must be a number") from e
    if not math.isfinite(value):
        raise ValidationError(f"{field} must be a finite number")
    if value < 0:
        raise ValidationError(f"{field} cannot be negative")
    return value


def parse_limit(raw: Any) -> float:
    """Parse a monthly limit; empty input means 0 (no limit)."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 0.0
    return parse_amount(raw, field="limit")


def parse_time(raw: Any, pattern: Optional[str] = None) -> Optional[time]:
    """Parse a time of day; empty input means no time."""
    if raw is None or isinstance(raw, time):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    pattern = pattern or get_settings().app.time_pattern
    try:
        return datetime.strptime(text, pattern).time()
    except ValueError:
        pass
    try:
        return time.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"time must look like {datetime(2000, 1, 1, 14, 30).strftime(pattern)}") from e


def parse_date(raw: Any, pattern: Optional[str] = None) -> date:
    """Parse a date given as a date, an ISO string or the display pattern."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip() if raw is not None else ""
    if not text:
        raise ValidationError("date is required")
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    pattern = pattern or get_settings().app.date_pattern
    try:
        return datetime.strptime(text, pattern).date()
    except ValueError as e:
        raise ValidationError(f"date must be ISO (YYYY-MM-DD) or match {pattern}") from e


def parse_name(raw: Any) -> str:
    name = raw.strip() if isinstance(raw, str) else ""
    if not name:
        raise ValidationError("name cannot be empty")
    return name


def parse_color(raw: Any) -> Color:
    if isinstance(raw, Color):
        return raw
    if isinstance(raw, dict):
        try:
            return ColorCodec.from_record(raw)
        except ValueError as e:
            raise ValidationError(f"color is invalid: {e}") from e
    if isinstance(raw, str) and raw.startswith("#") and len(raw) == 7:
        try:
            return Color.from_rgb255(int(raw[1:3], 16), int(raw[3:5], 16), int(raw[5:7], 16))
        except ValueError as e:
            raise ValidationError(f"color is invalid: {raw}") from e
    raise ValidationError("color must be a {red, green, blue, opacity} record or #rrggbb")


class InputValidator:
    """Validates expense and category forms field by field."""

    def __init__(self):
        self._settings = get_settings().app

    def _check(
        self,
        result: ValidationResult,
        field: str,
        parser: Callable[[Any], Any],
        raw: Any,
        issue_type: str = "invalid_value",
    ) -> None:
        try:
            result.values[field] = parser(raw)
        except ValidationError as e:
            result.issues.append(ValidationIssue(
                field=field,
                issue_type=issue_type,
                message=str(e),
                severity="error",
            ))

    def validate_expense(self, payload: dict[str, Any]) -> ValidationResult:
        """
        Validate an expense form.

        Expected keys: date, amount, and optionally time, location,
        description, image_path, category (a category name).
        """
        result = ValidationResult()
        self._check(result, "date", parse_date, payload.get("date"))
        self._check(result, "time", parse_time, payload.get("time"), issue_type="invalid_format")
        self._check(result, "amount", parse_amount, payload.get("amount"))

        result.values["location"] = str(payload.get("location") or "").strip()
        result.values["description"] = str(payload.get("description") or "").strip()
        result.values["image_path"] = payload.get("image_path") or None
        result.values["category"] = payload.get("category") or None

        amount = result.values.get("amount")
        if amount is not None and amount > self._settings.max_expense_amount:
            result.issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount:,.2f}) seems unusually high",
                severity="warning",
            ))
        if amount == 0:
            result.issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="Amount is zero",
                severity="warning",
            ))

        if result.has_errors:
            result.values = {}
        return result

    def validate_category(self, payload: dict[str, Any]) -> ValidationResult:
        """Validate a category form: name, color, limit."""
        result = ValidationResult()
        self._check(result, "name", parse_name, payload.get("name"), issue_type="missing")
        self._check(result, "color", parse_color, payload.get("color"))
        self._check(result, "limit", parse_limit, payload.get("limit"))

        if result.has_errors:
            result.values = {}
        return result

    def expense_from_form(
        self,
        payload: dict[str, Any],
        category_lookup: Callable[[str], Optional[Category]],
    ) -> Expense:
        """
        Build an Expense from a validated form.

        Raises:
            ValidationError: With every error issue of the form attached
        """
        result = self.validate_expense(payload)
        if result.has_errors:
            raise ValidationError(
                "; ".join(issue.message for issue in result.issues if issue.severity == "error"),
                result.issues,
            )
        values = dict(result.values)
        category_name = values.pop("category")
        values["category"] = category_lookup(category_name) if category_name else None
        return Expense(**values)

    def category_from_form(self, payload: dict[str, Any]) -> Category:
        result = self.validate_category(payload)
        if result.has_errors:
            raise ValidationError(
                "; ".join(issue.message for issue in result.issues),
                result.issues,
            )
        return Category(**result.values)
