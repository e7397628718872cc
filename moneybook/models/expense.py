"""
Core Data Models for MoneyBook

These models define the schemas for everything the stores hold and return.
They are designed to:
1. Enforce value constraints at construction (no negative amounts or limits)
2. Be serializable to the JSON stores without custom encoders
3. Be mutated in place by edit operations while keeping their identifiers

DESIGN DECISION: Category identity across reloads is the NAME, not the id.
Identifiers are regenerated per object in older stores, so expenses are
re-linked to categories by name when data is loaded. This is intentional.
"""

import datetime as dt
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

from moneybook.models.color import GRAY, Color, darken


# Reserved name of the always-present fallback category.
DEFAULT_CATEGORY_NAME = "Default"
DEFAULT_CATEGORY_COLOR = GRAY


def same_category(a: Optional["Category"], b: Optional["Category"]) -> bool:
    """True if both refer to the same category (by id or case-insensitive name)."""
    if a is None or b is None:
        return False
    if a is b or a.id == b.id:
        return True
    return a.name.lower() == b.name.lower()


# =============================================================================
# CATEGORY
# =============================================================================

class Category(BaseModel):
    """
    A named, colored grouping for expenses with an optional monthly limit.

    font_color is derived from color (see darken) whenever color changes.
    When loaded from storage the persisted font_color is kept as is.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        frozen=True,
        description="Unique category ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Category name (unique, case-insensitive)"
    )
    color: Color = Field(
        default=DEFAULT_CATEGORY_COLOR,
        description="Primary color"
    )
    font_color: Optional[Color] = Field(
        default=None,
        validation_alias=AliasChoices("font_color", "fontColor"),
        description="Legible foreground color, derived from color"
    )
    limit: float = Field(
        default=0.0,
        ge=0,
        allow_inf_nan=False,
        description="Monthly spending limit, 0 means no limit"
    )

    @model_validator(mode='after')
    def derive_font_color(self) -> 'Category':
        if self.font_color is None:
            self.font_color = darken(self.color)
        return self

    @classmethod
    def default(cls) -> "Category":
        """A fresh default category."""
        return cls(name=DEFAULT_CATEGORY_NAME, color=DEFAULT_CATEGORY_COLOR)

    @property
    def is_default(self) -> bool:
        return self.name.lower() == DEFAULT_CATEGORY_NAME.lower()

    @property
    def has_limit(self) -> bool:
        return self.limit > 0

    def recolor(self, color: Color) -> None:
        """Set the primary color and recompute the foreground."""
        self.color = color
        self.font_color = darken(color)

    def apply(self, other: "Category") -> None:
        """Copy name, color and limit from other, keeping this id."""
        self.name = other.name
        self.recolor(other.color)
        self.limit = other.limit


# =============================================================================
# EXPENSE
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded spending event.

    The category is a non-owning reference; the stores keep it pointing at
    a live category (or None).
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        frozen=True,
        description="Unique expense ID"
    )
    date: dt.date = Field(
        ...,
        description="Date the money was spent"
    )
    time: Optional[dt.time] = Field(
        default=None,
        description="Time of day, if known"
    )
    location: str = Field(
        default="",
        description="Where the money was spent"
    )
    amount: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Amount spent"
    )
    description: str = Field(
        default="",
        description="Short note"
    )
    image_path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("image_path", "imagePath"),
        description="Opaque path to a receipt image"
    )
    category: Optional[Category] = None

    def matches_text(self, text: str) -> bool:
        """Case-insensitive substring match on location or description."""
        needle = text.lower()
        return needle in self.location.lower() or needle in self.description.lower()

    def in_month(self, year: int, month: int) -> bool:
        return self.date.year == year and self.date.month == month

    def apply(self, other: "Expense") -> None:
        """Copy every editable field from other, keeping this id."""
        self.date = other.date
        self.time = other.time
        self.location = other.location
        self.amount = other.amount
        self.description = other.description
        self.image_path = other.image_path
        self.category = other.category


# =============================================================================
# LIMIT MODELS
# =============================================================================

class LimitCheck(BaseModel):
    """
    Result of checking a candidate amount against a category limit.

    within_limit=False is a soft signal: the caller asks the user to
    confirm, it is not an error.
    """

    category_name: str
    limit: float = Field(ge=0, allow_inf_nan=False)
    spent: float = Field(
        ge=0,
        allow_inf_nan=False,
        description="Month-to-date spend before the candidate amount"
    )
    candidate_amount: float = Field(ge=0, allow_inf_nan=False)
    within_limit: bool
    overage_amount: float = Field(
        default=0.0,
        ge=0,
        allow_inf_nan=False,
        description="How far spent + candidate exceeds the limit"
    )

    @property
    def total(self) -> float:
        return self.spent + self.candidate_amount


class LimitSummary(BaseModel):
    """Combined spent-vs-limit figures for a set of categories."""

    total_limit: float = Field(ge=0, allow_inf_nan=False)
    total_spent: float = Field(ge=0, allow_inf_nan=False)
    overspent: float = Field(
        default=0.0,
        ge=0,
        allow_inf_nan=False,
        description="total_spent - total_limit when positive"
    )
    progress: float = Field(
        ge=0.0,
        le=1.0,
        description="Share of the limit used, capped at 1"
    )

    @property
    def is_over(self) -> bool:
        return self.overspent > 0


# =============================================================================
# LIST MODELS
# =============================================================================

class Page(BaseModel):
    """One page of a list view."""

    items: list[Any] = Field(default_factory=list)
    page_index: int = Field(ge=0)
    page_count: int = Field(ge=0)
    total_items: int = Field(ge=0)
    from_index: int = Field(ge=0)
    to_index: int = Field(ge=0)

    @property
    def label(self) -> str:
        """e.g. '11 to 20 from 25'."""
        start = self.from_index + 1 if self.total_items else 0
        return f"{start} to {self.to_index} from {self.total_items}"

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'negative')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a form payload.

    Errors block; warnings are shown but do not block.
    """

    issues: list[ValidationIssue] = Field(default_factory=list)
    values: dict[str, Any] = Field(
        default_factory=dict,
        description="Parsed values, present when validation passed"
    )

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]
