"""
Data Models Package

This package contains all Pydantic models used in MoneyBook.
Everything the stores hold or return conforms to these schemas.
"""

from moneybook.models.color import (
    BLUE,
    GRAY,
    GREEN,
    ORANGE,
    RED,
    WHITE,
    Color,
    ColorCodec,
    darken,
)
from moneybook.models.expense import (
    DEFAULT_CATEGORY_NAME,
    Category,
    Expense,
    LimitCheck,
    LimitSummary,
    Page,
    ValidationIssue,
    ValidationResult,
    same_category,
)
from moneybook.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    EventListener,
)

__all__ = [
    # Colors
    "BLUE",
    "GRAY",
    "GREEN",
    "ORANGE",
    "RED",
    "WHITE",
    "Color",
    "ColorCodec",
    "darken",
    # Expense models
    "DEFAULT_CATEGORY_NAME",
    "Category",
    "Expense",
    "LimitCheck",
    "LimitSummary",
    "Page",
    "ValidationIssue",
    "ValidationResult",
    "same_category",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    "EventListener",
]
