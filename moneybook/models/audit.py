"""
Audit Models for MoneyBook

Every mutating store call and every persistence pass produces an AuditEvent.
Events are published to store subscribers (see moneybook.stores.base) and
logged by the AuditLogger. This replaces implicit change notification on
observable collections with an explicit, inspectable event stream.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Categories
    CATEGORY_ADDED = "category_added"
    CATEGORY_UPDATED = "category_updated"
    CATEGORY_REMOVED = "category_removed"
    CATEGORIES_REPLACED = "categories_replaced"

    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_REMOVED = "expense_removed"
    EXPENSES_REPLACED = "expenses_replaced"
    EXPENSES_REASSIGNED = "expenses_reassigned"

    # Persistence
    STORE_SAVED = "store_saved"
    STORE_LOADED = "store_loaded"
    SAVE_SKIPPED = "save_skipped"
    LOAD_EMPTY = "load_empty"

    # Limits
    LIMIT_EXCEEDED = "limit_exceeded"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="'category', 'expense' or 'store'"
    )
    entity_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": str(self.entity_id) if self.entity_id else None,
            "description": self.description,
            "details": self.details,
        }


# Subscribers receive every event a store or storage backend publishes.
EventListener = Callable[["AuditEvent"], None]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.category_added(category.id, category.name)
        event = AuditEventBuilder.save_skipped("expenses")
    """

    @staticmethod
    def category_added(category_id: UUID, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=category_id,
            description=f"Category added: {name}",
            details={"name": name},
        )

    @staticmethod
    def category_updated(category_id: UUID, old_name: str, new_name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_UPDATED,
            entity_type="category",
            entity_id=category_id,
            description=f"Category updated: {old_name} -> {new_name}",
            details={"old_name": old_name, "new_name": new_name},
        )

    @staticmethod
    def category_removed(category_id: UUID, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_REMOVED,
            entity_type="category",
            entity_id=category_id,
            description=f"Category removed: {name}",
            details={"name": name},
        )

    @staticmethod
    def categories_replaced(count: int, default_synthesized: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORIES_REPLACED,
            entity_type="category",
            description=f"Category list replaced with {count} categories",
            details={"count": count, "default_synthesized": default_synthesized},
        )

    @staticmethod
    def expense_added(expense_id: UUID, amount: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense added",
            details={"amount": amount},
        )

    @staticmethod
    def expense_updated(expense_id: UUID, amount: float) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense updated",
            details={"amount": amount},
        )

    @staticmethod
    def expense_removed(expense_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REMOVED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense removed",
        )

    @staticmethod
    def expenses_replaced(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_REPLACED,
            entity_type="expense",
            description=f"Expense list replaced with {count} expenses",
            details={"count": count},
        )

    @staticmethod
    def expenses_reassigned(old_name: str, new_name: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_REASSIGNED,
            severity=AuditSeverity.DEBUG,
            entity_type="expense",
            description=f"{count} expenses moved from {old_name} to {new_name}",
            details={"old_category": old_name, "new_category": new_name, "count": count},
        )

    @staticmethod
    def store_saved(resource: str, count: int, path: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_SAVED,
            entity_type="store",
            description=f"Saved {count} {resource}",
            details={"resource": resource, "count": count, "path": path},
        )

    @staticmethod
    def store_loaded(resource: str, count: int, path: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORE_LOADED,
            entity_type="store",
            description=f"Loaded {count} {resource}",
            details={"resource": resource, "count": count, "path": path},
        )

    @staticmethod
    def save_skipped(resource: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_type="store",
            description=f"No {resource} to save.",
            details={"resource": resource},
        )

    @staticmethod
    def load_empty(resource: str, path: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_EMPTY,
            severity=AuditSeverity.WARNING,
            entity_type="store",
            description=f"No {resource} file found or file is empty.",
            details={"resource": resource, "path": path},
        )

    @staticmethod
    def limit_exceeded(
        category_id: UUID,
        name: str,
        limit: float,
        overage: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LIMIT_EXCEEDED,
            severity=AuditSeverity.WARNING,
            entity_type="category",
            entity_id=category_id,
            description=f"Limit of category '{name}' exceeded by {overage:.2f}",
            details={"limit": limit, "overage": overage},
        )
