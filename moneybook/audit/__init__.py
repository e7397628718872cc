"""Audit logging package."""

from moneybook.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
