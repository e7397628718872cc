"""
MoneyBook - Source Package

The data core of a personal spending tracker: expenses grouped into
user-defined categories, filtered by text, category and calendar period,
checked against monthly category limits, and persisted as JSON.

DESIGN PRINCIPLES:
1. No global state - stores live on an explicit application context
2. The default category always exists
3. No-ops are reported by return values, not exceptions
4. Limits are computed, never enforced - the caller confirms
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "MoneyBook Team"
