"""Category limit evaluation package."""

from moneybook.limits.evaluator import NO_LIMIT_EPSILON, LimitEvaluator

__all__ = ["LimitEvaluator", "NO_LIMIT_EPSILON"]
