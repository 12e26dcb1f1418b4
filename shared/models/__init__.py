"""Shared models"""

from .condition import (
    Condition,
    ConditionSet,
    CONDITION_INFO,
    condition_label,
)

__all__ = [
    "Condition",
    "ConditionSet",
    "CONDITION_INFO",
    "condition_label",
]
