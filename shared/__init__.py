"""Shared module - 운동 추천과 수련 세션이 공유하는 모듈"""

from shared.models.condition import Condition, ConditionSet

__all__ = [
    "Condition",
    "ConditionSet",
]
