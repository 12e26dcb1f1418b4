"""Yoga Recommendation Models"""

from .exercise import ExerciseEntry, Recommendation
from .input import YogaRecommendationInput, AssessmentInput
from .output import (
    YogaRecommendationOutput,
    AssessmentOutput,
    ConditionInfo,
)

__all__ = [
    "ExerciseEntry",
    "Recommendation",
    "YogaRecommendationInput",
    "AssessmentInput",
    "YogaRecommendationOutput",
    "AssessmentOutput",
    "ConditionInfo",
]
