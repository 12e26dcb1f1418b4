"""Yoga Recommendation Services"""

from .exercise_catalog import ExerciseCatalog, load_default_catalog
from .resolver import RecommendationResolver
from .assessment_store import (
    AssessmentStore,
    InMemoryAssessmentStore,
    JSONAssessmentStore,
)

__all__ = [
    "ExerciseCatalog",
    "load_default_catalog",
    "RecommendationResolver",
    "AssessmentStore",
    "InMemoryAssessmentStore",
    "JSONAssessmentStore",
]
