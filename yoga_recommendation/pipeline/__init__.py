"""Yoga Recommendation Pipeline"""

from .recommendation_pipeline import YogaRecommendationPipeline

__all__ = ["YogaRecommendationPipeline"]
