"""건강 상태 기반 추천 해석기

ConditionSet → 순서가 고정된 Recommendation 목록.
외부 상태·무작위성이 없으므로 같은 입력은 항상 같은 출력을 낸다.
"""

from typing import Dict, Iterable, List, Union
import logging

from shared.models import Condition, ConditionSet
from yoga_recommendation.models.exercise import Recommendation
from yoga_recommendation.services.exercise_catalog import ExerciseCatalog

logger = logging.getLogger(__name__)

ConditionsLike = Union[ConditionSet, Iterable[Union[str, Condition]]]


class RecommendationResolver:
    """카탈로그 기반 추천 해석기

    규칙:
    - 상태 순회 순서대로, 상태 내부는 카탈로그 순서대로 이어붙임
    - 상태 간 중복 제거 없음 (같은 운동이 두 상태에서 나오면 두 번)
    - 카탈로그에 없는 상태는 기여 없음
    """

    def __init__(self, catalog: ExerciseCatalog):
        self.catalog = catalog

    def resolve(self, conditions: ConditionsLike) -> List[Recommendation]:
        """
        추천 목록 생성

        Args:
            conditions: ConditionSet 또는 상태 코드 목록 (알 수 없는 코드 무시)

        Returns:
            Recommendation 목록 (빈 입력 → 빈 목록)
        """
        condition_set = _as_condition_set(conditions)

        recommendations: List[Recommendation] = []
        for condition in condition_set:
            entries = self.catalog.entries_for(condition)
            if not entries:
                logger.debug(f"카탈로그에 '{condition.value}' 항목 없음")
                continue
            recommendations.extend(
                Recommendation.from_entry(entry, condition) for entry in entries
            )

        return recommendations

    def count_by_condition(self, conditions: ConditionsLike) -> Dict[Condition, int]:
        """건강 상태별 추천 수"""
        return {
            condition: len(self.catalog.entries_for(condition))
            for condition in _as_condition_set(conditions)
        }


def _as_condition_set(conditions: ConditionsLike) -> ConditionSet:
    if isinstance(conditions, ConditionSet):
        return conditions
    return ConditionSet(conditions)
