"""요가 추천 출력 모델"""

from typing import Dict, List
from datetime import datetime, timezone
from pydantic import BaseModel, Field

from shared.models import Condition, ConditionSet
from .exercise import Recommendation


class ConditionInfo(BaseModel):
    """건강 상태 안내 정보"""

    id: Condition = Field(..., description="상태 코드")
    label: str = Field(..., description="표시 이름")
    description: str = Field(..., description="설명")

    @classmethod
    def from_condition(cls, condition: Condition) -> "ConditionInfo":
        return cls(
            id=condition,
            label=condition.label,
            description=condition.description,
        )


class AssessmentOutput(BaseModel):
    """건강 평가 조회 결과"""

    user_id: str = Field(..., description="사용자 ID")
    conditions: List[Condition] = Field(
        default_factory=list, description="선택된 건강 상태 (정규 순서)"
    )
    has_assessment: bool = Field(..., description="평가 존재 여부")

    @classmethod
    def build(
        cls, user_id: str, condition_set: ConditionSet, has_assessment: bool
    ) -> "AssessmentOutput":
        return cls(
            user_id=user_id,
            conditions=list(condition_set),
            has_assessment=has_assessment,
        )


class YogaRecommendationOutput(BaseModel):
    """요가 추천 출력

    API 응답: GET /api/v1/recommendations/{user_id}
    """

    user_id: str = Field(..., description="사용자 ID")
    conditions: List[Condition] = Field(
        default_factory=list, description="사용자 건강 상태 (정규 순서)"
    )

    # === 추천 결과 ===
    recommendations: List[Recommendation] = Field(
        default_factory=list, description="추천 운동 목록 (상태 순 → 카탈로그 순)"
    )
    count_by_condition: Dict[str, int] = Field(
        default_factory=dict, description="건강 상태별 추천 수"
    )
    needs_assessment: bool = Field(
        default=False,
        description="건강 상태가 비어 있음 → 재평가 안내 필요"
    )

    # 메타데이터
    recommended_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="추천 시간"
    )

    @property
    def recommendation_count(self) -> int:
        """추천 운동 수"""
        return len(self.recommendations)
