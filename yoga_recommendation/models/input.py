"""요가 추천 입력 모델

건강 평가 데이터 - 앱에서 전달받음
"""

from typing import List
from pydantic import BaseModel, Field, field_validator

from shared.models import ConditionSet


class YogaRecommendationInput(BaseModel):
    """요가 추천 입력

    API 엔드포인트: GET /api/v1/recommendations/{user_id}
    """

    user_id: str = Field(..., min_length=1, description="사용자 ID")


class AssessmentInput(BaseModel):
    """건강 평가 제출

    예시:
    {
        "conditions": ["back_pain", "stress"]
    }

    알 수 없는 코드는 무시된다.
    """

    conditions: List[str] = Field(
        default_factory=list, description="선택한 건강 상태 코드 목록"
    )

    @field_validator("conditions")
    @classmethod
    def normalize_keys(cls, v: List[str]) -> List[str]:
        return [key.strip().lower() for key in v if key and key.strip()]

    def to_condition_set(self) -> ConditionSet:
        return ConditionSet(self.conditions)
