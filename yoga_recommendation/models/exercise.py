"""요가 운동 카탈로그 항목 / 추천 모델"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.models import Condition, condition_label


class ExerciseEntry(BaseModel):
    """카탈로그 운동 항목 (불변)

    같은 운동명이 여러 건강 상태 아래 별개 항목으로 존재할 수 있다.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="운동명")
    benefits: str = Field(default="", description="효과 요약")
    instructions: str = Field(default="", description="수행 방법")
    image_url: Optional[str] = Field(default=None, description="이미지 링크")
    video_url: Optional[str] = Field(default=None, description="영상 링크")
    condition: Condition = Field(..., description="대상 건강 상태 (카탈로그 키)")
    duration_seconds: int = Field(
        default=300, gt=0, description="권장 수련 시간 (초)"
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("운동명이 비어 있습니다")
        return v


class Recommendation(ExerciseEntry):
    """추천 결과 = 카탈로그 항목 + 추천을 만든 건강 상태

    같은 항목이 두 건강 상태에서 추천되면 서로 다른 Recommendation 두 개가 된다.
    """

    for_condition: Condition = Field(..., description="추천 사유가 된 건강 상태")
    condition_label: str = Field(
        ..., description="카테고리 라벨 (back_pain → back pain)"
    )

    @classmethod
    def from_entry(
        cls, entry: ExerciseEntry, condition: Condition
    ) -> "Recommendation":
        return cls(
            **entry.model_dump(),
            for_condition=condition,
            condition_label=condition_label(condition),
        )
