"""수련 세션 모델"""

from typing import Any, List, Optional
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
import uuid


class SessionState(str, Enum):
    """세션 상태"""
    IDLE = "idle"  # 설정됨, 시작 전
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"

    @property
    def is_active(self) -> bool:
        return self in (SessionState.RUNNING, SessionState.PAUSED)


def format_time(seconds: int) -> str:
    """초 → MM:SS"""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionExercise(BaseModel):
    """세션에 연결된 운동 정보"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="운동명")
    category: str = Field(default="general", description="건강 상태 카테고리 라벨")
    instructions: str = Field(default="", description="수행 방법")
    video_url: Optional[str] = Field(default=None, description="영상 링크")
    suggested_duration_seconds: Optional[int] = Field(
        default=None, gt=0, description="권장 수련 시간 (초)"
    )

    @classmethod
    def from_recommendation(cls, recommendation: Any) -> "SessionExercise":
        """추천 결과 → 세션 운동 (카테고리 = 추천 사유 상태 라벨)"""
        return cls(
            name=recommendation.name,
            category=recommendation.condition_label,
            instructions=recommendation.instructions,
            video_url=recommendation.video_url,
            suggested_duration_seconds=recommendation.duration_seconds,
        )


class SessionRecord(BaseModel):
    """세션 완료 기록 (불변)

    자연 완료 시에만 1회 생성되며, 이후 소유권은 저장소에 있다.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    session_id: Optional[str] = Field(default=None, description="세션 ID")
    user_id: Optional[str] = Field(default=None, description="사용자 ID")

    exercise_name: str = Field(..., description="운동명")
    duration_seconds: int = Field(..., gt=0, description="설정된 전체 시간 (초)")
    category: str = Field(default="general", description="건강 상태 카테고리 라벨")

    started_at: Optional[datetime] = Field(default=None, description="세션 시작 시간")
    completed_at: datetime = Field(..., description="완료 시간 (상태 전이 시점)")


class SessionSnapshot(BaseModel):
    """세션 상태 조회 결과 (읽기 전용)"""

    session_id: str = Field(..., description="세션 ID")
    user_id: Optional[str] = Field(default=None, description="사용자 ID")
    state: SessionState = Field(..., description="현재 상태")
    exercise: Optional[SessionExercise] = Field(default=None, description="운동 정보")

    # 시간 정보
    duration_seconds: int = Field(..., description="설정된 전체 시간 (초)")
    remaining_seconds: int = Field(..., description="남은 시간 (초)")
    elapsed_seconds: int = Field(..., description="경과 시간 (초)")
    progress: float = Field(..., ge=0, le=1, description="진행률 (0-1)")
    progress_percent: int = Field(..., ge=0, le=100, description="진행률 (%)")
    is_active: bool = Field(..., description="running 또는 paused")

    # 표시용
    remaining_display: str = Field(..., description="남은 시간 MM:SS")
    elapsed_display: str = Field(..., description="경과 시간 MM:SS")

    started_at: Optional[datetime] = Field(default=None, description="시작 시간")
    completed_at: Optional[datetime] = Field(default=None, description="완료 시간")
    completed_exercises: List[str] = Field(
        default_factory=list, description="이 컨트롤러에서 완료한 운동 목록"
    )
    warnings: List[str] = Field(
        default_factory=list, description="비치명적 경고 (기록 저장 실패 등)"
    )
