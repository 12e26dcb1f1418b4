"""Gateway API 요청/응답 모델

앱 → 서버:
1. 건강 평가 저장/조회
2. 요가 추천
3. 수련 세션 제어 및 기록 조회
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from shared.models import Condition
from practice_session.models import SessionExercise, SessionRecord, SessionSnapshot
from practice_session.services import SessionStats


class SessionAction(str, Enum):
    """세션 제어 동작"""
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    STOP = "stop"


class SessionCreateRequest(BaseModel):
    """세션 생성 요청

    운동 지정 방법 (우선순위 순):
    1. exercise: 운동 정보 직접 전달
    2. condition + exercise_name: 카탈로그에서 조회 (카테고리 = 상태 라벨)
    3. 둘 다 없음: 운동 미지정 세션

    예시:
    {
        "user_id": "user_123",
        "condition": "back_pain",
        "exercise_name": "Child's Pose (Balasana)",
        "duration_seconds": 300,
        "auto_start": false
    }
    """

    user_id: Optional[str] = Field(default=None, description="사용자 ID")
    exercise: Optional[SessionExercise] = Field(default=None, description="운동 정보")
    condition: Optional[Condition] = Field(default=None, description="추천 사유 건강 상태")
    exercise_name: Optional[str] = Field(default=None, description="카탈로그 운동명")

    # 검증은 컨트롤러에서 (InvalidDuration → 400)
    duration_seconds: Optional[int] = Field(
        default=None,
        description="세션 길이 (초). 미지정 시 운동 권장 시간 또는 기본값"
    )
    auto_start: bool = Field(default=False, description="생성 직후 시작")


class SessionConfigureRequest(BaseModel):
    """세션 재설정 요청 (duration_seconds 또는 minutes 중 하나)"""

    duration_seconds: Optional[int] = Field(default=None, description="세션 길이 (초)")
    minutes: Optional[int] = Field(default=None, description="빠른 시간 설정 (분)")
    exercise: Optional[SessionExercise] = Field(
        default=None, description="운동 정보 (None 이면 유지)"
    )


class SessionActionResponse(BaseModel):
    """세션 제어 응답"""

    action: str = Field(..., description="요청 동작")
    accepted: bool = Field(..., description="상태 전이 발생 여부 (False = no-op)")
    session: SessionSnapshot = Field(..., description="현재 세션 상태")


class SessionHistoryResponse(BaseModel):
    """사용자 수련 기록"""

    user_id: str = Field(..., description="사용자 ID")
    sessions: List[SessionRecord] = Field(default_factory=list, description="완료 기록")
    stats: SessionStats = Field(..., description="수련 통계")
