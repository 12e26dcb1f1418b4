"""Practice Session 설정

환경 변수:
- DEFAULT_DURATION_SECONDS: 기본 세션 길이 (기본값: 300)
- TICK_INTERVAL_SECONDS: 틱 간격 (기본값: 1.0)
- SESSION_STORAGE_DIR: 세션 기록 저장 디렉토리
- SESSION_IDLE_TTL_SECONDS: 미사용 세션 보관 시간 (기본값: 1800)
"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class PracticeSessionSettings(BaseSettings):
    """수련 세션 설정"""

    # 타이머 설정
    default_duration_seconds: int = Field(
        default=300, gt=0, description="기본 세션 길이 (초)"
    )
    tick_interval_seconds: float = Field(
        default=1.0, gt=0, description="틱 간격 (초) - 틱 1회 = 1초 감소"
    )
    quick_presets_minutes: List[int] = Field(
        default=[1, 5, 10, 15, 30], description="빠른 시간 설정 (분)"
    )

    # 기록 설정
    default_category: str = Field(
        default="general", description="카테고리 미지정 시 기록 라벨"
    )
    default_exercise_name: str = Field(
        default="Yoga Session", description="운동 미지정 시 기록 이름"
    )

    # 활성 세션 관리 (gateway)
    session_idle_ttl_seconds: float = Field(
        default=1800, gt=0,
        description="running 이 아닌 세션을 마지막 접근 후 보관하는 시간 (초)"
    )

    # 데이터 경로
    data_dir: Path = Field(
        default=Path(__file__).parent.parent.parent / "data",
        description="데이터 디렉토리"
    )
    session_storage_dir: Optional[Path] = Field(
        default=None,
        description="세션 기록 디렉토리 (미지정 시 data_dir/storage)"
    )

    @property
    def resolved_session_storage_dir(self) -> Path:
        return self.session_storage_dir or self.data_dir / "storage"

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"


settings = PracticeSessionSettings()
