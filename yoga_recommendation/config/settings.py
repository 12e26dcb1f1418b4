"""Yoga Recommendation 설정

환경 변수:
- CATALOG_PATH: 운동 카탈로그 JSON 경로 (기본값: data/yoga/catalog.json)
- ASSESSMENT_STORE_PATH: 건강 평가 저장 파일 (기본값: data/storage/assessments.json)
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class YogaRecommendationSettings(BaseSettings):
    """요가 추천 설정"""

    # 데이터 경로
    data_dir: Path = Field(
        default=Path(__file__).parent.parent.parent / "data",
        description="데이터 디렉토리"
    )
    catalog_path: Optional[Path] = Field(
        default=None,
        description="운동 카탈로그 파일 (미지정 시 data_dir/yoga/catalog.json)"
    )
    assessment_store_path: Optional[Path] = Field(
        default=None,
        description="건강 평가 저장 파일 (미지정 시 data_dir/storage/assessments.json)"
    )

    # 추천 설정
    default_duration_seconds: int = Field(
        default=300, gt=0,
        description="카탈로그 항목의 기본 수련 시간 (초)"
    )

    # 서버 설정
    host: str = Field(default="0.0.0.0", description="호스트")
    port: int = Field(default=8000, description="포트")

    @property
    def resolved_catalog_path(self) -> Path:
        return self.catalog_path or self.data_dir / "yoga" / "catalog.json"

    @property
    def resolved_assessment_store_path(self) -> Path:
        return (
            self.assessment_store_path
            or self.data_dir / "storage" / "assessments.json"
        )

    class Config:
        env_prefix = ""
        env_file = ".env"
        extra = "ignore"


settings = YogaRecommendationSettings()
