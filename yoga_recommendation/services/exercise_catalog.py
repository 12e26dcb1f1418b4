"""정적 요가 운동 카탈로그

건강 상태 → 운동 목록 매핑을 코드가 아닌 데이터 파일로 관리한다.
한 번 로드되면 변경되지 않으므로 여러 요청에서 공유해도 안전하다.

사용 예시:
    catalog = ExerciseCatalog.from_file(Path("data/yoga/catalog.json"))
    entries = catalog.entries_for(Condition.BACK_PAIN)
"""

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
import json
import logging

from shared.models import Condition
from yoga_recommendation.models.exercise import ExerciseEntry
from yoga_recommendation.config import settings

logger = logging.getLogger(__name__)


class ExerciseCatalog:
    """건강 상태별 운동 카탈로그 (불변)"""

    def __init__(self, entries: Mapping[Condition, Iterable[ExerciseEntry]]):
        frozen: Dict[Condition, Tuple[ExerciseEntry, ...]] = {}
        for condition, condition_entries in entries.items():
            frozen[Condition(condition)] = tuple(condition_entries)
        self._entries = MappingProxyType(frozen)

    @classmethod
    def from_mapping(
        cls,
        raw_data: Mapping[str, Any],
        default_duration_seconds: Optional[int] = None,
    ) -> "ExerciseCatalog":
        """
        원시 딕셔너리 → 카탈로그

        Args:
            raw_data: {"catalog": {"back_pain": [...]}} 또는 {"back_pain": [...]}
            default_duration_seconds: 항목에 duration_seconds 가 없을 때 사용

        Returns:
            ExerciseCatalog
        """
        default_duration = default_duration_seconds or settings.default_duration_seconds

        # catalog 키가 있으면 그 안의 데이터 사용
        catalog_data = raw_data.get("catalog", raw_data)

        entries: Dict[Condition, List[ExerciseEntry]] = {}
        for key, items in catalog_data.items():
            if key.startswith("_"):  # _metadata 등 제외
                continue

            condition = Condition.parse(key)
            if condition is None:
                logger.warning(f"알 수 없는 건강 상태 키 '{key}' 건너뜀")
                continue

            entries[condition] = [
                ExerciseEntry(
                    **{
                        "duration_seconds": default_duration,
                        **item,
                        "condition": condition,
                    }
                )
                for item in items
            ]

        return cls(entries)

    @classmethod
    def from_file(
        cls,
        path: Path,
        default_duration_seconds: Optional[int] = None,
    ) -> "ExerciseCatalog":
        """JSON 파일에서 카탈로그 로드"""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"카탈로그 파일을 찾을 수 없습니다: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw_data = json.load(f)

        metadata = raw_data.get("_metadata", {})
        default_duration = (
            default_duration_seconds or metadata.get("default_duration_seconds")
        )

        catalog = cls.from_mapping(raw_data, default_duration_seconds=default_duration)
        logger.info(
            f"카탈로그 로드 완료: {path.name} "
            f"({len(catalog.conditions())}개 상태, {len(catalog)}개 항목)"
        )
        return catalog

    def entries_for(self, condition: Condition) -> Tuple[ExerciseEntry, ...]:
        """건강 상태의 운동 항목 (카탈로그 순서, 없으면 빈 튜플)"""
        return self._entries.get(condition, ())

    def conditions(self) -> List[Condition]:
        """항목이 있는 건강 상태 목록"""
        return list(self._entries.keys())

    def __contains__(self, condition: object) -> bool:
        return condition in self._entries

    def __len__(self) -> int:
        return sum(len(items) for items in self._entries.values())


@lru_cache()
def load_default_catalog() -> ExerciseCatalog:
    """설정 경로의 카탈로그 (싱글톤)"""
    return ExerciseCatalog.from_file(settings.resolved_catalog_path)
