"""건강 평가 저장소

사용자별 ConditionSet 의 유일한 생산자.
평가 제출 시 통째로 교체되며, 추천 해석기는 읽기만 한다.
"""

import json
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional
import logging

from shared.models import ConditionSet

logger = logging.getLogger(__name__)

# 평가 행에서 건강 상태가 아닌 키
_ROW_META_KEYS = ("user_id", "updated_at")


class AssessmentStore(ABC):
    """건강 평가 저장소 추상 클래스"""

    @abstractmethod
    def get_condition_set(self, user_id: str) -> ConditionSet:
        """사용자 건강 상태 (평가 없으면 빈 집합)"""

    @abstractmethod
    def save_condition_set(self, user_id: str, conditions: ConditionSet) -> bool:
        """사용자 건강 상태 교체"""

    @abstractmethod
    def has_assessment(self, user_id: str) -> bool:
        pass


class InMemoryAssessmentStore(AssessmentStore):
    """메모리 기반 저장소 (테스트/개발용)"""

    def __init__(self, initial: Optional[Dict[str, ConditionSet]] = None):
        self._rows: Dict[str, ConditionSet] = dict(initial or {})
        self._lock = threading.Lock()

    def get_condition_set(self, user_id: str) -> ConditionSet:
        with self._lock:
            return self._rows.get(user_id, ConditionSet())

    def save_condition_set(self, user_id: str, conditions: ConditionSet) -> bool:
        with self._lock:
            self._rows[user_id] = conditions
        return True

    def has_assessment(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._rows


class JSONAssessmentStore(AssessmentStore):
    """JSON 파일 기반 건강 평가 저장소

    사용자별로 전체 상태 코드의 boolean 행을 저장한다:
    {"user_123": {"back_pain": true, "stress": false, ..., "updated_at": "..."}}
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _read_rows(self) -> Dict[str, dict]:
        """저장 파일 읽기 (없거나 손상 시 빈 딕셔너리)"""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"건강 평가 파일 읽기 실패: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"건강 평가 파일 형식 오류: {self.path}")
            return {}
        return data

    def get_condition_set(self, user_id: str) -> ConditionSet:
        with self._lock:
            row = self._read_rows().get(user_id)

        if not isinstance(row, dict):
            return ConditionSet()

        return ConditionSet.from_flags(
            {k: v for k, v in row.items() if k not in _ROW_META_KEYS}
        )

    def save_condition_set(self, user_id: str, conditions: ConditionSet) -> bool:
        row = {
            "user_id": user_id,
            **conditions.to_flags(),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            with self._lock:
                rows = self._read_rows()
                rows[user_id] = row
                tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(rows, f, ensure_ascii=False, indent=2)
                tmp_path.replace(self.path)
        except OSError as e:
            logger.error(f"건강 평가 저장 실패 ({user_id}): {e}")
            return False

        logger.info(f"건강 평가 저장: {user_id} → {conditions.keys()}")
        return True

    def has_assessment(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._read_rows()
