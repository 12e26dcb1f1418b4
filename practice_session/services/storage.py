"""세션 기록 저장소

자연 완료된 세션 기록(SessionRecord)의 영구 저장 및 조회
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional
import logging
import threading

from pydantic import BaseModel, Field, ValidationError

from practice_session.models.session import SessionRecord

logger = logging.getLogger(__name__)


class SessionStats(BaseModel):
    """수련 통계 (대시보드용)"""

    user_id: Optional[str] = Field(default=None, description="사용자 ID (None = 전체)")
    total_sessions: int = Field(default=0, description="완료 세션 수")
    total_seconds: int = Field(default=0, description="총 수련 시간 (초)")
    exercises: List[str] = Field(
        default_factory=list, description="완료한 운동 (첫 완료 순, 중복 제거)"
    )
    sessions_by_category: Dict[str, int] = Field(
        default_factory=dict, description="카테고리별 완료 세션 수"
    )

    @property
    def total_minutes(self) -> int:
        return self.total_seconds // 60

    @classmethod
    def from_records(
        cls, records: List[SessionRecord], user_id: Optional[str] = None
    ) -> "SessionStats":
        exercises: List[str] = []
        by_category: Dict[str, int] = {}
        for record in records:
            if record.exercise_name not in exercises:
                exercises.append(record.exercise_name)
            by_category[record.category] = by_category.get(record.category, 0) + 1

        return cls(
            user_id=user_id,
            total_sessions=len(records),
            total_seconds=sum(r.duration_seconds for r in records),
            exercises=exercises,
            sessions_by_category=by_category,
        )


class SessionRecordStorage(ABC):
    """세션 기록 저장소 추상 클래스"""

    @abstractmethod
    def record_session(self, record: SessionRecord) -> bool:
        """기록 저장 (성공 여부 반환)"""

    @abstractmethod
    def list_sessions(self, user_id: Optional[str] = None) -> List[SessionRecord]:
        pass

    def get_stats(self, user_id: Optional[str] = None) -> SessionStats:
        """저장소 통계"""
        return SessionStats.from_records(self.list_sessions(user_id), user_id=user_id)


class InMemorySessionStorage(SessionRecordStorage):
    """메모리 기반 저장소 (테스트/개발용)"""

    def __init__(self):
        self._records: List[SessionRecord] = []
        self._lock = threading.Lock()

    def record_session(self, record: SessionRecord) -> bool:
        with self._lock:
            self._records.append(record)
        return True

    def list_sessions(self, user_id: Optional[str] = None) -> List[SessionRecord]:
        with self._lock:
            records = list(self._records)
        if user_id is None:
            return records
        return [r for r in records if r.user_id == user_id]


class JSONLSessionStorage(SessionRecordStorage):
    """JSONL 파일 기반 세션 기록 저장소

    개발/테스트용. 프로덕션에서는 DB 기반 저장소 사용 권장.
    """

    def __init__(self, storage_dir: Path):
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

        self.sessions_file = self.storage_dir / "yoga_sessions.jsonl"

        self._lock = threading.Lock()

    def _append_jsonl(self, file_path: Path, data: dict) -> bool:
        """JSONL 형식으로 append"""
        try:
            with self._lock:
                with open(file_path, "a", encoding="utf-8") as f:
                    f.write(json.dumps(data, ensure_ascii=False, default=str) + "\n")
            return True
        except OSError as e:
            logger.error(f"세션 기록 저장 실패: {e}")
            return False

    def _read_jsonl(self, file_path: Path) -> List[dict]:
        """JSONL 파일 읽기 (손상된 줄은 건너뜀)"""
        if not file_path.exists():
            return []

        items = []
        with self._lock:
            with open(file_path, "r", encoding="utf-8") as f:
                for line_no, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        items.append(json.loads(line))
                    except json.JSONDecodeError:
                        logger.warning(f"손상된 기록 건너뜀: {file_path.name}:{line_no}")

        return items

    def record_session(self, record: SessionRecord) -> bool:
        return self._append_jsonl(self.sessions_file, record.model_dump(mode="json"))

    def list_sessions(self, user_id: Optional[str] = None) -> List[SessionRecord]:
        records = []
        for item in self._read_jsonl(self.sessions_file):
            try:
                record = SessionRecord(**item)
            except ValidationError:
                logger.warning(f"기록 형식 오류 건너뜀: {item.get('id')}")
                continue
            if user_id is not None and record.user_id != user_id:
                continue
            records.append(record)
        return records
