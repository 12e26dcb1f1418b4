"""수련 세션 컨트롤러

운동 1회 시도당 하나의 상태 머신:

    idle ──start──▶ running ──pause──▶ paused
     ▲                │  ▲               │
     │                │  └────resume─────┘
     └─────stop───────┤
                      └──(남은 시간 0)──▶ completed ──configure──▶ idle

- running 동안 틱 1회마다 남은 시간이 정확히 1초 감소
- 남은 시간이 0이 되는 틱에서 completed 로 전이하며 SessionRecord 를 동기적으로 1회 발행
- 기록 저장 실패는 완료 상태를 되돌리지 않고 PersistenceWarning 으로 보고
"""

from datetime import datetime
from functools import partial
from typing import Callable, List, Optional
import logging
import threading
import uuid

from practice_session.config import settings
from practice_session.errors import InvalidDuration, PersistenceWarning, SessionBusy
from practice_session.models.session import (
    SessionExercise,
    SessionRecord,
    SessionSnapshot,
    SessionState,
    format_time,
    utcnow,
)
from practice_session.services.storage import SessionRecordStorage
from practice_session.services.ticker import ManualTicker, Ticker

logger = logging.getLogger(__name__)


def _validate_duration(duration_seconds: object) -> int:
    # bool 은 int 의 하위 타입이므로 별도로 거부
    if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int):
        raise InvalidDuration(duration_seconds)
    if duration_seconds <= 0:
        raise InvalidDuration(duration_seconds)
    return duration_seconds


class PracticeSessionController:
    """수련 세션 상태 머신

    사용 예시:
        controller = PracticeSessionController(recorder=storage, ticker=ThreadTicker())
        controller.configure(300, SessionExercise(name="Child's Pose (Balasana)"))
        controller.start()
        ...
        controller.snapshot().remaining_display  # "04:12"

    호출자는 조작을 직렬화해야 한다. 내부 락은 틱 스레드와의 경합만 막는다.
    """

    def __init__(
        self,
        recorder: Optional[SessionRecordStorage] = None,
        ticker: Optional[Ticker] = None,
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
        on_warning: Optional[Callable[[PersistenceWarning], None]] = None,
        default_duration_seconds: Optional[int] = None,
    ):
        """
        Args:
            recorder: 세션 기록 저장소 (None 이면 저장 생략)
            ticker: 틱 스케줄러 (기본값: ManualTicker)
            user_id: 사용자 ID (기록에 포함)
            session_id: 세션 ID (기본값: uuid4)
            clock: 현재 시간 함수 (기본값: UTC now)
            on_warning: 비치명적 경고 콜백
            default_duration_seconds: configure 전 기본 길이
        """
        self.recorder = recorder
        self.ticker = ticker or ManualTicker()
        self.user_id = user_id
        self.session_id = session_id or str(uuid.uuid4())
        self._clock = clock or utcnow
        self._on_warning = on_warning

        duration = _validate_duration(
            default_duration_seconds or settings.default_duration_seconds
        )

        self._lock = threading.RLock()
        self._state = SessionState.IDLE
        self._duration = duration
        self._remaining = duration
        self._exercise: Optional[SessionExercise] = None
        self._started_at: Optional[datetime] = None
        self._completed_at: Optional[datetime] = None

        # 예약된 틱은 생성 시점의 세대에 묶임 → running 이탈 시 세대 증가
        self._generation = 0
        self._record_emitted = False

        self.last_record: Optional[SessionRecord] = None
        self.completed_exercises: List[str] = []
        self.warnings: List[PersistenceWarning] = []

    # ------------------------------------------------------------------
    # 상태 전이
    # ------------------------------------------------------------------

    def configure(
        self,
        duration_seconds: int,
        exercise: Optional[SessionExercise] = None,
    ) -> None:
        """
        세션 길이/운동 설정 → idle

        Args:
            duration_seconds: 전체 시간 (양의 정수, 초)
            exercise: 운동 정보 (None 이면 기존 운동 유지)

        Raises:
            InvalidDuration: 길이가 양의 정수가 아님
            SessionBusy: running 중 변경 시도
        """
        duration = _validate_duration(duration_seconds)

        with self._lock:
            if self._state == SessionState.RUNNING:
                raise SessionBusy(self._state)

            self._cancel_tick()
            self._duration = duration
            self._remaining = duration
            if exercise is not None:
                self._exercise = exercise
            self._started_at = None
            self._completed_at = None
            self._record_emitted = False
            self._state = SessionState.IDLE

        logger.info(
            f"[{self.session_id[:8]}] 세션 설정: "
            f"{self.exercise_name} ({format_time(duration)})"
        )

    def configure_minutes(
        self,
        minutes: int,
        exercise: Optional[SessionExercise] = None,
    ) -> None:
        """빠른 시간 설정 (분 단위)"""
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
            raise InvalidDuration(minutes)
        self.configure(minutes * 60, exercise)

    def start(self) -> bool:
        """idle → running (시작 시간은 설정당 최초 1회만 기록)"""
        with self._lock:
            if self._state != SessionState.IDLE:
                return False

            if self._started_at is None:
                self._started_at = self._clock()
            self._state = SessionState.RUNNING
            self._schedule_tick()

        logger.info(f"[{self.session_id[:8]}] 세션 시작")
        return True

    def pause(self) -> bool:
        """running → paused"""
        with self._lock:
            if self._state != SessionState.RUNNING:
                return False
            self._cancel_tick(suspend=True)
            self._state = SessionState.PAUSED
        return True

    def resume(self) -> bool:
        """paused → running"""
        with self._lock:
            if self._state != SessionState.PAUSED:
                return False
            self._state = SessionState.RUNNING
            self._schedule_tick()
        return True

    def toggle_pause(self) -> bool:
        """일시정지/재개 토글 (둘 다 불가하면 False)"""
        with self._lock:
            if self._state == SessionState.RUNNING:
                return self.pause()
            return self.resume()

    def stop(self) -> bool:
        """running/paused → idle (남은 시간 초기화, 기록 없음)"""
        with self._lock:
            if not self._state.is_active:
                return False
            self._cancel_tick()
            self._remaining = self._duration
            self._state = SessionState.IDLE

        logger.info(f"[{self.session_id[:8]}] 세션 중단 (기록 없음)")
        return True

    def tick(self, generation: Optional[int] = None) -> Optional[SessionRecord]:
        """
        1초 경과 처리

        Args:
            generation: 예약 시점 세대 (다르면 지난 틱 → 무시)

        Returns:
            이번 틱으로 완료되어 발행된 SessionRecord (그 외 None)
        """
        with self._lock:
            if self._state != SessionState.RUNNING:
                return None
            if generation is not None and generation != self._generation:
                return None

            self._remaining -= 1
            if self._remaining > 0:
                return None

            self._remaining = 0
            self._cancel_tick()
            self._state = SessionState.COMPLETED
            self._completed_at = self._clock()

            if self._record_emitted:
                return None
            self._record_emitted = True

            record = self._build_record()
            self.last_record = record
            self.completed_exercises.append(record.exercise_name)

        logger.info(
            f"[{self.session_id[:8]}] 세션 완료: "
            f"{record.exercise_name} ({format_time(record.duration_seconds)})"
        )
        self._emit(record)
        return record

    # ------------------------------------------------------------------
    # 조회 (상태 변경 없음)
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def exercise(self) -> Optional[SessionExercise]:
        return self._exercise

    @property
    def exercise_name(self) -> str:
        if self._exercise is None:
            return settings.default_exercise_name
        return self._exercise.name

    @property
    def duration_seconds(self) -> int:
        return self._duration

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def elapsed_seconds(self) -> int:
        return self._duration - self._remaining

    @property
    def progress(self) -> float:
        """진행률 (0-1 범위로 고정)"""
        return min(1.0, max(0.0, self.elapsed_seconds / self._duration))

    @property
    def progress_percent(self) -> int:
        return round(self.progress * 100)

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    def snapshot(self) -> SessionSnapshot:
        """현재 세션 상태"""
        with self._lock:
            return SessionSnapshot(
                session_id=self.session_id,
                user_id=self.user_id,
                state=self._state,
                exercise=self._exercise,
                duration_seconds=self._duration,
                remaining_seconds=self._remaining,
                elapsed_seconds=self.elapsed_seconds,
                progress=self.progress,
                progress_percent=self.progress_percent,
                is_active=self.is_active,
                remaining_display=format_time(self._remaining),
                elapsed_display=format_time(self.elapsed_seconds),
                started_at=self._started_at,
                completed_at=self._completed_at,
                completed_exercises=list(self.completed_exercises),
                warnings=[str(w) for w in self.warnings],
            )

    def close(self) -> None:
        """세션 폐기 (화면 이탈) - 예약된 틱 취소, 기록 없음"""
        with self._lock:
            self._cancel_tick()
            if self._state.is_active:
                self._remaining = self._duration
                self._state = SessionState.IDLE

    # ------------------------------------------------------------------
    # 내부
    # ------------------------------------------------------------------

    def _schedule_tick(self) -> None:
        self.ticker.start(partial(self.tick, self._generation))

    def _cancel_tick(self, suspend: bool = False) -> None:
        """예약 틱 취소 (suspend=True 면 진행 중이던 주기를 보관해 resume 시 이어감)"""
        self._generation += 1
        if suspend:
            self.ticker.suspend()
        else:
            self.ticker.cancel()

    def _build_record(self) -> SessionRecord:
        category = (
            self._exercise.category if self._exercise else settings.default_category
        )
        return SessionRecord(
            session_id=self.session_id,
            user_id=self.user_id,
            exercise_name=self.exercise_name,
            duration_seconds=self._duration,
            category=category or settings.default_category,
            started_at=self._started_at,
            completed_at=self._completed_at,
        )

    def _emit(self, record: SessionRecord) -> None:
        """저장소로 기록 전달 (실패해도 완료 상태 유지)"""
        if self.recorder is None:
            return

        cause: Optional[BaseException] = None
        try:
            saved = self.recorder.record_session(record)
        except Exception as e:
            saved = False
            cause = e

        if saved:
            return

        warning = PersistenceWarning(record, cause)
        with self._lock:
            self.warnings.append(warning)
        logger.warning(f"[{self.session_id[:8]}] {warning}")

        if self._on_warning is not None:
            self._on_warning(warning)
