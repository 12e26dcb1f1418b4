"""세션 틱 스케줄러

컨트롤러가 소유하고 직접 취소하는 주기 작업.
취소 이후 도착한 틱은 컨트롤러의 세대(generation) 검사로 무시된다.

- ManualTicker: advance(n) 호출 시에만 틱 발생 (테스트/시뮬레이션)
- ThreadTicker: 데몬 스레드 기반 실시간 틱
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional
import logging
import threading
import time

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]


class Ticker(ABC):
    """틱 스케줄러 추상 클래스"""

    @abstractmethod
    def start(self, callback: TickCallback) -> None:
        """시간 단위마다 callback 1회 호출 시작 (기존 예약은 교체)"""

    @abstractmethod
    def cancel(self) -> None:
        """예약 취소 (중복 호출 허용)"""

    def suspend(self) -> None:
        """일시 중단 - 다음 start() 가 남은 주기부터 이어서 틱을 보낸다"""
        self.cancel()

    @property
    @abstractmethod
    def is_scheduled(self) -> bool:
        pass


class ManualTicker(Ticker):
    """수동 틱 스케줄러

    사용 예시:
        ticker = ManualTicker()
        controller = PracticeSessionController(ticker=ticker)
        controller.start()
        ticker.advance(10)  # 10초 경과
    """

    def __init__(self):
        self._callback: Optional[TickCallback] = None
        self.total_fired = 0

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def cancel(self) -> None:
        self._callback = None

    @property
    def is_scheduled(self) -> bool:
        return self._callback is not None

    @property
    def pending_callback(self) -> Optional[TickCallback]:
        """현재 예약된 콜백 (취소 후 늦게 도착하는 틱 재현용)"""
        return self._callback

    def advance(self, ticks: int = 1) -> int:
        """
        틱 발생

        Args:
            ticks: 발생시킬 틱 수

        Returns:
            실제 전달된 틱 수 (도중에 취소되면 중단)
        """
        fired = 0
        for _ in range(ticks):
            callback = self._callback
            if callback is None:
                break
            callback()
            fired += 1
        self.total_fired += fired
        return fired


class _Schedule:
    """ThreadTicker 실행 1회분 상태"""

    def __init__(self, next_at: float):
        self.next_at = next_at
        self.stop_event = threading.Event()


class ThreadTicker(Ticker):
    """데몬 스레드 기반 실시간 틱 스케줄러

    취소 시 스레드를 join 하지 않는다 (콜백이 컨트롤러 락을 기다리는 중일 수 있음).
    이미 발사 직전이던 틱은 컨트롤러의 세대 검사로 무시된다.

    suspend() 는 진행 중이던 주기의 남은 시간을 보관하고, 다음 start() 의
    첫 틱은 그 남은 시간 뒤에 발생한다. 일시정지/재개를 반복해도
    running 상태로 보낸 시간이 버려지지 않는다.
    """

    def __init__(self, interval_seconds: float = 1.0):
        if interval_seconds <= 0:
            raise ValueError(f"틱 간격은 0보다 커야 합니다: {interval_seconds}")
        self.interval_seconds = interval_seconds
        self._schedule: Optional[_Schedule] = None
        self._thread: Optional[threading.Thread] = None
        self._carry: Optional[float] = None
        self._lock = threading.Lock()

    def start(self, callback: TickCallback) -> None:
        with self._lock:
            self._stop_locked()
            delay = self._carry if self._carry is not None else self.interval_seconds
            self._carry = None

            schedule = _Schedule(time.monotonic() + delay)
            thread = threading.Thread(
                target=self._run,
                args=(callback, schedule),
                name="practice-session-ticker",
                daemon=True,
            )
            self._schedule = schedule
            self._thread = thread
            thread.start()

    def cancel(self) -> None:
        with self._lock:
            self._stop_locked()
            self._carry = None

    def suspend(self) -> None:
        with self._lock:
            schedule = self._schedule
            self._stop_locked()
            if schedule is not None:
                left = schedule.next_at - time.monotonic()
                self._carry = min(self.interval_seconds, max(0.0, left))

    def _stop_locked(self) -> None:
        if self._schedule is not None:
            self._schedule.stop_event.set()
        self._schedule = None
        self._thread = None

    @property
    def is_scheduled(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    @property
    def carried_seconds(self) -> Optional[float]:
        """suspend() 로 보관된 남은 주기 (없으면 None)"""
        with self._lock:
            return self._carry

    def _run(self, callback: TickCallback, schedule: _Schedule) -> None:
        stop_event = schedule.stop_event
        while not stop_event.wait(max(0.0, schedule.next_at - time.monotonic())):
            # 다음 틱 시각은 콜백 전에 갱신
            schedule.next_at += self.interval_seconds
            try:
                callback()
            except Exception:
                logger.exception("틱 콜백 실패 - 스케줄러 중단")
                return
