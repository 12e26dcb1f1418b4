import pytest

from practice_session.errors import InvalidDuration, PersistenceWarning, SessionBusy
from practice_session.models import SessionExercise, SessionState
from practice_session.services import (
    InMemorySessionStorage,
    ManualTicker,
    PracticeSessionController,
    SessionRecordStorage,
)

CHILD_POSE = SessionExercise(name="Child's Pose (Balasana)", category="back pain")


class FailingStorage(SessionRecordStorage):
    """저장 실패를 흉내내는 저장소"""

    def __init__(self, raises: bool = False):
        self.raises = raises
        self.attempts = 0

    def record_session(self, record):
        self.attempts += 1
        if self.raises:
            raise OSError("disk full")
        return False

    def list_sessions(self, user_id=None):
        return []


def test_initial_state_is_idle_with_default_duration(controller):
    assert controller.state is SessionState.IDLE
    assert controller.duration_seconds == 300
    assert controller.remaining_seconds == 300
    assert controller.exercise_name == "Yoga Session"
    assert controller.progress == 0.0


def test_running_ticks_decrement_by_one(controller, ticker):
    controller.configure(10, CHILD_POSE)
    assert controller.start()

    assert ticker.advance(4) == 4
    assert controller.remaining_seconds == 6
    assert controller.elapsed_seconds == 4
    assert controller.progress == pytest.approx(0.4)
    assert controller.progress_percent == 40


def test_natural_completion_emits_exactly_one_record(controller, ticker, storage, clock):
    controller.configure(3, CHILD_POSE)
    controller.start()

    fired = ticker.advance(10)

    assert fired == 3
    assert controller.state is SessionState.COMPLETED
    assert controller.remaining_seconds == 0
    assert controller.progress == 1.0

    records = storage.list_sessions()
    assert len(records) == 1
    record = records[0]
    assert record.exercise_name == "Child's Pose (Balasana)"
    assert record.duration_seconds == 3
    assert record.category == "back pain"
    assert record.user_id == "user_123"
    assert record.session_id == controller.session_id
    assert record.started_at < record.completed_at
    assert controller.last_record == record
    assert controller.completed_exercises == ["Child's Pose (Balasana)"]


def test_extra_ticks_after_completion_are_ignored(controller, ticker, storage):
    controller.configure(2)
    controller.start()
    callback = ticker.pending_callback
    ticker.advance(2)

    assert callback() is None
    assert controller.tick() is None
    assert len(storage.list_sessions()) == 1


def test_tick_returns_record_on_completing_tick(controller):
    controller.configure(2)
    controller.start()

    assert controller.tick() is None
    record = controller.tick()

    assert record is not None
    assert record.exercise_name == "Yoga Session"
    assert record.category == "general"


def test_pause_freezes_remaining(controller, ticker):
    controller.configure(10)
    controller.start()
    ticker.advance(3)

    assert controller.pause()
    assert controller.state is SessionState.PAUSED
    assert ticker.advance(5) == 0
    assert controller.remaining_seconds == 7


def test_pause_resume_never_double_counts(controller, ticker):
    controller.configure(20)
    controller.start()

    for _ in range(5):
        ticker.advance(1)
        controller.pause()
        controller.resume()

    assert controller.remaining_seconds == 15
    assert controller.state is SessionState.RUNNING


def test_stale_tick_after_pause_and_resume_is_ignored(controller, ticker):
    controller.configure(10)
    controller.start()
    stale = ticker.pending_callback

    controller.pause()
    assert stale() is None
    assert controller.remaining_seconds == 10

    controller.resume()
    assert stale() is None
    assert controller.remaining_seconds == 10

    ticker.advance(1)
    assert controller.remaining_seconds == 9


def test_stale_tick_after_stop_and_restart_is_ignored(controller, ticker):
    controller.configure(5)
    controller.start()
    stale = ticker.pending_callback

    controller.stop()
    controller.start()

    for _ in range(10):
        stale()
    assert controller.remaining_seconds == 5


def test_stop_resets_without_record(controller, ticker, storage):
    controller.configure(10)
    controller.start()
    ticker.advance(4)

    assert controller.stop()

    assert controller.state is SessionState.IDLE
    assert controller.remaining_seconds == 10
    assert not ticker.is_scheduled
    assert storage.list_sessions() == []


def test_stop_from_paused(controller, ticker):
    controller.configure(10)
    controller.start()
    ticker.advance(2)
    controller.pause()

    assert controller.stop()
    assert controller.state is SessionState.IDLE
    assert controller.remaining_seconds == 10


def test_started_at_kept_across_stop_and_cleared_by_configure(controller, ticker, clock):
    controller.configure(10)
    controller.start()
    first_start = controller.started_at
    controller.stop()
    controller.start()

    assert controller.started_at == first_start

    controller.stop()
    controller.configure(10)
    assert controller.started_at is None


def test_invalid_transitions_are_noops(controller):
    assert not controller.pause()
    assert not controller.resume()
    assert not controller.stop()
    assert controller.state is SessionState.IDLE

    controller.start()
    assert not controller.start()
    assert not controller.resume()
    assert controller.state is SessionState.RUNNING


def test_start_from_completed_is_noop(controller, ticker):
    controller.configure(1)
    controller.start()
    ticker.advance(1)

    assert not controller.start()
    assert not controller.stop()
    assert controller.state is SessionState.COMPLETED


@pytest.mark.parametrize("duration", [0, -5, 2.5, "300", True, None])
def test_configure_rejects_invalid_duration(controller, duration):
    controller.configure(42, CHILD_POSE)

    with pytest.raises(InvalidDuration):
        controller.configure(duration)

    assert controller.duration_seconds == 42
    assert controller.remaining_seconds == 42
    assert controller.exercise == CHILD_POSE


def test_invalid_duration_is_a_value_error():
    assert issubclass(InvalidDuration, ValueError)


def test_configure_while_running_raises_busy(controller, ticker):
    controller.configure(10)
    controller.start()
    ticker.advance(2)

    with pytest.raises(SessionBusy):
        controller.configure(60)

    assert controller.state is SessionState.RUNNING
    assert controller.duration_seconds == 10
    assert controller.remaining_seconds == 8


def test_configure_while_paused_resets_to_idle(controller, ticker):
    controller.configure(10)
    controller.start()
    ticker.advance(3)
    controller.pause()

    controller.configure(30)

    assert controller.state is SessionState.IDLE
    assert controller.remaining_seconds == 30
    assert controller.started_at is None


def test_reconfigure_after_completion_allows_another_record(controller, ticker, storage):
    controller.configure(1, CHILD_POSE)
    controller.start()
    ticker.advance(1)

    controller.configure(2)
    assert controller.exercise == CHILD_POSE
    controller.start()
    ticker.advance(2)

    assert len(storage.list_sessions()) == 2
    assert controller.completed_exercises == [CHILD_POSE.name, CHILD_POSE.name]


def test_configure_minutes(controller):
    controller.configure_minutes(5, CHILD_POSE)

    assert controller.duration_seconds == 300
    with pytest.raises(InvalidDuration):
        controller.configure_minutes(0)


def test_toggle_pause(controller):
    controller.configure(10)
    assert not controller.toggle_pause()

    controller.start()
    assert controller.toggle_pause()
    assert controller.state is SessionState.PAUSED
    assert controller.toggle_pause()
    assert controller.state is SessionState.RUNNING


@pytest.mark.parametrize("raises", [False, True])
def test_persistence_failure_keeps_completed_state(ticker, clock, raises):
    storage = FailingStorage(raises=raises)
    received = []
    controller = PracticeSessionController(
        recorder=storage, ticker=ticker, clock=clock, on_warning=received.append
    )
    controller.configure(2, CHILD_POSE)
    controller.start()

    ticker.advance(2)

    assert controller.state is SessionState.COMPLETED
    assert storage.attempts == 1
    assert len(controller.warnings) == 1
    warning = controller.warnings[0]
    assert isinstance(warning, PersistenceWarning)
    assert warning.record.exercise_name == CHILD_POSE.name
    assert received == [warning]
    if raises:
        assert isinstance(warning.cause, OSError)
    assert controller.snapshot().warnings == [str(warning)]


def test_no_recorder_still_completes(ticker):
    controller = PracticeSessionController(ticker=ticker)
    controller.configure(1)
    controller.start()
    ticker.advance(1)

    assert controller.state is SessionState.COMPLETED
    assert controller.last_record is not None
    assert controller.warnings == []


def test_snapshot_reports_display_values(controller, ticker):
    controller.configure(125, CHILD_POSE)
    controller.start()
    ticker.advance(5)

    snapshot = controller.snapshot()

    assert snapshot.state is SessionState.RUNNING
    assert snapshot.remaining_display == "02:00"
    assert snapshot.elapsed_display == "00:05"
    assert snapshot.is_active
    assert snapshot.progress_percent == 4
    assert snapshot.exercise == CHILD_POSE


def test_close_cancels_without_record(controller, ticker, storage):
    controller.configure(3)
    controller.start()
    ticker.advance(1)

    controller.close()

    assert not ticker.is_scheduled
    assert controller.state is SessionState.IDLE
    assert storage.list_sessions() == []


def test_elapsed_plus_remaining_equals_duration(controller, ticker):
    controller.configure(7)
    controller.start()
    for _ in range(7):
        assert controller.elapsed_seconds + controller.remaining_seconds == 7
        assert 0.0 <= controller.progress <= 1.0
        ticker.advance(1)
    assert controller.elapsed_seconds == 7


def test_default_ticker_is_manual():
    controller = PracticeSessionController(recorder=InMemorySessionStorage())

    assert isinstance(controller.ticker, ManualTicker)


def test_full_five_minute_session(controller, ticker, storage):
    controller.configure(300)
    controller.start()

    assert ticker.advance(300) == 300

    assert controller.state is SessionState.COMPLETED
    records = storage.list_sessions()
    assert len(records) == 1
    assert records[0].duration_seconds == 300


def test_pause_at_ten_then_resume_to_completion(controller, ticker, storage):
    controller.configure(60)
    controller.start()
    ticker.advance(10)
    controller.pause()
    ticker.advance(1000)

    controller.resume()
    assert ticker.advance(50) == 50

    assert controller.state is SessionState.COMPLETED
    assert controller.elapsed_seconds == 60
    assert len(storage.list_sessions()) == 1
