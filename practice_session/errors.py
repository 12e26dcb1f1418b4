"""수련 세션 오류

- InvalidDuration: 0 이하 또는 정수가 아닌 세션 길이 (상태 변경 없음)
- SessionBusy: 현재 상태와 충돌하는 변경 시도 (상태 변경 없음)
- PersistenceWarning: 세션 기록 저장 실패 (raise 하지 않음, 완료 상태 유지)
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from practice_session.models.session import SessionRecord, SessionState


class PracticeSessionError(Exception):
    """수련 세션 오류 기본 클래스"""


class InvalidDuration(PracticeSessionError, ValueError):
    """세션 길이 오류"""

    def __init__(self, duration: object):
        super().__init__(f"세션 길이는 양의 정수(초)여야 합니다: {duration!r}")
        self.duration = duration


class SessionBusy(PracticeSessionError):
    """진행 중 세션 변경 시도"""

    def __init__(self, state: "SessionState", message: Optional[str] = None):
        super().__init__(
            message or f"진행 중인 세션은 변경할 수 없습니다 (state={state.value}). 먼저 stop() 하세요"
        )
        self.state = state


class PersistenceWarning(PracticeSessionError):
    """세션 기록 저장 실패 (비치명적)"""

    def __init__(
        self,
        record: "SessionRecord",
        cause: Optional[BaseException] = None,
    ):
        detail = f": {cause}" if cause else ""
        super().__init__(f"세션 기록 저장 실패 ({record.exercise_name}){detail}")
        self.record = record
        self.cause = cause
