"""오케스트레이션 서비스

건강 평가 → 요가 추천 → 수련 세션 → 기록 저장
전체 흐름을 조율하고 활성 세션을 관리
"""

import threading
import time
from typing import Callable, Dict, List, Optional
import logging

from langsmith import traceable

from shared.models import Condition, ConditionSet
from yoga_recommendation.config import settings as recommendation_settings
from yoga_recommendation.models import (
    AssessmentInput,
    AssessmentOutput,
    ConditionInfo,
    YogaRecommendationInput,
    YogaRecommendationOutput,
)
from yoga_recommendation.pipeline import YogaRecommendationPipeline
from yoga_recommendation.services import (
    AssessmentStore,
    ExerciseCatalog,
    JSONAssessmentStore,
    RecommendationResolver,
    load_default_catalog,
)
from practice_session.config import settings as session_settings
from practice_session.models import SessionExercise, SessionSnapshot, SessionState
from practice_session.services import (
    JSONLSessionStorage,
    PracticeSessionController,
    SessionRecordStorage,
    ThreadTicker,
    Ticker,
)
from gateway.models import (
    SessionAction,
    SessionActionResponse,
    SessionConfigureRequest,
    SessionCreateRequest,
    SessionHistoryResponse,
)

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    """존재하지 않는 세션 ID"""

    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"세션을 찾을 수 없습니다: {self.session_id}"


class OrchestrationService:
    """통합 오케스트레이션 서비스

    책임:
    1. 건강 평가 저장/조회 (AssessmentStore)
    2. 요가 추천 실행 (YogaRecommendationPipeline)
    3. 활성 세션 관리 (세션당 PracticeSessionController 1개)
    4. 수련 기록 조회 (SessionRecordStorage)
    """

    def __init__(
        self,
        assessment_store: Optional[AssessmentStore] = None,
        session_storage: Optional[SessionRecordStorage] = None,
        catalog: Optional[ExerciseCatalog] = None,
        ticker_factory: Optional[Callable[[], Ticker]] = None,
        session_ttl_seconds: Optional[float] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            assessment_store: 건강 평가 저장소 (기본값: JSON 파일)
            session_storage: 세션 기록 저장소 (기본값: JSONL 파일)
            catalog: 운동 카탈로그 (기본값: 설정 경로)
            ticker_factory: 세션별 틱 스케줄러 생성 함수 (기본값: ThreadTicker)
            session_ttl_seconds: running 이 아닌 세션 보관 시간 (기본값: 설정값)
            clock: 단조 시계 (기본값: time.monotonic)
        """
        self.assessment_store = assessment_store or JSONAssessmentStore(
            recommendation_settings.resolved_assessment_store_path
        )
        self.session_storage = session_storage or JSONLSessionStorage(
            session_settings.resolved_session_storage_dir
        )
        self.resolver = RecommendationResolver(catalog or load_default_catalog())
        self.recommendation_pipeline = YogaRecommendationPipeline(
            assessment_store=self.assessment_store,
            resolver=self.resolver,
        )

        self._ticker_factory = ticker_factory or (
            lambda: ThreadTicker(session_settings.tick_interval_seconds)
        )
        self._sessions: Dict[str, PracticeSessionController] = {}
        self._last_access: Dict[str, float] = {}
        self._session_ttl = session_ttl_seconds or session_settings.session_idle_ttl_seconds
        self._clock = clock or time.monotonic
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # 건강 평가 / 추천
    # ------------------------------------------------------------------

    def list_conditions(self) -> List[ConditionInfo]:
        """선택 가능한 건강 상태 목록"""
        return [ConditionInfo.from_condition(c) for c in Condition]

    def save_assessment(self, user_id: str, assessment: AssessmentInput) -> AssessmentOutput:
        """건강 평가 교체 저장"""
        condition_set = assessment.to_condition_set()
        if not self.assessment_store.save_condition_set(user_id, condition_set):
            raise RuntimeError(f"건강 평가 저장 실패: {user_id}")
        return AssessmentOutput.build(user_id, condition_set, has_assessment=True)

    def get_assessment(self, user_id: str) -> AssessmentOutput:
        return AssessmentOutput.build(
            user_id,
            self.assessment_store.get_condition_set(user_id),
            has_assessment=self.assessment_store.has_assessment(user_id),
        )

    @traceable(name="yoga_recommendation")
    def recommend(self, user_id: str) -> YogaRecommendationOutput:
        return self.recommendation_pipeline.run(YogaRecommendationInput(user_id=user_id))

    # ------------------------------------------------------------------
    # 수련 세션
    # ------------------------------------------------------------------

    @traceable(name="create_practice_session")
    def create_session(self, request: SessionCreateRequest) -> SessionSnapshot:
        """
        세션 생성 (+ 설정, 선택적으로 시작)

        Raises:
            InvalidDuration: 세션 길이 오류
            ValueError: 카탈로그에 없는 운동
        """
        exercise = request.exercise or self._lookup_exercise(
            request.condition, request.exercise_name
        )

        duration = request.duration_seconds
        if duration is None:
            duration = (
                exercise.suggested_duration_seconds
                if exercise and exercise.suggested_duration_seconds
                else session_settings.default_duration_seconds
            )

        controller = PracticeSessionController(
            recorder=self.session_storage,
            ticker=self._ticker_factory(),
            user_id=request.user_id,
        )
        controller.configure(duration, exercise)
        if request.auto_start:
            controller.start()

        with self._lock:
            self._prune_locked()
            self._sessions[controller.session_id] = controller
            self._last_access[controller.session_id] = self._clock()

        return controller.snapshot()

    def get_controller(self, session_id: str) -> PracticeSessionController:
        with self._lock:
            self._prune_locked()
            controller = self._sessions.get(session_id)
            if controller is not None:
                self._last_access[session_id] = self._clock()
        if controller is None:
            raise SessionNotFound(session_id)
        return controller

    def get_session(self, session_id: str) -> SessionSnapshot:
        return self.get_controller(session_id).snapshot()

    def configure_session(
        self, session_id: str, request: SessionConfigureRequest
    ) -> SessionSnapshot:
        """
        세션 재설정

        Raises:
            SessionNotFound / InvalidDuration / SessionBusy
        """
        controller = self.get_controller(session_id)

        if request.minutes is not None:
            controller.configure_minutes(request.minutes, request.exercise)
        elif request.duration_seconds is not None:
            controller.configure(request.duration_seconds, request.exercise)
        else:
            controller.configure(controller.duration_seconds, request.exercise)

        return controller.snapshot()

    def control_session(self, session_id: str, action: SessionAction) -> SessionActionResponse:
        controller = self.get_controller(session_id)

        handlers = {
            SessionAction.START: controller.start,
            SessionAction.PAUSE: controller.pause,
            SessionAction.RESUME: controller.resume,
            SessionAction.STOP: controller.stop,
        }
        accepted = handlers[action]()

        return SessionActionResponse(
            action=action.value,
            accepted=accepted,
            session=controller.snapshot(),
        )

    def discard_session(self, session_id: str) -> None:
        """세션 폐기 (화면 이탈)"""
        with self._lock:
            controller = self._sessions.pop(session_id, None)
            self._last_access.pop(session_id, None)
        if controller is None:
            raise SessionNotFound(session_id)
        controller.close()

    def session_history(self, user_id: str) -> SessionHistoryResponse:
        sessions = self.session_storage.list_sessions(user_id)
        return SessionHistoryResponse(
            user_id=user_id,
            sessions=sessions,
            stats=self.session_storage.get_stats(user_id),
        )

    def shutdown(self) -> None:
        """모든 활성 세션 정리"""
        with self._lock:
            controllers = list(self._sessions.values())
            self._sessions.clear()
            self._last_access.clear()
        for controller in controllers:
            controller.close()
        logger.info(f"활성 세션 {len(controllers)}개 정리")

    @property
    def active_session_count(self) -> int:
        """running 또는 paused 세션 수"""
        with self._lock:
            return sum(1 for c in self._sessions.values() if c.is_active)

    @property
    def session_count(self) -> int:
        """보관 중인 세션 수 (idle / completed 포함)"""
        with self._lock:
            return len(self._sessions)

    def prune_sessions(self) -> int:
        """오래 접근하지 않은 세션 정리

        running 세션은 제외 (완료 후 보관 시간이 다시 적용됨)

        Returns:
            정리된 세션 수
        """
        with self._lock:
            return self._prune_locked()

    def _prune_locked(self) -> int:
        now = self._clock()
        expired = []
        for session_id, controller in self._sessions.items():
            # running 세션은 보관 시간이 완료 이후부터 적용되도록 갱신
            if controller.state == SessionState.RUNNING:
                self._last_access[session_id] = now
            elif now - self._last_access.get(session_id, now) >= self._session_ttl:
                expired.append(session_id)

        for session_id in expired:
            self._last_access.pop(session_id, None)
            self._sessions.pop(session_id).close()

        if expired:
            logger.info(f"미사용 세션 {len(expired)}개 정리")
        return len(expired)

    def _lookup_exercise(
        self,
        condition: Optional[Condition],
        exercise_name: Optional[str],
    ) -> Optional[SessionExercise]:
        """카탈로그에서 운동 조회 (condition + exercise_name)"""
        if condition is None and exercise_name is None:
            return None
        if condition is None or exercise_name is None:
            raise ValueError("condition 과 exercise_name 은 함께 지정해야 합니다")

        for recommendation in self.resolver.resolve(ConditionSet.of(condition)):
            if recommendation.name == exercise_name:
                return SessionExercise.from_recommendation(recommendation)

        raise ValueError(
            f"카탈로그에 없는 운동: {exercise_name} ({condition.value})"
        )
