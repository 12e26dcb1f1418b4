"""Gateway Service - 통합 API 서버

사용법:
    PYTHONPATH=. python -m gateway.main

포트: 8000 (기본)
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import List
import os

from dotenv import load_dotenv
load_dotenv(override=True)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gateway.models import (
    SessionAction,
    SessionActionResponse,
    SessionConfigureRequest,
    SessionCreateRequest,
    SessionHistoryResponse,
)
from gateway.services import OrchestrationService, SessionNotFound
from practice_session.errors import InvalidDuration, SessionBusy
from practice_session.models import SessionSnapshot
from shared.utils import configure_logging, get_logger
from yoga_recommendation.models import (
    AssessmentInput,
    AssessmentOutput,
    ConditionInfo,
    YogaRecommendationOutput,
)

# shared / yoga_recommendation / practice_session / gateway 로거 출력 설정
configure_logging(os.getenv("LOG_LEVEL", "INFO"))
logger = get_logger(__name__)

# 오케스트레이션 서비스 (싱글톤)
orchestration_service: OrchestrationService = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 라이프사이클 관리"""
    global orchestration_service
    logger.info("Gateway Service 시작 중...")
    if orchestration_service is None:
        orchestration_service = OrchestrationService()
    logger.info("Gateway Service 준비 완료")
    yield
    orchestration_service.shutdown()
    logger.info("Gateway Service 종료")


app = FastAPI(
    title="YogaArogya Gateway API",
    description="건강 평가 기반 요가 추천 + 수련 세션 통합 API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _session_error(e: Exception) -> HTTPException:
    """세션 예외 → HTTP 오류"""
    if isinstance(e, SessionNotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, SessionBusy):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@app.get("/health")
async def health_check():
    """헬스 체크"""
    return {
        "status": "healthy",
        "service": "gateway",
        "active_sessions": orchestration_service.active_session_count,
        "held_sessions": orchestration_service.session_count,
        "timestamp": datetime.utcnow().isoformat(),
    }


@app.get("/api/v1/conditions", response_model=List[ConditionInfo])
async def list_conditions():
    """선택 가능한 건강 상태 목록 (평가 화면용)"""
    return orchestration_service.list_conditions()


@app.put("/api/v1/assessments/{user_id}", response_model=AssessmentOutput)
async def save_assessment(user_id: str, request: AssessmentInput):
    """건강 평가 저장 (기존 평가 교체)

    Request:
    ```json
    {"conditions": ["back_pain", "stress"]}
    ```

    알 수 없는 상태 키는 무시된다.
    """
    try:
        return orchestration_service.save_assessment(user_id, request)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=f"처리 실패: {e}")


@app.get("/api/v1/assessments/{user_id}", response_model=AssessmentOutput)
async def get_assessment(user_id: str):
    """건강 평가 조회 (없으면 빈 상태 목록)"""
    return orchestration_service.get_assessment(user_id)


@app.get("/api/v1/recommendations/{user_id}", response_model=YogaRecommendationOutput)
async def get_recommendations(user_id: str):
    """요가 추천

    평가가 없거나 선택된 상태가 없으면 needs_assessment=true, 추천 목록은 비어 있음
    """
    try:
        return orchestration_service.recommend(user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        error_detail = f"{type(e).__name__}: {str(e)}"
        raise HTTPException(
            status_code=500,
            detail=f"처리 실패: {error_detail}"
        )


@app.post("/api/v1/sessions", response_model=SessionSnapshot, status_code=201)
async def create_session(request: SessionCreateRequest):
    """수련 세션 생성

    Request:
    ```json
    {
        "user_id": "user_123",
        "condition": "back_pain",
        "exercise_name": "Child's Pose (Balasana)",
        "duration_seconds": 300,
        "auto_start": true
    }
    ```
    """
    try:
        return orchestration_service.create_session(request)
    except (InvalidDuration, ValueError) as e:
        raise _session_error(e)


@app.get("/api/v1/sessions/{session_id}", response_model=SessionSnapshot)
async def get_session(session_id: str):
    """세션 상태 조회 (남은 시간, 진행률 등)"""
    try:
        return orchestration_service.get_session(session_id)
    except SessionNotFound as e:
        raise _session_error(e)


@app.post("/api/v1/sessions/{session_id}/configure", response_model=SessionSnapshot)
async def configure_session(session_id: str, request: SessionConfigureRequest):
    """세션 재설정 (running 중에는 409)"""
    try:
        return orchestration_service.configure_session(session_id, request)
    except (SessionNotFound, SessionBusy, InvalidDuration) as e:
        raise _session_error(e)


@app.post("/api/v1/sessions/{session_id}/{action}", response_model=SessionActionResponse)
async def control_session(session_id: str, action: SessionAction):
    """세션 제어 (start / pause / resume / stop)

    현재 상태에서 허용되지 않는 동작은 accepted=false 로 응답 (상태 변경 없음)
    """
    try:
        return orchestration_service.control_session(session_id, action)
    except SessionNotFound as e:
        raise _session_error(e)


@app.delete("/api/v1/sessions/{session_id}", status_code=204)
async def discard_session(session_id: str):
    """세션 폐기 (진행 중이던 세션은 기록 없이 종료)"""
    try:
        orchestration_service.discard_session(session_id)
    except SessionNotFound as e:
        raise _session_error(e)


@app.get("/api/v1/users/{user_id}/sessions", response_model=SessionHistoryResponse)
async def session_history(user_id: str):
    """사용자 수련 기록 + 통계"""
    return orchestration_service.session_history(user_id)


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("GATEWAY_HOST", "0.0.0.0")
    port = int(os.getenv("GATEWAY_PORT", "8000"))

    logger.info(f"Gateway Service 시작: http://{host}:{port}")
    uvicorn.run(
        "gateway.main:app",
        host=host,
        port=port,
        reload=True,
    )
