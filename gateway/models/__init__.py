"""Gateway Models - 통합 API 모델"""

from .unified import (
    SessionAction,
    SessionCreateRequest,
    SessionConfigureRequest,
    SessionActionResponse,
    SessionHistoryResponse,
)

__all__ = [
    "SessionAction",
    "SessionCreateRequest",
    "SessionConfigureRequest",
    "SessionActionResponse",
    "SessionHistoryResponse",
]
