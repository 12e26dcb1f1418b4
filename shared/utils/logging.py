"""프로젝트 로깅 설정

각 모듈은 logging.getLogger(__name__) 로 로거를 얻는다.
configure_logging() 이 패키지 최상위 로거에 stdout 핸들러를 한 번만 붙이므로
하위 모듈 로그가 모두 같은 형식으로 출력된다.
"""

import logging
import sys
from typing import Iterable, Optional, Union

PROJECT_LOGGERS = (
    "shared",
    "yoga_recommendation",
    "practice_session",
    "gateway",
)

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# configure_logging 이 붙인 핸들러 표시
_HANDLER_NAME = "yogaarogya-stdout"


def _parse_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    parsed = logging.getLevelName(str(level).upper())
    if not isinstance(parsed, int):
        raise ValueError(f"알 수 없는 로그 레벨: {level}")
    return parsed


def configure_logging(
    level: Union[int, str] = logging.INFO,
    format_string: Optional[str] = None,
    logger_names: Iterable[str] = PROJECT_LOGGERS,
) -> None:
    """
    프로젝트 패키지 로거 설정 (중복 호출 시 레벨/형식만 갱신)

    Args:
        level: 로그 레벨 (int 또는 "INFO" 같은 이름)
        format_string: 포맷 문자열 (기본값: DEFAULT_FORMAT)
        logger_names: 핸들러를 붙일 최상위 로거 이름
    """
    level = _parse_level(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    for name in logger_names:
        logger = logging.getLogger(name)
        logger.setLevel(level)

        handler = next(
            (h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None
        )
        if handler is None:
            handler = logging.StreamHandler(sys.stdout)
            handler.set_name(_HANDLER_NAME)
            logger.addHandler(handler)
        handler.setLevel(level)
        handler.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    """프로젝트 로거 (최상위 패키지 로거가 설정되지 않았으면 기본 설정 적용)"""
    root_name = name.split(".", 1)[0]
    if root_name in PROJECT_LOGGERS and not any(
        h.get_name() == _HANDLER_NAME for h in logging.getLogger(root_name).handlers
    ):
        configure_logging(logger_names=(root_name,))
    return logging.getLogger(name)
