"""Practice Session Models"""

from .session import (
    SessionState,
    SessionExercise,
    SessionRecord,
    SessionSnapshot,
    format_time,
)

__all__ = [
    "SessionState",
    "SessionExercise",
    "SessionRecord",
    "SessionSnapshot",
    "format_time",
]
