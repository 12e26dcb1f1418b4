"""Practice Session Services"""

from .ticker import Ticker, ManualTicker, ThreadTicker
from .storage import (
    SessionRecordStorage,
    InMemorySessionStorage,
    JSONLSessionStorage,
    SessionStats,
)
from .controller import PracticeSessionController

__all__ = [
    "Ticker",
    "ManualTicker",
    "ThreadTicker",
    "SessionRecordStorage",
    "InMemorySessionStorage",
    "JSONLSessionStorage",
    "SessionStats",
    "PracticeSessionController",
]
