# .env 파일을 가장 먼저 로드
from dotenv import load_dotenv
load_dotenv()

from .settings import settings, PracticeSessionSettings

__all__ = ["settings", "PracticeSessionSettings"]
