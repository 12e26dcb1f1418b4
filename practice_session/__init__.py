"""Practice Session - 요가 수련 타이머 세션

주요 기능:
- 세션 상태 머신 (idle / running / paused / completed)
- 취소 가능한 1초 틱 스케줄러
- 자연 완료 시 세션 기록 1회 발행
"""

__version__ = "1.0.0"
