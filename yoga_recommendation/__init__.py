"""Yoga Recommendation - 건강 상태 기반 요가 운동 추천

주요 기능:
- 정적 카탈로그 로드 (건강 상태 → 운동 목록)
- 결정적 추천 해석 (ConditionSet → Recommendation 목록)
- 건강 평가 저장소 연동
"""

__version__ = "1.0.0"
