"""요가 추천 파이프라인

전체 흐름:
1. 건강 평가 조회 (AssessmentStore)
2. 카탈로그 기반 추천 해석 (RecommendationResolver)
3. 출력 구성 (빈 평가 → 재평가 안내 플래그)
"""

from typing import Optional
import logging

from langsmith import traceable

from yoga_recommendation.models.input import YogaRecommendationInput
from yoga_recommendation.models.output import YogaRecommendationOutput
from yoga_recommendation.services import (
    AssessmentStore,
    JSONAssessmentStore,
    RecommendationResolver,
    load_default_catalog,
)
from yoga_recommendation.config import settings

logger = logging.getLogger(__name__)


class YogaRecommendationPipeline:
    """요가 추천 파이프라인

    사용 예시:
        pipeline = YogaRecommendationPipeline()
        result = pipeline.run(YogaRecommendationInput(user_id="user_123"))
    """

    def __init__(
        self,
        assessment_store: Optional[AssessmentStore] = None,
        resolver: Optional[RecommendationResolver] = None,
    ):
        self.assessment_store = assessment_store or JSONAssessmentStore(
            settings.resolved_assessment_store_path
        )
        self.resolver = resolver or RecommendationResolver(load_default_catalog())

    @traceable(name="yoga_recommendation_pipeline")
    def run(self, input_data: YogaRecommendationInput) -> YogaRecommendationOutput:
        """
        요가 추천 실행

        Args:
            input_data: 요가 추천 입력

        Returns:
            YogaRecommendationOutput
        """
        # Step 1: 건강 평가 조회
        condition_set = self.assessment_store.get_condition_set(input_data.user_id)

        # 평가가 비어 있으면 추천 없이 재평가 안내
        if not condition_set:
            logger.info(f"건강 평가 없음: {input_data.user_id} → 재평가 안내")
            return YogaRecommendationOutput(
                user_id=input_data.user_id,
                needs_assessment=True,
            )

        # Step 2: 추천 해석
        recommendations = self.resolver.resolve(condition_set)
        counts = self.resolver.count_by_condition(condition_set)

        logger.info(
            f"추천 완료: {input_data.user_id} "
            f"({len(condition_set)}개 상태 → {len(recommendations)}개 운동)"
        )

        return YogaRecommendationOutput(
            user_id=input_data.user_id,
            conditions=list(condition_set),
            recommendations=recommendations,
            count_by_condition={c.value: n for c, n in counts.items()},
            needs_assessment=False,
        )
