"""건강 상태(Condition) 모델 (공유)

자가 보고 건강 상태 코드는 저장소 키이자 카탈로그 조회 키로 쓰이므로
문자열 값이 바뀌면 안 된다.
"""

from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)


class Condition(str, Enum):
    """건강 상태 코드 (정의 순서 = 정규 순서)"""

    BACK_PAIN = "back_pain"
    NECK_PAIN = "neck_pain"
    STRESS = "stress"
    INSOMNIA = "insomnia"
    DIGESTIVE_ISSUES = "digestive_issues"
    JOINT_PAIN = "joint_pain"
    HIGH_BLOOD_PRESSURE = "high_blood_pressure"
    OBESITY = "obesity"
    RESPIRATORY_ISSUES = "respiratory_issues"
    DIABETES = "diabetes"
    ARTHRITIS = "arthritis"
    ANXIETY = "anxiety"
    DEPRESSION = "depression"
    MIGRAINE = "migraine"
    THYROID = "thyroid"
    HEART_DISEASE = "heart_disease"
    ASTHMA = "asthma"
    ALLERGIES = "allergies"

    @classmethod
    def parse(cls, key: Union[str, "Condition"]) -> Optional["Condition"]:
        """문자열 키 → Condition (알 수 없는 키는 None)"""
        if isinstance(key, Condition):
            return key
        try:
            return cls(str(key).strip().lower())
        except ValueError:
            return None

    @property
    def label(self) -> str:
        """화면 표시용 이름"""
        return CONDITION_INFO[self]["label"]

    @property
    def description(self) -> str:
        return CONDITION_INFO[self]["description"]

    @property
    def category_label(self) -> str:
        """세션 기록용 카테고리 라벨 (back_pain → "back pain")"""
        return condition_label(self)


CONDITION_INFO: Dict[Condition, Dict[str, str]] = {
    Condition.BACK_PAIN: {
        "label": "Back Pain",
        "description": "Pain in the lower, middle, or upper back",
    },
    Condition.NECK_PAIN: {
        "label": "Neck Pain",
        "description": "Stiffness or pain in the neck area",
    },
    Condition.STRESS: {
        "label": "Stress",
        "description": "Feeling overwhelmed or tense",
    },
    Condition.INSOMNIA: {
        "label": "Insomnia",
        "description": "Difficulty falling or staying asleep",
    },
    Condition.DIGESTIVE_ISSUES: {
        "label": "Digestive Issues",
        "description": "Problems with digestion, bloating, or gut health",
    },
    Condition.JOINT_PAIN: {
        "label": "Joint Pain",
        "description": "Pain in joints like knees, shoulders, or hips",
    },
    Condition.HIGH_BLOOD_PRESSURE: {
        "label": "High Blood Pressure",
        "description": "Elevated blood pressure readings",
    },
    Condition.OBESITY: {
        "label": "Weight Management",
        "description": "Desire to manage or reduce weight",
    },
    Condition.RESPIRATORY_ISSUES: {
        "label": "Respiratory Issues",
        "description": "Breathing problems or allergies",
    },
    Condition.DIABETES: {
        "label": "Diabetes",
        "description": "Type 1 or Type 2 diabetes",
    },
    Condition.ARTHRITIS: {
        "label": "Arthritis",
        "description": "Joint inflammation and stiffness",
    },
    Condition.ANXIETY: {
        "label": "Anxiety",
        "description": "Excessive worry or fear",
    },
    Condition.DEPRESSION: {
        "label": "Depression",
        "description": "Persistent feelings of sadness or loss of interest",
    },
    Condition.MIGRAINE: {
        "label": "Migraine",
        "description": "Severe headaches, often with other symptoms",
    },
    Condition.THYROID: {
        "label": "Thyroid Issues",
        "description": "Thyroid gland disorders",
    },
    Condition.HEART_DISEASE: {
        "label": "Heart Disease",
        "description": "Diagnosed heart or cardiovascular conditions",
    },
    Condition.ASTHMA: {
        "label": "Asthma",
        "description": "Chronic airway inflammation and breathlessness",
    },
    Condition.ALLERGIES: {
        "label": "Allergies",
        "description": "Seasonal or environmental allergies",
    },
}

_CANONICAL_ORDER: Dict[Condition, int] = {c: i for i, c in enumerate(Condition)}


def condition_label(condition: Union[str, Condition]) -> str:
    """카테고리 라벨: 언더스코어를 공백으로 치환"""
    value = condition.value if isinstance(condition, Condition) else str(condition)
    return value.replace("_", " ")


class ConditionSet:
    """사용자 한 명의 특정 시점 건강 상태 집합

    - 중복 불가 (생성 시 제거)
    - 순회 순서는 Condition 정의 순서로 고정 → 결정적
    - 생성 후 변경 불가 (평가 제출 시 통째로 교체)
    """

    __slots__ = ("_conditions",)

    def __init__(self, conditions: Iterable[Union[str, Condition]] = ()):
        parsed = set()
        for key in conditions:
            condition = Condition.parse(key)
            if condition is None:
                logger.debug(f"알 수 없는 건강 상태 코드 무시: {key!r}")
                continue
            parsed.add(condition)

        self._conditions: Tuple[Condition, ...] = tuple(
            sorted(parsed, key=_CANONICAL_ORDER.__getitem__)
        )

    @classmethod
    def of(cls, *conditions: Union[str, Condition]) -> "ConditionSet":
        return cls(conditions)

    @classmethod
    def from_flags(cls, row: Mapping[str, object]) -> "ConditionSet":
        """평가 행 → ConditionSet

        {"back_pain": True, "stress": False, "user_id": "..."} 형태.
        값이 정확히 True 인 상태 코드만 채택 (id, user_id 등 비상태 키 무시).
        """
        return cls(key for key, value in row.items() if value is True)

    def to_flags(self) -> Dict[str, bool]:
        """전체 상태 코드에 대한 boolean 행"""
        return {c.value: c in self._conditions for c in Condition}

    def keys(self) -> List[str]:
        return [c.value for c in self._conditions]

    def __iter__(self) -> Iterator[Condition]:
        return iter(self._conditions)

    def __len__(self) -> int:
        return len(self._conditions)

    def __bool__(self) -> bool:
        return bool(self._conditions)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, (str, Condition)):
            return Condition.parse(item) in self._conditions
        return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConditionSet):
            return self._conditions == other._conditions
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._conditions)

    def __repr__(self) -> str:
        return f"ConditionSet({self.keys()!r})"
