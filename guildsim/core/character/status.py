"""관계 수치 → 상태 라벨 / 특수 임계 통과 판정

전부 순수 함수 — 외부 의존 없음.
"""

from enum import Enum
from typing import List

from guildsim.core.rules import (
    HIGH_RELATIONSHIP_THRESHOLD,
    LOW_RELATIONSHIP_THRESHOLD,
    MAX_RELATIONSHIP,
    MIN_RELATIONSHIP,
)


class RelationshipMilestone(str, Enum):
    HIGH = "high_relationship"
    LOW = "low_relationship"
    MAX = "max_relationship"
    MIN = "min_relationship"


# (하한, 라벨). 위에서부터 첫 일치
STATUS_BANDS: list[tuple[int, str]] = [
    (80, "Close Friends"),
    (50, "Good Friends"),
    (20, "Friendly"),
    (-20, "Neutral"),
    (-50, "Unfriendly"),
    (-80, "Hostile"),
]
LOWEST_STATUS = "Enemies"


def relationship_status(value: int) -> str:
    for lower_bound, label in STATUS_BANDS:
        if value >= lower_bound:
            return label
    return LOWEST_STATUS


def crossed_thresholds(previous: int, new: int) -> List[RelationshipMilestone]:
    """previous → new 변동에서 새로 넘은 특수 임계 목록.

    HIGH(≥80), LOW(≤-80), MAX(100), MIN(-100). 이미 넘어 있던 임계는 제외.
    """
    crossed: List[RelationshipMilestone] = []

    if previous < HIGH_RELATIONSHIP_THRESHOLD <= new:
        crossed.append(RelationshipMilestone.HIGH)

    if previous > LOW_RELATIONSHIP_THRESHOLD >= new:
        crossed.append(RelationshipMilestone.LOW)

    if previous < MAX_RELATIONSHIP <= new:
        crossed.append(RelationshipMilestone.MAX)

    if previous > MIN_RELATIONSHIP >= new:
        crossed.append(RelationshipMilestone.MIN)

    return crossed
