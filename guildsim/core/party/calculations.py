"""유효 스탯 / 퀘스트 성공률 계산

전부 순수 함수 — 외부 의존 없음.
"""

from typing import Iterable, Mapping

from guildsim.core.character.models import StatType
from guildsim.core.rules import MAX_LOYALTY, clamp_stat


def calculate_effective_stat(
    base_stats: Mapping[StatType, int],
    bonuses: Iterable[Mapping[StatType, int]],
    stat_type: StatType,
) -> int:
    """기본 스탯(미보유 0) + 장비 보너스 합, 마지막에 한 번만 1 ~ 20 클램프.

    중간 합계는 클램프하지 않는다.
    """
    base = base_stats.get(stat_type, 0)
    bonus = sum(b.get(stat_type, 0) for b in bonuses)
    return clamp_stat(base + bonus)


def loyalty_modifier(loyalty: int) -> float:
    """충성도 0 → 0.5, 100 → 1.0."""
    return 0.5 + 0.5 * (loyalty / MAX_LOYALTY)


def calculate_success_rate(
    effective_stats: Mapping[StatType, int],
    required_stats: Mapping[StatType, int],
    loyalty: int,
) -> float:
    """성공률 = (Σ min(유효, 요구) / Σ 요구) × 충성도 보정, 0 ~ 1 클램프.

    요구 스탯이 비어 있으면 0.0. 요구 항목은 있으나 합계가 0이면
    기본 성공률 1.0 (충성도 보정은 그대로 적용).
    effective_stats에 없는 종류는 0으로 본다.
    """
    if not required_stats:
        return 0.0

    matched = 0
    required = 0
    for stat_type, value in required_stats.items():
        matched += min(effective_stats.get(stat_type, 0), value)
        required += value

    base_rate = 1.0 if required == 0 else matched / required
    return max(0.0, min(1.0, base_rate * loyalty_modifier(loyalty)))
