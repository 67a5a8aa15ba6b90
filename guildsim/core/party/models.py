"""파티 / 장비 도메인 모델"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Optional

from guildsim.core.character.models import StatType
from guildsim.core.event_bus import EventPort, publish
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import log_rule_violation
from guildsim.core.party.calculations import (
    calculate_effective_stat,
    calculate_success_rate,
)
from guildsim.core.rules import (
    DEFAULT_LOYALTY,
    EXPERIENCE_PER_STAT_POINT,
    LOYALTY_UNAVAILABLE_THRESHOLD,
    MAX_LOYALTY,
    MAX_STAT_VALUE,
    MIN_LOYALTY,
    MIN_STAT_VALUE,
    clamp,
    clamp_stat,
    new_entity_id,
)

if TYPE_CHECKING:
    from guildsim.core.quest.models import Quest

logger = logging.getLogger(__name__)

# 파티는 정확히 이 3종 스탯만 가진다
PARTY_STAT_TYPES: tuple[StatType, ...] = (
    StatType.EXPLORATION,
    StatType.COMBAT,
    StatType.ADMIN,
)


@dataclass
class Equipment:
    """파티에 장착하는 스탯 보너스 아이템"""

    name: str
    cost: int = 0
    stat_bonuses: dict[StatType, int] = field(default_factory=dict)
    equipment_id: str = field(default_factory=new_entity_id)


@dataclass
class Party:
    """모험가 파티.

    stats는 항상 PARTY_STAT_TYPES 3종, 각 1 ~ 20.
    loyalty 0 ~ 100, 20 미만이면 배정 불가.
    """

    name: str
    stats: dict[StatType, int] = field(default_factory=dict)
    loyalty: int = DEFAULT_LOYALTY
    equipment: list[Equipment] = field(default_factory=list)
    experience: int = 0
    is_available: bool = True
    specializations: list[str] = field(default_factory=list)
    last_quest_day: Optional[int] = None
    party_id: str = field(default_factory=new_entity_id)
    bus: Optional[EventPort] = field(default=None, repr=False, compare=False)
    rng: random.Random = field(
        default_factory=random.Random, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        unknown = [s for s in self.stats if s not in PARTY_STAT_TYPES]
        if unknown:
            raise ValueError(
                f"Party stats must be {[s.value for s in PARTY_STAT_TYPES]}, "
                f"got {[s.value for s in unknown]}"
            )
        self.stats = {
            stat_type: clamp_stat(self.stats.get(stat_type, MIN_STAT_VALUE))
            for stat_type in PARTY_STAT_TYPES
        }
        self.loyalty = clamp(self.loyalty, MIN_LOYALTY, MAX_LOYALTY)

    # ── 검증 ─────────────────────────────────────────────────

    def is_valid(self) -> bool:
        if len(self.stats) != len(PARTY_STAT_TYPES):
            log_rule_violation(
                logger,
                self.party_id,
                "stats",
                f"Party {self.name}: expected {len(PARTY_STAT_TYPES)} stats, "
                f"got {len(self.stats)}",
                logging.ERROR,
            )
            return False

        for stat_type, value in self.stats.items():
            if value < MIN_STAT_VALUE or value > MAX_STAT_VALUE:
                log_rule_violation(
                    logger,
                    self.party_id,
                    f"stats.{stat_type.value}",
                    f"Party {self.name}: invalid stat value {stat_type.value}={value}",
                    logging.ERROR,
                )
                return False

        if self.loyalty < MIN_LOYALTY or self.loyalty > MAX_LOYALTY:
            log_rule_violation(
                logger,
                self.party_id,
                "loyalty",
                f"Party {self.name}: invalid loyalty {self.loyalty}",
                logging.ERROR,
            )
            return False

        return True

    # ── 스탯 / 성공률 ────────────────────────────────────────

    def get_effective_stat(self, stat_type: StatType) -> int:
        return calculate_effective_stat(
            self.stats, (eq.stat_bonuses for eq in self.equipment), stat_type
        )

    def meets_requirements(self, required_stats: Mapping[StatType, int]) -> bool:
        """모든 요구 스탯에 대해 유효 스탯 ≥ 요구치."""
        return all(
            self.get_effective_stat(stat_type) >= value
            for stat_type, value in required_stats.items()
        )

    def calculate_success_rate(self, quest: Optional[Quest]) -> float:
        if quest is None or not quest.required_stats:
            return 0.0

        effective = {
            stat_type: self.get_effective_stat(stat_type)
            for stat_type in quest.required_stats
        }
        return calculate_success_rate(effective, quest.required_stats, self.loyalty)

    # ── 장비 ─────────────────────────────────────────────────

    def add_equipment(self, equipment: Optional[Equipment]) -> None:
        if equipment is None:
            return

        self.equipment.append(equipment)
        publish(
            self.bus,
            EventTypes.EQUIPMENT_ADDED,
            "party",
            party_id=self.party_id,
            equipment_id=equipment.equipment_id,
            equipment_name=equipment.name,
        )

    def remove_equipment(self, equipment_id: str) -> bool:
        """첫 번째 일치 항목만 제거."""
        for index, eq in enumerate(self.equipment):
            if eq.equipment_id == equipment_id:
                del self.equipment[index]
                return True
        return False

    # ── 성장 ─────────────────────────────────────────────────

    def add_experience(self, amount: int) -> None:
        """100 경험치마다 무작위 스탯 1포인트.

        상한(20)에 걸린 추첨은 적용되지 않지만 포인트는 소모된다 (재추첨 없음).
        """
        self.experience += amount

        points = self.experience // EXPERIENCE_PER_STAT_POINT
        if points > 0:
            self._improve_random_stats(points)
            self.experience %= EXPERIENCE_PER_STAT_POINT

    def _improve_random_stats(self, points: int) -> None:
        for _ in range(points):
            stat_type = PARTY_STAT_TYPES[self.rng.randrange(len(PARTY_STAT_TYPES))]
            if self.stats[stat_type] >= MAX_STAT_VALUE:
                logger.debug(
                    f"Party {self.name}: {stat_type.value} already at max, point consumed"
                )
                continue

            self.stats[stat_type] += 1
            publish(
                self.bus,
                EventTypes.STAT_CHANGED,
                "party",
                entity_id=self.party_id,
                stat_type=stat_type.value,
                new_value=self.stats[stat_type],
            )

    def train_stat(self, stat_type: StatType, amount: int) -> bool:
        """훈련으로 스탯 상승 (상한 20). 이미 상한이면 False."""
        if self.stats[stat_type] >= MAX_STAT_VALUE:
            log_rule_violation(
                logger,
                self.party_id,
                f"stats.{stat_type.value}",
                f"Party {self.name}: {stat_type.value} already at maximum",
            )
            return False

        self.stats[stat_type] = min(self.stats[stat_type] + amount, MAX_STAT_VALUE)
        publish(
            self.bus,
            EventTypes.STAT_CHANGED,
            "party",
            entity_id=self.party_id,
            stat_type=stat_type.value,
            new_value=self.stats[stat_type],
        )
        return True

    # ── 충성도 / 가용성 ──────────────────────────────────────

    def modify_loyalty(self, delta: int) -> None:
        """0 ~ 100 클램프. 임계 미만이면 배정 불가로 전환.

        임계 이상으로 회복해도 가용성은 자동 복구되지 않는다
        (update_availability()에서만 복구).
        """
        self.loyalty = clamp(self.loyalty + delta, MIN_LOYALTY, MAX_LOYALTY)

        if self.loyalty < LOYALTY_UNAVAILABLE_THRESHOLD:
            self.is_available = False

    def update_availability(self) -> None:
        self.is_available = self.loyalty >= LOYALTY_UNAVAILABLE_THRESHOLD
