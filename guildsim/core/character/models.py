"""캐릭터(NPC/플레이어) 도메인 모델"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Optional

from guildsim.core.event_bus import EventPort, publish
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import log_rule_violation
from guildsim.core.rules import (
    MAX_RELATIONSHIP,
    MAX_STAT_VALUE,
    MIN_RELATIONSHIP,
    MIN_STAT_VALUE,
    clamp,
    clamp_stat,
    new_entity_id,
)

logger = logging.getLogger(__name__)


class CharacterType(str, Enum):
    PLAYER = "player"
    NPC = "npc"


class StatType(str, Enum):
    EXPLORATION = "exploration"
    COMBAT = "combat"
    ADMIN = "admin"
    CHARISMA = "charisma"
    EMPATHY = "empathy"
    COURAGE = "courage"


class Alignment(Flag):
    """성향 비트 플래그. ORDER | CHAOS 동시 보유 가능."""

    NEUTRAL = 0
    ORDER = 1
    CHAOS = 2


@dataclass
class Character:
    """NPC/플레이어 레코드.

    relationships: 상대 character_id → -100 ~ +100. 미기록 = 0 (중립).
    """

    name: str
    character_type: CharacterType = CharacterType.NPC
    stats: dict[StatType, int] = field(default_factory=dict)
    relationships: dict[str, int] = field(default_factory=dict)
    alignment: Alignment = Alignment.NEUTRAL
    character_id: str = field(default_factory=new_entity_id)
    bus: Optional[EventPort] = field(default=None, repr=False, compare=False)

    @property
    def is_player(self) -> bool:
        return self.character_type == CharacterType.PLAYER

    # ── 검증 ─────────────────────────────────────────────────

    def is_valid(self) -> bool:
        for stat_type, value in self.stats.items():
            if value < MIN_STAT_VALUE or value > MAX_STAT_VALUE:
                log_rule_violation(
                    logger,
                    self.character_id,
                    f"stats.{stat_type.value}",
                    f"Character {self.name}: invalid stat value "
                    f"{stat_type.value}={value}",
                    logging.ERROR,
                )
                return False

        for target_id, value in self.relationships.items():
            if value < MIN_RELATIONSHIP or value > MAX_RELATIONSHIP:
                log_rule_violation(
                    logger,
                    self.character_id,
                    f"relationships.{target_id}",
                    f"Character {self.name}: invalid relationship value "
                    f"with {target_id}={value}",
                    logging.ERROR,
                )
                return False

        return True

    # ── 스탯 ─────────────────────────────────────────────────

    def get_stat(self, stat_type: StatType) -> int:
        """미보유 스탯은 0."""
        return self.stats.get(stat_type, 0)

    def modify_stat(self, stat_type: StatType, delta: int) -> None:
        """미보유 스탯은 0에서 시작, 1 ~ 20 클램프."""
        self.stats[stat_type] = clamp_stat(self.get_stat(stat_type) + delta)
        publish(
            self.bus,
            EventTypes.STAT_CHANGED,
            "character",
            entity_id=self.character_id,
            stat_type=stat_type.value,
            new_value=self.stats[stat_type],
        )

    # ── 관계 ─────────────────────────────────────────────────

    def get_relationship(self, character_id: str) -> int:
        return self.relationships.get(character_id, 0)

    def modify_relationship(self, character_id: str, delta: int) -> None:
        """미기록 관계는 0으로 초기화 후 delta 적용, -100 ~ +100 클램프."""
        current = self.relationships.setdefault(character_id, 0)
        self.relationships[character_id] = clamp(
            current + delta, MIN_RELATIONSHIP, MAX_RELATIONSHIP
        )
        publish(
            self.bus,
            EventTypes.RELATIONSHIP_CHANGED,
            "character",
            character_id=self.character_id,
            target_id=character_id,
            new_value=self.relationships[character_id],
        )

    # ── 성향 ─────────────────────────────────────────────────

    def set_alignment(self, alignment: Alignment) -> None:
        """덮어쓰기."""
        self.alignment = alignment

    def add_alignment(self, alignment: Alignment) -> None:
        """기존 플래그와 합집합."""
        self.alignment = self.alignment | alignment

    def has_alignment(self, alignment: Alignment) -> bool:
        """요청한 플래그를 전부 보유하는지. NEUTRAL은 항상 True."""
        return (self.alignment & alignment) == alignment
