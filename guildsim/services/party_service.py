"""파티 Service — 모집, 훈련, 장비 구매, 충성도

Service → Core 허용, Service → Service 금지 (EventBus 경유)
"""

import random
from typing import Optional

from guildsim.core.character.models import StatType
from guildsim.core.event_bus import EventBus, GameEvent
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import get_logger
from guildsim.core.party.models import PARTY_STAT_TYPES, Equipment, Party
from guildsim.core.treasury import Treasury

logger = get_logger(__name__)

DEFAULT_MAX_PARTIES = 5
GOLD_PER_TRAINING_POINT = 100


def training_points(cost: int) -> int:
    """100골드당 1포인트, 최소 1."""
    return max(1, cost // GOLD_PER_TRAINING_POINT)


class PartyService:
    """길드 소속 파티 관리"""

    def __init__(
        self,
        treasury: Treasury,
        event_bus: EventBus,
        max_parties: int = DEFAULT_MAX_PARTIES,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._treasury = treasury
        self._bus = event_bus
        self._max_parties = max_parties
        self._rng = rng or random.Random()
        self._parties: list[Party] = []
        # 퀘스트에 배정된 파티 (가용성 재계산 대상 제외)
        self._busy_party_ids: set[str] = set()

        self._bus.subscribe(EventTypes.QUEST_ASSIGNED, self._on_quest_assigned)
        self._bus.subscribe(EventTypes.QUEST_COMPLETED, self._on_party_released)
        self._bus.subscribe(EventTypes.QUEST_REMOVED, self._on_party_released)

    def close(self) -> None:
        """구독 해제"""
        self._bus.unsubscribe(EventTypes.QUEST_ASSIGNED, self._on_quest_assigned)
        self._bus.unsubscribe(EventTypes.QUEST_COMPLETED, self._on_party_released)
        self._bus.unsubscribe(EventTypes.QUEST_REMOVED, self._on_party_released)

    # ── 모집 ─────────────────────────────────────────────────

    def recruit_party(self, party_name: str, cost: int) -> Optional[Party]:
        """정원/골드 확인 후 신규 파티 생성. 실패 시 None."""
        if len(self._parties) >= self._max_parties:
            logger.warning(
                f"Cannot recruit {party_name}: maximum party capacity "
                f"({self._max_parties}) reached"
            )
            return None

        if not self._treasury.can_afford(cost):
            logger.warning(
                f"Cannot recruit {party_name}: insufficient funds "
                f"(need {cost}, have {self._treasury.gold})"
            )
            return None

        self._treasury.modify_gold(-cost)

        party = Party(name=party_name, bus=self._bus, rng=self._rng)
        self._parties.append(party)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.PARTY_RECRUITED,
                data={"party_id": party.party_id, "party_name": party_name, "cost": cost},
                source="party_service",
            )
        )
        logger.info(f"Recruited party: {party_name} for {cost} gold")
        return party

    def add_party(self, party: Party) -> bool:
        """외부에서 만든 파티 편입 (불러오기/테스트). 정원만 확인."""
        if len(self._parties) >= self._max_parties:
            logger.warning(f"Cannot add {party.name}: party capacity reached")
            return False
        if self.get_party_by_id(party.party_id) is not None:
            logger.warning(f"Party {party.party_id} already registered")
            return False
        if party.bus is None:
            party.bus = self._bus
        self._parties.append(party)
        return True

    # ── 훈련 / 장비 ──────────────────────────────────────────

    def train_party(self, party_id: str, stat_type: StatType, cost: int) -> bool:
        party = self.get_party_by_id(party_id)
        if party is None:
            logger.warning(f"Cannot train party: party {party_id} not found")
            return False

        if stat_type not in PARTY_STAT_TYPES:
            logger.warning(f"Cannot train {party.name}: {stat_type.value} is not a party stat")
            return False

        if not self._treasury.can_afford(cost):
            logger.warning(
                f"Cannot train {party.name}: insufficient funds "
                f"(need {cost}, have {self._treasury.gold})"
            )
            return False

        old_value = party.stats[stat_type]
        if not party.train_stat(stat_type, training_points(cost)):
            return False

        self._treasury.modify_gold(-cost)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.PARTY_TRAINED,
                data={
                    "party_id": party_id,
                    "stat_type": stat_type.value,
                    "old_value": old_value,
                    "new_value": party.stats[stat_type],
                    "cost": cost,
                },
                source="party_service",
            )
        )
        logger.info(
            f"Trained {party.name}: {stat_type.value} "
            f"{old_value} -> {party.stats[stat_type]}"
        )
        return True

    def purchase_equipment(self, party_id: str, equipment: Optional[Equipment]) -> bool:
        if equipment is None:
            logger.warning("Cannot purchase equipment: equipment is None")
            return False

        party = self.get_party_by_id(party_id)
        if party is None:
            logger.warning(f"Cannot purchase equipment: party {party_id} not found")
            return False

        if not self._treasury.can_afford(equipment.cost):
            logger.warning(
                f"Cannot purchase {equipment.name}: insufficient funds "
                f"(need {equipment.cost}, have {self._treasury.gold})"
            )
            return False

        self._treasury.modify_gold(-equipment.cost)
        party.add_equipment(equipment)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.EQUIPMENT_PURCHASED,
                data={
                    "party_id": party_id,
                    "equipment_name": equipment.name,
                    "cost": equipment.cost,
                },
                source="party_service",
            )
        )
        logger.info(f"Purchased {equipment.name} for {party.name} ({equipment.cost} gold)")
        return True

    # ── 충성도 / 가용성 ──────────────────────────────────────

    def modify_party_loyalty(self, party_id: str, amount: int) -> bool:
        party = self.get_party_by_id(party_id)
        if party is None:
            logger.warning(f"Cannot modify loyalty: party {party_id} not found")
            return False

        old_loyalty = party.loyalty
        party.modify_loyalty(amount)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.PARTY_LOYALTY_CHANGED,
                data={
                    "party_id": party_id,
                    "old_loyalty": old_loyalty,
                    "new_loyalty": party.loyalty,
                },
                source="party_service",
            )
        )
        return True

    def update_party_availability(self) -> None:
        """충성도 기준 가용성 재계산. 퀘스트 수행 중인 파티는 건드리지 않는다."""
        for party in self._parties:
            if party.party_id in self._busy_party_ids:
                continue
            party.update_availability()

    def is_on_quest(self, party_id: str) -> bool:
        return party_id in self._busy_party_ids

    def _on_quest_assigned(self, event: GameEvent) -> None:
        party_id = event.data.get("party_id")
        if party_id:
            self._busy_party_ids.add(party_id)

    def _on_party_released(self, event: GameEvent) -> None:
        party_id = event.data.get("party_id")
        if party_id:
            self._busy_party_ids.discard(party_id)

    # ── 조회 / 제거 ──────────────────────────────────────────

    def get_party_by_id(self, party_id: str) -> Optional[Party]:
        return next((p for p in self._parties if p.party_id == party_id), None)

    def get_all_parties(self) -> list[Party]:
        return list(self._parties)

    def get_available_parties(self) -> list[Party]:
        return [p for p in self._parties if p.is_available]

    def remove_party(self, party_id: str) -> bool:
        party = self.get_party_by_id(party_id)
        if party is None:
            return False

        self._parties.remove(party)
        self._busy_party_ids.discard(party_id)
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.PARTY_REMOVED,
                data={"party_id": party_id},
                source="party_service",
            )
        )
        logger.info(f"Removed party: {party.name}")
        return True
