"""퀘스트 보상 Service — quest_completed 구독 → 금고/인벤토리 반영

QuestService를 직접 호출하지 않고 이벤트 데이터만 사용한다.
"""

import random
from typing import Optional

from guildsim.core.event_bus import EventBus, GameEvent
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import get_logger
from guildsim.core.quest.models import MaterialDrop, MaterialReward
from guildsim.core.quest.rewards import roll_material_drops
from guildsim.core.treasury import Treasury
from guildsim.services.material_service import MaterialService

logger = get_logger(__name__)


class QuestRewardService:
    def __init__(
        self,
        treasury: Treasury,
        material_service: MaterialService,
        event_bus: EventBus,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._treasury = treasury
        self._materials = material_service
        self._bus = event_bus
        self._rng = rng or random.Random()
        self._bus.subscribe(EventTypes.QUEST_COMPLETED, self.handle_quest_completed)

    def close(self) -> None:
        """구독 해제"""
        self._bus.unsubscribe(EventTypes.QUEST_COMPLETED, self.handle_quest_completed)

    def handle_quest_completed(self, event: GameEvent) -> None:
        data = event.data
        quest_id = data.get("quest_id")
        gold = data.get("gold_reward", 0)
        reputation = data.get("reputation_change", 0)

        if gold > 0:
            self._treasury.modify_gold(gold)

        if reputation != 0:
            self._treasury.modify_reputation(reputation)

        drops: list[MaterialDrop] = []
        if data.get("is_success"):
            drops = self._grant_materials(data.get("material_rewards", ()))

        logger.info(
            f"Quest rewards processed: {quest_id} "
            f"(gold={gold}, reputation={reputation}, drops={len(drops)})"
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.QUEST_REWARDS_PROCESSED,
                data={
                    "quest_id": quest_id,
                    "gold": gold,
                    "reputation": reputation,
                    "materials": tuple((d.material_id, d.quantity) for d in drops),
                },
                source="quest_reward_service",
            )
        )

    def _grant_materials(self, rewards: tuple[MaterialReward, ...]) -> list[MaterialDrop]:
        """드롭 판정 후 등록소에 있는 재료만 인벤토리에 추가."""
        granted: list[MaterialDrop] = []
        for drop in roll_material_drops(rewards, self._rng):
            material = self._materials.get_material(drop.material_id)
            if material is None:
                logger.warning(f"Reward material {drop.material_id} not registered")
                continue

            if self._materials.add_material(material, drop.quantity):
                granted.append(drop)
        return granted
