"""퀘스트 Service — 등록, 배정, 진행, 완료

Service → Core 허용, Service → Service 금지 (EventBus 경유)
파티 객체는 배정 기간 동안만 추적한다 (Quest는 ID만 보관).
"""

import random
from typing import Optional

from guildsim.core.event_bus import EventBus, GameEvent
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import get_logger
from guildsim.core.party.models import Party
from guildsim.core.quest.enums import QuestState, QuestType
from guildsim.core.quest.generation import generate_quest
from guildsim.core.quest.models import Quest, QuestRewards
from guildsim.core.quest.rewards import failure_reputation_penalty, resolve_rewards

logger = get_logger(__name__)


class QuestService:
    """퀘스트 풀 + 생명주기 조작"""

    def __init__(
        self,
        event_bus: EventBus,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._bus = event_bus
        self._rng = rng or random.Random()
        self._quests: dict[str, Quest] = {}
        self._assigned_parties: dict[str, Party] = {}

    # === 등록 / 제거 ===

    def add_quest(self, quest: Optional[Quest]) -> bool:
        if quest is None:
            logger.error("Cannot add None quest")
            return False

        if not quest.is_valid():
            logger.error(f"Quest {quest.quest_id} failed validation")
            return False

        if quest.quest_id in self._quests:
            logger.warning(f"Quest {quest.quest_id} already exists")
            return False

        self._quests[quest.quest_id] = quest
        self._emit(EventTypes.QUEST_ADDED, quest_id=quest.quest_id)
        return True

    def get_quest_by_id(self, quest_id: Optional[str]) -> Optional[Quest]:
        if not quest_id:
            return None
        return self._quests.get(quest_id)

    def remove_quest(self, quest_id: str) -> bool:
        quest = self._quests.get(quest_id)
        if quest is None:
            return False

        if quest.state == QuestState.IN_PROGRESS:
            logger.warning(f"Cannot remove quest {quest_id} while in progress")
            return False

        del self._quests[quest_id]

        # 배정만 된 퀘스트 제거 시 파티 해제
        party = self._assigned_parties.pop(quest_id, None)
        if party is not None:
            party.is_available = True

        self._emit(
            EventTypes.QUEST_REMOVED,
            quest_id=quest_id,
            party_id=party.party_id if party is not None else None,
        )
        return True

    def clear_all_quests(self) -> None:
        self._quests.clear()
        self._assigned_parties.clear()

    # === 필터 ===

    def get_quests_by_state(self, state: QuestState) -> list[Quest]:
        return [q for q in self._quests.values() if q.state == state]

    def get_available_quests(self) -> list[Quest]:
        return self.get_quests_by_state(QuestState.AVAILABLE)

    def get_assigned_quests(self) -> list[Quest]:
        return self.get_quests_by_state(QuestState.ASSIGNED)

    def get_in_progress_quests(self) -> list[Quest]:
        return self.get_quests_by_state(QuestState.IN_PROGRESS)

    def get_quests_by_type(self, quest_type: QuestType) -> list[Quest]:
        return [q for q in self._quests.values() if q.quest_type == quest_type]

    def get_quests_by_difficulty(self, min_difficulty: int, max_difficulty: int) -> list[Quest]:
        return [
            q
            for q in self._quests.values()
            if min_difficulty <= q.difficulty <= max_difficulty
        ]

    # === 배정 / 진행 ===

    def assign_quest(
        self,
        quest_id: str,
        party: Optional[Party],
        current_day: int = 0,
    ) -> bool:
        """가용 파티에 배정. 성공 시 파티는 배정 불가 상태가 된다."""
        if party is None:
            logger.error("Party cannot be None")
            return False

        quest = self.get_quest_by_id(quest_id)
        if quest is None:
            logger.error(f"Quest {quest_id} not found")
            return False

        if not party.is_available:
            logger.warning(f"Party {party.name} is not available")
            return False

        if not quest.assign_to_party(party.party_id):
            return False

        party.is_available = False
        party.last_quest_day = current_day
        self._assigned_parties[quest.quest_id] = party

        self._emit(
            EventTypes.QUEST_ASSIGNED,
            quest_id=quest.quest_id,
            party_id=party.party_id,
            estimated_success_rate=party.calculate_success_rate(quest),
        )
        return True

    def start_quest(self, quest_id: str, current_day: int) -> bool:
        quest = self.get_quest_by_id(quest_id)
        if quest is None:
            return False

        if not quest.start_quest(current_day):
            return False

        self._emit(
            EventTypes.QUEST_STARTED,
            quest_id=quest.quest_id,
            start_day=current_day,
            expected_completion_day=quest.expected_completion_day,
        )
        return True

    def calculate_success_rate(self, quest: Optional[Quest], party: Optional[Party]) -> float:
        if quest is None or party is None:
            return 0.0
        return party.calculate_success_rate(quest)

    def get_assigned_party(self, quest_id: str) -> Optional[Party]:
        return self._assigned_parties.get(quest_id)

    def complete_quest(self, quest_id: str, current_day: int, is_success: bool) -> bool:
        """IN_PROGRESS → COMPLETED/FAILED, 파티 해제, 보상 내역 발행.

        재료 드롭 판정은 보상 적용 측(QuestRewardService)에서 한다.
        """
        quest = self.get_quest_by_id(quest_id)
        if quest is None:
            return False

        if quest.state != QuestState.IN_PROGRESS:
            logger.warning(f"Quest {quest_id} is not in progress")
            return False

        if not quest.complete(is_success):
            return False

        party = self._assigned_parties.pop(quest_id, None)
        if party is not None:
            party.is_available = True

        self._emit(
            EventTypes.QUEST_COMPLETED,
            quest_id=quest.quest_id,
            party_id=quest.assigned_party_id,
            is_success=is_success,
            completion_day=current_day,
            gold_reward=quest.reward_gold if is_success else 0,
            reputation_change=(
                quest.reputation_impact
                if is_success
                else failure_reputation_penalty(quest.reputation_impact)
            ),
            material_rewards=tuple(quest.reward_materials) if is_success else (),
        )
        return True

    def process_quest_rewards(self, quest: Optional[Quest], is_success: bool) -> Optional[QuestRewards]:
        if quest is None:
            return None
        return resolve_rewards(quest, is_success, self._rng)

    # === 일일 진행 ===

    def update_quests(self, current_day: int) -> list[Quest]:
        """완료 가능한 퀘스트마다 quest_ready 발행."""
        ready = self.get_ready_quests(current_day)
        for quest in ready:
            self._emit(EventTypes.QUEST_READY, quest_id=quest.quest_id, current_day=current_day)
        return ready

    def get_ready_quests(self, current_day: int) -> list[Quest]:
        return [q for q in self._quests.values() if q.is_ready_to_complete(current_day)]

    # === 생성 ===

    def generate_quest(self, difficulty: int, quest_type: QuestType) -> Quest:
        return generate_quest(difficulty, quest_type, self._rng)

    def _emit(self, event_type: str, **data) -> None:
        self._bus.emit(GameEvent(event_type=event_type, data=data, source="quest_service"))
