"""QuestService 통합 테스트 (EventBus + 보상 서비스)"""

import random
from unittest.mock import Mock

import pytest

from guildsim.core.character.models import StatType
from guildsim.core.event_types import EventTypes
from guildsim.core.material.models import Material
from guildsim.core.party.models import Party
from guildsim.core.quest.enums import QuestState, QuestType
from guildsim.core.quest.models import MaterialReward, Quest
from guildsim.core.treasury import Treasury
from guildsim.services.material_service import MaterialService
from guildsim.services.quest_reward_service import QuestRewardService
from guildsim.services.quest_service import QuestService

E, C = StatType.EXPLORATION, StatType.COMBAT


@pytest.fixture()
def setup(bus, recorder):
    service = QuestService(bus, random.Random(9))
    party = Party(name="Wolves", stats={E: 15, C: 10}, loyalty=100, bus=bus)
    return service, party, recorder


def _quest(**kwargs) -> Quest:
    defaults = {
        "difficulty": 2,
        "required_stats": {E: 14, C: 6},
        "duration": 3,
        "reward_gold": 200,
        "reputation_impact": 10,
        "quest_type": QuestType.EXPLORATION,
    }
    defaults.update(kwargs)
    return Quest(**defaults)


def _running(service: QuestService, party: Party, day: int = 1) -> Quest:
    quest = _quest()
    service.add_quest(quest)
    assert service.assign_quest(quest.quest_id, party, day)
    assert service.start_quest(quest.quest_id, day)
    return quest


class TestPool:
    def test_add(self, setup):
        service, _, recorder = setup
        quest = _quest()
        assert service.add_quest(quest)
        assert service.get_quest_by_id(quest.quest_id) is quest
        assert recorder.of_type(EventTypes.QUEST_ADDED)[0].data["quest_id"] == quest.quest_id

    def test_add_rejects_invalid_and_duplicate(self, setup):
        service, _, _ = setup
        quest = _quest()
        service.add_quest(quest)
        assert not service.add_quest(quest)
        assert not service.add_quest(_quest(difficulty=9))
        assert not service.add_quest(None)

    def test_lookup_empty_id(self, setup):
        service, _, _ = setup
        assert service.get_quest_by_id("") is None
        assert service.get_quest_by_id(None) is None

    def test_remove(self, setup):
        service, _, recorder = setup
        quest = _quest()
        service.add_quest(quest)
        assert service.remove_quest(quest.quest_id)
        assert service.get_quest_by_id(quest.quest_id) is None
        assert recorder.of_type(EventTypes.QUEST_REMOVED)

    def test_remove_assigned_frees_party(self, setup):
        service, party, _ = setup
        quest = _quest()
        service.add_quest(quest)
        service.assign_quest(quest.quest_id, party)
        assert service.remove_quest(quest.quest_id)
        assert party.is_available
        assert service.get_assigned_party(quest.quest_id) is None

    def test_cannot_remove_in_progress(self, setup):
        service, party, _ = setup
        quest = _running(service, party)
        assert not service.remove_quest(quest.quest_id)

    def test_filters(self, setup):
        service, party, _ = setup
        a = _quest(quest_type=QuestType.COMBAT, difficulty=1, required_stats={C: 7, E: 3})
        b = _quest(difficulty=4, required_stats={E: 28, C: 12})
        service.add_quest(a)
        service.add_quest(b)
        service.assign_quest(b.quest_id, party)
        assert service.get_available_quests() == [a]
        assert service.get_assigned_quests() == [b]
        assert service.get_quests_by_type(QuestType.COMBAT) == [a]
        assert service.get_quests_by_difficulty(3, 5) == [b]
        assert service.get_in_progress_quests() == []


class TestAssignAndStart:
    def test_assign(self, setup):
        service, party, recorder = setup
        quest = _quest()
        service.add_quest(quest)
        assert service.assign_quest(quest.quest_id, party, current_day=4)
        assert quest.assigned_party_id == party.party_id
        assert not party.is_available
        assert party.last_quest_day == 4
        assert service.get_assigned_party(quest.quest_id) is party
        event = recorder.of_type(EventTypes.QUEST_ASSIGNED)[0]
        assert event.data["estimated_success_rate"] == pytest.approx(1.0)

    def test_unavailable_party_rejected(self, setup):
        service, party, _ = setup
        quest = _quest()
        service.add_quest(quest)
        party.is_available = False
        assert not service.assign_quest(quest.quest_id, party)
        assert quest.state == QuestState.AVAILABLE

    def test_busy_party_cannot_take_second_quest(self, setup):
        service, party, _ = setup
        first, second = _quest(), _quest()
        service.add_quest(first)
        service.add_quest(second)
        assert service.assign_quest(first.quest_id, party)
        assert not service.assign_quest(second.quest_id, party)

    def test_assign_none_party(self, setup):
        service, _, _ = setup
        quest = _quest()
        service.add_quest(quest)
        assert not service.assign_quest(quest.quest_id, None)

    def test_start(self, setup):
        service, party, recorder = setup
        quest = _running(service, party, day=5)
        assert quest.state == QuestState.IN_PROGRESS
        event = recorder.of_type(EventTypes.QUEST_STARTED)[0]
        assert event.data["expected_completion_day"] == 8

    def test_start_unassigned(self, setup):
        service, _, _ = setup
        quest = _quest()
        service.add_quest(quest)
        assert not service.start_quest(quest.quest_id, 1)

    def test_success_rate_helper(self, setup):
        service, party, _ = setup
        assert service.calculate_success_rate(_quest(), party) == pytest.approx(1.0)
        assert service.calculate_success_rate(None, party) == 0.0


class TestCompletion:
    def test_complete_success(self, setup):
        service, party, recorder = setup
        quest = _running(service, party)
        assert service.complete_quest(quest.quest_id, 4, True)
        assert quest.state == QuestState.COMPLETED
        assert party.is_available
        event = recorder.of_type(EventTypes.QUEST_COMPLETED)[0]
        assert event.data["gold_reward"] == 200
        assert event.data["reputation_change"] == 10

    def test_complete_failure(self, setup):
        service, party, recorder = setup
        quest = _running(service, party)
        assert service.complete_quest(quest.quest_id, 4, False)
        assert quest.state == QuestState.FAILED
        event = recorder.of_type(EventTypes.QUEST_COMPLETED)[0]
        assert event.data["gold_reward"] == 0
        assert event.data["reputation_change"] == -5

    def test_complete_not_in_progress(self, setup):
        service, _, _ = setup
        quest = _quest()
        service.add_quest(quest)
        assert not service.complete_quest(quest.quest_id, 1, True)

    def test_update_quests_emits_ready(self, setup):
        service, party, recorder = setup
        quest = _running(service, party, day=1)
        assert service.update_quests(3) == []
        assert service.update_quests(4) == [quest]
        assert recorder.of_type(EventTypes.QUEST_READY)[0].data["quest_id"] == quest.quest_id

    def test_process_quest_rewards(self, setup):
        service, _, _ = setup
        rewards = service.process_quest_rewards(_quest(), True)
        assert rewards.gold == 200
        assert service.process_quest_rewards(None, True) is None

    def test_generate_quest(self, setup):
        service, _, _ = setup
        quest = service.generate_quest(3, QuestType.COMBAT)
        assert service.add_quest(quest)


class TestRewardService:
    @pytest.fixture()
    def world(self, bus, recorder):
        treasury = Treasury(gold=0, reputation=50, bus=bus)
        materials = MaterialService(treasury, bus)
        materials.register_material(Material(name="Herb", base_value=5, material_id="herb"))
        drop_rng = Mock()
        drop_rng.random.return_value = 0.0
        rewards = QuestRewardService(treasury, materials, bus, drop_rng)
        quests = QuestService(bus)
        party = Party(name="Wolves", stats={E: 15, C: 10}, bus=bus)
        return quests, party, treasury, materials, rewards, recorder

    def test_success_rewards_applied(self, world):
        quests, party, treasury, materials, _, recorder = world
        quest = _quest(
            reward_materials=[MaterialReward("herb", 3, 0.5), MaterialReward("unknown", 1, 1.0)]
        )
        quests.add_quest(quest)
        quests.assign_quest(quest.quest_id, party, 1)
        quests.start_quest(quest.quest_id, 1)
        quests.complete_quest(quest.quest_id, 4, True)

        assert treasury.gold == 200
        assert treasury.reputation == 60
        assert materials.get_material_quantity("herb") == 3
        processed = recorder.of_type(EventTypes.QUEST_REWARDS_PROCESSED)[0]
        assert processed.data["materials"] == (("herb", 3),)

    def test_identical_drops_all_granted(self, world):
        quests, party, _, materials, _, recorder = world
        quest = _quest(
            reward_materials=[MaterialReward("herb", 1, 1.0), MaterialReward("herb", 1, 1.0)]
        )
        quests.add_quest(quest)
        quests.assign_quest(quest.quest_id, party, 1)
        quests.start_quest(quest.quest_id, 1)
        quests.complete_quest(quest.quest_id, 4, True)

        assert materials.get_material_quantity("herb") == 2
        acquired = recorder.of_type(EventTypes.MATERIAL_ACQUIRED)
        assert [e.data["quantity"] for e in acquired] == [1, 1]
        changed = recorder.of_type(EventTypes.MATERIAL_QUANTITY_CHANGED)
        assert [e.data["new_quantity"] for e in changed] == [1, 2]

    def test_failure_only_reputation(self, world):
        quests, party, treasury, materials, _, _ = world
        quest = _quest(reward_materials=[MaterialReward("herb", 3, 1.0)])
        quests.add_quest(quest)
        quests.assign_quest(quest.quest_id, party, 1)
        quests.start_quest(quest.quest_id, 1)
        quests.complete_quest(quest.quest_id, 4, False)

        assert treasury.gold == 0
        assert treasury.reputation == 45
        assert materials.get_material_quantity("herb") == 0

    def test_close_unsubscribes(self, world, bus):
        _, _, _, _, rewards, _ = world
        before = bus.handler_count
        rewards.close()
        assert bus.handler_count == before - 1
