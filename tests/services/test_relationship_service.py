"""RelationshipService 테스트 — 특수 임계, 대화 선택지, 성향 이력"""

import pytest

from guildsim.core.character.models import Alignment, Character, CharacterType
from guildsim.core.event_types import EventTypes
from guildsim.services.relationship_service import (
    DialogueChoice,
    DialogueNode,
    RelationshipService,
)


@pytest.fixture()
def setup(bus, recorder):
    service = RelationshipService(bus)
    player = Character(name="Receptionist", character_type=CharacterType.PLAYER, bus=bus)
    return service, player, recorder


class TestModifyRelationship:
    def test_special_threshold_event(self, setup):
        service, player, recorder = setup
        service.modify_relationship(player, "npc-1", 85)
        events = recorder.of_type(EventTypes.SPECIAL_RELATIONSHIP)
        assert [e.data["milestone"] for e in events] == ["high_relationship"]
        assert recorder.of_type(EventTypes.RELATIONSHIP_CHANGED)

    def test_max_and_high_together(self, setup):
        service, player, recorder = setup
        service.modify_relationship(player, "npc-1", 150)
        milestones = [e.data["milestone"] for e in recorder.of_type(EventTypes.SPECIAL_RELATIONSHIP)]
        assert milestones == ["high_relationship", "max_relationship"]

    def test_no_repeat_when_staying_above(self, setup):
        service, player, recorder = setup
        service.modify_relationship(player, "npc-1", 85)
        service.modify_relationship(player, "npc-1", 5)
        assert len(recorder.of_type(EventTypes.SPECIAL_RELATIONSHIP)) == 1

    def test_none_character(self, setup):
        service, _, recorder = setup
        service.modify_relationship(None, "npc-1", 10)
        assert recorder.events == []

    def test_thresholds(self, setup):
        service, player, _ = setup
        player.relationships.update({"a": 60, "b": -60, "c": 0})
        assert service.get_npcs_above_threshold(player, 50) == ["a"]
        assert service.get_npcs_below_threshold(player, -50) == ["b"]
        assert service.get_npcs_above_threshold(None, 0) == []

    def test_status_label(self, setup):
        service, _, _ = setup
        assert service.get_relationship_status(55) == "Good Friends"


class TestDialogue:
    def test_choice_applies_relationship_and_alignment(self, setup):
        service, player, recorder = setup
        choice = DialogueChoice(
            text="I'll uphold the guild charter.",
            relationship_change=10,
            alignment_change=Alignment.ORDER,
            next_node_id="node-2",
        )
        assert service.process_dialogue_choice(player, "npc-1", choice)
        assert player.get_relationship("npc-1") == 10
        assert player.has_alignment(Alignment.ORDER)
        assert service.get_alignment_history(player) == [Alignment.ORDER]

        types = recorder.types
        assert EventTypes.ALIGNMENT_CHANGED in types
        assert types.index(EventTypes.DIALOGUE_CHOICE_MADE) < types.index(
            EventTypes.DIALOGUE_PROGRESS
        )
        progress = recorder.of_type(EventTypes.DIALOGUE_PROGRESS)[0]
        assert progress.data["next_node_id"] == "node-2"

    def test_neutral_choice_no_alignment_event(self, setup):
        service, player, recorder = setup
        service.process_dialogue_choice(player, "npc-1", DialogueChoice(text="..."))
        assert EventTypes.ALIGNMENT_CHANGED not in recorder.types
        assert EventTypes.DIALOGUE_PROGRESS not in recorder.types
        assert service.get_alignment_history(player) == []

    def test_alignment_history_accumulates(self, setup):
        service, player, _ = setup
        service.process_dialogue_choice(
            player, "npc-1", DialogueChoice(text="a", alignment_change=Alignment.ORDER)
        )
        service.process_dialogue_choice(
            player, "npc-2", DialogueChoice(text="b", alignment_change=Alignment.CHAOS)
        )
        assert service.get_alignment_history(player) == [Alignment.ORDER, Alignment.CHAOS]
        assert player.alignment == Alignment.ORDER | Alignment.CHAOS

    def test_none_choice(self, setup):
        service, player, _ = setup
        assert not service.process_dialogue_choice(player, "npc-1", None)

    def test_unlock_requirements(self, setup):
        service, player, _ = setup
        node = DialogueNode(
            node_id="secret",
            required_relationship=50,
            required_alignment=Alignment.CHAOS,
        )
        assert not service.is_dialogue_unlocked(player, "npc-1", node)
        player.modify_relationship("npc-1", 60)
        assert not service.is_dialogue_unlocked(player, "npc-1", node)
        player.add_alignment(Alignment.CHAOS)
        assert service.is_dialogue_unlocked(player, "npc-1", node)

    def test_unlocked_without_requirements(self, setup):
        service, player, _ = setup
        assert service.is_dialogue_unlocked(player, "npc-1", DialogueNode(node_id="hello"))
        assert not service.is_dialogue_unlocked(player, "npc-1", None)

    def test_start_and_reset(self, setup):
        service, _, recorder = setup
        node = DialogueNode(node_id="greet", text="Welcome!")
        assert service.start_dialogue("npc-1", node)
        assert service.get_current_dialogue_node("npc-1") is node
        assert recorder.of_type(EventTypes.DIALOGUE_STARTED)[0].data["node_id"] == "greet"
        service.reset_dialogue("npc-1")
        assert service.get_current_dialogue_node("npc-1") is None
        assert not service.start_dialogue("npc-1", None)
