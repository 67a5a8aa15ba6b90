"""Character 엔티티 테스트"""

import logging

from guildsim.core.character.models import (
    Alignment,
    Character,
    CharacterType,
    StatType,
)
from guildsim.core.event_types import EventTypes


class TestValidation:
    def test_valid(self):
        c = Character(name="Mira", stats={StatType.CHARISMA: 10})
        assert c.is_valid()

    def test_stat_out_of_range(self, caplog):
        c = Character(name="Mira", stats={StatType.COURAGE: 21})
        with caplog.at_level(logging.ERROR):
            assert not c.is_valid()
        assert caplog.records[-1].field_name == "stats.courage"

    def test_relationship_out_of_range(self, caplog):
        c = Character(name="Mira", relationships={"npc-1": -101})
        with caplog.at_level(logging.ERROR):
            assert not c.is_valid()
        assert caplog.records[-1].field_name == "relationships.npc-1"

    def test_is_player(self):
        assert Character(name="Me", character_type=CharacterType.PLAYER).is_player
        assert not Character(name="Npc").is_player


class TestStats:
    def test_absent_stat_is_zero(self):
        assert Character(name="A").get_stat(StatType.EMPATHY) == 0

    def test_modify_stat_clamps(self, port):
        c = Character(name="A", stats={StatType.COMBAT: 18}, bus=port)
        c.modify_stat(StatType.COMBAT, 5)
        assert c.get_stat(StatType.COMBAT) == 20
        event = port.of_type(EventTypes.STAT_CHANGED)[0]
        assert event.data["stat_type"] == "combat"
        assert event.data["new_value"] == 20

    def test_modify_absent_stat_floors_at_one(self):
        c = Character(name="A")
        c.modify_stat(StatType.ADMIN, -3)
        assert c.get_stat(StatType.ADMIN) == 1


class TestRelationships:
    def test_unknown_is_neutral(self):
        assert Character(name="A").get_relationship("x") == 0

    def test_modify_creates_entry(self, port):
        c = Character(name="A", bus=port)
        c.modify_relationship("npc-1", 30)
        assert c.relationships == {"npc-1": 30}
        event = port.of_type(EventTypes.RELATIONSHIP_CHANGED)[0]
        assert dict(event.data) == {
            "character_id": c.character_id,
            "target_id": "npc-1",
            "new_value": 30,
        }

    def test_modify_clamps(self):
        c = Character(name="A", relationships={"npc-1": 90})
        c.modify_relationship("npc-1", 50)
        assert c.get_relationship("npc-1") == 100
        c.modify_relationship("npc-1", -500)
        assert c.get_relationship("npc-1") == -100


class TestAlignment:
    def test_combined_flags(self):
        c = Character(name="A")
        c.set_alignment(Alignment.ORDER | Alignment.CHAOS)
        assert c.has_alignment(Alignment.ORDER)
        assert c.has_alignment(Alignment.CHAOS)
        assert c.has_alignment(Alignment.ORDER | Alignment.CHAOS)

    def test_add_alignment_unions(self):
        c = Character(name="A", alignment=Alignment.ORDER)
        c.add_alignment(Alignment.CHAOS)
        assert c.alignment == Alignment.ORDER | Alignment.CHAOS

    def test_set_alignment_overwrites(self):
        c = Character(name="A", alignment=Alignment.ORDER)
        c.set_alignment(Alignment.CHAOS)
        assert not c.has_alignment(Alignment.ORDER)

    def test_neutral_always_held(self):
        assert Character(name="A").has_alignment(Alignment.NEUTRAL)
