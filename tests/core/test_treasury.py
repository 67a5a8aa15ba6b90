"""Treasury 테스트"""

from guildsim.core.event_types import EventTypes
from guildsim.core.treasury import Treasury


class TestGold:
    def test_can_afford(self):
        t = Treasury(gold=100)
        assert t.can_afford(100)
        assert not t.can_afford(101)

    def test_modify_gold_emits(self, port):
        t = Treasury(gold=100, bus=port)
        t.modify_gold(-30)
        assert t.gold == 70
        event = port.of_type(EventTypes.GOLD_CHANGED)[0]
        assert event.data["amount"] == -30
        assert event.data["new_total"] == 70


class TestReputation:
    def test_clamped_high(self, port):
        t = Treasury(reputation=95, bus=port)
        t.modify_reputation(20)
        assert t.reputation == 100
        assert port.of_type(EventTypes.REPUTATION_CHANGED)[0].data["new_total"] == 100

    def test_clamped_low(self):
        t = Treasury(reputation=5)
        t.modify_reputation(-20)
        assert t.reputation == 0
