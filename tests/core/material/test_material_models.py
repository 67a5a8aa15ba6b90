"""Material 엔티티 테스트"""

import logging

from guildsim.core.event_types import EventTypes
from guildsim.core.material.models import MIN_MARKET_VALUE, Material, MaterialRarity


def _material(port=None, **kwargs) -> Material:
    defaults = {"name": "Iron Ore", "base_value": 10, "quantity": 5}
    defaults.update(kwargs)
    return Material(bus=port, **defaults)


class TestConstruction:
    def test_current_value_defaults_to_base(self):
        m = _material(base_value=42)
        assert m.current_value == 42

    def test_explicit_current_value_kept(self):
        m = _material(base_value=10, current_value=7)
        assert m.current_value == 7

    def test_ids_are_unique(self):
        assert _material().material_id != _material().material_id

    def test_rarity_default_common(self):
        assert _material().rarity == MaterialRarity.COMMON


class TestValidation:
    def test_valid(self):
        assert _material().is_valid()

    def test_negative_quantity_invalid(self, caplog):
        m = _material(quantity=-1)
        with caplog.at_level(logging.ERROR):
            assert not m.is_valid()
        record = caplog.records[-1]
        assert record.entity_id == m.material_id
        assert record.field_name == "quantity"

    def test_negative_base_value_invalid(self):
        assert not _material(base_value=-5, current_value=0).is_valid()

    def test_negative_current_value_invalid(self):
        assert not _material(current_value=-1).is_valid()


class TestQuantity:
    def test_add_quantity_emits(self, port):
        m = _material(port)
        m.add_quantity(3)
        assert m.quantity == 8
        event = port.of_type(EventTypes.MATERIAL_QUANTITY_CHANGED)[0]
        assert dict(event.data) == {
            "material_id": m.material_id,
            "change": 3,
            "new_quantity": 8,
        }

    def test_remove_quantity(self, port):
        m = _material(port)
        assert m.remove_quantity(5)
        assert m.quantity == 0
        assert port.events[-1].data["change"] == -5

    def test_remove_more_than_held_rejected(self, port, caplog):
        m = _material(port)
        with caplog.at_level(logging.WARNING):
            assert not m.remove_quantity(6)
        assert m.quantity == 5
        assert port.events == []
        assert caplog.records[-1].field_name == "quantity"

    def test_no_bus_is_fine(self):
        m = _material()
        m.add_quantity(1)
        assert m.quantity == 6


class TestMarketValue:
    def test_positive_fluctuation(self):
        m = _material(base_value=100)
        m.update_market_value(0.15)
        assert m.current_value == 115

    def test_floor_at_one(self):
        m = _material(base_value=10)
        m.update_market_value(-0.99)
        assert m.current_value == MIN_MARKET_VALUE == 1

    def test_below_minus_100_percent_floors(self):
        m = _material(base_value=10)
        m.update_market_value(-2.0)
        assert m.current_value == 1

    def test_round_half_to_even(self):
        m = _material(base_value=5)
        m.update_market_value(0.5)  # 7.5 → 8
        assert m.current_value == 8
        m = _material(base_value=9)
        m.update_market_value(-0.5)  # 4.5 → 4
        assert m.current_value == 4

    def test_based_on_base_not_current(self):
        m = _material(base_value=100)
        m.update_market_value(0.1)
        m.update_market_value(0.1)
        assert m.current_value == 110

    def test_reset(self):
        m = _material(base_value=100)
        m.update_market_value(-0.2)
        m.reset_market_value()
        assert m.current_value == 100


class TestRecipe:
    def test_has_recipe(self):
        assert _material(recipe={"a": 2}).has_recipe
        assert not _material().has_recipe
