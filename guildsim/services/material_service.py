"""재료 Service — 등록소, 인벤토리, 매매, 조합, 시세

Service → Core 허용, Service → Service 금지 (EventBus 경유)
"""

import random
from typing import Optional

from guildsim.core.event_bus import EventBus, GameEvent
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import get_logger
from guildsim.core.material.market import (
    calculate_combination_value,
    has_ingredients,
    roll_fluctuation,
    scale_recipe,
)
from guildsim.core.material.models import Material, MaterialRarity
from guildsim.core.treasury import Treasury

logger = get_logger(__name__)


class MaterialService:
    """재료 등록소(시장) + 플레이어 인벤토리"""

    def __init__(
        self,
        treasury: Treasury,
        event_bus: EventBus,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._treasury = treasury
        self._bus = event_bus
        self._rng = rng or random.Random()
        self._registry: dict[str, Material] = {}
        self._inventory: dict[str, Material] = {}

    # === 등록소 ===

    def register_material(self, material: Optional[Material]) -> bool:
        if material is None or not material.is_valid():
            logger.error("Cannot register invalid material")
            return False

        if material.material_id in self._registry:
            logger.warning(f"Material {material.name} already registered")
            return False

        self._registry[material.material_id] = material
        logger.info(f"Registered material: {material.name} ({material.material_id})")
        return True

    def get_material(self, material_id: str) -> Optional[Material]:
        return self._registry.get(material_id)

    def get_all_materials(self) -> list[Material]:
        return list(self._registry.values())

    # === 인벤토리 ===

    def add_material(self, material: Optional[Material], quantity: int) -> bool:
        """인벤토리에 추가. 첫 획득 시 등록소 재료의 사본(같은 ID)을 만든다."""
        if material is None or quantity <= 0:
            logger.error("Invalid material or quantity")
            return False

        entry = self._inventory.get(material.material_id)
        if entry is None:
            entry = Material(
                name=material.name,
                rarity=material.rarity,
                base_value=material.base_value,
                current_value=material.current_value,
                recipe=dict(material.recipe),
                category=material.category,
                material_id=material.material_id,
                bus=self._bus,
            )
            self._inventory[material.material_id] = entry

        entry.add_quantity(quantity)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.MATERIAL_ACQUIRED,
                data={
                    "material_id": material.material_id,
                    "material_name": material.name,
                    "quantity": quantity,
                },
                source="material_service",
            )
        )
        logger.info(f"Added {quantity}x {material.name} to inventory")
        return True

    def remove_material(self, material_id: str, quantity: int) -> bool:
        entry = self._inventory.get(material_id)
        if entry is None:
            logger.warning(f"Material {material_id} not in inventory")
            return False
        return entry.remove_quantity(quantity)

    def get_player_inventory(self) -> dict[str, Material]:
        """얕은 사본."""
        return dict(self._inventory)

    def get_material_quantity(self, material_id: str) -> int:
        entry = self._inventory.get(material_id)
        return entry.quantity if entry is not None else 0

    def has_materials(self, requirements: dict[str, int]) -> bool:
        return has_ingredients(self._stock(), requirements)

    # === 매매 ===

    def buy_material(self, material_id: str, quantity: int) -> bool:
        material = self._registry.get(material_id)
        if material is None:
            logger.error(f"Material {material_id} not found in registry")
            return False

        if quantity <= 0:
            logger.error(f"Invalid quantity {quantity}")
            return False

        total_cost = material.current_value * quantity
        if not self._treasury.can_afford(total_cost):
            logger.warning(
                f"Insufficient gold to buy {quantity}x {material.name}. "
                f"Need {total_cost}, have {self._treasury.gold}"
            )
            return False

        self._treasury.modify_gold(-total_cost)
        self.add_material(material, quantity)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.MATERIAL_PURCHASED,
                data={
                    "material_id": material_id,
                    "material_name": material.name,
                    "quantity": quantity,
                    "total_cost": total_cost,
                },
                source="material_service",
            )
        )
        logger.info(f"Purchased {quantity}x {material.name} for {total_cost} gold")
        return True

    def sell_material(self, material_id: str, quantity: int) -> bool:
        entry = self._inventory.get(material_id)
        if entry is None:
            logger.warning(f"Material {material_id} not in inventory")
            return False

        if quantity <= 0:
            logger.error(f"Invalid quantity {quantity}")
            return False

        if entry.quantity < quantity:
            logger.warning(
                f"Insufficient materials to sell. Have {entry.quantity}, "
                f"trying to sell {quantity}"
            )
            return False

        # 시세는 등록소 기준, 미등록이면 인벤토리 사본 기준
        market = self._registry.get(material_id, entry)
        total_revenue = market.current_value * quantity

        if not entry.remove_quantity(quantity):
            return False

        self._treasury.modify_gold(total_revenue)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.MATERIAL_SOLD,
                data={
                    "material_id": material_id,
                    "material_name": entry.name,
                    "quantity": quantity,
                    "total_revenue": total_revenue,
                },
                source="material_service",
            )
        )
        logger.info(f"Sold {quantity}x {entry.name} for {total_revenue} gold")
        return True

    # === 조합 ===

    def combine_materials(self, target_material_id: str, quantity: int) -> bool:
        """레시피 × 수량만큼 재료를 확인 후 소모하고 결과물 추가.

        확인 단계에서 부족하면 아무것도 소모하지 않는다.
        """
        target = self._registry.get(target_material_id)
        if target is None:
            logger.error(f"Target material {target_material_id} not found in registry")
            return False

        if quantity <= 0:
            logger.error(f"Invalid quantity {quantity}")
            return False

        if not target.has_recipe:
            logger.error(f"Material {target.name} has no combination recipe")
            return False

        requirements = scale_recipe(target.recipe, quantity)
        if not self.has_materials(requirements):
            logger.warning(
                f"Insufficient materials to combine {quantity}x {target.name}"
            )
            return False

        for material_id, count in requirements.items():
            if count > 0:
                self._inventory[material_id].remove_quantity(count)

        self.add_material(target, quantity)

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.MATERIAL_COMBINED,
                data={
                    "target_material_id": target_material_id,
                    "target_material_name": target.name,
                    "quantity": quantity,
                },
                source="material_service",
            )
        )
        logger.info(f"Combined materials to create {quantity}x {target.name}")
        return True

    def calculate_combination_value(self, target_material_id: str, quantity: int) -> int:
        target = self._registry.get(target_material_id)
        if target is None:
            return 0

        input_values = {
            mid: self._registry[mid].current_value
            for mid in target.recipe
            if mid in self._registry
        }
        return calculate_combination_value(
            target.current_value, quantity, target.recipe, input_values
        )

    # === 시세 ===

    def apply_market_fluctuation(self, material_id: str, fluctuation: float) -> bool:
        material = self._registry.get(material_id)
        if material is None:
            logger.error(f"Material {material_id} not found in registry")
            return False

        old_value = material.current_value
        material.update_market_value(fluctuation)

        logger.debug(
            f"Market fluctuation for {material.name}: "
            f"{old_value} -> {material.current_value} ({fluctuation:+.0%})"
        )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.MARKET_FLUCTUATION,
                data={
                    "material_id": material_id,
                    "material_name": material.name,
                    "old_value": old_value,
                    "new_value": material.current_value,
                    "fluctuation": fluctuation,
                },
                source="material_service",
            )
        )
        return True

    def apply_random_market_fluctuations(self) -> None:
        for material_id in list(self._registry):
            self.apply_market_fluctuation(material_id, roll_fluctuation(self._rng))

    def reset_material_value(self, material_id: str) -> bool:
        material = self._registry.get(material_id)
        if material is None:
            logger.error(f"Material {material_id} not found in registry")
            return False

        material.reset_market_value()
        logger.info(f"Reset {material.name} to base value: {material.base_value}")
        return True

    # === 필터 ===

    def get_materials_by_category(self, category: str) -> list[Material]:
        return [m for m in self._registry.values() if m.category == category]

    def get_materials_by_rarity(self, rarity: MaterialRarity) -> list[Material]:
        return [m for m in self._registry.values() if m.rarity == rarity]

    def get_craftable_materials(self) -> list[Material]:
        stock = self._stock()
        return [
            m
            for m in self._registry.values()
            if m.has_recipe and has_ingredients(stock, m.recipe)
        ]

    def _stock(self) -> dict[str, int]:
        return {mid: m.quantity for mid, m in self._inventory.items()}
