"""재료 도메인 모델 (저장소 무관)"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from guildsim.core.event_bus import EventPort, publish
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import log_rule_violation
from guildsim.core.rules import new_entity_id

logger = logging.getLogger(__name__)

MIN_MARKET_VALUE = 1


class MaterialRarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"


@dataclass
class Material:
    """거래 가능한 재료.

    current_value는 시세 변동 후에도 최소 1.
    recipe: 조합 재료 material_id → 필요 수량.
    """

    name: str
    rarity: MaterialRarity = MaterialRarity.COMMON
    base_value: int = 0
    current_value: Optional[int] = None  # None → base_value로 초기화
    quantity: int = 0
    recipe: dict[str, int] = field(default_factory=dict)
    category: str = ""
    material_id: str = field(default_factory=new_entity_id)
    bus: Optional[EventPort] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.current_value is None:
            self.current_value = self.base_value

    def is_valid(self) -> bool:
        """수량/가치 음수 검사. 실패 시 진단 로그, 상태 변경 없음."""
        if self.quantity < 0:
            log_rule_violation(
                logger,
                self.material_id,
                "quantity",
                f"Material {self.name}: invalid quantity {self.quantity}",
                logging.ERROR,
            )
            return False

        if self.base_value < 0:
            log_rule_violation(
                logger,
                self.material_id,
                "base_value",
                f"Material {self.name}: invalid base value {self.base_value}",
                logging.ERROR,
            )
            return False

        if self.current_value < 0:
            log_rule_violation(
                logger,
                self.material_id,
                "current_value",
                f"Material {self.name}: invalid current value {self.current_value}",
                logging.ERROR,
            )
            return False

        return True

    def add_quantity(self, amount: int) -> None:
        """수량 증가. 하한 검사는 is_valid()에서 별도로 한다."""
        self.quantity += amount
        self._publish_quantity_change(amount)

    def remove_quantity(self, amount: int) -> bool:
        """재고 부족 시 False, 변경/이벤트 없음."""
        if amount > self.quantity:
            log_rule_violation(
                logger,
                self.material_id,
                "quantity",
                f"Material {self.name}: cannot remove {amount}, have {self.quantity}",
            )
            return False

        self.quantity -= amount
        self._publish_quantity_change(-amount)
        return True

    def update_market_value(self, fluctuation_percent: float) -> None:
        """current_value = round(base × (1 + 변동률)), 최소 1.

        round()는 half-to-even. -100% 이하 변동도 1에서 멈춘다.
        """
        value = round(self.base_value * (1.0 + fluctuation_percent))
        self.current_value = max(MIN_MARKET_VALUE, value)

    def reset_market_value(self) -> None:
        self.current_value = max(MIN_MARKET_VALUE, self.base_value)

    @property
    def has_recipe(self) -> bool:
        return bool(self.recipe)

    def _publish_quantity_change(self, change: int) -> None:
        publish(
            self.bus,
            EventTypes.MATERIAL_QUANTITY_CHANGED,
            "material",
            material_id=self.material_id,
            change=change,
            new_quantity=self.quantity,
        )
