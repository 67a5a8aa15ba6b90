"""길드 금고 — 골드 + 평판 장부"""

from dataclasses import dataclass, field
from typing import Optional

from guildsim.core.event_bus import EventPort, publish
from guildsim.core.event_types import EventTypes
from guildsim.core.rules import MAX_REPUTATION, MIN_REPUTATION, clamp


@dataclass
class Treasury:
    """골드는 음수 허용하지 않음을 호출자가 can_afford로 확인한다."""

    gold: int = 0
    reputation: int = 50
    bus: Optional[EventPort] = field(default=None, repr=False, compare=False)

    def can_afford(self, cost: int) -> bool:
        return self.gold >= cost

    def modify_gold(self, amount: int) -> None:
        self.gold += amount
        publish(
            self.bus,
            EventTypes.GOLD_CHANGED,
            "treasury",
            amount=amount,
            new_total=self.gold,
        )

    def modify_reputation(self, amount: int) -> None:
        """0 ~ 100 클램프."""
        self.reputation = clamp(
            self.reputation + amount, MIN_REPUTATION, MAX_REPUTATION
        )
        publish(
            self.bus,
            EventTypes.REPUTATION_CHANGED,
            "treasury",
            amount=amount,
            new_total=self.reputation,
        )
