"""GuildSimulation — 단일 타임라인 드라이버

금고와 서비스 전부를 소유하고 하루 단위로 진행한다.
engine → service 직접 참조 허용 (역방향 금지).

하루 진행 순서:
1. day += 1
2. 90일 배수면 분기 진행 → quarter_advanced → 부채 정산 (이자 → 상환)
3. 완료 가능 퀘스트 quest_ready 발행
4. day_advanced
"""

import random
from datetime import datetime
from typing import Callable, Optional

from guildsim.config import Settings
from guildsim.config import settings as default_settings
from guildsim.core.event_bus import EventBus, GameEvent
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import get_logger
from guildsim.core.rules import DAYS_PER_QUARTER
from guildsim.core.treasury import Treasury
from guildsim.services.debt_service import DebtService
from guildsim.services.material_service import MaterialService
from guildsim.services.party_service import PartyService
from guildsim.services.quest_reward_service import QuestRewardService
from guildsim.services.quest_service import QuestService
from guildsim.services.relationship_service import RelationshipService

logger = get_logger(__name__)

FIRST_DAY = 1
FIRST_QUARTER = 1


class GuildSimulation:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or default_settings
        self.event_bus = event_bus or EventBus()
        self.rng = rng or random.Random(self.settings.RANDOM_SEED)

        self.treasury = Treasury(bus=self.event_bus)
        self.material_service = MaterialService(self.treasury, self.event_bus, self.rng)
        self.party_service = PartyService(
            self.treasury,
            self.event_bus,
            max_parties=self.settings.MAX_PARTIES,
            rng=self.rng,
        )
        self.quest_service = QuestService(self.event_bus, self.rng)
        self.quest_reward_service = QuestRewardService(
            self.treasury, self.material_service, self.event_bus, self.rng
        )
        self.relationship_service = RelationshipService(self.event_bus)
        self.debt_service = DebtService(self.treasury, self.event_bus, clock=clock)

        self.current_day = FIRST_DAY
        self.current_quarter = FIRST_QUARTER
        self.is_running = False
        self.game_over_reason: Optional[str] = None

        self.event_bus.subscribe(EventTypes.GAME_OVER, self._on_game_over)

    def start_new_game(self) -> None:
        s = self.settings
        self.current_day = FIRST_DAY
        self.current_quarter = FIRST_QUARTER
        self.game_over_reason = None

        self.treasury.gold = s.STARTING_GOLD
        self.treasury.reputation = s.STARTING_REPUTATION
        self.quest_service.clear_all_quests()
        self.debt_service.initialize(
            s.STARTING_DEBT, s.QUARTERLY_PAYMENT, s.DEFAULT_INTEREST_RATE
        )

        self.is_running = True
        logger.info("New game started")
        self._emit(
            EventTypes.GAME_STARTED,
            gold=self.treasury.gold,
            reputation=self.treasury.reputation,
            debt=self.debt_service.get_current_balance(),
        )

    def advance_day(self) -> bool:
        """하루 진행. 게임 중이 아니면 False."""
        if not self.is_running:
            logger.warning("Cannot advance day: game is not running")
            return False

        self.current_day += 1

        if self.current_day % DAYS_PER_QUARTER == 0:
            self._advance_quarter()

        self.quest_service.update_quests(self.current_day)

        self._emit(EventTypes.DAY_ADVANCED, day=self.current_day)
        return True

    def advance_days(self, days: int) -> int:
        """최대 days일 진행. 게임 오버 시 중단하고 실제 진행 일수 반환."""
        advanced = 0
        for _ in range(days):
            if not self.advance_day():
                break
            advanced += 1
        return advanced

    def _advance_quarter(self) -> None:
        self.current_quarter += 1
        logger.info(f"Quarter advanced: {self.current_quarter}")
        self._emit(EventTypes.QUARTER_ADVANCED, quarter=self.current_quarter)
        self.debt_service.process_quarter(self.current_quarter)

    def _on_game_over(self, event: GameEvent) -> None:
        self.is_running = False
        self.game_over_reason = event.data.get("reason")
        logger.info(f"Game over: {self.game_over_reason}")

    def _emit(self, event_type: str, **data) -> None:
        self.event_bus.emit(
            GameEvent(event_type=event_type, data=data, source="simulation")
        )
