"""부채 Service — 분기 정산, 수동 상환

분기 정산 순서: 이자 적용 → 골드 확인 → 상환.
골드 부족 시 OVERDUE + game_over (회복 불가).
"""

from datetime import datetime
from typing import Callable, Optional

from guildsim.core.debt.models import Debt, DebtState, PaymentRecord
from guildsim.core.debt.schedule import days_until_payment, quarterly_interest
from guildsim.core.event_bus import EventBus, GameEvent
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import get_logger
from guildsim.core.treasury import Treasury

logger = get_logger(__name__)

INSUFFICIENT_FUNDS_REASON = "Failed to make quarterly debt payment - Insufficient funds"


class DebtService:
    """현재 부채 1건 + 금고 연동"""

    def __init__(
        self,
        treasury: Treasury,
        event_bus: EventBus,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._treasury = treasury
        self._bus = event_bus
        self._clock = clock
        self._debt: Optional[Debt] = None

    def initialize(self, balance: int, quarterly_payment: int, interest_rate: float) -> Debt:
        self._debt = Debt(
            current_balance=balance,
            quarterly_payment=quarterly_payment,
            interest_rate=interest_rate,
            bus=self._bus,
            clock=self._clock,
        )
        logger.info(
            f"Debt initialized: balance={balance}, quarterly_payment={quarterly_payment}"
        )
        return self._debt

    def set_debt(self, debt: Optional[Debt]) -> None:
        self._debt = debt

    # ── 분기 정산 ────────────────────────────────────────────

    def process_quarter(self, quarter: int) -> bool:
        """분기 이자 후 상환. 실패(골드 부족/종결 상태) 시 False."""
        debt = self._debt
        if debt is None:
            logger.warning("No debt to process")
            return False

        if debt.state == DebtState.PAID:
            return True

        if debt.state == DebtState.OVERDUE:
            return False

        logger.info(f"Processing quarterly debt payment for quarter {quarter}")

        interest = debt.apply_interest()
        logger.info(f"Interest applied: +{interest}, balance={debt.current_balance}")

        payment = min(debt.quarterly_payment, debt.current_balance)
        if not self._treasury.can_afford(payment):
            logger.error(
                f"Insufficient gold for quarterly payment. "
                f"Required: {payment}, available: {self._treasury.gold}"
            )
            debt.declare_default(INSUFFICIENT_FUNDS_REASON)
            return False

        return self._pay(payment)

    def make_manual_payment(self, amount: int) -> bool:
        debt = self._debt
        if debt is None:
            logger.warning("No debt to pay")
            return False

        if amount <= 0:
            logger.warning(f"Payment amount must be positive, got {amount}")
            return False

        if debt.is_terminal:
            logger.warning(f"Cannot pay debt in state {debt.state.value}")
            return False

        if not self._treasury.can_afford(amount):
            logger.warning(
                f"Insufficient gold for payment. "
                f"Required: {amount}, available: {self._treasury.gold}"
            )
            return False

        return self._pay(min(amount, debt.current_balance))

    def _pay(self, amount: int) -> bool:
        debt = self._debt
        self._treasury.modify_gold(-amount)

        if not debt.make_payment(amount):
            # 골드는 이미 차감됨 → 되돌림
            self._treasury.modify_gold(amount)
            logger.error("Failed to process debt payment")
            return False

        logger.info(f"Debt payment: {amount}, remaining balance={debt.current_balance}")

        if debt.state == DebtState.PAID:
            logger.info("Debt fully paid")
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.DEBT_PAID_OFF,
                    data={"debt_id": debt.debt_id},
                    source="debt_service",
                )
            )
        return True

    # ── 조회 ─────────────────────────────────────────────────

    @property
    def current_debt(self) -> Optional[Debt]:
        return self._debt

    def get_current_balance(self) -> int:
        return self._debt.current_balance if self._debt else 0

    def get_quarterly_payment(self) -> int:
        return self._debt.quarterly_payment if self._debt else 0

    def get_payment_history(self) -> list[PaymentRecord]:
        return list(self._debt.payment_history) if self._debt else []

    def is_overdue(self) -> bool:
        return self._debt is not None and self._debt.state == DebtState.OVERDUE

    def is_paid(self) -> bool:
        return self._debt is not None and self._debt.state == DebtState.PAID

    def get_days_until_payment(self, current_day: int) -> int:
        return days_until_payment(current_day)

    def get_projected_balance_after_interest(self) -> int:
        if self._debt is None:
            return 0
        return self._debt.current_balance + quarterly_interest(
            self._debt.current_balance, self._debt.interest_rate
        )
