"""부채 도메인 모델"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from guildsim.core.debt.schedule import (
    days_until_payment,
    is_payment_due,
    quarterly_interest,
)
from guildsim.core.event_bus import EventPort, publish
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import log_rule_violation
from guildsim.core.rules import DAYS_PER_QUARTER, new_entity_id

logger = logging.getLogger(__name__)

MISSED_PAYMENT_REASON = "Failed to make quarterly debt payment"


class DebtState(str, Enum):
    ACTIVE = "active"
    PAID = "paid"  # 종결
    OVERDUE = "overdue"  # 종결 (게임 오버)


@dataclass(frozen=True)
class PaymentRecord:
    """상환 기록 — 불변"""

    amount: int
    timestamp: datetime
    remaining_balance: int


@dataclass
class Debt:
    """분기 상환 의무.

    payment_history는 추가만 허용. PAID/OVERDUE는 종결 상태.
    """

    current_balance: int
    quarterly_payment: int
    interest_rate: float  # 연이율
    due_date: Optional[datetime] = None  # None → clock() + 90일
    payment_history: list[PaymentRecord] = field(default_factory=list)
    state: DebtState = DebtState.ACTIVE
    debt_id: str = field(default_factory=new_entity_id)
    bus: Optional[EventPort] = field(default=None, repr=False, compare=False)
    clock: Callable[[], datetime] = field(
        default=datetime.now, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.due_date is None:
            self.due_date = self.clock() + timedelta(days=DAYS_PER_QUARTER)

    @property
    def is_terminal(self) -> bool:
        return self.state != DebtState.ACTIVE

    # ── 검증 ─────────────────────────────────────────────────

    def is_valid(self) -> bool:
        if self.current_balance < 0:
            log_rule_violation(
                logger,
                self.debt_id,
                "current_balance",
                f"Debt: invalid balance {self.current_balance}",
                logging.ERROR,
            )
            return False

        if self.interest_rate <= 0:
            log_rule_violation(
                logger,
                self.debt_id,
                "interest_rate",
                f"Debt: invalid interest rate {self.interest_rate}",
                logging.ERROR,
            )
            return False

        return True

    # ── 상환 ─────────────────────────────────────────────────

    def make_payment(self, amount: int) -> bool:
        """amount는 잔액으로 상한. 잔액 0이 되면 PAID."""
        if amount <= 0:
            log_rule_violation(
                logger,
                self.debt_id,
                "amount",
                f"Debt: payment amount must be positive, got {amount}",
            )
            return False

        if self.is_terminal:
            log_rule_violation(
                logger,
                self.debt_id,
                "state",
                f"Debt: cannot pay in terminal state {self.state.value}",
            )
            return False

        amount = min(amount, self.current_balance)
        self.current_balance -= amount
        self.payment_history.append(
            PaymentRecord(
                amount=amount,
                timestamp=self.clock(),
                remaining_balance=self.current_balance,
            )
        )

        if self.current_balance == 0:
            self.state = DebtState.PAID
            logger.info(f"Debt {self.debt_id} fully paid")

        publish(
            self.bus,
            EventTypes.DEBT_PAYMENT,
            "debt",
            debt_id=self.debt_id,
            amount=amount,
            remaining_balance=self.current_balance,
        )
        return True

    def is_payment_due(self, current_day: int) -> bool:
        return is_payment_due(current_day)

    def days_until_payment(self, current_day: int) -> int:
        return days_until_payment(current_day)

    def process_quarterly_payment(self, current_day: int) -> bool:
        """상환일이 아니면 변경 없이 True.

        잔액 < 분기 상환액이면 OVERDUE + game_over 발행, False.
        이미 PAID면 True, 이미 OVERDUE면 False (이벤트 재발행 없음).
        """
        if not self.is_payment_due(current_day):
            return True

        if self.state == DebtState.PAID:
            return True

        if self.state == DebtState.OVERDUE:
            return False

        if self.current_balance < self.quarterly_payment:
            self.declare_default(MISSED_PAYMENT_REASON)
            return False

        return self.make_payment(self.quarterly_payment)

    def declare_default(self, reason: str) -> None:
        """OVERDUE 전환 + game_over. 잔액은 그대로."""
        self.state = DebtState.OVERDUE
        logger.error(f"Debt {self.debt_id} overdue: {reason}")
        publish(
            self.bus,
            EventTypes.GAME_OVER,
            "debt",
            debt_id=self.debt_id,
            reason=reason,
        )

    # ── 이자 ─────────────────────────────────────────────────

    def apply_interest(self) -> int:
        """분기 이자를 잔액에 더하고 이자액 반환.

        상환과의 호출 순서는 호출자(시뮬레이션)가 정한다.
        """
        interest = quarterly_interest(self.current_balance, self.interest_rate)
        self.current_balance += interest
        return interest

    def projected_balance_after_interest(self) -> int:
        return self.current_balance + quarterly_interest(
            self.current_balance, self.interest_rate
        )
