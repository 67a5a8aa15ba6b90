"""부채 시스템 Core 패키지"""

from guildsim.core.debt.models import (
    MISSED_PAYMENT_REASON,
    Debt,
    DebtState,
    PaymentRecord,
)
from guildsim.core.debt.schedule import (
    days_until_payment,
    is_payment_due,
    quarterly_interest,
)

__all__ = [
    "MISSED_PAYMENT_REASON",
    "Debt",
    "DebtState",
    "PaymentRecord",
    "days_until_payment",
    "is_payment_due",
    "quarterly_interest",
]
