"""분기 상환 일정 계산 — 순수 함수"""

from guildsim.core.rules import DAYS_PER_QUARTER, QUARTERS_PER_YEAR


def is_payment_due(current_day: int) -> bool:
    """90일 배수(0일 포함)에 상환."""
    return current_day % DAYS_PER_QUARTER == 0


def days_until_payment(current_day: int) -> int:
    """다음 상환일까지 남은 일수 (1 ~ 90). 상환일 당일은 다음 분기까지 90."""
    return DAYS_PER_QUARTER - current_day % DAYS_PER_QUARTER


def quarterly_interest(balance: int, annual_rate: float) -> int:
    """연이율의 분기 환산 이자. round()는 half-to-even."""
    return round(balance * annual_rate / QUARTERS_PER_YEAR)
