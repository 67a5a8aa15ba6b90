"""Headless simulation entrypoint.

    python -m guildsim.main 365
"""

import sys

from guildsim.config import settings
from guildsim.core.logging import get_logger, setup_logging
from guildsim.engine.simulation import GuildSimulation

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)

DEFAULT_DAYS = 360


def run(days: int = DEFAULT_DAYS) -> GuildSimulation:
    """새 게임을 시작해서 최대 days일 진행 (게임 오버 시 중단)."""
    simulation = GuildSimulation(settings)
    simulation.start_new_game()

    advanced = simulation.advance_days(days)
    logger.info(
        f"Simulation finished after {advanced} days "
        f"(gold={simulation.treasury.gold}, "
        f"debt={simulation.debt_service.get_current_balance()}, "
        f"running={simulation.is_running})"
    )
    return simulation


if __name__ == "__main__":
    run(int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DAYS)
