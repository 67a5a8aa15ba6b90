"""시뮬레이션 드라이버"""

from guildsim.engine.simulation import GuildSimulation

__all__ = ["GuildSimulation"]
