"""파티 시스템 Core 패키지"""

from guildsim.core.party.models import PARTY_STAT_TYPES, Equipment, Party
from guildsim.core.party.calculations import (
    calculate_effective_stat,
    calculate_success_rate,
    loyalty_modifier,
)

__all__ = [
    "PARTY_STAT_TYPES",
    "Equipment",
    "Party",
    "calculate_effective_stat",
    "calculate_success_rate",
    "loyalty_modifier",
]
