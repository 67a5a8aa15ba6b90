"""재료 시스템 Core 패키지"""

from guildsim.core.material.models import (
    MIN_MARKET_VALUE,
    Material,
    MaterialRarity,
)
from guildsim.core.material.market import (
    calculate_combination_value,
    has_ingredients,
    roll_fluctuation,
    scale_recipe,
)

__all__ = [
    "MIN_MARKET_VALUE",
    "Material",
    "MaterialRarity",
    "calculate_combination_value",
    "has_ingredients",
    "roll_fluctuation",
    "scale_recipe",
]
