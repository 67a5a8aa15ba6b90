"""시세 변동 + 조합 계산 — 순수 함수"""

from __future__ import annotations

import random
from typing import Mapping

# === 무작위 시세 변동 폭 ===
FLUCTUATION_MIN = -0.2
FLUCTUATION_MAX = 0.2


def roll_fluctuation(rng: random.Random) -> float:
    """-20% ~ +20% 균등 분포."""
    return rng.uniform(FLUCTUATION_MIN, FLUCTUATION_MAX)


def scale_recipe(recipe: Mapping[str, int], quantity: int) -> dict[str, int]:
    """조합 수량만큼 재료 요구량 배율 적용."""
    return {material_id: count * quantity for material_id, count in recipe.items()}


def has_ingredients(
    stock: Mapping[str, int],
    requirements: Mapping[str, int],
) -> bool:
    """보유 수량이 모든 요구량 이상인지. 미보유는 0."""
    return all(stock.get(mid, 0) >= need for mid, need in requirements.items())


def calculate_combination_value(
    output_value: int,
    quantity: int,
    recipe: Mapping[str, int],
    input_values: Mapping[str, int],
) -> int:
    """조합 이익 = 산출 가치 - 투입 가치.

    input_values에 없는 재료(미등록)는 비용 0으로 본다.
    """
    output = output_value * quantity
    input_cost = sum(
        input_values[mid] * count * quantity
        for mid, count in recipe.items()
        if mid in input_values
    )
    return output - input_cost
