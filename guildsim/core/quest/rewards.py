"""퀘스트 보상 정산"""

import random
from typing import Iterable

from guildsim.core.quest.models import MaterialDrop, MaterialReward, Quest, QuestRewards


def failure_reputation_penalty(reputation_impact: int) -> int:
    """실패 시 평판 영향의 절반만큼 감소."""
    return -(reputation_impact // 2)


def roll_material_drops(
    rewards: Iterable[MaterialReward],
    rng: random.Random,
) -> list[MaterialDrop]:
    """보상 재료별 드롭 판정. roll <= drop_chance 이면 획득."""
    drops: list[MaterialDrop] = []
    for reward in rewards:
        if rng.random() <= reward.drop_chance:
            drops.append(MaterialDrop(reward.material_id, reward.quantity))
    return drops


def resolve_rewards(
    quest: Quest,
    is_success: bool,
    rng: random.Random,
) -> QuestRewards:
    """성공: 골드 + 드롭 재료 + 평판. 실패: 평판 페널티만."""
    if not is_success:
        return QuestRewards(
            gold=0,
            reputation=failure_reputation_penalty(quest.reputation_impact),
        )

    return QuestRewards(
        gold=quest.reward_gold,
        reputation=quest.reputation_impact,
        materials=roll_material_drops(quest.reward_materials, rng),
    )
