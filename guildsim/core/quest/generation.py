"""퀘스트 무작위 생성 — 순수 Python, RNG 주입"""

import logging
import random

from guildsim.core.character.models import StatType
from guildsim.core.quest.enums import QuestType
from guildsim.core.quest.models import MaterialReward, Quest
from guildsim.core.rules import (
    GOLD_PER_DIFFICULTY,
    MAX_DIFFICULTY,
    MAX_QUEST_DURATION,
    MIN_DIFFICULTY,
    MIN_QUEST_DURATION,
    STAT_POINTS_PER_DIFFICULTY,
    clamp,
)

logger = logging.getLogger(__name__)

# === 유형별 요구 스탯 분배 (주 스탯 70%, 보조 스탯 30%) ===
STAT_SPLIT: dict[QuestType, tuple[StatType, StatType]] = {
    QuestType.COMBAT: (StatType.COMBAT, StatType.EXPLORATION),
    QuestType.EXPLORATION: (StatType.EXPLORATION, StatType.COMBAT),
    QuestType.ADMIN: (StatType.ADMIN, StatType.EXPLORATION),
}
PRIMARY_SHARE_TENTHS = 7

# === 보상 골드 변동 (%) ===
GOLD_VARIANCE_MIN = 80
GOLD_VARIANCE_MAX = 120

# === 평판 / 추정 성공률 ===
REPUTATION_PER_DIFFICULTY = 5
BASE_SUCCESS_ESTIMATE = 0.5
SUCCESS_ESTIMATE_PER_DIFFICULTY = 0.05

# === 재료 드롭 확률 범위 ===
DROP_CHANCE_MIN = 0.3
DROP_CHANCE_MAX = 0.9


def split_required_stats(
    difficulty: int, quest_type: QuestType
) -> dict[StatType, int]:
    """난이도 × 10 포인트를 주/보조 스탯에 7:3 분배. 합계는 항상 정확히 일치."""
    total = difficulty * STAT_POINTS_PER_DIFFICULTY
    primary, secondary = STAT_SPLIT[quest_type]
    primary_points = total * PRIMARY_SHARE_TENTHS // 10
    return {primary: primary_points, secondary: total - primary_points}


def generate_quest(
    difficulty: int,
    quest_type: QuestType,
    rng: random.Random,
) -> Quest:
    """난이도(1 ~ 5 클램프)와 유형으로 AVAILABLE 퀘스트 생성."""
    difficulty = clamp(difficulty, MIN_DIFFICULTY, MAX_DIFFICULTY)

    quest = Quest(
        quest_type=quest_type,
        difficulty=difficulty,
        required_stats=split_required_stats(difficulty, quest_type),
        duration=rng.randint(MIN_QUEST_DURATION, MAX_QUEST_DURATION),
        reward_gold=(
            difficulty
            * GOLD_PER_DIFFICULTY
            * rng.randint(GOLD_VARIANCE_MIN, GOLD_VARIANCE_MAX)
            // 100
        ),
        reputation_impact=difficulty * REPUTATION_PER_DIFFICULTY,
        success_rate=BASE_SUCCESS_ESTIMATE
        + difficulty * SUCCESS_ESTIMATE_PER_DIFFICULTY,
    )

    for _ in range(difficulty // 2 + 1):
        quest.reward_materials.append(
            MaterialReward(
                material_id=f"material-{rng.getrandbits(32):08x}",
                quantity=rng.randint(1, difficulty + 1),
                drop_chance=rng.uniform(DROP_CHANCE_MIN, DROP_CHANCE_MAX),
            )
        )

    logger.debug(
        f"Generated quest {quest.quest_id}: {quest_type.value} "
        f"difficulty={difficulty} duration={quest.duration}"
    )
    return quest
