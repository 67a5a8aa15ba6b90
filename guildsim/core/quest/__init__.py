"""퀘스트 시스템 Core 패키지"""

from guildsim.core.quest.enums import QuestState, QuestType
from guildsim.core.quest.models import (
    MaterialDrop,
    MaterialReward,
    Quest,
    QuestRewards,
)
from guildsim.core.quest.transitions import (
    LEGAL_TRANSITIONS,
    TERMINAL_STATES,
    can_transition,
    is_terminal,
)
from guildsim.core.quest.generation import generate_quest, split_required_stats
from guildsim.core.quest.rewards import (
    failure_reputation_penalty,
    resolve_rewards,
    roll_material_drops,
)

__all__ = [
    # enums
    "QuestState",
    "QuestType",
    # models
    "MaterialDrop",
    "MaterialReward",
    "Quest",
    "QuestRewards",
    # transitions
    "LEGAL_TRANSITIONS",
    "TERMINAL_STATES",
    "can_transition",
    "is_terminal",
    # generation / rewards
    "generate_quest",
    "split_required_stats",
    "failure_reputation_penalty",
    "resolve_rewards",
    "roll_material_drops",
]
