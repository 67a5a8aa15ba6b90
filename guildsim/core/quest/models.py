"""퀘스트 도메인 모델 (저장소 무관)"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from guildsim.core.character.models import StatType
from guildsim.core.logging import log_rule_violation
from guildsim.core.quest.enums import QuestState, QuestType
from guildsim.core.quest.transitions import can_transition
from guildsim.core.rules import (
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    STAT_POINTS_PER_DIFFICULTY,
    new_entity_id,
)

logger = logging.getLogger(__name__)


@dataclass
class MaterialReward:
    """퀘스트 보상 재료. drop_chance 0.0 ~ 1.0"""

    material_id: str
    quantity: int
    drop_chance: float = 1.0

    def __post_init__(self) -> None:
        self.drop_chance = max(0.0, min(1.0, self.drop_chance))


@dataclass
class MaterialDrop:
    """실제로 떨어진 보상 재료"""

    material_id: str
    quantity: int


@dataclass
class QuestRewards:
    """완료/실패 시 정산 결과"""

    gold: int = 0
    reputation: int = 0
    materials: list[MaterialDrop] = field(default_factory=list)


@dataclass
class Quest:
    """의뢰 본체.

    assigned_party_id는 파티 ID 참조만 보관 (Party 객체 소유 안 함).
    ASSIGNED 이상 상태에서만 설정된다.
    """

    difficulty: int = MIN_DIFFICULTY
    required_stats: dict[StatType, int] = field(default_factory=dict)
    duration: int = 1  # 일 단위
    reward_gold: int = 0
    reward_materials: list[MaterialReward] = field(default_factory=list)
    quest_type: QuestType = QuestType.EXPLORATION
    success_rate: float = 0.0  # 생성 시 추정치
    reputation_impact: int = 0

    # 상태
    state: QuestState = QuestState.AVAILABLE
    assigned_party_id: Optional[str] = None
    start_day: int = 0

    quest_id: str = field(default_factory=new_entity_id)

    # ── 검증 ─────────────────────────────────────────────────

    def is_valid(self) -> bool:
        """난이도 1 ~ 5, 기간 > 0 은 필수.

        요구 스탯 합 ≠ 난이도 × 10 은 경고만 (실패 아님).
        """
        if self.difficulty < MIN_DIFFICULTY or self.difficulty > MAX_DIFFICULTY:
            log_rule_violation(
                logger,
                self.quest_id,
                "difficulty",
                f"Quest {self.quest_id}: invalid difficulty {self.difficulty}",
                logging.ERROR,
            )
            return False

        total = sum(self.required_stats.values())
        expected = self.difficulty * STAT_POINTS_PER_DIFFICULTY
        if total != expected:
            log_rule_violation(
                logger,
                self.quest_id,
                "required_stats",
                f"Quest {self.quest_id}: stat requirements ({total}) "
                f"don't match difficulty ({expected})",
            )

        if self.duration <= 0:
            log_rule_violation(
                logger,
                self.quest_id,
                "duration",
                f"Quest {self.quest_id}: invalid duration {self.duration}",
                logging.ERROR,
            )
            return False

        return True

    # ── 상태 전이 ────────────────────────────────────────────

    def transition_to(self, new_state: QuestState) -> bool:
        """LEGAL_TRANSITIONS에 있는 간선만 허용. 거부 시 상태 유지."""
        if not can_transition(self.state, new_state):
            log_rule_violation(
                logger,
                self.quest_id,
                "state",
                f"Quest {self.quest_id}: invalid state transition "
                f"from {self.state.value} to {new_state.value}",
            )
            return False

        self.state = new_state
        return True

    def assign_to_party(self, party_id: str) -> bool:
        """AVAILABLE → ASSIGNED. 전이 실패 시 party_id도 기록하지 않는다."""
        if self.state != QuestState.AVAILABLE:
            log_rule_violation(
                logger,
                self.quest_id,
                "state",
                f"Quest {self.quest_id} is not available for assignment "
                f"(state={self.state.value})",
            )
            return False

        if not party_id:
            log_rule_violation(
                logger,
                self.quest_id,
                "assigned_party_id",
                f"Quest {self.quest_id}: empty party id",
            )
            return False

        if not self.transition_to(QuestState.ASSIGNED):
            return False

        self.assigned_party_id = party_id
        return True

    def start_quest(self, current_day: int) -> bool:
        """ASSIGNED → IN_PROGRESS. 전이 가능할 때만 start_day 기록."""
        if not self.assigned_party_id:
            log_rule_violation(
                logger,
                self.quest_id,
                "assigned_party_id",
                f"Quest {self.quest_id} has no assigned party",
            )
            return False

        if not self.transition_to(QuestState.IN_PROGRESS):
            return False

        self.start_day = current_day
        return True

    def complete(self, is_success: bool) -> bool:
        """IN_PROGRESS → COMPLETED / FAILED."""
        target = QuestState.COMPLETED if is_success else QuestState.FAILED
        return self.transition_to(target)

    # ── 진행도 ───────────────────────────────────────────────

    def get_days_remaining(self, current_day: int) -> int:
        """진행 중이 아니면 -1."""
        if self.state != QuestState.IN_PROGRESS:
            return -1

        elapsed = current_day - self.start_day
        return max(0, self.duration - elapsed)

    def is_ready_to_complete(self, current_day: int) -> bool:
        return (
            self.state == QuestState.IN_PROGRESS
            and self.get_days_remaining(current_day) <= 0
        )

    @property
    def expected_completion_day(self) -> Optional[int]:
        if self.state != QuestState.IN_PROGRESS:
            return None
        return self.start_day + self.duration
