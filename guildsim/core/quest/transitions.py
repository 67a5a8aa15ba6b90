"""퀘스트 상태 전이 테이블

허용 간선만 데이터로 보관한다. 테이블에 없는 (from, to)는 전부 거부.
"""

from typing import Dict, FrozenSet

from guildsim.core.quest.enums import QuestState

LEGAL_TRANSITIONS: Dict[QuestState, FrozenSet[QuestState]] = {
    QuestState.AVAILABLE: frozenset({QuestState.ASSIGNED}),
    QuestState.ASSIGNED: frozenset({QuestState.IN_PROGRESS}),
    QuestState.IN_PROGRESS: frozenset({QuestState.COMPLETED, QuestState.FAILED}),
    QuestState.COMPLETED: frozenset(),
    QuestState.FAILED: frozenset(),
}

TERMINAL_STATES: FrozenSet[QuestState] = frozenset(
    state for state, targets in LEGAL_TRANSITIONS.items() if not targets
)


def can_transition(current: QuestState, target: QuestState) -> bool:
    return target in LEGAL_TRANSITIONS.get(current, frozenset())


def is_terminal(state: QuestState) -> bool:
    return state in TERMINAL_STATES
