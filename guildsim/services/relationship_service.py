"""관계 Service — 관계 변동, 특수 임계, 대화 선택지, 성향 이력

Service → Core 허용, Service → Service 금지 (EventBus 경유)
"""

from dataclasses import dataclass, field
from typing import Optional

from guildsim.core.character.models import Alignment, Character
from guildsim.core.character.status import crossed_thresholds, relationship_status
from guildsim.core.event_bus import EventBus, GameEvent
from guildsim.core.event_types import EventTypes
from guildsim.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class DialogueChoice:
    text: str
    relationship_change: int = 0
    alignment_change: Alignment = Alignment.NEUTRAL
    next_node_id: Optional[str] = None


@dataclass
class DialogueNode:
    """대화 노드. required_* 는 해금 조건 (0 / NEUTRAL = 조건 없음)."""

    node_id: str
    text: str = ""
    choices: list[DialogueChoice] = field(default_factory=list)
    required_relationship: int = 0
    required_alignment: Alignment = Alignment.NEUTRAL


class RelationshipService:
    """캐릭터 간 관계 및 대화 진행 관리"""

    def __init__(self, event_bus: EventBus) -> None:
        self._bus = event_bus
        self._current_dialogues: dict[str, DialogueNode] = {}
        self._alignment_history: dict[str, list[Alignment]] = {}

    # ── 관계 ─────────────────────────────────────────────────

    def modify_relationship(
        self,
        character: Optional[Character],
        target_character_id: str,
        change: int,
    ) -> None:
        """관계 변동 후 새로 넘은 특수 임계마다 special_relationship 발행."""
        if character is None:
            logger.error("Cannot modify relationship: character is None")
            return

        previous = character.get_relationship(target_character_id)
        character.modify_relationship(target_character_id, change)
        new_value = character.get_relationship(target_character_id)

        for milestone in crossed_thresholds(previous, new_value):
            logger.info(
                f"Special relationship: {character.name} -> {target_character_id} "
                f"{milestone.value} ({new_value})"
            )
            self._emit(
                EventTypes.SPECIAL_RELATIONSHIP,
                character_id=target_character_id,
                milestone=milestone.value,
                value=new_value,
            )

    def get_relationship_status(self, value: int) -> str:
        return relationship_status(value)

    def get_npcs_above_threshold(self, player: Optional[Character], threshold: int) -> list[str]:
        if player is None:
            return []
        return [cid for cid, value in player.relationships.items() if value >= threshold]

    def get_npcs_below_threshold(self, player: Optional[Character], threshold: int) -> list[str]:
        if player is None:
            return []
        return [cid for cid, value in player.relationships.items() if value <= threshold]

    # ── 대화 ─────────────────────────────────────────────────

    def start_dialogue(self, npc_id: str, start_node: Optional[DialogueNode]) -> bool:
        if start_node is None:
            logger.error(f"Cannot start dialogue with {npc_id}: start node is None")
            return False

        self._current_dialogues[npc_id] = start_node
        self._emit(EventTypes.DIALOGUE_STARTED, npc_id=npc_id, node_id=start_node.node_id)
        return True

    def get_current_dialogue_node(self, npc_id: str) -> Optional[DialogueNode]:
        return self._current_dialogues.get(npc_id)

    def reset_dialogue(self, npc_id: str) -> None:
        self._current_dialogues.pop(npc_id, None)

    def process_dialogue_choice(
        self,
        player: Optional[Character],
        npc_id: str,
        choice: Optional[DialogueChoice],
    ) -> bool:
        """선택지 적용: 관계 변동 → 성향 합집합 → dialogue_choice_made → (다음 노드)."""
        if player is None or choice is None:
            logger.error("Cannot process dialogue choice: player or choice is None")
            return False

        if choice.relationship_change != 0:
            self.modify_relationship(player, npc_id, choice.relationship_change)

        if choice.alignment_change != Alignment.NEUTRAL:
            self._apply_alignment_change(player, choice.alignment_change)

        self._emit(
            EventTypes.DIALOGUE_CHOICE_MADE,
            npc_id=npc_id,
            choice_text=choice.text,
            relationship_change=choice.relationship_change,
        )

        if choice.next_node_id:
            self._emit(
                EventTypes.DIALOGUE_PROGRESS,
                npc_id=npc_id,
                next_node_id=choice.next_node_id,
            )
        return True

    def is_dialogue_unlocked(
        self,
        player: Optional[Character],
        npc_id: str,
        dialogue: Optional[DialogueNode],
    ) -> bool:
        if player is None or dialogue is None:
            return False

        if dialogue.required_relationship > 0:
            if player.get_relationship(npc_id) < dialogue.required_relationship:
                return False

        if dialogue.required_alignment != Alignment.NEUTRAL:
            if not player.has_alignment(dialogue.required_alignment):
                return False

        return True

    # ── 성향 ─────────────────────────────────────────────────

    def get_alignment_history(self, character: Character) -> list[Alignment]:
        return list(self._alignment_history.get(character.character_id, []))

    def _apply_alignment_change(self, character: Character, change: Alignment) -> None:
        character.add_alignment(change)
        self._alignment_history.setdefault(character.character_id, []).append(change)

        self._emit(
            EventTypes.ALIGNMENT_CHANGED,
            character_id=character.character_id,
            new_alignment=character.alignment.value,
        )

    def _emit(self, event_type: str, **data) -> None:
        self._bus.emit(
            GameEvent(event_type=event_type, data=data, source="relationship_service")
        )
