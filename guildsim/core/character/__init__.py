"""캐릭터 시스템 Core 패키지"""

from guildsim.core.character.models import (
    Alignment,
    Character,
    CharacterType,
    StatType,
)
from guildsim.core.character.status import (
    RelationshipMilestone,
    crossed_thresholds,
    relationship_status,
)

__all__ = [
    "Alignment",
    "Character",
    "CharacterType",
    "StatType",
    "RelationshipMilestone",
    "crossed_thresholds",
    "relationship_status",
]
