"""퀘스트 관련 열거형"""

from enum import Enum


class QuestType(str, Enum):
    EXPLORATION = "exploration"
    COMBAT = "combat"
    ADMIN = "admin"


class QuestState(str, Enum):
    AVAILABLE = "available"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
