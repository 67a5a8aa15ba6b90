"""공통 밸런스 상수 + 클램프/ID 유틸

엔티티 전반에서 공유하는 규칙 값. 튜닝 값(시작 골드 등)은 config.Settings.
"""

import uuid

# === 스탯 ===
MIN_STAT_VALUE = 1
MAX_STAT_VALUE = 20

# === 퀘스트 난이도 ===
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
STAT_POINTS_PER_DIFFICULTY = 10
MIN_QUEST_DURATION = 3
MAX_QUEST_DURATION = 10
GOLD_PER_DIFFICULTY = 100

# === 파티 충성도 ===
MIN_LOYALTY = 0
MAX_LOYALTY = 100
DEFAULT_LOYALTY = 50
LOYALTY_UNAVAILABLE_THRESHOLD = 20
EXPERIENCE_PER_STAT_POINT = 100

# === 관계 ===
MIN_RELATIONSHIP = -100
MAX_RELATIONSHIP = 100
HIGH_RELATIONSHIP_THRESHOLD = 80
LOW_RELATIONSHIP_THRESHOLD = -80

# === 평판 ===
MIN_REPUTATION = 0
MAX_REPUTATION = 100

# === 부채 ===
DAYS_PER_QUARTER = 90
QUARTERS_PER_YEAR = 4


def clamp(value: int, low: int, high: int) -> int:
    """low ~ high 클램프."""
    return max(low, min(high, value))


def clamp_stat(value: int) -> int:
    """1 ~ 20 클램프."""
    return clamp(value, MIN_STAT_VALUE, MAX_STAT_VALUE)


def new_entity_id() -> str:
    """128비트 랜덤 식별자."""
    return str(uuid.uuid4())
