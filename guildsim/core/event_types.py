"""이벤트 유형 상수

엔티티 발행 이벤트 6종 + 서비스/시뮬레이션 이벤트.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # === Entity events ===
    MATERIAL_QUANTITY_CHANGED = "material_quantity_changed"
    RELATIONSHIP_CHANGED = "relationship_changed"
    STAT_CHANGED = "stat_changed"
    EQUIPMENT_ADDED = "equipment_added"
    DEBT_PAYMENT = "debt_payment"
    GAME_OVER = "game_over"

    # treasury
    GOLD_CHANGED = "gold_changed"
    REPUTATION_CHANGED = "reputation_changed"

    # material
    MATERIAL_ACQUIRED = "material_acquired"
    MATERIAL_PURCHASED = "material_purchased"
    MATERIAL_SOLD = "material_sold"
    MATERIAL_COMBINED = "material_combined"
    MARKET_FLUCTUATION = "market_fluctuation"

    # relationship / dialogue
    SPECIAL_RELATIONSHIP = "special_relationship"
    ALIGNMENT_CHANGED = "alignment_changed"
    DIALOGUE_STARTED = "dialogue_started"
    DIALOGUE_CHOICE_MADE = "dialogue_choice_made"
    DIALOGUE_PROGRESS = "dialogue_progress"

    # party
    PARTY_RECRUITED = "party_recruited"
    PARTY_TRAINED = "party_trained"
    PARTY_REMOVED = "party_removed"
    PARTY_LOYALTY_CHANGED = "party_loyalty_changed"
    EQUIPMENT_PURCHASED = "equipment_purchased"

    # === Quest events ===
    QUEST_ADDED = "quest_added"
    QUEST_REMOVED = "quest_removed"
    QUEST_ASSIGNED = "quest_assigned"
    QUEST_STARTED = "quest_started"
    QUEST_READY = "quest_ready"
    QUEST_COMPLETED = "quest_completed"
    QUEST_REWARDS_PROCESSED = "quest_rewards_processed"

    # debt
    DEBT_PAID_OFF = "debt_paid_off"

    # simulation
    GAME_STARTED = "game_started"
    DAY_ADVANCED = "day_advanced"
    QUARTER_ADVANCED = "quarter_advanced"
