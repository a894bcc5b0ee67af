"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from pokertable.core.config import BotProfile, TableConfig
from pokertable.core.rules import Difficulty, MAX_BOTS


# ============= Request Schemas =============

class ActionRequest(BaseModel):
    """Request to take a game action."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, RAISE")
    amount: Optional[int] = Field(default=0, ge=0, description="Raise increment for RAISE")


class SettingsRequest(BaseModel):
    """Request to change table settings; applied from the next hand."""
    difficulty: Optional[str] = None
    default_raise_amount: Optional[int] = Field(default=None, gt=0)
    use_bot_difficulty: Optional[bool] = None


class BotRequest(BaseModel):
    """Request to add a bot to the roster."""
    name: str = Field(..., min_length=1, max_length=32)
    difficulty: str = "Medium"

    def to_profile(self) -> BotProfile:
        return BotProfile(name=self.name.strip(), difficulty=Difficulty.parse(self.difficulty))


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class HandEvaluationSchema(BaseModel):
    """Evaluated hand."""
    tier: int
    description: str
    cards: List[CardSchema]


class HandHighlightSchema(HandEvaluationSchema):
    """Hand hint shown to the human."""
    is_visible: bool


class BotSchema(BaseModel):
    name: str
    difficulty: str


class SettingsSchema(BaseModel):
    """Current table settings."""
    difficulty: str
    default_raise_amount: int
    use_bot_difficulty: bool
    bots: List[BotSchema]
    max_bots: int = MAX_BOTS

    @classmethod
    def from_config(cls, config: TableConfig) -> "SettingsSchema":
        return cls(
            difficulty=config.difficulty.value,
            default_raise_amount=config.default_raise_amount,
            use_bot_difficulty=config.use_bot_difficulty,
            bots=[BotSchema(**bot.to_dict()) for bot in config.bots],
            max_bots=config.max_bots,
        )


class ActionResultSchema(BaseModel):
    """Result of an action."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
