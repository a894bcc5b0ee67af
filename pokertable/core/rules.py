"""
Table rules, action types and difficulty tables.

The table plays without blinds or antes: every hand starts in PRE_FLOP with two
hole cards per seat and the human in seat 0 acting first. Each betting round is
a single pass around the table; a round ends when the turn comes back to a seat
that already acted in it.

Calling pays the full current bet and raising pays current bet plus the raise.
The current bet only goes back to zero when a new hand starts, so a bet made
on an earlier street still has to be matched on the later ones.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict


class GameStage(Enum):
    """Stages of a hand."""
    PRE_FLOP = auto()
    FLOP = auto()
    TURN = auto()
    RIVER = auto()
    SHOWDOWN = auto()


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"


@dataclass(frozen=True)
class Action:
    """A player action; amount is the raise increment for RAISE, else 0."""
    type: ActionType
    amount: int = 0

    @classmethod
    def fold(cls) -> Action:
        return cls(ActionType.FOLD)

    @classmethod
    def check(cls) -> Action:
        return cls(ActionType.CHECK)

    @classmethod
    def call(cls) -> Action:
        return cls(ActionType.CALL)

    @classmethod
    def raise_by(cls, amount: int) -> Action:
        return cls(ActionType.RAISE, amount)

    @property
    def description(self) -> str:
        if self.type == ActionType.RAISE:
            return f"Raise {self.amount}"
        return self.type.value.capitalize()


class Difficulty(Enum):
    """Bot difficulty levels."""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @classmethod
    def parse(cls, value: str) -> Difficulty:
        """Parse a difficulty name; "normal" is accepted as MEDIUM."""
        key = value.strip().upper()
        if key == "NORMAL":
            return cls.MEDIUM
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {value}") from None


@dataclass(frozen=True)
class DifficultyProfile:
    """Probabilities and raise sizes the bot policy uses at one difficulty."""
    bluff_probability: float
    preflop_raise: int
    preflop_raise_chance: float
    preflop_fold_chance: float
    base_raise: int
    strong_raise: int
    monster_raise: int
    aggressiveness: float


DIFFICULTY_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(
        bluff_probability=0.1,
        preflop_raise=30,
        preflop_raise_chance=0.3,
        preflop_fold_chance=0.4,
        base_raise=30,
        strong_raise=50,
        monster_raise=70,
        aggressiveness=0.3,
    ),
    Difficulty.MEDIUM: DifficultyProfile(
        bluff_probability=0.2,
        preflop_raise=50,
        preflop_raise_chance=0.5,
        preflop_fold_chance=0.3,
        base_raise=50,
        strong_raise=80,
        monster_raise=100,
        aggressiveness=0.5,
    ),
    Difficulty.HARD: DifficultyProfile(
        bluff_probability=0.3,
        preflop_raise=70,
        preflop_raise_chance=0.7,
        preflop_fold_chance=0.2,
        base_raise=70,
        strong_raise=100,
        monster_raise=150,
        aggressiveness=0.7,
    ),
}


def get_profile(difficulty: Difficulty) -> DifficultyProfile:
    return DIFFICULTY_PROFILES[difficulty]


# Table settings
DEFAULT_PLAYER_CHIPS = 1000
DEFAULT_BOT_CHIPS = 1000
DEFAULT_RAISE_AMOUNT = 50
MIN_CHIPS_TO_PLAY = 50
MAX_BOTS = 3
HUMAN_NAME = "You"

# Cards per stage
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1

# Stage that follows each betting round, with the cards revealed on entry
NEXT_STAGE = {
    GameStage.PRE_FLOP: (GameStage.FLOP, FLOP_CARDS),
    GameStage.FLOP: (GameStage.TURN, TURN_CARDS),
    GameStage.TURN: (GameStage.RIVER, RIVER_CARDS),
}

# Bot pacing (seconds)
BOT_THINK_DELAY = 1.5
BOT_ACTION_PAUSE = 2.0


def calculate_pot_odds(call_amount: int, pot: int) -> float:
    """
    Ratio of the amount owed to the pot it would create.

    Returns 0.0 when nothing is owed and the pot is empty.
    """
    total = pot + call_amount
    if total <= 0:
        return 0.0
    return call_amount / total
