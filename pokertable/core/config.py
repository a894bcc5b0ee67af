"""
Table configuration and chip persistence.

TableConfig is passed explicitly into PokerGame and the bot policy; nothing in
the engine reads global settings.
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, field, replace
from typing import List, Optional, Protocol

from pokertable.core.rules import (
    Difficulty,
    DEFAULT_BOT_CHIPS, DEFAULT_PLAYER_CHIPS, DEFAULT_RAISE_AMOUNT,
    MIN_CHIPS_TO_PLAY, MAX_BOTS, BOT_THINK_DELAY, BOT_ACTION_PAUSE,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BotProfile:
    """A computer-controlled opponent in the roster."""
    name: str
    difficulty: Difficulty = Difficulty.MEDIUM

    def __post_init__(self):
        if not self.name.strip():
            raise ValueError("Bot name cannot be empty")

    def to_dict(self) -> dict:
        return {"name": self.name, "difficulty": self.difficulty.value}


def default_roster() -> List[BotProfile]:
    return [
        BotProfile("Diego"),
        BotProfile("Lucas"),
        BotProfile("Abraão"),
    ]


@dataclass
class TableConfig:
    """
    Settings consumed by the table.

    Attributes:
        difficulty: Table difficulty; bots without their own use it, and Hard
            hides the hand highlight
        default_raise_amount: Raise size offered to the human
        bots: Opponent roster, at most max_bots entries
        bot_starting_chips: Stack every bot receives at hand start
        min_chips_to_play: Human balance below which no hand starts
        bot_think_delay: Seconds a bot "thinks" before acting
        bot_action_pause: Seconds between a bot action and the next turn
        use_bot_difficulty: Let each bot play at its own difficulty
    """
    difficulty: Difficulty = Difficulty.MEDIUM
    default_raise_amount: int = DEFAULT_RAISE_AMOUNT
    bots: List[BotProfile] = field(default_factory=default_roster)
    bot_starting_chips: int = DEFAULT_BOT_CHIPS
    min_chips_to_play: int = MIN_CHIPS_TO_PLAY
    max_bots: int = MAX_BOTS
    bot_think_delay: float = BOT_THINK_DELAY
    bot_action_pause: float = BOT_ACTION_PAUSE
    use_bot_difficulty: bool = True

    def __post_init__(self):
        if self.default_raise_amount <= 0:
            raise ValueError(f"Raise amount must be positive: {self.default_raise_amount}")
        if self.bot_starting_chips < 0:
            raise ValueError(f"Bot chips cannot be negative: {self.bot_starting_chips}")
        if not self.bots:
            raise ValueError("At least one bot is required")
        if len(self.bots) > self.max_bots:
            raise ValueError(f"Too many bots ({len(self.bots)}), maximum is {self.max_bots}")
        if self.bot_think_delay < 0 or self.bot_action_pause < 0:
            raise ValueError("Delays cannot be negative")

    def difficulty_for(self, bot: Optional[BotProfile]) -> Difficulty:
        """Difficulty a given bot plays at."""
        if bot is not None and self.use_bot_difficulty:
            return bot.difficulty
        return self.difficulty

    def with_bot(self, bot: BotProfile) -> TableConfig:
        """Return a copy with the bot appended; the roster is capped at max_bots."""
        if len(self.bots) >= self.max_bots:
            logger.warning(f"Roster full, not adding {bot.name}")
            return self
        return replace(self, bots=self.bots + [bot])

    def without_bot(self, index: int) -> TableConfig:
        """Return a copy without the bot at index; an empty roster resets to the default."""
        if not 0 <= index < len(self.bots):
            raise IndexError(f"No bot at index {index}")
        bots = self.bots[:index] + self.bots[index + 1:]
        return replace(self, bots=bots or default_roster())


class ChipStore(Protocol):
    """Persists the human's chip balance between hands and sessions."""

    def load(self) -> int:
        ...

    def save(self, chips: int) -> None:
        ...


class InMemoryChipStore:
    """Chip balance kept for the lifetime of the process."""

    def __init__(self, chips: int = DEFAULT_PLAYER_CHIPS):
        self.chips = chips

    def load(self) -> int:
        return self.chips

    def save(self, chips: int) -> None:
        self.chips = chips


class JsonChipStore:
    """
    Chip balance stored in a small JSON file: {"player_chips": 1234}.

    A missing or unreadable file, or a non-positive stored balance, yields the
    default balance.
    """

    def __init__(self, path: str, default: int = DEFAULT_PLAYER_CHIPS):
        self.path = path
        self.default = default

    def load(self) -> int:
        if not os.path.exists(self.path):
            return self.default
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                chips = int(json.load(f).get("player_chips", 0))
        except (OSError, ValueError, AttributeError) as e:
            logger.error(f"Could not read chip balance from {self.path}: {e}")
            return self.default
        return chips if chips > 0 else self.default

    def save(self, chips: int) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"player_chips": chips}, f)
        logger.debug(f"Saved chip balance {chips} to {self.path}")
