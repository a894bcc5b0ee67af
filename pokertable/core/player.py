"""
Player seat state.

Seats live in PokerGame.players and are referred to by index everywhere else.
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from pokertable.core.card import Card
from pokertable.core.rules import Action, Difficulty


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        index: Stable seat index (0 is the human)
        name: Display name
        chips: Current chip count
        is_human: True for the one human-controlled seat
        difficulty: Difficulty a bot plays at (None for the human)
        hand: The two hole cards
        is_folded: Folded this hand
        current_action: Last action taken this hand
        has_acted: Acted in the current betting round
    """
    index: int
    name: str
    chips: int
    is_human: bool = False
    difficulty: Optional[Difficulty] = None
    hand: List[Card] = field(default_factory=list)
    is_folded: bool = False
    current_action: Optional[Action] = None
    has_acted: bool = False

    def reset_for_new_hand(self) -> None:
        self.hand = []
        self.is_folded = False
        self.current_action = None
        self.has_acted = False

    def deal_cards(self, cards: List[Card]) -> None:
        self.hand = list(cards)

    def pay(self, amount: int) -> int:
        """Move chips out of the stack. Callers validate the amount first."""
        self.chips -= amount
        return amount

    def fold(self) -> None:
        self.is_folded = True
        self.current_action = Action.fold()

    @property
    def hand_str(self) -> str:
        return " ".join(str(c) for c in self.hand)

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "index": self.index,
            "name": self.name,
            "chips": self.chips,
            "is_human": self.is_human,
            "is_folded": self.is_folded,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "last_action": self.current_action.description if self.current_action else None,
        }

        if not hide_cards and self.hand:
            result["cards"] = [card.to_dict() for card in self.hand]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.index}, {self.name}, chips={self.chips}, "
            f"folded={self.is_folded})"
        )

    def __str__(self) -> str:
        cards_str = self.hand_str or "??"
        return f"{self.name} [{cards_str}] ${self.chips}"
