"""
pokertable - Single-table Texas Hold'em against bots

A no-blind Texas Hold'em table with:
- Pure Python game core (hand evaluator, betting-round state machine)
- Difficulty-based bot decision policy
- FastAPI + WebSocket server driving bot turns with a think delay

Usage:
    from pokertable.core import PokerGame, TableConfig, Action
    from pokertable.agents import decide
"""

__version__ = "0.1.0"

from pokertable.core.card import Card, Deck
from pokertable.core.player import Player
from pokertable.core.game import PokerGame
from pokertable.core.hand import HandTier, evaluate_hand

__all__ = [
    "Card",
    "Deck",
    "Player",
    "PokerGame",
    "HandTier",
    "evaluate_hand",
    "__version__",
]
