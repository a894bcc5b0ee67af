"""
pokertable Core - Pure Python table logic

This module contains all game logic without any network dependencies.
"""

from pokertable.core.errors import PokerError, InvalidAction, DeckExhausted, NoActivePlayers
from pokertable.core.card import Card, Deck, Rank, Suit, sort_cards
from pokertable.core.rules import GameStage, ActionType, Action, Difficulty
from pokertable.core.config import TableConfig, BotProfile, InMemoryChipStore, JsonChipStore
from pokertable.core.player import Player
from pokertable.core.hand import HandTier, HandEvaluation, evaluate_hand, hand_description
from pokertable.core.game import PokerGame, ActionResult, ActionRecord

__all__ = [
    "PokerError",
    "InvalidAction",
    "DeckExhausted",
    "NoActivePlayers",
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "sort_cards",
    "GameStage",
    "ActionType",
    "Action",
    "Difficulty",
    "TableConfig",
    "BotProfile",
    "InMemoryChipStore",
    "JsonChipStore",
    "Player",
    "HandTier",
    "HandEvaluation",
    "evaluate_hand",
    "hand_description",
    "PokerGame",
    "ActionResult",
    "ActionRecord",
]
