"""
Error types raised by the table engine.

InvalidAction is recoverable: the engine rejects the move and folds the seat.
DeckExhausted and NoActivePlayers signal broken invariants and are never
caught by the engine itself.
"""


class PokerError(Exception):
    """Base class for all engine errors."""


class InvalidAction(PokerError):
    """A player action that cannot be applied (bad amount, wrong turn, ...)."""

    def __init__(self, message: str, player_index: int = -1):
        super().__init__(message)
        self.player_index = player_index


class DeckExhausted(PokerError):
    """More cards were requested than the deck holds."""


class NoActivePlayers(PokerError):
    """Every seat folded, so nobody can take the pot."""
