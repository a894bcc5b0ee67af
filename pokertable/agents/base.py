"""
Base Agent Interface.

Every computer-controlled seat is driven by an agent. PokerGame builds one agent
per bot seat at hand start, calls on_hand_start, then asks act() for a decision
each time the seat is to play.

Usage:
    class MyAgent(BaseAgent):
        def observe(self, game_state):
            pass

        def act(self, game_state):
            return {"action": "CALL", "amount": game_state["current_bet"]}
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class BaseAgent(ABC):
    """
    Abstract base class for table agents.

    Attributes:
        player_index: Seat this agent plays
        name: Human-readable name
    """

    def __init__(self, player_index: int, name: Optional[str] = None):
        self.player_index = player_index
        self.name = name or f"Agent-{player_index}"

    @abstractmethod
    def observe(self, game_state: Dict[str, Any]) -> None:
        """
        Observe the current game state.

        Args:
            game_state: Observation dict from PokerGame.get_observation:
                - stage: Stage name
                - hand_tier: Tier of the seat's current hand
                - has_high_card: Hole cards include A, K or Q
                - chips: Seat's stack
                - current_bet: Amount needed to call
                - pot: Current pot
                - pot_odds: current_bet / (pot + current_bet)
        """

    @abstractmethod
    def act(self, game_state: Dict[str, Any]) -> Dict[str, Any]:
        """
        Choose an action given the current observation.

        Returns:
            Action dictionary with:
                - action: FOLD, CHECK, CALL or RAISE
                - amount: Raise increment for RAISE (optional, default 0)

        Example:
            return {"action": "RAISE", "amount": 50}
        """

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""

    def on_hand_end(self, result: Dict[str, Any]) -> None:
        """
        Called when a hand ends.

        Args:
            result: Dictionary containing:
                - winner: Winning seat index
                - pot: Amount won
                - description: Winning hand label
        """

    def get_action_for_game(self, game_state: Dict[str, Any]) -> Dict[str, Any]:
        """Convenience method that combines observe and act."""
        self.observe(game_state)
        return self.act(game_state)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_index}, {self.name})"
