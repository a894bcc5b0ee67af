"""
Bot decision policy.

decide() is a pure function of the hand strength, the betting situation, the
difficulty and a random source. It never touches game state; PokerGame applies
the returned decision.

Random draws happen in a fixed order (bluff roll first, then the roll of
whichever branch is taken) so a scripted random source reproduces a decision
exactly.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol

from pokertable.agents.base import BaseAgent
from pokertable.core.hand import HandTier
from pokertable.core.rules import (
    ActionType, Difficulty, DifficultyProfile, GameStage, get_profile,
)


logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float:
        ...


class ScriptedRandom:
    """
    Random source replaying a fixed sequence of draws.

    Useful for reproducing a decision; raises IndexError when the script runs out.
    """

    def __init__(self, draws: Iterable[float]):
        self._draws: List[float] = list(draws)
        self.calls = 0

    def random(self) -> float:
        value = self._draws[self.calls]
        self.calls += 1
        return value


@dataclass(frozen=True)
class BotDecision:
    """
    A bot's chosen action.

    amount is the raise increment for RAISE, the chips paid for CALL, else 0.
    """
    action_type: ActionType
    amount: int = 0
    reason: str = ""


def decide(
    hand_tier: int,
    stage: GameStage,
    pot_odds: float,
    difficulty: Difficulty,
    chips: int,
    current_bet: int,
    has_high_card: bool,
    rng: RandomSource,
) -> BotDecision:
    """
    Choose an action for a bot.

    Args:
        hand_tier: Evaluated tier of the bot's hand (100-1000)
        stage: Current stage; SHOWDOWN yields a check
        pot_odds: current_bet / (pot + current_bet), informational
        difficulty: Difficulty driving every probability and raise size
        chips: Bot's stack
        current_bet: Amount the bot must pay to call
        has_high_card: Hole cards include an Ace, King or Queen
        rng: Random source

    Returns:
        BotDecision
    """
    if chips <= 0:
        return BotDecision(ActionType.CHECK, reason="no chips")

    profile = get_profile(difficulty)
    should_bluff = rng.random() < profile.bluff_probability

    if stage == GameStage.PRE_FLOP:
        decision = _preflop_decision(profile, hand_tier, chips, current_bet, has_high_card, should_bluff, rng)
    elif stage in (GameStage.FLOP, GameStage.TURN, GameStage.RIVER):
        decision = _postflop_decision(profile, hand_tier, chips, current_bet, should_bluff, rng)
    else:
        decision = BotDecision(ActionType.CHECK, reason="showdown")

    logger.debug(
        f"Bot decision: {decision.action_type.value} {decision.amount} "
        f"(tier={hand_tier}, stage={stage.name}, pot_odds={pot_odds:.2f}, "
        f"bluff={should_bluff}, {decision.reason})"
    )
    return decision


def _preflop_decision(
    profile: DifficultyProfile,
    hand_tier: int,
    chips: int,
    current_bet: int,
    has_high_card: bool,
    should_bluff: bool,
    rng: RandomSource,
) -> BotDecision:
    has_pair_or_better = hand_tier >= HandTier.ONE_PAIR
    max_affordable = min(chips, current_bet + profile.preflop_raise)

    if not (has_pair_or_better or has_high_card or should_bluff):
        if current_bet == 0:
            return BotDecision(ActionType.CHECK, reason="weak hand")
        return BotDecision(ActionType.FOLD, reason="weak hand facing bet")

    if current_bet == 0:
        if chips >= profile.preflop_raise and rng.random() < profile.preflop_raise_chance:
            raise_amount = min(profile.preflop_raise, chips - current_bet)
            if raise_amount > 0:
                return BotDecision(ActionType.RAISE, raise_amount, reason="playable hand")
        return BotDecision(ActionType.CHECK, reason="playable hand")

    if current_bet <= max_affordable:
        if rng.random() < profile.preflop_fold_chance:
            return BotDecision(ActionType.FOLD, reason="fold roll")
        return BotDecision(ActionType.CALL, current_bet, reason="playable hand")

    return BotDecision(ActionType.FOLD, reason="bet too large")


def _postflop_decision(
    profile: DifficultyProfile,
    hand_tier: int,
    chips: int,
    current_bet: int,
    should_bluff: bool,
    rng: RandomSource,
) -> BotDecision:
    made_hand = hand_tier >= HandTier.ONE_PAIR
    strong_hand = hand_tier >= HandTier.THREE_OF_A_KIND
    monster_hand = hand_tier >= HandTier.FLUSH
    max_raise = max(0, chips - current_bet)

    if monster_hand and chips > current_bet:
        return _raise_or_call(min(profile.monster_raise, max_raise), profile, chips, current_bet, rng, "monster hand")

    if strong_hand and chips > current_bet:
        return _raise_or_call(min(profile.strong_raise, max_raise), profile, chips, current_bet, rng, "strong hand")

    if made_hand or should_bluff:
        return _call_or_check(chips, current_bet, "made hand" if made_hand else "bluff")

    if current_bet == 0:
        if rng.random() < profile.aggressiveness and chips >= profile.base_raise:
            raise_amount = min(profile.base_raise, max_raise)
            if raise_amount > 0:
                return BotDecision(ActionType.RAISE, raise_amount, reason="bluff raise")
        return BotDecision(ActionType.CHECK, reason="weak hand")

    return BotDecision(ActionType.FOLD, reason="weak hand facing bet")


def _raise_or_call(
    raise_amount: int,
    profile: DifficultyProfile,
    chips: int,
    current_bet: int,
    rng: RandomSource,
    reason: str,
) -> BotDecision:
    if raise_amount > 0 and rng.random() < profile.aggressiveness:
        return BotDecision(ActionType.RAISE, raise_amount, reason=reason)
    return _call_or_check(chips, current_bet, reason)


def _call_or_check(chips: int, current_bet: int, reason: str) -> BotDecision:
    if current_bet == 0:
        return BotDecision(ActionType.CHECK, reason=reason)
    if current_bet <= chips:
        return BotDecision(ActionType.CALL, current_bet, reason=reason)
    return BotDecision(ActionType.FOLD, reason="cannot cover bet")


class BotAgent(BaseAgent):
    """
    Agent wrapper around decide().

    Reads the observation dict produced by PokerGame.get_observation and
    returns an action dict like the other agents.
    """

    def __init__(
        self,
        player_index: int,
        name: Optional[str] = None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: Optional[RandomSource] = None,
    ):
        super().__init__(player_index, name or f"Bot-{player_index}")
        self.difficulty = difficulty
        self.rng = rng or random.Random()

    def observe(self, game_state: Dict[str, Any]) -> None:
        pass

    def act(self, game_state: Dict[str, Any]) -> Dict[str, Any]:
        decision = self.decide(game_state)
        return {"action": decision.action_type.value, "amount": decision.amount}

    def decide(self, game_state: Dict[str, Any]) -> BotDecision:
        return decide(
            hand_tier=game_state["hand_tier"],
            stage=GameStage[game_state["stage"]],
            pot_odds=game_state["pot_odds"],
            difficulty=self.difficulty,
            chips=game_state["chips"],
            current_bet=game_state["current_bet"],
            has_high_card=game_state["has_high_card"],
            rng=self.rng,
        )
