"""
Pytest configuration and shared fixtures for pokertable tests.
"""

import random
from typing import Dict, List, Sequence

import pytest

from pokertable.agents.base import BaseAgent
from pokertable.core.card import Card, Deck, Rank, Suit, parse_cards
from pokertable.core.config import TableConfig, BotProfile, InMemoryChipStore
from pokertable.core.game import PokerGame
from pokertable.core.rules import Action


class StackedRandom(random.Random):
    """Random source whose shuffle puts the given cards on top, in order."""

    def __init__(self, top_cards: Sequence[Card] = (), seed: int = 0):
        super().__init__(seed)
        self.top_cards = list(top_cards)

    def shuffle(self, x):
        rest = [c for c in x if c not in self.top_cards]
        x[:] = self.top_cards + rest


class ScriptedAgent(BaseAgent):
    """Plays a fixed list of actions, then checks or calls."""

    def __init__(self, player_index: int, name: str, actions: List[Action]):
        super().__init__(player_index, name)
        self.actions = list(actions)
        self.observations: List[dict] = []
        self.results: List[dict] = []

    def observe(self, game_state):
        self.observations.append(game_state)

    def act(self, game_state):
        if self.actions:
            action = self.actions.pop(0)
        elif game_state["current_bet"] > 0:
            action = Action.call()
        else:
            action = Action.check()
        return {"action": action.type.value, "amount": action.amount}

    def on_hand_end(self, result):
        self.results.append(result)


def scripted_factory(scripts: Dict[int, List[Action]]):
    """Agent factory handing each bot seat its scripted actions."""
    def factory(player, rng):
        return ScriptedAgent(player.index, player.name, scripts.get(player.index, []))
    return factory


def make_game(
    scripts: Dict[int, List[Action]] = None,
    deal: str = "",
    chips: int = 1000,
    num_bots: int = 2,
    seed: int = 42,
    **config_kwargs,
) -> PokerGame:
    """
    Build a table with scripted bots.

    Args:
        scripts: Actions per bot seat
        deal: Cards dealt first, e.g. "As Ks 2h 3d 7c 8c" (seat 0, 1, 2, then the board)
        chips: Human starting balance
        num_bots: Bots seated from the default roster
        seed: Shuffle seed when no deal is stacked
    """
    roster = [BotProfile(n) for n in ("Diego", "Lucas", "Abraão")[:num_bots]]
    config = TableConfig(bots=roster, bot_think_delay=0, bot_action_pause=0, **config_kwargs)
    rng = StackedRandom(top_cards=parse_cards(deal)) if deal else random.Random(seed)
    return PokerGame(
        config,
        chip_store=InMemoryChipStore(chips),
        rng=rng,
        agent_factory=scripted_factory(scripts or {}),
    )


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=random.Random(7))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def fast_config():
    """Default roster with no bot delays."""
    return TableConfig(bot_think_delay=0, bot_action_pause=0)


@pytest.fixture
def seeded_game(fast_config):
    """A table of real bots with a seeded random source."""
    return PokerGame(fast_config, chip_store=InMemoryChipStore(1000), rng=random.Random(1234))


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def make_table():
    """Factory fixture wrapping make_game."""
    return make_game
