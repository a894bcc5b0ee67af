"""
Hand Evaluation.

Maps two hole cards plus 0, 3, 4 or 5 community cards to a HandTier and the
cards that justify it.

Hand tiers (best to worst):
1000 Royal Flush: A♠ K♠ Q♠ J♠ 10♠
 900 Straight Flush: 5 consecutive cards of same suit
 800 Four of a Kind: 4 cards of same rank + kicker
 700 Full House: 3 of a kind + pair
 600 Flush: 5 cards of same suit
 500 Straight: 5 consecutive cards (A-2-3-4-5 wheel included)
 400 Three of a Kind: 3 cards of same rank + 2 kickers
 300 Two Pair: 2 different pairs + kicker
 200 One Pair: 2 cards of same rank
 100 High Card: No made hand

Preflop only the hole cards are looked at: a pocket pair is One Pair, anything
else is High Card with the higher hole card.

Every category is searched independently over the rank-sorted cards and the
highest tier found wins. The returned cards are taken in sorted order, so for
flushes and kickers they are the cards that prove the tier, not necessarily the
strongest five-card combination. Showdown tie-breaks only see these cards.
Pairs come from the highest rank, while trips and quads come from the lowest,
so A-A-A-7-7-7 is read as sevens full of aces.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Sequence, Tuple

from pokertable.core.card import Card, Rank, Suit, sort_cards
from pokertable.core.rules import Difficulty


class HandTier(IntEnum):
    """Hand categories; a higher value wins."""
    HIGH_CARD = 100
    ONE_PAIR = 200
    TWO_PAIR = 300
    THREE_OF_A_KIND = 400
    STRAIGHT = 500
    FLUSH = 600
    FULL_HOUSE = 700
    FOUR_OF_A_KIND = 800
    STRAIGHT_FLUSH = 900
    ROYAL_FLUSH = 1000


HAND_TIER_NAMES = {
    HandTier.ROYAL_FLUSH: "Royal Flush",
    HandTier.STRAIGHT_FLUSH: "Straight Flush",
    HandTier.FOUR_OF_A_KIND: "Four of a Kind",
    HandTier.FULL_HOUSE: "Full House",
    HandTier.FLUSH: "Flush",
    HandTier.STRAIGHT: "Straight",
    HandTier.THREE_OF_A_KIND: "Three of a Kind",
    HandTier.TWO_PAIR: "Two Pair",
    HandTier.ONE_PAIR: "One Pair",
    HandTier.HIGH_CARD: "High Card",
}

WHEEL_RANKS = (Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO)

CardList = List[Card]


@dataclass(frozen=True)
class HandEvaluation:
    """The tier of a hand and the cards that make it."""
    tier: HandTier
    cards: Tuple[Card, ...]

    @property
    def description(self) -> str:
        return hand_description(self.tier)

    def to_dict(self) -> dict:
        return {
            "tier": int(self.tier),
            "description": self.description,
            "cards": [c.to_dict() for c in self.cards],
        }


def hand_description(tier: int) -> str:
    """Display label for a tier; anything unknown reads as High Card."""
    try:
        return HAND_TIER_NAMES[HandTier(tier)]
    except ValueError:
        return HAND_TIER_NAMES[HandTier.HIGH_CARD]


def evaluate_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandEvaluation:
    """
    Evaluate a player's hand.

    Args:
        hole_cards: The player's 2 cards
        community_cards: 0, 3, 4 or 5 board cards

    Returns:
        HandEvaluation with the best tier found

    Raises:
        ValueError: On a wrong card count or a card present twice
    """
    hole = list(hole_cards)
    community = list(community_cards)
    if len(hole) != 2:
        raise ValueError(f"Need 2 hole cards, got {len(hole)}")
    if len(community) not in (0, 3, 4, 5):
        raise ValueError(f"Need 0, 3, 4 or 5 community cards, got {len(community)}")
    if len(set(hole + community)) != len(hole) + len(community):
        raise ValueError("Duplicate card in hand")

    if not community:
        if hole[0].rank == hole[1].rank:
            return HandEvaluation(HandTier.ONE_PAIR, tuple(hole))
        return HandEvaluation(HandTier.HIGH_CARD, (sort_cards(hole)[0],))

    cards = sort_cards(hole + community)

    found = []
    for tier, finder in _CATEGORY_FINDERS:
        match = finder(cards)
        if match:
            found.append(HandEvaluation(tier, tuple(match)))

    if not found:
        return HandEvaluation(HandTier.HIGH_CARD, (cards[0],))
    return max(found, key=lambda e: e.tier)


def _royal_flush(cards: CardList) -> Optional[CardList]:
    for suit in Suit:
        straight = _straight([c for c in cards if c.suit == suit])
        if straight and straight[0].rank == Rank.ACE and straight[1].rank == Rank.KING:
            return straight
    return None


def _straight_flush(cards: CardList) -> Optional[CardList]:
    for suit in Suit:
        straight = _straight([c for c in cards if c.suit == suit])
        if straight:
            return straight
    return None


def _four_of_a_kind(cards: CardList) -> Optional[CardList]:
    quads = _n_of_a_kind(cards, 4, lowest_first=True)
    if quads is None:
        return None
    kicker = next(c for c in cards if c.rank != quads[0].rank)
    return quads + [kicker]


def _full_house(cards: CardList) -> Optional[CardList]:
    trips = _n_of_a_kind(cards, 3, lowest_first=True)
    if trips is None:
        return None
    pair = _n_of_a_kind([c for c in cards if c not in trips], 2)
    if pair is None:
        return None
    return trips + pair


def _flush(cards: CardList) -> Optional[CardList]:
    for suit in Suit:
        suited = [c for c in cards if c.suit == suit]
        if len(suited) >= 5:
            return suited[:5]
    return None


def _straight(cards: CardList) -> Optional[CardList]:
    """Highest run of five consecutive ranks in rank-sorted cards, else the wheel."""
    if len(cards) < 5:
        return None

    # One card per rank, highest first
    unique: CardList = []
    for card in cards:
        if not unique or unique[-1].rank != card.rank:
            unique.append(card)

    for i in range(len(unique) - 4):
        window = unique[i:i + 5]
        if all(window[j].rank - window[j + 1].rank == 1 for j in range(4)):
            return window

    by_rank = {c.rank: c for c in unique}
    if Rank.ACE in by_rank and all(r in by_rank for r in WHEEL_RANKS):
        return [by_rank[r] for r in WHEEL_RANKS] + [by_rank[Rank.ACE]]

    return None


def _three_of_a_kind(cards: CardList) -> Optional[CardList]:
    trips = _n_of_a_kind(cards, 3, lowest_first=True)
    if trips is None:
        return None
    kickers = [c for c in cards if c.rank != trips[0].rank][:2]
    return trips + kickers


def _two_pair(cards: CardList) -> Optional[CardList]:
    first = _n_of_a_kind(cards, 2)
    if first is None:
        return None
    remaining = [c for c in cards if c not in first]
    second = _n_of_a_kind(remaining, 2)
    if second is None:
        return None
    remaining = [c for c in remaining if c not in second]
    return first + second + remaining[:1]


def _one_pair(cards: CardList) -> Optional[CardList]:
    return _n_of_a_kind(cards, 2)


def _n_of_a_kind(cards: CardList, n: int, lowest_first: bool = False) -> Optional[CardList]:
    """
    First n cards of a rank held at least n times.

    Pairs are taken from the highest rank; trips and quads are searched from
    the lowest rank up.
    """
    for rank in (Rank if lowest_first else reversed(Rank)):
        same = [c for c in cards if c.rank == rank]
        if len(same) >= n:
            return same[:n]
    return None


_CATEGORY_FINDERS: List[Tuple[HandTier, Callable[[CardList], Optional[CardList]]]] = [
    (HandTier.ROYAL_FLUSH, _royal_flush),
    (HandTier.STRAIGHT_FLUSH, _straight_flush),
    (HandTier.FOUR_OF_A_KIND, _four_of_a_kind),
    (HandTier.FULL_HOUSE, _full_house),
    (HandTier.FLUSH, _flush),
    (HandTier.STRAIGHT, _straight),
    (HandTier.THREE_OF_A_KIND, _three_of_a_kind),
    (HandTier.TWO_PAIR, _two_pair),
    (HandTier.ONE_PAIR, _one_pair),
]


def compare_hands(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
    """
    Compare two card subsets rank by rank, highest first.

    Returns:
        -1 if cards1 wins, 1 if cards2 wins, 0 if tie
    """
    for c1, c2 in zip(sort_cards(cards1), sort_cards(cards2)):
        if c1.rank > c2.rank:
            return -1
        if c1.rank < c2.rank:
            return 1
    return 0


def compare_evaluations(eval1: HandEvaluation, eval2: HandEvaluation) -> int:
    """
    Compare two evaluations by tier, then by their cards.

    Returns:
        -1 if eval1 wins, 1 if eval2 wins, 0 if tie
    """
    if eval1.tier > eval2.tier:
        return -1
    if eval1.tier < eval2.tier:
        return 1
    return compare_hands(eval1.cards, eval2.cards)


@dataclass(frozen=True)
class HandHighlight:
    """What the table shows the human about their current hand."""
    description: str
    tier: int
    cards: Tuple[Card, ...]
    is_visible: bool

    def highlights(self, card: Card) -> bool:
        return card in self.cards

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "tier": self.tier,
            "cards": [c.to_dict() for c in self.cards],
            "is_visible": self.is_visible,
        }


HIDDEN_HIGHLIGHT = HandHighlight("", 0, (), False)


def get_hand_highlight(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    difficulty: Difficulty,
) -> HandHighlight:
    """
    Hand hint for the human seat.

    Hidden on Hard. Preflop only a pocket pair is shown; after the flop the hint
    is visible once the hand is at least One Pair.
    """
    if difficulty == Difficulty.HARD or len(hole_cards) != 2:
        return HIDDEN_HIGHLIGHT

    evaluation = evaluate_hand(hole_cards, community_cards)
    if not community_cards and evaluation.tier < HandTier.ONE_PAIR:
        return HIDDEN_HIGHLIGHT

    return HandHighlight(
        description=evaluation.description,
        tier=int(evaluation.tier),
        cards=evaluation.cards,
        is_visible=evaluation.tier >= HandTier.ONE_PAIR,
    )
