"""
Tests for hand evaluation.
"""

import random
from collections import Counter

import pytest
from pokertable.core.card import Card, Deck, Rank, Suit, parse_cards
from pokertable.core.hand import (
    HandTier, evaluate_hand, compare_hands, compare_evaluations,
    hand_description, get_hand_highlight,
)
from pokertable.core.rules import Difficulty


def evaluate(hole: str, board: str = ""):
    return evaluate_hand(parse_cards(hole), parse_cards(board))


class TestHandRanking:
    """Tests for hand ranking."""

    def test_royal_flush(self, royal_flush):
        """Test royal flush recognition."""
        evaluation = evaluate_hand(royal_flush[:2], royal_flush[2:])
        assert evaluation.tier == HandTier.ROYAL_FLUSH == 1000
        assert list(evaluation.cards) == royal_flush

    def test_straight_flush(self):
        evaluation = evaluate("9h 8h", "7h 6h 5h")
        assert evaluation.tier == HandTier.STRAIGHT_FLUSH

    def test_steel_wheel(self):
        """A-2-3-4-5 suited is a straight flush, not a royal flush."""
        evaluation = evaluate("Ah 2h", "3h 4h 5h")
        assert evaluation.tier == HandTier.STRAIGHT_FLUSH
        assert evaluation.cards[0].rank == Rank.FIVE

    def test_four_of_a_kind(self):
        evaluation = evaluate("As Ah", "Ad Ac Ks")
        assert evaluation.tier == HandTier.FOUR_OF_A_KIND
        assert [c.rank for c in evaluation.cards] == [Rank.ACE] * 4 + [Rank.KING]

    def test_full_house(self):
        """Test full house recognition."""
        evaluation = evaluate("As Ah", "Ad Kc Ks")
        assert evaluation.tier == HandTier.FULL_HOUSE
        assert [c.rank for c in evaluation.cards] == [Rank.ACE] * 3 + [Rank.KING] * 2

    def test_full_house_from_two_trips(self):
        """With two sets of trips the lower one is the trips."""
        evaluation = evaluate("As Ah", "Ad Ks Kh Kd 2c")
        assert evaluation.tier == HandTier.FULL_HOUSE
        assert [c.rank for c in evaluation.cards] == [Rank.KING] * 3 + [Rank.ACE] * 2

    def test_aces_and_sevens_full(self):
        evaluation = evaluate("As Ah", "Ad 7s 7h 7d 2c")
        assert evaluation.tier == HandTier.FULL_HOUSE
        assert [c.rank for c in evaluation.cards] == [Rank.SEVEN] * 3 + [Rank.ACE] * 2

    def test_lowest_trips_reported(self):
        evaluation = evaluate("9s 9h", "9d 4s 4h 4d")
        assert evaluation.tier == HandTier.FULL_HOUSE
        assert evaluation.cards[0].rank == Rank.FOUR

    def test_flush(self):
        """Test flush recognition."""
        evaluation = evaluate("As Ks", "Js 9s 2s")
        assert evaluation.tier == HandTier.FLUSH
        assert all(c.suit == Suit.SPADES for c in evaluation.cards)

    def test_straight(self):
        """Test straight recognition."""
        evaluation = evaluate("9c 8d", "7h 6s 5c")
        assert evaluation.tier == HandTier.STRAIGHT
        assert [c.rank for c in evaluation.cards] == [
            Rank.NINE, Rank.EIGHT, Rank.SEVEN, Rank.SIX, Rank.FIVE,
        ]

    def test_wheel_straight(self):
        """Test A-2-3-4-5 straight (wheel)."""
        evaluation = evaluate("Ah 2h", "3d 4c 5s")
        assert evaluation.tier >= HandTier.STRAIGHT
        assert evaluation.tier == HandTier.STRAIGHT
        assert evaluation.cards[-1] == Card(Rank.ACE, Suit.HEARTS)

    def test_highest_straight_is_found(self):
        evaluation = evaluate("9c 4d", "8h 7s 6c 5d 2h")
        assert evaluation.tier == HandTier.STRAIGHT
        assert evaluation.cards[0].rank == Rank.NINE

    def test_three_of_a_kind(self):
        evaluation = evaluate("7s 7h", "7d Kc 2s")
        assert evaluation.tier == HandTier.THREE_OF_A_KIND
        assert [c.rank for c in evaluation.cards] == [
            Rank.SEVEN, Rank.SEVEN, Rank.SEVEN, Rank.KING, Rank.TWO,
        ]

    def test_two_pair(self):
        evaluation = evaluate("Ks Kh", "4d 4c 9s")
        assert evaluation.tier == HandTier.TWO_PAIR
        assert [c.rank for c in evaluation.cards] == [
            Rank.KING, Rank.KING, Rank.FOUR, Rank.FOUR, Rank.NINE,
        ]

    def test_two_pair_takes_highest_pairs(self):
        evaluation = evaluate("Ks Kh", "4d 4c 9s 9h 2c")
        assert [c.rank for c in evaluation.cards[:4]] == [
            Rank.KING, Rank.KING, Rank.NINE, Rank.NINE,
        ]

    def test_one_pair(self):
        evaluation = evaluate("As Ah", "9d 7c 2s")
        assert evaluation.tier == HandTier.ONE_PAIR
        assert set(evaluation.cards) == set(parse_cards("As Ah"))

    def test_pair_on_board(self):
        evaluation = evaluate("As Jh", "9d 9c 2s")
        assert evaluation.tier == HandTier.ONE_PAIR
        assert all(c.rank == Rank.NINE for c in evaluation.cards)

    def test_high_card(self):
        """Test high card recognition."""
        evaluation = evaluate("As Jh", "9d 7c 2s")
        assert evaluation.tier == HandTier.HIGH_CARD
        assert evaluation.cards == (Card(Rank.ACE, Suit.SPADES),)

    def test_turn_board(self):
        evaluation = evaluate("As Jh", "9d 7c 2s Jd")
        assert evaluation.tier == HandTier.ONE_PAIR

    def test_more_cards_never_lower_the_tier(self):
        flop = evaluate("As Ah", "Ad 7c 2s")
        river = evaluate("As Ah", "Ad 7c 2s 7d 3h")
        assert river.tier >= flop.tier
        assert river.tier == HandTier.FULL_HOUSE


def classify_five(cards):
    """Tier of exactly five cards from rank counts, suits and runs."""
    counts = sorted(Counter(c.rank for c in cards).values(), reverse=True)
    ranks = sorted({c.rank for c in cards}, reverse=True)
    suited = len({c.suit for c in cards}) == 1
    run = len(ranks) == 5 and ranks[0] - ranks[4] == 4
    wheel = ranks == [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]

    if suited and run and ranks[0] == Rank.ACE:
        return HandTier.ROYAL_FLUSH
    if suited and (run or wheel):
        return HandTier.STRAIGHT_FLUSH
    if counts[0] == 4:
        return HandTier.FOUR_OF_A_KIND
    if counts[:2] == [3, 2]:
        return HandTier.FULL_HOUSE
    if suited:
        return HandTier.FLUSH
    if run or wheel:
        return HandTier.STRAIGHT
    if counts[0] == 3:
        return HandTier.THREE_OF_A_KIND
    if counts[:2] == [2, 2]:
        return HandTier.TWO_PAIR
    if counts[0] == 2:
        return HandTier.ONE_PAIR
    return HandTier.HIGH_CARD


class TestFiveCardTiers:
    """Seeded flop hands checked against an independent classifier."""

    def test_random_flops_match_reference(self):
        rng = random.Random(31337)
        for _ in range(2000):
            cards = Deck(rng=rng).deal(5)
            evaluation = evaluate_hand(cards[:2], cards[2:])
            assert evaluation.tier == classify_five(cards), cards

    def test_every_tier_is_reached(self):
        """Stacked hands cover the rare tiers the random sweep may miss."""
        hands = [
            "As Ks Qs Js 10s", "9h 8h 7h 6h 5h", "5d 4d 3d 2d Ad",
            "7s 7h 7d 7c 2s", "7s 7h 7d 2c 2s", "As 9s 7s 4s 2s",
            "Ac 2d 3h 4s 5c", "10c Jd Qh Ks Ac", "7s 7h 7d Kc 2s",
            "7s 7h 2d 2c Ks", "7s 7h 2d 9c Ks", "7s 8h 2d 9c Ks",
        ]
        tiers = set()
        for text in hands:
            cards = parse_cards(text)
            tier = evaluate_hand(cards[:2], cards[2:]).tier
            assert tier == classify_five(cards), text
            tiers.add(tier)
        assert tiers == set(HandTier)

    def test_tiers_order_random_pairs(self):
        """A higher reference tier always wins the comparison."""
        rng = random.Random(4)
        for _ in range(500):
            deck = Deck(rng=rng)
            a, b = deck.deal(5), deck.deal(5)
            ref_a, ref_b = classify_five(a), classify_five(b)
            result = compare_evaluations(evaluate_hand(a[:2], a[2:]), evaluate_hand(b[:2], b[2:]))
            if ref_a > ref_b:
                assert result == -1
            elif ref_a < ref_b:
                assert result == 1


class TestPreflop:
    """Only the two hole cards count before the flop."""

    def test_pocket_pair(self):
        evaluation = evaluate("Kh Kd")
        assert evaluation.tier == HandTier.ONE_PAIR
        assert set(evaluation.cards) == set(parse_cards("Kh Kd"))

    def test_unpaired_hole_cards(self):
        evaluation = evaluate("7s Ac")
        assert evaluation.tier == HandTier.HIGH_CARD
        assert evaluation.cards == (Card(Rank.ACE, Suit.CLUBS),)

    def test_higher_pocket_pair_wins(self):
        kings = evaluate("Kh Kd")
        deuces = evaluate("2s 2c")
        assert kings.tier == deuces.tier == HandTier.ONE_PAIR
        assert compare_evaluations(kings, deuces) == -1
        assert compare_evaluations(deuces, kings) == 1


class TestInvalidInput:

    def test_wrong_hole_count(self):
        with pytest.raises(ValueError):
            evaluate_hand(parse_cards("As"), [])

    @pytest.mark.parametrize("board", ["Kd", "Kd Qd", "Kd Qd Jd 10d 9d 8d"])
    def test_wrong_board_count(self, board):
        with pytest.raises(ValueError):
            evaluate("As Ah", board)

    def test_duplicate_card(self):
        with pytest.raises(ValueError):
            evaluate("As Ah", "As 7c 2d")


class TestHandComparison:
    """Tests for comparing hands."""

    def test_higher_tier_wins(self):
        flush = evaluate("As Ks", "Js 9s 2s")
        straight = evaluate("9c 8d", "7h 6s 5c")
        assert compare_evaluations(flush, straight) == -1

    def test_same_tier_kicker(self):
        """Equal tiers fall back to card ranks, highest first."""
        assert compare_hands(parse_cards("As Kd"), parse_cards("Ah Qd")) == -1
        assert compare_hands(parse_cards("Ah Qd"), parse_cards("As Kd")) == 1

    def test_exact_tie(self):
        assert compare_hands(parse_cards("As Kd"), parse_cards("Ah Kc")) == 0


class TestHandDescription:

    @pytest.mark.parametrize("tier,label", [
        (1000, "Royal Flush"),
        (900, "Straight Flush"),
        (800, "Four of a Kind"),
        (700, "Full House"),
        (600, "Flush"),
        (500, "Straight"),
        (400, "Three of a Kind"),
        (300, "Two Pair"),
        (200, "One Pair"),
        (100, "High Card"),
    ])
    def test_known_tiers(self, tier, label):
        assert hand_description(tier) == label

    @pytest.mark.parametrize("tier", [0, 150, 1100, -5])
    def test_unknown_tier_reads_high_card(self, tier):
        assert hand_description(tier) == "High Card"

    def test_evaluation_description(self):
        assert evaluate("As Ah", "Ad Kc Ks").description == "Full House"


class TestHandHighlight:
    """Tests for the hint shown to the human."""

    def test_hidden_on_hard(self):
        highlight = get_hand_highlight(parse_cards("As Ah"), parse_cards("Ad 7c 2s"), Difficulty.HARD)
        assert not highlight.is_visible
        assert highlight.cards == ()

    def test_preflop_without_pair_is_hidden(self):
        highlight = get_hand_highlight(parse_cards("As Kh"), [], Difficulty.EASY)
        assert not highlight.is_visible

    def test_preflop_pair_is_shown(self):
        highlight = get_hand_highlight(parse_cards("8s 8h"), [], Difficulty.MEDIUM)
        assert highlight.is_visible
        assert highlight.description == "One Pair"
        assert highlight.highlights(Card(Rank.EIGHT, Suit.SPADES))

    def test_postflop_high_card_not_visible(self):
        highlight = get_hand_highlight(parse_cards("As Jh"), parse_cards("9d 7c 2s"), Difficulty.MEDIUM)
        assert not highlight.is_visible

    def test_postflop_made_hand(self):
        highlight = get_hand_highlight(parse_cards("As Jh"), parse_cards("Ad 7c 2s"), Difficulty.EASY)
        assert highlight.is_visible
        assert highlight.tier == HandTier.ONE_PAIR
        assert highlight.highlights(Card(Rank.ACE, Suit.DIAMONDS))
        assert not highlight.highlights(Card(Rank.SEVEN, Suit.CLUBS))

    def test_no_hole_cards(self):
        assert not get_hand_highlight([], [], Difficulty.EASY).is_visible
