"""
Table Engine - Betting-Round State Machine.

This module implements the core game logic for the table:
- Seating the human and the bot roster, dealing from a fresh deck each hand
- Stage progression (pre-flop, flop, turn, river, showdown)
- Player actions (fold, check, call, raise) and bot decisions
- Early termination when all but one player folded
- Showdown winner determination

The engine is synchronous and single-threaded. After every action next_turn()
moves the cursor; when it lands on a bot the engine waits for play_bot_turn(),
which a driver may call right away (run_bots) or after a delay
(server.session.TableSession). hand_number is bumped on every reset so a
delayed bot turn from an earlier hand can be detected and dropped.
"""

from __future__ import annotations
from typing import Callable, List, Dict, Optional, Any
from dataclasses import dataclass
import logging
import random

from pokertable.agents.base import BaseAgent
from pokertable.agents.bot import BotAgent
from pokertable.core.card import Card, Deck, has_high_card
from pokertable.core.config import TableConfig, ChipStore, InMemoryChipStore
from pokertable.core.errors import InvalidAction, NoActivePlayers
from pokertable.core.hand import (
    HandEvaluation, HandHighlight, evaluate_hand, hand_description,
    compare_evaluations, get_hand_highlight,
)
from pokertable.core.player import Player
from pokertable.core.rules import (
    GameStage, ActionType, Action, calculate_pot_odds,
    HOLE_CARDS, HUMAN_NAME, NEXT_STAGE,
)


logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of a player action."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0


@dataclass(frozen=True)
class ActionRecord:
    """One line of the table's action log."""
    description: str
    player_index: Optional[int]
    stage: GameStage

    def __str__(self) -> str:
        return self.description


AgentFactory = Callable[[Player, random.Random], BaseAgent]


def default_agent_factory(player: Player, rng: random.Random) -> BaseAgent:
    return BotAgent(player.index, player.name, player.difficulty, rng=rng)


class PokerGame:
    """
    Single-table engine implementing a state machine.

    Usage:
        game = PokerGame(TableConfig(), chip_store=InMemoryChipStore(1000))
        game.reset_game()

        while not game.is_finished:
            if game.current_player.is_human:
                game.perform_player_action(get_human_action(game.get_state()))
            else:
                game.play_bot_turn()

        print(game.winner, game.winning_hand)
    """

    def __init__(
        self,
        config: Optional[TableConfig] = None,
        chip_store: Optional[ChipStore] = None,
        rng: Optional[random.Random] = None,
        agent_factory: AgentFactory = default_agent_factory,
    ):
        """
        Initialize a table. No hand is running until reset_game() is called.

        Args:
            config: Table settings (difficulty, raise default, bot roster)
            chip_store: Where the human's balance is read and written
            rng: Random source for shuffling and bot decisions
            agent_factory: Builds the agent driving each bot seat
        """
        self.config = config or TableConfig()
        self.chip_store: ChipStore = chip_store or InMemoryChipStore()
        self.rng = rng or random.Random()
        self.agent_factory = agent_factory

        self.players: List[Player] = []
        self.agents: Dict[int, BaseAgent] = {}
        self.deck = Deck(shuffle=False, rng=self.rng)
        self.community_cards: List[Card] = []
        self.stage = GameStage.PRE_FLOP
        self.hand_number = 0

        # Betting state
        self.pot = 0
        self.current_bet = 0
        self.current_player_index = 0
        self.current_raise_amount = self.config.default_raise_amount

        # Hand outcome
        self.round_actions: List[ActionRecord] = []
        self.is_finished = False
        self.winner: Optional[int] = None
        self.winning_hand: Optional[HandEvaluation] = None

        self.thinking_player_index: Optional[int] = None
        self.low_chips = False

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def num_active_players(self) -> int:
        """Number of players who have not folded."""
        return sum(1 for p in self.players if not p.is_folded)

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.players:
            return None
        return self.players[self.current_player_index]

    @property
    def human(self) -> Optional[Player]:
        return next((p for p in self.players if p.is_human), None)

    @property
    def is_hand_running(self) -> bool:
        return bool(self.players) and not self.is_finished

    @property
    def is_waiting_for_bot(self) -> bool:
        player = self.current_player
        return self.is_hand_running and player is not None and not player.is_human

    def reset_game(self) -> bool:
        """
        Start a new hand.

        Writes the human's chips back to the chip store, then reseats the table
        and deals. Refuses to start when the stored balance is below
        config.min_chips_to_play.

        Returns:
            True if a hand started, False on low chips
        """
        self._save_human_chips()

        chips = self.chip_store.load()
        if chips < self.config.min_chips_to_play:
            logger.warning(f"Cannot start hand: {chips} chips, need {self.config.min_chips_to_play}")
            self.low_chips = True
            return False
        self.low_chips = False

        self.hand_number += 1
        logger.info(f"Starting hand #{self.hand_number}")

        self.current_raise_amount = self.config.default_raise_amount
        self.deck = Deck(shuffle=True, rng=self.rng)

        self.players = [Player(index=0, name=HUMAN_NAME, chips=chips, is_human=True)]
        for i, bot in enumerate(self.config.bots, start=1):
            self.players.append(Player(
                index=i,
                name=bot.name,
                chips=self.config.bot_starting_chips,
                difficulty=self.config.difficulty_for(bot),
            ))

        self.agents = {
            p.index: self.agent_factory(p, self.rng)
            for p in self.players if not p.is_human
        }
        for agent in self.agents.values():
            agent.on_hand_start(self.hand_number)

        self.community_cards = []
        self.pot = 0
        self.current_bet = 0
        self.current_player_index = 0
        self.round_actions = []
        self.stage = GameStage.PRE_FLOP
        self.is_finished = False
        self.winner = None
        self.winning_hand = None
        self.thinking_player_index = None

        self.deal_cards()
        return True

    def deal_cards(self) -> None:
        """Deal 2 hole cards to every seat."""
        for player in self.players:
            player.reset_for_new_hand()
            player.deal_cards(self.deck.deal(HOLE_CARDS))

    def perform_player_action(self, action: Action, player_index: Optional[int] = None) -> ActionResult:
        """
        Apply an action for the seat to act and advance the turn.

        An illegal action (wrong turn, negative amount, more chips than the
        seat holds, checking into a bet) is rejected and the seat folds.

        Args:
            action: The action to take
            player_index: Seat submitting the action; defaults to the current seat

        Returns:
            ActionResult indicating success/failure and chips moved
        """
        if not self.is_hand_running:
            return ActionResult(False, "No hand in progress")

        index = self.current_player_index if player_index is None else player_index
        if not 0 <= index < self.num_players:
            return ActionResult(False, f"No player at seat {index}")

        try:
            self._validate_action(self.players[index], action)
        except InvalidAction as e:
            logger.warning(f"Rejected {action.description} from seat {index}: {e}")
            self._forfeit(index)
            return ActionResult(False, str(e), ActionType.FOLD, 0)

        amount = self._apply_action(self.players[index], action)
        self.next_turn()
        return ActionResult(True, action.description, action.type, amount)

    def play_bot_turn(self, hand_number: Optional[int] = None) -> bool:
        """
        Let the bot in the current seat act, then advance the turn.

        Args:
            hand_number: Hand the caller scheduled this turn for; a mismatch
                means the table was reset meanwhile and the turn is dropped

        Returns:
            True if a bot acted
        """
        if hand_number is not None and hand_number != self.hand_number:
            logger.debug(f"Dropping bot turn scheduled for hand #{hand_number}")
            return False
        if not self.is_waiting_for_bot:
            return False

        player = self.current_player
        agent = self.agents[player.index]
        choice = agent.get_action_for_game(self.get_observation(player.index))

        action_type = ActionType(choice["action"])
        amount = choice.get("amount", 0) if action_type == ActionType.RAISE else 0
        self._apply_action(player, Action(action_type, amount))

        self.thinking_player_index = None
        self.next_turn()
        return True

    def run_bots(self) -> None:
        """Play bot turns until the human must act or the hand is over."""
        while self.play_bot_turn():
            pass

    def next_turn(self) -> None:
        """
        Advance the turn after a seat acted.

        Ends the hand at once if a single player is left. Otherwise moves to the
        next seat that has not folded; if that seat already acted this round,
        the round is over and the next stage is dealt (or the river resolved).
        """
        if not self.is_hand_running:
            return

        if self.num_active_players <= 1:
            self.determine_winner()
            return

        self._advance_to_next_active_player()

        if self.current_player.has_acted:
            self._advance_stage()
            if self.is_finished:
                return

        if self.current_player.is_human:
            self.thinking_player_index = None
        else:
            self.thinking_player_index = self.current_player_index

    def determine_winner(self) -> None:
        """
        Resolve the hand among the players who have not folded.

        Higher tier wins; equal tiers compare their cards rank by rank and a
        full tie keeps the earlier seat. The winner takes the whole pot.

        Raises:
            NoActivePlayers: If every seat folded
        """
        self.stage = GameStage.SHOWDOWN
        self.thinking_player_index = None

        contenders = [p for p in self.players if not p.is_folded]
        if not contenders:
            raise NoActivePlayers("Every player folded")

        best_player: Optional[Player] = None
        best_hand: Optional[HandEvaluation] = None
        for player in contenders:
            evaluation = self.evaluate_hand(player.index)
            if best_hand is None or compare_evaluations(evaluation, best_hand) < 0:
                best_player, best_hand = player, evaluation

        won = self.pot
        best_player.chips += won
        self.winner = best_player.index
        self.winning_hand = best_hand

        self._add_action(
            f"{best_player.name} wins with a {best_hand.description} and receives ${won}",
            best_player,
        )
        logger.info(f"Hand #{self.hand_number}: {best_player.name} wins ${won} with {best_hand.description}")

        self.pot = 0
        self.is_finished = True
        self._save_human_chips()

        result = {"winner": best_player.index, "pot": won, "description": best_hand.description}
        for agent in self.agents.values():
            agent.on_hand_end(result)

    def evaluate_hand(self, player_index: int) -> HandEvaluation:
        """Evaluate a seat's hole cards against the current board."""
        return evaluate_hand(self.players[player_index].hand, self.community_cards)

    @staticmethod
    def hand_description(tier: int) -> str:
        return hand_description(tier)

    def hand_highlight(self) -> HandHighlight:
        """Hand hint for the human seat."""
        human = self.human
        hole = human.hand if human else []
        return get_hand_highlight(hole, self.community_cards, self.config.difficulty)

    def end_session(self) -> None:
        """Persist the human's chips when the player leaves the table."""
        self._save_human_chips()

    def _validate_action(self, player: Player, action: Action) -> None:
        if player.is_folded:
            raise InvalidAction(f"{player.name} has already folded", player.index)
        if player.index != self.current_player_index:
            raise InvalidAction(f"Not {player.name}'s turn", player.index)
        if action.amount < 0:
            raise InvalidAction(f"Negative amount {action.amount}", player.index)
        if action.type == ActionType.CHECK and self.current_bet > 0:
            raise InvalidAction(f"Cannot check, must call {self.current_bet}", player.index)

        cost = self._cost_of(action)
        if cost > player.chips:
            raise InvalidAction(f"{player.name} needs {cost} chips but has {player.chips}", player.index)

    def _cost_of(self, action: Action) -> int:
        if action.type == ActionType.CALL:
            return self.current_bet
        if action.type == ActionType.RAISE:
            return self.current_bet + action.amount
        return 0

    def _apply_action(self, player: Player, action: Action) -> int:
        """Move chips and log the action. Returns chips paid into the pot."""
        paid = 0

        if action.type == ActionType.FOLD:
            player.fold()
            self._add_action(f"{player.name} folded", player)

        elif action.type == ActionType.CHECK:
            player.current_action = action
            if player.chips <= 0:
                self._add_action(f"{player.name} has no chips and checks", player)
            else:
                self._add_action(f"{player.name} checked", player)

        elif action.type == ActionType.CALL:
            paid = player.pay(self.current_bet)
            self.pot += paid
            player.current_action = action
            self._add_action(f"{player.name} called {paid}", player)

        elif action.type == ActionType.RAISE:
            paid = player.pay(self.current_bet + action.amount)
            self.pot += paid
            self.current_bet += action.amount
            player.current_action = action
            self._add_action(f"{player.name} raised to {self.current_bet}", player)

        player.has_acted = True
        return paid

    def _forfeit(self, index: int) -> None:
        """Fold a seat whose action was rejected."""
        player = self.players[index]
        if player.is_folded:
            return

        player.fold()
        player.has_acted = True
        self._add_action(f"{player.name} folded", player)

        if index == self.current_player_index:
            self.next_turn()
        elif self.num_active_players <= 1:
            self.determine_winner()

    def _advance_to_next_active_player(self) -> None:
        for _ in range(self.num_players):
            self.current_player_index = (self.current_player_index + 1) % self.num_players
            if not self.players[self.current_player_index].is_folded:
                return

    def _advance_stage(self) -> None:
        """Close the betting round: deal the next street or resolve the river."""
        if self.stage not in NEXT_STAGE:
            self.determine_winner()
            return

        next_stage, num_cards = NEXT_STAGE[self.stage]
        self.community_cards.extend(self.deck.deal(num_cards))
        self.stage = next_stage
        for player in self.players:
            player.has_acted = False

        logger.info(
            f"Hand #{self.hand_number} {next_stage.name}: "
            f"{' '.join(str(c) for c in self.community_cards)}"
        )

    def _add_action(self, description: str, player: Optional[Player] = None) -> None:
        """Append a log line tagged with the acting player's hole cards."""
        player = player or self.current_player
        self.round_actions.append(ActionRecord(
            description=f"{description} [{player.hand_str}]",
            player_index=player.index,
            stage=self.stage,
        ))

    def _save_human_chips(self) -> None:
        human = self.human
        if human is not None:
            self.chip_store.save(human.chips)

    def get_observation(self, player_index: int) -> Dict[str, Any]:
        """What a bot seat sees when deciding."""
        player = self.players[player_index]
        return {
            "stage": self.stage.name,
            "hand_tier": int(self.evaluate_hand(player_index).tier),
            "has_high_card": has_high_card(player.hand),
            "chips": player.chips,
            "current_bet": self.current_bet,
            "pot": self.pot,
            "pot_odds": calculate_pot_odds(self.current_bet, self.pot),
        }

    def get_legal_actions(self, player_index: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Legal actions for a seat (default: the current seat).

        Returns:
            List of action dicts with type and constraints
        """
        index = self.current_player_index if player_index is None else player_index
        if not self.is_hand_running or index != self.current_player_index:
            return []

        player = self.players[index]
        if player.is_folded:
            return []

        actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]
        if self.current_bet == 0:
            actions.append({"type": ActionType.CHECK.value})
        elif self.current_bet <= player.chips:
            actions.append({"type": ActionType.CALL.value, "amount": self.current_bet})

        if player.chips > self.current_bet:
            actions.append({
                "type": ActionType.RAISE.value,
                "min": 0,
                "max": player.chips - self.current_bet,
                "default": min(self.current_raise_amount, player.chips - self.current_bet),
            })
        return actions

    def get_state(self) -> Dict[str, Any]:
        """
        Snapshot of the table for display.

        Bot hole cards are hidden until the hand is finished.
        """
        return {
            "hand_number": self.hand_number,
            "stage": self.stage.name,
            "pot": self.pot,
            "current_bet": self.current_bet,
            "current_player": self.current_player_index if self.players else None,
            "thinking_player": self.thinking_player_index,
            "community_cards": [c.to_dict() for c in self.community_cards],
            "players": [
                p.to_dict(hide_cards=not (p.is_human or self.is_finished))
                for p in self.players
            ],
            "round_actions": [str(a) for a in self.round_actions],
            "is_finished": self.is_finished,
            "winner": self.winner,
            "winning_hand": self.winning_hand.to_dict() if self.winning_hand else None,
            "legal_actions": self.get_legal_actions(0) if self.players else [],
            "current_raise_amount": self.current_raise_amount,
            "low_chips": self.low_chips,
        }
