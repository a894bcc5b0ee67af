"""
Table session driver.

Runs one PokerGame on the event loop. Human actions are applied immediately;
bot turns run in a single background asyncio.Task that sleeps for the bot's
"think" time, applies the decision and pauses before the next turn. Resetting
the table cancels that task, and every bot turn carries the hand number it was
scheduled for so a turn from an earlier hand is never applied.
"""

from __future__ import annotations
from typing import Any, Awaitable, Callable, Dict, List, Optional
import asyncio
import logging

from pokertable.core.game import PokerGame, ActionResult
from pokertable.core.rules import Action


logger = logging.getLogger(__name__)

StateListener = Callable[[Dict[str, Any]], Awaitable[None]]


class TableSession:
    """
    Owns a game and the task playing its bots.

    Usage:
        session = TableSession(PokerGame(config))
        session.subscribe(send_state)
        await session.reset()
        await session.perform_action(Action.call())
    """

    def __init__(self, game: PokerGame):
        self.game = game
        self._bot_task: Optional[asyncio.Task] = None
        self._listeners: List[StateListener] = []

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def bots_running(self) -> bool:
        return self._bot_task is not None and not self._bot_task.done()

    async def reset(self) -> bool:
        """Cancel any pending bot turn and start a new hand."""
        self.cancel_pending()
        started = self.game.reset_game()
        await self.publish()
        self._schedule_bots()
        return started

    async def perform_action(self, action: Action, player_index: int = 0) -> ActionResult:
        """Apply a human action, then let the bots play."""
        result = self.game.perform_player_action(action, player_index)
        await self.publish()
        self._schedule_bots()
        return result

    async def end_session(self) -> None:
        self.cancel_pending()
        self.game.end_session()

    def cancel_pending(self) -> None:
        if self.bots_running:
            self._bot_task.cancel()
            logger.debug(f"Cancelled pending bot turns for hand #{self.game.hand_number}")
        self._bot_task = None

    async def wait_for_bots(self) -> None:
        """Wait until the current run of bot turns is over."""
        if self._bot_task is not None:
            try:
                await self._bot_task
            except asyncio.CancelledError:
                pass

    def _schedule_bots(self) -> None:
        if self.game.is_waiting_for_bot and not self.bots_running:
            self._bot_task = asyncio.create_task(self._play_bots(self.game.hand_number))

    async def _play_bots(self, hand_number: int) -> None:
        config = self.game.config
        while self.game.hand_number == hand_number and self.game.is_waiting_for_bot:
            await self.publish()
            await asyncio.sleep(config.bot_think_delay)
            if not self.game.play_bot_turn(hand_number):
                break
            await self.publish()
            await asyncio.sleep(config.bot_action_pause)

    async def publish(self) -> None:
        """Send the current state to every listener."""
        state = self.game.get_state()
        for listener in list(self._listeners):
            try:
                await listener(state)
            except Exception as e:
                logger.error(f"Error publishing state: {e}")
