"""
HTTP API Routes.

These routes drive the single table: start hands, submit the human's actions,
read state and edit settings. State pushes while bots play go out over the
WebSocket.
"""

from typing import Dict, Any, Optional
from dataclasses import replace
from fastapi import APIRouter, HTTPException
import os

from pokertable.core.config import TableConfig, InMemoryChipStore, JsonChipStore
from pokertable.core.game import PokerGame
from pokertable.core.hand import hand_description
from pokertable.core.rules import Action, ActionType, Difficulty
from pokertable.server.schemas import (
    ActionRequest, ActionResultSchema, BotRequest, HandEvaluationSchema,
    HandHighlightSchema, SettingsRequest, SettingsSchema,
)
from pokertable.server.session import TableSession

router = APIRouter()

# Single-table mode: one session per process
_session: Optional[TableSession] = None

CHIPS_FILE_ENV = "POKERTABLE_CHIPS_FILE"


def create_default_session() -> TableSession:
    """Build a session; chips persist to $POKERTABLE_CHIPS_FILE when it is set."""
    chips_file = os.environ.get(CHIPS_FILE_ENV)
    chip_store = JsonChipStore(chips_file) if chips_file else InMemoryChipStore()
    return TableSession(PokerGame(TableConfig(), chip_store=chip_store))


def set_session(session: Optional[TableSession]) -> None:
    global _session
    _session = session


def get_session() -> TableSession:
    """Get the table session, creating it on first use."""
    global _session
    if _session is None:
        _session = create_default_session()
    return _session


@router.post("/reset_game")
async def reset_game() -> Dict[str, Any]:
    """
    Start a new hand.

    Fails softly with low_chips=True when the human cannot cover a hand.
    """
    session = get_session()
    started = await session.reset()
    return {
        "success": started,
        "low_chips": session.game.low_chips,
        "state": session.game.get_state(),
    }


@router.get("/state")
async def get_state() -> Dict[str, Any]:
    """Get the current table state."""
    return get_session().game.get_state()


@router.post("/action")
async def take_action(req: ActionRequest) -> Dict[str, Any]:
    """
    Take an action for the human seat.

    An illegal action (out of turn, unaffordable, check into a bet) folds the
    human and reports success=False.
    """
    session = get_session()
    if not session.game.is_hand_running:
        raise HTTPException(status_code=400, detail="No hand in progress")

    try:
        action_type = ActionType(req.action_type.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid action type: {req.action_type}")

    amount = (req.amount or 0) if action_type == ActionType.RAISE else 0
    result = await session.perform_action(Action(action_type, amount), player_index=0)

    return {
        "result": ActionResultSchema(
            success=result.success,
            message=result.message,
            action_type=result.action_type.value if result.action_type else None,
            amount=result.amount,
        ).model_dump(),
        "state": session.game.get_state(),
    }


@router.get("/evaluate/{player_index}", response_model=HandEvaluationSchema)
async def evaluate(player_index: int) -> Dict[str, Any]:
    """Evaluate a seat's hand. Bot hands stay private until the hand is over."""
    game = get_session().game
    if not 0 <= player_index < game.num_players:
        raise HTTPException(status_code=404, detail=f"No player at seat {player_index}")
    if not (game.players[player_index].is_human or game.is_finished):
        raise HTTPException(status_code=403, detail="Hand is still hidden")
    return game.evaluate_hand(player_index).to_dict()


@router.get("/hand_description/{tier}")
async def describe_tier(tier: int) -> Dict[str, Any]:
    return {"tier": tier, "description": hand_description(tier)}


@router.get("/highlight", response_model=HandHighlightSchema)
async def highlight() -> Dict[str, Any]:
    """Hand hint for the human seat."""
    return get_session().game.hand_highlight().to_dict()


@router.get("/settings", response_model=SettingsSchema)
async def get_settings() -> SettingsSchema:
    return SettingsSchema.from_config(get_session().game.config)


@router.put("/settings", response_model=SettingsSchema)
async def update_settings(req: SettingsRequest) -> SettingsSchema:
    """Change settings; they take effect from the next hand."""
    game = get_session().game
    changes: Dict[str, Any] = {}
    try:
        if req.difficulty is not None:
            changes["difficulty"] = Difficulty.parse(req.difficulty)
        if req.default_raise_amount is not None:
            changes["default_raise_amount"] = req.default_raise_amount
        if req.use_bot_difficulty is not None:
            changes["use_bot_difficulty"] = req.use_bot_difficulty
        game.config = replace(game.config, **changes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SettingsSchema.from_config(game.config)


@router.post("/bots", response_model=SettingsSchema)
async def add_bot(req: BotRequest) -> SettingsSchema:
    """Add a bot to the roster (applies from the next hand)."""
    game = get_session().game
    if len(game.config.bots) >= game.config.max_bots:
        raise HTTPException(
            status_code=400,
            detail=f"You can't add more than {game.config.max_bots} bots",
        )
    try:
        game.config = game.config.with_bot(req.to_profile())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SettingsSchema.from_config(game.config)


@router.delete("/bots/{index}", response_model=SettingsSchema)
async def remove_bot(index: int) -> SettingsSchema:
    """Remove a bot; removing the last one restores the default roster."""
    game = get_session().game
    try:
        game.config = game.config.without_bot(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SettingsSchema.from_config(game.config)


@router.post("/end_session")
async def end_session() -> Dict[str, Any]:
    """Persist the human's chips and stop any bot turns."""
    session = get_session()
    await session.end_session()
    human = session.game.human
    return {"success": True, "chips": human.chips if human else session.game.chip_store.load()}
