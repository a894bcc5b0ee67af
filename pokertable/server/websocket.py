"""
WebSocket handling for real-time table updates.

Every connection is subscribed to the table session and receives a
{"type": "state", ...} message whenever the table changes, including each
bot turn. Clients may also send messages:

    {"type": "action", "action": "RAISE", "amount": 50}
    {"type": "reset"}
    {"type": "get_state"}
"""

from __future__ import annotations
from typing import Any, Dict
import logging

from fastapi import WebSocket, WebSocketDisconnect

from pokertable.core.rules import Action, ActionType
from pokertable.server.routes import get_session
from pokertable.server.session import TableSession


logger = logging.getLogger(__name__)


async def handle_message(session: TableSession, message: Dict[str, Any]) -> Dict[str, Any]:
    """
    Handle a message from the client.

    Returns:
        Response dict
    """
    msg_type = message.get("type", "")

    if msg_type == "action":
        action_str = str(message.get("action", "")).upper()
        try:
            action_type = ActionType(action_str)
        except ValueError:
            return {"type": "error", "message": f"Invalid action: {action_str}"}

        if not session.game.is_hand_running:
            return {"type": "error", "message": "No hand in progress"}

        amount = int(message.get("amount", 0) or 0) if action_type == ActionType.RAISE else 0
        result = await session.perform_action(Action(action_type, amount), player_index=0)
        return {
            "type": "action_result",
            "success": result.success,
            "message": result.message,
            "amount": result.amount,
        }

    if msg_type == "reset":
        started = await session.reset()
        return {"type": "hand_started" if started else "low_chips", "hand_number": session.game.hand_number}

    if msg_type == "get_state":
        return {"type": "state", **session.game.get_state()}

    return {"type": "error", "message": f"Unknown message type: {msg_type}"}


async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint streaming table state and accepting human actions."""
    session = get_session()
    await websocket.accept()

    async def send_state(state: Dict[str, Any]) -> None:
        await websocket.send_json({"type": "state", **state})

    session.subscribe(send_state)
    logger.info("Table client connected")

    try:
        await send_state(session.game.get_state())
        while True:
            message = await websocket.receive_json()
            response = await handle_message(session, message)
            await websocket.send_json(response)
    except WebSocketDisconnect:
        logger.info("Table client disconnected")
    finally:
        session.unsubscribe(send_state)
