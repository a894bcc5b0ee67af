"""
pokertable Server - FastAPI + WebSocket Server Layer
"""

from pokertable.server.app import app, create_app
from pokertable.server.session import TableSession

__all__ = ["app", "create_app", "TableSession"]
