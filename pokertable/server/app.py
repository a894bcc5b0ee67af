"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application with:
- HTTP routes for the table
- WebSocket endpoint for real-time state pushes
- CORS middleware for development
"""

import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokertable.server import routes
from pokertable.server.session import TableSession
from pokertable.server.websocket import websocket_endpoint

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(session: Optional[TableSession] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        session: Table session to serve; a default one is built on first use

    Returns:
        Configured FastAPI application instance
    """
    if session is not None:
        routes.set_session(session)

    app = FastAPI(
        title="pokertable",
        description="Single-table Texas Hold'em against bots",
        version="0.1.0",
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(routes.router)
    app.websocket("/ws")(websocket_endpoint)

    @app.on_event("startup")
    async def startup_event():
        logger.info("pokertable server starting up...")

    @app.on_event("shutdown")
    async def shutdown_event():
        await routes.get_session().end_session()
        logger.info("pokertable server shutting down, chips saved")

    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "pokertable.server.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
