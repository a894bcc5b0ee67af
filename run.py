#!/usr/bin/env python3
"""
pokertable - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--chips-file PATH]
"""

import argparse
import os
import uvicorn

from pokertable.server.routes import CHIPS_FILE_ENV


def main():
    parser = argparse.ArgumentParser(description="pokertable Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--chips-file", help="JSON file the player's chip balance is kept in")
    args = parser.parse_args()

    if args.chips_file:
        os.environ[CHIPS_FILE_ENV] = args.chips_file

    uvicorn.run(
        "pokertable.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
