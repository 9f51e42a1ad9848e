"""
Run the inventory API server.

Usage:
    python -m inventory
    python -m inventory --reload  # Development mode
"""

import argparse
import uvicorn

from inventory.config import get_settings


def main():
    parser = argparse.ArgumentParser(description="Run the inventory API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    args = parser.parse_args()

    settings = get_settings()

    uvicorn.run(
        "inventory.main:app",
        host=args.host or settings.HOST,
        port=args.port or settings.PORT,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
