#!/usr/bin/env python
"""
Start Listkeeper under uvicorn.

    uv run python run_api.py                    # settings from env / .env
    uv run python run_api.py --reload --port 8080
"""

import argparse
import logging

import uvicorn
from rich.logging import RichHandler

from shared.config import get_settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Listkeeper subscription API")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", default=settings.reload, help="Restart on code changes")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    args = parser.parse_args()

    configure_logging(args.log_level)
    uvicorn.run(
        "api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
