"""Command-line entry point for the agent dashboard server."""

import argparse
import logging

import uvicorn

from .config import DEFAULT_HOST, DEFAULT_PORT
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__, namespace='api')


def main():
    parser = argparse.ArgumentParser(description="Agent Dashboard")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Interface to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to listen on")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    args = parser.parse_args()

    level = None
    if args.log_level:
        level = getattr(logging, args.log_level.upper(), None)
    setup_logging(level=level)

    logger.info(f"Agent Dashboard running at http://localhost:{args.port}")
    uvicorn.run("src.dashboard.server:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
