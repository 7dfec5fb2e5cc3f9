"""
bangserve - Command line entry point.

Loads settings, builds the shared resolver and serves it with uvicorn.

Usage:
  bangserve --port 8000
  bangserve --resolve "!w python"
"""

import argparse
import sys

import uvicorn
from loguru import logger

from bangserve.errors import BangServeError
from bangserve.search.resolver import QueryResolver
from bangserve.server import create_app
from bangserve.utils.helpers import (
    LOG_LEVELS,
    configure_logging,
    load_settings,
    resolve_static_dir,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bangserve",
        description="Personal bang search redirect server",
    )
    parser.add_argument("--settings", help="Path to settings.toml")
    parser.add_argument("--host", help="Address to bind (overrides settings)")
    parser.add_argument("--port", type=int, help="Port to bind (overrides settings)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (overrides settings)",
    )
    parser.add_argument(
        "--resolve",
        metavar="QUERY",
        help="Print the search URL for QUERY and exit",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings(args.settings)
    level = args.log_level or str(settings["logging"]["level"]).upper()
    if level not in LOG_LEVELS:
        logger.error(f"Invalid log level {level!r}, expected one of {', '.join(LOG_LEVELS)}")
        return 1
    configure_logging(level)

    try:
        resolver = QueryResolver.from_settings(settings)
    except BangServeError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.resolve is not None:
        print(resolver.search_url(args.resolve))
        return 0

    host = args.host or settings["server"]["host"]
    port = args.port or settings["server"]["port"]
    app = create_app(resolver, resolve_static_dir(settings))

    logger.info(f"Serving {len(resolver.registry)} engines on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
