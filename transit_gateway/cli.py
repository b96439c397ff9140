"""
Command-line entry point.

Usage:
  transit-gateway --port 1337 --router-url http://router-ttx --timeout 1200

Flags override the corresponding environment settings.
"""

import argparse
from typing import List, Optional

import uvicorn

from transit_gateway.core.config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transit-gateway",
        description="Serve routing requests through an external trip-planning engine.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {settings.VERSION}")
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port on which to serve traffic (default: {settings.PORT})",
    )
    parser.add_argument("--host", default=settings.HOST, help="Interface to bind")
    parser.add_argument(
        "--router-url", default=settings.ROUTER_URL, help="URL for the router server."
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.TIMEOUT_SECS,
        help="The maximum amount of time we will wait for a request to finish, in seconds",
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
    return parser


def apply_args(args: argparse.Namespace) -> None:
    """Copy parsed flags onto the process-wide settings."""
    settings.PORT = args.port
    settings.HOST = args.host
    settings.ROUTER_URL = args.router_url
    settings.TIMEOUT_SECS = args.timeout
    settings.LOG_LEVEL = args.log_level


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    apply_args(args)

    # Imported late so the router client and logging see the flags
    from transit_gateway.main import app  # pylint: disable=import-outside-toplevel
    from transit_gateway.utils.logger import (  # pylint: disable=import-outside-toplevel
        configure_logging,
    )

    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        timeout_keep_alive=int(settings.TIMEOUT_SECS),
        log_config=None,
    )


if __name__ == "__main__":
    main()
