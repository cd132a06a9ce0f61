"""Command line entry point: serve, check and simulate."""

import argparse
import asyncio
import os
import sys
from typing import Mapping

import sentry_sdk
import uvicorn
from dotenv import load_dotenv

from .config import DEFAULT_ENV_FILE, Settings, load_settings
from .errors import ConfigError
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def init_sentry(settings: Settings) -> bool:
    """Report the service's own failures to Sentry when SENTRY_DSN is set."""
    if not settings.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        release=settings.release,
        debug=settings.sentry_debug,
        traces_sample_rate=settings.sentry_traces_sample_rate,
        attach_stacktrace=True,
    )
    logger.info("Sentry self-reporting enabled")
    return True


def run_check(environ: Mapping[str, str] | None = None) -> int:
    """
    Validate configuration before a release is promoted.

    Returns:
        0 when settings load without problems and at least one drain
        mapping is usable, 1 otherwise.
    """
    try:
        settings = load_settings(environ)
    except ConfigError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 1

    for problem in settings.problems:
        print(f"configuration problem: {problem}", file=sys.stderr)

    if not settings.destinations:
        print("configuration problem: no drain mappings configured", file=sys.stderr)
        return 1

    print(f"{len(settings.destinations)} drain mappings loaded")
    return 1 if settings.problems else 0


def serve() -> int:
    """Run the HTTP server until it is stopped."""
    from .api import create_fastapi_app
    from .app import Application

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("Could not load settings: %s", e)
        return 1

    log_file = str(settings.log_file) if settings.log_file else None
    setup_logging(settings.log_level, log_file)
    init_sentry(settings)

    app = create_fastapi_app(Application(settings))
    logger.info("Starting server on %s:%s", settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    return 0


def simulate(url: str, token: str, rounds: int) -> int:
    """Post synthetic drain batches to a running service."""
    from sim import DrainSim

    sent = asyncio.run(DrainSim(api_url=url, drain_token=token).run(rounds=rounds))
    print(f"{sent} batches accepted")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="log-reporter",
        description="Report router request timeouts from log drains to Sentry.",
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("serve", help="run the HTTP server (default)")
    commands.add_parser("check", help="validate configuration and exit")

    sim = commands.add_parser("simulate", help="post synthetic drain batches")
    sim.add_argument("--url", default="http://localhost:3000")
    sim.add_argument("--token", required=True, help="drain token to send")
    sim.add_argument("--rounds", type=int, default=3)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the requested command and return its exit code."""
    load_dotenv(DEFAULT_ENV_FILE)
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    args = build_parser().parse_args(argv)
    if args.command == "check":
        return run_check()
    if args.command == "simulate":
        return simulate(args.url, args.token, args.rounds)
    return serve()
