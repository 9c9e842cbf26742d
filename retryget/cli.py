"""Command-line entry point: fetch one URL and print the body or the error."""

from __future__ import annotations

import argparse
import dataclasses
import sys

from loguru import logger

from .config import Settings
from .engine import RetryEngine
from .exceptions import ConfigError
from .fetchers import FETCHERS
from .results import Ok

DEMO_URL = "https://getstatuscode.com/500"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retryget",
        description="GET a URL, retrying server errors with exponential backoff.",
    )
    parser.add_argument("url", nargs="?", default=DEMO_URL, help=f"URL to fetch (default: {DEMO_URL})")
    parser.add_argument("--transport", choices=sorted(FETCHERS), help="HTTP library to use")
    parser.add_argument(
        "--max-elapsed",
        type=float,
        metavar="SECONDS",
        help="retry budget for server errors",
    )
    parser.add_argument("--timeout", type=float, metavar="SECONDS", help="per-request timeout")
    parser.add_argument("-v", "--verbose", action="store_true", help="log retry scheduling")
    return parser


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = Settings.from_env()
        overrides = {}
        if args.transport:
            overrides["transport"] = args.transport
        if args.max_elapsed is not None:
            overrides["max_elapsed_time"] = args.max_elapsed
        if args.timeout is not None:
            overrides["http_timeout"] = args.timeout
        settings = dataclasses.replace(settings, **overrides)
        engine = RetryEngine.from_settings(settings)
    except ConfigError as exc:
        print(f"retryget: {exc}", file=sys.stderr)
        return 2

    result = engine.fetch(args.url)
    if isinstance(result, Ok):
        print(result.response.text)
        return 0

    print(result, file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
