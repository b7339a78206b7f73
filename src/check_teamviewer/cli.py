"""
Command-line entry point for the TeamViewer monitoring plugin.

Prints one status line on stdout and exits with the plugin state:
0 OK, 2 CRITICAL, 3 UNKNOWN, 1 on usage errors. Diagnostics go to stderr.

Example:
    check_teamviewer -apikey $TOKEN -host myhost
    TEAMVIEWER_API_KEY=$TOKEN check_teamviewer -teamviewerid 123456789
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from ._types import MatchCriterion
from .config import ProbeConfig, load_config
from .probe import run_probe

logger = logging.getLogger(__name__)

USAGE_ERROR_EXIT = 1
MISSING_ARGS_MESSAGE = "Please provide the TeamViewer API key and host to test or teamviewer id"


class ProbeArgumentParser(argparse.ArgumentParser):
    """Reports parse errors on stdout with the usage-error exit code."""

    def error(self, message):
        print(f"{self.prog}: error: {message}")
        self.print_usage(sys.stdout)
        sys.exit(USAGE_ERROR_EXIT)


def build_parser() -> argparse.ArgumentParser:
    parser = ProbeArgumentParser(
        prog="check_teamviewer",
        description="Check that a TeamViewer-managed device is online",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-apikey", "--apikey",
        dest="apikey",
        help="TeamViewer API key (default: $TEAMVIEWER_API_KEY)"
    )
    parser.add_argument(
        "-host", "--host",
        dest="host",
        help="Host to test, matched against '<id>_<host>' aliases"
    )
    parser.add_argument(
        "-teamviewerid", "--teamviewerid",
        dest="teamviewerid",
        help="ID Teamviewer of Host to test"
    )
    parser.add_argument(
        "--api-url",
        dest="api_url",
        help="Devices endpoint (default: TeamViewer web API)"
    )
    parser.add_argument(
        "--timeout",
        type=int,
        help="Request timeout in seconds (default: 30)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging on stderr"
    )
    return parser


def setup_logging(log_level: str = 'WARNING') -> None:
    """
    Configure logging for the probe.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def _usage_error(parser: argparse.ArgumentParser, message: str) -> int:
    print(message)
    parser.print_usage(sys.stdout)
    return USAGE_ERROR_EXIT


def criterion_from_args(args: argparse.Namespace) -> Optional[MatchCriterion]:
    """Exactly one of host / teamviewerid, else None."""
    if bool(args.host) == bool(args.teamviewerid):
        return None
    if args.host:
        return MatchCriterion.by_hostname(args.host)
    return MatchCriterion.by_control_identifier(args.teamviewerid)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    criterion = criterion_from_args(args)
    if criterion is None:
        return _usage_error(parser, MISSING_ARGS_MESSAGE)

    try:
        config: ProbeConfig = load_config(
            api_key=args.apikey,
            api_url=args.api_url,
            timeout=args.timeout,
            log_level="DEBUG" if args.verbose else None,
        )
    except ValidationError as e:
        if any(err["loc"] == ("api_key",) for err in e.errors()):
            return _usage_error(parser, MISSING_ARGS_MESSAGE)
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        return _usage_error(parser, f"Invalid configuration: {fields}")

    setup_logging(config.log_level)
    logger.debug(f"Checking {criterion} via {config.api_url}")

    verdict = asyncio.run(run_probe(config, criterion))
    print(verdict.message)
    return verdict.exit_code


if __name__ == "__main__":
    sys.exit(main())
