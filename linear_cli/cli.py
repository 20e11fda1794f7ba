"""
linear - command-line client for the Linear GraphQL API

Usage:
    linear issues list --team Engineering --limit 10
    linear --allow-mutations issues create --title "Fix login" --team Engineering
    linear analytics report --format json
    linear analytics engineer_workload --period quarter --view summary

Safe mode is on unless --allow-mutations is given; the decision is made once
here and handed to the API client.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from linear_cli import __version__
from linear_cli.api.client import LinearClient
from linear_cli.commands import register_all
from linear_cli.config import load_config
from linear_cli.errors import LinearCliError
from linear_cli.ui.console import error

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linear",
        description="Linear CLI - manage issues, teams and projects and run analytics from your terminal",
        epilog="Run 'linear COMMAND --help' for help on a command group.",
    )
    parser.add_argument(
        "--allow-mutations",
        action="store_true",
        help="Disable read-only safe mode (allows create/update/comment)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more detail to stderr (-v info, -vv debug)",
    )
    parser.add_argument("--config", help="Path to a YAML config file (default: LINEAR_CLI_CONFIG)")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    version_parser = subparsers.add_parser("version", help="Display the Linear CLI version")
    version_parser.set_defaults(handler=None)

    register_all(subparsers)
    return parser


def setup_logging(verbosity: int = 0) -> None:
    """Configure root logging on stderr; LINEAR_LOG_LEVEL wins over -v."""
    level_name = os.getenv("LINEAR_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), logging.WARNING)
    else:
        level = VERBOSITY_LEVELS[min(verbosity, len(VERBOSITY_LEVELS) - 1)]

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    # gql logs full request/response bodies at INFO
    logging.getLogger("gql").setLevel(max(level, logging.WARNING))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "version":
        print(f"Linear CLI v{__version__}")
        return 0

    try:
        config = load_config(args.config)
        client = LinearClient(config.api_key, config.api_url, safe_mode=not args.allow_mutations)
        args.handler(args, client, config)
    except LinearCliError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        error(str(e))
        return 1
    except KeyboardInterrupt:
        error("Interrupted.")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
