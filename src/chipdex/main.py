"""
Command-line entry point.

    chipdex reload
    chipdex lookup Airshot --kind chip
    chipdex roll "2d6 + 3" --reroll
"""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from .config import Settings
from .dice import roll_dice
from .errors import DiceError
from .library import Library
from .resolver import Ambiguous, NotFound, Resolved

logger = logging.getLogger("chipdex")

KIND_CHOICES = ("chip", "ncp", "virus", "all")


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)


def reload_cmd(args):
    library = Library(_load_settings())
    report = asyncio.run(library.reload())
    print(report.summary())
    sys.exit(0 if not report.errors else 1)


def lookup_cmd(args):
    library = Library(_load_settings())
    report = asyncio.run(library.reload())
    if report.errors:
        logger.warning(f"Reload incomplete:\n{report.summary()}")

    resolver = library.resolver(None if args.kind == "all" else args.kind)

    result = resolver.resolve(args.query, limit=args.limit)
    if isinstance(result, Resolved):
        print(result.rendered)
    elif isinstance(result, Ambiguous):
        print("Did you mean one of these?")
        print("\n".join(result.numbered()))
    elif isinstance(result, NotFound):
        print(f"Nothing found for {args.query!r}")
        sys.exit(1)


def roll_cmd(args):
    try:
        roll = roll_dice(args.expression, reroll=args.reroll)
    except DiceError as e:
        print(e.message, file=sys.stderr)
        sys.exit(2)
    print(f"You rolled: {roll.total}")
    print(roll.rolls)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="chipdex",
        description="Look up BattleChips, NCPs and viruses",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    reload_parser = sub.add_parser("reload", help="Fetch, parse and export every catalog")
    reload_parser.set_defaults(func=reload_cmd)

    lookup_parser = sub.add_parser("lookup", help="Look up a chip, NCP or virus by name")
    lookup_parser.add_argument("query", help="Name or partial name to look up")
    lookup_parser.add_argument(
        "--kind", choices=KIND_CHOICES, default="all", help="Catalog to search (default: all)"
    )
    lookup_parser.add_argument("--limit", type=int, default=5, help="Maximum candidates to list")
    lookup_parser.set_defaults(func=lookup_cmd)

    roll_parser = sub.add_parser("roll", help="Roll a dice expression such as 2d6+3")
    roll_parser.add_argument("expression", help="'+'-joined dice terms and constants")
    roll_parser.add_argument(
        "--reroll", action="store_true", help="Reroll ones once, keeping the higher die"
    )
    roll_parser.set_defaults(func=roll_cmd)

    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)
    args.func(args)


if __name__ == "__main__":
    main()
