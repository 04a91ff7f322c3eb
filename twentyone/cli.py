"""
Console entry point for playing blackjack.

Run `twentyone --help` for the available options.
"""

import argparse
import asyncio
import logging
import random
import sys
from typing import Any, Dict, List, Optional

from twentyone.adapters.cli import CLIAdapter
from twentyone.blackjack.constants import DEFAULT_CONFIG
from twentyone.common.errors import SupplyUnavailable
from twentyone.common.io_interface import ConsoleIOInterface, LoggingIOInterface
from twentyone.engine.blackjack import BlackjackEngine
from twentyone.supply.base import CardSupply
from twentyone.supply.local import LocalCardSupply
from twentyone.supply.remote import DEFAULT_BASE_URL, RemoteCardSupply
from twentyone.table import BlackjackTable

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play single-player blackjack")
    parser.add_argument(
        "-b",
        "--balance",
        type=int,
        default=DEFAULT_CONFIG["starting_balance"],
        help="Starting balance",
    )
    parser.add_argument(
        "-d",
        "--decks",
        type=int,
        default=DEFAULT_CONFIG["deck_count"],
        help="Number of decks in the shoe",
    )
    parser.add_argument(
        "-r", "--rounds", type=int, help="Number of rounds to play (default: unlimited)"
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        help="Draw cards from the deck web service instead of a local shoe",
    )
    parser.add_argument(
        "--base-url", default=DEFAULT_BASE_URL, help="Root URL of the deck web service"
    )
    parser.add_argument("--seed", type=int, help="Seed for the local shoe")
    parser.add_argument("--log-file", help="Append a transcript of the session here")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def build_config(args: argparse.Namespace) -> Dict[str, Any]:
    config = dict(DEFAULT_CONFIG)
    config["starting_balance"] = args.balance
    config["deck_count"] = args.decks
    return config


def build_supply(args: argparse.Namespace) -> CardSupply:
    if args.remote:
        return RemoteCardSupply(base_url=args.base_url.rstrip("/"))
    return LocalCardSupply(rng=random.Random(args.seed))


async def play(args: argparse.Namespace) -> int:
    """
    Play at the table until the player leaves.

    Returns:
        Process exit code
    """
    supply = build_supply(args)
    engine = BlackjackEngine(supply, build_config(args))

    io_interface = ConsoleIOInterface()
    if args.log_file:
        io_interface = LoggingIOInterface(args.log_file, io_interface)
    table = BlackjackTable(engine, CLIAdapter(io_interface))

    try:
        await table.run(args.rounds)
    except SupplyUnavailable as e:
        logger.error("Card supply unavailable: %s", e)
        print(f"\nThe card supply is unavailable: {e}")
        return 1
    except ValueError as e:
        # Raised by the console prompts after repeated invalid answers
        print(f"\n{e} Leaving the table.")
        return 1
    finally:
        if isinstance(supply, RemoteCardSupply):
            supply.close()

    print(f"\nThanks for playing. Final balance: {engine.balance}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return asyncio.run(play(args))
    except KeyboardInterrupt:
        print("\nGame interrupted. Exiting...")
        return 130


if __name__ == "__main__":
    sys.exit(main())
