#!/usr/bin/env python3
"""
SKVS Entry Point

Opens (or creates) a store at the given snapshot path, optionally runs a
single command against it, and flushes it back to disk.

Usage:
    python -m skvs.server                         # Print startup info
    python -m skvs.server -f data.json insert k v # Insert a key
    python -m skvs.server -f data.json update k v # Insert or update a key
    python -m skvs.server -f data.json get k      # Print value and metadata
    python -m skvs.server -f data.json delete k   # Delete a key
    python -m skvs.server -f data.json stats      # Print store metrics
    python -m skvs.server -a 0.0.0.0:9000         # Custom listen address
    python -m skvs.server --debug                 # Enable debug logging

The listen address is reported but no listener is started.

Environment Variables:
    SKVS_ADDRESS     - Listen address
    SKVS_STORE_PATH  - Snapshot file path
    SKVS_DEBUG       - Enable debug mode (true/false)
    SKVS_LOG_LEVEL   - Log level when not in debug mode
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config.settings import settings
from .store import Store, StoreError, WriteResult
from .store.entry import timestamp

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="skvs",
        description="SKVS: Simple Key-Value Store",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "-a", "--address",
        type=str,
        default=settings.ADDRESS,
        help="Address server should listen on",
    )

    parser.add_argument(
        "-f", "--file",
        type=str,
        default=settings.STORE_PATH,
        help="Path to disk store (empty to disable persistence)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    insert = commands.add_parser("insert", help="Insert a new key")
    insert.add_argument("key")
    insert.add_argument("value")

    update = commands.add_parser("update", help="Insert or update a key")
    update.add_argument("key")
    update.add_argument("value")

    get = commands.add_parser("get", help="Print a key's value and metadata")
    get.add_argument("key")

    delete = commands.add_parser("delete", help="Delete a key")
    delete.add_argument("key")

    commands.add_parser("stats", help="Print store metrics")

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


def run_command(store: Store, args: argparse.Namespace) -> int:
    """
    Run one command against the store and print its outcome.

    Returns:
        Process exit status
    """
    if args.command == "insert":
        result = store.insert(args.key, args.value)
    elif args.command == "update":
        result = store.update(args.key, args.value)
    elif args.command == "delete":
        result = store.delete(args.key)
    elif args.command == "get":
        entry = store.get(args.key)
        if entry is None:
            print(WriteResult.DOES_NOT_EXIST)
            return 1
        print(entry.value)
        print(f"  version: {entry.version}")
        print(f"  timestamp: {entry.timestamp}")
        return 0
    elif args.command == "stats":
        for name, value in store.stats().items():
            print(f"{name}: {value}")
        return 0
    else:
        print(f"started at {timestamp()}")
        print(f"listening on {args.address}")
        return 0

    print(result)
    if not result.changed:
        return 1

    store.flush()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    logger.debug(f"Store file: {args.file!r}, address: {args.address}")

    try:
        store = Store.open(args.file)
        return run_command(store, args)
    except StoreError as e:
        logger.error(f"Store error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
