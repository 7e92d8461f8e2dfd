#!/usr/bin/env python3
"""
MyStuff CLI - Track what your belongings cost you per day.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    items        List, add, edit and delete items
    categories   Manage categories
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories create Electronics
    python -m cli items add --name Laptop --price 8999 --date 2024-03-01 --category Electronics
    python -m cli items list --category Electronics
"""

import sys
import argparse
from cli import items, categories, migrate
from config import load_config
from errors import StorageError
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="MyStuff - Personal belongings tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    items.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            logger = setup_logging(config)

            if args.command == "migrate":
                # Migrate commands need db_manager for raw database operations
                args.func(args, DatabaseManager(config))
                return

            try:
                services = Services(config)
            except StorageError as e:
                logger.critical(f"Cannot open the item store: {e}")
                logger.critical(
                    "Run 'python -m cli migrate apply' to create the database."
                )
                sys.exit(1)

            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
