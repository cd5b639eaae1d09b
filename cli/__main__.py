#!/usr/bin/env python3
"""
autocat CLI - command-line interface for transaction auto-categorization.

Usage:
    python -m cli <command> [subcommand] [options]

Commands:
    categories   Manage categories
    rules        Manage categorization rules
    classify     Classify a transaction description
    feedback     Teach the categorizer a category for a description
    patterns     List a user's learned patterns
    review       List transactions needing review
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli categories seed
    python -m cli rules seed
    python -m cli classify "STARBUCKS STORE #123 PURCHASE" --user alice
    python -m cli feedback "COSTCO WHOLESALE #445" --category Groceries --user alice
"""

import sys
import argparse
from cli import categories, rules, transactions, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="autocat - Transaction auto-categorization",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    categories.setup_parser(subparsers)
    rules.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Migrate commands need db_manager for raw database operations
            if args.command == "migrate":
                args.func(args, DatabaseManager(config))
            else:
                args.func(args, Services(config))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
