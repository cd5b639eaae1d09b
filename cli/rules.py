#!/usr/bin/env python3

import sys
from pathlib import Path
from categorization.rules import find_invalid_rules
from categorization.seeding import load_rule_table
from logger import get_logger

logger = get_logger(__name__)


def cmd_list(args, services):
    """List all categorization rules."""
    rules = services.rules.find_all()

    if not rules:
        logger.info("No rules found. Use 'python -m cli rules seed' to add defaults.")
        return

    names = {c.id: c.name for c in services.categories.find_all()}

    logger.info("\nRules:")
    logger.info("=" * 80)
    for rule in rules:
        status = "" if rule.is_active else "  [inactive]"
        logger.info(
            f"{rule.id:>4}  p{rule.priority:<3} {rule.confidence:.2f}  "
            f"{rule.name} -> {names.get(rule.category_id, 'Unknown')}{status}"
        )
        logger.info(f"      /{rule.pattern}/")

    logger.info(f"\nTotal rules: {len(rules)}")


def cmd_seed(args, services):
    """Seed the default rule table."""
    rule_table = load_rule_table(Path(args.file) if args.file else None)
    report = services.categorizer.seed_default_rules(rule_table)

    logger.info(f"Created: {len(report.created)}")
    logger.info(f"Already present: {len(report.skipped)}")
    if report.missing_category:
        logger.warning(
            f"Skipped (category not found): {', '.join(report.missing_category)}"
        )


def cmd_check(args, services):
    """Report rules whose pattern is not a valid regular expression."""
    invalid = find_invalid_rules(services.rules.find_all())

    if not invalid:
        logger.info("All rule patterns are valid.")
        return

    for rule, error in invalid:
        logger.error(f"Rule '{rule.name}' (ID: {rule.id}): {rule.pattern!r}: {error}")
    sys.exit(1)


def setup_parser(subparsers):
    """Setup rules subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "rules",
        help="Manage categorization rules",
        description="List, seed, and validate categorization rules",
    )

    rules_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available rule commands",
        dest="subcommand",
        required=True,
    )

    list_parser = rules_subparsers.add_parser("list", help="List all rules")
    list_parser.set_defaults(func=cmd_list)

    seed_parser = rules_subparsers.add_parser(
        "seed", help="Create missing rules from the default rule table"
    )
    seed_parser.add_argument(
        "--file",
        help="YAML rule table to seed instead of db/seed/default_rules.yaml",
    )
    seed_parser.set_defaults(func=cmd_seed)

    check_parser = rules_subparsers.add_parser(
        "check", help="Report rules with invalid patterns"
    )
    check_parser.set_defaults(func=cmd_check)
