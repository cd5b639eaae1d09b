#!/usr/bin/env python3

import sys
from decimal import Decimal
from logger import get_logger

logger = get_logger(__name__)


def cmd_classify(args, services):
    """Classify a single description for a user."""
    result = services.categorizer.classify(
        args.description, Decimal(args.amount), args.user
    )

    category_name = "none"
    if result.category_id is not None:
        category = services.categories.find(result.category_id)
        category_name = category.name if category else str(result.category_id)

    logger.info(f"Category:     {category_name}")
    logger.info(f"Confidence:   {result.confidence:.2f}")
    logger.info(f"Reason:       {result.reason}")
    logger.info(f"Needs review: {'yes' if result.needs_review else 'no'}")


def cmd_feedback(args, services):
    """Teach the categorizer that a description belongs to a category."""
    category = services.categories.find_by_name(args.category)
    if not category:
        logger.error(f"Category '{args.category}' not found.")
        sys.exit(1)

    pattern = services.categorizer.record_feedback(
        args.description, category.id, args.user
    )
    if pattern is None:
        logger.warning("Description has no merchant token; nothing learned.")
        return

    logger.info(
        f"✓ '{pattern.pattern}' -> {category.name} "
        f"(confidence {pattern.confidence:.2f}, {pattern.match_count} times)"
    )


def cmd_patterns(args, services):
    """List a user's learned patterns."""
    patterns = services.learned_patterns.find_by_user(args.user)

    if not patterns:
        logger.info(f"No learned patterns for user '{args.user}'.")
        return

    names = {c.id: c.name for c in services.categories.find_all()}
    for pattern in patterns:
        logger.info(
            f"{pattern.confidence:.2f}  x{pattern.match_count:<3} "
            f"{pattern.pattern} -> {names.get(pattern.category_id, 'Unknown')}"
            f"  (last used {pattern.last_used:%Y-%m-%d})"
        )


def cmd_review(args, services):
    """List transactions waiting for a manual category."""
    transactions = services.categorizer.transactions_needing_review(
        args.user, limit=args.limit
    )

    if not transactions:
        logger.info("No transactions need review.")
        return

    for txn in transactions:
        logger.info(
            f"{txn.transaction_date}  {txn.amount:>10}  {txn.description}  "
            f"[{txn.id[:8]}]"
        )
    logger.info(f"\nTotal: {len(transactions)}")


def setup_parser(subparsers):
    """Setup classification-related commands.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    classify_parser = subparsers.add_parser(
        "classify", help="Classify a transaction description"
    )
    classify_parser.add_argument("description", help="Raw transaction description")
    classify_parser.add_argument("--user", required=True, help="User ID")
    classify_parser.add_argument(
        "--amount", default="0", help="Transaction amount (default: 0)"
    )
    classify_parser.set_defaults(func=cmd_classify)

    feedback_parser = subparsers.add_parser(
        "feedback", help="Teach the categorizer a category for a description"
    )
    feedback_parser.add_argument("description", help="Raw transaction description")
    feedback_parser.add_argument("--category", required=True, help="Category name")
    feedback_parser.add_argument("--user", required=True, help="User ID")
    feedback_parser.set_defaults(func=cmd_feedback)

    patterns_parser = subparsers.add_parser(
        "patterns", help="List a user's learned patterns"
    )
    patterns_parser.add_argument("--user", required=True, help="User ID")
    patterns_parser.set_defaults(func=cmd_patterns)

    review_parser = subparsers.add_parser(
        "review", help="List transactions needing review"
    )
    review_parser.add_argument("--user", required=True, help="User ID")
    review_parser.add_argument(
        "--limit", type=int, default=50, help="Maximum transactions (default: 50)"
    )
    review_parser.set_defaults(func=cmd_review)
