#!/usr/bin/env python3

import sys
from categorization.seeding import seed_categories
from services.categories import CategoryInUseError
from logger import get_logger

logger = get_logger(__name__)


def cmd_list(args, services):
    """List all categories in the database."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found.")
        return

    names = {c.id: c.name for c in categories}

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        line = f"{category.id:>4}  {category.icon or ' '} {category.name}"
        if category.parent_id:
            line += f"  (in {names.get(category.parent_id, 'Unknown')})"
        if category.is_system:
            line += "  [system]"
        logger.info(line)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_delete(args, services):
    """Delete a category by ID."""
    category = services.categories.find(args.category_id)
    if not category:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    confirm = (
        input(f"\nDelete category '{category.name}'? (yes/no): ").strip().lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    try:
        services.categories.delete(category.id)
        logger.info(f"✓ Category '{category.name}' deleted successfully.")
    except (ValueError, CategoryInUseError) as e:
        logger.error(f"Cannot delete category: {e}")
        sys.exit(1)


def cmd_seed(args, services):
    """Seed the default categories from db/seed/categories.json."""
    logger.info("\nSeeding categories from db/seed/categories.json")
    logger.info("=" * 80)

    report = seed_categories(services)

    logger.info("=" * 80)
    logger.info(f"Created: {len(report.created)}")
    logger.info(f"Skipped: {len(report.skipped)}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="List, seed, and delete transaction categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete an unused category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.set_defaults(func=cmd_delete)

    seed_parser = categories_subparsers.add_parser(
        "seed", help="Seed default categories from JSON file"
    )
    seed_parser.set_defaults(func=cmd_seed)
