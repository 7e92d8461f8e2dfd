#!/usr/bin/env python3

import sys
from errors import DuplicateNameError, ValidationError
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all categories."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"Name: {category.name}")
        logger.info(f"ID: {category.id}")
        logger.info(f"Items: {services.categories.count_items(category)}")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category."""
    try:
        category = services.categories.create(args.name)
    except DuplicateNameError:
        logger.error(
            f"Category '{args.name}' already exists. Please use a different name."
        )
        sys.exit(1)
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Category '{category.name}' created (ID: {category.id})")


def cmd_delete(args, services):
    """Delete a category and every item in it."""
    category = services.categories.find_by_name(args.name)
    if not category:
        logger.error(f"Category '{args.name}' not found.")
        sys.exit(1)

    item_count = services.categories.count_items(category)
    logger.info("\nCategory to delete:")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Items that will also be deleted: {item_count}")

    if not args.yes:
        confirm = (
            input("\nAre you sure you want to delete this category? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    deleted = services.categories.delete(category)
    logger.info(f"✓ Category '{category.name}' deleted along with {deleted} item(s).")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, and delete item categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    create_parser.add_argument("name", help="Category name")
    create_parser.set_defaults(func=cmd_create)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category and all of its items"
    )
    delete_parser.add_argument("name", help="Name of the category to delete")
    delete_parser.add_argument(
        "--yes", action="store_true", help="Do not ask for confirmation"
    )
    delete_parser.set_defaults(func=cmd_delete)
