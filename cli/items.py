#!/usr/bin/env python3

import sys
from datetime import date
from dateutil import parser as date_parser

from errors import ValidationError
from services.items import ItemDraft
from tools.overview import Overview
from logger import get_logger

logger = get_logger()


def parse_date(text):
    """Parse a purchase date typed on the command line.

    Args:
        text: Date in any format dateutil understands, or None for today.

    Returns:
        date: The parsed calendar date.
    """
    if not text:
        return date.today()
    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError):
        logger.error(f"Could not understand date '{text}'.")
        sys.exit(1)


def find_category_or_exit(services, name):
    category = services.categories.find_by_name(name)
    if not category:
        logger.error(f"Category '{name}' not found.")
        logger.info("Use 'python -m cli categories list' to see available categories.")
        sys.exit(1)
    return category


def find_item_or_exit(services, item_id):
    item = services.items.find(item_id)
    if not item:
        logger.error(f"Item with ID {item_id} not found.")
        sys.exit(1)
    return item


def print_item(services, item, today):
    category = services.store.category_of(item)
    logger.info(f"{item.name}  ¥{item.price:.2f}")
    logger.info(f"  ID: {item.id}")
    logger.info(
        f"  Purchased: {item.purchase_date.isoformat()}"
        f"  ¥{item.daily_average_cost(today):.2f}/day"
    )
    if category:
        logger.info(f"  Category: {category.name}")


def cmd_list(args, services):
    """List items with total value and total daily cost."""
    overview = Overview(services.store)
    if args.category:
        overview.select(find_category_or_exit(services, args.category))

    if overview.selected_category is None:
        heading = "My total assets"
    else:
        heading = f"My {overview.title}"
    logger.info(f"\n{heading}: ¥{overview.total_value:.2f}")
    logger.info(f"Daily cost: ¥{overview.total_daily_cost:.2f}")
    logger.info("=" * 80)

    if not overview.items:
        logger.info("No items found.")
        return

    today = date.today()
    for item in overview.items:
        print_item(services, item, today)
        logger.info("-" * 80)

    logger.info(f"\nTotal items: {len(overview.items)}")


def cmd_add(args, services):
    """Add a new item."""
    draft = ItemDraft(
        name=args.name, price=args.price, purchase_date=parse_date(args.date)
    )
    if args.category:
        draft.category = find_category_or_exit(services, args.category)

    try:
        item = draft.save(services.items)
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Item '{item.name}' saved (ID: {item.id})")


def cmd_edit(args, services):
    """Edit an existing item; omitted fields keep their current value."""
    item = find_item_or_exit(services, args.item_id)
    draft = ItemDraft.for_item(item, services.store)

    if args.name is not None:
        draft.name = args.name
    if args.price is not None:
        draft.price = args.price
    if args.date is not None:
        draft.purchase_date = parse_date(args.date)
    if args.no_category:
        draft.category = None
    elif args.category is not None:
        draft.category = find_category_or_exit(services, args.category)

    try:
        draft.save(services.items)
    except ValidationError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Item '{item.name}' updated")


def cmd_delete(args, services):
    """Delete one or more items by ID."""
    items = [find_item_or_exit(services, item_id) for item_id in args.item_ids]
    count = services.items.delete(items)
    logger.info(f"✓ Deleted {count} item(s)")


def setup_parser(subparsers):
    """Setup items subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "items",
        help="Manage items",
        description="List, add, edit and delete belongings",
    )

    items_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available item commands",
        dest="subcommand",
        required=True,
    )

    # items list
    list_parser = items_subparsers.add_parser("list", help="List items with totals")
    list_parser.add_argument("--category", help="Only show items in this category")
    list_parser.set_defaults(func=cmd_list)

    # items add
    add_parser = items_subparsers.add_parser("add", help="Add a new item")
    add_parser.add_argument("--name", required=True, help="Item name")
    add_parser.add_argument(
        "--price", required=True, help="Purchase price, e.g. 199.99"
    )
    add_parser.add_argument("--date", help="Purchase date (default: today)")
    add_parser.add_argument("--category", help="Category name")
    add_parser.set_defaults(func=cmd_add)

    # items edit
    edit_parser = items_subparsers.add_parser("edit", help="Edit an item")
    edit_parser.add_argument("item_id", help="ID of the item to edit")
    edit_parser.add_argument("--name", help="New name")
    edit_parser.add_argument("--price", help="New price")
    edit_parser.add_argument("--date", help="New purchase date")
    category_group = edit_parser.add_mutually_exclusive_group()
    category_group.add_argument("--category", help="Move to this category")
    category_group.add_argument(
        "--no-category", action="store_true", help="Remove the item from its category"
    )
    edit_parser.set_defaults(func=cmd_edit)

    # items delete
    delete_parser = items_subparsers.add_parser("delete", help="Delete items by ID")
    delete_parser.add_argument("item_ids", nargs="+", help="IDs of the items to delete")
    delete_parser.set_defaults(func=cmd_delete)
