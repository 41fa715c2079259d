"""
Run one merchant command from the terminal.

Loads the snapshot, interprets the command and applies the update, the same
way the admin page does.

Usage:
    python scripts/run_command.py "Rename the snowboard to Extreme Winter Glider"
    python scripts/run_command.py --dry-run "Improve the SEO description of the snowboard"
    python scripts/run_command.py --list
"""

import sys
import argparse
from pathlib import Path

# Add backend to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from integrations.shopify import ShopifyAdminClient, get_shopify_session
from services.catalog_service import CatalogService
from services.command_interpreter_service import get_command_interpreter_service
from services.command_service import CommandService
from exceptions import AppError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Update a product with a natural-language command")
    parser.add_argument("command", nargs="?", help="Instruction, e.g. \"rename the snowboard to X\"")
    parser.add_argument("--dry-run", action="store_true", help="Show the planned update without applying it")
    parser.add_argument("--list", action="store_true", help="List the catalog snapshot and exit")
    args = parser.parse_args(argv)

    if not args.list and not args.command:
        parser.error("command is required unless --list is given")

    try:
        catalog = CatalogService(ShopifyAdminClient(get_shopify_session()))
        products = catalog.list_products()

        if args.list:
            print(f"Loaded {len(products)} products:\n")
            for product in products:
                print(f"  - {product.title}: {product.id}")
            return 0

        service = CommandService(get_command_interpreter_service(), catalog)

        if args.dry_run:
            plan = service.plan(args.command, products)
            print("Planned update (not applied):")
            print(f"  Product:     {plan.product_title} ({plan.product_id})")
            print(f"  New title:   {plan.new_title}")
            print(f"  Description: {plan.new_description}")
            return 0

        updated = service.execute(args.command, products)
        print(f"[OK] Product updated: {updated.title}")
        print(f"     New SEO Description: {updated.description_html}")
        return 0

    except AppError as e:
        print(f"[ERROR] {e.code}: {e.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
