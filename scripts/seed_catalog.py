"""
Seed the configured storage with the retail catalog and demo orders.

Products are inserted only when their SKU is not present yet, so the script
can be re-run safely. Demo orders go through the order service and draw
down stock like real orders.

Usage:
    STORAGE_BACKEND=sql python scripts/seed_catalog.py --orders 20 --seed 42
"""

import argparse

from loguru import logger

from bizassist.services.mock_data import generate_orders
from bizassist.services.order_service import OrderService
from bizassist.storage import CATALOG_PRODUCTS, create_storage
from bizassist.utils.logger import setup_logger


def main():
    parser = argparse.ArgumentParser(description="Seed products and demo orders")
    parser.add_argument("--orders", type=int, default=10, help="Number of demo orders to generate (0 to skip)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible demo orders")
    args = parser.parse_args()

    setup_logger()
    storage = create_storage()

    added = storage.seed(CATALOG_PRODUCTS, [])
    logger.info(f"Catalog: {added} new products, {len(CATALOG_PRODUCTS) - added} already present")

    if args.orders > 0:
        existing = [o.order_number for o in storage.get_orders()]
        orders = generate_orders(storage.get_products(), count=args.orders, seed=args.seed, existing_numbers=existing)
        service = OrderService(storage)
        for order in orders:
            service.create_order(order)
        logger.success(f"✅ Created {len(orders)} demo orders")


if __name__ == "__main__":
    main()
