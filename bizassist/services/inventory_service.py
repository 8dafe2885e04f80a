"""
Inventory service - product management on top of the storage interface
"""

from typing import List, Optional

from loguru import logger

from bizassist.models.catalog import (
    InventorySummary,
    Product,
    ProductCreate,
    ProductStatus,
    ProductUpdate,
)
from bizassist.storage.base import Storage


class InventoryService:
    """Product CRUD, stock adjustments and summaries"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def get_all_products(self) -> List[Product]:
        return self.storage.get_products()

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.storage.get_product(product_id)

    def search_products(self, query: str) -> List[Product]:
        return self.storage.search_products(query)

    def add_product(self, product: ProductCreate) -> Product:
        created = self.storage.create_product(product)
        logger.info(f"Added product {created.sku} (id={created.id})")
        return created

    def update_product(self, product_id: int, update: ProductUpdate) -> Optional[Product]:
        fields = update.model_dump(exclude_unset=True)
        if not fields:
            return self.storage.get_product(product_id)
        return self.storage.update_product(product_id, **fields)

    def delete_product(self, product_id: int) -> bool:
        return self.storage.delete_product(product_id)

    def update_stock(self, product_id: int, delta: int) -> Optional[Product]:
        """
        Adjust stock by delta and recompute the status against the reorder point.

        Stock never goes below zero.
        """
        product = self.storage.adjust_stock(product_id, delta)
        if product is None:
            logger.warning(f"Stock update for unknown product id {product_id}")
        return product

    def get_low_stock_products(self) -> List[Product]:
        """Products that need reordering (low or out of stock)."""
        return [
            p for p in self.storage.get_products()
            if p.status in (ProductStatus.LOW_STOCK, ProductStatus.OUT_OF_STOCK)
        ]

    def get_inventory_summary(self) -> InventorySummary:
        products = self.storage.get_products()
        total_stock = sum(p.quantity for p in products)
        return InventorySummary(
            total_products=len(products),
            in_stock=sum(1 for p in products if p.status == ProductStatus.IN_STOCK),
            low_stock=sum(1 for p in products if p.status == ProductStatus.LOW_STOCK),
            out_of_stock=sum(1 for p in products if p.status == ProductStatus.OUT_OF_STOCK),
            average_stock=total_stock / len(products) if products else 0.0,
        )
