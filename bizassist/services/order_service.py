"""
Order service - order placement, status changes and order statistics
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Sequence

from loguru import logger

from bizassist.models.catalog import DailyOrders, Order, OrderCreate, OrderStatus, OrderSummary
from bizassist.services.inventory_service import InventoryService
from bizassist.storage.base import Storage

CENTS = Decimal("0.01")


def _average(total: Decimal, count: int) -> Decimal:
    if count == 0:
        return Decimal("0.00")
    return (total / count).quantize(CENTS)


class OrderService:
    """Order operations; placing an order draws down inventory"""

    def __init__(self, storage: Storage, inventory: Optional[InventoryService] = None):
        self.storage = storage
        self.inventory = inventory or InventoryService(storage)

    def get_all_orders(self) -> List[Order]:
        return self.storage.get_orders()

    def get_recent_orders(self, limit: int = 5) -> List[Order]:
        return self.storage.get_recent_orders(limit)

    def get_order(self, order_id: int) -> Optional[Order]:
        return self.storage.get_order(order_id)

    def get_order_by_number(self, order_number: str) -> Optional[Order]:
        return self.storage.get_order_by_number(order_number)

    def create_order(self, order: OrderCreate) -> Order:
        created = self.storage.create_order(order)
        for item in created.items:
            self.inventory.update_stock(item.product_id, -item.quantity)
        logger.info(f"Created order #{created.order_number} with {len(created.items)} items")
        return created

    def update_order_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        return self.storage.update_order(order_id, status=status.value)

    def get_orders_summary(self) -> OrderSummary:
        orders = self.storage.get_orders()
        total = sum((o.total for o in orders), Decimal("0"))

        def count(status: OrderStatus) -> int:
            return sum(1 for o in orders if o.status == status.value)

        return OrderSummary(
            total_orders=len(orders),
            pending_orders=count(OrderStatus.PENDING),
            processing_orders=count(OrderStatus.PROCESSING),
            completed_orders=count(OrderStatus.COMPLETED),
            shipped_orders=count(OrderStatus.SHIPPED),
            cancelled_orders=count(OrderStatus.CANCELLED),
            total_value=total,
            average_value=_average(total, len(orders)),
        )

    def get_todays_orders(self, now: Optional[datetime] = None) -> DailyOrders:
        """Orders created on the current UTC calendar day."""
        today = (now or datetime.now(timezone.utc)).astimezone(timezone.utc).date()
        todays: Sequence[Order] = [
            o for o in self.storage.get_orders()
            if o.created_at.astimezone(timezone.utc).date() == today
        ]
        total = sum((o.total for o in todays), Decimal("0"))
        return DailyOrders(count=len(todays), total_value=total, average_value=_average(total, len(todays)))
