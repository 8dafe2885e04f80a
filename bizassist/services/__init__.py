"""
Services - inventory, orders, analytics and demo data
"""

from bizassist.models.catalog import stock_status
from bizassist.services.analytics_service import AnalyticsService, AnalyticsSnapshot
from bizassist.services.inventory_service import InventoryService
from bizassist.services.order_service import OrderService

__all__ = [
    "AnalyticsService",
    "AnalyticsSnapshot",
    "InventoryService",
    "OrderService",
    "stock_status",
]
