"""
Models - chat types, catalog types and ORM records
"""

from bizassist.models.chat import (
    Conversation,
    Entity,
    EntityType,
    EntityValue,
    Intent,
    IntentName,
    Message,
)
from bizassist.models.catalog import (
    DailyOrders,
    InventorySummary,
    Order,
    OrderCreate,
    OrderItem,
    OrderStatus,
    OrderSummary,
    Product,
    ProductCreate,
    ProductStatus,
    ProductUpdate,
)

__all__ = [
    "Conversation",
    "Entity",
    "EntityType",
    "EntityValue",
    "Intent",
    "IntentName",
    "Message",
    "DailyOrders",
    "InventorySummary",
    "Order",
    "OrderCreate",
    "OrderItem",
    "OrderStatus",
    "OrderSummary",
    "Product",
    "ProductCreate",
    "ProductStatus",
    "ProductUpdate",
]
