"""
Catalog and order models shared by every storage backend.
"""

import enum
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProductStatus(str, enum.Enum):
    """Stock status of a product."""
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


class OrderStatus(str, enum.Enum):
    """Order lifecycle status."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductCreate(CamelModel):
    """Fields accepted when adding a product"""
    name: str = Field(..., min_length=1)
    sku: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(default=0, ge=0)
    status: ProductStatus = ProductStatus.IN_STOCK
    category: Optional[str] = None
    reorder_point: int = Field(default=5, ge=0)
    next_restock: Optional[datetime] = None
    image_url: Optional[str] = None


def stock_status(quantity: int, reorder_point: int) -> ProductStatus:
    """Status implied by a stock level."""
    if quantity <= 0:
        return ProductStatus.OUT_OF_STOCK
    if quantity <= reorder_point:
        return ProductStatus.LOW_STOCK
    return ProductStatus.IN_STOCK


class ProductUpdate(CamelModel):
    """Partial product update; unset fields are left alone"""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=0)
    status: Optional[ProductStatus] = None
    category: Optional[str] = None
    reorder_point: Optional[int] = Field(default=None, ge=0)
    next_restock: Optional[datetime] = None
    image_url: Optional[str] = None


class Product(ProductCreate):
    id: int
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class OrderItem(CamelModel):
    product_id: int
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0)


class OrderCreate(CamelModel):
    """Fields accepted when placing an order"""
    order_number: str = Field(..., min_length=1)
    status: OrderStatus = OrderStatus.PENDING
    total: Decimal = Field(..., ge=0)
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    items: List[OrderItem] = Field(default_factory=list)


class Order(CamelModel):
    id: int
    order_number: str
    # Plain string: rows written by other tools may carry statuses outside OrderStatus
    status: str = OrderStatus.PENDING.value
    total: Decimal
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    items: List[OrderItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class InventorySummary(CamelModel):
    total_products: int
    in_stock: int
    low_stock: int
    out_of_stock: int
    average_stock: float


class OrderSummary(CamelModel):
    total_orders: int
    pending_orders: int
    processing_orders: int
    completed_orders: int
    shipped_orders: int
    cancelled_orders: int
    total_value: Decimal
    average_value: Decimal


class DailyOrders(CamelModel):
    count: int
    total_value: Decimal
    average_value: Decimal
