"""
Inventory and order endpoint request models
"""

from pydantic import Field

from bizassist.models.catalog import CamelModel, OrderStatus


class StockAdjustment(CamelModel):
    """Relative stock change; negative values draw stock down"""
    delta: int


class OrderStatusUpdate(CamelModel):
    status: OrderStatus = Field(..., description="New order status")
