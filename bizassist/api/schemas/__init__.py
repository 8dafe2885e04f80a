"""
API schemas for request/response models
"""

from bizassist.api.schemas.catalog import OrderStatusUpdate, StockAdjustment
from bizassist.api.schemas.chat import ChatRequest, ChatResponse, ErrorResponse, HealthResponse

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "OrderStatusUpdate",
    "StockAdjustment",
]
