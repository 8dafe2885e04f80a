"""
Order endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from bizassist.api.deps import get_order_service
from bizassist.api.schemas.catalog import OrderStatusUpdate
from bizassist.models.catalog import DailyOrders, Order, OrderCreate, OrderSummary
from bizassist.services.order_service import OrderService
from bizassist.utils.errors import ConflictError

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=List[Order])
def list_orders(orders: OrderService = Depends(get_order_service)):
    return orders.get_all_orders()


@router.get("/recent", response_model=List[Order])
def recent_orders(
    limit: int = Query(default=5, ge=1, le=100),
    orders: OrderService = Depends(get_order_service),
):
    return orders.get_recent_orders(limit)


@router.get("/summary", response_model=OrderSummary)
def orders_summary(orders: OrderService = Depends(get_order_service)):
    return orders.get_orders_summary()


@router.get("/today", response_model=DailyOrders)
def todays_orders(orders: OrderService = Depends(get_order_service)):
    return orders.get_todays_orders()


@router.get("/{order_id}", response_model=Order)
def get_order(order_id: int, orders: OrderService = Depends(get_order_service)):
    order = orders.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.post("", response_model=Order, status_code=201)
def create_order(order: OrderCreate, orders: OrderService = Depends(get_order_service)):
    try:
        return orders.create_order(order)
    except ConflictError:
        raise HTTPException(status_code=409, detail=f"Order #{order.order_number} already exists")


@router.put("/{order_id}/status", response_model=Order)
def update_order_status(
    order_id: int,
    update: OrderStatusUpdate,
    orders: OrderService = Depends(get_order_service),
):
    order = orders.update_order_status(order_id, update.status)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
