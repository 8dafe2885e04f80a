"""
Request dependencies - storage, pipeline and services from application state
"""

from fastapi import Request

from bizassist.agents.pipeline import ChatPipeline
from bizassist.services import AnalyticsService, InventoryService, OrderService
from bizassist.storage.base import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_pipeline(request: Request) -> ChatPipeline:
    return request.app.state.pipeline


def get_inventory_service(request: Request) -> InventoryService:
    return InventoryService(get_storage(request))


def get_order_service(request: Request) -> OrderService:
    return OrderService(get_storage(request))


def get_analytics_service(request: Request) -> AnalyticsService:
    return AnalyticsService(get_storage(request))
