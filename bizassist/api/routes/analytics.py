"""
Analytics endpoint
"""

from fastapi import APIRouter, Depends

from bizassist.api.deps import get_analytics_service
from bizassist.services.analytics_service import AnalyticsService, AnalyticsSnapshot

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsSnapshot)
def analytics(service: AnalyticsService = Depends(get_analytics_service)):
    """Intent counts over stored user messages and conversation totals"""
    return service.get_snapshot()
