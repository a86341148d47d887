import logging

from fastapi import APIRouter, Depends, Query, Request

from portfolio.core.access import OwnerIdentity, read_json_body, require_owner
from portfolio.core.envelope import api_response
from portfolio.services.analytics_service import analytics_service
from portfolio.services.visit_service import resolve_client_ip, resolve_page_path, visit_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analytics"])


@router.post("/analytics/track")
async def track_visit(request: Request):
    # Tracking must never fail the visitor's page load: every error still answers success.
    try:
        body = await read_json_body(request)
        visit = await visit_service.record(
            path=resolve_page_path(body),
            client_ip=resolve_client_ip(request.headers),
            user_agent=request.headers.get("user-agent"),
            referrer=request.headers.get("referer"),
        )
        return api_response(True, visit.model_dump(), message="Visit tracked successfully")
    except Exception as e:
        logger.error(f"Analytics tracking error: {e}")
        return api_response(True, None, message="Visit tracked")


@router.get("/analytics")
async def get_analytics(
    period: str | None = Query(default=None, description="daily, weekly or monthly"),
    days: str | None = Query(default=None, description="Lookback window in days"),
    owner: OwnerIdentity = Depends(require_owner),
):
    report = await analytics_service.get_report(period=period, days=days)
    return api_response(True, report)
