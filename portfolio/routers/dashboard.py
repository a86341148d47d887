from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.access import OwnerIdentity, require_owner
from portfolio.core.envelope import api_response
from portfolio.db.engine import get_session
from portfolio.services.crud_service import certificate_service, education_service, project_service

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard/stats")
async def get_dashboard_stats(
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    stats = {
        "projects": await project_service.count(session),
        "education": await education_service.count(session),
        "certificates": await certificate_service.count(session),
    }
    return api_response(True, stats)
