from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.access import OwnerIdentity, parse_limit, require_owner
from portfolio.core.envelope import api_response
from portfolio.db.engine import get_session
from portfolio.models.content import Education, EducationCreate, EducationUpdate
from portfolio.services.crud_service import education_service

router = APIRouter(tags=["education"])


@router.get("/education")
async def list_education(
    limit: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    rows = await education_service.list(
        session,
        order_by=(Education.start_date.desc(), Education.id.desc()),
        limit=parse_limit(limit),
    )
    return api_response(True, rows)


@router.post("/education", status_code=status.HTTP_201_CREATED)
async def create_education(
    payload: EducationCreate,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    row = await education_service.create(session, payload)
    return api_response(True, row, message="Education created successfully")


@router.get("/education/{education_id}")
async def get_education(education_id: int, session: AsyncSession = Depends(get_session)):
    return api_response(True, await education_service.get(session, education_id))


@router.put("/education/{education_id}")
async def update_education(
    education_id: int,
    payload: EducationUpdate,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    row = await education_service.update(session, education_id, payload)
    return api_response(True, row, message="Education updated successfully")


@router.delete("/education/{education_id}")
async def delete_education(
    education_id: int,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    await education_service.delete(session, education_id)
    return api_response(True, None, message="Education deleted successfully")
