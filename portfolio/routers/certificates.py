from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.access import OwnerIdentity, parse_limit, require_owner
from portfolio.core.envelope import api_response
from portfolio.db.engine import get_session
from portfolio.models.content import Certificate, CertificateCreate, CertificateUpdate
from portfolio.services.crud_service import certificate_service

router = APIRouter(tags=["certificates"])


@router.get("/certificates")
async def list_certificates(
    limit: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    rows = await certificate_service.list(
        session,
        order_by=(Certificate.issue_date.desc(), Certificate.id.desc()),
        limit=parse_limit(limit),
    )
    return api_response(True, rows)


@router.post("/certificates", status_code=status.HTTP_201_CREATED)
async def create_certificate(
    payload: CertificateCreate,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    row = await certificate_service.create(session, payload)
    return api_response(True, row, message="Certificate created successfully")


@router.get("/certificates/{certificate_id}")
async def get_certificate(certificate_id: int, session: AsyncSession = Depends(get_session)):
    return api_response(True, await certificate_service.get(session, certificate_id))


@router.put("/certificates/{certificate_id}")
async def update_certificate(
    certificate_id: int,
    payload: CertificateUpdate,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    row = await certificate_service.update(session, certificate_id, payload)
    return api_response(True, row, message="Certificate updated successfully")


@router.delete("/certificates/{certificate_id}")
async def delete_certificate(
    certificate_id: int,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    await certificate_service.delete(session, certificate_id)
    return api_response(True, None, message="Certificate deleted successfully")
