from fastapi import APIRouter, Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.access import OwnerIdentity, read_json_object, require_owner
from portfolio.core.envelope import api_response
from portfolio.db.engine import get_session
from portfolio.models.profile import ContactDetails, PersonalInfo
from portfolio.services.singleton_service import singleton_service

router = APIRouter(tags=["profile"])


@router.get("/personal-info")
async def get_personal_info(session: AsyncSession = Depends(get_session)):
    row = await singleton_service.get(session, PersonalInfo)
    return api_response(True, singleton_service.serialize(row))


@router.post("/personal-info")
async def save_personal_info(
    request: Request,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    payload = await read_json_object(request)
    row = await singleton_service.upsert(session, PersonalInfo, payload)
    return api_response(
        True,
        singleton_service.serialize(row),
        message="Personal info saved successfully",
    )


@router.get("/contact-details")
async def get_contact_details(session: AsyncSession = Depends(get_session)):
    row = await singleton_service.get(session, ContactDetails)
    return api_response(True, singleton_service.serialize(row))


@router.post("/contact-details")
async def save_contact_details(
    request: Request,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    payload = await read_json_object(request)
    row = await singleton_service.upsert(session, ContactDetails, payload)
    return api_response(
        True,
        singleton_service.serialize(row),
        message="Contact details saved successfully",
    )
