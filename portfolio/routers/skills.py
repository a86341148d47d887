from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.access import OwnerIdentity, parse_limit, require_owner
from portfolio.core.envelope import api_response
from portfolio.db.engine import get_session
from portfolio.models.content import Skill, SkillCreate, SkillUpdate
from portfolio.services.crud_service import skill_service

router = APIRouter(tags=["skills"])


@router.get("/skills")
async def list_skills(
    category: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    filters = [Skill.category == category] if category else []
    rows = await skill_service.list(
        session,
        filters=filters,
        order_by=(Skill.name.asc(),),
        limit=parse_limit(limit),
    )
    return api_response(True, rows)


@router.post("/skills", status_code=status.HTTP_201_CREATED)
async def create_skill(
    payload: SkillCreate,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    row = await skill_service.create(session, payload)
    return api_response(True, row, message="Skill created successfully")


@router.get("/skills/{skill_id}")
async def get_skill(skill_id: int, session: AsyncSession = Depends(get_session)):
    return api_response(True, await skill_service.get(session, skill_id))


@router.put("/skills/{skill_id}")
async def update_skill(
    skill_id: int,
    payload: SkillUpdate,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    row = await skill_service.update(session, skill_id, payload)
    return api_response(True, row, message="Skill updated successfully")


@router.delete("/skills/{skill_id}")
async def delete_skill(
    skill_id: int,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    await skill_service.delete(session, skill_id)
    return api_response(True, None, message="Skill deleted successfully")
