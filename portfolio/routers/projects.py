from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.access import OwnerIdentity, parse_bool, parse_limit, require_owner
from portfolio.core.envelope import api_response
from portfolio.db.engine import get_session
from portfolio.models.content import Project, ProjectCreate, ProjectUpdate
from portfolio.services.crud_service import project_service

router = APIRouter(tags=["projects"])


@router.get("/projects")
async def list_projects(
    featured: str | None = Query(default=None, description="true/false"),
    project_status: str | None = Query(default=None, alias="status"),
    limit: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    filters = []
    if featured is not None:
        filters.append(Project.featured == parse_bool(featured))
    if project_status:
        filters.append(Project.status == project_status)

    rows = await project_service.list(
        session,
        filters=filters,
        order_by=(Project.featured.desc(), Project.created_at.desc()),
        limit=parse_limit(limit),
    )
    return api_response(True, rows)


@router.post("/projects", status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreate,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    row = await project_service.create(session, payload)
    return api_response(True, row, message="Project created successfully")


@router.get("/projects/{project_id}")
async def get_project(project_id: int, session: AsyncSession = Depends(get_session)):
    return api_response(True, await project_service.get(session, project_id))


@router.put("/projects/{project_id}")
async def update_project(
    project_id: int,
    payload: ProjectUpdate,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    row = await project_service.update(session, project_id, payload)
    return api_response(True, row, message="Project updated successfully")


@router.delete("/projects/{project_id}")
async def delete_project(
    project_id: int,
    owner: OwnerIdentity = Depends(require_owner),
    session: AsyncSession = Depends(get_session),
):
    await project_service.delete(session, project_id)
    return api_response(True, None, message="Project deleted successfully")
