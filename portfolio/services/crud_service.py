from typing import Any, Iterable, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.clock import utc_now
from portfolio.core.errors import NotFound, StoreOperationFailed, store_error_message
from portfolio.models.content import Certificate, Education, Project, Skill


class CrudService:
    def __init__(self, model: Type[SQLModel], label: str):
        self.model = model
        self.label = label

    async def _commit(self, session: AsyncSession) -> None:
        try:
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            raise StoreOperationFailed(store_error_message(exc)) from exc

    async def list(
        self,
        session: AsyncSession,
        filters: Iterable[Any] = (),
        order_by: Iterable[Any] = (),
        limit: Optional[int] = None,
    ) -> list[SQLModel]:
        query = select(self.model)
        for condition in filters:
            query = query.where(condition)
        query = query.order_by(*order_by)
        if limit:
            query = query.limit(limit)
        try:
            result = await session.exec(query)
            return result.all()
        except SQLAlchemyError as exc:
            raise StoreOperationFailed(store_error_message(exc)) from exc

    async def get(self, session: AsyncSession, item_id: int) -> SQLModel:
        row = await session.get(self.model, item_id)
        if row is None:
            raise NotFound(f"{self.label} not found")
        return row

    async def create(self, session: AsyncSession, payload: SQLModel) -> SQLModel:
        row = self.model.model_validate(payload)
        session.add(row)
        await self._commit(session)
        await session.refresh(row)
        return row

    async def update(self, session: AsyncSession, item_id: int, payload: SQLModel) -> SQLModel:
        row = await self.get(session, item_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(row, key, value)
        if hasattr(row, "updated_at"):
            row.updated_at = utc_now()
        session.add(row)
        await self._commit(session)
        await session.refresh(row)
        return row

    async def delete(self, session: AsyncSession, item_id: int) -> None:
        row = await self.get(session, item_id)
        await session.delete(row)
        await self._commit(session)

    async def count(self, session: AsyncSession) -> int:
        result = await session.exec(select(func.count()).select_from(self.model))
        return int(result.one() or 0)


project_service = CrudService(Project, "Project")
education_service = CrudService(Education, "Education")
certificate_service = CrudService(Certificate, "Certificate")
skill_service = CrudService(Skill, "Skill")
