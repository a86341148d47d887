import logging
from typing import Any, Optional, Type

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.clock import utc_now
from portfolio.core.errors import RequestInvalid, StoreOperationFailed, store_error_message
from portfolio.models.profile import SINGLETON_KEY

logger = logging.getLogger(__name__)


class SingletonService:
    """Create-or-update for tables that hold at most one row (personal info, contact details).

    The write reads the existing row id, then updates that row or inserts a new
    one. Two first writes racing each other are settled by the unique
    ``singleton_key`` constraint: the loser rolls back and retries as an update.
    """

    STORE_MANAGED_FIELDS = {"id", "singleton_key", "created_at", "updated_at"}

    def _writable_values(self, model: Type[SQLModel], payload: Any) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise RequestInvalid("Request body must be a JSON object")

        columns = set(model.__table__.columns.keys())
        values: dict[str, Any] = {}
        for key, value in payload.items():
            if key in self.STORE_MANAGED_FIELDS:
                continue
            if key not in columns:
                raise StoreOperationFailed(
                    f"Could not find the '{key}' column of '{model.__tablename__}'"
                )
            values[key] = value
        return values

    def _is_singleton_conflict(self, exc: Exception) -> bool:
        message = str(exc).lower()
        return "singleton_key" in message and ("unique" in message or "duplicate key" in message)

    def serialize(self, row: Optional[SQLModel]) -> Optional[dict[str, Any]]:
        if row is None:
            return None
        return row.model_dump(exclude={"singleton_key"})

    async def _existing_id(self, session: AsyncSession, model: Type[SQLModel]) -> Optional[int]:
        result = await session.exec(select(model.id).limit(1))
        return result.first()

    async def get(self, session: AsyncSession, model: Type[SQLModel]) -> Optional[SQLModel]:
        try:
            result = await session.exec(select(model).limit(1))
            return result.first()
        except SQLAlchemyError as exc:
            raise StoreOperationFailed(store_error_message(exc)) from exc

    async def _write(self, session: AsyncSession, model: Type[SQLModel], values: dict[str, Any]) -> SQLModel:
        existing_id = await self._existing_id(session, model)
        if existing_id is not None:
            row = await session.get(model, existing_id)
            for key, value in values.items():
                setattr(row, key, value)
            row.updated_at = utc_now()
        else:
            row = model(**values)
            row.singleton_key = SINGLETON_KEY

        session.add(row)
        await session.commit()
        await session.refresh(row)
        return row

    async def upsert(self, session: AsyncSession, model: Type[SQLModel], payload: Any) -> SQLModel:
        values = self._writable_values(model, payload)
        try:
            return await self._write(session, model, values)
        except IntegrityError as exc:
            await session.rollback()
            if not self._is_singleton_conflict(exc):
                raise StoreOperationFailed(store_error_message(exc)) from exc
            logger.warning(
                "Concurrent first write detected on %s; retrying as update.",
                model.__tablename__,
            )
        except ValidationError as exc:
            raise RequestInvalid(str(exc)) from exc
        except SQLAlchemyError as exc:
            await session.rollback()
            raise StoreOperationFailed(store_error_message(exc)) from exc

        try:
            return await self._write(session, model, values)
        except SQLAlchemyError as exc:
            await session.rollback()
            raise StoreOperationFailed(store_error_message(exc)) from exc


singleton_service = SingletonService()
