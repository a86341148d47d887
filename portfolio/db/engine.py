from uuid import uuid4

from sqlalchemy import inspect, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from sqlmodel.ext.asyncio.session import AsyncSession

from portfolio.core.config import settings


def _is_postgres_url(database_url: str) -> bool:
    return database_url.startswith("postgresql") or database_url.startswith("postgres")


def _is_sqlite_url(database_url: str) -> bool:
    return database_url.startswith("sqlite")


db_url = settings.DATABASE_URL
db_url_obj = make_url(db_url)
connect_args: dict = {}
engine_kwargs: dict = {
    "echo": settings.ENVIRONMENT == "development",
    "future": True,
}

if _is_postgres_url(db_url):
    # Prevent prepared statement collisions with asyncpg + PgBouncer transaction mode.
    connect_args["statement_cache_size"] = 0
    connect_args["prepared_statement_cache_size"] = 0
    connect_args["prepared_statement_name_func"] = lambda: f"__asyncpg_{uuid4()}__"

    # For Supabase pooler (6543), avoid SQLAlchemy connection reuse.
    if db_url_obj.port == 6543:
        engine_kwargs["poolclass"] = NullPool

    if settings.ENVIRONMENT == "production":
        connect_args.setdefault("ssl", "require")

if _is_sqlite_url(db_url):
    # aiosqlite connections belong to the event loop that opened them.
    engine_kwargs["poolclass"] = NullPool

engine = create_async_engine(
    db_url,
    connect_args=connect_args,
    **engine_kwargs,
)

async_session_factory = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

import time
import logging

logger = logging.getLogger(__name__)

async def get_session() -> AsyncSession:
    start_time = time.time()
    async with async_session_factory() as session:
        yield session

    duration = time.time() - start_time
    if duration > 0.2:
         logger.warning(f"Slow DB Session: {duration:.4f}s")

async def init_db():
    from sqlmodel import SQLModel
    from portfolio.models import analytics
    from portfolio.models import profile
    from portfolio.models import content

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
        await conn.run_sync(_ensure_analytics_columns)
        await conn.run_sync(_ensure_singleton_columns)


async def check_db_connection():
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


def _ensure_analytics_columns(sync_conn):
    inspector = inspect(sync_conn)
    if "analytics" not in inspector.get_table_names():
        return

    existing = {col["name"] for col in inspector.get_columns("analytics")}
    additions = {
        "referrer": "VARCHAR",
        "page_path": "VARCHAR DEFAULT '/'",
        "created_at": "TIMESTAMP DEFAULT CURRENT_TIMESTAMP",
    }

    for column_name, column_type in additions.items():
        if column_name in existing:
            continue
        sync_conn.execute(text(f"ALTER TABLE analytics ADD COLUMN {column_name} {column_type}"))


def _ensure_singleton_columns(sync_conn):
    inspector = inspect(sync_conn)
    table_names = inspector.get_table_names()

    for table_name in ("personal_info", "contact_details"):
        if table_name not in table_names:
            continue

        existing = {col["name"] for col in inspector.get_columns(table_name)}
        if "singleton_key" not in existing:
            sync_conn.execute(
                text(f"ALTER TABLE {table_name} ADD COLUMN singleton_key VARCHAR DEFAULT 'default'")
            )
            sync_conn.execute(
                text(f"UPDATE {table_name} SET singleton_key = 'default' WHERE singleton_key IS NULL")
            )
        # Tables created before the constraint existed only get it through this index.
        sync_conn.execute(
            text(
                f"CREATE UNIQUE INDEX IF NOT EXISTS uq_{table_name}_singleton_key "
                f"ON {table_name} (singleton_key)"
            )
        )
