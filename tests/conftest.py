import asyncio
import os
import tempfile

import pytest
from werkzeug.security import generate_password_hash

_db_fd, _db_path = tempfile.mkstemp(prefix="portfolio-test-", suffix=".db")
os.close(_db_fd)

# Settings are read at import time, so the environment must be in place first.
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_path}"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["OWNER_EMAIL"] = "owner@example.com"
os.environ["OWNER_PASSWORD_HASH"] = generate_password_hash(
    "Passw0rd!@#", method="pbkdf2:sha256", salt_length=16
)
os.environ.pop("VERCEL", None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from portfolio.db.engine import engine, init_db  # noqa: E402
from portfolio.main import app  # noqa: E402

OWNER_EMAIL = "owner@example.com"
OWNER_PASSWORD = "Passw0rd!@#"


@pytest.fixture(scope="session", autouse=True)
def _database():
    asyncio.run(init_db())
    yield
    asyncio.run(engine.dispose())
    if os.path.exists(_db_path):
        os.unlink(_db_path)


async def _truncate_all() -> None:
    async with engine.begin() as conn:
        for table in reversed(SQLModel.metadata.sorted_tables):
            await conn.execute(table.delete())


@pytest.fixture(autouse=True)
def _clean_tables(_database):
    asyncio.run(_truncate_all())
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def owner_client():
    with TestClient(app) as test_client:
        login = test_client.post(
            "/api/auth/login",
            json={"email": OWNER_EMAIL, "password": OWNER_PASSWORD},
        )
        assert login.status_code == 200
        yield test_client
