import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from qudrat.core.database import create_indexes, get_db, get_db_or_none
from qudrat.main import app


@pytest.fixture
async def db():
    database = AsyncMongoMockClient()["qudrat_test"]
    await create_indexes(database)
    return database


@pytest.fixture
async def client(db):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_db_or_none] = lambda: db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def object_id():
    return "64b000000000000000000001"
