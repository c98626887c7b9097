import anyio
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import NullPool

from todoapp.client import DataAccessClient
from todoapp.database import Database
from todoapp.main import create_api_app, create_web_app


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def data_client(database_url):
    # NullPool so no connection outlives the event loop that opened it
    db = Database(database_url, poolclass=NullPool)
    await db.create_all()
    client = DataAccessClient(db, operation_timeout=5)
    yield client
    await client.close()


@pytest.fixture
def sync_data_client(database_url):
    """Same store as ``data_client`` for tests driven by starlette's TestClient."""
    db = Database(database_url, poolclass=NullPool)
    anyio.run(db.create_all)
    client = DataAccessClient(db, operation_timeout=5)
    yield client
    anyio.run(client.close)


@pytest.fixture
async def client(data_client):
    app = create_api_app(client=data_client)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def web_client(data_client):
    app = create_web_app(client=data_client)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
