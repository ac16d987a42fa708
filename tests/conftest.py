import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cardvault.db.database import build_engine, build_session_factory, drop_db, get_session, init_db
from cardvault.main import app


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield engine
    await drop_db(engine)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = build_session_factory(async_engine)
    async with async_session() as session:
        yield session


@pytest.fixture
def app_transport(async_engine):
    """ASGI transport into the app, with the database session overridden."""
    async_session = build_session_factory(async_engine)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    yield ASGITransport(app=app)
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_transport):
    """Provide an async test client against the app."""
    async with AsyncClient(transport=app_transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(client: AsyncClient):
    """Register a user and return the Authorization header for them."""

    async def register(username: str, password: str = "secret1") -> dict[str, str]:
        response = await client.post(
            "/auth/register", json={"username": username, "password": password}
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return register


@pytest.fixture
async def alice(register_user) -> dict[str, str]:
    return await register_user("alice")


@pytest.fixture
async def bob(register_user) -> dict[str, str]:
    return await register_user("bob")


@pytest.fixture
def charizard() -> dict:
    return {
        "name": "Charizard",
        "set": "Base Set",
        "condition": "Near Mint",
        "price": "150.00",
        "type": "Pokemon",
    }
