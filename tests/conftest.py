"""
Test infrastructure for the ewm main service.

- SQLite in-memory via aiosqlite; StaticPool keeps every session on the
  one connection that owns the in-memory database.
- Foreign keys are switched on for SQLite so referential integrity matches
  Postgres.
- The app's ``get_db`` dependency is overridden with the test session
  factory; tables are created before and dropped after every test.
- Redis is disabled by setting ``cache._redis = None`` (reads miss, writes
  are skipped) and the stats client is left unconfigured (no-op).
"""
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from ewm.cache import cache
from ewm.database import Base, get_db, transaction
from ewm.main import app
from ewm.middleware import install_query_counter, install_sqlite_foreign_keys
from ewm.models import Event, EventState, User

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

install_query_counter(engine_test)
install_sqlite_foreign_keys(engine_test)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def override_get_db():
    async with transaction(async_session_test) as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    cache._redis = None
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """A live session for tests that seed data or call services directly."""
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ---------------------------------------------------------------------------
# Seed helpers
# ---------------------------------------------------------------------------

async def make_user(db: AsyncSession, name: str = "Alice", email: str | None = None) -> User:
    user = User(name=name, email=email or f"{name.lower().replace(' ', '_')}@example.com")
    db.add(user)
    await db.flush()
    return user


async def make_event(
    db: AsyncSession,
    initiator: User,
    state: EventState = EventState.PUBLISHED,
    title: str = "Jazz night",
) -> Event:
    event = Event(
        title=title,
        annotation="An evening of live jazz in the old town square.",
        initiator_id=initiator.id,
        state=state,
    )
    db.add(event)
    await db.flush()
    return event
