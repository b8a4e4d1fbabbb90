from contextlib import asynccontextmanager
from typing import Awaitable, Callable

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from ewm.config import settings
from ewm.middleware import install_query_counter

# Module-level engine variable allows tests to override with a test engine.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

# Register the per-request SQL query counter on the production engine.
install_query_counter(engine)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

_AFTER_COMMIT = "after_commit"


class Base(DeclarativeBase):
    pass


def on_commit(session: AsyncSession, callback: Callable[[], Awaitable[None]]) -> None:
    """Queue *callback* to be awaited once *session*'s transaction has committed."""
    session.info.setdefault(_AFTER_COMMIT, []).append(callback)


async def run_after_commit(session: AsyncSession) -> None:
    for callback in session.info.pop(_AFTER_COMMIT, []):
        await callback()


@asynccontextmanager
async def transaction(factory: async_sessionmaker | None = None):
    """
    Open a session, commit it on success and roll it back on error.

    Callbacks queued with ``on_commit`` run after the commit; a rollback
    discards them.
    """
    async with (factory or async_session)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            session.info.pop(_AFTER_COMMIT, None)
            raise
    await run_after_commit(session)


async def get_db():
    """Yield a request-scoped session; commit on success, roll back on error."""
    async with transaction() as session:
        yield session
