from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from payment_gateway.core.config import settings
from payment_gateway.db.base import Base
import payment_gateway.models  # noqa: F401  registers every table on Base.metadata

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    # Health check (important for long-lived apps)
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async DB session
    and ensures it's closed after the request.
    """
    async with async_session_factory() as session:
        yield session
        await session.rollback()


async def init_db() -> None:
    """
    Create all tables based on models.
    Migrations are handled outside of this service.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()
