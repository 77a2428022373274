import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pokedle.load_secrets import db_backend
from pokedle.models.schemas import Base


def create_engine_from_settings() -> AsyncEngine:
    """Build the engine selected by DB_BACKEND ("postgres" or "sqlite")."""
    if db_backend == "sqlite":
        from pokedle.create_sqlite_engine import create_sqlite_engine

        return create_sqlite_engine()
    from pokedle.create_postgres_engine import create_postgres_engine

    return create_postgres_engine()


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory handed to the services. The caller owns the engine."""
    return async_sessionmaker(
        autocommit=False,
        class_=AsyncSession,
        autoflush=True,
        expire_on_commit=False,
        bind=engine,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create table if not exists"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logging.info("Database tables are ready")
