"""
Foodies Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine over the single-file SQLite store, provides a
       session dependency that commits on success and rolls back on error.
Who:   Used by the store dependency (foodies.dependencies) and by the seeder.
When:  Engine is created at module import; sessions are created per-request.

SQLite Notes:
    The meals store is one file on disk. SQLite serializes writers with its
    own file lock, so cross-request write safety comes from the engine, not
    from this module. Pool sizing arguments are therefore only passed for
    server databases (PostgreSQL/MySQL) where they make sense.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from foodies.config import settings


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite URLs get `check_same_thread=False` because aiosqlite runs the
    connection on a worker thread; everything else gets a pre-ping pool.
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,   # Validate before use (catches stale connections)
        pool_recycle=3600,    # Recycle after 1 hour
    )


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(
    settings.database_url,
    echo=settings.db_echo or settings.log_level == "DEBUG",
)

# expire_on_commit=False: MealStore commits inside insert(); the returned
# Meal must stay readable afterwards without a lazy reload
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the app (init_models), Alembic
    autogenerate, and the test fixtures that build throwaway databases.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the store / route handler
        3. On success: commits anything still pending
        4. On error: rolls back, then re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/meals")
        async def list_meals(db: AsyncSession = Depends(get_db_session)):
            return await MealStore(db).list_all()
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models(bind: AsyncEngine = engine) -> None:
    """
    What:  Creates the meals table if it does not exist yet.
    When:  Application startup and `python -m foodies.seed`.
    Why:   The store is a local file; a fresh checkout must work without
           running Alembic first. Alembic stays the tool for schema changes.
    """
    # Models register themselves on Base.metadata when imported
    from foodies.models import meal  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
