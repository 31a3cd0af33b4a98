"""
LexiNote Backend — Database Session Management
================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine over aiosqlite, provides a session dependency
       that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request;
       Alembic migrations are applied once during application startup.

Storage:
    A single SQLite file (default ./lexinote.db). Every statement the
    services issue is a parameterized SQLAlchemy Core/ORM statement.
"""

from pathlib import Path
from typing import AsyncGenerator, Optional

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from lexinote.config import settings


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    # Echo SQL queries in DEBUG mode for development visibility
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, outside the
# session context
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they register with the shared
    metadata that Alembic autogenerate compares against.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session

    Example usage in a route:
        @router.get("/notes")
        async def get_notes(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond
        finally:
            await session.close()


# ── Migrations ────────────────────────────────────────────────────────────
# backend/alembic, next to this package
MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "alembic"


def alembic_config(connection: Optional[Connection] = None) -> Config:
    """
    Alembic Config for programmatic use.

    With `connection`, env.py migrates over that connection instead of
    opening its own engine; this is how an in-memory database is migrated.
    """
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    config.attributes["connection"] = connection
    return config


async def upgrade_schema(bind: AsyncEngine = engine, revision: str = "head") -> None:
    """
    Apply pending Alembic migrations up to `revision`.

    When:  Called during application startup (lifespan handler) and by the
           test fixtures against an in-memory engine. Equivalent to
           `alembic upgrade head` run from backend/.
    """

    def _upgrade(connection: Connection) -> None:
        command.upgrade(alembic_config(connection), revision)

    async with bind.begin() as conn:
        await conn.run_sync(_upgrade)


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    Gracefully closes all connections in the pool.

    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
