"""
Database connection and session management for SQLAlchemy 2.0.
Configured for async operations with Supabase PostgreSQL, or SQLite for local runs.
"""
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from sqlalchemy import text
from urllib.parse import urlparse
import logging
import socket

from portfolio.config import settings

logger = logging.getLogger(__name__)

# Create declarative base for models
Base = declarative_base()

_engine_args = {
    "echo": False,  # Set to True for SQL query logging in development
}

if settings.DATABASE_URL.startswith("postgresql"):
    _engine_args.update({
        "pool_size": 10,  # Number of connections to maintain in pool
        "max_overflow": 20,  # Additional connections allowed beyond pool_size
        "pool_pre_ping": True,  # Verify connections before using (handles stale connections)
        "pool_recycle": 3600,  # Recycle connections after 1 hour
        "connect_args": {
            "server_settings": {
                "application_name": "portfolio-gallery"
            }
        }
    })
elif settings.DATABASE_URL.startswith("sqlite"):
    # One connection per session; aiosqlite connections must not outlive their event loop
    _engine_args["poolclass"] = NullPool

engine = create_async_engine(settings.DATABASE_URL, **_engine_args)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncSession:
    """
    FastAPI dependency for database sessions.
    Provides async database session with automatic commit/rollback.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {str(e)}", exc_info=True)
            raise
        finally:
            await session.close()


def _validate_database_url(url: str) -> tuple[bool, str]:
    """
    Validate database URL and provide diagnostic information.
    Returns (is_valid, diagnostic_message)
    """
    if not url:
        return False, "DATABASE_URL is empty"

    try:
        parsed = urlparse(url)

        if url.startswith("sqlite"):
            return True, f"SQLite database at {parsed.path or ':memory:'}"

        if not url.startswith(("postgresql://", "postgresql+asyncpg://")):
            return False, (
                "Invalid database URL scheme. Expected postgresql+asyncpg:// or sqlite+aiosqlite://, "
                f"got: {parsed.scheme}"
            )

        hostname = parsed.hostname
        if not hostname:
            return False, "No hostname found in DATABASE_URL"

        try:
            socket.getaddrinfo(hostname, None)
            dns_status = "DNS resolution successful"
        except socket.gaierror as e:
            dns_status = f"DNS resolution failed: {str(e)}. This may indicate network connectivity issues or incorrect hostname."

        return True, f"URL format valid. Hostname: {hostname}, Port: {parsed.port or 5432}, Database: {parsed.path or '/postgres'}. {dns_status}"

    except Exception as e:
        return False, f"Error parsing DATABASE_URL: {str(e)}"


def _connection_failure_kind(error: Exception) -> str:
    message = str(error).lower()
    if "connection refused" in message or "timeout" in message:
        return "connection refused/timeout"
    if "authentication failed" in message or "password" in message:
        return "authentication error"
    return type(error).__name__


async def init_db():
    """
    Initialize database connection.
    PostgreSQL schemas are managed by Alembic; SQLite tables are created here.
    """
    is_valid, diagnostic = _validate_database_url(settings.DATABASE_URL)
    if not is_valid:
        logger.error(f"Invalid DATABASE_URL: {diagnostic}")
        raise ValueError(f"Invalid DATABASE_URL: {diagnostic}")

    logger.info(f"Database URL validation: {diagnostic}")

    # Register models on Base.metadata
    from portfolio import models  # noqa: F401

    try:
        async with engine.begin() as conn:
            if settings.DATABASE_URL.startswith("sqlite"):
                await conn.run_sync(Base.metadata.create_all)
            await conn.execute(text("SELECT 1"))
        logger.info("Gallery database ready")
    except Exception as e:
        logger.error(
            f"Gallery database unavailable ({_connection_failure_kind(e)}): {e}\n"
            f"Diagnostic: {diagnostic}"
        )
        raise


async def close_db():
    """Dispose the engine's pooled connections."""
    await engine.dispose()
    logger.info("Database connections closed")
