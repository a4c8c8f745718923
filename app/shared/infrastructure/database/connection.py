# 📄 File: app/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to the database, making sure we can talk to our data storage
# and handling multiple connections efficiently without overwhelming the database.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine and session factory management with pooling, schema creation
# and health checks. One manager is built by the composition root per process; there is
# no module-level engine.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine and sessions)
# - asyncpg (PostgreSQL async driver) / aiosqlite (tests)
# - app/shared/config/settings.py (database configuration)
#
# 🔄 Connected Modules / Calls From:
# - app/modules/authentication/container.py (construction and lifecycle)
# - app/shared/infrastructure/database/repository.py (session factory)
# - app/api/v1/health.py (database health)

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.shared.config.settings import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class DatabaseConnectionManager:
    """
    Manages database connections with connection pooling and health monitoring.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._health_check_query = text("SELECT 1")

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build SQLAlchemy engine parameters from settings."""
        params: Dict[str, Any] = {
            "url": self._settings.DATABASE_URL,
            "echo": self._settings.DATABASE_ECHO,
        }
        # SQLite (tests) uses a static pool without sizing options
        if not self._settings.DATABASE_URL.startswith("sqlite"):
            params.update(
                pool_pre_ping=True,
                pool_recycle=3600,
                pool_size=self._settings.DATABASE_POOL_SIZE,
                max_overflow=self._settings.DATABASE_MAX_OVERFLOW,
                pool_timeout=30,
            )
        return params

    def initialize(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(**self._build_connection_params())
        self._session_factory = async_sessionmaker(
            self._engine,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_tables(self) -> None:
        """Create all tables registered on Base.metadata if missing."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        if self._engine is None:
            return {"status": "unhealthy", "error": "Database engine not initialized", "timestamp": timestamp}

        try:
            async with self._engine.connect() as conn:
                await conn.execute(self._health_check_query)
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return {"status": "unhealthy", "error": str(e), "timestamp": timestamp}

        return {"status": "healthy", "timestamp": timestamp}

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self._engine is None:
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database engine not initialized")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise RuntimeError("Database engine not initialized")
        return self._session_factory
