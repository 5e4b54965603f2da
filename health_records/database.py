"""Relational database connection manager."""

from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from health_records.config import settings
from health_records.core.logging import logger
from health_records.shared.models import Base


class Database:
    """SQLAlchemy async engine and session factory manager."""
    
    engine: Optional[AsyncEngine] = None
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None
    
    @classmethod
    async def connect_db(cls, url: Optional[str] = None):
        """Create the engine and make sure every table exists."""
        url = url or settings.DATABASE_URL
        cls.engine = create_async_engine(url)
        cls.session_factory = async_sessionmaker(cls.engine, expire_on_commit=False)
        
        # Import models so they register on Base.metadata
        from health_records.features.auth.models import User  # noqa: F401
        from health_records.features.patients.models import Patient  # noqa: F401
        from health_records.features.records.models import Attachment, HealthRecord  # noqa: F401
        from health_records.features.sharing.models import SharedAccess  # noqa: F401
        
        async with cls.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        
        logger.info(f"Connected to database: {cls.engine.url.render_as_string(hide_password=True)}")
    
    @classmethod
    async def close_db(cls):
        """Dispose of the engine and its connection pool."""
        if cls.engine:
            await cls.engine.dispose()
            cls.engine = None
            cls.session_factory = None
            logger.info("Closed database connection")


async def get_session() -> AsyncIterator[AsyncSession]:
    """Dependency for database access: one session per request."""
    if Database.session_factory is None:
        raise RuntimeError("Database is not connected")
    async with Database.session_factory() as session:
        yield session
