import logging
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from fastapi import HTTPException
from app.core import tracing as logger
from app.core.config import settings

# Configure logging for SQLAlchemy (ORM logs only)
logging.basicConfig()
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def _engine_options() -> dict:
    """Pool and driver options; SQLite gets none of the asyncpg tuning"""
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "connect_args": {
            "server_settings": {
                "application_name": "carerelay_api"
            },
            "command_timeout": 5,
        },
    }


# SQLAlchemy Engine
engine = create_async_engine(settings.DATABASE_URL, echo=False, **_engine_options())

# Async session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False
)

# Declarative base class
Base = declarative_base()


async def init_db():
    """Initialize database tables with trace-aware logging."""
    # Register every mapped class on Base.metadata
    import app.db.models  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialized successfully")
    except Exception as e:
        logger.error("Database initialization failed", error=str(e), type=type(e).__name__)
        raise


async def get_db():
    """Async session dependency with trace-aware error logging."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            if isinstance(e, HTTPException):
                logger.warning(
                    "Request aborted inside database session",
                    error=e.detail or str(e),
                    type=type(e).__name__,
                    status_code=e.status_code
                )
            else:
                logger.error(
                    "Database session error",
                    error=str(e),
                    type=type(e).__name__
                )
            await session.rollback()
            raise
