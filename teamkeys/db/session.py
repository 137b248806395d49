import logging
import os

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from teamkeys.config.settings import settings
from teamkeys.db.base import Base

logger = logging.getLogger(__name__)

# Create async engine for the database
engine = create_async_engine(
    str(settings.DATABASE_URI),
    echo=False,
    future=True,
    pool_pre_ping=True,
)

# Create async session factory
async_session_factory = async_sessionmaker(
    engine,
    expire_on_commit=False,
    autoflush=False,
)


async def init_db() -> None:
    """Create database tables if they don't exist."""
    # Import all models to ensure they're registered
    import teamkeys.db.all_models  # noqa: F401

    if str(settings.DATABASE_URI).startswith("sqlite"):
        db_path = os.path.abspath(settings.SQLITE_DB_PATH)
        db_dir = os.path.dirname(db_path)
        if db_dir and not os.path.exists(db_dir):
            logger.info(f"Creating database directory: {db_dir}")
            os.makedirs(db_dir, exist_ok=True)

    logger.info("Creating database tables...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}", exc_info=True)
        raise
    logger.info("Database tables initialized successfully")
