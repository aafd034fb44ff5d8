"""Database initialization utilities."""

import logging

from wellness.db.base import Base
from wellness.db.session import engine

# Register models on the metadata
import wellness.models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """Create all database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")

