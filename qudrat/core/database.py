import logging
from typing import Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from qudrat import config

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """Return the process-wide Motor client, creating it on first use"""
    global _client
    if _client is None:
        if not config.MONGODB_URI:
            raise RuntimeError("MONGODB_URI is not defined. Please set it in your environment variables.")
        _client = AsyncIOMotorClient(config.MONGODB_URI)
        logger.info("MongoDB client created for database %s", config.DB_NAME)
    return _client


def close_client():
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB client closed")


# ==================== DEPENDENCY FUNCTIONS ====================

async def get_db() -> AsyncIOMotorDatabase:
    """Database dependency"""
    try:
        return get_client()[config.DB_NAME]
    except RuntimeError as e:
        logger.error("Database unavailable: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


async def get_db_or_none() -> Optional[AsyncIOMotorDatabase]:
    """Like get_db, but for reports that must answer without a database"""
    try:
        return get_client()[config.DB_NAME]
    except RuntimeError:
        return None


# ==================== DATABASE INDEXES ====================

async def create_indexes(db: AsyncIOMotorDatabase):
    """Create MongoDB indexes for lookups and the one-day-per-challenge rule"""
    await db.challengedays.create_index([("challengeId", 1), ("day", 1)], unique=True)
    await db.lessons.create_index([("courseId", 1), ("order", 1)])
    await db.ailessons.create_index([("aiCourseId", 1), ("order", 1)])
    await db.certificates.create_index("userId")
    await db.payments.create_index([("userId", 1), ("createdAt", -1)])
    logger.info("Admin indexes created")
