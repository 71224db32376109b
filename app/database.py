"""Database module - MongoDB connection management and index setup."""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.config import settings

logger = logging.getLogger(__name__)

CANDIDATES_COLLECTION = "candidates"

client: AsyncIOMotorClient | None = None
db: AsyncIOMotorDatabase | None = None


async def connect_db() -> None:
    global client, db
    client = AsyncIOMotorClient(settings.atlas_connection_string)
    db = client[settings.database_name]
    await client.admin.command("ping")
    logger.info("Connected to MongoDB database '%s'", settings.database_name)


async def close_db() -> None:
    global client
    if client:
        client.close()


async def ensure_indexes() -> None:
    """Create the indexes used by candidate listing and lookup."""
    collection = get_db()[CANDIDATES_COLLECTION]

    await collection.create_index(
        [("final_score", DESCENDING), ("updated_at", DESCENDING)],
        name="ranking",
    )
    await collection.create_index([("email", ASCENDING)], name="email")
    await collection.create_index([("interview_status", ASCENDING)], name="status")
    logger.info("Ensured indexes on '%s'", CANDIDATES_COLLECTION)


def get_db() -> AsyncIOMotorDatabase:
    if db is None:
        raise RuntimeError("Database not initialized. Call connect_db() first.")
    return db
