"""
MongoDB client initialization and access utilities.

This module configures and manages the asynchronous MongoDB client
used across the job marketplace backend. It connects to the database using
Motor (the async MongoDB driver for Python) and exposes a global client
and database instance for use in other modules.

Connection settings come from `jobmarket.core.config` (MONGODB_URI and
MONGODB_DB).

Usage example:
    >>> from jobmarket.db.client import init_mongo, get_db
    >>> await init_mongo()
    >>> db = get_db()
    >>> print(await db.list_collection_names())
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from jobmarket.core.config import MONGO_DB_NAME, MONGO_URI

logger = logging.getLogger("jobmarket.db")

# Global MongoDB client and database references
client: AsyncIOMotorClient = None
_db: AsyncIOMotorDatabase = None

# ------------------------------------------------------------------------------
# Initialization
# ------------------------------------------------------------------------------

async def init_mongo():
    """
    Initialize the global MongoDB client and database connection.

    The client is timezone aware so that contract timestamps read back from
    the database compare equal to the ones that were written.
    It should be called once during application startup (see `main.py`).
    """
    global client, _db
    client = AsyncIOMotorClient(MONGO_URI, tz_aware=True)
    _db = client[MONGO_DB_NAME]
    logger.info("Connected to MongoDB at %s, using database '%s'", MONGO_URI, MONGO_DB_NAME)


async def close_mongo():
    """Close the global MongoDB client, if it was opened."""
    global client, _db
    if client is not None:
        client.close()
        logger.info("MongoDB connection closed")
    client = None
    _db = None

# ------------------------------------------------------------------------------
# Database Access
# ------------------------------------------------------------------------------

def get_db() -> AsyncIOMotorDatabase:
    """
    Retrieve the initialized MongoDB database instance.

    Returns:
        AsyncIOMotorDatabase: The connected MongoDB database instance.

    Raises:
        RuntimeError: If the database has not been initialized yet
        (i.e., `init_mongo()` has not been called).
    """

    if _db is None:
        raise RuntimeError("MongoDB was not initialized. Call init_mongo() first.")
    return _db
