import os
import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# MongoDB connection string from environment (.env is loaded by api.main)
MONGO_URI = os.getenv('MONGO_URI')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'usuarios')


def create_mongodb_client(uri: str | None = None) -> MongoClient | None:
    """Create a MongoDB client and verify it with a ping.

    The client is created once by the application lifespan and shared
    through app.state; MongoClient is thread-safe and pools connections.

    Returns:
        MongoDB client or None if the URI is missing or the server is unreachable
    """
    uri = uri or MONGO_URI
    if not uri:
        logger.error("[MONGODB] MONGO_URI not configured.")
        return None

    try:
        client = MongoClient(
            uri,
            serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            retryWrites=True,
            retryReads=True,
            tz_aware=True,  # return datetimes as UTC-aware
        )
        client.admin.command('ping')
        logger.info(f"[MONGODB] Connected successfully to {DATABASE_NAME}")
        return client
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Connection failed: {str(e)[:200]}")
        return None


def ping(client: MongoClient | None) -> bool:
    """Return True if the client answers a ping."""
    if client is None:
        return False
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False
