"""MongoDB index management for the usuarios collection.

Unique indexes keep the driver's default names (email_1, rfc_1), so a
collection that already carries them is accepted without changes.
"""

from logging import getLogger

from pymongo import ASCENDING
from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def _index_on(collection, field: str) -> dict | None:
    """Return index info for a single-key index on field, if one exists."""
    for info in collection.index_information().values():
        if [key for key, _ in info.get('key', [])] == [field]:
            return info
    return None


def ensure_unique_index(collection, field: str) -> bool:
    """Make sure field has a unique single-key index.

    An existing non-unique index on the field is reported, not dropped:
    converting it could fail on duplicates already stored.
    """
    try:
        existing = _index_on(collection, field)
        if existing is not None:
            if existing.get('unique'):
                return True
            logger.error("Index is not unique", extra={"field": field})
            return False

        collection.create_index([(field, ASCENDING)], unique=True)
        logger.info("Created unique index", extra={"field": field})
        return True
    except PyMongoError as e:
        # Includes E11000 when stored documents already share a value
        logger.error("Failed to create unique index", extra={"field": field, "error": str(e)})
        return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
