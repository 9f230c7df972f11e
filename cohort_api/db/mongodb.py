"""
MongoDB Connection Utility

MongoDB stores:
- cohorts: course groups (unique cohortSlug)
- students: learners, each optionally referencing one cohort by _id
- users: auth credentials (unique email, bcrypt hash only)

The client is created once per process and shared by every request;
pymongo pools and synchronizes connections internally.
"""
import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from cohort_api.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: Optional[MongoClient] = None
_db: Optional[Database] = None


# Collection name constants (avoid typos)
COLLECTIONS = {
    "cohorts": "cohorts",
    "students": "students",
    "users": "users",
}


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        settings = get_settings()
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        )
    return _client


def get_mongo_db() -> Database:
    """
    Get the application database.

    Also the FastAPI dependency every route receives the store through:
        @router.get("/cohorts")
        def list_cohorts(db: Database = Depends(get_mongo_db)):
            ...
    """
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(db: Database, name: str) -> Collection:
    """Get a specific collection by its logical name."""
    return db[COLLECTIONS[name]]


def close_mongo_client() -> None:
    """Close the shared client (shutdown)."""
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes(db: Optional[Database] = None) -> None:
    """
    Create indexes. Call this once during app startup.

    The unique indexes are what arbitrates concurrent writes to
    cohortSlug / email: the losing insert or update gets DuplicateKeyError.
    """
    db = db if db is not None else get_mongo_db()

    get_collection(db, "cohorts").create_index("cohortSlug", unique=True)
    get_collection(db, "students").create_index("email", unique=True)
    get_collection(db, "users").create_index("email", unique=True)

    # listByCohort lookups
    get_collection(db, "students").create_index([("cohort", ASCENDING)])

    logger.info("MongoDB indexes created")
