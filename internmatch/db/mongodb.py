"""
MongoDB Connection Utility

MongoDB stores completion-service outputs that are worth keeping:
- translation_cache: translated text keyed by a hash of (text, source, target)

Documents are self-contained and schema-flexible, no joins needed.
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from internmatch.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None

# Collection name constants (avoid typos)
COLLECTIONS = {
    "translation_cache": "translation_cache",
}

# Cached translations expire after 30 days
TRANSLATION_CACHE_TTL_SECONDS = 30 * 24 * 3600


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri, serverSelectionTimeoutMS=2000)
    return _client


def get_mongo_db() -> Database:
    """Get the application database"""
    global _db
    if _db is None:
        _db = get_mongo_client()[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection (see COLLECTIONS)."""
    return get_mongo_db()[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        get_mongo_client().admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes():
    """
    Create indexes for the translation cache.
    Call this once during app startup.
    """
    cache = get_collection(COLLECTIONS["translation_cache"])
    cache.create_index([("cache_key", ASCENDING)], unique=True)
    cache.create_index("created_at", expireAfterSeconds=TRANSLATION_CACHE_TTL_SECONDS)
    logger.info("MongoDB indexes created")
