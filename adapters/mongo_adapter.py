"""MongoDB adapter: connection lifecycle and index management.
"""

from typing import Optional
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from app.config import Settings

logger = logging.getLogger("mealplanner.mongo")

USERS = "users"
RECIPES = "recipes"
MEAL_PLANS = "meal_plans"

_client: Optional[MongoClient] = None
_db: Optional[Database] = None


# ------------------ Connection ------------------
def connect(settings: Settings, client: Optional[MongoClient] = None) -> Database:
    """Open the client, verify the server answers and create indexes.

    ``client`` lets callers supply an already constructed client (tests pass
    an in-memory one).
    """
    global _client, _db
    if client is None:
        client = MongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            tz_aware=True,
        )
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        logger.error("Could not reach MongoDB at %s", settings.mongo_uri)
        raise

    _client = client
    _db = client[settings.mongo_db_name]
    ensure_indexes(_db)
    logger.info(
        "Connected to MongoDB %s (database: %s)",
        settings.mongo_uri,
        settings.mongo_db_name,
    )
    return _db


def use_database(db: Database) -> None:
    """Bind the adapter to an existing database handle without pinging."""
    global _client, _db
    _client = db.client
    _db = db
    ensure_indexes(db)


def close():
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    finally:
        _client = None
        _db = None


def get_db() -> Database:
    if _db is None:
        raise RuntimeError("MongoDB is not connected")
    return _db


def ping() -> bool:
    """Return True when the server answers a ping."""
    if _client is None:
        return False
    try:
        _client.admin.command("ping")
        return True
    except Exception as exc:
        logger.warning("MongoDB ping failed: %s", exc)
        return False


# ------------------ Indexes ------------------
def ensure_indexes(db: Database) -> None:
    """Create the indexes the application relies on; idempotent."""
    db[USERS].create_index([("email", ASCENDING)], unique=True, name="email_unique")

    db[RECIPES].create_index([("created_by", ASCENDING)], name="created_by")
    db[RECIPES].create_index([("category", ASCENDING)], name="category")
    db[RECIPES].create_index([("created_at", DESCENDING)], name="created_at_desc")

    # one meal plan per user and week
    db[MEAL_PLANS].create_index(
        [("user_id", ASCENDING), ("week_start_date", ASCENDING)],
        unique=True,
        name="user_week_unique",
    )
    logger.debug("MongoDB indexes ensured")
