"""MongoDB Client - Lazy connection, collections and indexes

Three collections back the resolution lookups:
    step_instances    executed steps of a case with their stored JSON input
    users             identity directory (names, e-mail, manager)
    user_memberships  group/role memberships keyed by "<groupId>$<roleId>"
"""
from typing import Any, Dict, List, Optional
from pymongo import ASCENDING, DESCENDING, IndexModel, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure

from ..config.settings import settings
from ..utils.logger import get_logger

logger = get_logger(__name__)

STEP_INSTANCES_COLLECTION = "step_instances"
USERS_COLLECTION = "users"
USER_MEMBERSHIPS_COLLECTION = "user_memberships"

INDEXES: Dict[str, List[IndexModel]] = {
    STEP_INSTANCES_COLLECTION: [
        # Latest execution of a step within a case
        IndexModel([("case_id", ASCENDING), ("step_ref", ASCENDING), ("created_at", DESCENDING)]),
    ],
    USERS_COLLECTION: [
        IndexModel("user_id", unique=True),
        IndexModel("user_name", unique=True),
    ],
    USER_MEMBERSHIPS_COLLECTION: [
        IndexModel("membership_key"),
        IndexModel([("user_id", ASCENDING), ("membership_key", ASCENDING)], unique=True),
    ],
}

_client: Optional[MongoClient] = None
_database: Optional[Database] = None


def get_client() -> MongoClient:
    """Get or create the shared MongoDB client"""
    global _client
    if _client is None:
        logger.info(f"Connecting to MongoDB: {settings.mongo_uri}")
        client = MongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            connectTimeoutMS=settings.mongo_timeout_ms,
        )
        try:
            client.admin.command("ping")
        except ConnectionFailure as e:
            logger.error(f"MongoDB connection failed: {e}")
            client.close()
            raise
        logger.info("MongoDB connection successful")
        _client = client
    return _client


def get_database() -> Database:
    global _database
    if _database is None:
        _database = get_client()[settings.mongo_db]
        logger.info(f"Using database: {settings.mongo_db}")
    return _database


def get_collection(name: str) -> Collection:
    return get_database()[name]


def close_connection() -> None:
    global _client, _database
    if _client is not None:
        _client.close()
        _client = None
        _database = None
        logger.info("MongoDB connection closed")


def create_indexes() -> None:
    """Create the indexes of every collection (idempotent)"""
    db = get_database()
    for collection_name, indexes in INDEXES.items():
        names = db[collection_name].create_indexes(indexes)
        logger.info(f"Ensured {len(names)} indexes on {collection_name}")


def health_check() -> Dict[str, Any]:
    """Ping the server; never raises"""
    status: Dict[str, Any] = {"database": settings.mongo_db}
    try:
        get_client().admin.command("ping")
        status.update({"status": "healthy", "connection": "ok"})
    except Exception as e:
        logger.error(f"MongoDB health check failed: {e}")
        status.update({"status": "unhealthy", "error": str(e)})
    return status
