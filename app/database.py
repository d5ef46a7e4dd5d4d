"""MongoDB client lifecycle and collection helpers.

The client is created once on application startup and closed on shutdown.
Repositories receive collections, never the client itself.
"""
from bson import ObjectId
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from structlog import get_logger

from app.config import settings
from app.errors import DatabaseUnavailableError

logger = get_logger()

OWNERS_COLLECTION = "Owners"
PROPERTIES_COLLECTION = "Properties"
CODE_INDEX_NAME = "codeInternal_unique"

mongo_client: AsyncMongoClient | None = None


async def connect() -> AsyncMongoClient:
    global mongo_client
    if mongo_client is None:
        mongo_client = AsyncMongoClient(
            settings.MONGODB_URL,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            tz_aware=True,
        )
        logger.info("Connected MongoDB client", database=settings.MONGODB_DATABASE)
    return mongo_client


async def close():
    global mongo_client
    if mongo_client is not None:
        await mongo_client.close()
        mongo_client = None
        logger.info("Closed MongoDB client")


def get_database() -> AsyncDatabase:
    if mongo_client is None:
        raise DatabaseUnavailableError("MongoDB client is not connected")
    return mongo_client[settings.MONGODB_DATABASE]


def owners_collection(db: AsyncDatabase) -> AsyncCollection:
    return db[OWNERS_COLLECTION]


def properties_collection(db: AsyncDatabase) -> AsyncCollection:
    return db[PROPERTIES_COLLECTION]


async def ensure_indexes(db: AsyncDatabase):
    properties = properties_collection(db)
    # Owner delete checks count by reference; internal codes are unique.
    await properties.create_index([("idOwner", ASCENDING)], name="idOwner")
    await properties.create_index([("codeInternal", ASCENDING)], name=CODE_INDEX_NAME, unique=True)
    await owners_collection(db).create_index([("name", ASCENDING)], name="name")
    logger.info("Ensured MongoDB indexes")


async def ping(db: AsyncDatabase) -> bool:
    try:
        await db.command("ping")
        return True
    except Exception as e:
        logger.warning("MongoDB ping failed", error=str(e))
        return False


def parse_object_id(value) -> ObjectId | None:
    """Return an ObjectId for a well-formed id, else None."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)
