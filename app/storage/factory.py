# app/storage/factory.py
import logging

from app.core.config import Settings
from app.core.errors import BackendUnavailableError
from app.core.mongo_client import connect_mongo
from app.database import build_engine
from app.storage.base import Storage
from app.storage.memory import MemoryStorage
from app.storage.mongo import MongoStorage
from app.storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def init_storage(settings: Settings) -> Storage:
    """
    Pick the storage backend for this process. Called once at startup.

    Order:
      1. MONGODB_URL  -> MongoStorage
      2. DATABASE_URL -> SqlStorage
      3. otherwise    -> MemoryStorage

    If the durable backend cannot be reached the app keeps running on
    the in-memory store; the failure is logged, not raised.
    """
    try:
        if settings.MONGODB_URL:
            logger.info("Connecting to MongoDB...")
            client = connect_mongo(settings.MONGODB_URL, settings.MONGODB_TIMEOUT_MS)
            storage: Storage = MongoStorage(client, settings.MONGODB_DB)
        elif settings.DATABASE_URL:
            logger.info("Connecting to relational database...")
            engine = build_engine(settings.DATABASE_URL, settings.DATABASE_SSLMODE)
            storage = SqlStorage(engine)
        else:
            logger.info("No database configured, using in-memory storage")
            return MemoryStorage()
    except BackendUnavailableError as exc:
        logger.warning(f"Failed to initialize durable storage: {exc}")
        logger.warning("Falling back to in-memory storage")
        return MemoryStorage()

    logger.info(f"{storage.backend.value} storage initialized successfully")
    return storage
