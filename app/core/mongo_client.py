# app/core/mongo_client.py
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from app.core.errors import BackendUnavailableError


def connect_mongo(url: str, timeout_ms: int = 5000) -> MongoClient:
    """
    Create a MongoClient and verify the server answers.

    MongoClient connects lazily, so a ping is issued to surface an
    unreachable server here instead of on the first request. A malformed
    URI or an SRV record that does not resolve fails in the constructor.

    Raises:
        BackendUnavailableError: if the client cannot be built or the
        server cannot be reached in time.
    """
    client = None
    try:
        client = MongoClient(url, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
        client.admin.command("ping")
    except (PyMongoError, ValueError) as exc:
        if client is not None:
            client.close()
        raise BackendUnavailableError(f"MongoDB unreachable: {exc}") from exc
    return client
