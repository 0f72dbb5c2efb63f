"""
Database access for the Kaaya store.

The MongoClient is created lazily on first use and cached for the life of the
process. When MONGODB_URI is not configured, get_db() returns None and callers
fall back to the static dataset in fallback.py.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from config import Config

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None
_client_lock = threading.Lock()


def get_client() -> Optional[MongoClient]:
    """Return the shared MongoClient, creating it on first call."""
    global _client
    if _client is not None:
        return _client
    if not Config.MONGODB_URI:
        return None
    with _client_lock:
        # another request may have connected while we waited
        if _client is None:
            _client = MongoClient(
                Config.MONGODB_URI,
                serverSelectionTimeoutMS=Config.SERVER_SELECTION_TIMEOUT_MS,
                maxPoolSize=Config.MAX_POOL_SIZE,
                tz_aware=True,
            )
            logger.info("MongoDB client created for database %s", Config.DATABASE_NAME)
    return _client


def get_db() -> Optional[Database]:
    """FastAPI dependency: the configured database, or None."""
    client = get_client()
    if client is None:
        return None
    return client[Config.DATABASE_NAME]


def close_client():
    global _client
    with _client_lock:
        if _client is not None:
            _client.close()
            _client = None
            logger.info("MongoDB client closed")


def ensure_indexes(db: Database):
    """Unique indexes backing the application-level duplicate checks."""
    db["category"].create_index("name", unique=True)
    db["category"].create_index("slug", unique=True)
    db["category"].create_index([("parentId", ASCENDING), ("sortOrder", ASCENDING)])
    db["category"].create_index([("sortOrder", ASCENDING), ("createdAt", DESCENDING)])
    db["product"].create_index("category")
    db["order"].create_index("orderNumber", unique=True)
    db["user"].create_index("email", unique=True)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def id_filter(value: Any) -> Any:
    """Turn a path/body id into the value stored in _id.

    Documents created through the API use ObjectIds; seeded fallback documents
    keep their short string ids ("1", "2", ...).
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return str(value)


def to_dict(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Make a Mongo document JSON friendly, exposing both `id` and `_id`."""
    if not doc:
        return doc
    d = {k: (str(v) if isinstance(v, ObjectId) else v) for k, v in doc.items()}
    if "_id" in d:
        d["id"] = d["_id"]
    d.pop("__v", None)
    return d


def create_document(db: Database, collection_name: str, data: Union[BaseModel, dict]) -> str:
    """Insert a document stamped with createdAt/updatedAt and return its id."""
    if isinstance(data, BaseModel):
        doc = data.model_dump(by_alias=True, exclude_none=True)
    else:
        doc = dict(data)
    now = utcnow()
    doc.setdefault("createdAt", now)
    doc["updatedAt"] = now
    result = db[collection_name].insert_one(doc)
    return str(result.inserted_id)

