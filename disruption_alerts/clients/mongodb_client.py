"""Singleton accessor for the MongoDB client."""

from __future__ import annotations

from pymongo import MongoClient
from pymongo.collection import Collection

from ..config import ALERTS_COLLECTION, MONGODB_DATABASE, MONGODB_URI

_client: MongoClient | None = None


def get_mongo_client() -> MongoClient:
    """Return a singleton :class:`pymongo.MongoClient`."""
    global _client
    if _client is None:
        _client = MongoClient(MONGODB_URI)
    return _client


def get_alerts_collection() -> Collection:
    """Return the collection alert documents are stored in."""
    return get_mongo_client()[MONGODB_DATABASE][ALERTS_COLLECTION]

__all__ = ["get_mongo_client", "get_alerts_collection"]
