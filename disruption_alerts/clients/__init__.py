"""Convenience re-exports for singleton SDK accessors."""

from .grok_client import get_grok_client  # noqa: F401
from .mongodb_client import get_alerts_collection, get_mongo_client  # noqa: F401
from .newsdata_client import get_newsdata_session  # noqa: F401

__all__ = [
    "get_grok_client",
    "get_mongo_client",
    "get_alerts_collection",
    "get_newsdata_session",
]
