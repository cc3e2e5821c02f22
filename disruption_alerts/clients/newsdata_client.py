"""Shared HTTP session for NewsData.io API calls."""

from __future__ import annotations

import requests

_session: requests.Session | None = None


def get_newsdata_session() -> requests.Session:
    """Return a singleton :class:`requests.Session` for NewsData."""
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update({"Accept": "application/json"})
    return _session

__all__ = ["get_newsdata_session"]
