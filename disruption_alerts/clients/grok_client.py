"""Singleton accessor for the xAI Grok API through the OpenAI SDK client."""

from __future__ import annotations

from openai import OpenAI as _OpenAIClient

from ..config import GROK_API_KEY, GROK_BASE_URL

_client: _OpenAIClient | None = None


def get_grok_client() -> _OpenAIClient:
    """Return a singleton :class:`openai.OpenAI` pointed at the Grok endpoint."""
    global _client
    if _client is None:
        if not GROK_API_KEY:
            raise EnvironmentError("GROK_API_KEY is not set in environment variables")
        _client = _OpenAIClient(api_key=GROK_API_KEY, base_url=GROK_BASE_URL)
    return _client

__all__ = ["get_grok_client"]
