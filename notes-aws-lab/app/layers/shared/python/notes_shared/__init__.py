"""Shared Lambda layer for the notes API: credentials, pool, queries, responses."""
from notes_shared.handler import api_handler
from notes_shared.pool import get_pool

__all__ = ["api_handler", "get_pool"]
