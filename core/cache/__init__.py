"""Cache Module - Caching services."""
from core.cache.session_cache import (
    SessionData,
    SessionStore,
    new_session_id,
    CACHE_TTL_MINUTES,
)

__all__ = [
    'SessionData',
    'SessionStore',
    'new_session_id',
    'CACHE_TTL_MINUTES',
]
