"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from object_selector.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _query_limit() -> str:
    return get_settings().query_rate_limit


# Callable limit string: resolved per request so tests can change settings.
limit_queries = limiter.limit(_query_limit)
