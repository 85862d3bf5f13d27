"""
Per-route rate limiting keyed by client address.

Backed by the ``limits`` moving-window strategy over in-process memory
storage: each (route, client) pair may land ``limit`` hits within any
trailing ``window_seconds``. A refused hit is not recorded, so a client
that backs off regains its slots as the window slides.
"""
import logging

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import MovingWindowRateLimiter

logger = logging.getLogger('services.rate_limiter')


class RouteRateLimiter:

    def __init__(self, storage: Storage = None):
        self._storage = storage or MemoryStorage()
        self._strategy = MovingWindowRateLimiter(self._storage)

    def allow(self, client_key: str, route_key: str, limit: int, window_seconds: int) -> bool:
        """Record a hit and return True, or return False if the window is full."""
        item = RateLimitItemPerSecond(limit, int(window_seconds), namespace='leaddesk')
        if self._strategy.hit(item, route_key, client_key):
            return True
        logger.warning("Rate limit hit: client=%s route=%s limit=%d/%ss",
                       client_key, route_key, limit, window_seconds)
        return False
