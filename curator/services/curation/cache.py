"""Short-lived Redis cache for marketplace-wide statistics.

Market distributions and peer catalogue sizes change slowly, so they are
kept for ``CACHE_TTL_SECONDS``. Cache failures are logged and treated as
misses; they never fail an analysis.
"""

import json
from typing import Any, Optional
from redis import asyncio as aioredis

from curator.core.logging import get_logger

logger = get_logger(__name__)


class StatsCache:
    """JSON values in Redis under a common namespace, written with SETEX."""

    def __init__(
        self,
        redis_client: Optional[aioredis.Redis],
        ttl_seconds: int = 3600,
        namespace: str = "curation"
    ):
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None on a miss or a cache error."""
        if self.redis is None:
            return None
        try:
            cached = await self.redis.get(self._key(key))
            if cached is None:
                return None
            return json.loads(cached)
        except Exception as e:
            logger.error("Cache retrieval failed", error=e, key=key)
            return None

    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value with the configured TTL."""
        if self.redis is None:
            return
        try:
            await self.redis.setex(
                self._key(key),
                self.ttl_seconds,
                json.dumps(value)
            )
        except Exception as e:
            logger.error("Cache update failed", error=e, key=key)
