"""Dependencies for FastAPI application.

This module defines dependencies used across API endpoints including:
- Configuration access
- Redis-backed statistics cache
- The curation service wired to the relational data source
"""

from fastapi import Depends, Request

from curator.core.config import Settings, get_settings
from curator.database.session import get_session_manager
from curator.services.curation.cache import StatsCache
from curator.services.curation.service import CurationService
from curator.services.data_source import SqlCurationDataSource

# Cache Dependencies
def get_stats_cache(
    request: Request,
    settings: Settings = Depends(get_settings)
) -> StatsCache:
    """Cache over the Redis client opened at startup, if any."""
    redis_client = getattr(request.app.state, 'redis', None) if settings.caching_enabled else None
    return StatsCache(redis_client, ttl_seconds=settings.CACHE_TTL_SECONDS)

# Service Dependencies
def get_curation_service(
    settings: Settings = Depends(get_settings),
    cache: StatsCache = Depends(get_stats_cache)
) -> CurationService:
    """Curation service reading from the configured database."""
    data_source = SqlCurationDataSource(
        get_session_manager(),
        peer_sample_limit=settings.PEER_SAMPLE_LIMIT
    )
    return CurationService(data_source, settings=settings, cache=cache)
