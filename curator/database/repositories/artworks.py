# curator/database/repositories/artworks.py
"""Repository for artwork-related database operations."""

from typing import List, Sequence
from sqlalchemy import select
from curator.models.database.artwork import Artwork
from .base import BaseRepository

AVAILABLE = 'available'

class ArtworkRepository(BaseRepository[Artwork]):
    """Repository for managing artwork data."""

    async def get_available_for_owner(
        self,
        owner_id: str,
        exclude_ids: Sequence[str] = ()
    ) -> List[Artwork]:
        """Get an owner's available artworks, minus the excluded ids."""
        query = (
            select(Artwork)
            .where(Artwork.user_id == owner_id)
            .where(Artwork.status == AVAILABLE)
            .order_by(Artwork.created_at, Artwork.id)
        )
        if exclude_ids:
            query = query.where(Artwork.id.not_in(list(exclude_ids)))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_market_sample(self, limit: int = 1000) -> List[Artwork]:
        """Get a bounded sample of available artworks across the marketplace."""
        query = (
            select(Artwork)
            .where(Artwork.status == AVAILABLE)
            .order_by(Artwork.created_at.desc(), Artwork.id)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
