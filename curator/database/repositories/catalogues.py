# curator/database/repositories/catalogues.py
"""Repository for catalogue-related database operations."""

from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload
from curator.models.database.catalogue import Catalogue, CatalogueArtwork
from .base import BaseRepository

class CatalogueRepository(BaseRepository[Catalogue]):
    """Repository for managing catalogue data."""

    async def get_with_artworks(self, catalogue_id: str) -> Optional[Catalogue]:
        """Get catalogue with its owner and ordered artworks."""
        query = (
            select(Catalogue)
            .options(
                selectinload(Catalogue.owner),
                selectinload(Catalogue.entries).selectinload(CatalogueArtwork.artwork)
            )
            .where(Catalogue.id == catalogue_id)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_peer_sizes(self, catalogue_type: str, limit: int = 100) -> List[int]:
        """Get item counts of non-empty public catalogues of one type."""
        query = (
            select(func.count(CatalogueArtwork.id))
            .select_from(CatalogueArtwork)
            .join(Catalogue, Catalogue.id == CatalogueArtwork.catalogue_id)
            .where(Catalogue.catalogue_type == catalogue_type)
            .where(Catalogue.is_public.is_(True))
            .group_by(CatalogueArtwork.catalogue_id)
            .order_by(CatalogueArtwork.catalogue_id)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return [count for count in result.scalars().all()]

    async def get_ids_for_owner(self, owner_id: str) -> List[str]:
        """Get ids of an owner's catalogues, newest first."""
        query = (
            select(Catalogue.id)
            .where(Catalogue.user_id == owner_id)
            .order_by(Catalogue.created_at.desc(), Catalogue.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
