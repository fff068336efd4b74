"""Data collaborators consumed by the curation engine.

``CurationDataSource`` is the contract the engine reads through; the
SQLAlchemy implementation below maps stored artworks and catalogues onto
the domain models. Each call opens its own session so the engine can
issue fetches concurrently.
"""

from typing import List, Optional, Protocol, Sequence

from curator.core.exceptions import CatalogueNotFoundError
from curator.core.logging import get_logger
from curator.database.repositories.artworks import ArtworkRepository
from curator.database.repositories.catalogues import CatalogueRepository
from curator.database.session import SessionManager
from curator.models.database.artwork import Artwork
from curator.models.database.catalogue import Catalogue as CatalogueRecord
from curator.models.domain import Catalogue, CatalogueType, ExperienceLevel, Item, MarketSample
from curator.services.curation.facets import price_bucket

logger = get_logger(__name__)


class CurationDataSource(Protocol):
    """Read-only access to catalogues, inventory and marketplace statistics."""

    async def fetch_catalogue(self, catalogue_id: str) -> Catalogue:
        """Raise ``CatalogueNotFoundError`` when the catalogue does not exist."""
        ...

    async def fetch_owner_available_items(self, owner_id: str, exclude_ids: Sequence[str]) -> List[Item]:
        ...

    async def fetch_peer_catalogue_sizes(self, catalogue_type: CatalogueType) -> List[int]:
        ...

    async def fetch_market_sample(self, limit: int) -> List[MarketSample]:
        ...

    async def fetch_owner_catalogue_ids(self, owner_id: str) -> List[str]:
        ...


def artwork_to_item(artwork: Artwork, position: int = 0) -> Item:
    """Map a stored artwork onto the domain item, parsing its dimensions."""
    return Item(
        id=artwork.id,
        title=artwork.title,
        medium=artwork.medium,
        style=artwork.genre,
        price=artwork.price,
        colors=artwork.dominant_colors or [],
        dimensions=artwork.dimensions,
        position=position,
        views=artwork.views_count or 0,
        likes=artwork.likes_count or 0,
        inquiries=artwork.inquiries_count or 0,
    )


def _catalogue_type(value: Optional[str]) -> CatalogueType:
    try:
        return CatalogueType(value)
    except ValueError:
        logger.warning("Unknown catalogue type, treating as mixed", catalogue_type=value)
        return CatalogueType.MIXED


def _experience(value: Optional[str]) -> Optional[ExperienceLevel]:
    if value is None:
        return None
    try:
        return ExperienceLevel(value)
    except ValueError:
        return None


def record_to_catalogue(record: CatalogueRecord) -> Catalogue:
    return Catalogue(
        id=record.id,
        title=record.title,
        type=_catalogue_type(record.catalogue_type),
        owner_id=record.user_id,
        owner_experience=_experience(record.owner.experience_level if record.owner else None),
        items=[
            artwork_to_item(entry.artwork, entry.position)
            for entry in record.entries
            if entry.artwork is not None
        ],
    )


class SqlCurationDataSource:
    """``CurationDataSource`` backed by the relational store."""

    def __init__(self, session_manager: SessionManager, peer_sample_limit: int = 100):
        self.session_manager = session_manager
        self.peer_sample_limit = peer_sample_limit

    async def fetch_catalogue(self, catalogue_id: str) -> Catalogue:
        async with self.session_manager.session() as session:
            record = await CatalogueRepository(CatalogueRecord, session).get_with_artworks(catalogue_id)
            if record is None:
                raise CatalogueNotFoundError(catalogue_id)
            return record_to_catalogue(record)

    async def fetch_owner_available_items(self, owner_id: str, exclude_ids: Sequence[str]) -> List[Item]:
        async with self.session_manager.session() as session:
            artworks = await ArtworkRepository(Artwork, session).get_available_for_owner(owner_id, exclude_ids)
            return [artwork_to_item(artwork) for artwork in artworks]

    async def fetch_peer_catalogue_sizes(self, catalogue_type: CatalogueType) -> List[int]:
        async with self.session_manager.session() as session:
            return await CatalogueRepository(CatalogueRecord, session).get_peer_sizes(
                catalogue_type.value,
                limit=self.peer_sample_limit
            )

    async def fetch_market_sample(self, limit: int) -> List[MarketSample]:
        async with self.session_manager.session() as session:
            artworks = await ArtworkRepository(Artwork, session).get_market_sample(limit)
            return [
                MarketSample(
                    medium=artwork.medium,
                    style=artwork.genre,
                    price_range=price_bucket(artwork.price) if artwork.price is not None else None,
                    colors=artwork.dominant_colors or [],
                )
                for artwork in artworks
            ]

    async def fetch_owner_catalogue_ids(self, owner_id: str) -> List[str]:
        async with self.session_manager.session() as session:
            return await CatalogueRepository(CatalogueRecord, session).get_ids_for_owner(owner_id)
