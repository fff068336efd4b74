"""Shared pytest fixtures and configurations for the curation service.

This module provides test fixtures used across all test files, including:
- Item and catalogue factories
- An in-memory data source standing in for the storage collaborators
- Curation service and settings fixtures
- An in-memory SQLite database for repository tests
"""

import pytest
from typing import Dict, List, Optional, Sequence
from sqlalchemy.ext.asyncio import create_async_engine

from curator.core.config import Settings
from curator.core.exceptions import CatalogueNotFoundError
from curator.database.session import SessionManager
from curator.models.database import Base
from curator.models.domain import (
    Catalogue,
    CatalogueType,
    ExperienceLevel,
    Item,
    MarketSample,
)
from curator.services.curation.service import CurationService


class InMemoryDataSource:
    """Collaborator double keeping everything in dicts.

    Set one of the ``*_error`` attributes to make that fetch raise.
    """

    def __init__(self):
        self.catalogues: Dict[str, Catalogue] = {}
        self.owner_items: Dict[str, List[Item]] = {}
        self.peer_sizes: Dict[CatalogueType, List[int]] = {}
        self.market_sample: List[MarketSample] = []
        self.catalogue_error: Optional[Exception] = None
        self.pool_error: Optional[Exception] = None
        self.peer_error: Optional[Exception] = None
        self.market_error: Optional[Exception] = None
        self.market_calls = 0
        self.pool_calls: List[tuple] = []

    def add(self, catalogue: Catalogue) -> Catalogue:
        self.catalogues[catalogue.id] = catalogue
        return catalogue

    async def fetch_catalogue(self, catalogue_id: str) -> Catalogue:
        if self.catalogue_error is not None:
            raise self.catalogue_error
        if catalogue_id not in self.catalogues:
            raise CatalogueNotFoundError(catalogue_id)
        return self.catalogues[catalogue_id]

    async def fetch_owner_available_items(self, owner_id: str, exclude_ids: Sequence[str]) -> List[Item]:
        self.pool_calls.append((owner_id, list(exclude_ids)))
        if self.pool_error is not None:
            raise self.pool_error
        return [item for item in self.owner_items.get(owner_id, []) if item.id not in exclude_ids]

    async def fetch_peer_catalogue_sizes(self, catalogue_type: CatalogueType) -> List[int]:
        if self.peer_error is not None:
            raise self.peer_error
        return list(self.peer_sizes.get(catalogue_type, []))

    async def fetch_market_sample(self, limit: int) -> List[MarketSample]:
        self.market_calls += 1
        if self.market_error is not None:
            raise self.market_error
        return self.market_sample[:limit]

    async def fetch_owner_catalogue_ids(self, owner_id: str) -> List[str]:
        return [c.id for c in self.catalogues.values() if c.owner_id == owner_id]


def make_item(id: str, position: int = 0, **fields) -> Item:
    return Item(id=id, position=position, **fields)


def make_catalogue(
    items: Sequence[Item] = (),
    id: str = "cat-1",
    owner_id: str = "owner-1",
    type: CatalogueType = CatalogueType.SHOWCASE,
    owner_experience: Optional[ExperienceLevel] = ExperienceLevel.INTERMEDIATE
) -> Catalogue:
    return Catalogue(
        id=id,
        owner_id=owner_id,
        type=type,
        owner_experience=owner_experience,
        items=list(items)
    )


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture
def catalogue_factory():
    return make_catalogue


@pytest.fixture
def data_source() -> InMemoryDataSource:
    return InMemoryDataSource()


@pytest.fixture
def settings() -> Settings:
    return Settings(MARKET_SAMPLE_SIZE=1000, BATCH_CONCURRENCY=2)


@pytest.fixture
def fake_redis(mocker):
    """AsyncMock Redis client backed by a dict."""
    store = {}
    client = mocker.AsyncMock()
    client.get.side_effect = lambda key: store.get(key)

    async def setex(key, ttl, value):
        store[key] = value

    client.setex.side_effect = setex
    client.store = store
    return client


@pytest.fixture
def service(data_source: InMemoryDataSource, settings: Settings) -> CurationService:
    return CurationService(data_source, settings=settings)


# Database fixtures
@pytest.fixture
async def session_manager():
    """Session manager over a fresh in-memory SQLite schema."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    manager = SessionManager(engine=engine)
    yield manager
    await engine.dispose()
