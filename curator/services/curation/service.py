"""Curation analysis service.

Orchestrates the curation engine for one catalogue or a whole portfolio:

1. Fetch the catalogue (hard failure) while the market distribution
   resolves in the background.
2. Fetch peer catalogue sizes and the owner's unused inventory
   concurrently; both degrade to documented fallbacks on failure.
3. Run the pure gap, balance, imbalance, size, scoring and
   recommendation steps over the collected data.
"""

import asyncio
from typing import List, Optional
from pydantic import BaseModel

from curator.core.config import Settings, get_settings
from curator.core.exceptions import AppException, DataSourceError
from curator.core.logging import get_logger, monitor_performance
from curator.models.domain import (
    AutoCurateOptions,
    Catalogue,
    CatalogueType,
    CurationAnalysis,
    IdealDistribution,
    Item,
    PortfolioAnalysis,
    Recommendation,
)
from curator.services.curation.analysis import analyze_balance, analyze_gaps, detect_imbalances
from curator.services.curation.cache import StatsCache
from curator.services.curation.distribution import MarketDistributionResolver
from curator.services.curation.recommendations import (
    gap_filling_recommendations,
    generate_recommendations,
    reorder_recommendations,
    size_recommendations,
    sort_recommendations,
)
from curator.services.curation.scoring import calculate_score
from curator.services.curation.sizing import cap_size_range, optimize_size
from curator.services.data_source import CurationDataSource

logger = get_logger(__name__)


class CurationContext(BaseModel):
    """Everything fetched for one catalogue before the pure steps run."""
    catalogue: Catalogue
    ideal: IdealDistribution
    peer_sizes: List[int]
    pool: Optional[List[Item]]


class CurationService:
    """Answers ``analyze_catalogue``, ``auto_curate`` and ``analyze_portfolio``."""

    def __init__(
        self,
        data_source: CurationDataSource,
        settings: Optional[Settings] = None,
        cache: Optional[StatsCache] = None
    ):
        self.data_source = data_source
        self.settings = settings or get_settings()
        self.cache = cache
        self.resolver = MarketDistributionResolver(
            data_source,
            sample_size=self.settings.MARKET_SAMPLE_SIZE,
            cache=cache
        )

    async def _load_catalogue(self, catalogue_id: str) -> Catalogue:
        try:
            return await self.data_source.fetch_catalogue(catalogue_id)
        except AppException:
            raise
        except Exception as e:
            logger.error("Catalogue fetch failed", error=e, catalogue_id=catalogue_id)
            raise DataSourceError(f"Could not load catalogue {catalogue_id}") from e

    async def _peer_sizes(self, catalogue_type: CatalogueType) -> List[int]:
        cache_key = f"peers:{catalogue_type.value}"
        if self.cache is not None:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                return [int(size) for size in cached]

        try:
            sizes = await self.data_source.fetch_peer_catalogue_sizes(catalogue_type)
        except Exception as e:
            logger.warning(
                "Peer catalogue sizes unavailable, using size table",
                error=str(e),
                catalogue_type=catalogue_type.value
            )
            return []

        if sizes and self.cache is not None:
            await self.cache.set(cache_key, list(sizes))
        return list(sizes)

    async def _owner_pool(self, catalogue: Catalogue) -> Optional[List[Item]]:
        """The owner's items outside this catalogue, or None when unavailable."""
        if not self.settings.FEATURES.ENABLE_OWNER_POOL:
            return None
        try:
            return await self.data_source.fetch_owner_available_items(
                catalogue.owner_id,
                catalogue.item_ids
            )
        except Exception as e:
            logger.warning(
                "Owner inventory unavailable, recommending without candidates",
                error=str(e),
                catalogue_id=catalogue.id,
                owner_id=catalogue.owner_id
            )
            return None

    async def _collect(self, catalogue_id: str) -> CurationContext:
        market = asyncio.ensure_future(self.resolver.resolve())
        try:
            catalogue = await self._load_catalogue(catalogue_id)
        except BaseException:
            market.cancel()
            raise

        peer_sizes, pool = await asyncio.gather(
            self._peer_sizes(catalogue.type),
            self._owner_pool(catalogue)
        )
        ideal = await market
        return CurationContext(catalogue=catalogue, ideal=ideal, peer_sizes=peer_sizes, pool=pool)

    @monitor_performance("analyze_catalogue")
    async def analyze_catalogue(self, catalogue_id: str) -> CurationAnalysis:
        """Score a catalogue and recommend how to improve it."""
        context = await self._collect(catalogue_id)
        catalogue = context.catalogue
        items = catalogue.items

        gaps = analyze_gaps(items, context.ideal)
        balance = analyze_balance(items)
        imbalances = detect_imbalances(balance)
        size_range = optimize_size(catalogue.type, catalogue.owner_experience, context.peer_sizes)

        recommendations = generate_recommendations(
            catalogue.id,
            items,
            gaps,
            context.ideal,
            imbalances,
            size_range,
            context.pool
        )
        score = calculate_score(len(items), gaps, balance)

        logger.info(
            "Catalogue analyzed",
            catalogue_id=catalogue.id,
            item_count=len(items),
            score=score,
            recommendation_count=len(recommendations),
            distribution_source=context.ideal.source
        )
        return CurationAnalysis(
            catalogue_id=catalogue.id,
            gaps=gaps,
            balance=balance,
            recommendations=recommendations,
            score=score
        )

    @monitor_performance("auto_curate")
    async def auto_curate(
        self,
        catalogue_id: str,
        options: Optional[AutoCurateOptions] = None
    ) -> List[Recommendation]:
        """Only the recommendation families selected by ``options``."""
        options = options or AutoCurateOptions()
        context = await self._collect(catalogue_id)
        catalogue = context.catalogue
        items = catalogue.items

        recommendations: List[Recommendation] = []
        if options.fill_gaps:
            gaps = analyze_gaps(items, context.ideal)
            recommendations += gap_filling_recommendations(catalogue.id, gaps, context.ideal, context.pool)

        if options.balance_distribution:
            imbalances = detect_imbalances(analyze_balance(items))
            recommendations += reorder_recommendations(catalogue.id, items, imbalances)

        if options.max_artworks is not None:
            size_range = cap_size_range(
                optimize_size(catalogue.type, catalogue.owner_experience, context.peer_sizes),
                options.max_artworks
            )
            recommendations += size_recommendations(catalogue.id, items, size_range, context.pool)

        return sort_recommendations(recommendations)

    @monitor_performance("analyze_portfolio")
    async def analyze_portfolio(self, owner_id: str) -> PortfolioAnalysis:
        """Analyze every catalogue of one owner with bounded concurrency."""
        try:
            catalogue_ids = await self.data_source.fetch_owner_catalogue_ids(owner_id)
        except Exception as e:
            logger.error("Owner catalogue listing failed", error=e, owner_id=owner_id)
            raise DataSourceError(f"Could not list catalogues for owner {owner_id}") from e

        semaphore = asyncio.Semaphore(self.settings.BATCH_CONCURRENCY)

        async def analyze_with_semaphore(catalogue_id: str) -> CurationAnalysis:
            async with semaphore:
                return await self.analyze_catalogue(catalogue_id)

        results = await asyncio.gather(
            *(analyze_with_semaphore(catalogue_id) for catalogue_id in catalogue_ids),
            return_exceptions=True
        )

        portfolio = PortfolioAnalysis(owner_id=owner_id)
        for catalogue_id, result in zip(catalogue_ids, results):
            if isinstance(result, AppException):
                logger.warning(
                    "Catalogue skipped in portfolio analysis",
                    catalogue_id=catalogue_id,
                    error=result.detail
                )
                portfolio.failed_catalogue_ids.append(catalogue_id)
            elif isinstance(result, BaseException):
                raise result
            else:
                portfolio.analyses.append(result)
        return portfolio
