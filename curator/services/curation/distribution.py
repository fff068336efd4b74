"""Market Distribution Resolver.

Derives the ideal category set per facet from a sample of marketplace
items. When the sample cannot be fetched, or comes back empty, a static
versioned default is returned instead so the analysis never depends on
market data being available.
"""

from typing import Dict, Iterable, List, Optional

from curator.core.logging import get_logger
from curator.models.domain import Facet, IdealDistribution, MarketSample
from curator.services.curation.cache import StatsCache
from curator.services.curation.facets import SIZE_CATEGORIES, TOP_N
from curator.services.data_source import CurationDataSource

logger = get_logger(__name__)

DEFAULT_DISTRIBUTION_VERSION = "2024.1"

DEFAULT_DISTRIBUTION = IdealDistribution(
    mediums=['Oil on Canvas', 'Acrylic', 'Watercolor', 'Photography', 'Mixed Media', 'Digital Art', 'Sculpture', 'Print'],
    styles=['Abstract', 'Realistic', 'Contemporary', 'Traditional', 'Minimalist', 'Expressionist'],
    price_ranges=['0-1000', '1000-5000', '5000-10000', '10000+'],
    colors=['Red', 'Blue', 'Green', 'Yellow', 'Purple', 'Orange', 'Black', 'White'],
    sizes=list(SIZE_CATEGORIES),
    source="default",
    version=DEFAULT_DISTRIBUTION_VERSION,
)


def rank_categories(values: Iterable[str], limit: int) -> List[str]:
    """Most frequent categories first; ties keep first-seen order."""
    counts: Dict[str, int] = {}
    for value in values:
        if value:
            counts[value] = counts.get(value, 0) + 1
    # sorted() is stable, so equal counts stay in insertion order
    ranked = sorted(counts.items(), key=lambda entry: -entry[1])
    return [category for category, _ in ranked[:limit]]


def distribution_from_sample(sample: List[MarketSample]) -> IdealDistribution:
    """Rank each facet of a non-empty market sample."""
    return IdealDistribution(
        mediums=rank_categories((s.medium for s in sample), TOP_N[Facet.MEDIUM]),
        styles=rank_categories((s.style for s in sample), TOP_N[Facet.STYLE]),
        price_ranges=rank_categories((s.price_range for s in sample), TOP_N[Facet.PRICE_RANGE]),
        colors=rank_categories(
            (color for s in sample for color in s.colors),
            TOP_N[Facet.COLOR]
        ),
        sizes=list(SIZE_CATEGORIES),
        source="market",
    )


class MarketDistributionResolver:
    """Resolves the ideal distribution, preferring live market data."""

    def __init__(
        self,
        data_source: CurationDataSource,
        sample_size: int = 1000,
        cache: Optional[StatsCache] = None
    ):
        self.data_source = data_source
        self.sample_size = sample_size
        self.cache = cache

    def _cache_key(self) -> str:
        return f"market:{self.sample_size}"

    async def resolve(self) -> IdealDistribution:
        """Return the market-derived distribution or the static default."""
        if self.cache is not None:
            cached = await self.cache.get(self._cache_key())
            if cached is not None:
                return IdealDistribution.model_validate(cached)

        try:
            sample = await self.data_source.fetch_market_sample(self.sample_size)
        except Exception as e:
            logger.warning(
                "Market sample unavailable, using default distribution",
                error=str(e),
                version=DEFAULT_DISTRIBUTION_VERSION
            )
            return DEFAULT_DISTRIBUTION.model_copy(deep=True)

        if not sample:
            logger.info(
                "Market sample empty, using default distribution",
                version=DEFAULT_DISTRIBUTION_VERSION
            )
            return DEFAULT_DISTRIBUTION.model_copy(deep=True)

        distribution = distribution_from_sample(sample)
        logger.debug("Resolved market distribution", sample_size=len(sample))

        if self.cache is not None:
            await self.cache.set(self._cache_key(), distribution.model_dump(mode='json'))
        return distribution
