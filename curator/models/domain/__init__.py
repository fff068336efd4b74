# curator/models/domain/__init__.py
"""Domain models initialization."""

from .item import Dimensions, Item
from .catalogue import Catalogue, CatalogueType, ExperienceLevel, MarketSample
from .curation import (
    AutoCurateOptions,
    Balance,
    CurationAnalysis,
    Facet,
    GapSet,
    IdealDistribution,
    ImbalanceSet,
    PortfolioAnalysis,
    PositionChange,
    Priority,
    Recommendation,
    RecommendationType,
    SizeRange,
    SuggestedItem,
)

__all__ = [
    'Dimensions',
    'Item',
    'Catalogue',
    'CatalogueType',
    'ExperienceLevel',
    'MarketSample',
    'AutoCurateOptions',
    'Balance',
    'CurationAnalysis',
    'Facet',
    'GapSet',
    'IdealDistribution',
    'ImbalanceSet',
    'PortfolioAnalysis',
    'PositionChange',
    'Priority',
    'Recommendation',
    'RecommendationType',
    'SizeRange',
    'SuggestedItem',
]
