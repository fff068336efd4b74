# curator/models/domain/curation.py
"""Pydantic models for curation analysis results.

These are the values the curation engine produces: ideal distributions,
gap and balance reports, size ranges, recommendations and the aggregate
analysis returned to callers.
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, model_validator

# Every recommended catalogue size lies in this range
MIN_CATALOGUE_SIZE = 6
MAX_CATALOGUE_SIZE = 25


class Facet(str, Enum):
    """Categorical dimensions a catalogue is analyzed along."""
    MEDIUM = "medium"
    STYLE = "style"
    PRICE_RANGE = "price_range"
    COLOR = "color"
    SIZE_CATEGORY = "size_category"


class RecommendationType(str, Enum):
    ADD_ARTWORK = "add_artwork"
    REMOVE_ARTWORK = "remove_artwork"
    REORDER = "reorder"
    MAINTAIN = "maintain"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key, most urgent first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class IdealDistribution(BaseModel):
    """Top categories per facet that a well-composed catalogue should cover."""
    mediums: List[str] = Field(default_factory=list)
    styles: List[str] = Field(default_factory=list)
    price_ranges: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    source: str = Field("default", description="'market' when derived from a sample, else 'default'")
    version: Optional[str] = Field(None, description="Version of the static fallback, when used")

    def for_facet(self, facet: Facet) -> List[str]:
        return getattr(self, _FACET_LIST_FIELDS[facet])


class GapSet(BaseModel):
    """Ideal categories with no representation in the catalogue, in ideal order."""
    mediums: List[str] = Field(default_factory=list)
    styles: List[str] = Field(default_factory=list)
    price_ranges: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)

    def for_facet(self, facet: Facet) -> List[str]:
        return getattr(self, _FACET_LIST_FIELDS[facet])


class Balance(BaseModel):
    """Per-facet category histograms over a catalogue's items."""
    medium: Dict[str, int] = Field(default_factory=dict)
    style: Dict[str, int] = Field(default_factory=dict)
    price_range: Dict[str, int] = Field(default_factory=dict)
    color: Dict[str, int] = Field(default_factory=dict)
    size_category: Dict[str, int] = Field(default_factory=dict)

    def for_facet(self, facet: Facet) -> Dict[str, int]:
        return getattr(self, facet.value)


class ImbalanceSet(BaseModel):
    """Over-represented categories per facet."""
    medium: List[str] = Field(default_factory=list)
    style: List[str] = Field(default_factory=list)
    price_range: List[str] = Field(default_factory=list)
    color: List[str] = Field(default_factory=list)

    def for_facet(self, facet: Facet) -> List[str]:
        return getattr(self, facet.value, [])


class SizeRange(BaseModel):
    """Recommended item count for a catalogue, within the global size bounds."""
    min: int = Field(..., ge=MIN_CATALOGUE_SIZE, le=MAX_CATALOGUE_SIZE)
    max: int = Field(..., ge=MIN_CATALOGUE_SIZE, le=MAX_CATALOGUE_SIZE)
    ideal: int = Field(..., ge=MIN_CATALOGUE_SIZE, le=MAX_CATALOGUE_SIZE)

    @model_validator(mode='after')
    def check_order(self):
        if not self.min <= self.ideal <= self.max:
            raise ValueError('size range must satisfy min <= ideal <= max')
        return self


class SuggestedItem(BaseModel):
    """An item proposed for addition or removal."""
    id: str
    title: Optional[str] = None
    reason: str


class PositionChange(BaseModel):
    """A proposed move of an item within the catalogue order."""
    item_id: str
    current_position: int
    suggested_position: int = Field(..., ge=0)
    reason: str


class Recommendation(BaseModel):
    """A typed, prioritized change to improve a catalogue."""
    id: str
    type: RecommendationType
    priority: Priority
    title: str
    description: str
    reason: str
    impact: int = Field(..., ge=0, le=100)
    suggested_items: List[SuggestedItem] = Field(default_factory=list)
    suggested_changes: List[PositionChange] = Field(default_factory=list)


class CurationAnalysis(BaseModel):
    """Full analysis of one catalogue."""
    catalogue_id: str
    gaps: GapSet
    balance: Balance
    recommendations: List[Recommendation] = Field(default_factory=list)
    score: int = Field(..., ge=0, le=100)


class AutoCurateOptions(BaseModel):
    """Which recommendation families ``auto_curate`` should produce."""
    fill_gaps: bool = False
    balance_distribution: bool = False
    max_artworks: Optional[int] = Field(None, ge=1)


class PortfolioAnalysis(BaseModel):
    """Analyses of every catalogue belonging to one owner."""
    owner_id: str
    analyses: List[CurationAnalysis] = Field(default_factory=list)
    failed_catalogue_ids: List[str] = Field(default_factory=list)


_FACET_LIST_FIELDS = {
    Facet.MEDIUM: 'mediums',
    Facet.STYLE: 'styles',
    Facet.PRICE_RANGE: 'price_ranges',
    Facet.COLOR: 'colors',
    Facet.SIZE_CATEGORY: 'sizes',
}
