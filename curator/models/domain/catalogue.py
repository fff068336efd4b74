# curator/models/domain/catalogue.py
"""Pydantic models for catalogues and the market data they are compared to."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .item import Item


class CatalogueType(str, Enum):
    """Presentation formats a catalogue can take."""
    SHOWCASE = "showcase"
    PORTFOLIO = "portfolio"
    EXHIBITION = "exhibition"
    COLLECTION = "collection"
    SERIES = "series"
    MIXED = "mixed"


class ExperienceLevel(str, Enum):
    """Self-declared experience of the catalogue owner."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class Catalogue(BaseModel):
    """A named, ordered collection of items owned by one creator."""
    id: str
    title: Optional[str] = None
    type: CatalogueType = CatalogueType.MIXED
    owner_id: str
    owner_experience: Optional[ExperienceLevel] = None
    items: List[Item] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @field_validator('items')
    @classmethod
    def order_by_position(cls, v: List[Item]) -> List[Item]:
        return sorted(v, key=lambda item: item.position)

    @property
    def item_ids(self) -> List[str]:
        return [item.id for item in self.items]


class MarketSample(BaseModel):
    """Facet values of one marketplace item, as sampled for ideal distributions."""
    medium: Optional[str] = None
    style: Optional[str] = None
    price_range: Optional[str] = None
    colors: List[str] = Field(default_factory=list)
