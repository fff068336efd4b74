# curator/models/domain/item.py
"""Pydantic models for catalogue items.

Dimension strings are parsed once, when an item is built, so the analysis
code only ever sees a ``Dimensions`` value with an optional area.
"""

import re
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# "24x36", "24 X 36", "24.5 × 36"
DIMENSION_PATTERN = re.compile(r'(\d+(?:\.\d+)?)\s*[x×]\s*(\d+(?:\.\d+)?)', re.IGNORECASE)


class Dimensions(BaseModel):
    """Physical size of an item as supplied and as parsed."""
    raw: Optional[str] = None
    width: Optional[float] = Field(None, ge=0)
    height: Optional[float] = Field(None, ge=0)

    @property
    def area(self) -> Optional[float]:
        """Width times height, or None when either side is unknown."""
        if self.width is None or self.height is None:
            return None
        return self.width * self.height

    @classmethod
    def parse(cls, raw: str) -> "Dimensions":
        """Parse a "W x H" string; unparseable input keeps only the raw text."""
        match = DIMENSION_PATTERN.search(raw)
        if not match:
            return cls(raw=raw)
        return cls(raw=raw, width=float(match.group(1)), height=float(match.group(2)))


class Item(BaseModel):
    """An item placed in a catalogue, or available to be placed in one."""
    id: str
    title: Optional[str] = None
    medium: Optional[str] = None
    style: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    colors: List[str] = Field(default_factory=list)
    dimensions: Optional[Dimensions] = None
    position: int = Field(default=0, ge=0)

    # Engagement counters
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    inquiries: int = Field(default=0, ge=0)

    model_config = ConfigDict(from_attributes=True)

    @field_validator('dimensions', mode='before')
    @classmethod
    def parse_dimensions(cls, v):
        """Accept a raw string, a (width, height) pair or a Dimensions mapping."""
        if v is None or isinstance(v, Dimensions):
            return v
        if isinstance(v, str):
            if not v.strip():
                return None
            return Dimensions.parse(v)
        if isinstance(v, (list, tuple)) and len(v) == 2:
            return Dimensions(width=v[0], height=v[1])
        return v

    @field_validator('colors', mode='before')
    @classmethod
    def drop_empty_colors(cls, v):
        if v is None:
            return []
        return [color for color in v if color]

    @property
    def performance_score(self) -> float:
        """Weighted engagement used to pick removal candidates."""
        return self.views * 0.1 + self.likes * 0.3 + self.inquiries * 0.6
