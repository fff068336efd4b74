"""Facet bucketing rules and thresholds shared by the curation analyzers.

Medium, style and color are literal categories taken from the item.
Price and size are derived: price falls into one of four fixed bands and
size is classified by area (square inches) of the parsed dimensions.
"""

import re
from typing import Dict, List, Optional

from curator.models.domain import Facet, Item

PRICE_RANGES = ['0-1000', '1000-5000', '5000-10000', '10000+']
SIZE_CATEGORIES = ['Small', 'Medium', 'Large', 'Extra Large']

# Share above which a category counts as over-represented
SKEW_THRESHOLDS: Dict[Facet, float] = {
    Facet.MEDIUM: 0.4,
    Facet.PRICE_RANGE: 0.5,
    Facet.STYLE: 0.4,
    Facet.COLOR: 0.3,
}

# Number of market-ranked categories kept per facet
TOP_N: Dict[Facet, int] = {
    Facet.MEDIUM: 8,
    Facet.STYLE: 6,
    Facet.PRICE_RANGE: 4,
    Facet.COLOR: 8,
}

_RANGE_LABEL = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*-\s*(\d+(?:\.\d+)?)\s*$')
_OPEN_LABEL = re.compile(r'^\s*(\d+(?:\.\d+)?)\s*\+\s*$')


def price_bucket(price: float) -> str:
    """Map a price onto one of the fixed bands."""
    if price < 1000:
        return '0-1000'
    if price < 5000:
        return '1000-5000'
    if price < 10000:
        return '5000-10000'
    return '10000+'


def price_in_range(price: float, label: str) -> bool:
    """Whether ``price`` falls inside a range label such as "1000-5000" or "10000+".

    Bounded ranges are half-open ([low, high)) so they agree with
    ``price_bucket``. Labels that are not numeric ranges only match the
    item's own bucket label.
    """
    bounded = _RANGE_LABEL.match(label)
    if bounded:
        low, high = float(bounded.group(1)), float(bounded.group(2))
        return low <= price < high
    open_ended = _OPEN_LABEL.match(label)
    if open_ended:
        return price >= float(open_ended.group(1))
    return price_bucket(price) == label


def size_category(item: Item) -> Optional[str]:
    """Size class of an item, or None when its dimensions are unknown."""
    if item.dimensions is None:
        return None
    area = item.dimensions.area
    if area is None:
        return None
    if area < 100:
        return 'Small'
    if area < 400:
        return 'Medium'
    if area < 1000:
        return 'Large'
    return 'Extra Large'


def facet_values(item: Item, facet: Facet) -> List[str]:
    """All categories an item contributes to for one facet.

    Colors can yield several values; every other facet yields at most one.
    """
    if facet == Facet.MEDIUM:
        return [item.medium] if item.medium else []
    if facet == Facet.STYLE:
        return [item.style] if item.style else []
    if facet == Facet.PRICE_RANGE:
        return [price_bucket(item.price)] if item.price is not None else []
    if facet == Facet.COLOR:
        return list(dict.fromkeys(item.colors))
    category = size_category(item)
    return [category] if category else []
