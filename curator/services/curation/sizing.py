"""Size Optimizer: the item-count range a catalogue should aim for."""

import math
from typing import Optional, Sequence

from curator.models.domain import CatalogueType, ExperienceLevel, SizeRange
from curator.models.domain.curation import MAX_CATALOGUE_SIZE, MIN_CATALOGUE_SIZE

BASE_SIZE_BY_TYPE = {
    CatalogueType.SHOWCASE: 12,
    CatalogueType.PORTFOLIO: 15,
    CatalogueType.EXHIBITION: 20,
    CatalogueType.COLLECTION: 10,
    CatalogueType.SERIES: 8,
    CatalogueType.MIXED: 12,
}
DEFAULT_BASE_SIZE = 12

EXPERIENCE_MULTIPLIERS = {
    ExperienceLevel.BEGINNER: 0.8,
    ExperienceLevel.INTERMEDIATE: 1.0,
    ExperienceLevel.ADVANCED: 1.2,
    ExperienceLevel.EXPERT: 1.4,
}
DEFAULT_EXPERIENCE_MULTIPLIER = 1.0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamped_range(low: float, high: float, ideal: float) -> SizeRange:
    min_size = min(max(MIN_CATALOGUE_SIZE, math.floor(low)), MAX_CATALOGUE_SIZE)
    max_size = max(min(MAX_CATALOGUE_SIZE, math.ceil(high)), min_size)
    ideal_size = min(max(round_half_up(ideal), min_size), max_size)
    return SizeRange(min=min_size, max=max_size, ideal=ideal_size)


def optimize_size(
    catalogue_type: Optional[CatalogueType],
    experience: Optional[ExperienceLevel],
    peer_sizes: Sequence[int]
) -> SizeRange:
    """Ideal size range from peer catalogues, else from the lookup tables.

    Peer sizes of zero are ignored. The result always lies within
    [MIN_CATALOGUE_SIZE, MAX_CATALOGUE_SIZE] with min <= ideal <= max.
    """
    samples = [size for size in peer_sizes if size > 0]
    if samples:
        average = sum(samples) / len(samples)
        return _clamped_range(average * 0.7, average * 1.3, average)

    base = BASE_SIZE_BY_TYPE.get(catalogue_type, DEFAULT_BASE_SIZE)
    multiplier = EXPERIENCE_MULTIPLIERS.get(experience, DEFAULT_EXPERIENCE_MULTIPLIER)
    return _clamped_range(base * multiplier * 0.8, base * multiplier * 1.2, base * multiplier)


def cap_size_range(size_range: SizeRange, max_items: int) -> SizeRange:
    """Lower a range so it never exceeds ``max_items``.

    The cap itself is floored at MIN_CATALOGUE_SIZE, so a very small
    ``max_items`` yields the smallest allowed range rather than one below it.
    """
    max_size = min(size_range.max, max(max_items, MIN_CATALOGUE_SIZE))
    min_size = min(size_range.min, max_size)
    ideal = min(size_range.ideal, max_size)
    return SizeRange(min=min_size, max=max_size, ideal=max(ideal, min_size))
