"""Recommendation Generator.

Turns gaps, imbalances and the size range into typed, prioritized
recommendations. Three families are produced:

- gap filling (``add_artwork``), enriched with candidates from the owner's
  unused inventory when that pool is available;
- rebalancing (``reorder``), which proposes new positions for items of an
  over-represented category beyond the first two;
- sizing (``add_artwork``, ``remove_artwork`` or ``maintain``).

``sort_recommendations`` defines the final order: priority high to low,
then impact descending, stable otherwise.
"""

from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from curator.models.domain import (
    Facet,
    GapSet,
    IdealDistribution,
    ImbalanceSet,
    Item,
    PositionChange,
    Priority,
    Recommendation,
    RecommendationType,
    SizeRange,
    SuggestedItem,
)
from curator.services.curation.facets import facet_values
from curator.services.curation.sizing import round_half_up

MAX_GAP_CANDIDATES = 5
MAX_SIZE_CANDIDATES = 10
# Items of an imbalanced category that stay where they are
KEEP_IN_PLACE = 2


class FacetRule(NamedTuple):
    slug: str
    priority: Priority
    impact: int
    title: str
    reason: str


GAP_RULES: Dict[Facet, FacetRule] = {
    Facet.MEDIUM: FacetRule(
        'medium', Priority.HIGH, 30, 'Add Missing Mediums',
        'Medium diversity improves catalogue appeal and market reach'
    ),
    Facet.STYLE: FacetRule(
        'style', Priority.MEDIUM, 25, 'Add Missing Styles',
        'Style diversity attracts a broader audience'
    ),
    Facet.COLOR: FacetRule(
        'color', Priority.LOW, 15, 'Add Missing Colors',
        'Color diversity creates visual interest'
    ),
    Facet.SIZE_CATEGORY: FacetRule(
        'size', Priority.MEDIUM, 20, 'Add Missing Sizes',
        'Size variety accommodates different spaces and budgets'
    ),
}

REORDER_RULES: Dict[Facet, FacetRule] = {
    Facet.MEDIUM: FacetRule(
        'medium', Priority.HIGH, 35, 'Reorder for Medium Balance',
        'Balanced medium distribution creates visual flow and professional presentation'
    ),
    Facet.PRICE_RANGE: FacetRule(
        'price', Priority.MEDIUM, 25, 'Reorder for Price Balance',
        'Balanced price distribution accommodates different budget ranges'
    ),
    Facet.STYLE: FacetRule(
        'style', Priority.MEDIUM, 30, 'Reorder for Style Balance',
        'Balanced style distribution creates cohesive narrative flow'
    ),
    Facet.COLOR: FacetRule(
        'color', Priority.LOW, 20, 'Reorder for Color Balance',
        'Balanced color distribution creates visual harmony'
    ),
}


def sort_recommendations(recommendations: Iterable[Recommendation]) -> List[Recommendation]:
    return sorted(recommendations, key=lambda r: (r.priority.rank, -r.impact))


# Gap filling

def _first_gap_category(item: Item, facet: Facet, gap: Sequence[str]) -> Optional[str]:
    for value in facet_values(item, facet):
        if value in gap:
            return value
    return None


def gap_filling_recommendations(
    catalogue_id: str,
    gaps: GapSet,
    ideal: IdealDistribution,
    pool: Optional[Sequence[Item]] = None
) -> List[Recommendation]:
    """One ``add_artwork`` recommendation per facet with a non-empty gap.

    With matching pool items the recommendation lists up to five of them
    and carries the facet's own priority. Without a pool, or when nothing
    in it fills the gap, a recommendation without candidates is emitted at
    medium priority with the facet impact scaled by the share of the ideal
    set that is missing.
    """
    recommendations = []
    for facet, rule in GAP_RULES.items():
        gap = gaps.for_facet(facet)
        if not gap:
            continue

        candidates = []
        for item in pool or []:
            category = _first_gap_category(item, facet, gap)
            if category is not None:
                candidates.append(SuggestedItem(
                    id=item.id,
                    title=item.title,
                    reason=f"fills {category} gap"
                ))

        if candidates:
            recommendations.append(Recommendation(
                id=f"gap_{rule.slug}_{catalogue_id}",
                type=RecommendationType.ADD_ARTWORK,
                priority=rule.priority,
                title=rule.title,
                description=(
                    f"Found {len(candidates)} artworks to fill {rule.slug} gaps: "
                    f"{', '.join(gap[:3])}"
                ),
                reason=rule.reason,
                impact=rule.impact,
                suggested_items=candidates[:MAX_GAP_CANDIDATES]
            ))
            continue

        ideal_size = len(ideal.for_facet(facet)) or len(gap)
        recommendations.append(Recommendation(
            id=f"gap_{rule.slug}_{catalogue_id}",
            type=RecommendationType.ADD_ARTWORK,
            priority=Priority.MEDIUM,
            title=rule.title,
            description=f"Consider adding artworks in: {', '.join(gap)}",
            reason=rule.reason,
            impact=min(rule.impact, round_half_up(rule.impact * len(gap) / ideal_size))
        ))
    return recommendations


# Rebalancing

def _target_position(facet: Facet, item_count: int, group_size: int, index: int) -> int:
    """Heuristic destination of the ``index``-th excess item of a group (0-based)."""
    if facet == Facet.MEDIUM:
        return item_count // 2 + index
    if facet == Facet.PRICE_RANGE:
        return item_count // 3 + index
    return (item_count // (group_size + 1)) * (index + 1)


def _move_reason(facet: Facet, category: str) -> str:
    if facet == Facet.MEDIUM:
        return f"Move {category} artwork to balance distribution"
    if facet == Facet.PRICE_RANGE:
        return f"Move {category} artwork to balance price distribution"
    if facet == Facet.STYLE:
        return f"Spread {category} artworks throughout catalogue"
    return f"Space out {category} artworks for visual balance"


def normalize_positions(changes: List[PositionChange], item_count: int) -> List[PositionChange]:
    """Clamp targets into the catalogue and give every move its own slot.

    A target already claimed by an earlier move goes to the nearest free
    position, trying the next position up before the one below. Repeated
    moves of the same item keep only the first.
    """
    if item_count <= 0:
        return []
    claimed = set()
    seen_items = set()
    normalized = []
    for change in changes:
        if change.item_id in seen_items:
            continue
        target = min(max(change.suggested_position, 0), item_count - 1)
        if target in claimed:
            for offset in range(1, item_count):
                if target + offset < item_count and target + offset not in claimed:
                    target += offset
                    break
                if target - offset >= 0 and target - offset not in claimed:
                    target -= offset
                    break
        claimed.add(target)
        seen_items.add(change.item_id)
        normalized.append(change.model_copy(update={'suggested_position': target}))
    return normalized


def propose_moves(items: Sequence[Item], facet: Facet, categories: Sequence[str]) -> List[PositionChange]:
    """Raw (unnormalized) moves spreading each imbalanced category."""
    changes = []
    item_count = len(items)
    for category in categories:
        group = [item for item in items if category in facet_values(item, facet)]
        if len(group) <= KEEP_IN_PLACE:
            continue
        for index, item in enumerate(group[KEEP_IN_PLACE:]):
            changes.append(PositionChange(
                item_id=item.id,
                current_position=item.position,
                suggested_position=max(0, _target_position(facet, item_count, len(group), index)),
                reason=_move_reason(facet, category)
            ))
    return changes


def reorder_recommendations(
    catalogue_id: str,
    items: Sequence[Item],
    imbalances: ImbalanceSet
) -> List[Recommendation]:
    """One ``reorder`` recommendation per facet that has movable items."""
    recommendations = []
    for facet, rule in REORDER_RULES.items():
        categories = imbalances.for_facet(facet)
        if not categories:
            continue
        changes = normalize_positions(propose_moves(items, facet, categories), len(items))
        if not changes:
            continue
        recommendations.append(Recommendation(
            id=f"balance_{rule.slug}_{catalogue_id}",
            type=RecommendationType.REORDER,
            priority=rule.priority,
            title=rule.title,
            description=(
                f"Suggested reordering to balance {rule.slug} distribution: "
                f"{', '.join(categories)}"
            ),
            reason=rule.reason,
            impact=rule.impact,
            suggested_changes=changes
        ))
    return recommendations


# Sizing

def size_recommendations(
    catalogue_id: str,
    items: Sequence[Item],
    size_range: SizeRange,
    pool: Optional[Sequence[Item]] = None
) -> List[Recommendation]:
    """Exactly one recommendation comparing the item count to ``size_range``."""
    count = len(items)
    bounds = f"{size_range.min}-{size_range.max}"

    if count < size_range.min:
        needed = size_range.min - count
        candidates = list(pool or [])[:min(needed, MAX_SIZE_CANDIDATES)]
        return [Recommendation(
            id=f"size_add_{catalogue_id}",
            type=RecommendationType.ADD_ARTWORK,
            priority=Priority.HIGH,
            title='Add Artworks to Reach Optimal Size',
            description=(
                f"Catalogue has {count} artworks, optimal range is {bounds}. "
                f"Add {needed} more artworks."
            ),
            reason='Optimal catalogue size improves engagement and professional presentation',
            impact=40,
            suggested_items=[
                SuggestedItem(id=item.id, title=item.title, reason="adds to reach optimal size")
                for item in candidates
            ]
        )]

    if count > size_range.max:
        excess = count - size_range.max
        weakest = sorted(items, key=lambda item: item.performance_score)[:excess]
        return [Recommendation(
            id=f"size_remove_{catalogue_id}",
            type=RecommendationType.REMOVE_ARTWORK,
            priority=Priority.MEDIUM,
            title='Remove Artworks to Reach Optimal Size',
            description=(
                f"Catalogue has {count} artworks, optimal range is {bounds}. "
                f"Remove {excess} artworks."
            ),
            reason='Optimal catalogue size prevents overwhelming viewers and maintains focus',
            impact=30,
            suggested_items=[
                SuggestedItem(
                    id=item.id,
                    title=item.title,
                    reason=f"lowest performing (score: {item.performance_score:.1f})"
                )
                for item in weakest
            ]
        )]

    return [Recommendation(
        id=f"size_maintain_{catalogue_id}",
        type=RecommendationType.MAINTAIN,
        priority=Priority.LOW,
        title='Catalogue Size is Optimal',
        description=f"Current size of {count} artworks is within optimal range of {bounds}.",
        reason='Current catalogue size provides good balance for engagement and presentation',
        impact=0
    )]


def generate_recommendations(
    catalogue_id: str,
    items: Sequence[Item],
    gaps: GapSet,
    ideal: IdealDistribution,
    imbalances: ImbalanceSet,
    size_range: SizeRange,
    pool: Optional[Sequence[Item]] = None
) -> List[Recommendation]:
    """All three families, in final order."""
    return sort_recommendations(
        gap_filling_recommendations(catalogue_id, gaps, ideal, pool)
        + reorder_recommendations(catalogue_id, items, imbalances)
        + size_recommendations(catalogue_id, items, size_range, pool)
    )
