"""Gap, balance and imbalance analysis.

Pure functions over a catalogue's items. Histograms are plain dicts, which
keep insertion order, so category order always follows item order and
results are reproducible.
"""

from typing import Dict, List, Sequence

from curator.models.domain import Balance, Facet, GapSet, IdealDistribution, ImbalanceSet, Item
from curator.services.curation.facets import SKEW_THRESHOLDS, facet_values, price_in_range


def present_categories(items: Sequence[Item], facet: Facet) -> Dict[str, None]:
    """Categories represented in ``items`` for one facet, in first-seen order."""
    present: Dict[str, None] = {}
    for item in items:
        for value in facet_values(item, facet):
            present.setdefault(value, None)
    return present


def analyze_gaps(items: Sequence[Item], ideal: IdealDistribution) -> GapSet:
    """Ideal categories with no item in the catalogue, keeping ideal order.

    Price gaps are checked against each ideal range label, so market-derived
    labels are honored even when they differ from the fixed bands. Items
    with unparseable dimensions add no size evidence.
    """
    mediums = present_categories(items, Facet.MEDIUM)
    styles = present_categories(items, Facet.STYLE)
    colors = present_categories(items, Facet.COLOR)
    sizes = present_categories(items, Facet.SIZE_CATEGORY)
    prices = [item.price for item in items if item.price is not None]

    return GapSet(
        mediums=[m for m in ideal.mediums if m not in mediums],
        styles=[s for s in ideal.styles if s not in styles],
        price_ranges=[
            label for label in ideal.price_ranges
            if not any(price_in_range(price, label) for price in prices)
        ],
        colors=[c for c in ideal.colors if c not in colors],
        sizes=[s for s in ideal.sizes if s not in sizes],
    )


def count_categories(items: Sequence[Item], facet: Facet) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for item in items:
        for value in facet_values(item, facet):
            counts[value] = counts.get(value, 0) + 1
    return counts


def analyze_balance(items: Sequence[Item]) -> Balance:
    """Per-facet histograms; an item counts once for each of its colors."""
    return Balance(
        medium=count_categories(items, Facet.MEDIUM),
        style=count_categories(items, Facet.STYLE),
        price_range=count_categories(items, Facet.PRICE_RANGE),
        color=count_categories(items, Facet.COLOR),
        size_category=count_categories(items, Facet.SIZE_CATEGORY),
    )


def detect_imbalance(counts: Dict[str, int], threshold: float) -> List[str]:
    """Categories whose share of ``counts`` strictly exceeds ``threshold``.

    This is the single definition of imbalance used by both the
    recommendation generator and the score.
    """
    total = sum(counts.values())
    if total == 0:
        return []
    return [category for category, count in counts.items() if count / total > threshold]


def detect_imbalances(balance: Balance) -> ImbalanceSet:
    """Apply the per-facet skew thresholds to every histogram."""
    return ImbalanceSet(**{
        facet.value: detect_imbalance(balance.for_facet(facet), threshold)
        for facet, threshold in SKEW_THRESHOLDS.items()
    })
