"""Tests for gap, balance and imbalance analysis."""

from curator.models.domain import Balance, ImbalanceSet, Item
from curator.services.curation.analysis import (
    analyze_balance,
    analyze_gaps,
    detect_imbalance,
    detect_imbalances,
)
from curator.services.curation.distribution import DEFAULT_DISTRIBUTION


def test_empty_catalogue_gaps_are_the_full_ideal_lists():
    gaps = analyze_gaps([], DEFAULT_DISTRIBUTION)

    assert gaps.mediums == DEFAULT_DISTRIBUTION.mediums
    assert gaps.styles == DEFAULT_DISTRIBUTION.styles
    assert gaps.price_ranges == DEFAULT_DISTRIBUTION.price_ranges
    assert gaps.colors == DEFAULT_DISTRIBUTION.colors
    assert gaps.sizes == DEFAULT_DISTRIBUTION.sizes


def test_gaps_keep_ideal_order_and_skip_present_categories(item_factory):
    items = [
        item_factory("a", 0, medium="Acrylic", style="Abstract", price=500, colors=["Blue"], dimensions="8x8"),
        item_factory("b", 1, medium="Print", price=12000, colors=["Red", "White"]),
    ]

    gaps = analyze_gaps(items, DEFAULT_DISTRIBUTION)

    assert gaps.mediums == ['Oil on Canvas', 'Watercolor', 'Photography', 'Mixed Media', 'Digital Art', 'Sculpture']
    assert gaps.styles == ['Realistic', 'Contemporary', 'Traditional', 'Minimalist', 'Expressionist']
    assert gaps.price_ranges == ['1000-5000', '5000-10000']
    assert gaps.colors == ['Green', 'Yellow', 'Purple', 'Orange', 'Black']
    assert gaps.sizes == ['Medium', 'Large', 'Extra Large']


def test_gaps_are_subsets_of_the_ideal(item_factory):
    items = [item_factory("a", medium="Fresco", style="Baroque", colors=["Teal"])]
    gaps = analyze_gaps(items, DEFAULT_DISTRIBUTION)

    for field in ('mediums', 'styles', 'price_ranges', 'colors', 'sizes'):
        assert set(getattr(gaps, field)) <= set(getattr(DEFAULT_DISTRIBUTION, field))


def test_unparseable_dimensions_do_not_fill_size_gaps(item_factory):
    items = [item_factory("a", dimensions="large-ish")]
    gaps = analyze_gaps(items, DEFAULT_DISTRIBUTION)
    assert gaps.sizes == DEFAULT_DISTRIBUTION.sizes


def test_balance_counts_in_first_seen_order(item_factory):
    items = [
        item_factory("a", 0, medium="Print", colors=["Red", "Blue"], price=100),
        item_factory("b", 1, medium="Acrylic", colors=["Blue"], price=2000),
        item_factory("c", 2, medium="Print", colors=["Red"], price=300),
    ]

    balance = analyze_balance(items)

    assert list(balance.medium.items()) == [("Print", 2), ("Acrylic", 1)]
    assert list(balance.color.items()) == [("Red", 2), ("Blue", 2)]
    assert balance.price_range == {'0-1000': 2, '1000-5000': 1}
    assert balance.style == {}


def test_color_histogram_may_exceed_item_count(item_factory):
    items = [item_factory("a", colors=["Red", "Blue", "Green"])]
    balance = analyze_balance(items)
    assert sum(balance.color.values()) == 3


def test_imbalance_is_strictly_greater_than_threshold():
    assert detect_imbalance({"A": 2, "B": 3}, 0.4) == ["B"]
    # 2 of 5 is exactly 0.4 and does not count
    assert detect_imbalance({"A": 2, "B": 2, "C": 1}, 0.4) == []


def test_imbalance_of_empty_histogram():
    assert detect_imbalance({}, 0.3) == []


def test_single_category_domination(item_factory):
    items = [item_factory(str(i), i, medium="Acrylic") for i in range(3)]

    gaps = analyze_gaps(items, DEFAULT_DISTRIBUTION)
    imbalances = detect_imbalances(analyze_balance(items))

    assert len(gaps.mediums) == 7
    assert "Acrylic" not in gaps.mediums
    assert imbalances.medium == ["Acrylic"]


def test_detect_imbalances_uses_per_facet_thresholds():
    balance = Balance(
        medium={"A": 2, "B": 3},                 # 0.6 > 0.4
        style={"X": 4, "Y": 6},                  # 0.6 > 0.4
        price_range={'0-1000': 1, '10000+': 1},  # 0.5 is not > 0.5
        color={"Red": 1, "Blue": 1, "Green": 1},  # 0.333 > 0.3
        size_category={"Small": 5},
    )

    imbalances = detect_imbalances(balance)

    assert imbalances.medium == ["B"]
    assert imbalances.style == ["Y"]
    assert imbalances.price_range == []
    assert imbalances.color == ["Red", "Blue", "Green"]


def test_empty_catalogue_has_no_imbalance():
    assert detect_imbalances(analyze_balance([])) == ImbalanceSet()


def test_items_without_facets_are_ignored():
    balance = analyze_balance([Item(id="bare")])
    assert balance.model_dump() == {
        'medium': {}, 'style': {}, 'price_range': {}, 'color': {}, 'size_category': {}
    }
