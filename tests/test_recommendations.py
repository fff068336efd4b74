"""Tests for the recommendation generator."""

import pytest

from curator.models.domain import (
    Facet,
    GapSet,
    ImbalanceSet,
    PositionChange,
    Priority,
    Recommendation,
    RecommendationType,
    SizeRange,
)
from curator.services.curation.analysis import analyze_balance, analyze_gaps, detect_imbalances
from curator.services.curation.distribution import DEFAULT_DISTRIBUTION
from curator.services.curation.recommendations import (
    gap_filling_recommendations,
    generate_recommendations,
    normalize_positions,
    propose_moves,
    reorder_recommendations,
    size_recommendations,
    sort_recommendations,
)


def _rec(id, priority, impact):
    return Recommendation(
        id=id,
        type=RecommendationType.ADD_ARTWORK,
        priority=priority,
        title=id,
        description="",
        reason="",
        impact=impact
    )


def test_sort_by_priority_then_impact():
    recommendations = [
        _rec("low", Priority.LOW, 90),
        _rec("medium-20", Priority.MEDIUM, 20),
        _rec("high-30", Priority.HIGH, 30),
        _rec("medium-25", Priority.MEDIUM, 25),
        _rec("high-40", Priority.HIGH, 40),
    ]
    ordered = [r.id for r in sort_recommendations(recommendations)]
    assert ordered == ["high-40", "high-30", "medium-25", "medium-20", "low"]


def test_sort_is_stable_for_equal_keys():
    recommendations = [_rec("first", Priority.MEDIUM, 25), _rec("second", Priority.MEDIUM, 25)]
    assert [r.id for r in sort_recommendations(recommendations)] == ["first", "second"]


# Gap filling

def test_gap_fill_with_matching_pool_items(item_factory):
    items = [item_factory(str(i), i, medium="Acrylic") for i in range(3)]
    gaps = analyze_gaps(items, DEFAULT_DISTRIBUTION)
    pool = [
        item_factory("p1", title="Harbor", medium="Watercolor"),
        item_factory("p2", title="Dunes", medium="Acrylic"),
        item_factory("p3", title="Relic", medium="Sculpture"),
    ]

    recommendations = gap_filling_recommendations("cat-1", gaps, DEFAULT_DISTRIBUTION, pool)
    medium = next(r for r in recommendations if r.id == "gap_medium_cat-1")

    assert medium.type == RecommendationType.ADD_ARTWORK
    assert medium.priority == Priority.HIGH
    assert medium.impact == 30
    assert [(s.id, s.reason) for s in medium.suggested_items] == [
        ("p1", "fills Watercolor gap"),
        ("p3", "fills Sculpture gap"),
    ]
    assert medium.suggested_items[0].title == "Harbor"


def test_gap_fill_lists_at_most_five_candidates(item_factory):
    gaps = GapSet(colors=["Red"])
    pool = [item_factory(f"p{i}", colors=["Red"]) for i in range(8)]

    recommendations = gap_filling_recommendations("c", gaps, DEFAULT_DISTRIBUTION, pool)

    assert len(recommendations) == 1
    assert recommendations[0].priority == Priority.LOW
    assert recommendations[0].impact == 15
    assert len(recommendations[0].suggested_items) == 5


def test_gap_fill_without_pool_scales_impact():
    gaps = analyze_gaps([], DEFAULT_DISTRIBUTION)
    gaps.mediums = gaps.mediums[:7]

    recommendations = {
        r.id: r for r in gap_filling_recommendations("c", gaps, DEFAULT_DISTRIBUTION, None)
    }

    assert set(recommendations) == {"gap_medium_c", "gap_style_c", "gap_color_c", "gap_size_c"}
    for recommendation in recommendations.values():
        assert recommendation.priority == Priority.MEDIUM
        assert recommendation.suggested_items == []
    # 30 * 7 / 8 = 26.25
    assert recommendations["gap_medium_c"].impact == 26
    assert recommendations["gap_style_c"].impact == 25
    assert recommendations["gap_color_c"].impact == 15
    assert recommendations["gap_size_c"].impact == 20


def test_gap_fill_with_unmatched_pool_falls_back(item_factory):
    gaps = GapSet(styles=["Minimalist"])
    pool = [item_factory("p1", style="Abstract")]

    [recommendation] = gap_filling_recommendations("c", gaps, DEFAULT_DISTRIBUTION, pool)

    assert recommendation.priority == Priority.MEDIUM
    assert recommendation.suggested_items == []
    # one of six ideal styles missing
    assert recommendation.impact == 4


def test_price_gaps_do_not_produce_gap_fill():
    gaps = GapSet(price_ranges=['10000+'])
    assert gap_filling_recommendations("c", gaps, DEFAULT_DISTRIBUTION, []) == []


# Rebalancing

def test_medium_reorder_moves_items_beyond_the_first_two(item_factory):
    mediums = ["Acrylic", "Acrylic", "Acrylic", "Acrylic", "Print", "Sculpture"]
    items = [item_factory(f"i{p}", p, medium=m) for p, m in enumerate(mediums)]
    imbalances = detect_imbalances(analyze_balance(items))

    [recommendation] = [
        r for r in reorder_recommendations("c", items, imbalances) if r.id == "balance_medium_c"
    ]

    assert recommendation.type == RecommendationType.REORDER
    assert recommendation.priority == Priority.HIGH
    assert recommendation.impact == 35
    assert [(c.item_id, c.current_position, c.suggested_position) for c in recommendation.suggested_changes] == [
        ("i2", 2, 3),
        ("i3", 3, 4),
    ]


def test_style_spread_positions(item_factory):
    styles = ["Abstract"] * 5 + ["Realistic", "Minimalist", "Traditional", "Contemporary"]
    items = [item_factory(f"i{p}", p, style=s) for p, s in enumerate(styles)]

    changes = propose_moves(items, Facet.STYLE, ["Abstract"])

    # 9 items, group of 5: step 9 // 6 = 1
    assert [c.suggested_position for c in changes] == [1, 2, 3]
    assert changes[0].reason == "Spread Abstract artworks throughout catalogue"


def test_groups_of_two_are_left_alone(item_factory):
    items = [item_factory("a", 0, medium="Print"), item_factory("b", 1, medium="Print")]
    imbalances = ImbalanceSet(medium=["Print"])
    assert reorder_recommendations("c", items, imbalances) == []


def test_normalize_positions_resolves_collisions():
    changes = [
        PositionChange(item_id=f"i{k}", current_position=k, suggested_position=5, reason="r")
        for k in range(3)
    ]
    normalized = normalize_positions(changes, 6)
    assert [c.suggested_position for c in normalized] == [5, 4, 3]


def test_normalize_positions_clamps_and_drops_repeats():
    changes = [
        PositionChange(item_id="a", current_position=0, suggested_position=10, reason="r"),
        PositionChange(item_id="a", current_position=0, suggested_position=1, reason="r"),
        PositionChange(item_id="b", current_position=1, suggested_position=0, reason="r"),
    ]
    normalized = normalize_positions(changes, 4)
    assert [(c.item_id, c.suggested_position) for c in normalized] == [("a", 3), ("b", 0)]
    assert normalize_positions(changes, 0) == []


def test_suggested_positions_stay_inside_catalogue(item_factory):
    colors = [["Red"], ["Red"], ["Red"], ["Red"], ["Red", "Blue"]]
    items = [item_factory(f"i{p}", p, colors=c, medium="Print", style="Abstract", price=100)
             for p, c in enumerate(colors)]
    imbalances = detect_imbalances(analyze_balance(items))

    recommendations = reorder_recommendations("c", items, imbalances)

    assert recommendations
    for recommendation in recommendations:
        targets = [c.suggested_position for c in recommendation.suggested_changes]
        assert all(0 <= t <= len(items) - 1 for t in targets)
        assert len(targets) == len(set(targets))


# Sizing

def test_size_add_suggests_pool_items(item_factory):
    items = [item_factory("a", 0), item_factory("b", 1)]
    pool = [item_factory(f"p{i}", title=f"Pool {i}") for i in range(3)]

    [recommendation] = size_recommendations("c", items, SizeRange(min=8, max=16, ideal=12), pool)

    assert recommendation.id == "size_add_c"
    assert recommendation.priority == Priority.HIGH
    assert recommendation.impact == 40
    assert "Add 6 more artworks" in recommendation.description
    assert [s.id for s in recommendation.suggested_items] == ["p0", "p1", "p2"]
    assert recommendation.suggested_items[0].reason == "adds to reach optimal size"


def test_size_add_candidates_limited_by_need(item_factory):
    items = [item_factory(f"i{i}", i) for i in range(6)]
    pool = [item_factory(f"p{i}") for i in range(20)]

    [recommendation] = size_recommendations("c", items, SizeRange(min=8, max=16, ideal=12), pool)

    assert len(recommendation.suggested_items) == 2


def test_size_remove_picks_lowest_performers(item_factory):
    items = [item_factory(f"i{i}", i, views=10 * i, likes=i) for i in range(10)]
    items[0] = item_factory("i0", 0, views=500)

    [recommendation] = size_recommendations("c", items, SizeRange(min=6, max=8, ideal=7))

    assert recommendation.type == RecommendationType.REMOVE_ARTWORK
    assert recommendation.priority == Priority.MEDIUM
    assert recommendation.impact == 30
    assert [s.id for s in recommendation.suggested_items] == ["i1", "i2"]
    assert recommendation.suggested_items[0].reason == "lowest performing (score: 1.3)"


def test_size_maintain_inside_range(item_factory):
    items = [item_factory(f"i{i}", i) for i in range(10)]

    [recommendation] = size_recommendations("c", items, SizeRange(min=8, max=16, ideal=12))

    assert recommendation.type == RecommendationType.MAINTAIN
    assert recommendation.priority == Priority.LOW
    assert recommendation.impact == 0


@pytest.mark.parametrize("count", [0, 3, 8, 12, 16, 30])
def test_exactly_one_size_recommendation(item_factory, count):
    items = [item_factory(f"i{i}", i) for i in range(count)]
    recommendations = size_recommendations("c", items, SizeRange(min=8, max=16, ideal=12))
    assert len(recommendations) == 1


def test_generate_recommendations_is_ordered(item_factory):
    items = [item_factory(str(i), i, medium="Acrylic", style="Abstract") for i in range(4)]
    gaps = analyze_gaps(items, DEFAULT_DISTRIBUTION)
    imbalances = detect_imbalances(analyze_balance(items))

    recommendations = generate_recommendations(
        "c", items, gaps, DEFAULT_DISTRIBUTION, imbalances, SizeRange(min=8, max=16, ideal=12)
    )

    keys = [(r.priority.rank, -r.impact) for r in recommendations]
    assert keys == sorted(keys)
    assert recommendations[0].id == "size_add_c"
    assert recommendations[1].id == "balance_medium_c"
