"""Scoring Engine: folds gaps, medium imbalance and size into one 0-100 score."""

from curator.models.domain import Balance, GapSet
from curator.services.curation.analysis import detect_imbalance

# The score penalizes medium skew more eagerly than the reorder heuristics do
SCORING_MEDIUM_SKEW_THRESHOLD = 0.3

MEDIUM_GAP_PENALTY = 5
PRICE_GAP_PENALTY = 3
STYLE_GAP_PENALTY = 4
COLOR_GAP_PENALTY = 2
MEDIUM_IMBALANCE_PENALTY = 3
SMALL_CATALOGUE_SIZE = 5
SMALL_CATALOGUE_PENALTY = 10


def calculate_score(item_count: int, gaps: GapSet, balance: Balance) -> int:
    score = 100
    score -= MEDIUM_GAP_PENALTY * len(gaps.mediums)
    score -= PRICE_GAP_PENALTY * len(gaps.price_ranges)
    score -= STYLE_GAP_PENALTY * len(gaps.styles)
    score -= COLOR_GAP_PENALTY * len(gaps.colors)

    skewed = detect_imbalance(balance.medium, SCORING_MEDIUM_SKEW_THRESHOLD)
    score -= MEDIUM_IMBALANCE_PENALTY * len(skewed)

    score -= SMALL_CATALOGUE_PENALTY * max(0, SMALL_CATALOGUE_SIZE - item_count)

    return max(0, min(100, score))
