"""
Fairness Scoring and Selection

Scores candidate trades and picks a bounded, size-balanced result set.
"""

import math
from collections.abc import Iterable

from endzone_trades.models import FairnessTier, TradeProposal

VERY_STRICT_THRESHOLD = 0.80
SOMEWHAT_FAIR_THRESHOLD = 0.70

# Weights for pre-ranking generated candidates before the fairness-only cut
STRATEGIC_FAIRNESS_WEIGHT = 0.6
STRATEGIC_GAIN_WEIGHT = 0.3


def fairness_score(value_given: int, value_received: int) -> float:
    """Ratio of the smaller side to the larger side, in (0, 1]."""
    if value_given <= 0 or value_received <= 0:
        raise ValueError("Both sides of a trade must carry positive value")
    return min(value_given, value_received) / max(value_given, value_received)


def fairness_tier(score: float) -> FairnessTier:
    if score >= VERY_STRICT_THRESHOLD:
        return FairnessTier.VERY_STRICT
    if score >= SOMEWHAT_FAIR_THRESHOLD:
        return FairnessTier.SOMEWHAT_FAIR
    return FairnessTier.FLEECE


def strategic_score(trade: TradeProposal) -> float:
    """Blend of fairness and the requesting team's gain."""
    return (
        trade.fairness_score * STRATEGIC_FAIRNESS_WEIGHT
        + (trade.team_a.net_value / 1000) * STRATEGIC_GAIN_WEIGHT
    )


def by_fairness(trades: Iterable[TradeProposal]) -> list[TradeProposal]:
    """Sort descending by fairness; ties keep their incoming order."""
    return sorted(trades, key=lambda t: t.fairness_score, reverse=True)


def split_result_budget(max_results: int) -> tuple[int, int]:
    """
    Split the result budget between simple and multi-player trades.

    Returns:
        (simple_count, multi_count); an odd budget favours simple trades
    """
    simple_count = math.ceil(max_results / 2)
    multi_count = max_results // 2
    return simple_count, multi_count


def select_proposals(
    simple: Iterable[TradeProposal],
    multi: Iterable[TradeProposal],
    simple_count: int,
    multi_count: int,
    max_results: int,
) -> list[TradeProposal]:
    """
    Two-stage top-K selection.

    The fairest ``simple_count`` 1v1 trades and the fairest ``multi_count``
    multi-player trades are kept, then merged and cut to ``max_results``.
    Shortfalls in one pool are not backfilled from the other.
    """
    kept = by_fairness(simple)[:simple_count] + by_fairness(multi)[:multi_count]
    return by_fairness(kept)[:max_results]
