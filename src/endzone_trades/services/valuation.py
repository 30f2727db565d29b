"""
Endzone Value Model

Turns a season projection into a single integer trade currency that can be
compared across positions. The value starts as the player's percentile in
the league-wide projection pool (scaled to 1000) and is then adjusted for
position (or QB tier), age, and, in dynasty leagues, positional longevity.
"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

import numpy as np

from endzone_trades.services.valuation_tables import ValuationTables

VALUE_SCALE = 1000


def scale_value(value: int, multiplier: float | Decimal) -> int:
    """Multiply and round half up to the nearest integer."""
    product = Decimal(value) * Decimal(str(multiplier))
    return int(product.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _names_overlap(a: str, b: str) -> bool:
    return bool(a) and bool(b) and (a in b or b in a)


class EndzoneValueModel:
    """
    Values players against one request's projection pool.

    Args:
        tables: Heuristic multipliers, tiers and age curves
        projection_pool: Every projection visible this request; non-positive
            entries are ignored
        is_dynasty: Whether the league uses dynasty values
    """

    def __init__(
        self,
        tables: ValuationTables,
        projection_pool: Sequence[float],
        is_dynasty: bool,
    ):
        self.tables = tables
        self.is_dynasty = is_dynasty
        pool = np.asarray([p for p in projection_pool if p > 0], dtype=float)
        self._ascending = np.sort(pool)

    @property
    def pool_size(self) -> int:
        return int(self._ascending.size)

    @property
    def age_impact(self) -> float:
        key = "dynasty" if self.is_dynasty else "redraft"
        return self.tables.age_impact[key]

    def rank(self, projected_points: float) -> int:
        """1-based rank of the first pool entry at or below the projection."""
        greater = self.pool_size - int(
            np.searchsorted(self._ascending, projected_points, side="right")
        )
        return greater + 1

    def base_value(self, projected_points: float) -> int:
        """Percentile of the projection in the pool, scaled to 0..1000."""
        if projected_points <= 0:
            return 0
        n = self.pool_size
        if n == 0:
            return scale_value(10, projected_points)

        above_or_equal = n - self.rank(projected_points) + 1
        quotient, remainder = divmod(above_or_equal * VALUE_SCALE, n)
        return quotient + (1 if 2 * remainder >= n else 0)

    def qb_multiplier(self, name: str) -> float:
        """
        Tier multiplier for a quarterback.

        Full names are matched first across every tier in order, then the
        first name token; unmatched QBs get the default tier.
        """
        wanted = name.strip().lower()
        if not wanted:
            return self.tables.default_qb_multiplier

        for tier in self.tables.qb_tiers:
            if any(_names_overlap(wanted, entry.lower()) for entry in tier.players):
                return tier.multiplier

        first = wanted.split()[0]
        for tier in self.tables.qb_tiers:
            for entry in tier.players:
                tokens = entry.lower().split()
                if tokens and _names_overlap(first, tokens[0]):
                    return tier.multiplier

        return self.tables.default_qb_multiplier

    def position_multiplier(self, position: str, name: str) -> float:
        if position == "QB":
            return self.qb_multiplier(name)
        return self.tables.position_multipliers.get(position, 1.0)

    def age_multiplier(self, position: str, age: int | None) -> Decimal:
        """1 + (age delta x league impact); exactly 1 when age is unknown."""
        curve = self.tables.age_curves.get(position)
        if not curve or age is None or age <= 0:
            return Decimal(1)

        step = next(s for s in curve if s.max_age is None or age <= s.max_age)
        return Decimal(1) + Decimal(str(step.delta)) * Decimal(str(self.age_impact))

    def value(
        self,
        projected_points: float,
        position: str,
        name: str,
        age: int | None = None,
    ) -> int:
        """
        Compute a player's Endzone Value.

        Each adjustment rounds to an integer before the next is applied:
        position/tier, then age, then the dynasty position multiplier.

        Returns:
            Endzone Value, never negative
        """
        value = self.base_value(projected_points)
        if value <= 0:
            return 0

        value = scale_value(value, self.position_multiplier(position, name))
        value = scale_value(value, self.age_multiplier(position, age))

        if self.is_dynasty:
            value = scale_value(
                value, self.tables.dynasty_position_multipliers.get(position, 1.0)
            )

        return max(0, value)
