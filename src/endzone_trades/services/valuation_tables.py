"""
Heuristic tables for the Endzone Value model.

The tables ship as versioned JSON inside the package and can be swapped for
another file (``ENDZONE_VALUATION_TABLES_PATH``) without a rebuild.
"""

import json
import logging
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)

DEFAULT_TABLES = "valuation_tables.json"


class QBTier(BaseModel):
    """A named QB tier; earlier tiers take precedence on overlapping names."""

    name: str
    multiplier: float = Field(gt=0)
    players: list[str] = Field(default_factory=list)


class AgeStep(BaseModel):
    """Applies to ages up to and including ``max_age``; ``None`` is open-ended."""

    max_age: int | None
    delta: float


class ValuationTables(BaseModel):
    """All tunable constants of the Endzone Value model."""

    version: str
    qb_tiers: list[QBTier]
    default_qb_tier: str
    position_multipliers: dict[str, float]
    dynasty_position_multipliers: dict[str, float]
    age_impact: dict[str, float]
    age_curves: dict[str, list[AgeStep]]

    @model_validator(mode="after")
    def _check_consistency(self) -> "ValuationTables":
        tier_names = [tier.name for tier in self.qb_tiers]
        if self.default_qb_tier not in tier_names:
            raise ValueError(f"default_qb_tier {self.default_qb_tier!r} is not a QB tier")
        for key in ("dynasty", "redraft"):
            if key not in self.age_impact:
                raise ValueError(f"age_impact is missing {key!r}")
        for position, steps in self.age_curves.items():
            bounded = [step.max_age for step in steps if step.max_age is not None]
            if bounded != sorted(bounded):
                raise ValueError(f"age curve for {position} must ascend by max_age")
            if not steps or steps[-1].max_age is not None:
                raise ValueError(f"age curve for {position} must end with an open-ended step")
        return self

    @property
    def default_qb_multiplier(self) -> float:
        return next(t.multiplier for t in self.qb_tiers if t.name == self.default_qb_tier)


def load_valuation_tables(path: Path | None = None) -> ValuationTables:
    """
    Load and validate the valuation tables.

    Args:
        path: JSON file to load; the packaged defaults when None

    Returns:
        Validated ValuationTables
    """
    if path is None:
        raw = resources.files("endzone_trades").joinpath("data", DEFAULT_TABLES).read_text(
            encoding="utf-8"
        )
        source = f"package:{DEFAULT_TABLES}"
    else:
        raw = Path(path).read_text(encoding="utf-8")
        source = str(path)

    tables = ValuationTables(**json.loads(raw))
    logger.info("Loaded valuation tables %s from %s", tables.version, source)
    return tables
