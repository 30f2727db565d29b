"""
Trade Proposal Models

Output units of the trade recommendation engine.
"""

from enum import Enum

from pydantic import BaseModel, Field

from endzone_trades.models.player import ValuedPlayer


class FairnessTier(str, Enum):
    """Fairness bucket derived from the fairness score."""

    VERY_STRICT = "very_strict"
    SOMEWHAT_FAIR = "somewhat_fair"
    FLEECE = "fleece"


class TradeType(str, Enum):
    """Cardinality pattern of a trade."""

    ONE_FOR_ONE = "1v1"
    TWO_FOR_TWO = "2v2"
    THREE_FOR_THREE = "3v3"

    @property
    def is_multi_player(self) -> bool:
        return self is not TradeType.ONE_FOR_ONE


class TradeAsset(BaseModel):
    """A player moving in a trade."""

    player_id: str
    name: str
    position: str
    value: int

    @classmethod
    def from_player(cls, player: ValuedPlayer) -> "TradeAsset":
        return cls(
            player_id=player.player_id,
            name=player.name,
            position=player.position,
            value=player.endzone_value,
        )


class TradeSide(BaseModel):
    """One team's view of a trade."""

    owner_id: str | None = None
    team_name: str
    giving: list[TradeAsset]
    receiving: list[TradeAsset]
    net_value: int = Field(description="Value received minus value given")


class TradeProposal(BaseModel):
    """A candidate trade between the requesting team (A) and another team (B)."""

    trade_id: str
    team_a: TradeSide
    team_b: TradeSide
    fairness_score: float = Field(gt=0, le=1)
    fairness_tier: FairnessTier
    trade_type: TradeType
    reasoning: list[str] = Field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        # trade_id is random per build; two proposals for the same swap are equal
        if not isinstance(other, TradeProposal):
            return NotImplemented
        return self.model_dump(exclude={"trade_id"}) == other.model_dump(exclude={"trade_id"})
