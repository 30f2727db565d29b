"""
Team Roster Models

Per-team bookkeeping built fresh for every recommendation request.
"""

from pydantic import BaseModel, Field

from endzone_trades.models.player import ValuedPlayer


class TeamSummary(BaseModel):
    """Team identity plus coarse positional bookkeeping."""

    roster_id: int
    owner_id: str | None = None
    team_name: str
    username: str | None = None
    display_name: str | None = None
    player_count: int = 0
    total_value: int = Field(default=0, description="Sum of Endzone Values")
    position_counts: dict[str, int] = Field(default_factory=dict)
    needed_positions: list[str] = Field(
        default_factory=list, description="Static placeholder, not derived from the roster"
    )
    surplus_positions: list[str] = Field(
        default_factory=list, description="Static placeholder, not derived from the roster"
    )


class TeamRoster(TeamSummary):
    """A team's roster of valued players."""

    players: list[ValuedPlayer] = Field(default_factory=list)

    @property
    def tradeable_players(self) -> list[ValuedPlayer]:
        """Players with a positive Endzone Value, in roster order."""
        return [p for p in self.players if p.is_tradeable]

    def summary(self) -> TeamSummary:
        return TeamSummary(**self.model_dump(exclude={"players"}))
