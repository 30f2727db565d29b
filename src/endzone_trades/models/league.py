"""
League-related Pydantic models.
"""

from pydantic import BaseModel, Field, field_validator

DYNASTY_SLOT = "SUPER_FLEX"


class League(BaseModel):
    """Sleeper league information."""

    league_id: str
    name: str
    status: str | None = None
    sport: str = "nfl"
    season: str | None = None
    total_rosters: int | None = None
    roster_positions: list[str] = Field(default_factory=list)
    scoring_settings: dict = Field(default_factory=dict)
    settings: dict = Field(default_factory=dict)

    @field_validator("roster_positions", mode="before")
    @classmethod
    def _null_positions(cls, value):
        return value or []

    @property
    def is_dynasty(self) -> bool:
        """A league counts as dynasty iff its lineup has a superflex slot."""
        return DYNASTY_SLOT in self.roster_positions

    @property
    def league_type(self) -> str:
        return "dynasty" if self.is_dynasty else "redraft"


class User(BaseModel):
    """Sleeper user information."""

    user_id: str
    username: str | None = None
    display_name: str
    avatar: str | None = None
    metadata: dict | None = Field(default_factory=dict)

    @property
    def team_name(self) -> str:
        """Get team name from metadata or display name."""
        if self.metadata and self.metadata.get("team_name"):
            return self.metadata["team_name"]
        return self.display_name


class Roster(BaseModel):
    """League roster information."""

    roster_id: int
    owner_id: str | None = None
    league_id: str
    players: list[str] = Field(default_factory=list)
    starters: list[str] = Field(default_factory=list)

    @field_validator("players", "starters", mode="before")
    @classmethod
    def _null_lists(cls, value):
        # Sleeper sends null for empty rosters
        return value or []
