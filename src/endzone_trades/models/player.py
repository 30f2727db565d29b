"""
Player-related Pydantic models.
"""

from pydantic import BaseModel, ConfigDict, Field


class Player(BaseModel):
    """NFL Player information from Sleeper."""

    player_id: str
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    position: str | None = None
    team: str | None = None
    age: int | None = None
    years_exp: int | None = None
    status: str | None = None
    injury_status: str | None = None

    @property
    def display_name(self) -> str:
        """Get display name for the player."""
        if self.full_name:
            return self.full_name
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.player_id


class ValuedPlayer(BaseModel):
    """A rostered player with the Endzone Value computed for this request."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    name: str
    position: str = "FLEX"
    team: str = "FA"
    age: int | None = None
    years_exp: int | None = None
    projected_points: float = Field(default=0.0, ge=0, description="Season projection, 0 if unknown")
    endzone_value: int = Field(default=0, ge=0, description="Normalized trade value")

    @property
    def is_tradeable(self) -> bool:
        return self.endzone_value > 0
