"""External API clients."""

from endzone_trades.clients.projections import ProjectionClient, SeasonProjections
from endzone_trades.clients.sleeper import LeagueContext, SleeperAPIError, SleeperClient

__all__ = [
    "SleeperClient",
    "SleeperAPIError",
    "LeagueContext",
    "ProjectionClient",
    "SeasonProjections",
]
