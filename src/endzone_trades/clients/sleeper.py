"""
Async Sleeper API Client

Handles all API interactions with the Sleeper Fantasy Football platform.
Uses httpx for async HTTP requests with connection pooling.

API Documentation: https://docs.sleeper.com/
"""

import asyncio
import logging
from typing import Any

import httpx

from endzone_trades.clients.projections import ProjectionClient, SeasonProjections
from endzone_trades.config import Settings, get_settings
from endzone_trades.models import League, Player, Roster, User

logger = logging.getLogger(__name__)


class SleeperAPIError(Exception):
    """Exception raised for Sleeper API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class SleeperClient:
    """
    Async client for the Sleeper Fantasy Football API.

    Usage:
        async with SleeperClient() as client:
            league = await client.get_league("1127116641403351040")
            rosters = await client.get_league_rosters(league.league_id)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SleeperClient":
        """Create HTTP client on context entry."""
        self._client = httpx.AsyncClient(
            base_url=self.settings.sleeper_base_url,
            timeout=httpx.Timeout(self.settings.sleeper_timeout),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close HTTP client on context exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, raising if not initialized."""
        if self._client is None:
            raise RuntimeError(
                "SleeperClient must be used as async context manager: "
                "async with SleeperClient() as client: ..."
            )
        return self._client

    async def _get(self, endpoint: str) -> Any:
        """Make a GET request to the Sleeper API."""
        response = await self.client.get(endpoint)

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            raise SleeperAPIError(
                f"API request failed: {endpoint}",
                status_code=response.status_code,
            )

        return response.json()

    # ==================== League Endpoints ====================

    async def get_league(self, league_id: str) -> League | None:
        """
        Get league information, including roster positions.

        Args:
            league_id: Sleeper league ID

        Returns:
            League object or None if not found
        """
        data = await self._get(f"/league/{league_id}")
        if data is None:
            return None
        return League(**data)

    async def get_league_rosters(self, league_id: str) -> list[Roster]:
        """
        Get all rosters in a league.

        Args:
            league_id: Sleeper league ID

        Returns:
            List of Roster objects
        """
        data = await self._get(f"/league/{league_id}/rosters")
        if data is None:
            return []
        return [Roster(**roster) for roster in data]

    async def get_league_users(self, league_id: str) -> list[User]:
        """
        Get all users in a league.

        Args:
            league_id: Sleeper league ID

        Returns:
            List of User objects
        """
        data = await self._get(f"/league/{league_id}/users")
        if data is None:
            return []
        return [User(**user) for user in data]

    # ==================== Player Endpoints ====================

    async def get_all_players(self) -> dict[str, Player]:
        """
        Get all NFL players.

        This endpoint returns a large payload (~15MB). Entries that fail
        validation are skipped.

        Returns:
            Dict mapping player_id to Player object
        """
        data = await self._get("/players/nfl")
        if not isinstance(data, dict):
            return {}

        players: dict[str, Player] = {}
        for player_id, player_data in data.items():
            if not isinstance(player_data, dict):
                continue
            try:
                player_data_copy = {**player_data}
                player_data_copy.pop("player_id", None)
                players[player_id] = Player(player_id=player_id, **player_data_copy)
            except ValueError:
                continue

        return players


class LeagueContext:
    """
    Everything fetched for one league during one request.

    Provides lookups from roster IDs to users and from player IDs to
    Sleeper metadata and season projections.
    """

    def __init__(
        self,
        league: League,
        users: list[User],
        rosters: list[Roster],
        players: dict[str, Player],
        projections: SeasonProjections,
    ):
        self.league = league
        self.users = users
        self.rosters = rosters
        self.players = players
        self.projections = projections

        self._user_map: dict[str, User] = {u.user_id: u for u in users}
        self._projected_points = projections.resolve(
            {
                pid: players[pid]
                for roster in rosters
                for pid in roster.players
                if pid in players
            }
        )

    @classmethod
    async def create(
        cls,
        client: SleeperClient,
        projection_client: ProjectionClient,
        league_id: str,
    ) -> "LeagueContext":
        """
        Factory method to create a LeagueContext by fetching all required data.

        League, users and rosters are required; the player database and the
        season projections are best-effort enrichment and fall back to empty.

        Raises:
            SleeperAPIError: if the league does not exist or a required
                endpoint fails.
        """
        league, users, rosters, players, projections = await asyncio.gather(
            client.get_league(league_id),
            client.get_league_users(league_id),
            client.get_league_rosters(league_id),
            _players_or_empty(client),
            projection_client.get_season_projections(),
        )

        if league is None:
            raise SleeperAPIError(f"League not found: {league_id}", status_code=404)

        return cls(
            league=league,
            users=users,
            rosters=rosters,
            players=players,
            projections=projections,
        )

    @property
    def league_id(self) -> str:
        return self.league.league_id

    @property
    def is_dynasty(self) -> bool:
        return self.league.is_dynasty

    def get_user(self, roster: Roster) -> User | None:
        if roster.owner_id:
            return self._user_map.get(roster.owner_id)
        return None

    def get_team_name(self, roster: Roster) -> str:
        """Get team name for a roster."""
        user = self.get_user(roster)
        if user:
            return user.team_name
        return f"Team {roster.roster_id}"

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        return self.players.get(player_id)

    def get_projected_points(self, player_id: str) -> float:
        """Season projection for a player ID, 0.0 when unknown."""
        return self._projected_points.get(player_id, 0.0)

    def projection_pool(self) -> list[float]:
        """Every positive projection visible this request."""
        return self.projections.pool()


async def _players_or_empty(client: SleeperClient) -> dict[str, Player]:
    try:
        return await client.get_all_players()
    except (SleeperAPIError, httpx.HTTPError, ValueError) as e:
        logger.warning("Player database unavailable, continuing without metadata: %s", e)
        return {}
