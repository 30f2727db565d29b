"""
Season Projection Loader

Fetches PPR season projections from the Tank01 NFL API (RapidAPI) and
resolves them onto Sleeper player IDs.

Tank01 keys its projections by its own player IDs, so the join to Sleeper is
done on player names: exact lower-cased full name first, then a normalized
form with punctuation and generational suffixes removed.
"""

import logging
import re
from collections.abc import Mapping

import httpx
import pandas as pd

from endzone_trades.config import Settings, get_settings
from endzone_trades.models import Player

logger = logging.getLogger(__name__)

_SUFFIXES = {"jr", "sr", "ii", "iii", "iv", "v"}
_PUNCTUATION = re.compile(r"[^a-z0-9 ]+")


def normalize_name(name: str) -> str:
    """
    Reduce a player name to a join key.

    "Marvin Harrison Jr." -> "marvin harrison", "D'Andre Swift" -> "dandre swift"
    """
    cleaned = _PUNCTUATION.sub("", name.lower().replace("-", " "))
    tokens = cleaned.split()
    while len(tokens) > 1 and tokens[-1] in _SUFFIXES:
        tokens.pop()
    return " ".join(tokens)


class SeasonProjections:
    """Season projections keyed by player name."""

    COLUMNS = ["name", "name_lower", "name_key", "points"]

    def __init__(self, frame: pd.DataFrame | None = None):
        if frame is None or frame.empty:
            frame = pd.DataFrame(columns=self.COLUMNS)
        self.frame = frame

    @classmethod
    def empty(cls) -> "SeasonProjections":
        return cls()

    @classmethod
    def from_points(cls, points_by_name: Mapping[str, float]) -> "SeasonProjections":
        """
        Build from a plain ``{name: points}`` mapping.

        Non-positive projections are dropped; when two entries share a
        lower-cased name the later one wins.
        """
        rows = [
            {
                "name": name,
                "name_lower": name.lower(),
                "name_key": normalize_name(name),
                "points": float(points),
            }
            for name, points in points_by_name.items()
            if name and points and float(points) > 0
        ]
        if not rows:
            return cls.empty()
        frame = pd.DataFrame(rows, columns=cls.COLUMNS)
        frame = frame.drop_duplicates("name_lower", keep="last").reset_index(drop=True)
        return cls(frame)

    def __len__(self) -> int:
        return len(self.frame)

    def pool(self) -> list[float]:
        """All positive projections, one per distinct player name."""
        return [float(p) for p in self.frame["points"]]

    def resolve(self, players: Mapping[str, Player]) -> dict[str, float]:
        """
        Resolve projections onto Sleeper player IDs.

        Args:
            players: Sleeper player ID -> Player metadata

        Returns:
            Dict mapping player_id to projected season points; players
            without a match are left out.
        """
        if self.frame.empty or not players:
            return {}

        exact = self.frame.set_index("name_lower")["points"]
        normalized = (
            self.frame.drop_duplicates("name_key", keep="last")
            .set_index("name_key")["points"]
        )

        resolved: dict[str, float] = {}
        unmatched = 0
        for player_id, player in players.items():
            name = player.display_name.lower()
            if name in exact.index:
                resolved[player_id] = float(exact[name])
                continue
            key = normalize_name(name)
            if key and key in normalized.index:
                resolved[player_id] = float(normalized[key])
            else:
                unmatched += 1

        logger.debug(
            "Resolved projections for %d players (%d unmatched)", len(resolved), unmatched
        )
        return resolved


class ProjectionClient:
    """
    Async client for Tank01 season projections.

    Usage:
        async with ProjectionClient() as projections:
            season = await projections.get_season_projections()
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "ProjectionClient":
        self._client = httpx.AsyncClient(
            base_url=self.settings.projections_base_url,
            timeout=httpx.Timeout(self.settings.projections_timeout),
            headers={
                "Accept": "application/json",
                "x-rapidapi-host": self.settings.rapidapi_host,
                "x-rapidapi-key": self.settings.rapidapi_key or "",
            },
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(
                "ProjectionClient must be used as async context manager: "
                "async with ProjectionClient() as client: ..."
            )
        return self._client

    async def get_season_projections(self) -> SeasonProjections:
        """
        Fetch PPR season projections.

        Never raises for upstream problems: a missing API key, a failed
        request or a malformed payload all yield empty projections.
        """
        if not self.settings.rapidapi_key:
            logger.warning("RapidAPI key not configured; season projections unavailable")
            return SeasonProjections.empty()

        try:
            response = await self.client.get(
                "/getNFLProjections",
                params={
                    "archiveSeason": str(self.settings.projections_season),
                    "pointsPerReception": 1,
                    "rushTD": 6,
                    "receivingTD": 6,
                    "passTD": 4,
                },
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Failed to load season projections: %s", e)
            return SeasonProjections.empty()

        projections = parse_projection_payload(payload)
        logger.info("Loaded season projections for %d players", len(projections))
        return projections


def parse_projection_payload(payload: object) -> SeasonProjections:
    """Extract ``longName`` -> PPR points from a Tank01 projections response."""
    body = payload.get("body") if isinstance(payload, dict) else None
    raw = body.get("playerProjections") if isinstance(body, dict) else None
    if not isinstance(raw, dict):
        logger.warning("Unexpected projections payload shape; ignoring")
        return SeasonProjections.empty()

    points_by_name: dict[str, float] = {}
    for entry in raw.values():
        if not isinstance(entry, dict):
            continue
        name = entry.get("longName")
        defaults = entry.get("fantasyPointsDefault") or {}
        try:
            points = float(defaults.get("PPR") or 0)
        except (TypeError, ValueError, AttributeError):
            continue
        if name and points > 0:
            points_by_name[name] = points

    return SeasonProjections.from_points(points_by_name)
