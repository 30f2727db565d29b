"""Shared fixtures: fake upstream clients and small league factories."""

import pytest

from endzone_trades.clients.projections import SeasonProjections
from endzone_trades.clients.sleeper import LeagueContext
from endzone_trades.models import (
    FairnessTier,
    League,
    Player,
    Roster,
    TeamRoster,
    TradeProposal,
    TradeSide,
    TradeType,
    User,
    ValuedPlayer,
)
from endzone_trades.services.valuation_tables import load_valuation_tables

LEAGUE_ID = "1127116641403351040"

# Ten WRs; with no age and a neutral WR multiplier their values are the
# plain percentiles 1000, 900, ..., 100.
SAMPLE_PROJECTIONS = [300, 250, 200, 150, 120, 100, 80, 60, 40, 10]


class FakeSleeperClient:
    """Stands in for SleeperClient; serves one league from memory."""

    def __init__(self, league, users, rosters, players, fail_with=None):
        self.league = league
        self.users = users
        self.rosters = rosters
        self.players = players
        self.fail_with = fail_with

    async def get_league(self, league_id):
        if self.league is None or league_id != self.league.league_id:
            return None
        return self.league

    async def get_league_users(self, league_id):
        return self.users if self.league and league_id == self.league.league_id else []

    async def get_league_rosters(self, league_id):
        if self.fail_with is not None:
            raise self.fail_with
        return self.rosters if self.league and league_id == self.league.league_id else []

    async def get_all_players(self):
        return self.players


class FakeProjectionClient:
    def __init__(self, projections: SeasonProjections):
        self.projections = projections
        self.calls = 0

    async def get_season_projections(self):
        self.calls += 1
        return self.projections


@pytest.fixture(scope="session")
def tables():
    return load_valuation_tables()


@pytest.fixture
def sample_league_data():
    """Two teams of five WRs; alice holds the even-ranked players."""
    league = League(
        league_id=LEAGUE_ID,
        name="Test League",
        roster_positions=["QB", "RB", "RB", "WR", "WR", "TE", "FLEX", "BN"],
    )
    users = [
        User(user_id="u1", username="alice", display_name="Alice"),
        User(
            user_id="u2",
            username="bob",
            display_name="Bob",
            metadata={"team_name": "Bob's Bombers"},
        ),
    ]
    players = {
        str(i): Player(player_id=str(i), full_name=f"Player {i}", position="WR", team="KC")
        for i in range(len(SAMPLE_PROJECTIONS))
    }
    rosters = [
        Roster(roster_id=1, owner_id="u1", league_id=LEAGUE_ID, players=["0", "2", "4", "6", "8"]),
        Roster(roster_id=2, owner_id="u2", league_id=LEAGUE_ID, players=["1", "3", "5", "7", "9"]),
    ]
    projections = SeasonProjections.from_points(
        {f"Player {i}": points for i, points in enumerate(SAMPLE_PROJECTIONS)}
    )
    return league, users, rosters, players, projections


@pytest.fixture
def sample_context(sample_league_data):
    league, users, rosters, players, projections = sample_league_data
    return LeagueContext(league, users, rosters, players, projections)


@pytest.fixture
def fake_sleeper(sample_league_data):
    league, users, rosters, players, _ = sample_league_data
    return FakeSleeperClient(league, users, rosters, players)


@pytest.fixture
def fake_projections(sample_league_data):
    return FakeProjectionClient(sample_league_data[4])


@pytest.fixture
def make_team():
    """Build a TeamRoster straight from a list of Endzone Values."""

    def _make_team(roster_id: int, values: list[int], position: str = "WR") -> TeamRoster:
        players = [
            ValuedPlayer(
                player_id=f"{roster_id}-{i}",
                name=f"Player {roster_id}-{i}",
                position=position,
                endzone_value=value,
            )
            for i, value in enumerate(values)
        ]
        return TeamRoster(
            roster_id=roster_id,
            owner_id=f"owner{roster_id}",
            team_name=f"Team {roster_id}",
            player_count=len(players),
            total_value=sum(values),
            players=players,
        )

    return _make_team


@pytest.fixture
def make_proposal():
    """Build a bare TradeProposal with a given fairness score."""
    counter = iter(range(10_000))

    def _make_proposal(score: float, trade_type: TradeType = TradeType.ONE_FOR_ONE) -> TradeProposal:
        side = TradeSide(team_name="A", giving=[], receiving=[], net_value=10)
        return TradeProposal(
            trade_id=f"t{next(counter)}",
            team_a=side,
            team_b=side.model_copy(update={"team_name": "B", "net_value": -10}),
            fairness_score=score,
            fairness_tier=FairnessTier.FLEECE,
            trade_type=trade_type,
        )

    return _make_proposal
