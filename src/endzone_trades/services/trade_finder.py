"""
Trade Recommendation Service

Runs the full recommendation pipeline for one request:
value every roster, generate candidates against every other team, and
select a size-balanced result set.
"""

import logging
import time

from endzone_trades.clients.projections import ProjectionClient
from endzone_trades.clients.sleeper import LeagueContext, SleeperAPIError, SleeperClient
from endzone_trades.exceptions import LeagueLookupError, UserTeamNotFoundError
from endzone_trades.models import (
    AnalysisInfo,
    LeagueInfo,
    TeamRoster,
    TradeSuggestions,
)
from endzone_trades.services.fairness import (
    fairness_tier,
    select_proposals,
    split_result_budget,
)
from endzone_trades.services.team_analyzer import TeamAnalyzer
from endzone_trades.services.trade_generator import TradeCandidateGenerator
from endzone_trades.services.valuation_tables import ValuationTables

logger = logging.getLogger(__name__)

METHODOLOGY = "endzone_value_percentile_with_tier_age_dynasty_adjustments"
DEFAULT_MIN_FAIRNESS = 0.3
DEFAULT_MAX_RESULTS = 10


async def load_league_context(
    client: SleeperClient,
    projection_client: ProjectionClient,
    league_id: str,
) -> LeagueContext:
    """
    Fetch a league's context, translating a missing league into a lookup error.

    Raises:
        LeagueLookupError: if Sleeper has no such league
    """
    try:
        return await LeagueContext.create(client, projection_client, league_id)
    except SleeperAPIError as e:
        if e.status_code == 404:
            raise LeagueLookupError(
                f"League not found: {league_id}",
                hint="Check the Sleeper league ID, then reconnect the league.",
            ) from e
        raise


class TradeFinderService:
    """
    Service for recommending trades to one team in a league.

    Usage:
        ctx = await load_league_context(client, projections, league_id)
        service = TradeFinderService(ctx, tables)
        suggestions = service.suggest_trades("sleeper_username", max_results=10)
    """

    def __init__(self, context: LeagueContext, tables: ValuationTables):
        self.ctx = context
        self.analyzer = TeamAnalyzer(context, tables)

    @staticmethod
    def find_user_team(teams: list[TeamRoster], username: str) -> TeamRoster | None:
        """Find the team owned by a Sleeper username or display name."""
        wanted = username.strip().lower()
        if not wanted:
            return None
        for team in teams:
            if wanted in {(team.username or "").lower(), (team.display_name or "").lower()}:
                return team
        return None

    def suggest_trades(
        self,
        username: str,
        min_fairness: float = DEFAULT_MIN_FAIRNESS,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> TradeSuggestions:
        """
        Recommend trades for the team owned by ``username``.

        Args:
            username: Sleeper username of the requesting team's owner
            min_fairness: Only selects the reported fairness label
            max_results: Upper bound on returned proposals

        Returns:
            TradeSuggestions with proposals and team analyses

        Raises:
            UserTeamNotFoundError: if no team belongs to ``username``
        """
        started = time.perf_counter()
        teams = self.analyzer.analyze_league()

        user_team = self.find_user_team(teams, username)
        if user_team is None:
            raise UserTeamNotFoundError(username, self.ctx.league_id)

        other_teams = [t for t in teams if t.roster_id != user_team.roster_id]
        simple_count, multi_count = split_result_budget(max_results)
        label = fairness_tier(min_fairness)

        generator = TradeCandidateGenerator(user_team)
        simple = generator.simple_trades(other_teams, limit=2 * simple_count)
        multi = generator.multi_player_trades(other_teams, limit=2 * multi_count)
        proposals = select_proposals(simple, multi, simple_count, multi_count, max_results)

        duration_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "League %s: %d proposals for %s (%d simple / %d multi candidates, "
            "fairness label %s, %d ms)",
            self.ctx.league_id,
            len(proposals),
            user_team.team_name,
            len(simple),
            len(multi),
            label.value,
            duration_ms,
        )

        return TradeSuggestions(
            trade_proposals=proposals,
            league_info=LeagueInfo(
                type=self.ctx.league.league_type,
                uses_dynasty_values=self.ctx.is_dynasty,
            ),
            total_players_analyzed=sum(t.player_count for t in teams),
            team_analyses=[t.summary() for t in teams],
            user_team_analysis=user_team,
            methodology=METHODOLOGY,
            analysis=AnalysisInfo(
                min_fairness=min_fairness,
                fairness_label=label,
                max_results=max_results,
                simple_count=simple_count,
                multi_count=multi_count,
                projections_loaded=len(self.ctx.projections),
                duration_ms=duration_ms,
            ),
        )
