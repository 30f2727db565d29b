"""
Team Analyzer

Joins each roster's player IDs to Sleeper metadata and season projections
and values every player with the Endzone Value model.
"""

import logging
from collections import Counter

from endzone_trades.clients.sleeper import LeagueContext
from endzone_trades.models import Roster, TeamRoster, ValuedPlayer
from endzone_trades.services.valuation import EndzoneValueModel
from endzone_trades.services.valuation_tables import ValuationTables

logger = logging.getLogger(__name__)

# Placeholder need/surplus labels; roster composition is not analyzed.
DEFAULT_NEEDED_POSITIONS: tuple[str, ...] = ("RB", "WR")
DEFAULT_SURPLUS_POSITIONS: tuple[str, ...] = ()


class TeamAnalyzer:
    """
    Builds a TeamRoster for every team in a league.

    Usage:
        analyzer = TeamAnalyzer(ctx, tables)
        teams = analyzer.analyze_league()
    """

    def __init__(self, context: LeagueContext, tables: ValuationTables):
        self.ctx = context
        self.value_model = EndzoneValueModel(
            tables,
            projection_pool=context.projection_pool(),
            is_dynasty=context.is_dynasty,
        )

    def value_player(self, player_id: str) -> ValuedPlayer:
        """Resolve and value a single rostered player."""
        player = self.ctx.get_player(player_id)
        if player is None:
            return ValuedPlayer(player_id=player_id, name=player_id)

        name = player.display_name
        position = player.position or "FLEX"
        projected = self.ctx.get_projected_points(player_id)

        return ValuedPlayer(
            player_id=player_id,
            name=name,
            position=position,
            team=player.team or "FA",
            age=player.age,
            years_exp=player.years_exp,
            projected_points=projected,
            endzone_value=self.value_model.value(projected, position, name, player.age),
        )

    def analyze(self, roster: Roster) -> TeamRoster:
        """
        Value every player on a roster.

        Args:
            roster: Sleeper roster

        Returns:
            TeamRoster with one ValuedPlayer per rostered player ID
        """
        user = self.ctx.get_user(roster)
        players = [self.value_player(pid) for pid in roster.players]

        return TeamRoster(
            roster_id=roster.roster_id,
            owner_id=roster.owner_id,
            team_name=self.ctx.get_team_name(roster),
            username=user.username if user else None,
            display_name=user.display_name if user else None,
            player_count=len(players),
            total_value=sum(p.endzone_value for p in players),
            position_counts=dict(Counter(p.position for p in players)),
            needed_positions=list(DEFAULT_NEEDED_POSITIONS),
            surplus_positions=list(DEFAULT_SURPLUS_POSITIONS),
            players=players,
        )

    def analyze_league(self) -> list[TeamRoster]:
        """Analyze every roster in the league, in Sleeper's roster order."""
        teams = [self.analyze(roster) for roster in self.ctx.rosters]
        logger.debug(
            "Analyzed %d teams (%d players, pool of %d projections, dynasty=%s)",
            len(teams),
            sum(t.player_count for t in teams),
            self.value_model.pool_size,
            self.ctx.is_dynasty,
        )
        return teams
