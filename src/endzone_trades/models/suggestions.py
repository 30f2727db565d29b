"""
Trade Suggestion Response Models
"""

from pydantic import BaseModel, Field

from endzone_trades.models.team import TeamRoster, TeamSummary
from endzone_trades.models.trade import FairnessTier, TradeProposal


class LeagueInfo(BaseModel):
    """League flavour that drives valuation."""

    type: str = Field(description="dynasty or redraft")
    uses_dynasty_values: bool


class AnalysisInfo(BaseModel):
    """Request metadata echoed back to the caller."""

    min_fairness: float
    fairness_label: FairnessTier = Field(
        description="Tier of min_fairness; informational only, does not filter"
    )
    max_results: int
    simple_count: int
    multi_count: int
    projections_loaded: int
    duration_ms: int


class TradeSuggestions(BaseModel):
    """Everything the engine produced for one request."""

    trade_proposals: list[TradeProposal]
    league_info: LeagueInfo
    total_players_analyzed: int
    team_analyses: list[TeamSummary]
    user_team_analysis: TeamRoster
    methodology: str
    analysis: AnalysisInfo


class TradeSuggestionsResponse(BaseModel):
    success: bool = True
    data: TradeSuggestions


class LinkLeagueRequest(BaseModel):
    """Body for linking a Sleeper league to the session user."""

    league_id: str = Field(min_length=1)
    sleeper_username: str = Field(min_length=1)


class LinkedLeague(BaseModel):
    league_id: str
    user_email: str
    sleeper_username: str
    created_at: str
