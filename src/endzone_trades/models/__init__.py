"""Pydantic models and schemas."""

from endzone_trades.models.league import DYNASTY_SLOT, League, Roster, User
from endzone_trades.models.player import Player, ValuedPlayer
from endzone_trades.models.suggestions import (
    AnalysisInfo,
    LeagueInfo,
    LinkedLeague,
    LinkLeagueRequest,
    TradeSuggestions,
    TradeSuggestionsResponse,
)
from endzone_trades.models.team import TeamRoster, TeamSummary
from endzone_trades.models.trade import (
    FairnessTier,
    TradeAsset,
    TradeProposal,
    TradeSide,
    TradeType,
)

__all__ = [
    # League
    "DYNASTY_SLOT",
    "League",
    "Roster",
    "User",
    # Player
    "Player",
    "ValuedPlayer",
    # Team
    "TeamRoster",
    "TeamSummary",
    # Trade
    "FairnessTier",
    "TradeAsset",
    "TradeProposal",
    "TradeSide",
    "TradeType",
    # Suggestions
    "AnalysisInfo",
    "LeagueInfo",
    "LinkedLeague",
    "LinkLeagueRequest",
    "TradeSuggestions",
    "TradeSuggestionsResponse",
]
