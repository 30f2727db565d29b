"""Business logic services."""

from endzone_trades.services.fairness import (
    fairness_score,
    fairness_tier,
    select_proposals,
    split_result_budget,
)
from endzone_trades.services.team_analyzer import TeamAnalyzer
from endzone_trades.services.trade_finder import TradeFinderService, load_league_context
from endzone_trades.services.trade_generator import TradeCandidateGenerator
from endzone_trades.services.valuation import EndzoneValueModel
from endzone_trades.services.valuation_tables import ValuationTables, load_valuation_tables

__all__ = [
    # Valuation
    "EndzoneValueModel",
    "ValuationTables",
    "load_valuation_tables",
    # Teams
    "TeamAnalyzer",
    # Trades
    "TradeCandidateGenerator",
    "fairness_score",
    "fairness_tier",
    "select_proposals",
    "split_result_budget",
    "TradeFinderService",
    "load_league_context",
]
