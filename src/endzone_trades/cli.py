"""
Endzone Trades CLI

Command-line interface for trade suggestions and account housekeeping
without going through the API server.
"""

import argparse
import asyncio
import sys

import httpx

from endzone_trades.clients.projections import ProjectionClient
from endzone_trades.clients.sleeper import SleeperClient
from endzone_trades.config import get_settings
from endzone_trades.exceptions import EndzoneError
from endzone_trades.logging_config import setup_logging
from endzone_trades.models import TradeProposal, TradeSuggestions
from endzone_trades.services.trade_finder import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_FAIRNESS,
    TradeFinderService,
    load_league_context,
)
from endzone_trades.services.valuation_tables import load_valuation_tables
from endzone_trades.store import LeagueStore


async def suggest_trades(
    league_id: str,
    username: str,
    min_fairness: float = DEFAULT_MIN_FAIRNESS,
    max_results: int = DEFAULT_MAX_RESULTS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> TradeSuggestions:
    """Fetch a league and recommend trades for ``username``'s team."""
    settings = get_settings()
    tables = load_valuation_tables(settings.valuation_tables_path)

    async with (
        SleeperClient(settings, transport) as client,
        ProjectionClient(settings, transport) as projections,
    ):
        ctx = await load_league_context(client, projections, league_id)

    service = TradeFinderService(ctx, tables)
    return service.suggest_trades(username, min_fairness, max_results)


def format_trade(index: int, trade: TradeProposal) -> str:
    gives = ", ".join(f"{a.name} ({a.position}, {a.value})" for a in trade.team_a.giving)
    gets = ", ".join(f"{a.name} ({a.position}, {a.value})" for a in trade.team_a.receiving)
    return (
        f"{index:>2}. [{trade.trade_type.value}] with {trade.team_b.team_name} - "
        f"fairness {trade.fairness_score:.2f} ({trade.fairness_tier.value}), "
        f"net +{trade.team_a.net_value}\n"
        f"    give: {gives}\n"
        f"    get:  {gets}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="endzone-trades",
        description="Fair trade recommendations for Sleeper fantasy football leagues",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("serve", help="Run the API server")

    suggest_parser = subparsers.add_parser("suggest", help="Suggest trades for a team")
    suggest_parser.add_argument("league_id", help="Sleeper league ID")
    suggest_parser.add_argument("username", help="Sleeper username of the team owner")
    suggest_parser.add_argument(
        "--max-results",
        type=int,
        default=DEFAULT_MAX_RESULTS,
        help=f"Number of proposals to return (default: {DEFAULT_MAX_RESULTS})",
    )
    suggest_parser.add_argument(
        "--min-fairness",
        type=float,
        default=DEFAULT_MIN_FAIRNESS,
        help="Fairness label threshold, informational only (default: %(default)s)",
    )
    suggest_parser.add_argument(
        "--json", action="store_true", help="Print the full response as JSON"
    )

    link_parser = subparsers.add_parser(
        "link-league", help="Store the Sleeper username a user plays under in a league"
    )
    link_parser.add_argument("league_id", help="Sleeper league ID")
    link_parser.add_argument("email", help="Account email")
    link_parser.add_argument("username", help="Sleeper username")

    session_parser = subparsers.add_parser("issue-session", help="Issue an API session token")
    session_parser.add_argument("email", help="Account email")

    return parser


async def cli_main(args: argparse.Namespace) -> int:
    """Run a parsed non-server command."""
    settings = get_settings()
    setup_logging(settings.log_level)

    if args.command == "link-league":
        store = LeagueStore(settings.database_path)
        linked = store.link_league(args.league_id, args.email, args.username)
        print(f"Linked league {linked.league_id} for {linked.user_email} as {linked.sleeper_username}")
        return 0

    if args.command == "issue-session":
        store = LeagueStore(settings.database_path)
        print(store.create_session(args.email))
        return 0

    try:
        suggestions = await suggest_trades(
            args.league_id, args.username, args.min_fairness, args.max_results
        )
    except EndzoneError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.hint:
            print(f"Hint: {e.hint}", file=sys.stderr)
        return 2

    if args.json:
        print(suggestions.model_dump_json(indent=2))
        return 0

    team = suggestions.user_team_analysis
    print(f"{team.team_name} - {suggestions.league_info.type} league")
    print(f"Players analyzed: {suggestions.total_players_analyzed}\n")

    if not suggestions.trade_proposals:
        print("No trade proposals found.")
        return 0

    for i, trade in enumerate(suggestions.trade_proposals, 1):
        print(format_trade(i, trade))
    return 0


def run_cli():
    """Entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        from endzone_trades.main import run

        run()
        return

    sys.exit(asyncio.run(cli_main(args)))


if __name__ == "__main__":
    run_cli()
