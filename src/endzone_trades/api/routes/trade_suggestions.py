"""
Trade Suggestion API Routes

Endpoint for recommending fair trades to the session user's team.
"""

from typing import Annotated

from fastapi import APIRouter, Path
from starlette.concurrency import run_in_threadpool

from endzone_trades.api.dependencies import (
    LinkedUsernameDep,
    MaxResultsQuery,
    MinFairnessQuery,
    ProjectionClientDep,
    SleeperClientDep,
    ValuationTablesDep,
)
from endzone_trades.models import TradeSuggestionsResponse
from endzone_trades.services.trade_finder import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_FAIRNESS,
    TradeFinderService,
    load_league_context,
)

router = APIRouter()


@router.get(
    "/{league_id}/trade-suggestions",
    response_model=TradeSuggestionsResponse,
    summary="Get trade suggestions",
    description=(
        "Recommend 1v1, 2v2 and 3v3 trades between your team and every other "
        "team, ranked by fairness. min_fairness only selects the reported label."
    ),
)
async def get_trade_suggestions(
    league_id: Annotated[str, Path(description="Sleeper league ID")],
    username: LinkedUsernameDep,
    client: SleeperClientDep,
    projection_client: ProjectionClientDep,
    tables: ValuationTablesDep,
    min_fairness: MinFairnessQuery = DEFAULT_MIN_FAIRNESS,
    max_results: MaxResultsQuery = DEFAULT_MAX_RESULTS,
) -> TradeSuggestionsResponse:
    """Get trade suggestions for the session user's team."""
    ctx = await load_league_context(client, projection_client, league_id)
    service = TradeFinderService(ctx, tables)
    suggestions = await run_in_threadpool(
        service.suggest_trades, username, min_fairness, max_results
    )
    return TradeSuggestionsResponse(data=suggestions)
