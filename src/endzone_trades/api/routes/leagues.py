"""
League API Routes

Endpoints for linking Sleeper leagues to the session user.
"""

from fastapi import APIRouter

from endzone_trades.api.dependencies import CurrentUserDep, StoreDep
from endzone_trades.models import LinkedLeague, LinkLeagueRequest

router = APIRouter()


@router.get(
    "",
    response_model=list[LinkedLeague],
    summary="Get linked leagues",
    description="Get all leagues linked to the session user.",
)
async def list_leagues(email: CurrentUserDep, store: StoreDep) -> list[LinkedLeague]:
    """Get the session user's leagues."""
    return store.list_leagues(email)


@router.post(
    "",
    response_model=LinkedLeague,
    summary="Link a league",
    description="Store the Sleeper username the session user plays under in a league.",
)
async def link_league(
    body: LinkLeagueRequest,
    email: CurrentUserDep,
    store: StoreDep,
) -> LinkedLeague:
    """Link a Sleeper league to the session user."""
    return store.link_league(body.league_id, email, body.sleeper_username.strip())
