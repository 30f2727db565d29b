"""
API Dependencies

Shared dependencies for FastAPI route handlers. Collaborators are built once
by the application lifespan (or injected into ``create_app``) and read from
``app.state``.
"""

from typing import Annotated

from fastapi import Cookie, Depends, Header, Path, Query, Request

from endzone_trades.clients.projections import ProjectionClient
from endzone_trades.clients.sleeper import SleeperClient
from endzone_trades.exceptions import LeagueLookupError, UnauthenticatedError
from endzone_trades.services.valuation_tables import ValuationTables
from endzone_trades.store import LeagueStore


def get_sleeper_client(request: Request) -> SleeperClient:
    """Dependency to get the SleeperClient."""
    return request.app.state.sleeper_client


def get_projection_client(request: Request) -> ProjectionClient:
    """Dependency to get the ProjectionClient."""
    return request.app.state.projection_client


def get_store(request: Request) -> LeagueStore:
    return request.app.state.store


def get_valuation_tables(request: Request) -> ValuationTables:
    return request.app.state.valuation_tables


StoreDep = Annotated[LeagueStore, Depends(get_store)]


def get_session_token(
    authorization: Annotated[str | None, Header()] = None,
    session: Annotated[str | None, Cookie()] = None,
) -> str:
    """
    Read the session token from ``Authorization: Bearer <token>`` or the
    ``session`` cookie.

    Raises:
        UnauthenticatedError: if no token is present
    """
    token = session
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            token = credentials.strip()

    if not token:
        raise UnauthenticatedError()
    return token


SessionTokenDep = Annotated[str, Depends(get_session_token)]


def get_current_user_email(store: StoreDep, token: SessionTokenDep) -> str:
    """
    Resolve the session token to a user email.

    Raises:
        UnauthenticatedError: if no token is present or it is unknown
    """
    email = store.get_session_email(token)
    if email is None:
        raise UnauthenticatedError()
    return email


CurrentUserDep = Annotated[str, Depends(get_current_user_email)]


def get_linked_username(
    league_id: Annotated[str, Path(description="Sleeper league ID")],
    email: CurrentUserDep,
    store: StoreDep,
) -> str:
    """
    Dependency to resolve the session user's Sleeper username for a league.

    Raises:
        LeagueLookupError: if the league is not linked for this user
    """
    username = store.get_sleeper_username(league_id, email)
    if username is None:
        raise LeagueLookupError(
            f"No Sleeper username found for league {league_id}",
            hint="Connect this league with your Sleeper username via POST /api/leagues.",
        )
    return username


# Type aliases for cleaner route signatures
SleeperClientDep = Annotated[SleeperClient, Depends(get_sleeper_client)]
ProjectionClientDep = Annotated[ProjectionClient, Depends(get_projection_client)]
ValuationTablesDep = Annotated[ValuationTables, Depends(get_valuation_tables)]
LinkedUsernameDep = Annotated[str, Depends(get_linked_username)]


# Common query parameters
MinFairnessQuery = Annotated[
    float,
    Query(description="Fairness label threshold (informational)", ge=0, le=1),
]

MaxResultsQuery = Annotated[
    int,
    Query(description="Number of trade proposals to return", ge=1, le=50),
]
