"""API package - FastAPI routes and dependencies."""

from endzone_trades.api.dependencies import (
    CurrentUserDep,
    LinkedUsernameDep,
    ProjectionClientDep,
    SessionTokenDep,
    SleeperClientDep,
    StoreDep,
    ValuationTablesDep,
    get_current_user_email,
    get_linked_username,
    get_projection_client,
    get_session_token,
    get_sleeper_client,
    get_store,
)

__all__ = [
    "get_sleeper_client",
    "get_projection_client",
    "get_store",
    "get_session_token",
    "get_current_user_email",
    "get_linked_username",
    "SleeperClientDep",
    "ProjectionClientDep",
    "StoreDep",
    "SessionTokenDep",
    "ValuationTablesDep",
    "CurrentUserDep",
    "LinkedUsernameDep",
]
