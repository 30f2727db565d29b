"""
Session API Routes

Endpoint for ending the current session.
"""

from fastapi import APIRouter

from endzone_trades.api.dependencies import SessionTokenDep, StoreDep
from endzone_trades.exceptions import UnauthenticatedError

router = APIRouter()


@router.delete(
    "",
    summary="Log out",
    description="Revoke the session token sent with the request.",
)
async def revoke_session(token: SessionTokenDep, store: StoreDep) -> dict:
    """Revoke the caller's session token."""
    if not store.revoke_session(token):
        raise UnauthenticatedError()
    return {"success": True}
