"""API route handlers."""

from endzone_trades.api.routes import leagues, session, trade_suggestions

__all__ = [
    "leagues",
    "session",
    "trade_suggestions",
]
