"""
Request-level errors.

Each error carries the HTTP status it maps to and an optional remediation
hint; the application renders them as ``{"success": false, "error": ...}``.
"""


class EndzoneError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str, hint: str | None = None):
        self.message = message
        self.hint = hint
        super().__init__(self.message)


class UnauthenticatedError(EndzoneError):
    """No valid session accompanied the request."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class LeagueLookupError(EndzoneError):
    """League missing, or no Sleeper username stored for the league/user pair."""

    status_code = 400


class UserTeamNotFoundError(EndzoneError):
    """The stored Sleeper username does not own any team in the league."""

    status_code = 400

    def __init__(self, username: str, league_id: str):
        self.username = username
        self.league_id = league_id
        super().__init__(
            f"Could not find a team for Sleeper user '{username}' in league {league_id}",
            hint="Check that the Sleeper username linked to this league is spelled correctly.",
        )
