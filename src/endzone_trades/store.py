"""SQLite-backed store for linked leagues and login sessions."""

import logging
import secrets
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from endzone_trades.models import LinkedLeague

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class LeagueStore:
    """
    Maps (league, user email) to the user's Sleeper username, and session
    tokens to user emails.

    Usage:
        store = LeagueStore("data/endzone.sqlite")
        store.link_league("1127116641403351040", "me@example.com", "sleeper_me")
        token = store.create_session("me@example.com")
    """

    def __init__(self, db_path: Path | str):
        self.db_path = db_path
        self._ensure_schema()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and is always closed."""
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS leagues (
                    sleeper_league_id TEXT NOT NULL,
                    user_email TEXT NOT NULL,
                    sleeper_username TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    PRIMARY KEY (sleeper_league_id, user_email)
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS sessions (
                    token TEXT PRIMARY KEY,
                    user_email TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )

    # ==================== Leagues ====================

    def link_league(self, league_id: str, user_email: str, sleeper_username: str) -> LinkedLeague:
        """Link a league to a user, replacing any previous username."""
        created_at = _now()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO leagues (sleeper_league_id, user_email, sleeper_username, created_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (sleeper_league_id, user_email)
                DO UPDATE SET sleeper_username = excluded.sleeper_username
                """,
                (league_id, user_email.lower(), sleeper_username, created_at),
            )
        logger.info("Linked league %s for %s", league_id, user_email)
        return self.get_league(league_id, user_email)  # type: ignore[return-value]

    def get_league(self, league_id: str, user_email: str) -> LinkedLeague | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM leagues WHERE sleeper_league_id = ? AND user_email = ?",
                (league_id, user_email.lower()),
            ).fetchone()
        return _to_linked_league(row) if row else None

    def get_sleeper_username(self, league_id: str, user_email: str) -> str | None:
        """Stored Sleeper username for a league/user pair, if any."""
        league = self.get_league(league_id, user_email)
        if league is None or not league.sleeper_username.strip():
            return None
        return league.sleeper_username

    def list_leagues(self, user_email: str) -> list[LinkedLeague]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM leagues WHERE user_email = ? ORDER BY created_at ASC",
                (user_email.lower(),),
            ).fetchall()
        return [_to_linked_league(row) for row in rows]

    # ==================== Sessions ====================

    def create_session(self, user_email: str) -> str:
        """Issue a new opaque session token for a user."""
        token = secrets.token_urlsafe(32)
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO sessions (token, user_email, created_at) VALUES (?, ?, ?)",
                (token, user_email.lower(), _now()),
            )
        return token

    def get_session_email(self, token: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT user_email FROM sessions WHERE token = ?", (token,)
            ).fetchone()
        return row["user_email"] if row else None

    def revoke_session(self, token: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM sessions WHERE token = ?", (token,))
            removed = cursor.rowcount > 0
        return removed


def _to_linked_league(row: sqlite3.Row) -> LinkedLeague:
    return LinkedLeague(
        league_id=row["sleeper_league_id"],
        user_email=row["user_email"],
        sleeper_username=row["sleeper_username"],
        created_at=row["created_at"],
    )
