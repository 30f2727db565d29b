import sqlite3

import pytest

from endzone_trades.store import LeagueStore


@pytest.fixture
def store(tmp_path):
    return LeagueStore(tmp_path / "nested" / "endzone.sqlite")


def test_link_and_lookup_league(store):
    linked = store.link_league("L1", "Me@Example.com", "sleeper_me")

    assert linked.league_id == "L1"
    assert linked.user_email == "me@example.com"
    assert store.get_sleeper_username("L1", "ME@example.com") == "sleeper_me"


def test_relinking_replaces_username(store):
    store.link_league("L1", "me@example.com", "old_name")
    store.link_league("L1", "me@example.com", "new_name")

    leagues = store.list_leagues("me@example.com")
    assert len(leagues) == 1
    assert leagues[0].sleeper_username == "new_name"


def test_unlinked_or_blank_username_is_none(store):
    store.link_league("L2", "me@example.com", "   ")

    assert store.get_sleeper_username("L1", "me@example.com") is None
    assert store.get_sleeper_username("L2", "me@example.com") is None
    assert store.get_league("L1", "me@example.com") is None


def test_leagues_are_scoped_to_user(store):
    store.link_league("L1", "a@example.com", "a")
    store.link_league("L2", "b@example.com", "b")

    assert [l.league_id for l in store.list_leagues("a@example.com")] == ["L1"]
    assert store.get_sleeper_username("L1", "b@example.com") is None


def test_session_lifecycle(store):
    token = store.create_session("Me@Example.com")

    assert token
    assert store.get_session_email(token) == "me@example.com"
    assert store.get_session_email("not-a-token") is None

    assert store.revoke_session(token) is True
    assert store.get_session_email(token) is None
    assert store.revoke_session(token) is False


def test_store_persists_across_instances(tmp_path):
    path = tmp_path / "endzone.sqlite"
    LeagueStore(path).link_league("L1", "me@example.com", "sleeper_me")

    assert LeagueStore(path).get_sleeper_username("L1", "me@example.com") == "sleeper_me"


def test_connection_is_closed_when_a_query_fails(store):
    with pytest.raises(sqlite3.OperationalError):
        with store._connect() as conn:
            failed = conn
            conn.execute("SELECT * FROM no_such_table")

    with pytest.raises(sqlite3.ProgrammingError):
        failed.execute("SELECT 1")
    # the store keeps working with fresh connections
    assert store.create_session("me@example.com")
