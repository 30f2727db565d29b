import pytest
from fastapi.testclient import TestClient

from endzone_trades.config import Settings
from endzone_trades.main import create_app
from endzone_trades.store import LeagueStore

from conftest import LEAGUE_ID, FakeSleeperClient

EMAIL = "alice@example.com"


@pytest.fixture
def store(tmp_path):
    return LeagueStore(tmp_path / "endzone.sqlite")


@pytest.fixture
def token(store):
    return store.create_session(EMAIL)


@pytest.fixture
def auth(token):
    return {"Authorization": f"Bearer {token}"}


def _client(store, sleeper, projections, tables, **kwargs):
    app = create_app(
        Settings(),
        sleeper_client=sleeper,
        projection_client=projections,
        store=store,
        valuation_tables=tables,
    )
    return TestClient(app, **kwargs)


@pytest.fixture
def client(store, fake_sleeper, fake_projections, tables):
    with _client(store, fake_sleeper, fake_projections, tables) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_lists_endpoints(client):
    body = client.get("/").json()
    assert body["endpoints"]["trade_suggestions"] == "/api/league/{league_id}/trade-suggestions"


def test_trade_suggestions_require_session(client):
    response = client.get(f"/api/league/{LEAGUE_ID}/trade-suggestions")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized"}


def test_unknown_session_token_is_rejected(client):
    response = client.get(
        f"/api/league/{LEAGUE_ID}/trade-suggestions",
        headers={"Authorization": "Bearer nope"},
    )
    assert response.status_code == 401


def test_unlinked_league_is_a_bad_request(client, auth):
    response = client.get(f"/api/league/{LEAGUE_ID}/trade-suggestions", headers=auth)

    body = response.json()
    assert response.status_code == 400
    assert body["success"] is False
    assert LEAGUE_ID in body["error"]
    assert "POST /api/leagues" in body["hint"]


def test_wrong_username_is_a_bad_request(client, store, auth):
    store.link_league(LEAGUE_ID, EMAIL, "carol")

    response = client.get(f"/api/league/{LEAGUE_ID}/trade-suggestions", headers=auth)

    assert response.status_code == 400
    assert "carol" in response.json()["error"]
    assert response.json()["hint"]


def test_missing_league_is_a_bad_request(client, store, auth):
    store.link_league("999", EMAIL, "alice")

    response = client.get("/api/league/999/trade-suggestions", headers=auth)

    assert response.status_code == 400
    assert "League not found" in response.json()["error"]


def test_trade_suggestions_success(client, store, auth):
    store.link_league(LEAGUE_ID, EMAIL, "alice")

    response = client.get(
        f"/api/league/{LEAGUE_ID}/trade-suggestions",
        params={"max_results": 4, "min_fairness": 0.8},
        headers=auth,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert len(data["trade_proposals"]) == 4
    assert data["league_info"] == {"type": "redraft", "uses_dynasty_values": False}
    assert data["total_players_analyzed"] == 10
    assert data["user_team_analysis"]["team_name"] == "Alice"
    assert data["analysis"]["fairness_label"] == "very_strict"
    assert {t["team_name"] for t in data["team_analyses"]} == {"Alice", "Bob's Bombers"}
    assert "players" not in data["team_analyses"][0]
    proposal = data["trade_proposals"][0]
    assert proposal["team_a"]["net_value"] > 0
    assert proposal["trade_type"] in {"1v1", "2v2", "3v3"}


def test_session_cookie_is_accepted(client, store, token):
    store.link_league(LEAGUE_ID, EMAIL, "alice")
    client.cookies.set("session", token)

    response = client.get(f"/api/league/{LEAGUE_ID}/trade-suggestions")

    assert response.status_code == 200


@pytest.mark.parametrize("params", [{"max_results": 0}, {"max_results": 51}, {"min_fairness": 1.5}])
def test_query_bounds_are_validated(client, store, auth, params):
    store.link_league(LEAGUE_ID, EMAIL, "alice")
    response = client.get(
        f"/api/league/{LEAGUE_ID}/trade-suggestions", params=params, headers=auth
    )
    assert response.status_code == 422


def test_unexpected_errors_become_500(store, auth, sample_league_data, fake_projections, tables):
    league, users, rosters, players, _ = sample_league_data
    sleeper = FakeSleeperClient(
        league, users, rosters, players, fail_with=RuntimeError("upstream exploded")
    )
    store.link_league(LEAGUE_ID, EMAIL, "alice")

    with _client(
        store, sleeper, fake_projections, tables, raise_server_exceptions=False
    ) as client:
        response = client.get(f"/api/league/{LEAGUE_ID}/trade-suggestions", headers=auth)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "upstream exploded"}


def test_link_and_list_leagues(client, auth):
    response = client.post(
        "/api/leagues",
        json={"league_id": LEAGUE_ID, "sleeper_username": " alice "},
        headers=auth,
    )

    assert response.status_code == 200
    assert response.json()["sleeper_username"] == "alice"
    assert response.json()["user_email"] == EMAIL

    listed = client.get("/api/leagues", headers=auth).json()
    assert [league["league_id"] for league in listed] == [LEAGUE_ID]


def test_leagues_require_session(client):
    assert client.get("/api/leagues").status_code == 401
    response = client.post("/api/leagues", json={"league_id": "1", "sleeper_username": "x"})
    assert response.status_code == 401


def test_logout_revokes_session(client, auth):
    assert client.get("/api/leagues", headers=auth).status_code == 200

    response = client.delete("/api/session", headers=auth)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get("/api/leagues", headers=auth).status_code == 401
    assert client.delete("/api/session", headers=auth).status_code == 401


def test_logout_requires_token(client):
    assert client.delete("/api/session").status_code == 401
