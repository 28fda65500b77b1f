"""Tests for the HTTP API.

Tests validate:
1. /games and /games/latest
2. /stats over genuine games only
3. /stats/continuous range handling
4. /teams/suggest and its client errors
"""

from fastapi.testclient import TestClient
from factories import genuine_raw_round, make_game, make_genuine_game, write_round
from sqlalchemy.orm import Session

from ns2stat.api.app import create_app, get_db_session
from ns2stat.db import repo
from ns2stat.models.domain import GameEntity


def create_test_client(engine, tmp_path) -> TestClient:
    """Create app bound to the test engine."""
    app = create_app(db_path=tmp_path / "unused.db")

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    return TestClient(app)


def store(engine, *games) -> None:
    with Session(engine) as session:
        for i, game in enumerate(games):
            repo.create_game(
                session, GameEntity(game_id=f"g{i}", source_name=f"g{i}.json", summary=game)
            )
        repo.commit(session)


class TestHealth:
    """Liveness endpoint."""

    def test_health(self, engine, tmp_path):
        """/health answers ok."""
        client = create_test_client(engine, tmp_path)
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestGamesEndpoints:
    """GET /games and /games/latest."""

    def test_list_ordered(self, engine, tmp_path):
        """Games come back oldest first."""
        store(engine, make_game(round_date=300), make_game(round_date=100))
        client = create_test_client(engine, tmp_path)
        response = client.get("/games")
        assert response.status_code == 200
        assert [g["round_date"] for g in response.json()] == [100, 300]

    def test_list_range(self, engine, tmp_path):
        """from and to are inclusive."""
        store(engine, *(make_game(round_date=d) for d in (100, 200, 300)))
        client = create_test_client(engine, tmp_path)
        response = client.get("/games", params={"from": 100, "to": 200})
        assert [g["round_date"] for g in response.json()] == [100, 200]

    def test_list_includes_short_games(self, engine, tmp_path):
        """The games listing is not filtered to genuine games."""
        store(engine, make_game(round_length=60.0))
        client = create_test_client(engine, tmp_path)
        assert len(client.get("/games").json()) == 1

    def test_latest(self, engine, tmp_path):
        """The most recent game is returned."""
        store(engine, make_game(round_date=100), make_game(round_date=200, map_name="ns2_summit"))
        client = create_test_client(engine, tmp_path)
        response = client.get("/games/latest")
        assert response.status_code == 200
        assert response.json()["map_name"] == "ns2_summit"

    def test_latest_empty(self, engine, tmp_path):
        """An empty store yields null."""
        client = create_test_client(engine, tmp_path)
        response = client.get("/games/latest")
        assert response.status_code == 200
        assert response.json() is None

    def test_summary_shape(self, engine, tmp_path):
        """Teams serialize with players, commander and rt_graph."""
        store(engine, make_game(marines={"A": {"kills": 4}}, marine_com="A"))
        client = create_test_client(engine, tmp_path)
        marines = client.get("/games/latest").json()["marines"]
        assert marines["commander"] == "A"
        assert marines["players"]["A"]["kills"] == 4
        assert marines["rt_graph"] == []


class TestStatsEndpoint:
    """GET /stats."""

    def test_empty(self, engine, tmp_path):
        """No games gives zero stats with latest_game 0."""
        client = create_test_client(engine, tmp_path)
        data = client.get("/stats").json()
        assert data["latest_game"] == 0
        assert data["total_games"] == 0
        assert data["users"] == {}
        assert data["maps"] == {}

    def test_genuine_games_only(self, engine, tmp_path):
        """Short rounds do not count."""
        store(
            engine,
            make_genuine_game(100),
            make_genuine_game(200, winning_team="aliens"),
            make_genuine_game(300, round_length=120.0),
        )
        client = create_test_client(engine, tmp_path)
        data = client.get("/stats").json()
        assert data["latest_game"] == 200
        assert data["total_games"] == 2
        assert data["marine_wins"] == 1
        assert data["alien_wins"] == 1
        assert data["maps"]["ns2_veil"] == {"total_games": 2, "marine_wins": 1, "alien_wins": 1}

    def test_user_shape(self, engine, tmp_path):
        """Counters carry per-side values and a total."""
        marines = {"M1": {"kills": 6, "deaths": 3}, "M2": {}, "M3": {}}
        store(engine, make_genuine_game(100, marines=marines))
        client = create_test_client(engine, tmp_path)
        user = client.get("/stats").json()["users"]["M1"]
        assert user["kills"] == {"marines": 6, "aliens": 0, "total": 6}
        assert user["wins"]["total"] == 1
        assert user["kd"] == 2.0

    def test_no_deaths_kd_null(self, engine, tmp_path):
        """kd is null without deaths."""
        store(engine, make_genuine_game(100))
        client = create_test_client(engine, tmp_path)
        assert client.get("/stats").json()["users"]["M1"]["kd"] is None


class TestContinuousEndpoint:
    """GET /stats/continuous."""

    def test_entries(self, engine, tmp_path):
        """One cumulative entry per genuine game."""
        store(engine, make_genuine_game(200), make_genuine_game(100), make_game(round_date=150))
        client = create_test_client(engine, tmp_path)
        data = client.get("/stats/continuous").json()
        assert [entry["date"] for entry in data] == [100, 200]
        assert [entry["stats"]["total_games"] for entry in data] == [1, 2]

    def test_range(self, engine, tmp_path):
        """The range is applied before accumulating."""
        store(engine, *(make_genuine_game(d) for d in (100, 200, 300)))
        client = create_test_client(engine, tmp_path)
        data = client.get("/stats/continuous", params={"from": 200, "to": 300}).json()
        assert [entry["date"] for entry in data] == [200, 300]
        assert data[0]["stats"]["total_games"] == 1

    def test_empty_range(self, engine, tmp_path):
        """No qualifying games gives an empty list."""
        store(engine, make_genuine_game(100))
        client = create_test_client(engine, tmp_path)
        response = client.get("/stats/continuous", params={"from": 500})
        assert response.status_code == 200
        assert response.json() == []

    def test_from_after_to(self, engine, tmp_path):
        """from > to is a client error."""
        client = create_test_client(engine, tmp_path)
        response = client.get("/stats/continuous", params={"from": 300, "to": 100})
        assert response.status_code == 400

    def test_non_integer_range(self, engine, tmp_path):
        """Non-integer bounds fail validation."""
        client = create_test_client(engine, tmp_path)
        response = client.get("/stats/continuous", params={"from": "yesterday"})
        assert response.status_code == 422


class TestTeamsEndpoint:
    """GET /teams/suggest."""

    def test_suggestion(self, engine, tmp_path):
        """Every requested player is placed exactly once."""
        client = create_test_client(engine, tmp_path)
        response = client.get("/teams/suggest", params={"players": ["a", "b", "c", "d"]})
        assert response.status_code == 200
        data = response.json()
        assert sorted(data["marines"] + data["aliens"]) == ["a", "b", "c", "d"]
        assert len(data["marines"]) == 2
        assert "imbalance" in data

    def test_uses_history(self, engine, tmp_path):
        """Strong players are split up."""
        store(
            engine,
            make_genuine_game(
                100,
                marines={"M1": {"score": 100}, "M2": {"score": 90}, "M3": {"score": 1}},
                aliens={"A1": {"score": 2}, "A2": {"score": 1}, "A3": {"score": 1}},
            ),
        )
        client = create_test_client(engine, tmp_path)
        data = client.get("/teams/suggest", params={"players": ["M1", "M2", "A1", "A2"]}).json()
        assert ("M1" in data["marines"]) != ("M2" in data["marines"])

    def test_pinned_commanders(self, engine, tmp_path):
        """Commanders are echoed and placed on their side."""
        client = create_test_client(engine, tmp_path)
        data = client.get(
            "/teams/suggest",
            params={"players": ["a", "b", "c", "d"], "marine_com": "b", "alien_com": "a"},
        ).json()
        assert data["marine_commander"] == "b"
        assert "b" in data["marines"]
        assert "a" in data["aliens"]

    def test_invalid_commander(self, engine, tmp_path):
        """A commander outside the pool is a client error."""
        client = create_test_client(engine, tmp_path)
        response = client.get(
            "/teams/suggest", params={"players": ["a", "b"], "marine_com": "z"}
        )
        assert response.status_code == 400

    def test_too_few_players(self, engine, tmp_path):
        """One player is a client error."""
        client = create_test_client(engine, tmp_path)
        response = client.get("/teams/suggest", params={"players": ["a"]})
        assert response.status_code == 400

    def test_players_required(self, engine, tmp_path):
        """The pool is required."""
        client = create_test_client(engine, tmp_path)
        assert client.get("/teams/suggest").status_code == 422


class TestStartupIngest:
    """Lifespan ingestion into a real database file."""

    def test_ingests_data_dir(self, tmp_path):
        """Round files are stored before the first request."""
        data_dir = tmp_path / "rounds"
        data_dir.mkdir()
        write_round(data_dir, "1.json", genuine_raw_round(100))
        write_round(data_dir, "2.json", genuine_raw_round(200, winning_team=2))

        app = create_app(db_path=tmp_path / "ns2stat.db", data_dir=data_dir)
        with TestClient(app) as client:
            assert [g["round_date"] for g in client.get("/games").json()] == [100, 200]
            assert client.get("/stats").json()["alien_wins"] == 1
