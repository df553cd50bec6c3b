import uuid

import pytest

from database.models import GameScoreModel, MatchModel, PlayerModel


def new_id() -> str:
    return str(uuid.uuid4())


def register(client, player_id, name):
    response = client.post("/players", json={"playerId": player_id, "playerName": name})
    assert response.status_code == 200
    return response.json()


def test_register_new_player(client):
    pid = new_id()
    player = register(client, pid, "Alice")

    assert player["playerId"] == pid
    assert player["playerName"] == "Alice"
    assert player["bestScore"] == 0
    assert player["gamesPlayed"] == 0


def test_same_name_refreshes_existing_player(client):
    pid = new_id()
    first = register(client, pid, "Alice")
    second = register(client, pid, "Alice")

    assert second["playerId"] == pid
    assert second["createdAt"] == first["createdAt"]


def test_different_name_forks_a_new_player(client):
    pid = new_id()
    register(client, pid, "Alice")

    bob = register(client, pid, "Bob")

    assert bob["playerId"] != pid
    assert bob["playerName"] == "Bob"
    assert client.get(f"/players/{pid}").json()["playerName"] == "Alice"


def test_non_uuid_player_id_gets_replaced(client):
    player = register(client, "X", "Alice")

    assert player["playerId"] != "X"
    assert uuid.UUID(player["playerId"])


@pytest.mark.parametrize("body", [
    {"playerId": new_id()},
    {"playerId": "", "playerName": "Alice"},
    {"playerId": new_id(), "playerName": ""},
])
def test_register_rejects_missing_fields(client, body):
    response = client.post("/players", json=body)
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Invalid or missing fields")


@pytest.mark.parametrize("player_id", ["not-a-uuid", str(uuid.UUID(int=0))])
def test_unknown_player_is_404(client, player_id):
    assert client.get(f"/players/{player_id}").status_code == 404


def test_score_for_unseen_player_creates_it(client):
    pid = new_id()
    response = client.post("/scores", json={"playerId": pid, "score": 4})

    assert response.status_code == 200
    player = response.json()
    assert player["playerName"] == "Player"
    assert player["currentScore"] == 4
    assert player["bestScore"] == 4
    assert player["gamesPlayed"] == 1


def test_scores_update_aggregates_and_history(client):
    pid = new_id()
    register(client, pid, "Alice")
    for score in (3, 5, 2):
        client.post("/scores", json={"playerId": pid, "score": score})

    player = client.get(f"/players/{pid}").json()
    assert player["currentScore"] == 2
    assert player["bestScore"] == 5
    assert player["gamesPlayed"] == 3

    history = client.get(f"/players/{pid}/scores").json()
    assert sorted(sample["score"] for sample in history) == [2, 3, 5]
    assert len(client.get(f"/players/{pid}/scores", params={"limit": 2}).json()) == 2


@pytest.mark.parametrize("body, field", [
    ({"playerId": new_id(), "score": "7"}, "score"),
    ({"playerId": new_id(), "score": 2.5}, "score"),
    ({"score": 3}, "playerId"),
])
def test_malformed_score_is_400(client, body, field):
    response = client.post("/scores", json=body)

    assert response.status_code == 400
    assert field in response.json()["detail"]


def test_score_with_non_uuid_player_is_400(client):
    response = client.post("/scores", json={"playerId": "X", "score": 3})
    assert response.status_code == 400


def test_leaderboard_orders_by_best_score_then_fewest_games(client):
    a, b, c, idle = new_id(), new_id(), new_id(), new_id()
    for pid, name in ((a, "A"), (b, "B"), (c, "C"), (idle, "Idle")):
        register(client, pid, name)
    client.post("/scores", json={"playerId": a, "score": 3})
    client.post("/scores", json={"playerId": b, "score": 5})
    client.post("/scores", json={"playerId": b, "score": 1})
    client.post("/scores", json={"playerId": c, "score": 5})

    board = client.get("/leaderboard").json()

    assert [row["playerName"] for row in board] == ["C", "B", "A"]
    assert len(client.get("/leaderboard", params={"limit": 1}).json()) == 1
    assert client.get("/leaderboard", params={"limit": 0}).status_code == 400


def test_record_match(client):
    pid = new_id()
    response = client.post("/matches", json={"playerId": pid, "difficulty": "expert", "durationMs": 61000})

    assert response.status_code == 200
    match = response.json()
    assert match["playerId"] == pid
    assert match["difficulty"] == "expert"
    assert match["durationMs"] == 61000
    assert match["matchId"]
    assert client.get(f"/players/{pid}").status_code == 200


@pytest.mark.parametrize("body", [
    {"playerId": "X", "difficulty": "beginner", "durationMs": 1000},
    {"playerId": new_id(), "difficulty": "", "durationMs": 1000},
    {"playerId": new_id(), "difficulty": "beginner", "durationMs": "fast"},
    {"playerId": new_id(), "difficulty": "beginner", "durationMs": -1},
])
def test_malformed_match_is_400(client, body):
    assert client.post("/matches", json=body).status_code == 400


def test_best_timers_per_player_and_difficulty(client):
    a, b = new_id(), new_id()
    register(client, a, "A")
    register(client, b, "B")
    for pid, difficulty, duration in (
            (a, "beginner", 9000),
            (a, "beginner", 7000),
            (a, "expert", 5000),
            (b, "beginner", 8000),
    ):
        client.post("/matches", json={"playerId": pid, "difficulty": difficulty, "durationMs": duration})

    overall = client.get("/leaderboard/timers").json()
    beginner = client.get("/leaderboard/timers", params={"difficulty": "beginner"}).json()

    assert [(row["playerName"], row["bestDurationMs"]) for row in overall] == [("A", 5000), ("B", 8000)]
    assert [(row["playerName"], row["bestDurationMs"]) for row in beginner] == [("A", 7000), ("B", 8000)]


def test_specs_describe_court_and_difficulties(client):
    specs = client.get("/specs").json()

    assert specs["court"]["width"] == 600
    assert specs["court"]["net_y"] == 400
    assert specs["court"]["bounds"] == {"left": 80, "right": 520, "top": 50, "bottom": 750}
    assert set(specs["difficulties"]) == {"beginner", "advanced", "expert"}
    assert specs["game"]["winning_score"] == 5


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_score_write_failure_is_500_and_rolled_back(failing_client, db):
    pid = new_id()
    response = failing_client.post("/scores", json={"playerId": pid, "score": 4})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert db.get(PlayerModel, pid) is None
    assert db.query(GameScoreModel).count() == 0


def test_player_write_failure_is_500_and_rolled_back(failing_client, db):
    pid = new_id()
    response = failing_client.post("/players", json={"playerId": pid, "playerName": "Alice"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert db.get(PlayerModel, pid) is None


def test_match_write_failure_is_500_and_rolled_back(failing_client, db):
    pid = new_id()
    response = failing_client.post("/matches", json={"playerId": pid, "difficulty": "expert", "durationMs": 1000})

    assert response.status_code == 500
    assert db.query(MatchModel).count() == 0
    assert db.get(PlayerModel, pid) is None
