import asyncio
import uuid

from database.models import MatchModel, PlayerModel
from services.score_reporter import ScoreReporter


def test_register_then_win_records_score_and_match(session_factory, db):
    reporter = ScoreReporter(session_factory, enabled=True)
    pid = str(uuid.uuid4())

    async def play():
        player = await reporter.register(pid, "Alice")
        result = await reporter.submit_match(pid, 5, "advanced", 42000, won=True)
        return player, result

    player, result = asyncio.run(play())

    assert player["playerId"] == pid
    assert result["player"]["bestScore"] == 5
    assert result["match"]["durationMs"] == 42000
    assert db.get(PlayerModel, pid).games_played == 1
    assert db.query(MatchModel).count() == 1


def test_loss_records_score_only(session_factory, db):
    reporter = ScoreReporter(session_factory, enabled=True)
    pid = str(uuid.uuid4())

    result = asyncio.run(reporter._submit_match(pid, 2, "beginner", 30000, won=False))

    assert result["player"]["currentScore"] == 2
    assert "match" not in result
    assert db.query(MatchModel).count() == 0


def test_failures_are_dropped():
    def broken_factory():
        raise RuntimeError("database unavailable")

    reporter = ScoreReporter(broken_factory, enabled=True)

    async def play():
        registered = await reporter.register(str(uuid.uuid4()), "Alice")
        submitted = await reporter.submit_match(str(uuid.uuid4()), 5, "beginner", 1000, won=True)
        return registered, submitted

    assert asyncio.run(play()) == (None, None)


def test_invalid_player_id_is_dropped(session_factory):
    reporter = ScoreReporter(session_factory, enabled=True)
    assert asyncio.run(reporter._submit_match("X", 5, "beginner", 1000, won=True)) is None


def test_disabled_reporter_does_nothing(session_factory, db):
    reporter = ScoreReporter(session_factory, enabled=False)

    assert reporter.submit_match(str(uuid.uuid4()), 5, "beginner", 1000, won=True) is None
    assert asyncio.run(reporter.register(str(uuid.uuid4()), "Alice")) is None
    assert db.query(PlayerModel).count() == 0
