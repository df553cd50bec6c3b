import threading
import time

import sqlalchemy
from sqlalchemy.pool import StaticPool

from database import config as db_config


def test_concurrent_first_use_builds_one_engine(monkeypatch):
    created = []

    def slow_create_engine(url, **kwargs):
        time.sleep(0.2)
        engine = sqlalchemy.create_engine(
            "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool,
        )
        created.append(engine)
        return engine

    monkeypatch.setattr(db_config, "create_engine", slow_create_engine)
    monkeypatch.setattr(db_config, "_engine", None)
    monkeypatch.setitem(db_config.SessionLocal.kw, "bind", None)

    results = []
    threads = [threading.Thread(target=lambda: results.append(db_config.get_engine())) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(created) == 1
    assert len(results) == 4
    assert all(engine is created[0] for engine in results)
    assert db_config.SessionLocal.kw["bind"] is created[0]

    created[0].dispose()


def test_capacity_gate(monkeypatch):
    monkeypatch.setattr(db_config, "MAX_ACTIVE_GAMES", 2)
    monkeypatch.setattr(db_config, "_active_games", 0)

    assert db_config.acquire_game_connection()
    assert db_config.acquire_game_connection()
    assert not db_config.acquire_game_connection()

    db_config.release_game_connection()
    assert db_config.active_game_count() == 1
    assert db_config.acquire_game_connection()
