import threading
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config import DATABASE_URL, MAX_ACTIVE_GAMES
from database.models import Base
from logger import logger

_engine: Optional[Engine] = None
_active_games = 0
_engine_lock = threading.Lock()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)


def get_engine() -> Engine:
    """Create the engine and schema on first use, then reuse it."""
    global _engine
    if _engine is not None:
        return _engine

    # Routers run in a threadpool and the score reporter in worker threads
    with _engine_lock:
        if _engine is None:
            connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
            engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
            try:
                Base.metadata.create_all(engine)
            except Exception as e:
                logger.error(f"Database initialization failed: {e}")
                engine.dispose()
                raise
            SessionLocal.configure(bind=engine)
            logger.info("Database schema initialized")
            _engine = engine
    return _engine


def new_session() -> Session:
    get_engine()
    return SessionLocal()


def get_db() -> Iterator[Session]:
    db = new_session()
    try:
        yield db
    finally:
        db.close()


def acquire_game_connection() -> bool:
    global _active_games
    if _active_games >= MAX_ACTIVE_GAMES:
        logger.warning(f"Game capacity reached ({MAX_ACTIVE_GAMES})")
        return False
    _active_games += 1
    return True


def release_game_connection() -> None:
    global _active_games
    _active_games = max(0, _active_games - 1)


def active_game_count() -> int:
    return _active_games
