import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tennis_pong.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]

MAX_ACTIVE_GAMES = int(os.getenv("MAX_ACTIVE_GAMES", "50"))
SCORE_REPORTING = os.getenv("SCORE_REPORTING", "1") not in ("0", "false", "False")
