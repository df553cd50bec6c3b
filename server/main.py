import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.endpoints import endpoints
from api.game_socket_handler import handle_game_connection
from api.leaderboard import leaderboard
from api.matches import matches
from api.players import players
from api.scores import scores
from config import ALLOWED_ORIGINS
from core.game_loop import game_loop
from logger import logger


@asynccontextmanager
async def lifespan(_: FastAPI):
    game_loop_task = asyncio.create_task(game_loop.run())
    yield
    await game_loop.stop()
    game_loop_task.cancel()
    try:
        await game_loop_task
    except asyncio.CancelledError:
        pass


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    fields = sorted({str(error["loc"][-1]) for error in exc.errors() if error.get("loc")})
    return JSONResponse(status_code=400, content={"detail": f"Invalid or missing fields: {', '.join(fields)}"})


app.include_router(endpoints)
app.include_router(players)
app.include_router(scores)
app.include_router(leaderboard)
app.include_router(matches)


@app.websocket("/game")
async def websocket_endpoint(
        websocket: WebSocket,
        player_id: str | None = None,
        player_name: str | None = None,
        difficulty: str | None = None,
):
    await websocket.accept()
    try:
        await handle_game_connection(websocket, player_id, player_name, difficulty, game_loop)
    except Exception as e:
        logger.error(f"Error in websocket connection: {e}")
        try:
            await websocket.close(code=4000, reason=str(e))
        except RuntimeError:
            pass  # WebSocket already closed
