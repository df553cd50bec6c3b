import asyncio
import time
import uuid
from typing import Callable, Dict, List, Optional, Set

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from database.config import release_game_connection
from domain.enums import GameEvent, GameSide, GameState
from domain.game import Game
from logger import logger
from services.score_reporter import ScoreReporter


class GameSession:
    """One human player against the computer, attached to a WebSocket."""
    INACTIVE_TIMEOUT = 300  # 5 minutes in seconds

    def __init__(self, websocket: WebSocket, player_id: str, player_name: str,
                 difficulty: Optional[str] = None, reporter: Optional[ScoreReporter] = None,
                 game: Optional[Game] = None):
        self.session_id = str(uuid.uuid4())
        self.websocket = websocket
        self.player_id = player_id
        self.player_name = player_name
        self.reporter = reporter or ScoreReporter()

        self.game = game or Game(session_id=self.session_id)
        self.game.session_id = self.session_id
        if difficulty:
            self.game.set_difficulty(difficulty)

        self.connected = True
        self.last_state = self.game.state
        self.closed = False
        self.last_activity = time.time()
        self.outbox: List[Dict] = []
        self.pending: Set[asyncio.Task] = set()

        self._unsubscribers: List[Callable[[], None]] = [
            self.game.events.subscribe(GameEvent.PADDLE_HIT, self._on_paddle_hit),
            self.game.events.subscribe(GameEvent.MATCH_ENDED, self._on_match_ended),
        ]

    @property
    def is_expired(self) -> bool:
        """Check if session should be cleaned up"""
        inactive_time = time.time() - self.last_activity
        return not self.connected or inactive_time > self.INACTIVE_TIMEOUT

    def summary(self) -> Dict:
        return {
            "session_id": self.session_id,
            "player_name": self.player_name,
            "difficulty": self.game.profile.name,
            "state": self.game.state.value,
            "player_score": self.game.match.player_score,
            "computer_score": self.game.match.computer_score,
        }

    async def connect(self) -> None:
        logger.info(f"Session {self.session_id}: Player {self.player_name} connected on {self.game.profile.name}")
        await self.send({
            "type": "session",
            "session_id": self.session_id,
            "player_id": self.player_id,
            "player_name": self.player_name,
            "difficulty": self.game.profile.name,
        })
        self._track(asyncio.create_task(self._register_player()))

    async def _register_player(self) -> None:
        player = await self.reporter.register(self.player_id, self.player_name)
        if player is None:
            return
        # Renamed players get a new id server-side
        self.player_id = player["playerId"]
        self.outbox.append({"type": "player", "player": player})

    def handle_command(self, command: Dict) -> None:
        self.last_activity = time.time()
        kind = command.get("type")

        if kind == "keys":
            self.game.set_keys(command.get("keys") or {})
        elif kind == "start":
            self.game.start()
        elif kind == "pause":
            self.game.toggle_pause()
        elif kind == "reset":
            self.game.reset()
        elif kind == "difficulty":
            try:
                self.game.set_difficulty(command.get("value"))
            except ValueError as e:
                self.outbox.append({"type": "error", "message": str(e)})
        else:
            self.outbox.append({"type": "error", "message": f"Unknown command: {kind}"})

    async def update(self) -> None:
        """Run due timers, advance one tick and push the new state."""
        self.game.scheduler.run_due()
        self.game.update()

        # Covers changes made by commands between ticks too
        if self.game.state != self.last_state:
            self.last_state = self.game.state
            status = self.game.state.value
            if self.game.state == GameState.ENDED:
                status = f"game_over_{self.game.winner.value}"
            self.outbox.append({"type": "status", "status": status})

        await self.flush()
        await self.send({"type": "state", **self.game.snapshot()})

    async def flush(self) -> None:
        messages, self.outbox = self.outbox, []
        for message in messages:
            if message["type"] == "status":
                logger.debug(f"Session {self.session_id}: Broadcasting status - {message['status']}")
            await self.send(message)

    async def send(self, message: Dict) -> None:
        if not self.connected:
            return
        try:
            await self.websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError):
            logger.warning(f"Session {self.session_id}: Player {self.player_name} disconnected during broadcast")
            self.connected = False

    def _on_paddle_hit(self, side: GameSide, vx: float, vy: float) -> None:
        self.outbox.append({"type": "hit", "side": side.value})

    def _on_match_ended(self, winner: GameSide, player_score: int, computer_score: int,
                        difficulty: str, duration_ms: int) -> None:
        task = self.reporter.submit_match(
            self.player_id,
            player_score,
            difficulty,
            duration_ms,
            won=winner == GameSide.PLAYER,
        )
        if task is not None:
            self._track(task)

    def _track(self, task: asyncio.Task) -> None:
        self.pending.add(task)
        task.add_done_callback(self.pending.discard)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.connected = False
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        # Worker threads already running a database write still finish it
        for task in list(self.pending):
            task.cancel()
        self.game.scheduler.clear()
        release_game_connection()
        logger.info(f"Session {self.session_id}: Player {self.player_name} disconnected")
