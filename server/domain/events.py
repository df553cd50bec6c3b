from collections import defaultdict
from typing import Callable, DefaultDict, List

from domain.enums import GameEvent
from logger import logger

Listener = Callable[..., None]


class EventBus:
    """Synchronous publish/subscribe for things the presentation layer cares about."""

    def __init__(self):
        self._listeners: DefaultDict[GameEvent, List[Listener]] = defaultdict(list)

    def subscribe(self, event: GameEvent, listener: Listener) -> Callable[[], None]:
        self._listeners[event].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[event]:
                self._listeners[event].remove(listener)

        return unsubscribe

    def publish(self, event: GameEvent, **payload) -> None:
        for listener in list(self._listeners[event]):
            try:
                listener(**payload)
            except Exception as e:
                logger.error(f"Error in {event.value} listener: {e}")
