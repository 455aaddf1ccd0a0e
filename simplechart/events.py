from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Literal, Optional


LOGGER = logging.getLogger(__name__)

EventType = Literal[
    "pointer_move",
    "pointer_leave",
]

EventHandler = Callable[["InputEvent"], object]


@dataclass(frozen=True)
class InputEvent:
    event_type: EventType
    timestamp: float
    x: Optional[float] = None
    y: Optional[float] = None


class PointerEventSource:
    """Fans raw surface-space pointer events out to every subscribed handler.

    Each chart subscribes its own bound handler, so any number of charts can share
    or own sources independently.
    """

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        self._handlers.append(handler)

        def unsubscribe() -> None:
            try:
                self._handlers.remove(handler)
            except ValueError:
                LOGGER.debug("handler already unsubscribed: %r", handler)

        return unsubscribe

    def dispatch(self, event: InputEvent) -> None:
        for handler in list(self._handlers):
            handler(event)

    def pointer_move(self, x: float, y: float, *, timestamp: float = 0.0) -> None:
        self.dispatch(InputEvent(event_type="pointer_move", timestamp=timestamp, x=x, y=y))

    def pointer_leave(self, *, timestamp: float = 0.0) -> None:
        self.dispatch(InputEvent(event_type="pointer_leave", timestamp=timestamp))
