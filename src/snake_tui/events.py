"""Key events and the queue that carries them from the capture thread."""

from __future__ import annotations

import enum
import queue
import threading
from dataclasses import dataclass


class KeyCode(enum.Enum):
    """Keys the game reacts to; everything else maps to ``OTHER``."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ESCAPE = "escape"
    SPACE = "space"
    OTHER = "other"


class KeyEventKind(enum.Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """A single key event as produced by an input source."""

    code: KeyCode
    kind: KeyEventKind = KeyEventKind.RELEASE


class InputDisconnected(Exception):
    """Raised by :meth:`KeyQueue.poll` once the producer has gone away."""


class KeyQueue:
    """Single-producer/single-consumer channel of :class:`KeyEvent`.

    The capture thread calls :meth:`put` and finally :meth:`close`; the
    game loop calls :meth:`poll`, which never blocks. Events queued before
    :meth:`close` are still delivered before the disconnection surfaces.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[KeyEvent] = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def put(self, event: KeyEvent) -> None:
        """Enqueue an event. Events put after :meth:`close` are dropped."""
        if not self.closed:
            self._queue.put(event)

    def close(self) -> None:
        """Mark the producer side as disconnected."""
        self._closed.set()

    def poll(self) -> KeyEvent | None:
        """Return the next pending event, or ``None`` if there is none.

        Raises :class:`InputDisconnected` when the queue is closed and
        drained.
        """
        # Read the flag first: anything put before close() is then
        # already in the queue when get_nowait() runs.
        closed = self.closed
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            if closed:
                raise InputDisconnected("Input source disconnected.") from None
            return None
