"""Driver loop tying the fixed-rate simulation to input and rendering."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

import numpy as np

from snake_tui.config import GameConfig
from snake_tui.events import (
    InputDisconnected,
    KeyCode,
    KeyEvent,
    KeyEventKind,
)
from snake_tui.snake import Direction
from snake_tui.state import Frame, GameState

logger = logging.getLogger(__name__)

_DIRECTION_KEYS: dict[KeyCode, Direction] = {
    KeyCode.UP: Direction.UP,
    KeyCode.DOWN: Direction.DOWN,
    KeyCode.LEFT: Direction.LEFT,
    KeyCode.RIGHT: Direction.RIGHT,
}


class Renderer(Protocol):
    """Draws frames and reports the terminal size."""

    def size(self) -> tuple[int, int]:
        """Return the terminal size as ``(columns, rows)``."""
        ...

    def draw(self, frame: Frame) -> None:
        ...


class InputSource(Protocol):
    """Non-blocking source of key events."""

    def poll(self) -> KeyEvent | None:
        """Return the next event, ``None`` if idle.

        Raises :class:`~snake_tui.events.InputDisconnected` when the
        source is gone.
        """
        ...


class GameLoop:
    """Owns the canonical :class:`GameState` and runs the frame loop.

    Every iteration renders once, handles at most one key event and then
    advances the simulation if a full tick interval has elapsed. The game
    is created lazily on the first render, once the terminal size is
    known. Only key releases are acted on.

    *clock* and *sleep* default to :func:`time.monotonic` and
    :func:`time.sleep`; tests substitute a manual clock.
    """

    def __init__(
        self,
        renderer: Renderer,
        input_source: InputSource,
        config: GameConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.renderer = renderer
        self.input_source = input_source
        self.config = config if config is not None else GameConfig()
        self.rng = (
            rng if rng is not None
            else np.random.default_rng(self.config.seed)
        )
        self._clock = clock
        self._sleep = sleep

        self.game: GameState | None = None
        self.paused = False
        self.last_tick = clock()

    def run(self) -> None:
        """Run iterations until the player quits or input is lost."""
        logger.info(
            "Game loop started (tick=%dms).", self.config.tick_interval_ms,
        )
        while self.run_once():
            pass
        logger.info("Game loop stopped.")

    def run_once(self) -> bool:
        """Run a single iteration. Returns False when the loop must exit."""
        game = self._render()
        if not self._handle_input(game):
            return False
        self._simulate()
        self._sleep(self.config.idle_interval)
        return True

    def board_size(self) -> tuple[int, int]:
        """Return the board size that fits inside the current terminal."""
        cols, rows = self.renderer.size()
        border = self.config.border
        return max(cols - border, 1), max(rows - border, 1)

    # -- phases ----------------------------------------------------------

    def _render(self) -> GameState:
        width, height = self.board_size()

        if self.game is None:
            self.game = GameState(width, height, rng=self.rng)
            logger.info("Started a %dx%d game.", width, height)
        elif (width, height) != (self.game.width, self.game.height):
            was_over = self.game.terminated
            if not self.game.resize(width, height):
                logger.info("Snake or food cut off by resize; game over.")
            if self.game.terminated and not was_over:
                self._log_final_state(self.game)
            self.paused = True

        self.renderer.draw(self.game.snapshot(paused=self.paused))
        return self.game

    def _handle_input(self, game: GameState) -> bool:
        """Dispatch one pending key release. Returns False to exit."""
        try:
            event = self.input_source.poll()
        except InputDisconnected:
            logger.warning("Input source disconnected; leaving game loop.")
            return False

        if event is None or event.kind is not KeyEventKind.RELEASE:
            return True

        if game.terminated:
            if event.code is KeyCode.SPACE:
                self.game = game.restart()
                self.paused = False
                self.last_tick = self._clock()
                logger.info("Game restarted (previous score %d).", game.score)
            elif event.code is KeyCode.ESCAPE:
                logger.info("Player quit with score %d.", game.score)
                return False
        elif self.paused:
            if event.code is KeyCode.ESCAPE:
                self.paused = False
                logger.debug("Resumed.")
        elif event.code is KeyCode.ESCAPE:
            self.paused = True
            logger.debug("Paused.")
        elif event.code in _DIRECTION_KEYS:
            game.change_direction(_DIRECTION_KEYS[event.code])
        return True

    def _simulate(self) -> None:
        game = self.game
        if game is None or game.terminated or self.paused:
            return
        now = self._clock()
        if now - self.last_tick >= self.config.tick_interval:
            game.step()
            self.last_tick = now
            if game.terminated:
                self._log_final_state(game)

    def _log_final_state(self, game: GameState) -> None:
        logger.debug("Final state: %s", game.to_dict())
