"""Curses-backed renderer and key capture."""

from __future__ import annotations

import curses
import logging
import threading

from snake_tui.events import KeyCode, KeyEvent, KeyEventKind, KeyQueue
from snake_tui.render import (
    EMPTY,
    FOOD,
    HEAD,
    TITLE,
    board_rows,
    overlay_lines,
    score_line,
)
from snake_tui.state import Frame

logger = logging.getLogger(__name__)

_ESCAPE = 27
_ESC_DELAY_MS = 25

_KEYMAP: dict[int, KeyCode] = {
    curses.KEY_UP: KeyCode.UP,
    curses.KEY_DOWN: KeyCode.DOWN,
    curses.KEY_LEFT: KeyCode.LEFT,
    curses.KEY_RIGHT: KeyCode.RIGHT,
    _ESCAPE: KeyCode.ESCAPE,
    ord(" "): KeyCode.SPACE,
}

# Color pair ids.
_SNAKE = 1
_FOOD = 2
_SCORE = 3
_TEXT = 4


def translate_key(ch: int) -> KeyCode:
    """Map a curses key code to a :class:`KeyCode`."""
    return _KEYMAP.get(ch, KeyCode.OTHER)


class CursesTerminal:
    """Context manager owning the curses screen.

    Entering switches the terminal to cbreak/no-echo mode on the alternate
    screen; exiting restores it. Failures on either side propagate.
    ``lock`` serializes curses calls between the render and capture
    threads.
    """

    def __init__(self) -> None:
        self.stdscr: curses.window | None = None
        self.lock = threading.Lock()
        self.colors = False

    def __enter__(self) -> CursesTerminal:
        self.stdscr = curses.initscr()
        try:
            curses.noecho()
            curses.cbreak()
            self.stdscr.keypad(True)
            self.stdscr.nodelay(True)
            curses.set_escdelay(_ESC_DELAY_MS)
            try:
                curses.curs_set(0)
            except curses.error:
                pass  # terminal cannot hide the cursor
            if curses.has_colors():
                self._init_colors()
        except Exception:
            self._restore()
            raise
        logger.debug("Terminal initialised.")
        return self

    def __exit__(self, *exc_info) -> None:
        self._restore()
        logger.debug("Terminal restored.")

    @property
    def screen(self) -> curses.window:
        if self.stdscr is None:
            raise RuntimeError("Terminal is not active.")
        return self.stdscr

    def attr(self, pair: int) -> int:
        """Return the attribute for a color pair, or 0 without colors."""
        return curses.color_pair(pair) if self.colors else 0

    def _init_colors(self) -> None:
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(_SNAKE, curses.COLOR_GREEN, -1)
            curses.init_pair(_FOOD, curses.COLOR_RED, -1)
            curses.init_pair(_SCORE, curses.COLOR_YELLOW, -1)
            curses.init_pair(_TEXT, curses.COLOR_WHITE, -1)
        except curses.error:
            logger.warning("Terminal colors unavailable; drawing in mono.")
            return
        self.colors = True

    def _restore(self) -> None:
        if self.stdscr is not None:
            self.stdscr.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()
        self.stdscr = None


class CursesRenderer:
    """Draws frames: bordered board, score under it, centred overlay."""

    def __init__(self, terminal: CursesTerminal) -> None:
        self.terminal = terminal

    def size(self) -> tuple[int, int]:
        with self.terminal.lock:
            rows, cols = self.terminal.screen.getmaxyx()
        return cols, rows

    def draw(self, frame: Frame) -> None:
        term = self.terminal
        with term.lock:
            scr = term.screen
            scr.erase()
            rows, cols = scr.getmaxyx()

            try:
                scr.box()
            except curses.error:
                pass
            self._put(0, 2, f" {TITLE} ", curses.A_BOLD)

            for y, row in enumerate(board_rows(frame)):
                for x, ch in enumerate(row):
                    if ch == EMPTY:
                        continue
                    pair = _FOOD if ch == FOOD else _SNAKE
                    attr = term.attr(pair)
                    if ch == HEAD:
                        attr |= curses.A_BOLD
                    self._put(y + 1, x + 1, ch, attr)

            score = score_line(frame)
            self._put(
                frame.height + 1,
                max((cols - len(score)) // 2, 0),
                score,
                term.attr(_SCORE) | curses.A_BOLD,
            )

            lines = overlay_lines(frame)
            if lines:
                top = max((rows - len(lines)) // 2, 0)
                headline_pair = _FOOD if frame.terminated else _SCORE
                for i, line in enumerate(lines):
                    attr = (
                        term.attr(headline_pair) | curses.A_BOLD
                        if i == 0 else term.attr(_TEXT)
                    )
                    self._put(
                        top + i, max((cols - len(line)) // 2, 0), line, attr,
                    )

            scr.refresh()

    def _put(self, y: int, x: int, text: str, attr: int) -> None:
        if not text:
            return
        try:
            self.terminal.screen.addstr(y, x, text, attr)
        except curses.error:
            pass  # clipped at the screen edge


class CursesInputSource:
    """Key capture thread feeding a :class:`KeyQueue`.

    The thread polls curses every *poll_interval* seconds and forwards
    each keystroke. A terminal delivers complete keystrokes only, so every
    key is reported as a release. ``KEY_RESIZE`` is swallowed; reading it
    is what lets curses pick up the new screen size. Any capture error
    closes the queue, which ends the game loop.
    """

    def __init__(
        self,
        terminal: CursesTerminal,
        poll_interval: float = 0.01,
        keys: KeyQueue | None = None,
    ) -> None:
        self.terminal = terminal
        self.poll_interval = poll_interval
        self.keys = keys if keys is not None else KeyQueue()
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._capture, name="key-capture", daemon=True,
        )

    def start(self) -> CursesInputSource:
        self._thread.start()
        return self

    def stop(self) -> None:
        self._stop.set()
        self._thread.join(timeout=1.0)

    def poll(self) -> KeyEvent | None:
        return self.keys.poll()

    def _capture(self) -> None:
        try:
            while not self._stop.is_set():
                with self.terminal.lock:
                    ch = self.terminal.screen.getch()
                if ch == -1:
                    self._stop.wait(self.poll_interval)
                    continue
                if ch == curses.KEY_RESIZE:
                    continue
                self.keys.put(
                    KeyEvent(translate_key(ch), KeyEventKind.RELEASE),
                )
        except Exception:
            logger.exception("Key capture failed.")
        finally:
            self.keys.close()
