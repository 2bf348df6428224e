"""Tests for the curses renderer and key capture, using a fake screen."""

from __future__ import annotations

import curses
import threading
import time

import pytest

from snake_tui.events import InputDisconnected, KeyCode, KeyEventKind
from snake_tui.snake import Point
from snake_tui.state import Frame
from snake_tui.terminal import (
    CursesInputSource,
    CursesRenderer,
    CursesTerminal,
    translate_key,
)


class FakeScreen:
    def __init__(self, rows: int = 12, cols: int = 30, keys=()) -> None:
        self.rows = rows
        self.cols = cols
        self.keys = list(keys)
        self.text: dict[tuple[int, int], str] = {}
        self.refreshed = 0

    def getmaxyx(self):
        return self.rows, self.cols

    def erase(self):
        self.text.clear()

    def box(self):
        pass

    def addstr(self, y, x, text, attr=0):
        if y >= self.rows or x >= self.cols:
            raise curses.error("out of range")
        self.text[(y, x)] = text

    def refresh(self):
        self.refreshed += 1

    def getch(self):
        return self.keys.pop(0) if self.keys else -1


class FakeTerminal:
    def __init__(self, screen: FakeScreen) -> None:
        self.screen = screen
        self.lock = threading.Lock()
        self.colors = False

    def attr(self, pair: int) -> int:
        return 0


def _wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


class TestTranslateKey:
    @pytest.mark.parametrize(
        ("ch", "code"),
        [
            (curses.KEY_UP, KeyCode.UP),
            (curses.KEY_DOWN, KeyCode.DOWN),
            (curses.KEY_LEFT, KeyCode.LEFT),
            (curses.KEY_RIGHT, KeyCode.RIGHT),
            (27, KeyCode.ESCAPE),
            (ord(" "), KeyCode.SPACE),
            (ord("q"), KeyCode.OTHER),
        ],
    )
    def test_mapping(self, ch, code):
        assert translate_key(ch) is code


class TestCursesTerminalColors:
    def test_missing_default_colors_falls_back_to_mono(self, monkeypatch):
        def no_default_colors():
            raise curses.error("use_default_colors() returned ERR")

        monkeypatch.setattr(curses, "start_color", lambda: None)
        monkeypatch.setattr(curses, "use_default_colors", no_default_colors)
        term = CursesTerminal()
        term._init_colors()
        assert term.colors is False
        assert term.attr(1) == 0

    def test_colors_enabled(self, monkeypatch):
        pairs = []
        monkeypatch.setattr(curses, "start_color", lambda: None)
        monkeypatch.setattr(curses, "use_default_colors", lambda: None)
        monkeypatch.setattr(
            curses, "init_pair", lambda *args: pairs.append(args),
        )
        term = CursesTerminal()
        term._init_colors()
        assert term.colors is True
        assert [p[0] for p in pairs] == [1, 2, 3, 4]


class TestCursesRenderer:
    def test_size_is_cols_rows(self):
        renderer = CursesRenderer(FakeTerminal(FakeScreen(rows=24, cols=80)))
        assert renderer.size() == (80, 24)

    def test_draws_board_inside_border(self):
        screen = FakeScreen(rows=6, cols=10)
        renderer = CursesRenderer(FakeTerminal(screen))
        frame = Frame(
            width=8, height=4, snake=(Point(2, 1), Point(1, 1)),
            food=Point(6, 3), score=7, terminated=False,
        )
        renderer.draw(frame)
        assert screen.text[(2, 3)] == "O"
        assert screen.text[(2, 2)] == "o"
        assert screen.text[(4, 7)] == "*"
        assert "Score: 7" in screen.text.values()
        assert screen.refreshed == 1

    def test_overlay_drawn_when_paused(self):
        screen = FakeScreen(rows=12, cols=30)
        renderer = CursesRenderer(FakeTerminal(screen))
        frame = Frame(
            width=28, height=10, snake=(Point(0, 0),), food=Point(5, 5),
            score=0, terminated=False, paused=True,
        )
        renderer.draw(frame)
        assert "Paused" in screen.text.values()

    def test_clipped_writes_do_not_raise(self):
        screen = FakeScreen(rows=3, cols=3)
        renderer = CursesRenderer(FakeTerminal(screen))
        frame = Frame(
            width=10, height=10, snake=(Point(9, 9),), food=Point(0, 0),
            score=0, terminated=True,
        )
        renderer.draw(frame)
        assert screen.refreshed == 1


class TestCursesInputSource:
    def test_forwards_keys_as_releases(self):
        screen = FakeScreen(
            keys=[curses.KEY_UP, curses.KEY_RESIZE, ord("x"), 27],
        )
        source = CursesInputSource(FakeTerminal(screen), poll_interval=0.001)
        source.start()
        received = []

        def collect():
            event = source.poll()
            if event is not None:
                received.append(event)
            return len(received) == 3

        try:
            assert _wait_for(collect)
        finally:
            source.stop()

        assert [e.code for e in received] == [
            KeyCode.UP, KeyCode.OTHER, KeyCode.ESCAPE,
        ]
        assert all(e.kind is KeyEventKind.RELEASE for e in received)

    def test_stop_disconnects(self):
        source = CursesInputSource(
            FakeTerminal(FakeScreen()), poll_interval=0.001,
        ).start()
        source.stop()
        with pytest.raises(InputDisconnected):
            source.poll()

    def test_capture_error_disconnects(self):
        class BrokenScreen(FakeScreen):
            def getch(self):
                raise curses.error("tty gone")

        source = CursesInputSource(
            FakeTerminal(BrokenScreen()), poll_interval=0.001,
        ).start()
        assert _wait_for(lambda: source.keys.closed)
        with pytest.raises(InputDisconnected):
            source.poll()
        source.stop()
