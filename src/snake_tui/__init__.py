"""Snake TUI — terminal snake game."""

from snake_tui.config import GameConfig
from snake_tui.events import (
    InputDisconnected,
    KeyCode,
    KeyEvent,
    KeyEventKind,
    KeyQueue,
)
from snake_tui.loop import GameLoop
from snake_tui.snake import Direction, Point
from snake_tui.state import Frame, GameState

__all__ = [
    "Direction",
    "Frame",
    "GameConfig",
    "GameLoop",
    "GameState",
    "InputDisconnected",
    "KeyCode",
    "KeyEvent",
    "KeyEventKind",
    "KeyQueue",
    "Point",
]
