"""Text layout of a frame, independent of any terminal backend."""

from __future__ import annotations

from snake_tui.state import Frame

TITLE = "Snake (ESC - pause, SPACE - restart)"

HEAD = "O"
BODY = "o"
FOOD = "*"
EMPTY = " "


def board_rows(frame: Frame) -> list[str]:
    """Return one string per board row with the snake and food drawn in."""
    rows = [[EMPTY] * frame.width for _ in range(frame.height)]

    def put(x: int, y: int, ch: str) -> None:
        # Positions outside the board only exist on a game that was
        # terminated by a shrinking resize; they are simply not drawn.
        if 0 <= x < frame.width and 0 <= y < frame.height:
            rows[y][x] = ch

    if frame.food is not None:
        put(frame.food.x, frame.food.y, FOOD)
    for seg in frame.snake[1:]:
        put(seg.x, seg.y, BODY)
    if frame.snake:
        head = frame.snake[0]
        put(head.x, head.y, HEAD)
    return ["".join(row) for row in rows]


def score_line(frame: Frame) -> str:
    return f"Score: {frame.score}"


def overlay_lines(frame: Frame) -> list[str]:
    """Return the status panel for the frame, or an empty list.

    The game-over panel wins over the pause panel.
    """
    if frame.terminated:
        headline = "Board cleared!" if frame.won else "Game over!"
        return [headline, "SPACE - restart", "ESC - quit"]
    if frame.paused:
        return ["Paused", "ESC - resume"]
    return []
