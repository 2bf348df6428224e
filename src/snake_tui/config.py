"""Runtime configuration for a game session."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class GameConfig:
    """Timing, layout and logging settings.

    Supports JSON serialization so a session can be reproduced with the
    same seed and tick rate.
    """

    # Timing
    tick_interval_ms: int = 120
    idle_ms: int = 10
    input_poll_ms: int = 10

    # Layout: cells taken by the frame around the board, per axis.
    border: int = 2

    # Food placement RNG; None draws fresh OS entropy.
    seed: int | None = None

    # Logging
    log_file: str | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive.")
        if self.idle_ms <= 0:
            raise ValueError("idle_ms must be positive.")
        if self.input_poll_ms <= 0:
            raise ValueError("input_poll_ms must be positive.")
        if self.border < 0:
            raise ValueError("border must be >= 0.")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}.")

    @property
    def tick_interval(self) -> float:
        """Simulation tick interval in seconds."""
        return self.tick_interval_ms / 1000.0

    @property
    def idle_interval(self) -> float:
        """Sleep between loop iterations in seconds."""
        return self.idle_ms / 1000.0

    @property
    def input_poll_interval(self) -> float:
        return self.input_poll_ms / 1000.0

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
