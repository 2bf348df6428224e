"""Command-line launcher for the terminal snake game."""

from __future__ import annotations

import argparse
import logging
import sys

from snake_tui.config import GameConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-tui",
        description="Play snake in the terminal.",
        epilog=(
            "Arrow keys steer, ESC pauses or resumes, SPACE restarts after "
            "a game over and ESC then quits."
        ),
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    parser.add_argument(
        "--tick-ms", type=int, default=None,
        help="Simulation tick interval in milliseconds.",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for food placement.",
    )
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Write logs to this file (nothing is logged otherwise).",
    )
    parser.add_argument(
        "--log-level", type=str, default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    parser.add_argument(
        "--dump-config", type=str, default=None, metavar="PATH",
        help="Write the effective config to PATH and exit.",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    flag_map = {
        "tick_ms": "tick_interval_ms",
        "seed": "seed",
        "log_file": "log_file",
        "log_level": "log_level",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        config = GameConfig(**d)
    return config


def _configure_logging(config: GameConfig) -> None:
    # The game owns the screen, so logs only ever go to a file.
    if config.log_file:
        handler: logging.Handler = logging.FileHandler(config.log_file)
    else:
        handler = logging.NullHandler()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        handlers=[handler],
    )


def play(config: GameConfig) -> int:
    """Run one interactive session until the player quits."""
    from snake_tui.loop import GameLoop
    from snake_tui.terminal import (
        CursesInputSource,
        CursesRenderer,
        CursesTerminal,
    )

    with CursesTerminal() as terminal:
        source = CursesInputSource(
            terminal, poll_interval=config.input_poll_interval,
        ).start()
        try:
            GameLoop(CursesRenderer(terminal), source, config).run()
        finally:
            source.stop()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-tui`` command."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = _resolve_config(args)
    _configure_logging(config)

    if args.dump_config:
        config.save(args.dump_config)
        return 0

    logger.info("Starting snake-tui with %s", config.to_dict())
    return play(config)


if __name__ == "__main__":
    sys.exit(main())
