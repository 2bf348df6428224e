"""Tests for the snake-tui command line."""

import json

import pytest

from snake_tui import cli
from snake_tui.cli import _build_parser, _resolve_config, main
from snake_tui.config import GameConfig


class TestCLIParser:
    def test_defaults(self):
        args = _build_parser().parse_args([])
        assert args.config is None
        assert args.tick_ms is None
        assert args.seed is None
        assert args.dump_config is None

    def test_flags(self):
        args = _build_parser().parse_args([
            "--tick-ms", "80", "--seed", "5", "--log-level", "DEBUG",
        ])
        assert args.tick_ms == 80
        assert args.seed == 5
        assert args.log_level == "DEBUG"

    def test_bad_log_level(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["--log-level", "LOUD"])


class TestResolveConfig:
    def test_no_flags(self):
        args = _build_parser().parse_args([])
        assert _resolve_config(args) == GameConfig()

    def test_file_then_flags(self, tmp_path):
        path = tmp_path / "cfg.json"
        GameConfig(tick_interval_ms=300, seed=1).save(path)
        args = _build_parser().parse_args(["--config", str(path), "--seed", "9"])
        cfg = _resolve_config(args)
        assert cfg.tick_interval_ms == 300
        assert cfg.seed == 9


class TestMain:
    def test_dump_config(self, tmp_path):
        out = tmp_path / "effective.json"
        assert main(["--tick-ms", "200", "--dump-config", str(out)]) == 0
        data = json.loads(out.read_text())
        assert data["tick_interval_ms"] == 200

    def test_play_called_with_config(self, monkeypatch):
        seen = []

        def fake_play(config):
            seen.append(config)
            return 0

        monkeypatch.setattr(cli, "play", fake_play)
        assert main(["--seed", "4"]) == 0
        assert seen[0].seed == 4

    def test_terminal_failure_propagates(self, monkeypatch):
        def broken_play(config):
            raise OSError("no tty")

        monkeypatch.setattr(cli, "play", broken_play)
        with pytest.raises(OSError, match="no tty"):
            main([])
