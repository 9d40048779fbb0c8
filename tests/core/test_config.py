"""Unit tests for /chess_engine/core/config.py"""

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from chess_engine.chess.game import GameState
from chess_engine.chess.square import Square
from chess_engine.core.config import DEFAULT_LOG_FORMAT, EngineSettings, configure_logging


def test_defaults() -> None:
    settings = EngineSettings.from_env({})
    assert settings.log_level == "INFO"
    assert settings.log_format == DEFAULT_LOG_FORMAT


def test_read_from_env() -> None:
    settings = EngineSettings.from_env(
        {"CHESS_ENGINE_LOG_LEVEL": "debug", "CHESS_ENGINE_LOG_FORMAT": "%(message)s", "UNRELATED": "x"}
    )
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "%(message)s"


def test_invalid_log_level() -> None:
    with pytest.raises(ValidationError):
        EngineSettings(log_level="chatty")


def test_configure_logging() -> None:
    settings = EngineSettings(log_level="WARNING", log_format="%(message)s")
    with patch("chess_engine.core.config.logging.basicConfig") as basic_config:
        configure_logging(settings)
    basic_config.assert_called_once_with(level="WARNING", format="%(message)s")


def test_move_gets_logged(caplog: pytest.LogCaptureFixture) -> None:
    game = GameState.new_game()
    with caplog.at_level(logging.INFO, logger="chess_engine.chess.game"):
        game.propose_move(Square.from_algebraic("e2"), Square.from_algebraic("e4"))
    assert "white played e2e4" in caplog.text
