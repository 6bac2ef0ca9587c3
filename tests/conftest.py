"""
Shared pytest fixtures for filler bot tests.

Factories build boards, pieces and bots from short literal rows so each test
reads like the game picture it describes. Logger state touched by the driver
and the CLI is reset after every test.
"""

import logging
from pathlib import Path
import sys
from typing import Callable, Iterable, List

import pytest

# Ensure the repository root is on sys.path so `import filler_bot` works
# without an editable install.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from filler_bot.ai.base import BaseBot
from filler_bot.ai.factory import BotFactory
from filler_bot.logging_config import (
    DECISION_LOGGER_NAME,
    INPUT_LOGGER_NAME,
    close_diagnostic_logs,
)
from filler_bot.models import Board, BotConfig, Piece


# =============================================================================
# TRANSCRIPTS
# =============================================================================

PLAYER_ONE_LINE = "$$$ exec p1 : [robots/filler_bot]"
PLAYER_TWO_LINE = "$$$ exec p2 : [robots/filler_bot]"


def turn_lines(rows: List[str], piece_rows: List[str]) -> List[str]:
    """Render one turn the way the referee prints it."""
    width = len(rows[0]) if rows else 0
    piece_width = len(piece_rows[0]) if piece_rows else 0
    lines = [f"Anfield {width} {len(rows)}:"]
    lines.append("    " + "".join(str(x % 10) for x in range(width)))
    lines.extend(f"{y:03d} {row}" for y, row in enumerate(rows))
    lines.append(f"Piece {piece_width} {len(piece_rows)}:")
    lines.extend(piece_rows)
    return lines


@pytest.fixture
def transcript() -> Callable[..., List[str]]:
    """Factory for a full game transcript: player line plus turns."""

    def _make(
        turns: Iterable[tuple],
        player_line: str = PLAYER_ONE_LINE,
    ) -> List[str]:
        lines = [player_line]
        for rows, piece_rows in turns:
            lines.extend(turn_lines(list(rows), list(piece_rows)))
        return lines

    return _make


# =============================================================================
# GAME STATE FACTORIES
# =============================================================================


@pytest.fixture
def board_factory() -> Callable[[List[str]], Board]:
    def _make(rows: List[str]) -> Board:
        return Board.from_rows(rows)

    return _make


@pytest.fixture
def piece_factory() -> Callable[[List[str]], Piece]:
    def _make(rows: List[str]) -> Piece:
        return Piece.from_rows(rows)

    return _make


@pytest.fixture
def bot_factory() -> Callable[..., BaseBot]:
    """Factory for a bot that already holds a board and a piece."""

    def _make(
        rows: List[str],
        piece_rows: List[str],
        player_number: int = 1,
        strategy: str = "composite",
        **config_kwargs,
    ) -> BaseBot:
        config = BotConfig(strategy=strategy, **config_kwargs)
        bot = BotFactory.create_from_config(player_number, config)
        bot.update_board(Board.from_rows(rows))
        bot.update_piece(Piece.from_rows(piece_rows))
        return bot

    return _make


# =============================================================================
# LOGGER ISOLATION
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_loggers():
    yield
    close_diagnostic_logs()
    for name in ("filler_bot", INPUT_LOGGER_NAME, DECISION_LOGGER_NAME):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
