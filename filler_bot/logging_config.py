"""Logging configuration for the filler bot.

Two kinds of output are configured here:

- Console diagnostics on **stderr** (stdout carries the game protocol and
  must never receive log lines).
- Two append-only diagnostic files, truncated at startup: the raw input
  transcript (``game_input.log``) and the decision trail
  (``ai_decisions.log``). Every record carries a millisecond timestamp and
  the index of the turn it belongs to.

Usage:
    from filler_bot.logging_config import setup_logging, setup_diagnostic_logs

    logger = setup_logging("filler_bot", level="DEBUG")
    turn_filter = setup_diagnostic_logs(log_dir="logs")
    turn_filter.turn = 3
    get_decision_logger().info("Making move: 4 2")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TURN_FORMAT = "%(asctime)s.%(msecs)03d [turn %(turn)d] %(message)s"
TURN_DATE_FORMAT = "%H:%M:%S"

INPUT_LOGGER_NAME = "filler_bot.input"
DECISION_LOGGER_NAME = "filler_bot.decisions"


def setup_logging(name: str, level: int | str = logging.INFO) -> logging.Logger:
    """Configure and return the logger ``name`` with a stderr console handler.

    Calling this again for the same name only updates the level. Unknown
    level names fall back to INFO.
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(handler)

    return logger


def get_input_logger() -> logging.Logger:
    return logging.getLogger(INPUT_LOGGER_NAME)


def get_decision_logger() -> logging.Logger:
    return logging.getLogger(DECISION_LOGGER_NAME)


class TurnContextFilter(logging.Filter):
    """Stamp each record with the current turn index."""

    def __init__(self, turn: int = 0):
        super().__init__()
        self.turn = turn

    def filter(self, record: logging.LogRecord) -> bool:
        record.turn = self.turn
        return True


def _open_turn_log(
    logger: logging.Logger,
    path: Path,
    turn_filter: TurnContextFilter,
) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning(
            f"Diagnostic log {path} unavailable, continuing without it: {e}"
        )
        logger.addHandler(logging.NullHandler())
        return
    handler.setFormatter(logging.Formatter(TURN_FORMAT, TURN_DATE_FORMAT))
    handler.addFilter(turn_filter)
    logger.addHandler(handler)


def setup_diagnostic_logs(
    log_dir: str | Path = ".",
    input_log: str | None = "game_input.log",
    decision_log: str | None = "ai_decisions.log",
) -> TurnContextFilter:
    """Truncate and open the input transcript and decision trail.

    A ``None`` file name disables that log. Files that cannot be opened are
    reported on stderr and skipped; play is never affected.

    Returns:
        The filter whose ``turn`` attribute the driver advances each turn.
    """
    turn_filter = TurnContextFilter()
    base = Path(log_dir)
    for logger, file_name in (
        (get_input_logger(), input_log),
        (get_decision_logger(), decision_log),
    ):
        if file_name:
            _open_turn_log(logger, base / file_name, turn_filter)
        else:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.propagate = False
            logger.addHandler(logging.NullHandler())
    return turn_filter


def close_diagnostic_logs() -> None:
    """Flush and detach the diagnostic file handlers."""
    for logger in (get_input_logger(), get_decision_logger()):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

