"""Turn loop connecting the protocol reader, a bot, the logs and the viewer.

The loop is synchronous: each turn is read, decided and answered before the
next line is consumed. On a malformed turn the stream is no longer in step
with the referee, so the loop ends instead of guessing where the next turn
starts. When the bot finds no legal placement the configured fallback move
is written so the referee still receives an answer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TextIO

from .ai.base import BaseBot
from .ai.decision_log import TurnDecisionContext
from .ai.factory import BotFactory
from .errors import ProtocolError
from .logging_config import TurnContextFilter, get_decision_logger
from .metrics import PROTOCOL_ERRORS
from .models import BotConfig, Placement
from .protocol import Turn, TurnReader, format_move
from .viewer import BoardViewer

logger = logging.getLogger(__name__)


def play_turn(bot: BaseBot, turn: Turn) -> Placement | None:
    """Feed one turn to ``bot`` and return its choice, logging the decision."""
    decisions = get_decision_logger()

    decisions.info(f"Board dimensions: {turn.board.width}x{turn.board.height}")
    bot.update_board(turn.board)
    decisions.info(f"Piece dimensions: {turn.piece.width}x{turn.piece.height}")
    bot.update_piece(turn.piece)

    with TurnDecisionContext(
        turn=turn.index,
        strategy=bot.strategy.value,
        player_number=bot.player_number,
    ) as ctx:
        ctx.record_shapes(
            turn.board.width, turn.board.height, turn.piece.width, turn.piece.height
        )
        move = bot.select_move()
        breakdown = bot.get_evaluation_breakdown(move) if move is not None else None
        ctx.record_move(
            move,
            candidates=bot.last_candidate_count,
            score=breakdown["total"] if breakdown else 0.0,
            breakdown=breakdown,
        )
    return move


class TurnDriver:
    """Runs a whole game over a line stream."""

    def __init__(
        self,
        config: BotConfig | None = None,
        viewer: BoardViewer | None = None,
        turn_filter: TurnContextFilter | None = None,
    ) -> None:
        self.config = config or BotConfig()
        self.viewer = viewer
        self.turn_filter = turn_filter
        self.bot: BaseBot | None = None

    def _set_turn(self, index: int) -> None:
        if self.turn_filter is not None:
            self.turn_filter.turn = index

    def run(self, lines: Iterable[str], out: TextIO) -> int:
        """Play until input ends or becomes unreadable.

        Returns:
            Process exit status (always 0; protocol errors are logged).
        """
        decisions = get_decision_logger()
        decisions.info("=== AI STARTING ===")

        reader = TurnReader(lines)
        player_number = reader.read_player_number()
        if player_number is None:
            decisions.info("No player line - game never started")
            decisions.info("=== AI ENDING ===")
            return 0

        decisions.info(f"I am player {player_number}")
        self.bot = BotFactory.create_from_config(player_number, self.config)
        decisions.info(f"{self.bot!r} initialized")

        while True:
            self._set_turn(reader.turns_read + 1)
            decisions.info("--- Starting new turn ---")
            try:
                turn = reader.read_turn()
            except ProtocolError as e:
                PROTOCOL_ERRORS.inc()
                decisions.error(e.message)
                logger.error(f"Stopping: {e}")
                break
            if turn is None:
                decisions.info("No more input - game ended")
                break

            if self.viewer is not None:
                self.viewer.publish(turn.board.width, turn.board.height, turn.board.rows)

            move = play_turn(self.bot, turn)
            if move is not None:
                decisions.info(f"Making move: {move.to_output()}")
                answer = format_move(move)
            else:
                decisions.info("No best move found for this piece")
                answer = format_move(self.config.fallback_move)

            out.write(answer + "\n")
            out.flush()

        decisions.info("=== AI ENDING ===")
        return 0
