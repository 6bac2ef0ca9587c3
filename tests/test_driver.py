"""Tests for filler_bot/driver.py - end-to-end turn loop."""

import io

from prometheus_client import REGISTRY

from filler_bot.ai.base import BaseBot
from filler_bot.ai.factory import BotFactory
from filler_bot.driver import TurnDriver, play_turn
from filler_bot.logging_config import close_diagnostic_logs, setup_diagnostic_logs
from filler_bot.models import Board, BotConfig, Piece, Placement
from filler_bot.protocol import Turn
from filler_bot.viewer import BoardViewer

OPEN_ROWS = [".....", "..@..", "....$"]
PIECE = [".*", "**"]
BOXED_ROWS = ["$$$", "$@$", "$$$"]
BIG_PIECE = ["***", "***", "***"]


def _run(lines, config=None, viewer=None, turn_filter=None):
    out = io.StringIO()
    code = TurnDriver(config, viewer=viewer, turn_filter=turn_filter).run(lines, out)
    return code, out.getvalue().splitlines()


def _legal_moves(rows, piece_rows, player_number=1):
    bot = BotFactory.create("composite", player_number)
    bot.update_board(Board.from_rows(rows))
    bot.update_piece(Piece.from_rows(piece_rows))
    return [p.to_output() for p in bot.find_all_valid_placements()]


class TestTurnDriver:
    def test_one_line_per_turn(self, transcript):
        lines = transcript([(OPEN_ROWS, PIECE), (OPEN_ROWS, ["*"])])
        code, output = _run(lines)
        assert code == 0
        assert len(output) == 2
        assert output[0] in _legal_moves(OPEN_ROWS, PIECE)
        assert output[1] == "2 1"

    def test_fallback_when_no_move(self, transcript):
        code, output = _run(transcript([(BOXED_ROWS, BIG_PIECE)]))
        assert code == 0
        assert output == ["0 0"]

    def test_configured_fallback(self, transcript):
        config = BotConfig(fallback_move=(3, 4))
        _, output = _run(transcript([(BOXED_ROWS, BIG_PIECE)]), config=config)
        assert output == ["3 4"]

    def test_player_two(self, transcript):
        rows = ["@....", ".....", "....$"]
        lines = transcript([(rows, ["*"])], player_line="$$$ exec p2 : [bot]")
        _, output = _run(lines)
        assert output == ["4 2"]

    def test_nearest_strategy(self, transcript):
        rows = ["@...s", ".....", "....@"]
        _, output = _run(
            transcript([(rows, ["*"])]), config=BotConfig(strategy="nearest")
        )
        assert output == ["4 2"]

    def test_stops_on_malformed_header(self, transcript):
        lines = transcript([(OPEN_ROWS, ["*"])]) + ["Anfield ? ?:"]
        lines += transcript([(OPEN_ROWS, ["*"])])[1:]

        before = REGISTRY.get_sample_value("filler_bot_protocol_errors_total") or 0.0
        code, output = _run(lines)
        after = REGISTRY.get_sample_value("filler_bot_protocol_errors_total")

        assert code == 0
        assert output == ["2 1"]
        assert after == before + 1

    def test_empty_input(self):
        code, output = _run([])
        assert code == 0
        assert output == []

    def test_player_line_only(self, transcript):
        code, output = _run(transcript([]))
        assert code == 0
        assert output == []

    def test_bot_created_for_player(self, transcript):
        driver = TurnDriver(BotConfig(strategy="nearest"))
        driver.run(transcript([], player_line="$$$ exec p2 : [bot]"), io.StringIO())
        assert isinstance(driver.bot, BaseBot)
        assert driver.bot.player_number == 2

    def test_publishes_boards_to_viewer(self, transcript):
        viewer = BoardViewer()
        second = [".....", "..@a.", "...s$"]
        _run(transcript([(OPEN_ROWS, ["*"]), (second, ["*"])]), viewer=viewer)
        snapshot = viewer.slot.take()
        assert snapshot.width == 5
        assert snapshot.height == 3
        assert snapshot.rows == tuple(second)


class TestDiagnosticLogs:
    def test_logs_written(self, tmp_path, transcript):
        turn_filter = setup_diagnostic_logs(tmp_path)
        lines = transcript([(OPEN_ROWS, PIECE), (BOXED_ROWS, BIG_PIECE)])
        _run(lines, turn_filter=turn_filter)
        close_diagnostic_logs()

        decisions = (tmp_path / "ai_decisions.log").read_text()
        assert "=== AI STARTING ===" in decisions
        assert "I am player 1" in decisions
        assert "Board dimensions: 5x3" in decisions
        assert "Piece dimensions: 2x2" in decisions
        assert "Making move: " in decisions
        assert "No best move found for this piece" in decisions
        assert "No more input - game ended" in decisions
        assert "=== AI ENDING ===" in decisions
        assert "[turn 1]" in decisions
        assert "[turn 2]" in decisions

        raw = (tmp_path / "game_input.log").read_text()
        assert "Anfield 5 3:" in raw
        assert "Anfield 3 3:" in raw

    def test_malformed_header_logged(self, tmp_path):
        turn_filter = setup_diagnostic_logs(tmp_path)
        _run(["$$$ exec p1 : [bot]", "garbage"], turn_filter=turn_filter)
        close_diagnostic_logs()

        decisions = (tmp_path / "ai_decisions.log").read_text()
        assert "Failed to parse board header" in decisions
        assert "=== AI ENDING ===" in decisions


def test_play_turn_returns_move():
    bot = BotFactory.create("composite", 1)
    turn = Turn(
        index=1,
        board=Board.from_rows(OPEN_ROWS),
        piece=Piece.from_rows(["*"]),
    )
    assert play_turn(bot, turn) == Placement(x=2, y=1)
    assert bot.board is turn.board
