"""Tests for filler_bot/ai/placement.py - the exactly-one-overlap rule."""

import pytest

from filler_bot.ai.placement import find_all_valid_placements, is_valid_placement
from filler_bot.models import Board, Piece, Placement, PlayerIdentity

P1 = PlayerIdentity.for_number(1)
P2 = PlayerIdentity.for_number(2)


def _placements(rows, piece_rows, me=P1):
    return find_all_valid_placements(
        Board.from_rows(rows), Piece.from_rows(piece_rows), me, me.opponent()
    )


class TestFindAllValidPlacements:
    def test_single_cell_piece_on_own_cell(self):
        assert _placements(["@..$", "...."], ["O"]) == [Placement(x=0, y=0)]

    def test_row_major_order(self):
        rows = [
            ".....",
            ".....",
            "..@..",
            ".....",
            ".....",
        ]
        assert _placements(rows, ["OO", "OO"]) == [
            Placement(x=1, y=1),
            Placement(x=2, y=1),
            Placement(x=1, y=2),
            Placement(x=2, y=2),
        ]

    def test_last_placed_symbol_counts_as_own(self):
        assert _placements(["a.."], ["O"]) == [Placement(x=0, y=0)]

    def test_player_two_symbols(self):
        assert _placements(["s.@", "..$"], ["O"], me=P2) == [
            Placement(x=0, y=0),
            Placement(x=2, y=1),
        ]

    def test_two_own_overlaps_rejected(self):
        assert _placements(["@@"], ["OO"]) == []

    def test_opponent_overlap_rejected(self):
        assert _placements(["@$"], ["OO"]) == []
        assert _placements(["@s"], ["OO"]) == []

    def test_solid_cell_out_of_bounds_rejected(self):
        assert _placements([".@"], ["OO"]) == [Placement(x=0, y=0)]

    def test_empty_trailing_column_may_hang_off_board(self):
        assert _placements(["..@"], ["O."]) == [Placement(x=2, y=0)]

    def test_piece_larger_than_board(self):
        assert _placements(["@."], ["OOO"]) == []

    def test_zero_solid_piece_has_no_placements(self):
        assert _placements(["@.."], ["..", ".."]) == []

    def test_no_own_cells(self):
        assert _placements(["...", "..$"], ["O"]) == []

    def test_boxed_in_by_opponent(self):
        rows = ["$$$", "$@$", "$$$"]
        assert _placements(rows, ["OOO", "OOO", "OOO"]) == []

    def test_empty_board(self):
        assert _placements([], ["O"]) == []


class TestIsValidPlacement:
    @pytest.mark.parametrize(
        "x,y,expected",
        [
            (0, 0, True),
            (1, 0, False),
            (0, 1, False),
        ],
    )
    def test_single_anchor(self, x, y, expected):
        board = Board.from_rows(["@.", ".."])
        assert is_valid_placement(board, [(0, 0)], x, y, P1, P2) is expected


class TestPlacementProperties:
    @pytest.mark.parametrize(
        "piece_rows",
        [["OO"], ["O", "O"], ["OO", "O."], ["OOO"], ["OOO", "OOO", "OOO"]],
    )
    def test_enclosed_cell_has_no_placement(self, piece_rows):
        assert _placements(["$$$", "$@$", "$$$"], piece_rows) == []

    @pytest.mark.parametrize(
        "rows,piece_rows",
        [
            (["@@..", ".a.$", "..s.", "...."], ["OO", ".O"]),
            (["......", ".@@...", "..@.$.", "....ss"], ["O.O", "OOO"]),
            (["a.....", "......", "....$$"], ["*", "*", "*"]),
        ],
    )
    def test_every_result_overlaps_own_territory_once(self, rows, piece_rows):
        board = Board.from_rows(rows)
        piece = Piece.from_rows(piece_rows)
        placements = find_all_valid_placements(board, piece, P1, P2)
        assert placements

        for placement in placements:
            own = 0
            for px, py in piece.solid_cells():
                bx, by = placement.x + px, placement.y + py
                assert board.in_bounds(bx, by)
                assert board.cell(bx, by) not in P2.symbols
                own += board.cell(bx, by) in P1.symbols
            assert own == 1

        assert len(set(placements)) == len(placements)
