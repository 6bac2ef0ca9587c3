"""Placement validation for Filler pieces.

A placement is legal when exactly one solid cell of the piece covers one of
the player's own cells, no solid cell covers an opponent cell, and every
solid cell stays on the board. Anchors are scanned row-major (``y`` outer)
over the whole board; pieces whose top-left rows or columns are empty can
legally anchor near the right or bottom edge, so anchors are not pruned by
piece size.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models import Board, Piece, Placement, PlayerIdentity


def is_valid_placement(
    board: Board,
    solid_cells: Sequence[tuple[int, int]],
    x: int,
    y: int,
    me: PlayerIdentity,
    opponent: PlayerIdentity,
) -> bool:
    """Check one anchor against the exactly-one-overlap rule."""
    mine = me.symbols
    theirs = opponent.symbols
    overlaps = 0
    for px, py in solid_cells:
        bx = x + px
        by = y + py
        if bx >= board.width or by >= board.height:
            return False
        symbol = board.rows[by][bx]
        if symbol in theirs:
            return False
        if symbol in mine:
            overlaps += 1
            if overlaps > 1:
                return False
    return overlaps == 1


def find_all_valid_placements(
    board: Board,
    piece: Piece,
    me: PlayerIdentity,
    opponent: PlayerIdentity,
) -> list[Placement]:
    """Return every legal anchor for ``piece`` in row-major order.

    A piece with no solid cells can never overlap exactly one own cell, so
    it yields no placements, as does a board holding none of our cells.
    """
    solid = piece.solid_cells()
    if not solid:
        return []

    placements: list[Placement] = []
    for y in range(board.height):
        for x in range(board.width):
            if is_valid_placement(board, solid, x, y, me, opponent):
                placements.append(Placement(x=x, y=y))
    return placements
