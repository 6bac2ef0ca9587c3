"""
Placement scoring terms for the composite Filler strategy.

Each scorer maps ``(board, piece, anchor)`` to an integer and never mutates
its inputs. Only solid piece cells that land on the board contribute, so a
degenerate placement (no solid cell in bounds) scores 0 on every term.

The heat term needs a per-turn heat map, built once with
:func:`build_heat_map` when the board is replaced and shared by every
candidate evaluated that turn.
"""

from __future__ import annotations

from collections import deque

import numpy as np

from ..models import BlockingVariant, Board, Cell, Piece, PlayerIdentity

# Any of these symbols marks a cell as occupied; everything else is free.
OCCUPIED_SYMBOLS = frozenset(
    {
        Cell.P1_TERRITORY.value,
        Cell.P1_LAST.value,
        Cell.P2_TERRITORY.value,
        Cell.P2_LAST.value,
    }
)

EFFICIENCY_BONUS = 2
ADJACENT_BLOCKING_BONUS = 5
RADIAL_BLOCKING_RADIUS = 2
RADIAL_BLOCKING_BASE = 3

NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)
_ORTHOGONAL = ((1, 0), (-1, 0), (0, 1), (0, -1))


def is_free(symbol: str) -> bool:
    return symbol not in OCCUPIED_SYMBOLS


def footprint(board: Board, piece: Piece, x: int, y: int) -> list[tuple[int, int]]:
    """Board coordinates covered by the piece's solid cells that are in bounds."""
    cells = []
    for px, py in piece.solid_cells():
        bx, by = x + px, y + py
        if 0 <= bx < board.width and 0 <= by < board.height:
            cells.append((bx, by))
    return cells


def build_heat_map(board: Board, opponent: PlayerIdentity) -> np.ndarray:
    """Heat of every free cell: ``(W + H) - distance to nearest opponent cell``.

    Distances are Manhattan distances, computed with a multi-source BFS over
    the obstacle-free 4-neighbour grid. Occupied cells hold 0; with no
    opponent cell on the board the whole map is 0.
    """
    heat = np.zeros((board.height, board.width), dtype=np.int64)
    sources = list(board.cells_with(opponent.symbols))
    if not sources:
        return heat

    distance = np.full((board.height, board.width), -1, dtype=np.int64)
    queue: deque[tuple[int, int]] = deque()
    for x, y in sources:
        distance[y, x] = 0
        queue.append((x, y))

    while queue:
        x, y = queue.popleft()
        step = distance[y, x] + 1
        for dx, dy in _ORTHOGONAL:
            nx, ny = x + dx, y + dy
            if 0 <= nx < board.width and 0 <= ny < board.height and distance[ny, nx] < 0:
                distance[ny, nx] = step
                queue.append((nx, ny))

    ceiling = board.width + board.height
    for y, row in enumerate(board.rows):
        for x, symbol in enumerate(row):
            if is_free(symbol):
                heat[y, x] = ceiling - distance[y, x]
    return heat


def heat_score(heat_map: np.ndarray, board: Board, piece: Piece, x: int, y: int) -> int:
    """Mean heat (floor) of the cells the piece would cover."""
    cells = footprint(board, piece, x, y)
    if not cells:
        return 0
    total = sum(int(heat_map[by, bx]) for bx, by in cells)
    return total // len(cells)


def blocking_score(
    board: Board,
    piece: Piece,
    x: int,
    y: int,
    opponent: PlayerIdentity,
    variant: BlockingVariant = BlockingVariant.ADJACENT,
) -> int:
    """Reward covering cells next to opponent territory.

    ``ADJACENT`` adds a flat bonus per opponent cell among the 8 neighbours
    of each covered cell. ``RADIAL`` looks at the surrounding 5x5 window and
    adds ``3 - chebyshev_distance`` per opponent cell, so nearer cells weigh
    more.
    """
    theirs = opponent.symbols
    score = 0
    for bx, by in footprint(board, piece, x, y):
        if variant == BlockingVariant.RADIAL:
            for dy in range(-RADIAL_BLOCKING_RADIUS, RADIAL_BLOCKING_RADIUS + 1):
                for dx in range(-RADIAL_BLOCKING_RADIUS, RADIAL_BLOCKING_RADIUS + 1):
                    if dx == 0 and dy == 0:
                        continue
                    nx, ny = bx + dx, by + dy
                    if board.in_bounds(nx, ny) and board.rows[ny][nx] in theirs:
                        score += RADIAL_BLOCKING_BASE - max(abs(dx), abs(dy))
        else:
            for dx, dy in NEIGHBOR_OFFSETS:
                nx, ny = bx + dx, by + dy
                if board.in_bounds(nx, ny) and board.rows[ny][nx] in theirs:
                    score += ADJACENT_BLOCKING_BONUS
    return score


def expansion_score(board: Board, piece: Piece, x: int, y: int) -> int:
    """Free cells among the 8 neighbours of each covered cell, summed."""
    score = 0
    for bx, by in footprint(board, piece, x, y):
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = bx + dx, by + dy
            if board.in_bounds(nx, ny) and is_free(board.rows[ny][nx]):
                score += 1
    return score


def efficiency_score(board: Board, piece: Piece, x: int, y: int) -> int:
    return len(footprint(board, piece, x, y)) * EFFICIENCY_BONUS


def score_terms(
    heat_map: np.ndarray,
    board: Board,
    piece: Piece,
    x: int,
    y: int,
    opponent: PlayerIdentity,
    variant: BlockingVariant = BlockingVariant.ADJACENT,
) -> dict[str, int]:
    """Raw (unweighted) value of every scoring term for one anchor."""
    return {
        "heat": heat_score(heat_map, board, piece, x, y),
        "blocking": blocking_score(board, piece, x, y, opponent, variant),
        "expansion": expansion_score(board, piece, x, y),
        "efficiency": efficiency_score(board, piece, x, y),
    }
