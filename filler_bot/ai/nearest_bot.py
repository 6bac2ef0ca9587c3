"""Nearest-to-latest strategy for Filler.

This strategy chases the opponent's most recent placement: it picks the legal
placement whose solid cells come closest (Euclidean distance) to any cell the
opponent placed last turn. Before the opponent has placed anything it closes
in on its own last placement instead, and with neither on the board it plays
the first legal placement.
"""

from __future__ import annotations

import math

import numpy as np

from ..models import Placement, StrategyType
from .base import BaseBot
from .scoring import footprint


class NearestLatestBot(BaseBot):
    """Bot that plays as close as possible to the latest placement."""

    strategy = StrategyType.NEAREST

    def _targets(self) -> np.ndarray:
        board, _ = self._require_state()
        targets = list(board.cells_with([self.opponent.last_placed]))
        if not targets:
            targets = list(board.cells_with([self.me.last_placed]))
        return np.array(targets, dtype=np.float64).reshape(-1, 2)

    def _min_distance(self, placement: Placement, targets: np.ndarray) -> float:
        board, piece = self._require_state()
        cells = footprint(board, piece, placement.x, placement.y)
        if not cells or targets.size == 0:
            return float("inf")
        covered = np.array(cells, dtype=np.float64)
        deltas = covered[:, None, :] - targets[None, :, :]
        return float(np.sqrt((deltas ** 2).sum(axis=2)).min())

    def select_move(self) -> Placement | None:
        """Select the legal placement nearest to the latest placement.

        Returns:
            The nearest :class:`Placement`, the first legal one when there
            is nothing to chase, or ``None`` if no placement is legal.
        """
        candidates = self.find_all_valid_placements()
        self.last_candidate_count = len(candidates)
        if not candidates:
            return None

        targets = self._targets()
        if targets.size == 0:
            self.move_count += 1
            return candidates[0]

        best = candidates[0]
        best_distance = float("inf")
        for placement in candidates:
            distance = self._min_distance(placement, targets)
            if distance < best_distance:
                best_distance = distance
                best = placement

        self.move_count += 1
        return best

    def get_evaluation_breakdown(self, placement: Placement) -> dict[str, float | None]:
        """Distance from ``placement`` to the chased cells.

        ``total`` is the negated distance so that, as for other strategies,
        a higher total means a preferred placement. With nothing to chase
        ``distance`` is None and ``total`` is 0.0.
        """
        distance = self._min_distance(placement, self._targets())
        if math.isinf(distance):
            return {"total": 0.0, "distance": None}
        return {"total": -distance, "distance": distance}
