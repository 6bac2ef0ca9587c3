"""
Weighted composite strategy for Filler.

Every legal placement is scored as a weighted sum of four terms from
:mod:`filler_bot.ai.scoring`::

    heat * WEIGHT_HEAT + blocking * WEIGHT_BLOCKING
        + expansion * WEIGHT_EXPANSION + efficiency * WEIGHT_EFFICIENCY

and the highest total wins. Comparison is strict, so among equal totals the
first candidate in row-major scan order is kept.

Weights come from a named profile in
:mod:`filler_bot.ai.heuristic_weights` (``config.weight_profile_id``) with
optional per-key overrides from ``config.weights``. They are applied as
instance attributes that shadow the class-level defaults below, so tests can
examine one term at a time by zeroing the others.
"""

from __future__ import annotations

import logging

import numpy as np

from ..models import BotConfig, Placement, StrategyType
from .base import BaseBot
from .heuristic_weights import resolve_weights
from .scoring import build_heat_map, score_terms

logger = logging.getLogger(__name__)


class WeightedCompositeBot(BaseBot):
    """Picks the placement with the highest weighted heuristic score."""

    strategy = StrategyType.COMPOSITE

    WEIGHT_HEAT = 100.0
    WEIGHT_BLOCKING = 20.0
    WEIGHT_EXPANSION = 5.0
    WEIGHT_EFFICIENCY = 10.0

    def __init__(self, player_number: int, config: BotConfig | None = None) -> None:
        super().__init__(player_number, config)
        self.heat_map: np.ndarray = np.zeros((0, 0), dtype=np.int64)
        self._apply_weight_profile()

    def _apply_weight_profile(self) -> None:
        """Override evaluation weights for this instance from the config."""
        weights = resolve_weights(self.config.weight_profile_id, self.config.weights)
        for name, value in weights.items():
            setattr(self, name, value)

    @property
    def weights(self) -> dict[str, float]:
        return {
            "WEIGHT_HEAT": self.WEIGHT_HEAT,
            "WEIGHT_BLOCKING": self.WEIGHT_BLOCKING,
            "WEIGHT_EXPANSION": self.WEIGHT_EXPANSION,
            "WEIGHT_EFFICIENCY": self.WEIGHT_EFFICIENCY,
        }

    def _on_board_updated(self) -> None:
        self.heat_map = build_heat_map(self.board, self.opponent)

    def _compute_component_scores(self, placement: Placement) -> dict[str, int]:
        board, piece = self._require_state()
        return score_terms(
            self.heat_map,
            board,
            piece,
            placement.x,
            placement.y,
            self.opponent,
            self.config.blocking_variant,
        )

    def _weighted_total(self, components: dict[str, int]) -> float:
        return (
            components["heat"] * self.WEIGHT_HEAT
            + components["blocking"] * self.WEIGHT_BLOCKING
            + components["expansion"] * self.WEIGHT_EXPANSION
            + components["efficiency"] * self.WEIGHT_EFFICIENCY
        )

    def calculate_move_score(self, placement: Placement) -> float:
        """Weighted total for one candidate placement."""
        return self._weighted_total(self._compute_component_scores(placement))

    def select_move(self) -> Placement | None:
        """Select the highest scoring legal placement.

        Returns:
            The best :class:`Placement` or ``None`` if the current piece has
            no legal anchor.
        """
        candidates = self.find_all_valid_placements()
        self.last_candidate_count = len(candidates)
        if not candidates:
            return None

        best: Placement | None = None
        best_score = float("-inf")
        for placement in candidates:
            score = self.calculate_move_score(placement)
            if score > best_score:
                best_score = score
                best = placement

        logger.debug(
            f"Composite pick {best} score={best_score} "
            f"from {len(candidates)} candidates"
        )
        self.move_count += 1
        return best

    def get_evaluation_breakdown(self, placement: Placement) -> dict[str, float]:
        """
        Get detailed breakdown of a candidate's score

        Args:
            placement: Candidate placement for the current board and piece

        Returns:
            Raw term values plus the weighted ``total``
        """
        components = self._compute_component_scores(placement)
        breakdown: dict[str, float] = {"total": self._weighted_total(components)}
        breakdown.update(components)
        return breakdown
