"""Per-turn decision records.

Each turn the driver captures what the bot saw and what it chose in a
:class:`TurnDecisionLog`, then hands it to :func:`log_turn_decision`, which
writes a one-line summary to the decision trail and records Prometheus
metrics.

Usage:
    from filler_bot.ai.decision_log import TurnDecisionContext

    with TurnDecisionContext(turn=5, strategy="composite", player_number=1) as ctx:
        move = bot.select_move()
        ctx.record_move(move, candidates=bot.last_candidate_count)
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..logging_config import get_decision_logger
from ..metrics import record_turn_decision
from ..models import Placement


@dataclass
class TurnDecisionLog:
    """Everything worth knowing about one turn's decision."""

    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    turn: int = 0
    player_number: int = 0
    strategy: str = ""

    board_width: int = 0
    board_height: int = 0
    piece_width: int = 0
    piece_height: int = 0

    candidates: int = 0
    chosen_move: str = ""
    move_score: float = 0.0
    breakdown: Dict[str, Optional[float]] = field(default_factory=dict)

    time_ms: float = 0.0

    used_fallback: bool = False
    fallback_reason: str = ""

    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "timestamp": self.timestamp.isoformat()}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, allow_nan=False)

    def summary(self) -> str:
        """One line for the decision trail."""
        text = (
            f"[{self.strategy}] move={self.chosen_move or '-'} "
            f"candidates={self.candidates} score={self.move_score:.1f} "
            f"time={self.time_ms:.1f}ms"
        )
        if self.used_fallback:
            text += f" fallback={self.fallback_reason}"
        if self.error:
            text += f" error={self.error}"
        return text


def log_turn_decision(decision: TurnDecisionLog, log_level: int = logging.INFO) -> None:
    """Write the decision to the decision trail and record metrics."""
    get_decision_logger().log(log_level, decision.summary())
    record_turn_decision(
        decision.strategy,
        found_move=not decision.used_fallback,
        candidates=decision.candidates,
        duration_seconds=decision.time_ms / 1000.0,
    )


class TurnDecisionContext:
    """Times one turn's decision and, by default, logs it on exit.

    An exception raised inside the block is recorded on the decision, logged
    at ERROR and then propagated.
    """

    def __init__(
        self,
        turn: int = 0,
        strategy: str = "",
        player_number: int = 0,
        auto_log: bool = True,
    ):
        self.decision = TurnDecisionLog(
            turn=turn, strategy=strategy, player_number=player_number
        )
        self.auto_log = auto_log
        self._started = 0.0

    def __enter__(self) -> "TurnDecisionContext":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.decision.time_ms = (time.perf_counter() - self._started) * 1000.0
        if exc_val is not None:
            self.decision.error = str(exc_val)
        if self.auto_log:
            level = logging.INFO if self.decision.error is None else logging.ERROR
            log_turn_decision(self.decision, level)
        return False

    def record_shapes(self, board_width: int, board_height: int,
                      piece_width: int, piece_height: int) -> None:
        self.decision.board_width = board_width
        self.decision.board_height = board_height
        self.decision.piece_width = piece_width
        self.decision.piece_height = piece_height

    def record_move(
        self,
        move: Optional[Placement],
        candidates: int = 0,
        score: float = 0.0,
        breakdown: Optional[Dict[str, Optional[float]]] = None,
    ) -> None:
        """Record the chosen move; ``None`` marks a turn with no legal placement."""
        decision = self.decision
        decision.candidates = candidates
        if move is None:
            decision.used_fallback = True
            decision.fallback_reason = "no_legal_placement"
            return
        decision.chosen_move = move.to_output()
        decision.move_score = score
        decision.breakdown = dict(breakdown or {})
