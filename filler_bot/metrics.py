"""Prometheus metrics for the filler bot.

Counters and histograms for per-turn decisions. The bot talks to the game
over stdin/stdout and serves no HTTP endpoint of its own; a harness that
imports the bot in-process (tuning runs, tests) can read these from the
default registry.
"""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Histogram


TURN_DECISIONS: Final[Counter] = Counter(
    "filler_bot_turn_decisions_total",
    "Total turn decisions, labeled by strategy and outcome (move/no_move).",
    labelnames=("strategy", "outcome"),
)

TURN_DECISION_LATENCY: Final[Histogram] = Histogram(
    "filler_bot_turn_decision_seconds",
    "Time spent validating, scoring and selecting a placement.",
    labelnames=("strategy",),
    # Turns are expected to finish well under the referee's timeout.
    buckets=(
        0.001,
        0.005,
        0.01,
        0.05,
        0.1,
        0.5,
        1.0,
    ),
)

TURN_CANDIDATES: Final[Histogram] = Histogram(
    "filler_bot_turn_candidates",
    "Number of legal placements found per turn.",
    labelnames=("strategy",),
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 500),
)

PROTOCOL_ERRORS: Final[Counter] = Counter(
    "filler_bot_protocol_errors_total",
    "Turns abandoned because the input could not be parsed.",
)


def record_turn_decision(
    strategy: str,
    found_move: bool,
    candidates: int,
    duration_seconds: float,
) -> None:
    """Record metrics for one completed turn.

    Args:
        strategy: Strategy identifier (e.g. 'composite')
        found_move: Whether a legal placement was chosen
        candidates: Number of legal placements considered
        duration_seconds: Decision time in seconds
    """
    outcome = "move" if found_move else "no_move"
    TURN_DECISIONS.labels(strategy, outcome).inc()
    TURN_DECISION_LATENCY.labels(strategy).observe(duration_seconds)
    TURN_CANDIDATES.labels(strategy).observe(candidates)
