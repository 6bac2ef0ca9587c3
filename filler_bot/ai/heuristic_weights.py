"""Heuristic weight profiles for the composite Filler strategy.

This module centralises the scalar weights used by
:class:`~filler_bot.ai.composite_bot.WeightedCompositeBot` and exposes named
profiles that can be referenced from :class:`~filler_bot.models.BotConfig`
(``weight_profile_id``) or loaded from a JSON file for tuning runs.

The keys in each profile mirror the attribute names on
:class:`WeightedCompositeBot` (``WEIGHT_HEAT``, ``WEIGHT_BLOCKING``, ...) so
that instances can simply ``setattr(self, name, value)`` when applying a
profile.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

HeuristicWeights = dict[str, float]


# Balanced profile: heat dominates so the bot races toward the opponent; blocking and
# efficiency break ties between placements of similar heat, and expansion is
# a light preference for open ground.

BASE_V1_BALANCED_WEIGHTS: HeuristicWeights = {
    "WEIGHT_HEAT": 100.0,
    "WEIGHT_BLOCKING": 20.0,
    "WEIGHT_EXPANSION": 5.0,
    "WEIGHT_EFFICIENCY": 10.0,
}


# Same keys and order as BASE_V1_BALANCED_WEIGHTS.
HEURISTIC_WEIGHT_KEYS: list[str] = [
    "WEIGHT_HEAT",
    "WEIGHT_BLOCKING",
    "WEIGHT_EXPANSION",
    "WEIGHT_EFFICIENCY",
]


def _scaled(base: Mapping[str, float], **factors: float) -> HeuristicWeights:
    """Copy *base*, multiplying the named weights by their factor.

    Every key of ``base`` survives in its original order, so derived
    profiles stay interchangeable with the balanced one.
    """
    return {key: value * factors.get(key, 1.0) for key, value in base.items()}


# Personas derived from the balanced profile.

COMPOSITE_V1_BALANCED: HeuristicWeights = dict(BASE_V1_BALANCED_WEIGHTS)

# Aggressive: lean harder on contact with the opponent.
COMPOSITE_V1_AGGRESSIVE: HeuristicWeights = _scaled(
    BASE_V1_BALANCED_WEIGHTS, WEIGHT_BLOCKING=2.0, WEIGHT_EXPANSION=0.5
)

# Expansive: keep room to play later turns instead of closing in.
COMPOSITE_V1_EXPANSIVE: HeuristicWeights = _scaled(
    BASE_V1_BALANCED_WEIGHTS, WEIGHT_HEAT=0.5, WEIGHT_EXPANSION=4.0
)


HEURISTIC_WEIGHT_PROFILES: dict[str, HeuristicWeights] = {
    "composite_v1_balanced": COMPOSITE_V1_BALANCED,
    "composite_v1_aggressive": COMPOSITE_V1_AGGRESSIVE,
    "composite_v1_expansive": COMPOSITE_V1_EXPANSIVE,
}


def get_weights(profile_id: str) -> HeuristicWeights:
    """Weights registered under ``profile_id``; ``{}`` when the id is unknown."""
    return HEURISTIC_WEIGHT_PROFILES.get(profile_id, {})


def resolve_weights(
    profile_id: str | None,
    overrides: Mapping[str, float] | None = None,
) -> HeuristicWeights:
    """Balanced defaults, then the named profile, then explicit overrides.

    Keys outside :data:`HEURISTIC_WEIGHT_KEYS`, whether they come from the
    profile or from ``overrides``, are dropped with a warning.
    """
    weights = dict(BASE_V1_BALANCED_WEIGHTS)
    layers = (get_weights(profile_id) if profile_id else {}, overrides or {})
    for layer in layers:
        for key, value in layer.items():
            if key not in HEURISTIC_WEIGHT_KEYS:
                logger.warning(f"Ignoring unknown weight key {key!r}")
                continue
            weights[key] = float(value)
    return weights


WEIGHT_PROFILES_ENV = "FILLER_BOT_WEIGHT_PROFILES"

_LOAD_MODES = ("override", "suffix")


def load_profiles_if_available(
    path: str | Path | None = None,
    *,
    mode: str = "override",
    suffix: str = "_tuned",
) -> dict[str, HeuristicWeights]:
    """Register weight profiles from a tuning run's JSON output.

    The file looks like ``{"profiles": {"<id>": {"WEIGHT_HEAT": ..., ...}}}``.
    Without ``path`` the ``FILLER_BOT_WEIGHT_PROFILES`` environment variable
    is consulted; a missing file is not an error.

    With ``mode="override"`` each profile replaces the registry entry of the
    same id. With ``mode="suffix"`` it is registered as ``<id><suffix>`` and
    the built-in profile keeps its values.

    The whole file is parsed before anything is registered, so a file that
    fails part way leaves the registry untouched.

    Returns:
        The profiles registered by this call, keyed by registry id

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not JSON of the shape above or a weight
            is not a number
    """
    if mode not in _LOAD_MODES:
        raise ValueError(f"mode must be one of {_LOAD_MODES}, got {mode!r}")

    source = path if path is not None else os.getenv(WEIGHT_PROFILES_ENV)
    if not source or not Path(source).is_file():
        return {}

    document = json.loads(Path(source).read_text(encoding="utf-8"))
    profiles = document.get("profiles", {}) if isinstance(document, dict) else None
    if not isinstance(profiles, dict):
        raise ValueError(f"{source}: 'profiles' must be an object of weight objects")

    registered: dict[str, HeuristicWeights] = {}
    for profile_id, raw in profiles.items():
        if not isinstance(raw, dict):
            raise ValueError(f"{source}: profile {profile_id!r} is not an object")
        registry_id = profile_id + suffix if mode == "suffix" else profile_id
        registered[registry_id] = {name: float(value) for name, value in raw.items()}

    HEURISTIC_WEIGHT_PROFILES.update(registered)
    if registered:
        logger.info(f"Registered weight profiles {sorted(registered)} from {source}")
    return registered
