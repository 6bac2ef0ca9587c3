"""Bot configuration loading.

Settings are layered, later sources winning:

1. :class:`~filler_bot.models.BotConfig` defaults
2. an optional YAML file (keys are BotConfig field names or their aliases)
3. ``FILLER_BOT_*`` environment variables
4. explicit overrides, typically parsed command-line flags

Example YAML::

    strategy: composite
    weight_profile_id: composite_v1_aggressive
    weights:
      WEIGHT_EXPANSION: 8
    blocking_variant: radial
    log_dir: logs
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .ai import heuristic_weights
from .errors import ConfigurationError
from .models import BotConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "FILLER_BOT_"

# Environment variable suffix -> BotConfig field
ENV_FIELDS: dict[str, str] = {
    "STRATEGY": "strategy",
    "PROFILE": "weight_profile_id",
    "BLOCKING_VARIANT": "blocking_variant",
    "VIEWER": "viewer",
    "LOG_DIR": "log_dir",
    "LOG_LEVEL": "log_level",
}

_TRUTHY = {"1", "true", "yes", "on"}


def _read_yaml(path: str | Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file: {e}", context={"path": str(path)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Config file is not valid YAML: {e}", context={"path": str(path)}
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain a mapping", context={"path": str(path)}
        )
    return data


def _read_env(env: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for suffix, field_name in ENV_FIELDS.items():
        raw = env.get(f"{ENV_PREFIX}{suffix}")
        if raw is None or raw == "":
            continue
        if field_name == "viewer":
            values[field_name] = raw.strip().lower() in _TRUTHY
        else:
            values[field_name] = raw
    return values


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase aliases to field names so later sources override them."""
    aliases = {
        info.alias: name
        for name, info in BotConfig.model_fields.items()
        if info.alias
    }
    return {aliases.get(key, key): value for key, value in data.items()}


def load_bot_config(
    path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> BotConfig:
    """Build a validated :class:`BotConfig` from all configuration sources.

    ``None`` values in ``overrides`` are ignored so argparse namespaces can
    be passed through directly.

    Raises:
        ConfigurationError: If a source cannot be read, a value does not
            validate, or the weight profile is unknown.
    """
    env = os.environ if env is None else env

    merged: dict[str, Any] = {}
    if path is not None:
        merged.update(_normalise_keys(_read_yaml(path)))
    merged.update(_read_env(env))
    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = BotConfig(**merged)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(
            f"Invalid configuration: {first['msg']}", config_key=key
        ) from e

    profiles_path = env.get(heuristic_weights.WEIGHT_PROFILES_ENV)
    try:
        heuristic_weights.load_profiles_if_available(profiles_path)
    except (OSError, ValueError, TypeError, AttributeError) as e:
        raise ConfigurationError(
            f"Cannot load weight profiles: {e}",
            config_key="weight_profiles",
            context={"path": profiles_path},
        ) from e
    if not heuristic_weights.get_weights(config.weight_profile_id):
        raise ConfigurationError(
            f"Unknown weight profile {config.weight_profile_id!r}; "
            f"expected one of {sorted(heuristic_weights.HEURISTIC_WEIGHT_PROFILES)}",
            config_key="weight_profile_id",
        )

    logger.debug(f"Loaded bot config: {config}")
    return config
