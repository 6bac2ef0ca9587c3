"""Bot factory for Filler.

All bot creation goes through this factory so that the driver, tests and
tuning scripts build strategies the same way.

Usage:
    from filler_bot.ai.factory import BotFactory

    # Create the bot named by a config
    bot = BotFactory.create_from_config(player_number=1, config=BotConfig())

    # Create a bot with an explicit strategy
    bot = BotFactory.create(StrategyType.NEAREST, player_number=2)

    # Register a custom strategy
    BotFactory.register("cautious", CautiousBot)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from filler_bot.errors import ConfigurationError
from filler_bot.models import BotConfig, StrategyType

if TYPE_CHECKING:
    from filler_bot.ai.base import BaseBot

logger = logging.getLogger(__name__)


class BotFactory:
    """Centralized factory for creating bot instances.

    Built-in strategies are resolved lazily by :class:`StrategyType`; custom
    implementations can be registered under any string identifier at
    runtime.
    """

    # Maps string identifiers to callables accepting (player_number, config)
    _custom_registry: dict[str, Callable[..., BaseBot]] = {}

    _class_cache: dict[StrategyType, type[BaseBot]] = {}

    @classmethod
    def register(
        cls,
        identifier: str,
        constructor: Callable[..., BaseBot],
    ) -> None:
        """Register a custom strategy.

        Args:
            identifier: Unique string identifier for the strategy
            constructor: Callable accepting (player_number, config)
        """
        if identifier in cls._custom_registry:
            logger.warning(f"Overwriting existing custom strategy: {identifier}")
        cls._custom_registry[identifier] = constructor
        logger.debug(f"Registered custom strategy: {identifier}")

    @classmethod
    def unregister(cls, identifier: str) -> bool:
        """Unregister a custom strategy.

        Returns:
            True if the identifier was found and removed, False otherwise
        """
        if identifier in cls._custom_registry:
            del cls._custom_registry[identifier]
            logger.debug(f"Unregistered custom strategy: {identifier}")
            return True
        return False

    @classmethod
    def available(cls) -> list[str]:
        """Identifiers accepted by :meth:`create`."""
        return [s.value for s in StrategyType] + sorted(cls._custom_registry)

    @classmethod
    def _get_bot_class(cls, strategy: StrategyType) -> type[BaseBot]:
        if strategy in cls._class_cache:
            return cls._class_cache[strategy]

        # Lazy imports to avoid circular dependencies
        if strategy == StrategyType.COMPOSITE:
            from filler_bot.ai.composite_bot import WeightedCompositeBot
            bot_class = WeightedCompositeBot
        elif strategy == StrategyType.NEAREST:
            from filler_bot.ai.nearest_bot import NearestLatestBot
            bot_class = NearestLatestBot
        else:
            raise ConfigurationError(
                f"Unsupported strategy: {strategy}", config_key="strategy"
            )

        cls._class_cache[strategy] = bot_class
        return bot_class

    @classmethod
    def create(
        cls,
        strategy: StrategyType | str,
        player_number: int,
        config: BotConfig | None = None,
    ) -> BaseBot:
        """Create a bot for ``strategy``.

        Args:
            strategy: Built-in :class:`StrategyType` (or its value) or a
                registered custom identifier
            player_number: The player number (1 or 2)
            config: Bot configuration; defaults are used when omitted

        Raises:
            ConfigurationError: If the strategy is unknown
        """
        config = config or BotConfig()
        if isinstance(strategy, str) and strategy in cls._custom_registry:
            return cls._custom_registry[strategy](player_number, config)

        try:
            strategy = StrategyType(strategy)
        except ValueError:
            raise ConfigurationError(
                f"Unknown strategy {strategy!r}; expected one of {cls.available()}",
                config_key="strategy",
            ) from None

        bot_class = cls._get_bot_class(strategy)
        return bot_class(player_number, config)

    @classmethod
    def create_from_config(cls, player_number: int, config: BotConfig) -> BaseBot:
        """Create the bot named by ``config.strategy``."""
        return cls.create(config.strategy, player_number, config)
