"""Move selection strategies for the filler bot.

Create bots through the factory:

    from filler_bot.ai import BotFactory

    bot = BotFactory.create_from_config(player_number=1, config=config)

Modules:
- base.py: BaseBot abstract base class
- factory.py: BotFactory for creating bot instances
- placement.py: legality rule and candidate enumeration
- scoring.py: heat map and the four scoring terms
- heuristic_weights.py: named weight profiles
- composite_bot.py: weighted composite strategy
- nearest_bot.py: nearest-to-latest strategy
- decision_log.py: per-turn decision records
"""

from filler_bot.ai.base import BaseBot
from filler_bot.ai.factory import BotFactory

# Lazy-load strategy implementations to avoid circular imports
_BOT_CLASSES = {
    "WeightedCompositeBot": "filler_bot.ai.composite_bot",
    "NearestLatestBot": "filler_bot.ai.nearest_bot",
}


def __getattr__(name: str):
    """Lazy loading for strategy classes."""
    if name in _BOT_CLASSES:
        import importlib
        module = importlib.import_module(_BOT_CLASSES[name])
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "BaseBot",
    "BotFactory",
    "NearestLatestBot",
    "WeightedCompositeBot",
]
