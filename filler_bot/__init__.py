"""Filler bot.

Plays the two-player Filler territory game over the referee's line protocol
on stdin/stdout. Run it with ``filler-bot`` or ``python -m filler_bot``.
"""

__version__ = "1.0.0"

from filler_bot.models import (
    Board,
    BotConfig,
    Piece,
    Placement,
    PlayerIdentity,
    StrategyType,
)

__all__ = [
    "Board",
    "BotConfig",
    "Piece",
    "Placement",
    "PlayerIdentity",
    "StrategyType",
    "__version__",
]
