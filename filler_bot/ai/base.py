"""
Base bot class for Filler
Abstract base class that every move selection strategy inherits from
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..errors import InvalidStateError
from ..models import (
    Board,
    BotConfig,
    Piece,
    Placement,
    PlayerIdentity,
    StrategyType,
)
from .placement import find_all_valid_placements


class BaseBot(ABC):
    """Abstract base class for all move selection strategies"""

    strategy: StrategyType

    def __init__(self, player_number: int, config: Optional[BotConfig] = None):
        """
        Initialize the bot

        Args:
            player_number: The player number this bot controls (1 or 2)
            config: Bot configuration settings
        """
        self.player_number = player_number
        self.config = config or BotConfig()
        self.me = PlayerIdentity.for_number(player_number)
        self.opponent = self.me.opponent()
        self.move_count = 0
        self.last_candidate_count = 0

        self.board: Optional[Board] = None
        self.piece: Optional[Piece] = None

    def update_board(self, board: Board) -> None:
        """
        Replace the board snapshot for the current turn

        Everything derived from the previous board is discarded.
        """
        self.board = board
        self._on_board_updated()

    def update_piece(self, piece: Piece) -> None:
        """Replace the piece to place this turn"""
        self.piece = piece

    def _on_board_updated(self) -> None:
        """Hook for strategies that precompute per-board data"""

    def _require_state(self) -> tuple:
        if self.board is None:
            raise InvalidStateError("No board has been supplied this turn")
        if self.piece is None:
            raise InvalidStateError("No piece has been supplied this turn")
        return self.board, self.piece

    def find_all_valid_placements(self) -> List[Placement]:
        """
        Enumerate every legal anchor for the current piece

        Returns:
            Placements in row-major order; empty if none are legal
        """
        board, piece = self._require_state()
        return find_all_valid_placements(board, piece, self.me, self.opponent)

    @abstractmethod
    def select_move(self) -> Optional[Placement]:
        """
        Select the placement to play this turn

        Returns:
            Chosen placement, or None if the piece has no legal anchor
        """
        pass

    @abstractmethod
    def get_evaluation_breakdown(
        self, placement: Placement
    ) -> Dict[str, Optional[float]]:
        """
        Explain how the strategy rates one candidate placement

        Args:
            placement: A candidate for the current board and piece

        Returns:
            Dictionary with a "total" entry and strategy-specific components.
            Components that do not apply are None; "total" is always a float
        """
        pass

    def __repr__(self) -> str:
        """String representation of the bot"""
        return (
            f"{self.__class__.__name__}"
            f"(player={self.player_number}, "
            f"strategy={self.strategy.value})"
        )
