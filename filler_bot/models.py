"""
Pydantic Models for Filler Game State
Board and piece grids, player identities, placements and bot configuration
"""

from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator


class Cell(str, Enum):
    """Board cell symbols as they appear on the wire"""
    EMPTY = "."
    P1_TERRITORY = "@"
    P1_LAST = "a"
    P2_TERRITORY = "$"
    P2_LAST = "s"


EMPTY_PIECE_CELL = "."


class StrategyType(str, Enum):
    """Move selection strategy enumeration"""
    COMPOSITE = "composite"
    NEAREST = "nearest"


class BlockingVariant(str, Enum):
    """Neighbourhood used by the blocking scorer"""
    ADJACENT = "adjacent"
    RADIAL = "radial"


def _check_grid(name: str, width: int, height: int, rows: List[str]) -> None:
    if len(rows) != height:
        raise ValueError(
            f"{name} declares height {height} but has {len(rows)} rows"
        )
    for index, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(
                f"{name} row {index} has {len(row)} cells, expected {width}"
            )


class Board(BaseModel):
    """The Anfield for one turn, addressed as ``rows[y][x]``"""
    width: int = Field(ge=0)
    height: int = Field(ge=0)
    rows: List[str]

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_shape(self) -> "Board":
        _check_grid("Board", self.width, self.height, self.rows)
        return self

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[str]]) -> "Board":
        """Build a board from row strings or nested character lists."""
        joined = ["".join(row) for row in rows]
        width = len(joined[0]) if joined else 0
        return cls(width=width, height=len(joined), rows=joined)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> str:
        return self.rows[y][x]

    def cells_with(self, symbols: Iterable[str]) -> Iterator[Tuple[int, int]]:
        """Yield ``(x, y)`` of every cell holding one of ``symbols``, row-major."""
        wanted = frozenset(symbols)
        for y, row in enumerate(self.rows):
            for x, symbol in enumerate(row):
                if symbol in wanted:
                    yield x, y


class Piece(BaseModel):
    """Piece pattern; any character other than '.' is solid"""
    width: int = Field(ge=0)
    height: int = Field(ge=0)
    rows: List[str]

    class Config:
        frozen = True

    @model_validator(mode="after")
    def _check_shape(self) -> "Piece":
        _check_grid("Piece", self.width, self.height, self.rows)
        return self

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[str]]) -> "Piece":
        joined = ["".join(row) for row in rows]
        width = len(joined[0]) if joined else 0
        return cls(width=width, height=len(joined), rows=joined)

    def is_solid(self, px: int, py: int) -> bool:
        return self.rows[py][px] != EMPTY_PIECE_CELL

    def solid_cells(self) -> List[Tuple[int, int]]:
        """Offsets ``(px, py)`` of solid cells in row-major order."""
        return [
            (px, py)
            for py, row in enumerate(self.rows)
            for px, symbol in enumerate(row)
            if symbol != EMPTY_PIECE_CELL
        ]


class PlayerIdentity(BaseModel):
    """Symbols that mark one player's cells"""
    number: int = Field(ge=1, le=2)
    territory: str
    last_placed: str

    class Config:
        frozen = True

    @classmethod
    def for_number(cls, number: int) -> "PlayerIdentity":
        """Player 1 plays '@'/'a', player 2 plays '$'/'s'."""
        if number == 1:
            return cls(
                number=1,
                territory=Cell.P1_TERRITORY.value,
                last_placed=Cell.P1_LAST.value,
            )
        return cls(
            number=2,
            territory=Cell.P2_TERRITORY.value,
            last_placed=Cell.P2_LAST.value,
        )

    @property
    def symbols(self) -> Tuple[str, str]:
        return self.territory, self.last_placed

    def owns(self, symbol: str) -> bool:
        return symbol == self.territory or symbol == self.last_placed

    def opponent(self) -> "PlayerIdentity":
        return PlayerIdentity.for_number(2 if self.number == 1 else 1)


class Placement(BaseModel):
    """Board coordinate of a piece's top-left cell"""
    x: int
    y: int

    class Config:
        frozen = True

    def to_output(self) -> str:
        return f"{self.x} {self.y}"


class BotConfig(BaseModel):
    """Bot configuration"""
    strategy: StrategyType = StrategyType.COMPOSITE
    weight_profile_id: str = Field(
        "composite_v1_balanced", alias="weightProfileId"
    )
    weights: Optional[Dict[str, float]] = None
    blocking_variant: BlockingVariant = Field(
        BlockingVariant.ADJACENT, alias="blockingVariant"
    )
    fallback_move: Tuple[int, int] = Field((0, 0), alias="fallbackMove")
    viewer: bool = False
    log_dir: str = Field(".", alias="logDir")
    input_log: Optional[str] = Field("game_input.log", alias="inputLog")
    decision_log: Optional[str] = Field("ai_decisions.log", alias="decisionLog")
    log_level: str = Field("INFO", alias="logLevel")

    class Config:
        populate_by_name = True
