"""Line protocol spoken by the Filler referee.

Input, once at startup::

    $$$ exec p1 : [path/to/bot]

then, every turn::

    Anfield 20 15:
        01234567890123456789
    000 ....................
    ...
    014 ....................
    Piece 4 1:
    .**.

The bot answers each turn with ``"x y"`` on a line of its own.

Every raw line read is echoed to the input transcript logger.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pydantic import ValidationError

from .errors import ProtocolError
from .logging_config import get_input_logger
from .models import Board, Piece, Placement

BOARD_HEADER_PREFIX = "Anfield "
PIECE_HEADER_PREFIX = "Piece "
PLAYER_ONE_MARKER = "p1"


@dataclass(frozen=True)
class Turn:
    """One turn's worth of input."""

    index: int
    board: Board
    piece: Piece


def parse_player_line(line: str) -> int:
    """Player 1 if the line mentions ``p1``, otherwise player 2."""
    return 1 if PLAYER_ONE_MARKER in line else 2


def _parse_dimensions(line: str, prefix: str) -> tuple[int, int] | None:
    if not line.startswith(prefix):
        return None
    rest = line[len(prefix):]
    colon = rest.find(":")
    if colon < 0:
        return None
    parts = rest[:colon].split()
    if len(parts) != 2:
        return None
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if width < 0 or height < 0:
        return None
    return width, height


def parse_board_header(line: str) -> tuple[int, int] | None:
    """``"Anfield <W> <H>:"`` -> ``(W, H)``, or ``None`` if it does not match."""
    return _parse_dimensions(line, BOARD_HEADER_PREFIX)


def parse_piece_header(line: str) -> tuple[int, int] | None:
    """``"Piece <W> <H>:"`` -> ``(W, H)``, or ``None`` if it does not match."""
    return _parse_dimensions(line, PIECE_HEADER_PREFIX)


def board_row_cells(line: str) -> str:
    """Cells of a board row: everything after the first space."""
    space = line.find(" ")
    if space < 0:
        raise ProtocolError("Board row has no row-number prefix", line=line)
    return line[space + 1:]


def format_move(placement: Placement | tuple[int, int]) -> str:
    if isinstance(placement, Placement):
        return placement.to_output()
    x, y = placement
    return f"{x} {y}"


class TurnReader:
    """Iterate over the turns of a line stream.

    Iteration stops cleanly when the stream ends between turns. A header
    that does not parse, or a stream that ends inside a turn, raises
    :class:`ProtocolError`.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self._input_log = get_input_logger()
        self.turns_read = 0

    def _next_line(self) -> str | None:
        try:
            raw = next(self._lines)
        except StopIteration:
            return None
        line = raw.rstrip("\r\n")
        self._input_log.info(line)
        return line

    def _require_line(self, what: str) -> str:
        line = self._next_line()
        if line is None:
            raise ProtocolError(f"Input ended while reading {what}")
        return line

    def read_player_number(self) -> int | None:
        """Read the startup line; ``None`` if the stream is already empty."""
        line = self._next_line()
        if line is None:
            return None
        return parse_player_line(line)

    def read_turn(self) -> Turn | None:
        """Read one turn, or return ``None`` at a clean end of input."""
        header = self._next_line()
        if header is None:
            return None

        dims = parse_board_header(header)
        if dims is None:
            raise ProtocolError("Failed to parse board header", line=header)
        width, height = dims

        self._require_line("the column index line")
        rows = [
            board_row_cells(self._require_line(f"board row {y}"))
            for y in range(height)
        ]

        piece_header = self._require_line("the piece header")
        piece_dims = parse_piece_header(piece_header)
        if piece_dims is None:
            raise ProtocolError("Failed to parse piece header", line=piece_header)
        piece_width, piece_height = piece_dims
        pattern = [
            self._require_line(f"piece row {y}") for y in range(piece_height)
        ]

        try:
            board = Board(width=width, height=height, rows=rows)
            piece = Piece(width=piece_width, height=piece_height, rows=pattern)
        except ValidationError as e:
            raise ProtocolError(
                "Turn input does not match its declared dimensions",
                context={"detail": e.errors()[0]["msg"]},
            ) from e

        self.turns_read += 1
        return Turn(index=self.turns_read, board=board, piece=piece)

    def __iter__(self) -> Iterator[Turn]:
        while True:
            turn = self.read_turn()
            if turn is None:
                return
            yield turn
