"""Position-string (FEN placement) parsing and serialization.

Only the piece placement and the active color are meaningful here. Castling
rights, en-passant target and both clocks are emitted as fixed placeholders
because the move executor does not track them.
"""

from __future__ import annotations

from pgnscope.core.board import Board
from pgnscope.core.enums import Color
from pgnscope.core.piece import Piece
from pgnscope.core.types import square_at

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_PLACEHOLDER_FIELDS = "KQkq - 0 1"


def board_from_position(text: str) -> Board:
    """Parse the placement field of a position string into a :class:`Board`."""
    parts = text.split()
    if not parts:
        raise ValueError(f"Invalid position string (empty): {text!r}")

    ranks = parts[0].split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid position board (must contain 8 ranks): {text!r}")

    board = Board()
    for row, rank_text in enumerate(ranks):
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid position digit {ch!r}: {text!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid position rank width: {text!r}")
                board[square_at(row, file)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise ValueError(f"Invalid position rank width: {text!r}")
        if file != 8:
            raise ValueError(f"Invalid position rank width: {text!r}")
    return board


def board_to_position(board: Board, side_to_move: Color = Color.WHITE) -> str:
    """Serialise *board* to a position string with placeholder trailing fields."""
    rows: list[str] = []
    for cells in board.rows():
        empty = 0
        row = ""
        for piece in cells:
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)

    return f"{'/'.join(rows)} {side_to_move.fen_char} {_PLACEHOLDER_FIELDS}"


def side_from_position(text: str) -> Color:
    """Active color of a position string; White when the field is missing."""
    parts = text.split()
    if len(parts) > 1 and parts[1] == "b":
        return Color.BLACK
    return Color.WHITE
