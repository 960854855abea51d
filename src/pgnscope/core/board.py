"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Sequence

from pgnscope.core.enums import Color, PieceType
from pgnscope.core.piece import Piece
from pgnscope.core.types import Square, make_square, square_at

_BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square board stored row-major, rank 8 first."""

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[sq] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def squares_of(self, piece: Piece) -> list[Square]:
        """Squares holding *piece*, in row-major scan order."""
        return [sq for sq, occupant in enumerate(self._squares) if occupant == piece]

    def rows(self) -> list[list[Piece | None]]:
        """8×8 grid copy, row 0 being rank 8."""
        return [self._squares[row * 8 : row * 8 + 8] for row in range(8)]

    # -- Copying -------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Piece | None]]) -> Board:
        """Build a board from an 8×8 grid, row 0 being rank 8."""
        if len(rows) != 8 or any(len(row) != 8 for row in rows):
            raise ValueError("Board grid must be 8x8")
        b = cls()
        for row_idx, row in enumerate(rows):
            for file, piece in enumerate(row):
                b[square_at(row_idx, file)] = piece
        return b

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(8):
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)

        for f, pt in enumerate(_BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row_idx, row in enumerate(self.rows()):
            cells = [str(p) if p else "." for p in row]
            rows.append(f"{8 - row_idx} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
