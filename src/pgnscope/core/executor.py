"""Approximate SAN move executor.

Derives the board after a move from its notation alone, without a legal-move
generator. Candidates are filtered by piece geometry only: checks, pins and
castling rights are never considered. Malformed notation leaves the board
unchanged instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pgnscope.core.board import Board
from pgnscope.core.enums import Color, PieceType
from pgnscope.core.notation.san import SanMove, castling_side, parse_san
from pgnscope.core.piece import Piece
from pgnscope.core.types import Square, file_of, rank_of, row_of, square_at

_LOGGER = logging.getLogger(__name__)

_KNIGHT_OFFSETS = {(1, 2), (2, 1)}


@dataclass(frozen=True, slots=True)
class ResolvedMove:
    """Concrete source/destination pair for one SAN token."""

    from_sq: Square
    to_sq: Square
    promotion: PieceType | None = None
    rook_from: Square | None = None
    rook_to: Square | None = None

    @property
    def is_castling(self) -> bool:
        return self.rook_from is not None


def _castling_move(color: Color, kingside: bool) -> ResolvedMove:
    row = 7 if color == Color.WHITE else 0
    if kingside:
        return ResolvedMove(
            from_sq=square_at(row, 4),
            to_sq=square_at(row, 6),
            rook_from=square_at(row, 7),
            rook_to=square_at(row, 5),
        )
    return ResolvedMove(
        from_sq=square_at(row, 4),
        to_sq=square_at(row, 2),
        rook_from=square_at(row, 0),
        rook_to=square_at(row, 3),
    )


def _pawn_can_reach(board: Board, from_sq: Square, to_sq: Square, color: Color) -> bool:
    direction = -1 if color == Color.WHITE else 1
    start_row = 6 if color == Color.WHITE else 1
    d_row = row_of(to_sq) - row_of(from_sq)
    d_file = file_of(to_sq) - file_of(from_sq)
    target_empty = board.is_empty(to_sq)

    if d_file == 0 and d_row == direction:
        return target_empty
    if d_file == 0 and d_row == 2 * direction and row_of(from_sq) == start_row:
        between = square_at(row_of(from_sq) + direction, file_of(from_sq))
        return target_empty and board.is_empty(between)
    if abs(d_file) == 1 and d_row == direction:
        return not target_empty
    return False


def _ray_is_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    d_row = row_of(to_sq) - row_of(from_sq)
    d_file = file_of(to_sq) - file_of(from_sq)
    step_row = (d_row > 0) - (d_row < 0)
    step_file = (d_file > 0) - (d_file < 0)

    row = row_of(from_sq) + step_row
    file = file_of(from_sq) + step_file
    while (row, file) != (row_of(to_sq), file_of(to_sq)):
        if not board.is_empty(square_at(row, file)):
            return False
        row += step_row
        file += step_file
    return True


def _piece_can_reach(
    board: Board, piece_type: PieceType, from_sq: Square, to_sq: Square
) -> bool:
    d_row = abs(row_of(to_sq) - row_of(from_sq))
    d_file = abs(file_of(to_sq) - file_of(from_sq))
    if d_row == 0 and d_file == 0:
        return False

    if piece_type == PieceType.KNIGHT:
        return (d_row, d_file) in _KNIGHT_OFFSETS
    if piece_type == PieceType.KING:
        return d_row <= 1 and d_file <= 1

    diagonal = d_row == d_file
    straight = d_row == 0 or d_file == 0
    if piece_type == PieceType.BISHOP and not diagonal:
        return False
    if piece_type == PieceType.ROOK and not straight:
        return False
    if piece_type == PieceType.QUEEN and not (diagonal or straight):
        return False
    return _ray_is_clear(board, from_sq, to_sq)


def _candidates(board: Board, san: SanMove, color: Color) -> list[Square]:
    mover = Piece(color, san.piece_type)
    found: list[Square] = []
    for sq in board.squares_of(mover):
        if san.from_file is not None and file_of(sq) != san.from_file:
            continue
        if san.from_rank is not None and rank_of(sq) != san.from_rank:
            continue
        if san.piece_type == PieceType.PAWN:
            if not _pawn_can_reach(board, sq, san.to_sq, color):
                continue
        elif not _piece_can_reach(board, san.piece_type, sq, san.to_sq):
            continue
        found.append(sq)
    return found


def resolve_move(board: Board, san: str, color: Color) -> ResolvedMove | None:
    """Resolve *san* played by *color* on *board* into concrete squares.

    When several pieces survive filtering the first one in row-major scan
    order (a8 … h1) wins. Returns ``None`` when no piece can make the move.
    """
    kingside = castling_side(san)
    if kingside is not None:
        return _castling_move(color, kingside)

    parsed = parse_san(san)
    if parsed is None:
        return None

    found = _candidates(board, parsed, color)
    if not found:
        return None
    return ResolvedMove(from_sq=found[0], to_sq=parsed.to_sq, promotion=parsed.promotion)


def apply_move(board: Board, san: str, color: Color) -> Board:
    """Return a copy of *board* with *san* played by *color*.

    The input board is never mutated. Unresolvable notation yields an
    unchanged copy.
    """
    result = board.copy()
    move = resolve_move(board, san, color)
    if move is None:
        _LOGGER.debug("Cannot resolve %s move %r; board left unchanged", color, san)
        return result

    if move.is_castling:
        assert move.rook_from is not None and move.rook_to is not None
        result[move.to_sq] = Piece(color, PieceType.KING)
        result[move.rook_to] = Piece(color, PieceType.ROOK)
        result[move.from_sq] = None
        result[move.rook_from] = None
        return result

    piece = result[move.from_sq]
    result[move.from_sq] = None
    if move.promotion is not None:
        piece = Piece(color, move.promotion)
    result[move.to_sq] = piece
    return result
