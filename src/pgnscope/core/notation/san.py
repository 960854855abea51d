"""SAN (Standard Algebraic Notation) token grammar."""

from __future__ import annotations

import re
from dataclasses import dataclass

from pgnscope.core.enums import PieceType
from pgnscope.core.piece import SAN_PIECE_TYPES
from pgnscope.core.types import Square, parse_square

SAN_RE = re.compile(
    r"^(?P<piece>[KQRBN])?"
    r"(?P<from_file>[a-h])?"
    r"(?P<from_rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<to>[a-h][1-8])"
    r"(?:=(?P<promotion>[QRBN]))?"
    r"(?P<check>[+#])?$"
)
CASTLING_RE = re.compile(r"^(?P<castle>O-O(?:-O)?|0-0(?:-0)?)(?P<check>[+#])?$")

_GLYPHS = "!?"


@dataclass(frozen=True, slots=True)
class SanMove:
    """Components of a non-castling SAN token."""

    piece_type: PieceType
    to_sq: Square
    from_file: int | None = None
    from_rank: int | None = None
    is_capture: bool = False
    promotion: PieceType | None = None


def strip_glyphs(token: str) -> str:
    """Drop trailing move-assessment glyphs such as ``!?`` or ``??``."""
    return token.rstrip(_GLYPHS)


def is_move_token(token: str) -> bool:
    """Whether *token* (glyphs already stripped) is a move or castling token."""
    return bool(SAN_RE.match(token) or CASTLING_RE.match(token))


def castling_side(token: str) -> bool | None:
    """``True`` for king-side castling, ``False`` for queen-side, else ``None``."""
    match = CASTLING_RE.match(strip_glyphs(token.strip()))
    if match is None:
        return None
    return match.group("castle") in ("O-O", "0-0")


def parse_san(token: str) -> SanMove | None:
    """Split a SAN token into its components, or ``None`` if it does not parse."""
    match = SAN_RE.match(strip_glyphs(token.strip()))
    if match is None:
        return None

    letter = match.group("piece")
    from_file = match.group("from_file")
    from_rank = match.group("from_rank")
    promotion = match.group("promotion")
    return SanMove(
        piece_type=SAN_PIECE_TYPES[letter] if letter else PieceType.PAWN,
        to_sq=parse_square(match.group("to")),
        from_file=ord(from_file) - ord("a") if from_file else None,
        from_rank=int(from_rank) - 1 if from_rank else None,
        is_capture=match.group("capture") is not None,
        promotion=SAN_PIECE_TYPES[promotion] if promotion else None,
    )
