"""Notation package: position strings, SAN grammar, movetext tokens, game models."""

from pgnscope.core.notation.fen import (
    STARTING_POSITION,
    board_from_position,
    board_to_position,
    side_from_position,
)
from pgnscope.core.notation.models import Game, MoveNode
from pgnscope.core.notation.san import SanMove, castling_side, is_move_token, parse_san
from pgnscope.core.notation.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "STARTING_POSITION",
    "Game",
    "MoveNode",
    "SanMove",
    "Token",
    "TokenKind",
    "board_from_position",
    "board_to_position",
    "castling_side",
    "is_move_token",
    "parse_san",
    "side_from_position",
    "tokenize",
]
