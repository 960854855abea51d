"""Core domain layer: PGN move trees and the approximate board engine.

Quick start::

    from pgnscope.core import parse_pgn, position_at_path

    games = parse_pgn(pgn_text)
    for game in games:
        if game.moves:
            print(position_at_path(game, [len(game.moves) - 1]))
"""

from pgnscope.core.board import Board
from pgnscope.core.enums import Color, PieceType
from pgnscope.core.executor import ResolvedMove, apply_move, resolve_move
from pgnscope.core.assembler import assemble_game
from pgnscope.core.notation import (
    STARTING_POSITION,
    Game,
    MoveNode,
    board_from_position,
    board_to_position,
    tokenize,
)
from pgnscope.core.notation.pgn import (
    build_move_tree,
    game_to_pgn,
    parse_headers,
    parse_pgn,
    parse_pgn_game,
    split_games,
)
from pgnscope.core.piece import Piece
from pgnscope.core.tree import find_path, iter_paths, node_at_path, position_at_path
from pgnscope.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Game",
    "MoveNode",
    "Piece",
    "ResolvedMove",
    # Board engine
    "STARTING_POSITION",
    "apply_move",
    "board_from_position",
    "board_to_position",
    "resolve_move",
    # Parsing
    "assemble_game",
    "build_move_tree",
    "game_to_pgn",
    "parse_headers",
    "parse_pgn",
    "parse_pgn_game",
    "split_games",
    "tokenize",
    # Tree navigation
    "find_path",
    "iter_paths",
    "node_at_path",
    "position_at_path",
]
