"""PGN parsing into annotated move trees, and serialization back to PGN."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from pgnscope.core.assembler import assemble_game, initial_position_for
from pgnscope.core.enums import Color
from pgnscope.core.notation.fen import side_from_position
from pgnscope.core.notation.models import DraftMove, Game, MoveNode
from pgnscope.core.notation.tokenizer import (
    Token,
    TokenKind,
    normalize_newlines,
    tokenize,
)
from pgnscope.settings import ParserSettings

_LOGGER = logging.getLogger(__name__)

_PGN_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
# Blank line(s) directly followed by a tag pair start a new game.
_GAME_BOUNDARY_RE = re.compile(r'\n(?:[ \t]*\n)+(?=[ \t]*\[\w+\s+")')
_HEADER_LIKE_RE = re.compile(r"^\s*\[\w+", re.MULTILINE)
_NUMBERED_MOVE_RE = re.compile(r"\d+\.")


# -- Chunking / headers ------------------------------------------------------


def split_games(pgn_text: str) -> list[str]:
    """Split a multi-game document into per-game chunks."""
    text = normalize_newlines(pgn_text)
    chunks: list[str] = []
    for raw in _GAME_BOUNDARY_RE.split(text):
        chunk = raw.strip()
        if not chunk:
            continue
        if not _HEADER_LIKE_RE.search(chunk) and not _NUMBERED_MOVE_RE.search(chunk):
            continue
        chunks.append(chunk)
    return chunks


def parse_headers(chunk: str) -> tuple[dict[str, str], list[str]]:
    """Separate tag pairs from movetext lines in one game chunk.

    Header mode ends at the first non-blank line that does not start with
    ``[`` and never resumes. Malformed tag lines inside the header block are
    skipped. ``%`` escape lines are dropped wherever they appear.
    """
    headers: dict[str, str] = {}
    move_lines: list[str] = []
    in_headers = True

    for raw_line in chunk.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if in_headers and line.startswith("["):
            match = _PGN_HEADER_RE.match(line)
            if match is None:
                _LOGGER.debug("Skipping malformed PGN header line: %s", line)
                continue
            key, raw_value = match.groups()
            headers[key] = raw_value.replace('\\"', '"').replace("\\\\", "\\")
            continue

        if line.startswith("%"):
            continue
        in_headers = False
        move_lines.append(line)

    return headers, move_lines


# -- Move tree ---------------------------------------------------------------


@dataclass(slots=True)
class _Frame:
    """An open sequence plus the move counters to restore when it closes."""

    moves: list[DraftMove] = field(default_factory=list)
    saved_number: int = 1
    saved_black: bool = False


def build_move_tree(
    tokens: Iterable[Token], first_to_move: Color = Color.WHITE
) -> list[DraftMove]:
    """Build the draft main line (with nested variations) from *tokens*.

    *first_to_move* decides the side of an unnumbered first move.

    The builder is tolerant: unmatched ``)`` are ignored and variations left
    open at the end of input are dropped.
    """
    main = _Frame()
    stack: list[_Frame] = [main]
    pending_comment = ""
    move_number = 1
    expecting_black = first_to_move == Color.BLACK

    for token in tokens:
        kind = token.kind

        if kind == TokenKind.COMMENT:
            pending_comment = token.text
            continue

        if kind == TokenKind.OPEN_VARIATION:
            stack.append(
                _Frame(saved_number=move_number, saved_black=expecting_black)
            )
            # The variation replaces the last move of its parent line.
            parent = stack[-2].moves
            if parent:
                replaced = parent[-1]
                move_number = int(replaced.ply)
                expecting_black = not replaced.is_white
            continue

        if kind == TokenKind.CLOSE_VARIATION:
            if len(stack) == 1:
                continue
            finished = stack.pop()
            move_number = finished.saved_number
            expecting_black = finished.saved_black
            parent = stack[-1].moves
            if parent and finished.moves:
                parent[-1].variations.append(finished.moves)
            continue

        if kind == TokenKind.MOVE_NUMBER:
            move_number = token.number
            expecting_black = token.black_to_move
            continue

        if kind == TokenKind.MOVE:
            is_white = not expecting_black
            stack[-1].moves.append(
                DraftMove(
                    ply=move_number if is_white else move_number + 0.5,
                    san=token.text,
                    is_white=is_white,
                    comment=pending_comment,
                )
            )
            pending_comment = ""
            expecting_black = is_white
            if not is_white:
                move_number += 1

    return main.moves


# -- Top level ---------------------------------------------------------------


def parse_pgn_game(chunk: str, settings: ParserSettings | None = None) -> Game | None:
    """Parse a single game chunk.

    Returns ``None`` when the chunk holds neither headers nor moves. Errors
    propagate to the caller.
    """
    headers, move_lines = parse_headers(chunk)
    initial_position = initial_position_for(headers, settings)
    moves = build_move_tree(
        tokenize("\n".join(move_lines)), side_from_position(initial_position)
    )
    if not headers and not moves:
        return None
    return assemble_game(headers, moves, settings, initial_position)


def parse_pgn(pgn_text: str, settings: ParserSettings | None = None) -> list[Game]:
    """Parse every game in *pgn_text*.

    A chunk that fails is logged and skipped; the remaining games are still
    returned.
    """
    if not pgn_text or not pgn_text.strip():
        return []

    games: list[Game] = []
    for index, chunk in enumerate(split_games(pgn_text)):
        try:
            game = parse_pgn_game(chunk, settings)
        except Exception:
            _LOGGER.exception("Skipping unparsable PGN game #%d", index + 1)
            continue
        if game is not None:
            games.append(game)
    return games


# -- Serialization -----------------------------------------------------------


def _safe_comment(comment: str) -> str:
    # PGN comments cannot contain a closing brace.
    return comment.replace("}", "]")


def _sequence_items(
    moves: Sequence[MoveNode],
) -> Iterator[MoveNode | tuple[MoveNode, ...]]:
    # Each node is followed by the variations that replace it.
    for node in moves:
        yield node
        yield from node.variations


def pgn_movetext_from_nodes(moves: Sequence[MoveNode]) -> str:
    """Serialize a move sequence, including comments and nested variations."""
    parts: list[str] = []
    open_paren = ""
    stack = [_sequence_items(moves)]
    needs_number = [True]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            needs_number.pop()
            if stack:
                parts[-1] += ")"
                needs_number[-1] = True
            continue

        if isinstance(item, tuple):
            if item:
                open_paren += "("
                stack.append(_sequence_items(item))
                needs_number.append(True)
            continue

        node = item
        node_parts: list[str] = []
        # A comment belongs to the move that follows it.
        if node.comment:
            node_parts.append(f"{{{_safe_comment(node.comment)}}}")
            needs_number[-1] = True
        if node.is_white:
            node_parts.append(f"{node.move_number}.")
        elif needs_number[-1]:
            node_parts.append(f"{node.move_number}...")
        node_parts.append(node.san)
        needs_number[-1] = False

        node_parts[0] = open_paren + node_parts[0]
        open_paren = ""
        parts.extend(node_parts)
    return " ".join(parts)


def game_to_pgn(game: Game) -> str:
    """Serialize *game* to a single-game PGN document."""
    lines: list[str] = []
    for key, value in game.headers.items():
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'[{key} "{escaped}"]')
    lines.append("")
    movetext = pgn_movetext_from_nodes(game.moves)
    lines.append(f"{movetext} {game.result}" if movetext else game.result)
    lines.append("")
    return "\n".join(lines)
