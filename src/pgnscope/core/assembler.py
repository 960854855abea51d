"""Stamp a draft move tree with the position after every move."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pgnscope.core.board import Board
from pgnscope.core.enums import Color
from pgnscope.core.executor import apply_move
from pgnscope.core.notation.fen import (
    STARTING_POSITION,
    board_from_position,
    board_to_position,
)
from pgnscope.core.notation.models import DraftMove, Game, MoveNode
from pgnscope.settings import ParserSettings

_LOGGER = logging.getLogger(__name__)


def initial_position_for(
    headers: dict[str, str], settings: ParserSettings | None = None
) -> str:
    """Starting position declared by the ``SetUp``/``FEN`` headers, if any."""
    setup_flags = (settings or ParserSettings()).setup_flags
    fen = headers.get("FEN", "").strip()
    if not fen or headers.get("SetUp", "").strip() not in setup_flags:
        return STARTING_POSITION
    try:
        board_from_position(fen)
    except ValueError:
        _LOGGER.warning("Ignoring malformed FEN header %r; using standard start", fen)
        return STARTING_POSITION
    return fen


def annotate_sequence(
    moves: Sequence[DraftMove], board: Board
) -> tuple[MoveNode, ...]:
    """Freeze *moves* played from *board*, including every nested variation.

    Each variation is seeded from the board before the move it replaces.
    Nesting depth is unbounded: the tree is walked with an explicit stack
    and frozen bottom-up, children before parents.
    """
    positions: dict[int, str] = {}
    # Sequences in discovery order; every variation comes after its parent.
    discovered: list[Sequence[DraftMove]] = []
    pending: list[tuple[Sequence[DraftMove], Board]] = [(moves, board)]
    while pending:
        sequence, current = pending.pop()
        discovered.append(sequence)
        for draft in sequence:
            color = Color.WHITE if draft.is_white else Color.BLACK
            before = current
            current = apply_move(before, draft.san, color)
            positions[id(draft)] = board_to_position(current, color.opposite)
            pending.extend((variation, before) for variation in draft.variations)

    frozen: dict[int, tuple[MoveNode, ...]] = {}
    for sequence in reversed(discovered):
        frozen[id(sequence)] = tuple(
            MoveNode(
                ply=draft.ply,
                san=draft.san,
                is_white=draft.is_white,
                position_after=positions[id(draft)],
                comment=draft.comment,
                variations=tuple(
                    frozen[id(variation)] for variation in draft.variations
                ),
            )
            for draft in sequence
        )
    return frozen[id(moves)]


def assemble_game(
    headers: dict[str, str],
    moves: Sequence[DraftMove],
    settings: ParserSettings | None = None,
    initial_position: str | None = None,
) -> Game:
    """Build the immutable :class:`Game` for one parsed chunk.

    *initial_position* skips the ``SetUp``/``FEN`` lookup when the caller
    already resolved it.
    """
    if initial_position is None:
        initial_position = initial_position_for(headers, settings)
    board = board_from_position(initial_position)
    return Game(
        headers=headers,
        moves=annotate_sequence(moves, board),
        initial_position=initial_position,
    )
