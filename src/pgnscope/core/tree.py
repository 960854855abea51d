"""Addressing nodes inside a move tree.

A path alternates sequence indices and variation indices:
``[i0, v0, i1, v1, ..., ik]``. ``[3]`` is the fourth main-line move and
``[3, 0, 1]`` is the second move of the first variation hanging off it.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from pgnscope.core.notation.models import Game, MoveNode

TreePath = tuple[int, ...]


def node_at_path(moves: Sequence[MoveNode], path: Sequence[int]) -> MoveNode:
    """Return the node addressed by *path* inside *moves*."""
    if not path or len(path) % 2 == 0:
        raise ValueError(f"Invalid tree path: {list(path)!r}")

    sequence = moves
    for k in range(0, len(path) - 1, 2):
        sequence = sequence[path[k]].variations[path[k + 1]]
    return sequence[path[-1]]


def position_at_path(game: Game, path: Sequence[int]) -> str:
    """Position string shown when *path* is selected (empty = start)."""
    if not path:
        return game.initial_position
    return node_at_path(game.moves, path).position_after


def iter_paths(
    moves: Sequence[MoveNode], prefix: TreePath = ()
) -> Iterator[TreePath]:
    """Yield every node path depth-first: a node, its variations, then the next node."""
    stack: list[tuple[Sequence[MoveNode], TreePath, int]] = [(moves, prefix, 0)]
    while stack:
        sequence, base, index = stack.pop()
        if index >= len(sequence):
            continue
        yield (*base, index)
        # Pushed in reverse so the first variation is visited next.
        stack.append((sequence, base, index + 1))
        variations = sequence[index].variations
        for var_index in reversed(range(len(variations))):
            stack.append((variations[var_index], (*base, index, var_index), 0))


def find_path(moves: Sequence[MoveNode], query: str) -> TreePath | None:
    """First path whose move or comment contains *query* (case-insensitive)."""
    needle = query.strip().lower()
    if not needle:
        return None
    for path in iter_paths(moves):
        node = node_at_path(moves, path)
        if needle in node.san.lower() or needle in node.comment.lower():
            return path
    return None
