"""Immutable game records produced by the PGN parser."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pgnscope.core.enums import Color
from pgnscope.core.notation.fen import STARTING_POSITION


@dataclass(frozen=True, slots=True)
class MoveNode:
    """One move of a line, stamped with the position it leads to.

    ``variations`` are alternatives to this move: each one starts from the
    position *before* this node, not after it.
    """

    ply: float
    san: str
    is_white: bool
    position_after: str
    comment: str = ""
    variations: tuple[tuple[MoveNode, ...], ...] = ()

    @property
    def move_number(self) -> int:
        """Fullmove number this move belongs to."""
        return int(self.ply)

    @property
    def color(self) -> Color:
        return Color.WHITE if self.is_white else Color.BLACK

    @property
    def label(self) -> str:
        """Move-number prefix as written in PGN, e.g. ``5.`` or ``5...``."""
        return f"{self.move_number}." if self.is_white else f"{self.move_number}..."


@dataclass(frozen=True, slots=True)
class Game:
    """A parsed game: tag pairs, annotated main line and starting position.

    ``headers`` is stored as a read-only mapping, so the whole record is
    immutable and hashable.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    moves: tuple[MoveNode, ...] = ()
    initial_position: str = STARTING_POSITION

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __hash__(self) -> int:
        return hash(
            (tuple(self.headers.items()), self.moves, self.initial_position)
        )

    @property
    def result(self) -> str:
        return self.headers.get("Result", "*")

    @property
    def ply_count(self) -> int:
        """Number of main-line half-moves."""
        return len(self.moves)


@dataclass(slots=True)
class DraftMove:
    """Mutable move used while the tree is being built, before positions exist."""

    ply: float
    san: str
    is_white: bool
    comment: str = ""
    variations: list[list[DraftMove]] = field(default_factory=list)
