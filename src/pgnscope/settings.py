"""User-configurable parser settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ParserSettings:
    """All user-configurable parser settings."""

    # Delay before a scheduled re-parse runs; later edits restart it.
    debounce_ms: int = 250

    # SetUp header values that make the FEN header the starting position.
    setup_flags: tuple[str, ...] = ("1", "true")
