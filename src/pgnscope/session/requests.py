"""Generation counter deciding which parse result is still wanted."""

from __future__ import annotations


class ParseRequestTracker:
    """Issues monotonically increasing request ids; only the latest counts."""

    __slots__ = ("_latest",)

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def next_request(self) -> int:
        """Issue a new id, superseding every earlier one."""
        self._latest += 1
        return self._latest

    def invalidate(self) -> None:
        """Supersede all outstanding requests without issuing a new one."""
        self._latest += 1

    def is_current(self, request_id: int) -> bool:
        return request_id == self._latest
