"""Debounced background re-parsing for editors that re-submit PGN text."""

from pgnscope.session.parse_session import ParseSession
from pgnscope.session.requests import ParseRequestTracker

__all__ = ["ParseRequestTracker", "ParseSession"]
