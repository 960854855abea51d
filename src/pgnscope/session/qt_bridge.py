"""Qt bridge to run PGN parsing in a worker thread."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from pgnscope.core.notation.pgn import parse_pgn
from pgnscope.settings import ParserSettings


class ParseWorker(QObject):
    """Thread-affine worker that parses PGN text on demand."""

    games_ready = pyqtSignal(int, object)
    parse_error = pyqtSignal(int, str)

    def __init__(self, settings: ParserSettings | None = None) -> None:
        super().__init__()
        self._settings = settings or ParserSettings()

    @pyqtSlot(str, int)
    def request_parse(self, pgn_text: str, request_id: int) -> None:
        """Parse *pgn_text* and emit the games tagged with *request_id*."""
        try:
            games = parse_pgn(pgn_text, self._settings)
        except Exception as exc:
            self.parse_error.emit(request_id, str(exc))
            return
        self.games_ready.emit(request_id, games)
