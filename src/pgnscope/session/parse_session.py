"""Debounced PGN re-parse orchestration for the main UI thread."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal

from pgnscope.core.notation.models import Game
from pgnscope.session.qt_bridge import ParseWorker
from pgnscope.session.requests import ParseRequestTracker
from pgnscope.settings import ParserSettings

_LOGGER = logging.getLogger(__name__)


class ParseRequestSignal(Protocol):
    """Minimal signal interface used by :class:`ParseSession`."""

    def connect(self, slot: Callable[..., object]) -> object: ...

    def emit(self, pgn_text: str, request_id: int) -> object: ...


class _ParseCommandBus(QObject):
    """Signal bridge for issuing worker commands with queued delivery."""

    parse_requested = pyqtSignal(str, int)


class ParseSession:
    """Owns the worker-thread parse lifecycle and drops superseded results.

    Every :meth:`schedule` call issues a new request id and restarts the
    debounce timer. Results arriving for any other id are ignored, so only
    the parse of the most recent text ever reaches ``on_games``.
    """

    __slots__ = (
        "__weakref__",
        "_on_games",
        "_on_error",
        "_parse_request",
        "_command_bus",
        "_debounce_timer",
        "_debounce_ms",
        "_parse_thread",
        "_parse_worker",
        "_requests",
        "_pending_text",
        "_pending_request",
        "_is_shutting_down",
        "_is_started",
    )

    def __init__(
        self,
        *,
        on_games: Callable[[list[Game]], None],
        on_error: Callable[[str], None] | None = None,
        parse_request: ParseRequestSignal | None = None,
        settings: ParserSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        settings = settings or ParserSettings()
        self._on_games = on_games
        self._on_error = on_error

        self._command_bus = _ParseCommandBus(parent)
        self._parse_request: ParseRequestSignal = (
            parse_request
            if parse_request is not None
            else self._command_bus.parse_requested
        )

        self._debounce_ms = settings.debounce_ms
        self._debounce_timer = QTimer(parent)
        self._debounce_timer.setSingleShot(True)
        self._debounce_timer.timeout.connect(self._emit_pending_request)

        self._parse_thread = QThread(parent)
        self._parse_worker = ParseWorker(settings)
        self._requests = ParseRequestTracker()
        self._pending_text: str | None = None
        self._pending_request: int | None = None
        self._is_shutting_down = False
        self._is_started = False

    def setup(self) -> None:
        """Start the parse worker in a dedicated thread and connect callbacks."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._parse_worker.moveToThread(self._parse_thread)
        self._parse_request.connect(self._parse_worker.request_parse)
        self._parse_worker.games_ready.connect(self._on_games_ready)
        self._parse_worker.parse_error.connect(self._on_parse_error)
        self._parse_thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Drop pending work and shut down the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel()
        self._parse_thread.quit()
        self._parse_thread.wait(2000)
        self._is_started = False

    def schedule(self, pgn_text: str) -> int:
        """Queue a parse of *pgn_text*, superseding any earlier request."""
        self._pending_request = self._requests.next_request()
        self._pending_text = pgn_text
        self._debounce_timer.start(self._debounce_ms)
        return self._pending_request

    def cancel(self) -> None:
        """Forget the pending request and ignore any parse still running."""
        self._debounce_timer.stop()
        self._pending_text = None
        self._pending_request = None
        self._requests.invalidate()

    @property
    def latest_request(self) -> int:
        return self._requests.latest

    def _emit_pending_request(self) -> None:
        if self._is_shutting_down:
            return

        request_id = self._pending_request
        pgn_text = self._pending_text
        if request_id is None or pgn_text is None:
            return
        self._pending_text = None
        self._pending_request = None
        self._parse_request.emit(pgn_text, request_id)

    def _on_games_ready(self, request_id: int, games_obj: object) -> None:
        if self._is_shutting_down:
            return
        if not self._requests.is_current(request_id):
            _LOGGER.debug("Dropping superseded parse result #%d", request_id)
            return
        if not isinstance(games_obj, list):
            return
        self._on_games(games_obj)

    def _on_parse_error(self, request_id: int, message: str) -> None:
        if self._is_shutting_down:
            return
        if not self._requests.is_current(request_id):
            return
        _LOGGER.warning("PGN parse #%d failed: %s", request_id, message)
        if self._on_error is not None:
            self._on_error(message)
