"""Tests for the Qt parse worker."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from pgnscope.core.notation.models import Game
from pgnscope.session import qt_bridge
from pgnscope.session.qt_bridge import ParseWorker


class TestParseWorker:
    def test_emits_games_with_request_id(self) -> None:
        worker = ParseWorker()
        ready = QSignalSpy(worker.games_ready)
        errors = QSignalSpy(worker.parse_error)

        worker.request_parse('[Event "A"]\n\n1. e4 e5', 7)

        assert len(ready) == 1
        assert len(errors) == 0
        request_id, games = ready[0]
        assert request_id == 7
        assert isinstance(games, list)
        assert isinstance(games[0], Game)
        assert [m.san for m in games[0].moves] == ["e4", "e5"]

    def test_emits_empty_list_for_blank_text(self) -> None:
        worker = ParseWorker()
        ready = QSignalSpy(worker.games_ready)

        worker.request_parse("", 3)

        assert len(ready) == 1
        assert ready[0][1] == []

    def test_emits_error_when_parser_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken(*_args: object, **_kwargs: object) -> list[Game]:
            raise RuntimeError("parser exploded")

        monkeypatch.setattr(qt_bridge, "parse_pgn", broken)
        worker = ParseWorker()
        ready = QSignalSpy(worker.games_ready)
        errors = QSignalSpy(worker.parse_error)

        worker.request_parse("1. e4", 11)

        assert len(ready) == 0
        assert len(errors) == 1
        assert errors[0][0] == 11
        assert errors[0][1] == "parser exploded"
