"""Tests for game record models."""

from dataclasses import FrozenInstanceError

import pytest

from pgnscope.core.enums import Color
from pgnscope.core.notation.fen import STARTING_POSITION
from pgnscope.core.notation.models import Game, MoveNode


class TestMoveNode:
    def test_white_labels(self) -> None:
        node = MoveNode(ply=5, san="O-O", is_white=True, position_after=STARTING_POSITION)
        assert node.move_number == 5
        assert node.color == Color.WHITE
        assert node.label == "5."

    def test_black_labels(self) -> None:
        node = MoveNode(ply=5.5, san="Be7", is_white=False, position_after=STARTING_POSITION)
        assert node.move_number == 5
        assert node.color == Color.BLACK
        assert node.label == "5..."

    def test_is_immutable(self) -> None:
        node = MoveNode(ply=1, san="e4", is_white=True, position_after=STARTING_POSITION)
        with pytest.raises(FrozenInstanceError):
            node.san = "d4"  # type: ignore[misc]


class TestGame:
    def test_defaults(self) -> None:
        game = Game()
        assert game.initial_position == STARTING_POSITION
        assert game.result == "*"
        assert game.ply_count == 0

    def test_result_header(self) -> None:
        assert Game(headers={"Result": "0-1"}).result == "0-1"

    def test_headers_are_read_only(self) -> None:
        source = {"Event": "Casual"}
        game = Game(headers=source)
        source["Event"] = "Changed"
        assert game.headers["Event"] == "Casual"
        with pytest.raises(TypeError):
            game.headers["Event"] = "Other"  # type: ignore[index]

    def test_is_hashable(self) -> None:
        first = Game(headers={"Event": "A"})
        second = Game(headers={"Event": "A"})
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
