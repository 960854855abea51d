"""Tests for tree-path addressing and move search."""

import pytest

from pgnscope.core.notation.fen import STARTING_POSITION
from pgnscope.core.notation.pgn import parse_pgn
from pgnscope.core.tree import find_path, iter_paths, node_at_path, position_at_path

TREE_PGN = """[Event "Tree"]

1. e4 e5 (1... c5 2. Nf3 (2. Nc3 {closed} Nc6) d6) (1... e6) 2. Nf3 Nc6
"""


@pytest.fixture
def game():
    (parsed,) = parse_pgn(TREE_PGN)
    return parsed


class TestNodeAtPath:
    def test_main_line(self, game) -> None:
        assert node_at_path(game.moves, [0]).san == "e4"
        assert node_at_path(game.moves, [3]).san == "Nc6"

    def test_variations(self, game) -> None:
        assert node_at_path(game.moves, [1, 0, 0]).san == "c5"
        assert node_at_path(game.moves, [1, 1, 0]).san == "e6"
        assert node_at_path(game.moves, [1, 0, 1, 0, 1]).san == "Nc6"

    def test_invalid_shape_raises(self, game) -> None:
        with pytest.raises(ValueError, match="tree path"):
            node_at_path(game.moves, [])
        with pytest.raises(ValueError, match="tree path"):
            node_at_path(game.moves, [1, 0])

    def test_out_of_range_raises(self, game) -> None:
        with pytest.raises(IndexError):
            node_at_path(game.moves, [9])
        with pytest.raises(IndexError):
            node_at_path(game.moves, [0, 0, 0])


class TestPositionAtPath:
    def test_empty_path_is_initial_position(self, game) -> None:
        assert position_at_path(game, []) == STARTING_POSITION

    def test_reads_position_after(self, game) -> None:
        node = node_at_path(game.moves, [1, 0, 0])
        assert position_at_path(game, [1, 0, 0]) == node.position_after


class TestIterPaths:
    def test_depth_first_display_order(self, game) -> None:
        paths = list(iter_paths(game.moves))
        assert paths == [
            (0,),
            (1,),
            (1, 0, 0),
            (1, 0, 1),
            (1, 0, 1, 0, 0),
            (1, 0, 1, 0, 1),
            (1, 0, 2),
            (1, 1, 0),
            (2,),
            (3,),
        ]

    def test_every_path_resolves(self, game) -> None:
        for path in iter_paths(game.moves):
            node_at_path(game.moves, path)


class TestFindPath:
    def test_finds_first_move_in_display_order(self, game) -> None:
        assert find_path(game.moves, "nc6") == (1, 0, 1, 0, 1)

    def test_matches_comments(self, game) -> None:
        assert find_path(game.moves, "CLOSED") == (1, 0, 1, 0, 1)

    def test_missing_or_blank_query(self, game) -> None:
        assert find_path(game.moves, "Qh5") is None
        assert find_path(game.moves, "  ") is None

    def test_deep_nesting(self) -> None:
        depth = 1000
        (deep,) = parse_pgn("1. e4 " + "(1. d4 " * depth + ")" * depth + " e5")
        paths = list(iter_paths(deep.moves))
        assert len(paths) == depth + 2
        assert paths[-1] == (1,)
        assert len(paths[-2]) == 2 * depth + 1
        assert find_path(deep.moves, "e5") == (1,)
