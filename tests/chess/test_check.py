"""Unit tests for /src/chess/check.py"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.check import attacked_squares, is_any_attacked, is_attacked, is_in_check
from src.chess.position import Position
from src.core.shared_types import Color

sq = Position.from_algebraic
BoardFactory = Callable[..., Board]


@pytest.mark.parametrize(
    "attacker, target",
    [
        ("pe5", "d4"),  # black pawns attack down the board
        ("Pd4", "e5"),  # white pawns attack up the board
        ("nf3", "e1"),
        ("bb4", "e1"),
        ("ra1", "e1"),
        ("qh4", "e1"),
        ("qe7", "e1"),
        ("kd2", "e1"),
    ],
)
def test_square_attacked_by_each_piece_type(
    make_board: BoardFactory, attacker: str, target: str
) -> None:
    board = make_board(attacker)
    by_color = Color.WHITE if attacker[0].isupper() else Color.BLACK
    assert is_attacked(sq(target), by_color, board)


def test_pawn_does_not_attack_forward(make_board: BoardFactory) -> None:
    board = make_board("pe5")
    assert not is_attacked(sq("e4"), Color.BLACK, board)


def test_blocked_line_of_sight(make_board: BoardFactory) -> None:
    board = make_board("ra1", "Nc1")
    assert is_attacked(sq("c1"), Color.BLACK, board)
    assert not is_attacked(sq("e1"), Color.BLACK, board)


def test_own_color_does_not_count(make_board: BoardFactory) -> None:
    board = make_board("Ra1")
    assert not is_attacked(sq("a5"), Color.BLACK, board)
    assert is_attacked(sq("a5"), Color.WHITE, board)


def test_attacked_squares_union(make_board: BoardFactory) -> None:
    board = make_board("Nb1", "Pe2")
    assert attacked_squares(Color.WHITE, board) == {
        sq(name) for name in ("a3", "c3", "d2", "d3", "f3")
    }
    assert is_any_attacked([sq("h8"), sq("f3")], Color.WHITE, board)
    assert not is_any_attacked([sq("h8"), sq("e3")], Color.WHITE, board)


def test_king_in_check(make_board: BoardFactory) -> None:
    board = make_board("Ke1", "ke8", "re5")
    assert is_in_check(Color.WHITE, board)
    assert not is_in_check(Color.BLACK, board)


def test_check_blocked(make_board: BoardFactory) -> None:
    board = make_board("Ke1", "ke8", "re5", "Be3")
    assert not is_in_check(Color.WHITE, board)


def test_no_check_without_king(make_board: BoardFactory) -> None:
    board = make_board("ke8", "Qe1")
    assert not is_in_check(Color.WHITE, board)
    assert is_in_check(Color.BLACK, board)


def test_starting_position_no_check() -> None:
    board = Board.starting_position()
    assert not is_in_check(Color.WHITE, board)
    assert not is_in_check(Color.BLACK, board)
