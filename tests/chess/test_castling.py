"""unit tests for src/chess/castling.py"""

from typing import Callable, Optional

import pytest

from src.chess.board import Board
from src.chess.castling import (
    CastlingSide,
    CastlingSquares,
    can_castle,
    castling_destinations,
    castling_squares,
    side_of_castling_move,
    squares_between_on_rank,
)
from src.chess.pieces import Piece
from src.chess.position import Position

sq = Position.from_algebraic
BoardFactory = Callable[..., Board]

CASTLING_SETUP = ("Ke1", "Ra1", "Rh1", "ke8", "ra8", "rh8")


def king_on(board: Board, name: str) -> Piece:
    king = board.piece_at(sq(name))
    assert king is not None
    return king


@pytest.mark.parametrize(
    "king_square, side, expected",
    [
        ("e1", CastlingSide.KING_SIDE, ("e1", "g1", "h1", "f1")),
        ("e1", CastlingSide.QUEEN_SIDE, ("e1", "c1", "a1", "d1")),
        ("e8", CastlingSide.KING_SIDE, ("e8", "g8", "h8", "f8")),
        ("e8", CastlingSide.QUEEN_SIDE, ("e8", "c8", "a8", "d8")),
    ],
)
def test_castling_squares(king_square: str, side: CastlingSide, expected: tuple[str, ...]) -> None:
    king = Piece.from_symbol("K", king_square)
    assert castling_squares(king, side) == CastlingSquares(*(sq(name) for name in expected))


def test_king_path() -> None:
    squares = castling_squares(Piece.from_symbol("K", "e1"), CastlingSide.QUEEN_SIDE)
    assert squares.king_path == [sq("e1"), sq("d1"), sq("c1")]


@pytest.mark.parametrize(
    "from_square, to_square, expected",
    [
        ("e1", "g1", CastlingSide.KING_SIDE),
        ("e8", "c8", CastlingSide.QUEEN_SIDE),
        ("e1", "f1", None),
        ("e1", "g2", None),
    ],
)
def test_side_of_castling_move(
    from_square: str, to_square: str, expected: Optional[CastlingSide]
) -> None:
    assert side_of_castling_move(sq(from_square), sq(to_square)) == expected


def test_squares_between_on_rank() -> None:
    assert squares_between_on_rank(sq("e1"), sq("a1")) == [sq("b1"), sq("c1"), sq("d1")]
    assert squares_between_on_rank(sq("e8"), sq("h8")) == [sq("f8"), sq("g8")]


def test_squares_between_needs_same_rank() -> None:
    with pytest.raises(ValueError):
        squares_between_on_rank(sq("e1"), sq("e8"))


# --- ELIGIBILITY ---
@pytest.mark.parametrize("king_square", ["e1", "e8"])
def test_both_sides_available(make_board: BoardFactory, king_square: str) -> None:
    board = make_board(*CASTLING_SETUP)
    king = king_on(board, king_square)
    rank = king_square[1]
    assert castling_destinations(king, board) == {sq(f"g{rank}"), sq(f"c{rank}")}


def test_king_has_moved(make_board: BoardFactory) -> None:
    board = make_board(*CASTLING_SETUP, moved=("Ke1",))
    assert castling_destinations(king_on(board, "e1"), board) == set()


def test_rook_has_moved(make_board: BoardFactory) -> None:
    board = make_board(*CASTLING_SETUP, moved=("Rh1",))
    king = king_on(board, "e1")
    assert not can_castle(king, CastlingSide.KING_SIDE, board)
    assert can_castle(king, CastlingSide.QUEEN_SIDE, board)


def test_rook_missing_or_wrong_piece(make_board: BoardFactory) -> None:
    board = make_board("Ke1", "Nh1", "ra1", "ke8")
    king = king_on(board, "e1")
    assert not can_castle(king, CastlingSide.KING_SIDE, board)
    assert not can_castle(king, CastlingSide.QUEEN_SIDE, board)


def test_piece_in_between(make_board: BoardFactory) -> None:
    """The b1 square is not on the king's path, but still needs to be empty"""
    board = make_board(*CASTLING_SETUP, "Nb1")
    king = king_on(board, "e1")
    assert not can_castle(king, CastlingSide.QUEEN_SIDE, board)
    assert can_castle(king, CastlingSide.KING_SIDE, board)


def test_transit_square_attacked(make_board: BoardFactory) -> None:
    """Black bishop on c4 stares at f1: kingside castling would cross an attacked square"""
    board = make_board(*CASTLING_SETUP, "bc4")
    king = king_on(board, "e1")
    assert not can_castle(king, CastlingSide.KING_SIDE, board)
    assert can_castle(king, CastlingSide.QUEEN_SIDE, board)


def test_destination_attacked(make_board: BoardFactory) -> None:
    board = make_board(*CASTLING_SETUP, "bh2")
    king = king_on(board, "e1")
    # h2 bishop covers g1
    assert not can_castle(king, CastlingSide.KING_SIDE, board)


def test_cannot_castle_out_of_check(make_board: BoardFactory) -> None:
    board = make_board(*CASTLING_SETUP[:3], "ke8", "re5")
    assert castling_destinations(king_on(board, "e1"), board) == set()


def test_attacked_square_next_to_the_rook_is_fine(make_board: BoardFactory) -> None:
    """Only the king's squares matter: the black knight on a3 covers b1, queenside castling is still allowed"""
    board = make_board(*CASTLING_SETUP, "na3")
    king = king_on(board, "e1")
    assert castling_destinations(king, board) == {sq("g1"), sq("c1")}
