"""Helpers for implementing Castling rules."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.chess.board import Board
from src.chess.check import is_any_attacked
from src.chess.pieces import Piece
from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.shared_types import PieceType


class CastlingSide(Enum):
    """Values are the file the rook starts on."""

    KING_SIDE = BOARD_DIMENSIONS[0] - 1
    QUEEN_SIDE = 0

    @property
    def direction(self) -> int:
        return 1 if self == CastlingSide.KING_SIDE else -1


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    The king always travels two files towards the rook, the rook lands on the square the king crossed.
    """

    king_from: Position
    king_to: Position
    rook_from: Position
    rook_to: Position

    @property
    def king_path(self) -> list[Position]:
        """start, transit and destination square of the king: none of them may be attacked"""
        step = 1 if self.king_to.file > self.king_from.file else -1
        return [
            Position(file, self.king_from.rank)
            for file in range(self.king_from.file, self.king_to.file + step, step)
        ]


def castling_squares(king: Piece, side: CastlingSide) -> CastlingSquares:
    rank = king.position.rank
    king_to = Position(king.position.file + 2 * side.direction, rank)
    return CastlingSquares(
        king_from=king.position,
        king_to=king_to,
        rook_from=Position(side.value, rank),
        rook_to=Position(king_to.file - side.direction, rank),
    )


def side_of_castling_move(king_from: Position, king_to: Position) -> Optional[CastlingSide]:
    """A king moving two files sideways is castling. Anything else is not."""
    if king_from.rank != king_to.rank or abs(king_to.file - king_from.file) != 2:
        return None
    return (
        CastlingSide.KING_SIDE
        if king_to.file > king_from.file
        else CastlingSide.QUEEN_SIDE
    )


def squares_between_on_rank(from_square: Position, to_square: Position) -> list[Position]:
    """
    Find the squares in between the two squares specified that are on the same rank

    Needed for checking if you can still castle (they must all be empty)
    """
    if from_square.rank != to_square.rank:
        raise ValueError(
            f"squares_between_on_rank requires both squares to lie on the same rank. \n from: {from_square}\n to:{to_square}"
        )
    low, high = sorted((from_square.file, to_square.file))
    return [Position(file, from_square.rank) for file in range(low + 1, high)]


def castling_rook(king: Piece, side: CastlingSide, board: Board) -> Optional[Piece]:
    """The unmoved rook of the king's color in the corner on the king's rank, if it is still there."""
    rook = board.piece_at(Position(side.value, king.position.rank))
    if rook is None:
        return None
    if rook.type != PieceType.ROOK or rook.color != king.color or rook.has_moved:
        return None
    return rook


def can_castle(king: Piece, side: CastlingSide, board: Board) -> bool:
    """
    **you are allowed to castle if**

    * Neither the king nor the rook have moved.
    * All squares in between the king and the rook are empty.
    * None of the squares the king stands on, crosses or lands on is under attack (so no castling out of, through or into check).
    """
    if king.type != PieceType.KING or king.has_moved:
        return False

    rook = castling_rook(king, side, board)
    if rook is None:
        return False

    squares = castling_squares(king, side)
    if not squares.king_to.is_within_bounds() or board.is_occupied(squares.king_to):
        return False

    path = squares_between_on_rank(king.position, rook.position)
    if any(board.is_occupied(square) for square in path):
        return False

    return not is_any_attacked(squares.king_path, king.color.opponent, board)


def castling_destinations(king: Piece, board: Board) -> set[Position]:
    return {
        castling_squares(king, side).king_to
        for side in CastlingSide
        if can_castle(king, side, board)
    }
