"""
Check Oracle: is a square attacked, is a king in check.

Runs the move generation in attack-only mode. That mode never looks at castling and never filters for legality,
so asking "is this square attacked" can never loop back into itself.
"""

from src.chess.board import Board
from src.chess.moves import candidate_moves
from src.chess.position import Position
from src.core.shared_types import Color


def attacked_squares(by_color: Color, board: Board) -> set[Position]:
    """Every square threatened by at least one piece of `by_color`."""
    squares: set[Position] = set()
    for piece in board.pieces_of(by_color):
        squares |= candidate_moves(piece, board, attack_only=True)
    return squares


def is_attacked(square: Position, by_color: Color, board: Board) -> bool:
    return any(
        square in candidate_moves(piece, board, attack_only=True)
        for piece in board.pieces_of(by_color)
    )


def is_any_attacked(squares: list[Position], by_color: Color, board: Board) -> bool:
    threatened = attacked_squares(by_color, board)
    return any(square in threatened for square in squares)


def is_in_check(color: Color, board: Board) -> bool:
    """The king of `color` is attacked by the other side. A board without that king is never in check."""
    king = board.find_king(color)
    if king is None:
        return False
    return is_attacked(king.position, color.opponent, board)
