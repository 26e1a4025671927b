"""
Move generation for a single piece
----

Combines the following:

1. candidate moves from the movement table (moves.py), en passant included
2. castling moves for an unmoved king (castling.py)
3. the legality filter: drop every move after which the own king would be attacked (check.py)

Steps 2. and 3. are skipped in attack-only mode. That mode is what the Check Oracle runs on, and skipping them is what
keeps "generate moves" and "is this square attacked" from calling each other forever.
"""

from typing import Optional

from src.chess.board import Board
from src.chess.castling import castling_destinations
from src.chess.check import is_attacked
from src.chess.moves import MoveRecord, candidate_moves, simulate
from src.chess.pieces import Piece
from src.chess.position import Position
from src.core.shared_types import PieceType


def generate_moves(
    piece: Piece,
    board: Board,
    last_move: Optional[MoveRecord] = None,
    attack_only: bool = False,
) -> set[Position]:
    """Destinations of `piece`. Legal moves by default, threatened squares when `attack_only`."""
    targets = candidate_moves(piece, board, last_move, attack_only)
    if attack_only:
        return targets

    if piece.type == PieceType.KING:
        targets |= castling_destinations(piece, board)

    return {
        target
        for target in targets
        if not is_putting_yourself_in_check(piece, target, board)
    }


def is_putting_yourself_in_check(piece: Piece, to_square: Position, board: Board) -> bool:
    """Return True if the move leaves (or puts) the own king in check

    plan:
    1. make the candidate move on a scratch board
    2. locate the own king (it might be the piece that just moved)
    3. determine if that square is attacked on the new board
    """
    scratch = simulate(board, piece, to_square)
    king = scratch.find_king(piece.color)
    if king is None:
        return False
    return is_attacked(king.position, piece.color.opponent, scratch)
