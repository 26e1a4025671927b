"""Checkmate / stalemate detection for the side about to move."""

from typing import Optional

from src.chess.board import Board
from src.chess.check import is_in_check
from src.chess.generator import generate_moves
from src.chess.moves import MoveRecord
from src.core.shared_types import Color


def has_legal_move(
    color: Color, board: Board, last_move: Optional[MoveRecord] = None
) -> bool:
    """Stops at the first piece that can move"""
    return any(
        generate_moves(piece, board, last_move) for piece in board.pieces_of(color)
    )


def is_checkmate(
    color: Color, board: Board, last_move: Optional[MoveRecord] = None
) -> bool:
    return is_in_check(color, board) and not has_legal_move(color, board, last_move)


def is_stalemate(
    color: Color, board: Board, last_move: Optional[MoveRecord] = None
) -> bool:
    return not is_in_check(color, board) and not has_legal_move(
        color, board, last_move
    )
