"""
Committing a move to the board.

Works on any move the generator handed out: the legality of the move is not checked again here.
"""

from typing import Optional

from src.chess.board import Board
from src.chess.castling import castling_squares, side_of_castling_move
from src.chess.moves import Move, MoveRecord, en_passant_capture_square
from src.chess.pieces import PROMOTION_OPTIONS, Piece, promotion_rank
from src.chess.position import Position
from src.core.exceptions import PromotionError
from src.core.shared_types import PieceType


def is_promotion(piece: Piece, to_square: Position) -> bool:
    """check if the move is a pawn move that reaches the final rank (for its color)"""
    return piece.type == PieceType.PAWN and to_square.rank == promotion_rank(piece.color)


def apply_move(
    board: Board, move: Move, promote_to: Optional[PieceType] = None
) -> tuple[Board, MoveRecord]:
    """
    Play the move and return the new board + the record of what happened.
    ---

    1. Take the opponent's piece on the target square (or the pawn passed by, for en passant)
    2. Move the piece (it now has moved)
    3. King moving two files: also bring the rook over to the other side of the king
    4. Pawn on the last rank: replace it by the piece it promotes to
    """
    piece = move.piece
    if is_promotion(piece, move.to_square):
        if promote_to not in PROMOTION_OPTIONS:
            raise PromotionError(
                f"A pawn reaching {move.to_square} must promote to one of {', '.join(PROMOTION_OPTIONS)}. Got: {promote_to!r}"
            )
    elif promote_to is not None:
        raise PromotionError(f"Only a pawn reaching the last rank can promote. Move: {move}")

    # 1. captures
    captured_piece = board.piece_at(move.to_square)
    if captured_piece is not None and captured_piece.color == piece.color:
        captured_piece = None  # should never happen: the generator never targets own pieces
    en_passant_square = en_passant_capture_square(piece, move.to_square, board)
    if en_passant_square is not None:
        captured_piece = board.piece_at(en_passant_square)
    if captured_piece is not None:
        board = board.without(captured_piece.position)

    # 2. the move itself (+ promotion)
    moved = piece.moved_to(move.to_square)
    if promote_to is not None:
        moved = moved.promoted_to(promote_to)
    board = board.replacing(piece, moved)

    # 3. castling: the rook jumps over
    is_castling = False
    castling_side = (
        side_of_castling_move(move.from_square, move.to_square)
        if piece.type == PieceType.KING
        else None
    )
    if castling_side is not None:
        squares = castling_squares(piece, castling_side)
        rook = board.piece_at(squares.rook_from)
        if rook is not None:
            board = board.replacing(rook, rook.moved_to(squares.rook_to))
            is_castling = True

    record = MoveRecord(
        move=move,
        captured_piece=captured_piece,
        is_en_passant=en_passant_square is not None and captured_piece is not None,
        is_castling=is_castling,
        promoted_to=promote_to,
    )
    return board, record
