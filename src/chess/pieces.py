"""Defines the chess pieces"""

from dataclasses import dataclass, replace
from typing import Self

from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.shared_types import Color, PieceType

SYMBOL_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_SYMBOL: dict[PieceType, str] = {
    value: key for key, value in SYMBOL_TO_PIECE.items()
}

# Letters used in the move log. Pawns don't get one.
NOTATION_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

PROMOTION_OPTIONS: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def pawn_direction(color: Color) -> int:
    """White moves UP the board, black moves DOWN"""
    return 1 if color == Color.WHITE else -1


def pawn_start_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_DIMENSIONS[1] - 2


def promotion_rank(color: Color) -> int:
    return BOARD_DIMENSIONS[1] - 1 if color == Color.WHITE else 0


@dataclass(frozen=True)
class Piece:
    """
    A piece standing on a given square.

    Frozen: moving a piece creates a new Piece, so a board used for "what if" checks can never alter one referenced elsewhere.
    """

    type: PieceType
    color: Color
    position: Position
    has_moved: bool = False

    @classmethod
    def from_symbol(cls, character: str, square: str, has_moved: bool = False) -> Self:
        """
        Convenience constructor: "K", "e1" is the white king on e1.
        lower case: Black pieces, upper case: White pieces
        """
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = SYMBOL_TO_PIECE[character.lower()]
        return cls(piece_type, color, Position.from_algebraic(square), has_moved)

    def to_symbol(self) -> str:
        symbol = PIECE_TO_SYMBOL[self.type]
        return symbol.upper() if self.color == Color.WHITE else symbol

    def moved_to(self, position: Position) -> Self:
        return replace(self, position=position, has_moved=True)

    def promoted_to(self, new_type: PieceType) -> Self:
        return replace(self, type=new_type, has_moved=True)
