"""The Game board: which piece stands where. Lookups only, every change gives a new Board."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from src.chess.pieces import Piece
from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.exceptions import BoardError
from src.core.shared_types import Color, PieceType

BACK_RANK_ORDER: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True)
class Board:
    pieces: tuple[Piece, ...]
    _by_position: dict[Position, Piece] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        by_position: dict[Position, Piece] = {}
        for piece in self.pieces:
            if piece.position in by_position:
                raise BoardError(
                    f"Two pieces on {piece.position}: {by_position[piece.position]} and {piece}"
                )
            by_position[piece.position] = piece
        # frozen dataclass: the lookup table is derived once, right here
        object.__setattr__(self, "_by_position", by_position)

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> Self:
        return cls(tuple(pieces))

    @classmethod
    def starting_position(cls) -> Self:
        """
        Standard arrangement of the 32 pieces.
        * pawns fill the 2nd (white) and 7th (black) rank
        * back ranks read rook-knight-bishop-queen-king-bishop-knight-rook from the a-file to the h-file
        """
        pieces: list[Piece] = []
        for file in range(BOARD_DIMENSIONS[0]):
            pieces.append(Piece(PieceType.PAWN, Color.WHITE, Position(file, 1)))
            pieces.append(
                Piece(
                    PieceType.PAWN,
                    Color.BLACK,
                    Position(file, BOARD_DIMENSIONS[1] - 2),
                )
            )
        for file, piece_type in enumerate(BACK_RANK_ORDER):
            pieces.append(Piece(piece_type, Color.WHITE, Position(file, 0)))
            pieces.append(
                Piece(piece_type, Color.BLACK, Position(file, BOARD_DIMENSIONS[1] - 1))
            )
        return cls(tuple(pieces))

    # --- LOOKUPS ---
    def piece_at(self, position: Position) -> Optional[Piece]:
        return self._by_position.get(position)

    def is_occupied(self, position: Position) -> bool:
        return position in self._by_position

    def is_occupied_by(self, position: Position, color: Color) -> bool:
        piece = self.piece_at(position)
        return piece is not None and piece.color == color

    def pieces_of(self, color: Color) -> list[Piece]:
        return [piece for piece in self.pieces if piece.color == color]

    def find_king(self, color: Color) -> Optional[Piece]:
        """None only happens on hand-made boards: a real game always has both kings."""
        return next(
            (
                piece
                for piece in self.pieces
                if piece.type == PieceType.KING and piece.color == color
            ),
            None,
        )

    # --- DERIVED BOARDS ---
    def without(self, position: Position) -> Self:
        """A copy with the square emptied (no-op if it was empty already)"""
        return type(self)(
            tuple(piece for piece in self.pieces if piece.position != position)
        )

    def replacing(self, old: Piece, new: Piece) -> Self:
        """Swap one piece for another (moved / promoted) version of it. Keeps the ordering of the pieces."""
        return type(self)(
            tuple(new if piece == old else piece for piece in self.pieces)
        )

    def with_piece(self, piece: Piece) -> Self:
        return type(self)(self.pieces + (piece,))

    def __len__(self) -> int:
        return len(self.pieces)
