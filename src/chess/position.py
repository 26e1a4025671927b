"""
A square on the board, as (file, rank) coordinates.

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)

FILE_NAMES = "abcdefgh"

Vector = tuple[int, int]


@dataclass(frozen=True)
class Position:
    """Zero-based: file 0 is the a-file, rank 0 is the first rank (white's back rank)."""

    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        file = ord(sq[0]) - ord("a")
        rank = int(sq[1]) - 1
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.file]}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def offset(self, vector: Vector) -> Position:
        df, dr = vector
        return Position(self.file + df, self.rank + dr)

    def __str__(self) -> str:
        return self.to_algebraic() if self.is_within_bounds() else repr(self)
