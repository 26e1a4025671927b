"""
Move log notation
---

<piece letter><from square><'x' when an opponent piece stood on the target square, '-' otherwise><to square>[=<letter of the promoted piece>]

ex) "e2-e4", "Ng1-f3", "Bc4xf7", "e5-d6" (en passant: the target square was empty), "Ke1-g1" (castling), "e7-e8=Q"

NOTE: positional, never disambiguated. This is not SAN: kept exactly like this so existing move logs stay comparable.
"""

from src.chess.moves import MoveRecord
from src.chess.pieces import NOTATION_LETTERS


def to_notation(record: MoveRecord) -> str:
    move = record.move
    letter = NOTATION_LETTERS[move.piece.type]
    separator = "x" if record.is_capture and not record.is_en_passant else "-"
    notation = f"{letter}{move.from_square.to_algebraic()}{separator}{move.to_square.to_algebraic()}"
    if record.promoted_to is not None:
        notation += f"={NOTATION_LETTERS[record.promoted_to]}"
    return notation
