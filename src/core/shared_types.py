"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    NOT_STARTED = "not started"
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    FLAG_FALL = "flag fall"
    RESIGNED = "resigned"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def is_in_play(self) -> bool:
        return self in (Status.ONGOING, Status.CHECK)


TERMINAL_STATUSES: frozenset[Status] = frozenset(
    [Status.CHECKMATE, Status.STALEMATE, Status.FLAG_FALL, Status.RESIGNED]
)


class Outcome(StrEnum):
    """What happened to an inbound call on the Game. Rejections leave the GameState untouched."""

    ACCEPTED = "accepted"
    PROMOTION_PENDING = "promotion pending"
    ILLEGAL_MOVE = "illegal move"
    WRONG_TURN = "wrong turn"
    NO_SELECTION = "no selection"
    INVALID_PROMOTION_CHOICE = "invalid promotion choice"
    INVALID_CLOCK_SETTING = "invalid clock setting"
    ACTION_AFTER_TERMINAL = "action after terminal"
    NOT_STARTED = "not started"

    @property
    def is_rejection(self) -> bool:
        return self not in (Outcome.ACCEPTED, Outcome.PROMOTION_PENDING)


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
