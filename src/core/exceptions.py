"""
Exceptions shared by the layers.

The Game itself reports rejected moves through `Outcome` values. Exceptions are raised at the boundary
(the room service turns rejections into errors for its callers) and for inputs that can only come from a programming mistake.
"""


class GameError(Exception):
    """Root of everything the chess layers raise on purpose."""


class GameStateError(GameError):
    """The game is not in a state that allows the request (not started, already over, ...)"""


class IllegalMoveError(GameError):
    pass


class NotYourTurnError(GameError):
    pass


class PromotionError(GameError):
    """Missing or invalid piece type for a pawn reaching the last rank."""


class BoardError(GameError):
    """A board that breaks the one-piece-per-square rule."""


class InvalidRequestError(GameError):
    """Request payload that cannot be interpreted. Not a ValueError: raised inside a validator it propagates unwrapped."""


class RoomNotFoundError(GameError):
    pass
