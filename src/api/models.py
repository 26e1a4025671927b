"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.position import BOARD_DIMENSIONS, FILE_NAMES
from src.core.config import DEFAULT_MINUTES_PER_SIDE
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType, Status

PieceColor = str
PlayerName = str


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False

    file_character, rank_character = value[0], value[1]
    if file_character not in FILE_NAMES[: BOARD_DIMENSIONS[0]]:
        return False
    if not rank_character.isdecimal():
        return False
    return 1 <= int(rank_character) <= BOARD_DIMENSIONS[1]


def _validate_square(value: str) -> str:
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    minutes_per_side: int = DEFAULT_MINUTES_PER_SIDE


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: str
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    from_square: str
    to_square: str
    promote_to: Optional[PieceType] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class ResignRequest(BaseModel):
    game_id: UUID
    player_name: str


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    type: PieceType
    color: Color
    square: str
    has_moved: bool


class GameResponse(BaseModel):
    game_id: UUID
    players: dict[PieceColor, PlayerName]
    spectators: list[PlayerName]
    status: Status
    side_to_move: Color
    is_check: bool
    is_checkmate: bool
    is_stalemate: bool
    winner: Optional[Color]
    pieces: list[PieceResponse]
    move_history: list[str]
    white_clock: int
    black_clock: int


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    color: Color
    square: str
    legal_moves: list[str]
