"""
Orchestration of communication between the outside world (UI, transport relay) and the Game.

Every inbound move is played through the Game before anyone else gets to see it: the room never forwards a move
the rules engine did not accept. Rooms only live in memory.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    PieceResponse,
    ResignRequest,
)
from src.chess.applier import is_promotion
from src.chess.clock import ClockTicker, TickerFactory
from src.chess.game import Game, GameState
from src.chess.pieces import PROMOTION_OPTIONS
from src.chess.position import Position
from src.core.config import ClockConfig
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    PromotionError,
    RoomNotFoundError,
)
from src.core.shared_types import Color, Outcome

logger = logging.getLogger(__name__)


@dataclass
class Room:
    """One game, the two players, and whoever else is watching."""

    game: Game
    players: dict[Color, str]
    spectators: list[str] = field(default_factory=list)


class RoomService:
    """Orchestration of rooms: creation, joining, and validated moves."""

    def __init__(self, ticker_factory: Optional[TickerFactory] = ClockTicker) -> None:
        self._ticker_factory = ticker_factory
        self._rooms: dict[UUID, Room] = {}

    # -- Room logic ---
    def create_room(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game. The creator plays with the white pieces."""
        game = Game(
            clock_config=ClockConfig(minutes_per_side=request.minutes_per_side),
            ticker_factory=self._ticker_factory,
        )
        room = Room(game=game, players={Color.WHITE: request.player_name})
        game_id = uuid4()
        self._rooms[game_id] = room
        logger.info("Room %s created by %s", game_id, request.player_name)
        return self._create_game_response(game_id, room)

    def join_room(self, request: JoinGameRequest) -> GameResponse:
        """
        Second player requested to join a game.
        ---
        The first one to join gets the black pieces and the clocks start running. Anyone after that is a spectator.
        """
        room = self._fetch_room(request.game_id)

        if request.player_name in room.players.values():
            raise GameStateError(
                f"{request.player_name} already plays in game {request.game_id}."
            )

        if Color.BLACK not in room.players:
            room.players[Color.BLACK] = request.player_name
            room.game.start()
            logger.info("Room %s: %s joined, game started", request.game_id, request.player_name)
        else:
            room.spectators.append(request.player_name)
            logger.info("Room %s: %s is watching", request.game_id, request.player_name)

        return self._create_game_response(request.game_id, room)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        room = self._fetch_room(request.game_id)
        return self._create_game_response(request.game_id, room)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Where can the piece on the given square go? Only for the player whose turn it is."""
        room = self._fetch_room(request.game_id)
        color = self._assert_your_turn(room, request.player_name)

        outcome = room.game.select_square(Position.from_algebraic(request.square))
        self._raise_if_rejected(outcome)
        legal_moves = sorted(square.to_algebraic() for square in room.game.valid_moves)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=color,
            square=request.square,
            legal_moves=legal_moves,
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """
        Make a move attempt.
        ---
        The promotion piece must come with the move: a room never leaves a promotion pending.
        """
        room = self._fetch_room(request.game_id)
        self._assert_your_turn(room, request.player_name)
        game = room.game

        to_square = Position.from_algebraic(request.to_square)
        self._raise_if_rejected(game.select_square(Position.from_algebraic(request.from_square)))

        assert game.selected_piece is not None
        if to_square not in game.valid_moves:
            raise IllegalMoveError(
                f"{game.selected_piece.type} on {request.from_square} cannot go to {request.to_square}."
            )

        # Checked up front, so a failing promotion never gets stuck half-way in the Game
        if is_promotion(game.selected_piece, to_square):
            if request.promote_to not in PROMOTION_OPTIONS:
                raise PromotionError(
                    f"Pawn reaching {request.to_square} must promote to one of {', '.join(PROMOTION_OPTIONS)}."
                )
        elif request.promote_to is not None:
            raise PromotionError(
                f"Move {request.from_square}{request.to_square} is not a promotion."
            )

        outcome = game.attempt_move(to_square)
        self._raise_if_rejected(outcome)
        if outcome == Outcome.PROMOTION_PENDING:
            assert request.promote_to is not None
            self._raise_if_rejected(game.resolve_promotion(request.promote_to))

        return self._create_game_response(request.game_id, room)

    def resign(self, request: ResignRequest) -> GameResponse:
        """Only the player to move can resign (the Game always resigns for the side to move)."""
        room = self._fetch_room(request.game_id)
        self._assert_your_turn(room, request.player_name)
        self._raise_if_rejected(room.game.resign())
        return self._create_game_response(request.game_id, room)

    def delete_room(self, request: DeleteGameRequest) -> None:
        """Stop the clock and forget about the room."""
        room = self._rooms.pop(request.game_id, None)
        if room is None:
            raise RoomNotFoundError(f"Game with game_id={request.game_id} not found.")
        room.game.reset()

    # -- Internal helpers --
    def _fetch_room(self, game_id: UUID) -> Room:
        """Attempt to find the room and raise error if it fails."""
        room = self._rooms.get(game_id)
        if room is None:
            raise RoomNotFoundError(f"Game with {game_id=} not found.")
        return room

    def _assert_your_turn(self, room: Room, player: str) -> Color:
        """You must wait for your turn before calculating legal moves / making a move."""
        color = next((c for c, name in room.players.items() if name == player), None)
        if color is None:
            raise GameStateError(f"{player} does not play in this game.")
        side_to_move = room.game.state.side_to_move
        if color != side_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {room.players.get(side_to_move)} to make a move first."
            )
        return color

    def _raise_if_rejected(self, outcome: Outcome) -> None:
        """The Game reports rejections as values: at this boundary they become exceptions."""
        if not outcome.is_rejection:
            return
        if outcome == Outcome.WRONG_TURN:
            raise NotYourTurnError(f"Move rejected: {outcome}")
        if outcome in (Outcome.ILLEGAL_MOVE, Outcome.NO_SELECTION):
            raise IllegalMoveError(f"Move rejected: {outcome}")
        if outcome == Outcome.INVALID_PROMOTION_CHOICE:
            raise PromotionError(f"Move rejected: {outcome}")
        raise GameStateError(f"Move rejected: {outcome}")

    def _create_game_response(self, game_id: UUID, room: Room) -> GameResponse:
        """Convert the Game's current state to a GameResponse (for game with given ID.)"""
        state: GameState = room.game.state
        return GameResponse(
            game_id=game_id,
            players={color.value: name for color, name in room.players.items()},
            spectators=list(room.spectators),
            status=state.status,
            side_to_move=state.side_to_move,
            is_check=state.is_check,
            is_checkmate=state.is_checkmate,
            is_stalemate=state.is_stalemate,
            winner=state.winner,
            pieces=[
                PieceResponse(
                    type=piece.type,
                    color=piece.color,
                    square=piece.position.to_algebraic(),
                    has_moved=piece.has_moved,
                )
                for piece in state.board.pieces
            ],
            move_history=list(state.move_history),
            white_clock=state.white_clock,
            black_clock=state.black_clock,
        )
