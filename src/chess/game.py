"""
The Game class is the entrypoint into the domain layer.
It is responsible for orchestrating all the business logic required to play a turn: selecting a piece, moving it,
promoting, resigning, and running the clocks. The resulting GameState is what presentation layers (or the room service) read.

Rejected calls do not raise: they return an `Outcome` and leave the GameState untouched.
"""

import logging
from dataclasses import dataclass, field, replace
from functools import partial
from threading import RLock
from typing import Callable, Optional, Self

from pydantic import ValidationError

from src.chess.applier import apply_move, is_promotion
from src.chess.board import Board
from src.chess.check import is_in_check
from src.chess.clock import ClockTicker, Ticker, TickerFactory
from src.chess.generator import generate_moves
from src.chess.moves import Move, MoveRecord
from src.chess.notation import to_notation
from src.chess.pieces import PROMOTION_OPTIONS, Piece
from src.chess.position import Position
from src.chess.terminal import is_checkmate, is_stalemate
from src.core.config import ClockConfig
from src.core.shared_types import Color, Outcome, PieceType, Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """Snapshot of a game. Every accepted call on the Game replaces it by a new one."""

    board: Board
    side_to_move: Color
    status: Status
    is_check: bool
    move_history: tuple[str, ...]
    white_clock: int
    black_clock: int
    winner: Optional[Color] = None
    last_move: Optional[MoveRecord] = None

    @classmethod
    def initial(cls, status: Status = Status.NOT_STARTED, seconds: int = 0) -> Self:
        return cls(
            board=Board.starting_position(),
            side_to_move=Color.WHITE,
            status=status,
            is_check=False,
            move_history=(),
            white_clock=seconds,
            black_clock=seconds,
        )

    @property
    def is_checkmate(self) -> bool:
        return self.status == Status.CHECKMATE

    @property
    def is_stalemate(self) -> bool:
        return self.status == Status.STALEMATE

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def clock(self, color: Color) -> int:
        return self.white_clock if color == Color.WHITE else self.black_clock


StateListener = Callable[[GameState], None]
MoveListener = Callable[[MoveRecord, str], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_state_changed: list[StateListener] = field(default_factory=list)
    on_move: list[MoveListener] = field(default_factory=list)


class Game:
    """
    Game session state machine
    ----

    NOT_STARTED --start()--> ONGOING <--> CHECK --> CHECKMATE | STALEMATE
                             ONGOING/CHECK --> FLAG_FALL (clock) | RESIGNED

    Terminal states only accept `reset()`, which brings the game back to NOT_STARTED.

    Calls and clock ticks are serialized by a lock: the ticker runs on its own thread.
    """

    def __init__(
        self,
        clock_config: Optional[ClockConfig] = None,
        ticker_factory: Optional[TickerFactory] = ClockTicker,
    ) -> None:
        self.clock_config = clock_config or ClockConfig()
        self.events = GameEvents()
        self._ticker_factory = ticker_factory
        self._ticker: Optional[Ticker] = None
        self._lock = RLock()
        # bumped on every start/reset so ticks of an older ticker get ignored
        self._epoch = 0
        self._state = GameState.initial()
        self.selected_piece: Optional[Piece] = None
        self.valid_moves: set[Position] = set()
        self.pending_promotion: Optional[Move] = None

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def winner(self) -> Optional[Color]:
        return self._state.winner

    # --- SESSION CONTROL ---
    def configure_clock(self, minutes_per_side: int) -> Outcome:
        """Takes effect at the next start(). Whole minutes only: anything else is rejected, the clock stays as it was."""
        with self._lock:
            if self._state.is_terminal:
                return self._reject(Outcome.ACTION_AFTER_TERMINAL, f"game is over ({self._state.status})")
            try:
                clock_config = ClockConfig(
                    minutes_per_side=minutes_per_side,
                    tick_interval_seconds=self.clock_config.tick_interval_seconds,
                )
            except ValidationError:
                return self._reject(
                    Outcome.INVALID_CLOCK_SETTING, f"cannot use {minutes_per_side!r} minutes per side"
                )
            self.clock_config = clock_config
            return Outcome.ACCEPTED

    def start(self) -> Outcome:
        """Fresh board, full clocks, white to move."""
        with self._lock:
            if self._state.is_terminal:
                return Outcome.ACTION_AFTER_TERMINAL
            self._stop_clock()
            self._epoch += 1
            self._clear_selection()
            self._state = GameState.initial(
                status=Status.ONGOING, seconds=self.clock_config.seconds_per_side
            )
            self._start_clock()
            logger.info(
                "Game started with %d minutes per side",
                self.clock_config.minutes_per_side,
            )
            self._emit_state()
            return Outcome.ACCEPTED

    def reset(self) -> Outcome:
        """Always accepted, also from a terminal state."""
        with self._lock:
            self._stop_clock()
            self._epoch += 1
            self._clear_selection()
            self._state = GameState.initial()
            logger.info("Game reset")
            self._emit_state()
            return Outcome.ACCEPTED

    # --- PLAYING ---
    def select_piece(self, piece: Optional[Piece]) -> Outcome:
        """
        Select the piece to move and compute where it can go (`valid_moves`).
        Passing None clears the selection. A rejected selection also clears it.
        """
        with self._lock:
            if (rejection := self._reject_unless_in_play()) is not None:
                return rejection
            if self.pending_promotion is not None:
                return self._reject(Outcome.WRONG_TURN, "a promotion is pending")

            if piece is None:
                self._clear_selection()
                return Outcome.ACCEPTED

            board = self._state.board
            if board.piece_at(piece.position) != piece:
                self._clear_selection()
                return self._reject(Outcome.NO_SELECTION, f"{piece} is not on the board")
            if piece.color != self._state.side_to_move:
                self._clear_selection()
                return self._reject(
                    Outcome.WRONG_TURN, f"{piece.color} cannot move, {self._state.side_to_move} to move"
                )

            self.selected_piece = piece
            self.valid_moves = generate_moves(piece, board, self._state.last_move)
            return Outcome.ACCEPTED

    def select_square(self, position: Position) -> Outcome:
        """Convenience for callers that only know squares (transports, the room service)"""
        with self._lock:
            if (rejection := self._reject_unless_in_play()) is not None:
                return rejection
            if self.pending_promotion is not None:
                return self._reject(Outcome.WRONG_TURN, "a promotion is pending")
            piece = self._state.board.piece_at(position)
            if piece is None:
                self._clear_selection()
                return self._reject(Outcome.NO_SELECTION, f"no piece on {position}")
            return self.select_piece(piece)

    def attempt_move(self, destination: Position) -> Outcome:
        """
        Attempt to move the selected piece
        -----

        A pawn reaching the last rank does not get committed yet: the move waits for `resolve_promotion()`.
        """
        with self._lock:
            if (rejection := self._reject_unless_in_play()) is not None:
                return rejection
            if self.pending_promotion is not None:
                return self._reject(Outcome.WRONG_TURN, "a promotion is pending")
            if self.selected_piece is None:
                return self._reject(Outcome.NO_SELECTION, "no piece selected")
            if destination not in self.valid_moves:
                return self._reject(
                    Outcome.ILLEGAL_MOVE,
                    f"{self.selected_piece.type} on {self.selected_piece.position} cannot go to {destination}",
                )

            move = Move(self.selected_piece.position, destination, self.selected_piece)
            if is_promotion(move.piece, destination):
                self.pending_promotion = move
                logger.debug("Promotion pending on %s", destination)
                return Outcome.PROMOTION_PENDING

            self._commit(move)
            return Outcome.ACCEPTED

    def resolve_promotion(self, piece_type: PieceType | str) -> Outcome:
        with self._lock:
            if (rejection := self._reject_unless_in_play()) is not None:
                return rejection
            if self.pending_promotion is None:
                return self._reject(Outcome.NO_SELECTION, "no promotion pending")
            if piece_type not in PROMOTION_OPTIONS:
                return self._reject(
                    Outcome.INVALID_PROMOTION_CHOICE, f"cannot promote to {piece_type!r}"
                )

            self._commit(self.pending_promotion, PieceType(piece_type))
            return Outcome.ACCEPTED

    def resign(self) -> Outcome:
        """The side to move gives up: the opponent wins."""
        with self._lock:
            if (rejection := self._reject_unless_in_play()) is not None:
                return rejection
            resigning = self._state.side_to_move
            self._clear_selection()
            self._finish(Status.RESIGNED, winner=resigning.opponent)
            self._emit_state()
            return Outcome.ACCEPTED

    def tick(self) -> Outcome:
        """One second passes on the clock of the side to move. Running out of time loses the game."""
        with self._lock:
            if (rejection := self._reject_unless_in_play()) is not None:
                return rejection
            color = self._state.side_to_move
            remaining = max(0, self._state.clock(color) - 1)
            if color == Color.WHITE:
                self._state = replace(self._state, white_clock=remaining)
            else:
                self._state = replace(self._state, black_clock=remaining)

            if remaining == 0:
                self._clear_selection()
                self._finish(Status.FLAG_FALL, winner=color.opponent)
            self._emit_state()
            return Outcome.ACCEPTED

    # -- PRIVATE HELPERS ---
    def _commit(self, move: Move, promote_to: Optional[PieceType] = None) -> None:
        """
        5. update the board (the applier takes care of captures, castling, en passant, promotion)
        6. update the move log
        7. hand the turn over
        8. update game status for the player now to move
        """
        board, record = apply_move(self._state.board, move, promote_to)
        notation = to_notation(record)
        next_color = self._state.side_to_move.opponent
        in_check = is_in_check(next_color, board)

        if is_checkmate(next_color, board, record):
            status = Status.CHECKMATE
        elif is_stalemate(next_color, board, record):
            status = Status.STALEMATE
        elif in_check:
            status = Status.CHECK
        else:
            status = Status.ONGOING

        self._state = replace(
            self._state,
            board=board,
            side_to_move=next_color,
            is_check=in_check,
            move_history=self._state.move_history + (notation,),
            last_move=record,
        )
        self._clear_selection()
        logger.debug("Move %s played, %s to move", notation, next_color)

        if status.is_terminal:
            winner = move.piece.color if status == Status.CHECKMATE else None
            self._finish(status, winner=winner)
        else:
            self._state = replace(self._state, status=status)

        for listener in self.events.on_move:
            listener(record, notation)
        self._emit_state()

    def _finish(self, status: Status, winner: Optional[Color]) -> None:
        self._stop_clock()
        self._state = replace(self._state, status=status, winner=winner)
        logger.info("Game over: %s, winner: %s", status, winner or "none")

    def _reject_unless_in_play(self) -> Optional[Outcome]:
        if self._state.is_terminal:
            return self._reject(Outcome.ACTION_AFTER_TERMINAL, f"game is over ({self._state.status})")
        if self._state.status == Status.NOT_STARTED:
            return self._reject(Outcome.NOT_STARTED, "game has not started")
        return None

    def _reject(self, outcome: Outcome, reason: str) -> Outcome:
        logger.debug("Rejected (%s): %s", outcome, reason)
        return outcome

    def _clear_selection(self) -> None:
        self.selected_piece = None
        self.valid_moves = set()
        self.pending_promotion = None

    def _start_clock(self) -> None:
        if self._ticker_factory is None:
            return
        self._ticker = self._ticker_factory(self.clock_config.tick_interval_seconds)
        self._ticker.start(partial(self._on_tick, self._epoch))

    def _stop_clock(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
            self._ticker = None

    def _on_tick(self, epoch: int) -> None:
        with self._lock:
            if epoch != self._epoch:
                return
            self.tick()

    def _emit_state(self) -> None:
        for listener in self.events.on_state_changed:
            listener(self._state)
