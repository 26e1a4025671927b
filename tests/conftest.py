"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/helpers required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.clock import TickCallback
from src.chess.game import Game
from src.chess.pieces import Piece
from src.chess.position import Position

BoardFactory = Callable[..., Board]


sq = Position.from_algebraic


class FakeTicker:
    """Stand-in for the threaded ClockTicker: tests fire the ticks themselves."""

    def __init__(self, interval: float = 1.0) -> None:
        self.interval = interval
        self.callback: TickCallback | None = None
        self.start_count = 0
        self.stop_count = 0

    @property
    def is_running(self) -> bool:
        return self.callback is not None

    def start(self, callback: TickCallback) -> None:
        self.callback = callback
        self.start_count += 1

    def stop(self) -> None:
        self.callback = None
        self.stop_count += 1

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self.callback is None:
                return
            self.callback()


@pytest.fixture
def make_board() -> BoardFactory:
    """
    Call the inner function with "<symbol><square>" strings. Upper case: white, lower case: black.
    ex) make_board("Ke1", "Ra1", "ke8") --> white king e1, white rook a1, black king e8

    Pieces listed in `moved` get has_moved=True.
    """

    def _create_board(*placements: str, moved: tuple[str, ...] = ()) -> Board:
        return Board.from_pieces(
            Piece.from_symbol(placement[0], placement[1:], has_moved=placement in moved)
            for placement in placements
        )

    return _create_board


@pytest.fixture
def fake_ticker() -> FakeTicker:
    return FakeTicker()


@pytest.fixture
def game(fake_ticker: FakeTicker) -> Game:
    """A started game (10 minutes per side) whose clock only ticks when the test says so."""
    new_game = Game(ticker_factory=lambda _interval: fake_ticker)
    new_game.start()
    return new_game


@pytest.fixture
def play() -> Callable[[Game, str, str], None]:
    """Select + move in one call: play(game, "e2", "e4"). Fails the test if the Game rejects it."""

    def _play(game: Game, from_square: str, to_square: str) -> None:
        game.select_square(sq(from_square))
        outcome = game.attempt_move(sq(to_square))
        assert not outcome.is_rejection, f"{from_square}-{to_square} rejected: {outcome}"

    return _play
