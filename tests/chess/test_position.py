"""Unit tests for /src/chess/position.py"""

from string import ascii_lowercase

import pytest

from src.chess.position import BOARD_DIMENSIONS, Position


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 0, rank 0, etc."""
    position = Position.from_algebraic(notation)
    assert position.file == file
    assert position.rank == rank


@pytest.mark.parametrize(
    "file, rank, notation",
    [(0, 0, "a1"), (4, 3, "e4"), (7, 7, "h8"), (3, 6, "d7")],
)
def test_to_algebraic_notation(file: int, rank: int, notation: str) -> None:
    """Test the reverse, so the square on the 1st file and 1st rank should be denoted as a1"""
    assert Position(file, rank).to_algebraic() == notation


def test_position_within_bounds() -> None:
    """happy case: every square of the board"""
    for file in range(BOARD_DIMENSIONS[0]):
        for rank in range(BOARD_DIMENSIONS[1]):
            assert Position(file, rank).is_within_bounds()


@pytest.mark.parametrize("file, rank", [(8, 0), (0, 8), (-1, 3), (3, -1), (8, 8)])
def test_position_out_of_bounds(file: int, rank: int) -> None:
    assert not Position(file, rank).is_within_bounds()


def test_offset() -> None:
    assert Position.from_algebraic("e4").offset((1, 2)) == Position.from_algebraic("f6")
    assert Position.from_algebraic("a1").offset((-1, 0)) == Position(-1, 0)


def test_positions_are_values() -> None:
    """No identity beyond the coordinates: usable as dict keys / set members"""
    assert Position(2, 3) == Position(2, 3)
    assert len({Position(2, 3), Position(2, 3), Position(3, 2)}) == 2
