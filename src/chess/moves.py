"""
Geometry/Base movement and capturing/attacking rules

Key idea: one lookup table holds the movement rule of every piece type. A rule is a set of vectors plus a flag
telling whether the piece slides along them (bishop, rook, queen) or takes a single step (knight, king).
Pawns are the odd ones out and get their own function.

Castling and the legality filter need the Check Oracle and live in castling.py / generator.py.
"""

from dataclasses import dataclass
from typing import Optional

from src.chess.board import Board
from src.chess.pieces import Piece, pawn_direction, pawn_start_rank
from src.chess.position import Position, Vector
from src.core.shared_types import PieceType


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made (the intent)"""

    from_square: Position
    to_square: Position
    piece: Piece


@dataclass(frozen=True)
class MoveRecord:
    """A committed move, with the extra information the move log and the en passant rule need."""

    move: Move
    captured_piece: Optional[Piece] = None
    is_en_passant: bool = False
    is_castling: bool = False
    promoted_to: Optional[PieceType] = None

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    @property
    def is_promotion(self) -> bool:
        return self.promoted_to is not None

    @property
    def is_double_pawn_push(self) -> bool:
        return (
            self.move.piece.type == PieceType.PAWN
            and abs(self.move.to_square.rank - self.move.from_square.rank) == 2
        )


@dataclass(frozen=True)
class MovementRule:
    vectors: tuple[Vector, ...]
    sliding: bool


DIAGONALS: tuple[Vector, ...] = ((1, 1), (-1, 1), (1, -1), (-1, -1))
STRAIGHTS: tuple[Vector, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
# Knights always move such that |delta_rank| + |delta_file| = 3
KNIGHT_JUMPS: tuple[Vector, ...] = (
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
)

# -- STRATEGY TABLE: MOVEMENT RULES ---
MOVEMENT_RULES: dict[PieceType, MovementRule] = {
    PieceType.KNIGHT: MovementRule(KNIGHT_JUMPS, sliding=False),
    PieceType.BISHOP: MovementRule(DIAGONALS, sliding=True),
    PieceType.ROOK: MovementRule(STRAIGHTS, sliding=True),
    PieceType.QUEEN: MovementRule(STRAIGHTS + DIAGONALS, sliding=True),
    PieceType.KING: MovementRule(STRAIGHTS + DIAGONALS, sliding=False),
}


# --- MOVEMENT RULES ---
def raycasting_moves(
    piece: Piece, board: Board, directions: tuple[Vector, ...]
) -> set[Position]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    targets: set[Position] = set()
    for direction in directions:
        target = piece.position.offset(direction)
        while target.is_within_bounds():
            occupant = board.piece_at(target)
            if occupant is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if occupant.color != piece.color:
                    targets.add(target)
                break
            targets.add(target)
            target = target.offset(direction)
    return targets


def single_step_moves(
    piece: Piece, board: Board, deltas: tuple[Vector, ...]
) -> set[Position]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just take a single step along a direction"""
    return {
        target
        for target in (piece.position.offset(delta) for delta in deltas)
        if target.is_within_bounds() and not board.is_occupied_by(target, piece.color)
    }


def pawn_attacks(piece: Piece) -> set[Position]:
    """The two diagonal squares in front of the pawn, whether something stands there or not"""
    forward = pawn_direction(piece.color)
    return {
        target
        for target in (piece.position.offset((df, forward)) for df in (-1, 1))
        if target.is_within_bounds()
    }


def en_passant_target(piece: Piece, last_move: Optional[MoveRecord]) -> Optional[Position]:
    """
    The square this pawn may take en passant on, if any.

    Only right after the opponent pushed a pawn by two squares, ending up right next to this pawn.
    The target is the square that pawn skipped.
    """
    if last_move is None or not last_move.is_double_pawn_push:
        return None
    if last_move.move.piece.color == piece.color:
        return None

    landed_on = last_move.move.to_square
    is_adjacent = (
        landed_on.rank == piece.position.rank
        and abs(landed_on.file - piece.position.file) == 1
    )
    if not is_adjacent:
        return None
    return Position(landed_on.file, piece.position.rank + pawn_direction(piece.color))


def candidate_pawn_moves(
    piece: Piece, board: Board, last_move: Optional[MoveRecord], attack_only: bool
) -> set[Position]:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move (so when on their starting rank)
    - takes diagonally, including en passant

    NOTE: In attack-only mode the pushes are left out (they never threaten anything)
    while both diagonals are reported, occupied or not.
    """
    if attack_only:
        return pawn_attacks(piece)

    targets: set[Position] = set()
    forward = pawn_direction(piece.color)
    one_step = piece.position.offset((0, forward))
    if one_step.is_within_bounds() and not board.is_occupied(one_step):
        targets.add(one_step)
        two_steps = one_step.offset((0, forward))
        if piece.position.rank == pawn_start_rank(piece.color) and not board.is_occupied(
            two_steps
        ):
            targets.add(two_steps)

    for target in pawn_attacks(piece):
        if board.is_occupied_by(target, piece.color.opponent):
            targets.add(target)

    en_passant = en_passant_target(piece, last_move)
    if en_passant is not None and not board.is_occupied(en_passant):
        targets.add(en_passant)
    return targets


def candidate_moves(
    piece: Piece,
    board: Board,
    last_move: Optional[MoveRecord] = None,
    attack_only: bool = False,
) -> set[Position]:
    """
    Before knowing the set of legal moves, we use the movement table to find candidate (pseudo-legal) moves.
    NOTE: castling and the "don't leave your king in check" rule are added on top by the generator.
    """
    if piece.type == PieceType.PAWN:
        return candidate_pawn_moves(piece, board, last_move, attack_only)

    rule = MOVEMENT_RULES[piece.type]
    if rule.sliding:
        return raycasting_moves(piece, board, rule.vectors)
    return single_step_moves(piece, board, rule.vectors)


# -- EN PASSANT CAPTURES ---
def en_passant_capture_square(
    piece: Piece, to_square: Position, board: Board
) -> Optional[Position]:
    """
    A pawn moving diagonally onto an empty square can only be taking en passant.
    The pawn taken stands on the same file as the target square, on the rank the moving pawn started from.
    """
    if piece.type != PieceType.PAWN:
        return None
    moves_diagonally = to_square.file != piece.position.file
    if not moves_diagonally or board.is_occupied(to_square):
        return None
    return Position(to_square.file, piece.position.rank)


def simulate(board: Board, piece: Piece, to_square: Position) -> Board:
    """
    Scratch version of a move, used to test whether it leaves the own king attacked.
    Takes care of captures (including en passant). The castling rook is left alone: the king's squares are checked separately.
    """
    captured_square = en_passant_capture_square(piece, to_square, board) or to_square
    return board.without(captured_square).replacing(piece, piece.moved_to(to_square))
