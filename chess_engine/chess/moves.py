"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the movement rule for each piece type.
Each rule is a predicate: "could the piece on `from_square` go to `to_square` given the current occupancy?"
It ignores whose turn it is, and whether the move leaves your own king in check.


Legality is checked later by GameState
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from chess_engine.chess.pieces import Color, Piece, PieceType
from chess_engine.chess.square import ALL_SQUARES, Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...
    def locate_color(self, color: Color) -> list[Square]: ...
    def find_king(self, color: Color) -> Square: ...


Vector = tuple[int, int]  # (delta rank, delta file)


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g1f3": (knight) moves from g1 to f3
        """
        return cls(Square.from_algebraic(uci[:2]), Square.from_algebraic(uci[2:4]))

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


# White moves UP the board (towards rank 7), Black moves DOWN the board
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}


def _delta(from_square: Square, to_square: Square) -> Vector:
    return (to_square.rank - from_square.rank, to_square.file - from_square.file)


def _is_empty_or_opponent(square: Square, player_color: Color, board: Board) -> bool:
    target = board.piece_at(square)
    return target is None or target.color != player_color


# -- PATH CLEARANCE --
def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares strictly in between two squares on the same rank, file or diagonal.

    Adjacent squares have nothing in between. Anything not lined up is a programming error.
    """
    d_rank, d_file = _delta(from_square, to_square)
    if d_rank == 0 and d_file == 0:
        raise ValueError(f"squares_between needs two different squares, got {from_square} twice")
    if not (d_rank == 0 or d_file == 0 or abs(d_rank) == abs(d_file)):
        raise ValueError(
            f"squares_between requires both squares to be on a line or a diagonal. \n from: {from_square}\n to:{to_square}"
        )

    step_rank = (d_rank > 0) - (d_rank < 0)
    step_file = (d_file > 0) - (d_file < 0)
    num_steps = max(abs(d_rank), abs(d_file))
    return [
        Square.from_coords(
            from_square.rank + step * step_rank, from_square.file + step * step_file
        )
        for step in range(1, num_steps)
    ]


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    return all(board.is_empty(square) for square in squares_between(from_square, to_square))


# --- LINE OF SIGHT (shared by moving and attacking) ---
def _sees_diagonally(from_square: Square, to_square: Square, board: Board) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    d_rank, d_file = _delta(from_square, to_square)
    if d_rank == 0 or abs(d_rank) != abs(d_file):
        return False
    return is_path_clear(from_square, to_square, board)


def _sees_straight(from_square: Square, to_square: Square, board: Board) -> bool:
    """Rooks move either horizontally or vertically"""
    d_rank, d_file = _delta(from_square, to_square)
    if (d_rank == 0) == (d_file == 0):
        # either both zero (same square), or neither (not on a line)
        return False
    return is_path_clear(from_square, to_square, board)


def _is_knight_jump(from_square: Square, to_square: Square) -> bool:
    """Knights always move such that (|delta_rank|, |delta_file|) is (1, 2) or (2, 1)"""
    d_rank, d_file = _delta(from_square, to_square)
    return {abs(d_rank), abs(d_file)} == {1, 2}


def _is_king_step(from_square: Square, to_square: Square) -> bool:
    d_rank, d_file = _delta(from_square, to_square)
    return max(abs(d_rank), abs(d_file)) == 1


def _is_pawn_capture_step(from_square: Square, to_square: Square, color: Color) -> bool:
    d_rank, d_file = _delta(from_square, to_square)
    return d_rank == PAWN_DIRECTION[color] and abs(d_file) == 1


# --- MOVEMENT RULES ---
def pawn_reachable(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - It can move by two in its first move (so when on its starting rank), if both squares are empty
    - takes diagonally forward, but only onto an opponent's piece

    NOTE: En passant is not part of these rules
    """
    pawn = board.piece_at(from_square)
    if pawn is None:
        return False

    direction = PAWN_DIRECTION[pawn.color]
    d_rank, d_file = _delta(from_square, to_square)

    if d_file == 0:
        # Pawn pushes
        if d_rank == direction:
            return board.is_empty(to_square)
        if d_rank == 2 * direction and from_square.rank == PAWN_START_RANK[pawn.color]:
            return board.is_empty(to_square) and is_path_clear(from_square, to_square, board)
        return False

    # pawns take diagonally:
    target = board.piece_at(to_square)
    return (
        _is_pawn_capture_step(from_square, to_square, pawn.color)
        and target is not None
        and target.color != pawn.color
    )


def knight_reachable(from_square: Square, to_square: Square, board: Board) -> bool:
    """Jumps: nothing in between to block it"""
    knight = board.piece_at(from_square)
    if knight is None:
        return False
    return _is_knight_jump(from_square, to_square) and _is_empty_or_opponent(
        to_square, knight.color, board
    )


def bishop_reachable(from_square: Square, to_square: Square, board: Board) -> bool:
    bishop = board.piece_at(from_square)
    if bishop is None:
        return False
    return _sees_diagonally(from_square, to_square, board) and _is_empty_or_opponent(
        to_square, bishop.color, board
    )


def rook_reachable(from_square: Square, to_square: Square, board: Board) -> bool:
    rook = board.piece_at(from_square)
    if rook is None:
        return False
    return _sees_straight(from_square, to_square, board) and _is_empty_or_opponent(
        to_square, rook.color, board
    )


def queen_reachable(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return bishop_reachable(from_square, to_square, board) or rook_reachable(
        from_square, to_square, board
    )


def king_reachable(from_square: Square, to_square: Square, board: Board) -> bool:
    """
    The king can move by a single square at the time.

    Castling is not part of these rules.
    """
    king = board.piece_at(from_square)
    if king is None:
        return False
    return _is_king_step(from_square, to_square) and _is_empty_or_opponent(
        to_square, king.color, board
    )


# -- STRATEGY PATTERN: MOVEMENT RULES ---
ReachableFn = Callable[[Square, Square, Board], bool]
MOVEMENT_RULES: dict[PieceType, ReachableFn] = {
    PieceType.PAWN: pawn_reachable,
    PieceType.KNIGHT: knight_reachable,
    PieceType.BISHOP: bishop_reachable,
    PieceType.ROOK: rook_reachable,
    PieceType.QUEEN: queen_reachable,
    PieceType.KING: king_reachable,
}


def reachable(from_square: Square, to_square: Square, board: Board) -> bool:
    """Geometry of whatever piece stands on `from_square`. An empty square reaches nothing."""
    piece = board.piece_at(from_square)
    if piece is None or from_square == to_square:
        return False
    movement_rule: ReachableFn = MOVEMENT_RULES[piece.type]
    return movement_rule(from_square, to_square, board)


def candidate_moves(square: Square, board: Board) -> list[Move]:
    """
    Every destination the piece on `square` can reach.
    Before knowing the set of legal moves, these candidates still need to be tested for self-check.
    """
    return [
        Move(from_square=square, to_square=target)
        for target in ALL_SQUARES
        if reachable(square, target, board)
    ]


# --- CAPTURING RULES / ATTACKING RULES ---
# NOTE: "attacking" a square ignores what stands on it. Your own piece on that square is still defended (attacked) by you.
def pawn_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    """
    Pawns move straight, but only ever attack diagonally forward.

    So a pawn does NOT attack the square right in front of it, even though it might move there.
    """
    return _is_pawn_capture_step(from_square, to_square, color)


def knight_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return _is_knight_jump(from_square, to_square)


def bishop_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return _sees_diagonally(from_square, to_square, board)


def rook_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return _sees_straight(from_square, to_square, board)


def queen_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return _sees_diagonally(from_square, to_square, board) or _sees_straight(
        from_square, to_square, board
    )


def king_attacks(from_square: Square, to_square: Square, color: Color, board: Board) -> bool:
    return _is_king_step(from_square, to_square)


# --- STRATEGY PATTERN: ATTACKING RULES ---
AttacksFn = Callable[[Square, Square, Color, Board], bool]
ATTACK_RULES: dict[PieceType, AttacksFn] = {
    PieceType.PAWN: pawn_attacks,
    PieceType.KNIGHT: knight_attacks,
    PieceType.BISHOP: bishop_attacks,
    PieceType.ROOK: rook_attacks,
    PieceType.QUEEN: queen_attacks,
    PieceType.KING: king_attacks,
}


def is_attacked(square: Square, by_color: Color, board: Board) -> bool:
    """Is there any piece of `by_color` that has the square in its line of sight?"""
    for attacker_square in board.locate_color(by_color):
        if attacker_square == square:
            continue
        attacker = board.piece_at(attacker_square)
        # for the type checker: locate_color only returns occupied squares
        assert attacker is not None
        attack_rule: AttacksFn = ATTACK_RULES[attacker.type]
        if attack_rule(attacker_square, square, by_color, board):
            return True
    return False


def is_in_check(color: Color, board: Board) -> bool:
    king_square = board.find_king(color)
    return is_attacked(king_square, color.opponent, board)
