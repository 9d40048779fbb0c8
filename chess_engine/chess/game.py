"""
The GameState is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the rules required to play a turn -->
validate a proposed move, commit it, and report the resulting check / checkmate / stalemate status.

It is the only thing that mutates a live Board once a game is in progress.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from chess_engine.chess.board import Board
from chess_engine.chess.moves import Move, candidate_moves, is_in_check, reachable
from chess_engine.chess.pieces import Color, Piece, PieceType
from chess_engine.chess.square import Square
from chess_engine.core.exceptions import (
    BoardStateError,
    FriendlyCaptureError,
    GameAlreadyOverError,
    GameStateError,
    IllegalGeometryError,
    IllegalMoveError,
    NoPieceAtSourceError,
    SelfCheckError,
    WrongPlayersTurnError,
)

logger = logging.getLogger(__name__)

MINOR_PIECES = (PieceType.BISHOP, PieceType.KNIGHT)


class Status(Enum):
    IN_PROGRESS = auto()
    CHECKMATE = auto()
    STALEMATE = auto()

    @property
    def is_terminal(self) -> bool:
        return self != Status.IN_PROGRESS


@dataclass(frozen=True)
class MoveRecord:
    """One entry of the move history. Holds enough to take the move back."""

    move: Move
    piece: Piece
    captured: Optional[Piece]
    status: Status
    in_check: bool


@dataclass(frozen=True)
class MoveOutcome:
    """Status of the position after the move, from the perspective of the player now to move."""

    move: Move
    status: Status
    in_check: bool
    player_to_move: Color
    captured: Optional[Piece] = None

    @property
    def winner(self) -> Optional[Color]:
        if self.status != Status.CHECKMATE:
            return None
        # the player now to move just got mated
        return self.player_to_move.opponent


@dataclass
class GameState:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_player: Color = Color.WHITE
    history: list[MoveRecord] = field(default_factory=list)
    status: Status = Status.IN_PROGRESS

    def __post_init__(self) -> None:
        self.board.validate()

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, White to move."""
        return cls(board=Board.standard_initial())

    @classmethod
    def from_board(cls, board: Board, to_move: Color = Color.WHITE) -> Self:
        """
        Start from a custom position.
        ---

        * Exactly one king of each color must be on the board.
        * The player NOT to move cannot be in check (they would have just left their king hanging).
        * If the position is already over (mate / stalemate), the status says so straight away.
        """
        # the game owns its board: later changes to the caller's board do not leak in
        game = cls(board=board.copy(), current_player=to_move)
        if is_in_check(to_move.opponent, game.board):
            raise BoardStateError(
                f"{to_move.opponent.name.lower()} is in check while it is {to_move.name.lower()}'s turn."
            )
        game.status = game._evaluate_status(to_move)
        return game

    @property
    def winner(self) -> Optional[Color]:
        """
        Only defined for checkmate.
        Given we know it is checkmate, the player who is to move just got mated and the opponent must be the winner
        """
        if self.status != Status.CHECKMATE:
            return None
        return self.current_player.opponent

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    def is_check(self) -> bool:
        """Is the player to move currently in check?"""
        return is_in_check(self.current_player, self.board)

    def propose_move(self, from_square: Square, to_square: Square) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. make sure the game is (still) in progress
        2. validate the move against a scratch copy of the board. Raises an IllegalMoveError on rejection.
        3. update the board
        4. update the history of moves
        5. hand the turn to the opponent
        6. update game status (check / checkmate / stalemate)

        Rejections (1-2) never touch the board, the history, or the player to move.
        """
        self._assert_in_progress()
        move = Move(from_square, to_square)
        try:
            moving_piece = self._validate_move(move)
        except IllegalMoveError as exc:
            logger.debug("Rejected %s (%s): %s", move.to_uci(), exc.reason, exc.message)
            raise

        # Store move info before update
        captured = self._update_board(move)

        mover = self.current_player
        self.current_player = mover.opponent

        self._update_game_status()
        in_check = self.is_check()
        self.history.append(
            MoveRecord(
                move=move,
                piece=moving_piece,
                captured=captured,
                status=self.status,
                in_check=in_check,
            )
        )

        logger.info(
            "%s played %s%s. status: %s",
            mover.name.lower(),
            move.to_uci(),
            f" capturing {captured}" if captured else "",
            self.status.name.lower(),
        )
        return MoveOutcome(
            move=move,
            status=self.status,
            in_check=in_check,
            player_to_move=self.current_player,
            captured=captured,
        )

    def is_legal(self, from_square: Square, to_square: Square) -> bool:
        """Same checks as `propose_move`, as a predicate that never mutates anything."""
        if self.is_over:
            return False
        try:
            self._validate_move(Move(from_square, to_square))
        except IllegalMoveError:
            return False
        return True

    def legal_moves(self, color: Optional[Color] = None) -> list[Move]:
        """
        List of legal moves for the player with the 'color' pieces (default: the player to move)
        ----

        1. generate candidate moves, using the basic movement rules for all pieces
        2. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
        """
        color = color or self.current_player
        return [
            move
            for square in self.board.locate_color(color)
            for move in candidate_moves(square, self.board)
            if not self._is_putting_yourself_in_check(move, color)
        ]

    def undo_last_move(self) -> MoveRecord:
        """Take back the last move. The game is back in progress, with the player who made that move to move again."""
        if not self.history:
            raise GameStateError("There is no move to take back.")

        record = self.history.pop()
        self.board.remove(record.move.to_square)
        self.board.place(record.move.from_square, record.piece)
        if record.captured is not None:
            self.board.place(record.move.to_square, record.captured)

        self.current_player = record.piece.color
        self.status = Status.IN_PROGRESS
        logger.info("Took back %s", record.move.to_uci())
        return record

    def has_insufficient_material(self) -> bool:
        """
        Neither side could ever mate: bare kings, or a single knight / bishop against a bare king.

        NOTE Informational only. This does NOT end the game.
        """
        non_kings = [
            piece
            for piece in self.board.position.values()
            if piece.type != PieceType.KING
        ]
        if not non_kings:
            return True
        return len(non_kings) == 1 and non_kings[0].type in MINOR_PIECES

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.is_over:
            raise GameAlreadyOverError(
                f"Game is not in progress. status: {self.status.name.lower()}"
            )

    def _validate_move(self, move: Move) -> Piece:
        """
        Checks in order. First failure wins:

        1. there is a piece on the starting square
        2. it is that piece's turn
        3. the piece actually goes somewhere
        4. the target square does not hold a piece of your own
        5. the piece can actually get there (movement geometry)
        6. the move does not put (or leave) your own king in check

        Returns the moving piece.
        """
        from_square, to_square = move.from_square, move.to_square
        piece = self.board.piece_at(from_square)
        if piece is None:
            raise NoPieceAtSourceError(f"There is no piece on {from_square}.")

        if piece.color != self.current_player:
            raise WrongPlayersTurnError(
                f"It is not your turn. Waiting for {self.current_player.name.lower()} to make a move first."
            )

        if from_square == to_square:
            raise IllegalGeometryError(f"A {piece.type.name.lower()} cannot stay on {from_square}.")

        target = self.board.piece_at(to_square)
        if target is not None and target.color == piece.color:
            raise FriendlyCaptureError(
                f"Cannot capture your own {target.type.name.lower()} on {to_square}."
            )

        if not reachable(from_square, to_square, self.board):
            raise IllegalGeometryError(
                f"A {piece.type.name.lower()} cannot move from {from_square} to {to_square}."
            )

        if self._is_putting_yourself_in_check(move, piece.color):
            raise SelfCheckError(
                f"Moving {from_square} to {to_square} leaves your king in check."
            )
        return piece

    def _is_putting_yourself_in_check(self, move: Move, color: Color) -> bool:
        """Return True if the move puts you in check

        plan:
        1. Copy the board
        2. make the candidate move
        3. determine if king is in check on the new board
        """
        board = self.board.copy()
        _move_piece(board, move)
        return is_in_check(color, board)

    def _update_board(self, move: Move) -> Optional[Piece]:
        return _move_piece(self.board, move)

    def _update_game_status(self) -> None:
        """Performs checks to see if game has ended and changes status accordingly.

        NOTE At this point the turn player is the opponent of the player who made the move.
        """
        self.status = self._evaluate_status(self.current_player)
        if self.status.is_terminal:
            logger.info("Game over: %s", self.status.name.lower())

    def _evaluate_status(self, color: Color) -> Status:
        if self._has_legal_move(color):
            return Status.IN_PROGRESS
        if is_in_check(color, self.board):
            return Status.CHECKMATE
        return Status.STALEMATE

    def _has_legal_move(self, color: Color) -> bool:
        return any(
            not self._is_putting_yourself_in_check(move, color)
            for square in self.board.locate_color(color)
            for move in candidate_moves(square, self.board)
        )


def _move_piece(board: Board, move: Move) -> Optional[Piece]:
    """Update the position on the board. Returns whatever got captured."""
    piece_that_moved = board.remove(move.from_square)
    # for the type checker: only called for validated moves
    assert piece_that_moved is not None
    captured = board.remove(move.to_square)
    board.place(move.to_square, piece_that_moved)
    return captured
