"""Orchestration of communication from a presentation layer to the rules engine (and the reverse direction)."""

import logging
import threading
from typing import Optional

from chess_engine.api.models import (
    BoardResponse,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
)
from chess_engine.chess.game import GameState
from chess_engine.core.shared_types import Color

logger = logging.getLogger(__name__)


class ChessService:
    """
    Owns exactly one game.

    The engine does no locking of its own, so this is the single writer of its GameState: every call that touches the game
    runs under one lock, which makes each move one atomic unit of work.
    """

    def __init__(self, game: Optional[GameState] = None) -> None:
        self.game = game or GameState.new_game()
        self._lock = threading.Lock()

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt. Illegal moves raise (see chess_engine.core.exceptions) and leave the game untouched."""
        from_square, to_square = request.squares()
        with self._lock:
            outcome = self.game.propose_move(from_square, to_square)
        return MoveResponse.from_outcome(outcome)

    def undo(self) -> BoardResponse:
        with self._lock:
            record = self.game.undo_last_move()
            logger.debug("Service took back %s", record.move.to_uci())
            return BoardResponse.from_game(self.game)

    def board_snapshot(self) -> BoardResponse:
        """Everything a render step needs."""
        with self._lock:
            return BoardResponse.from_game(self.game)

    def legal_moves(self) -> LegalMovesResponse:
        with self._lock:
            moves = [] if self.game.is_over else self.game.legal_moves()
            return LegalMovesResponse(
                player_to_move=Color[self.game.current_player.name],
                legal_moves=sorted(move.to_uci() for move in moves),
            )

    def new_game(self) -> BoardResponse:
        """Throw the current game away and start over from the standard position."""
        with self._lock:
            self.game = GameState.new_game()
            logger.info("Started a new game")
            return BoardResponse.from_game(self.game)
