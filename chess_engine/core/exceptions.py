"""
Custom exceptions raised by the domain layer.

Every rejection is a typed, recoverable error: a UI or a test can catch the specific subclass (or look at `reason`)
to give precise feedback. Nothing in here should ever take the process down.
"""

from enum import StrEnum


class IllegalMoveReason(StrEnum):
    NO_PIECE_AT_SOURCE = "no piece at source"
    WRONG_PLAYERS_TURN = "wrong player's turn"
    ILLEGAL_GEOMETRY = "illegal geometry"
    FRIENDLY_CAPTURE = "friendly capture"
    SELF_CHECK = "self check"


class ChessError(Exception):
    """Base class, so callers can catch anything the engine raises in one go."""


# -- COORDINATES --
class OutOfRangeError(ChessError, ValueError):
    """Coordinate outside of the board. A programming error at the boundary, not a gameplay error."""


class InvalidSquareNameError(OutOfRangeError):
    """Text like 'z9' that cannot be resolved into a square."""


# -- BOARD / GAME STATE --
class BoardStateError(ChessError):
    """The board does not describe a well-formed game (ex. missing king)."""


class GameStateError(ChessError):
    """Operation not allowed in the current state of the game."""


class GameAlreadyOverError(GameStateError):
    """Checkmate and stalemate are terminal: no more moves are accepted."""


# -- MOVE LEGALITY --
class IllegalMoveError(ChessError):
    reason: IllegalMoveReason

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoPieceAtSourceError(IllegalMoveError):
    reason = IllegalMoveReason.NO_PIECE_AT_SOURCE


class WrongPlayersTurnError(IllegalMoveError):
    reason = IllegalMoveReason.WRONG_PLAYERS_TURN


class IllegalGeometryError(IllegalMoveError):
    reason = IllegalMoveReason.ILLEGAL_GEOMETRY


class FriendlyCaptureError(IllegalMoveError):
    reason = IllegalMoveReason.FRIENDLY_CAPTURE


class SelfCheckError(IllegalMoveError):
    reason = IllegalMoveReason.SELF_CHECK
