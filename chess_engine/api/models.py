"""Requests and Response models

A presentation layer (CLI, GUI, web) talks to the engine through these. Text gets resolved into squares here,
so the engine itself only ever sees Square values.
"""

from typing import Optional, Self

from pydantic import BaseModel, field_validator

from chess_engine.chess.board import Board
from chess_engine.chess.game import GameState, MoveOutcome
from chess_engine.chess.pieces import Piece
from chess_engine.chess.square import Square
from chess_engine.core.exceptions import InvalidSquareNameError
from chess_engine.core.shared_types import Color, PieceType, Status

SquareName = str


def _piece_model(piece: Optional[Piece]) -> Optional["PieceModel"]:
    if piece is None:
        return None
    return PieceModel(type=PieceType[piece.type.name], color=Color[piece.color.name])


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        try:
            return Square.from_algebraic(value).to_algebraic()
        except InvalidSquareNameError as exc:
            # pydantic wraps ValueError into a ValidationError
            raise ValueError(str(exc)) from exc

    @classmethod
    def from_text(cls, text: str) -> Self:
        """'e2 e4', 'e2-e4' or 'e2e4'"""
        cleaned = text.strip().replace("-", " ")
        parts = cleaned.split() if " " in cleaned else [cleaned[:2], cleaned[2:]]
        if len(parts) != 2:
            raise ValueError(f"Cannot interpret {text!r} as a move. Expected ex. 'e2 e4'.")
        return cls(from_square=parts[0], to_square=parts[1])

    def squares(self) -> tuple[Square, Square]:
        return Square.from_algebraic(self.from_square), Square.from_algebraic(self.to_square)


# --- RESPONSE MODELS ---
class PieceModel(BaseModel):
    type: PieceType
    color: Color


class MoveResponse(BaseModel):
    move: str
    status: Status
    in_check: bool
    player_to_move: Color
    winner: Optional[Color]
    captured: Optional[PieceModel]

    @classmethod
    def from_outcome(cls, outcome: MoveOutcome) -> Self:
        return cls(
            move=outcome.move.to_uci(),
            status=Status[outcome.status.name],
            in_check=outcome.in_check,
            player_to_move=Color[outcome.player_to_move.name],
            winner=Color[outcome.winner.name] if outcome.winner else None,
            captured=_piece_model(outcome.captured),
        )


class BoardResponse(BaseModel):
    """All 64 squares (keyed by algebraic name), whose turn it is and the material tally.
    Choosing a print orientation is up to the renderer."""

    squares: dict[SquareName, Optional[PieceModel]]
    player_to_move: Color
    status: Status
    in_check: bool
    move_history: list[str]
    material: dict[Color, int]

    @classmethod
    def from_game(cls, game: GameState) -> Self:
        return cls(
            squares=_squares(game.board),
            player_to_move=Color[game.current_player.name],
            status=Status[game.status.name],
            in_check=game.is_check(),
            move_history=[record.move.to_uci() for record in game.history],
            material={
                Color[color.name]: points for color, points in game.board.count_material().items()
            },
        )


def _squares(board: Board) -> dict[SquareName, Optional[PieceModel]]:
    return {
        square.to_algebraic(): _piece_model(piece)
        for square, piece in board.snapshot().items()
    }


class LegalMovesResponse(BaseModel):
    player_to_move: Color
    legal_moves: list[str]
