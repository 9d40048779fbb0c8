"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/helpers required for testing multiple layers.
"""

from typing import Callable

import pytest

from chess_engine.chess.board import EMPTY_FEN, Board
from chess_engine.chess.game import GameState
from chess_engine.chess.pieces import Color, Piece
from chess_engine.chess.square import Square


def sq(name: str) -> Square:
    """Tests read a lot nicer with algebraic names"""
    return Square.from_algebraic(name)


@pytest.fixture
def board_with_pieces() -> Callable[[dict[str, str]], Board]:
    """Call the inner function with {square name: FEN character}, ex. {"e1": "K", "e8": "k"}"""

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.from_fen(EMPTY_FEN)
        for square_name, fen_char in pieces.items():
            board.place(sq(square_name), Piece.from_fen(fen_char))
        return board

    return _create_board


@pytest.fixture
def game_from_pieces(
    board_with_pieces: Callable[[dict[str, str]], Board],
) -> Callable[..., GameState]:
    """Custom position. White to move unless told otherwise."""

    def _create_game(pieces: dict[str, str], to_move: Color = Color.WHITE) -> GameState:
        return GameState.from_board(board_with_pieces(pieces), to_move)

    return _create_game
