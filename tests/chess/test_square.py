"""Unit tests for /chess_engine/chess/square.py"""

from string import ascii_lowercase

import pytest
from hypothesis import given
from hypothesis import strategies as st

from chess_engine.chess.square import (
    ALL_SQUARES,
    BOARD_DIMENSIONS,
    NUM_SQUARES,
    Square,
    from_coords,
    to_coords,
)
from chess_engine.core.exceptions import InvalidSquareNameError, OutOfRangeError


# -- COORDINATE BIJECTION --
@pytest.mark.parametrize("index", range(NUM_SQUARES))
def test_coords_roundtrip_every_square(index: int) -> None:
    """Exhaustive: every single one of the 64 squares survives the round trip"""
    square = Square(index)
    rank, file = to_coords(square)
    assert from_coords(rank, file) == square


@given(st.integers(min_value=0, max_value=7), st.integers(min_value=0, max_value=7))
def test_from_coords_then_to_coords(rank: int, file: int) -> None:
    assert to_coords(from_coords(rank, file)) == (rank, file)


def test_bijection_covers_all_indices() -> None:
    """No two (rank, file) pairs collide"""
    indices = {from_coords(rank, file).index for rank in range(8) for file in range(8)}
    assert indices == set(range(NUM_SQUARES))


@pytest.mark.parametrize(
    "index, rank, file, notation",
    [
        (0, 0, 0, "a1"),
        (7, 0, 7, "h1"),
        (8, 1, 0, "a2"),
        (12, 1, 4, "e2"),
        (28, 3, 4, "e4"),
        (56, 7, 0, "a8"),
        (63, 7, 7, "h8"),
    ],
)
def test_known_anchors(index: int, rank: int, file: int, notation: str) -> None:
    """Rank is the 1-8 dimension, file the a-h dimension. Never swapped."""
    square = Square(index)
    assert square.to_coords() == (rank, file)
    assert square.rank == rank
    assert square.file == file
    assert square.to_algebraic() == notation
    assert Square.from_algebraic(notation) == square


def test_rank_and_file_are_not_transposed() -> None:
    """e4 and d5 would get mixed up by a row/column swap"""
    e4 = Square.from_algebraic("e4")
    assert (e4.rank, e4.file) == (3, 4)
    assert from_coords(3, 4) != from_coords(4, 3)
    assert from_coords(4, 3).to_algebraic() == "d5"


# -- OUT OF RANGE --
@pytest.mark.parametrize("rank, file", [(-1, 0), (0, -1), (8, 0), (0, 8), (8, 8), (100, -3)])
def test_from_coords_out_of_range(rank: int, file: int) -> None:
    with pytest.raises(OutOfRangeError):
        from_coords(rank, file)


@pytest.mark.parametrize("index", [-1, 64, 1000])
def test_square_index_out_of_range(index: int) -> None:
    with pytest.raises(OutOfRangeError):
        Square(index)


def test_out_of_range_is_a_value_error() -> None:
    """Callers that only know about builtin exceptions can still catch it"""
    with pytest.raises(ValueError):
        from_coords(9, 9)


# -- ALGEBRAIC NOTATION --
@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(BOARD_DIMENSIONS[0])
        for rank in range(BOARD_DIMENSIONS[1])
    ],
)
def test_algebraic_notation(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 0, rank 0, etc."""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank
    assert square.to_algebraic() == notation


def test_algebraic_is_case_insensitive() -> None:
    assert Square.from_algebraic("E4") == Square.from_algebraic("e4")


@pytest.mark.parametrize(
    "name", ["z9", "i1", "a0", "a9", "", "e", "e44", "44", "ee", "a²", "a٣", "e４"]
)
def test_invalid_square_names(name: str) -> None:
    with pytest.raises(InvalidSquareNameError):
        Square.from_algebraic(name)


# -- STEPPING AROUND --
def test_offset_within_board() -> None:
    e4 = Square.from_algebraic("e4")
    assert e4.offset(1, 0) == Square.from_algebraic("e5")
    assert e4.offset(-1, -1) == Square.from_algebraic("d3")
    assert e4.offset(2, 1) == Square.from_algebraic("f6")


@pytest.mark.parametrize("name, d_rank, d_file", [("h1", 0, 1), ("a1", 0, -1), ("a8", 1, 0), ("h1", -1, 0)])
def test_offset_does_not_wrap_around(name: str, d_rank: int, d_file: int) -> None:
    """h1 + one file is off the board, NOT a2"""
    assert Square.from_algebraic(name).offset(d_rank, d_file) is None


def test_all_squares_in_index_order() -> None:
    assert [square.index for square in ALL_SQUARES] == list(range(NUM_SQUARES))
