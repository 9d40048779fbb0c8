"""
A square on the board, and the coordinate model behind it.

(placed in its own module as multiple other modules need to import it)

Canonical choice, used everywhere in the engine:
    index = rank * 8 + file
    rank 0 is White's side of the board ("1" in algebraic notation), file 0 is the a-file.
So square 0 is a1, square 7 is h1, square 56 is a8 and square 63 is h8.
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase
from typing import Optional

from chess_engine.core.exceptions import InvalidSquareNameError, OutOfRangeError

# (files, ranks). Chess board is always 8x8
BOARD_DIMENSIONS = (8, 8)
NUM_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]
FILE_NAMES = ascii_lowercase[: BOARD_DIMENSIONS[0]]
RANK_NAMES = "".join(str(rank) for rank in range(1, BOARD_DIMENSIONS[1] + 1))


def _check_coords(rank: int, file: int) -> None:
    num_files, num_ranks = BOARD_DIMENSIONS
    if not (0 <= rank < num_ranks and 0 <= file < num_files):
        raise OutOfRangeError(
            f"(rank={rank}, file={file}) is not on the board. Both must lie in [0, 7]."
        )


@dataclass(frozen=True, order=True)
class Square:
    index: int

    def __post_init__(self) -> None:
        if not isinstance(self.index, int) or not (0 <= self.index < NUM_SQUARES):
            raise OutOfRangeError(
                f"Square index {self.index!r} is not in [0, {NUM_SQUARES - 1}]."
            )

    @classmethod
    def from_coords(cls, rank: int, file: int) -> Square:
        _check_coords(rank, file)
        return cls(rank * BOARD_DIMENSIONS[0] + file)

    def to_coords(self) -> tuple[int, int]:
        """(rank, file). Rank always denotes the 1-8 dimension, file the a-h dimension."""
        return divmod(self.index, BOARD_DIMENSIONS[0])

    @property
    def rank(self) -> int:
        return self.index // BOARD_DIMENSIONS[0]

    @property
    def file(self) -> int:
        return self.index % BOARD_DIMENSIONS[0]

    def offset(self, d_rank: int, d_file: int) -> Optional[Square]:
        """Step along the board. Falling off an edge gives None instead of wrapping around to the next rank."""
        rank = self.rank + d_rank
        file = self.file + d_file
        num_files, num_ranks = BOARD_DIMENSIONS
        if not (0 <= rank < num_ranks and 0 <= file < num_files):
            return None
        return Square.from_coords(rank, file)

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        name = sq.strip().lower()
        # plain ASCII only: str.isdigit() would let through things like "²"
        if len(name) != 2 or name[0] not in FILE_NAMES or name[1] not in RANK_NAMES:
            raise InvalidSquareNameError(f"Cannot interpret {sq!r} as a square name.")
        return cls.from_coords(RANK_NAMES.index(name[1]), FILE_NAMES.index(name[0]))

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.file]}{self.rank + 1}"

    def __str__(self) -> str:
        return self.to_algebraic()


def to_coords(square: Square) -> tuple[int, int]:
    return square.to_coords()


def from_coords(rank: int, file: int) -> Square:
    return Square.from_coords(rank, file)


ALL_SQUARES: tuple[Square, ...] = tuple(Square(index) for index in range(NUM_SQUARES))
