"""
The Game board: pure storage of the `position` (in chess: the configuration of pieces on the board).

No movement knowledge lives here. Rules are applied by the GameState, which is the only thing that mutates a live board.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from chess_engine.chess.pieces import Color, Piece, PieceType
from chess_engine.chess.square import ALL_SQUARES, BOARD_DIMENSIONS, Square
from chess_engine.core.exceptions import BoardStateError

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * 8)


@dataclass
class Board:
    # only occupied squares are stored. A missing key means an empty square.
    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def standard_initial(cls) -> Self:
        """White's back rank on rank 0 (a1-h1), pawns on both second ranks, Black mirrored on the far side."""
        return cls.from_fen(STARTING_POSITION_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces. Again, left-to-right reads a1-h1.
        """
        position: dict[Square, Piece] = {}
        fen_by_ranks = fen_str.split("/")
        num_files, num_ranks = BOARD_DIMENSIONS
        if len(fen_by_ranks) != num_ranks:
            raise BoardStateError(f"Expected {num_ranks} ranks in {fen_str!r}")

        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = num_ranks - 1 - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                    continue
                try:
                    piece = Piece.from_fen(character)
                except KeyError as exc:
                    raise BoardStateError(
                        f"Unknown piece {character!r} in {fen_str!r}"
                    ) from exc
                if file >= num_files:
                    raise BoardStateError(f"Rank {fen_one_rank!r} is too long")
                position[Square.from_coords(rank, file)] = piece
                file += 1
            if file != num_files:
                raise BoardStateError(
                    f"Rank {fen_one_rank!r} does not describe {num_files} files"
                )
        return cls(position)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece_at(Square.from_coords(rank, file))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # -- STORAGE --
    def piece_at(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def place(self, square: Square, piece: Piece) -> None:
        """Silently overwrites. Capture bookkeeping is the caller's job."""
        self.position[square] = piece

    def remove(self, square: Square) -> Optional[Piece]:
        return self.position.pop(square, None)

    def is_empty(self, square: Square) -> bool:
        return square not in self.position

    def copy(self) -> Self:
        """Scratch copy to try out moves on"""
        return deepcopy(self)

    # -- QUERIES --
    def locate_pieces(self, piece: Piece) -> list[Square]:
        return sorted(square for square, found in self.position.items() if found == piece)

    def locate_color(self, color: Color) -> list[Square]:
        return sorted(
            square for square, piece in self.position.items() if piece.color == color
        )

    def find_king(self, color: Color) -> Square:
        kings = self.locate_pieces(Piece(PieceType.KING, color))
        if len(kings) != 1:
            raise BoardStateError(
                f"Expected exactly one {color.name.lower()} king, found {len(kings)}."
            )
        return kings[0]

    def validate(self) -> None:
        """A well-formed game always has exactly one king of each color."""
        for color in Color:
            self.find_king(color)

    def mirrored(self) -> Self:
        """Swap the colors and flip the board upside down (rank r <-> rank 7 - r)"""
        last_rank = BOARD_DIMENSIONS[1] - 1
        return type(self)(
            {
                Square.from_coords(last_rank - square.rank, square.file): piece.swap_color()
                for square, piece in self.position.items()
            }
        )

    def snapshot(self) -> dict[Square, Optional[Piece]]:
        """All 64 squares, for a render step."""
        return {square: self.piece_at(square) for square in ALL_SQUARES}

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {color: self._count_material_player(color) for color in Color}

    def _player_pieces(self, color: Color) -> list[Piece]:
        """find all pieces of a given color"""
        return [piece for piece in self.position.values() if piece.color == color]

    def _count_material_player(self, color: Color) -> int:
        """Tally the points of material for a specific player"""
        return sum(piece.points for piece in self._player_pieces(color))
