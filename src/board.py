"""
Random King Positions - Board Model

Board representation: colors, piece types, square indexing and the 64-slot board.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple


N_SQUARES = 64
BOARD_SIZE = 8


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class PieceType(IntEnum):
    PAWN = 1
    ROOK = 2
    KNIGHT = 3
    BISHOP = 4
    QUEEN = 5
    KING = 6


PIECE_SYMBOLS = {
    PieceType.PAWN: 'p',
    PieceType.ROOK: 'r',
    PieceType.KNIGHT: 'n',
    PieceType.BISHOP: 'b',
    PieceType.QUEEN: 'q',
    PieceType.KING: 'k',
}

SYMBOL_PIECES = {symbol: piece_type for piece_type, symbol in PIECE_SYMBOLS.items()}


@dataclass(frozen=True)
class Piece:
    piece_type: PieceType
    color: Color

    def symbol(self) -> str:
        """Piece letter: upper case for White, lower case for Black."""
        letter = PIECE_SYMBOLS[self.piece_type]
        if self.color == Color.WHITE:
            return letter.upper()
        return letter

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Piece':
        piece_type = SYMBOL_PIECES.get(symbol.lower())
        if piece_type is None:
            raise ValueError(f"unknown piece symbol: {symbol!r}")
        color = Color.WHITE if symbol.isupper() else Color.BLACK
        return cls(piece_type, color)


def is_valid_square(file: int, rank: int) -> bool:
    return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE


def index_of(file: int, rank: int) -> int:
    """Convert file (0-7) and rank (0-7) to square index (0-63)."""
    if not is_valid_square(file, rank):
        raise ValueError(f"square coordinates out of bounds: file={file}, rank={rank}")
    return rank * BOARD_SIZE + file


def coords_of(square: int) -> Tuple[int, int]:
    """Convert square index (0-63) to (file, rank)."""
    if not 0 <= square < N_SQUARES:
        raise ValueError(f"square index out of bounds: {square}")
    return square % BOARD_SIZE, square // BOARD_SIZE


def file_of(square: int) -> int:
    return coords_of(square)[0]


def rank_of(square: int) -> int:
    return coords_of(square)[1]


def square_name(square: int) -> str:
    file, rank = coords_of(square)
    return f"{chr(ord('a') + file)}{rank + 1}"


@dataclass
class Board:
    """64 square slots (None or a Piece) and the side to move."""

    squares: List[Optional[Piece]] = field(default_factory=lambda: [None] * N_SQUARES)
    turn: Color = Color.WHITE

    def __post_init__(self):
        if len(self.squares) != N_SQUARES:
            raise ValueError(f"board must have {N_SQUARES} squares, got {len(self.squares)}")

    @classmethod
    def empty(cls) -> 'Board':
        return cls()

    def __getitem__(self, square: int) -> Optional[Piece]:
        coords_of(square)  # bounds check, negative indices must not wrap
        return self.squares[square]

    def __setitem__(self, square: int, piece: Optional[Piece]):
        coords_of(square)
        self.squares[square] = piece

    def pieces(self) -> Iterator[Tuple[int, Piece]]:
        """Occupied squares in ascending order."""
        for square, piece in enumerate(self.squares):
            if piece is not None:
                yield square, piece

    def find_king(self, color: Color) -> Optional[int]:
        for square, piece in self.pieces():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return square
        return None
