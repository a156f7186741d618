"""
Random King Positions - Placement Engine

Places a White King uniformly at random, then a Black King uniformly at random
among the squares outside the White King's exclusion zone.
"""

import random
from typing import Iterable, List, Optional, Protocol

import numpy as np

from board import (
    Board, Color, Piece, PieceType,
    N_SQUARES, coords_of, index_of, is_valid_square,
)
from fen import to_fen


KING_MOVES = [(1, 1), (1, -1), (1, 0), (0, 1), (0, -1), (-1, 1), (-1, -1), (-1, 0)]


class RandomSource(Protocol):
    """Anything providing a fair coin and a uniform draw over [0, n)."""

    def coin_flip(self) -> bool:
        ...

    def randrange(self, n: int) -> int:
        ...


class PythonRandomSource:
    """Random source backed by the standard library Mersenne Twister."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def coin_flip(self) -> bool:
        return self.rng.random() < 0.5

    def randrange(self, n: int) -> int:
        return self.rng.randrange(n)


class NumpyRandomSource:
    """Random source backed by a numpy Generator (PCG64)."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def coin_flip(self) -> bool:
        return bool(self.rng.integers(2))

    def randrange(self, n: int) -> int:
        return int(self.rng.integers(n))


def king_exclusion_zone(square: int) -> List[int]:
    """
    The square itself plus every square one king step away, clipped to the board.

    Returns 4 squares for a corner, 6 for an edge and 9 for an interior square.
    """
    file, rank = coords_of(square)
    zone = [square]
    for df, dr in KING_MOVES:
        f, r = file + df, rank + dr
        if is_valid_square(f, r):
            zone.append(index_of(f, r))
    return sorted(zone)


def free_squares(excluded: Iterable[int]) -> List[int]:
    """All squares not in `excluded`, ascending."""
    excluded = set(excluded)
    return [square for square in range(N_SQUARES) if square not in excluded]


def place_kings(white_king: int, black_king: int, turn: Color = Color.WHITE) -> Board:
    """Build a board holding only the two kings on the given squares."""
    if black_king in king_exclusion_zone(white_king):
        raise ValueError(
            f"kings must be on distinct, non-adjacent squares: "
            f"white={white_king}, black={black_king}")

    board = Board.empty()
    board.turn = turn
    board[white_king] = Piece(PieceType.KING, Color.WHITE)
    board[black_king] = Piece(PieceType.KING, Color.BLACK)
    return board


def random_board(rng: Optional[RandomSource] = None) -> Board:
    """Generate a random board with two non-adjacent kings and a random side to move."""
    if rng is None:
        rng = PythonRandomSource()

    turn = Color.WHITE if rng.coin_flip() else Color.BLACK

    white_king = rng.randrange(N_SQUARES)

    candidates = free_squares(king_exclusion_zone(white_king))
    # Bound is the candidate count, never a worst-case capacity
    black_king = candidates[rng.randrange(len(candidates))]

    return place_kings(white_king, black_king, turn)


def random_fen(rng: Optional[RandomSource] = None) -> str:
    """FEN string of a freshly generated random position."""
    return to_fen(random_board(rng))


if __name__ == "__main__":
    print(random_fen())
