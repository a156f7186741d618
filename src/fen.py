"""
FEN (Forsyth-Edwards Notation) export for random king positions.

Also renders a board as a plain text grid, and parses the board and
side-to-move fields of a FEN string back into a Board for re-verification.
"""

from board import Board, Color, Piece, BOARD_SIZE, index_of


# Castling rights, en passant target, halfmove clock, fullmove number
FEN_SUFFIX = " - - 0 1"

# Run lengths of empty squares
FEN_DIGITS = "12345678"

TURN_SYMBOLS = {
    Color.WHITE: 'w',
    Color.BLACK: 'b',
}


class FENError(ValueError):
    """Raised when a FEN string cannot be parsed."""


def to_fen(board: Board) -> str:
    """Return the FEN representation of the board."""
    ranks = []
    for rank in range(BOARD_SIZE - 1, -1, -1):
        field = ""
        empty = 0
        for file in range(BOARD_SIZE):
            piece = board[index_of(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                field += str(empty)
                empty = 0
            field += piece.symbol()
        if empty:
            field += str(empty)
        ranks.append(field)

    return "/".join(ranks) + " " + TURN_SYMBOLS[board.turn] + FEN_SUFFIX


def to_grid(board: Board) -> str:
    """Render the board as 8 lines of piece letters and dots, then the side to move."""
    s = ""
    for rank in range(BOARD_SIZE - 1, -1, -1):
        for file in range(BOARD_SIZE):
            piece = board[index_of(file, rank)]
            s += piece.symbol() if piece is not None else "."
        s += "\n"
    s += f"Turn: {board.turn.display_name}"
    return s


def print_board(board: Board):
    """Print the board in a human-readable format."""
    print()
    for rank in range(BOARD_SIZE - 1, -1, -1):
        print(f"{rank + 1} ", end="")
        for file in range(BOARD_SIZE):
            piece = board[index_of(file, rank)]
            print(f"{piece.symbol() if piece is not None else '.'} ", end="")
        print()
    print("  a b c d e f g h")
    print(f"Turn: {board.turn.display_name}")
    print()


def board_from_fen(fen: str) -> Board:
    """
    Parse the board and side-to-move fields of a FEN string.

    Castling, en passant and move counters are ignored.

    Raises:
        FENError: if the board field or side to move is malformed
    """
    fields = fen.split()
    if len(fields) < 2:
        raise FENError(f"expected board and side-to-move fields: {fen!r}")

    rank_fields = fields[0].split("/")
    if len(rank_fields) != BOARD_SIZE:
        raise FENError(f"expected {BOARD_SIZE} ranks, got {len(rank_fields)}")

    board = Board.empty()
    for i, rank_field in enumerate(rank_fields):
        rank = BOARD_SIZE - 1 - i
        file = 0
        for char in rank_field:
            if char in FEN_DIGITS:
                file += int(char)
                continue
            if file >= BOARD_SIZE:
                raise FENError(f"rank {rank + 1} has more than {BOARD_SIZE} files: {rank_field!r}")
            try:
                board[index_of(file, rank)] = Piece.from_symbol(char)
            except ValueError:
                raise FENError(f"unknown piece letter {char!r} in rank {rank + 1}") from None
            file += 1
        if file != BOARD_SIZE:
            raise FENError(f"rank {rank + 1} covers {file} files, expected {BOARD_SIZE}: {rank_field!r}")

    for color, symbol in TURN_SYMBOLS.items():
        if fields[1] == symbol:
            board.turn = color
            break
    else:
        raise FENError(f"unknown side to move: {fields[1]!r}")

    return board
