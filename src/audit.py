"""
Audit random king positions to verify the generator is correct.

Generates many positions and verifies for each one:
1. Exactly one White King and one Black King, no other pieces
2. The kings are on distinct, non-adjacent squares
3. The FEN text has 8 ranks of 8 files and the fixed " - - 0 1" suffix
4. The FEN text parses back to the same board
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np
from tqdm import tqdm

from board import SYMBOL_PIECES, Board, Color, PieceType, coords_of, square_name
from fen import FEN_DIGITS, FEN_SUFFIX, FENError, board_from_fen, print_board, to_fen
from placement import NumpyRandomSource, PythonRandomSource, random_board


@dataclass
class AuditConfig:
    """Audit run settings."""
    num_positions: int = 10000
    seed: Optional[int] = None
    backend: str = "python"         # "python" or "numpy"
    output: Optional[str] = None    # Write every FEN to this file, one per line
    show: int = 0                   # Print the first N boards
    progress: bool = True


def make_random_source(backend: str, seed: Optional[int] = None):
    if backend == "python":
        return PythonRandomSource(seed)
    if backend == "numpy":
        return NumpyRandomSource(seed)
    raise ValueError(f"unknown random backend: {backend!r}")


def king_distance(a: int, b: int) -> int:
    """Chebyshev distance (king moves) between two squares."""
    a_file, a_rank = coords_of(a)
    b_file, b_rank = coords_of(b)
    return max(abs(a_file - b_file), abs(a_rank - b_rank))


def placement_zone(square: int) -> str:
    """'corner', 'edge' or 'interior'."""
    file, rank = coords_of(square)
    on_file_edge = file in (0, 7)
    on_rank_edge = rank in (0, 7)
    if on_file_edge and on_rank_edge:
        return "corner"
    if on_file_edge or on_rank_edge:
        return "edge"
    return "interior"


def verify_position(board: Board) -> list:
    """Verify a generated position. Returns list of issues."""
    issues = []
    kings = {Color.WHITE: [], Color.BLACK: []}

    for square, piece in board.pieces():
        if piece.piece_type != PieceType.KING:
            issues.append(f"Unexpected {piece.symbol()} on {square_name(square)}")
            continue
        kings[piece.color].append(square)

    for color, squares in kings.items():
        if len(squares) != 1:
            issues.append(f"Expected one {color.display_name} King, found {len(squares)}")

    if len(kings[Color.WHITE]) == 1 and len(kings[Color.BLACK]) == 1:
        white_king = kings[Color.WHITE][0]
        black_king = kings[Color.BLACK][0]
        if king_distance(white_king, black_king) < 2:
            issues.append(
                f"Kings adjacent: White {square_name(white_king)}, Black {square_name(black_king)}")

    return issues


def verify_fen(fen: str) -> list:
    """Verify the FEN text of a generated position. Returns list of issues."""
    issues = []

    fields = fen.split(" ")
    if len(fields) != 6:
        issues.append(f"Expected 6 FEN fields, got {len(fields)}")
    if not fen.endswith(FEN_SUFFIX):
        issues.append(f"FEN does not end with {FEN_SUFFIX.strip()!r}")

    rank_fields = fields[0].split("/")
    if len(rank_fields) != 8:
        issues.append(f"Expected 8 ranks, got {len(rank_fields)}")
    for i, rank_field in enumerate(rank_fields):
        width = 0
        for c in rank_field:
            if c in FEN_DIGITS:
                width += int(c)
            elif c.lower() in SYMBOL_PIECES:
                width += 1
            else:
                issues.append(f"Rank {8 - i} has unexpected character {c!r}")
        if width != 8:
            issues.append(f"Rank {8 - i} covers {width} files")

    try:
        board = board_from_fen(fen)
    except FENError as e:
        issues.append(f"FEN does not parse: {e}")
        return issues

    issues.extend(verify_position(board))
    return issues


def audit_positions(config: AuditConfig) -> dict:
    """Generate and verify positions. Returns stats and any issues found."""
    rng = make_random_source(config.backend, config.seed)

    stats = {
        'positions': 0,
        'issues': [],
        'turns': {'White': 0, 'Black': 0},
        'white_king_zones': {'corner': 0, 'edge': 0, 'interior': 0},
        'min_distance': None,
        'mean_distance': 0.0,
    }
    distances = []
    fens = []

    for i in tqdm(range(config.num_positions), desc="Positions", disable=not config.progress):
        board = random_board(rng)
        fen = to_fen(board)
        fens.append(fen)

        # verify_fen also verifies the parsed board
        issues = verify_fen(fen)
        try:
            if board_from_fen(fen) != board:
                issues.append("FEN does not round-trip to the generated board")
        except FENError:
            pass  # reported by verify_fen
        stats['issues'].extend((i + 1, issue) for issue in issues)

        if i < config.show:
            print(f"\nPosition {i + 1}: {fen}")
            print_board(board)

        stats['turns'][board.turn.display_name] += 1
        white_king = board.find_king(Color.WHITE)
        black_king = board.find_king(Color.BLACK)
        if white_king is not None and black_king is not None:
            stats['white_king_zones'][placement_zone(white_king)] += 1
            distances.append(king_distance(white_king, black_king))

        stats['positions'] += 1

    if distances:
        stats['min_distance'] = int(np.min(distances))
        stats['mean_distance'] = float(np.mean(distances))

    if config.output:
        path = Path(config.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            for fen in fens:
                f.write(fen + "\n")
        stats['output'] = str(path)

    return stats


def print_summary(stats: dict):
    print(f"\n{'='*60}")
    print("AUDIT SUMMARY")
    print(f"{'='*60}")
    print(f"Positions generated: {stats['positions']}")
    print(f"Side to move: White {stats['turns']['White']}, Black {stats['turns']['Black']}")
    zones = stats['white_king_zones']
    print(f"White King: corner {zones['corner']}, edge {zones['edge']}, interior {zones['interior']}")
    if stats['min_distance'] is not None:
        print(f"King distance: min {stats['min_distance']}, mean {stats['mean_distance']:.2f}")
    if stats.get('output'):
        print(f"FENs written to {stats['output']}")

    if stats['issues']:
        print(f"\n⚠️  ISSUES FOUND ({len(stats['issues'])}):")
        for position_num, issue in stats['issues']:
            print(f"  Position {position_num}: {issue}")
    else:
        print("\n✓ No issues found!")


def main(argv: List[str] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Audit random king positions")
    parser.add_argument("--positions", type=int, default=10000, help="Number of positions to generate")
    parser.add_argument("--seed", type=int, help="Seed for reproducible runs")
    parser.add_argument("--backend", choices=["python", "numpy"], default="python", help="Random source")
    parser.add_argument("--output", type=str, help="Write generated FENs to this file")
    parser.add_argument("--show", type=int, default=0, help="Print the first N boards")
    parser.add_argument("--quiet", action="store_true", help="Hide the progress bar")

    args = parser.parse_args(argv)

    config = AuditConfig()
    config.num_positions = args.positions
    config.seed = args.seed
    config.backend = args.backend
    config.output = args.output
    config.show = args.show
    config.progress = not args.quiet

    print(f"\n{'='*60}")
    print(f"AUDITING {config.num_positions} RANDOM POSITIONS ({config.backend})")
    print(f"{'='*60}")

    stats = audit_positions(config)
    print_summary(stats)
    return 1 if stats['issues'] else 0


if __name__ == "__main__":
    raise SystemExit(main())
