"""Bitboards: 64-bit sets of squares, attack tables and sliding-piece magics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator

from kestrelchess.misc import PRNG

__all__ = [
    "Color",
    "PieceType",
    "Magic",
    "MASK64",
    "NORTH",
    "SOUTH",
    "EAST",
    "WEST",
    "NORTH_EAST",
    "NORTH_WEST",
    "SOUTH_EAST",
    "SOUTH_WEST",
    "ALL_SQUARES",
    "DARK_SQUARES",
    "FILE_A_BB",
    "FILE_B_BB",
    "FILE_C_BB",
    "FILE_D_BB",
    "FILE_E_BB",
    "FILE_F_BB",
    "FILE_G_BB",
    "FILE_H_BB",
    "RANK_1_BB",
    "RANK_2_BB",
    "RANK_3_BB",
    "RANK_4_BB",
    "RANK_5_BB",
    "RANK_6_BB",
    "RANK_7_BB",
    "RANK_8_BB",
    "QUEEN_SIDE",
    "CENTER_FILES",
    "KING_SIDE",
    "CENTER",
    "KING_FLANK",
    "ROOK_MAGICS",
    "BISHOP_MAGICS",
    "file_of",
    "rank_of",
    "make_square",
    "relative_rank",
    "relative_square",
    "square_bb",
    "more_than_one",
    "opposite_colors",
    "rank_bb",
    "file_bb",
    "shift",
    "pawn_attacks_bb",
    "pawn_attacks_from",
    "pawn_double_attacks_bb",
    "adjacent_files_bb",
    "line_bb",
    "between_bb",
    "forward_ranks_bb",
    "forward_file_bb",
    "pawn_attack_span",
    "passed_pawn_span",
    "aligned",
    "distance",
    "file_distance",
    "rank_distance",
    "edge_distance",
    "pseudo_attacks",
    "attacks_bb",
    "popcount",
    "lsb",
    "msb",
    "least_significant_square_bb",
    "iter_squares",
    "frontmost_sq",
    "pretty",
]

MASK64 = (1 << 64) - 1


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    def __invert__(self) -> "Color":
        return Color(self ^ 1)


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    ALL_PIECES = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


NORTH = 8
EAST = 1
SOUTH = -8
WEST = -1
NORTH_EAST = NORTH + EAST
SOUTH_EAST = SOUTH + EAST
SOUTH_WEST = SOUTH + WEST
NORTH_WEST = NORTH + WEST

ALL_SQUARES = MASK64
DARK_SQUARES = 0xAA55AA55AA55AA55

FILE_A_BB = 0x0101010101010101
FILE_B_BB = FILE_A_BB << 1
FILE_C_BB = FILE_A_BB << 2
FILE_D_BB = FILE_A_BB << 3
FILE_E_BB = FILE_A_BB << 4
FILE_F_BB = FILE_A_BB << 5
FILE_G_BB = FILE_A_BB << 6
FILE_H_BB = FILE_A_BB << 7

RANK_1_BB = 0xFF
RANK_2_BB = RANK_1_BB << (8 * 1)
RANK_3_BB = RANK_1_BB << (8 * 2)
RANK_4_BB = RANK_1_BB << (8 * 3)
RANK_5_BB = RANK_1_BB << (8 * 4)
RANK_6_BB = RANK_1_BB << (8 * 5)
RANK_7_BB = RANK_1_BB << (8 * 6)
RANK_8_BB = RANK_1_BB << (8 * 7)

QUEEN_SIDE = FILE_A_BB | FILE_B_BB | FILE_C_BB | FILE_D_BB
CENTER_FILES = FILE_C_BB | FILE_D_BB | FILE_E_BB | FILE_F_BB
KING_SIDE = FILE_E_BB | FILE_F_BB | FILE_G_BB | FILE_H_BB
CENTER = (FILE_D_BB | FILE_E_BB) & (RANK_4_BB | RANK_5_BB)

KING_FLANK: tuple[int, ...] = (
    QUEEN_SIDE ^ FILE_D_BB,
    QUEEN_SIDE,
    QUEEN_SIDE,
    CENTER_FILES,
    CENTER_FILES,
    KING_SIDE,
    KING_SIDE,
    KING_SIDE ^ FILE_E_BB,
)


# --- square helpers -------------------------------------------------------


def _check_square(s: int) -> None:
    if not 0 <= s < 64:
        raise ValueError(f"square out of range: {s}")


def file_of(s: int) -> int:
    """File index (0 = a) of a square."""
    return s & 7


def rank_of(s: int) -> int:
    """Rank index (0 = first rank) of a square."""
    return s >> 3


def make_square(f: int, r: int) -> int:
    """Square from a file and a rank index."""
    return (r << 3) + f


def relative_rank(c: int, s: int) -> int:
    """Rank of a square as seen from the given color's side."""
    return rank_of(s) ^ (int(c) * 7)


def relative_square(c: int, s: int) -> int:
    """Square mirrored vertically for black."""
    return s ^ (int(c) * 56)


def square_bb(s: int) -> int:
    """Bitboard holding the single given square."""
    _check_square(s)
    return 1 << s


def more_than_one(b: int) -> bool:
    return bool(b & (b - 1))


def opposite_colors(s1: int, s2: int) -> bool:
    """True if the two squares are of different colors."""
    return bool((s1 + rank_of(s1) + s2 + rank_of(s2)) & 1)


def rank_bb(r: int) -> int:
    return RANK_1_BB << (8 * r)


def file_bb(f: int) -> int:
    return FILE_A_BB << f


def shift(b: int, d: int) -> int:
    """Move every square of a bitboard one step (or two, vertically) in direction d."""
    if d == NORTH:
        return (b << 8) & MASK64
    if d == SOUTH:
        return b >> 8
    if d == NORTH + NORTH:
        return (b << 16) & MASK64
    if d == SOUTH + SOUTH:
        return b >> 16
    if d == EAST:
        return ((b & ~FILE_H_BB) << 1) & MASK64
    if d == WEST:
        return (b & ~FILE_A_BB) >> 1
    if d == NORTH_EAST:
        return ((b & ~FILE_H_BB) << 9) & MASK64
    if d == NORTH_WEST:
        return ((b & ~FILE_A_BB) << 7) & MASK64
    if d == SOUTH_EAST:
        return (b & ~FILE_H_BB) >> 7
    if d == SOUTH_WEST:
        return (b & ~FILE_A_BB) >> 9
    return 0


def pawn_attacks_bb(c: int, b: int) -> int:
    """Squares attacked by pawns of color c standing on the squares of b."""
    if c == Color.WHITE:
        return shift(b, NORTH_WEST) | shift(b, NORTH_EAST)
    return shift(b, SOUTH_WEST) | shift(b, SOUTH_EAST)


def pawn_double_attacks_bb(c: int, b: int) -> int:
    """Squares attacked twice by pawns of color c standing on the squares of b."""
    if c == Color.WHITE:
        return shift(b, NORTH_WEST) & shift(b, NORTH_EAST)
    return shift(b, SOUTH_WEST) & shift(b, SOUTH_EAST)


def adjacent_files_bb(s: int) -> int:
    fb = file_bb(file_of(s))
    return shift(fb, EAST) | shift(fb, WEST)


def forward_ranks_bb(c: int, s: int) -> int:
    """Squares on the ranks in front of s from the point of view of color c."""
    if c == Color.WHITE:
        return ((~RANK_1_BB & MASK64) << (8 * relative_rank(Color.WHITE, s))) & MASK64
    return (~RANK_8_BB & MASK64) >> (8 * relative_rank(Color.BLACK, s))


def forward_file_bb(c: int, s: int) -> int:
    return forward_ranks_bb(c, s) & file_bb(file_of(s))


def pawn_attack_span(c: int, s: int) -> int:
    return forward_ranks_bb(c, s) & adjacent_files_bb(s)


def passed_pawn_span(c: int, s: int) -> int:
    return pawn_attack_span(c, s) | forward_file_bb(c, s)


def file_distance(s1: int, s2: int) -> int:
    return abs(file_of(s1) - file_of(s2))


def rank_distance(s1: int, s2: int) -> int:
    return abs(rank_of(s1) - rank_of(s2))


def edge_distance(x: int) -> int:
    """Distance of a file or rank index from the nearer board edge."""
    return min(x, 7 - x)


# --- bit scanning ---------------------------------------------------------


def popcount(b: int) -> int:
    return (b & MASK64).bit_count()


def lsb(b: int) -> int:
    """Least significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("empty bitboard")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Most significant square of a non-empty bitboard."""
    if not b:
        raise ValueError("empty bitboard")
    return (b & MASK64).bit_length() - 1


def least_significant_square_bb(b: int) -> int:
    if not b:
        raise ValueError("empty bitboard")
    return b & -b


def iter_squares(b: int) -> Iterator[int]:
    """Yield the squares of a bitboard from least to most significant."""
    b &= MASK64
    while b:
        low = b & -b
        yield low.bit_length() - 1
        b ^= low


def frontmost_sq(c: int, b: int) -> int:
    """Most advanced square of b for color c."""
    return msb(b) if c == Color.WHITE else lsb(b)


def pretty(b: int) -> str:
    """ASCII drawing of a bitboard."""
    border = "+---+---+---+---+---+---+---+---+\n"
    out = [border]
    for r in range(7, -1, -1):
        out.extend(
            "| X " if b & (1 << make_square(f, r)) else "|   " for f in range(8)
        )
        out.append(f"| {1 + r}\n{border}")
    out.append("  a   b   c   d   e   f   g   h\n")
    return "".join(out)


# --- tables ---------------------------------------------------------------

_SQUARE_DISTANCE = [
    [max(file_distance(s1, s2), rank_distance(s1, s2)) for s2 in range(64)]
    for s1 in range(64)
]


def distance(s1: int, s2: int) -> int:
    """Number of king steps between two squares."""
    return _SQUARE_DISTANCE[s1][s2]


def _safe_destination(s: int, step: int) -> int:
    to = s + step
    return 1 << to if 0 <= to < 64 and _SQUARE_DISTANCE[s][to] <= 2 else 0


def _ray(s: int, d: int) -> tuple[int, ...]:
    squares = []
    while _safe_destination(s, d):
        s += d
        squares.append(s)
    return tuple(squares)


_ROOK_DIRECTIONS = (NORTH, SOUTH, EAST, WEST)
_BISHOP_DIRECTIONS = (NORTH_EAST, SOUTH_EAST, SOUTH_WEST, NORTH_WEST)
_RAYS = {
    pt: [[_ray(s, d) for d in dirs] for s in range(64)]
    for pt, dirs in ((PieceType.ROOK, _ROOK_DIRECTIONS), (PieceType.BISHOP, _BISHOP_DIRECTIONS))
}


def _sliding_attack(pt: int, sq: int, occupied: int) -> int:
    if occupied & (1 << sq):
        return 0
    attacks = 0
    for ray in _RAYS[pt][sq]:
        for s in ray:
            bit = 1 << s
            attacks |= bit
            if occupied & bit:
                break
    return attacks


@dataclass
class Magic:
    """Magic-bitboard lookup data for one square of a sliding piece."""

    mask: int
    magic: int
    shift: int
    attacks: list[int] = field(repr=False)

    def index(self, occupied: int) -> int:
        """Attack table index for the given occupancy."""
        return (((occupied & self.mask) * self.magic) & MASK64) >> self.shift


# Seeds that find a working magic for every square quickly.
_MAGIC_SEEDS = (728, 10316, 55013, 32803, 12281, 15100, 16645, 255)


def _init_magics(pt: int) -> list[Magic]:
    magics = []
    for s in range(64):
        edges = ((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(s))) | (
            (FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(s))
        )
        mask = _sliding_attack(pt, s, 0) & ~edges & MASK64
        mshift = 64 - popcount(mask)

        occupancy = []
        reference = []
        b = 0
        while True:
            occupancy.append(b)
            reference.append(_sliding_attack(pt, s, b))
            b = (b - mask) & mask
            if not b:
                break

        size = len(occupancy)
        table = [0] * size
        epoch = [0] * size
        rng = PRNG(_MAGIC_SEEDS[rank_of(s)])
        attempt = 0
        while True:
            magic = 0
            while popcount(((magic * mask) & MASK64) >> 56) < 6:
                magic = rng.sparse_rand()
            attempt += 1
            for occ, ref in zip(occupancy, reference):
                idx = ((occ * magic) & MASK64) >> mshift
                if epoch[idx] < attempt:
                    epoch[idx] = attempt
                    table[idx] = ref
                elif table[idx] != ref:
                    break
            else:
                break
        magics.append(Magic(mask=mask, magic=magic, shift=mshift, attacks=table))
    return magics


ROOK_MAGICS: list[Magic] = _init_magics(PieceType.ROOK)
BISHOP_MAGICS: list[Magic] = _init_magics(PieceType.BISHOP)


def _magic_attacks(magics: list[Magic], s: int, occupied: int) -> int:
    m = magics[s]
    return m.attacks[m.index(occupied)]


def _build_pseudo_attacks() -> list[list[int]]:
    table = [[0] * 64 for _ in PieceType.__members__.values() if True][:7]
    table = [[0] * 64 for _ in range(7)]
    for s in range(64):
        table[PieceType.PAWN][s] = 0
        for step in (-9, -8, -7, -1, 1, 7, 8, 9):
            table[PieceType.KING][s] |= _safe_destination(s, step)
        for step in (-17, -15, -10, -6, 6, 10, 15, 17):
            table[PieceType.KNIGHT][s] |= _safe_destination(s, step)
        bishop = _magic_attacks(BISHOP_MAGICS, s, 0)
        rook = _magic_attacks(ROOK_MAGICS, s, 0)
        table[PieceType.BISHOP][s] = bishop
        table[PieceType.ROOK][s] = rook
        table[PieceType.QUEEN][s] = bishop | rook
    return table


_PSEUDO_ATTACKS = _build_pseudo_attacks()
_PAWN_ATTACKS = [
    [pawn_attacks_bb(c, 1 << s) for s in range(64)] for c in (Color.WHITE, Color.BLACK)
]


def pseudo_attacks(pt: int, s: int) -> int:
    """Attacks of a non-pawn piece type on an empty board."""
    if pt == PieceType.PAWN or not PieceType.KNIGHT <= pt <= PieceType.KING:
        raise ValueError(f"no pseudo attacks for piece type {pt}")
    _check_square(s)
    return _PSEUDO_ATTACKS[pt][s]


def attacks_bb(pt: int, s: int, occupied: int = 0) -> int:
    """Attacks of a non-pawn piece type on s given the occupied squares."""
    if pt == PieceType.PAWN or not PieceType.KNIGHT <= pt <= PieceType.KING:
        raise ValueError(f"no attacks for piece type {pt}")
    _check_square(s)
    if pt == PieceType.BISHOP:
        return _magic_attacks(BISHOP_MAGICS, s, occupied)
    if pt == PieceType.ROOK:
        return _magic_attacks(ROOK_MAGICS, s, occupied)
    if pt == PieceType.QUEEN:
        return _magic_attacks(BISHOP_MAGICS, s, occupied) | _magic_attacks(
            ROOK_MAGICS, s, occupied
        )
    return _PSEUDO_ATTACKS[pt][s]


def pawn_attacks_from(c: int, s: int) -> int:
    """Squares attacked by a pawn of color c on square s."""
    _check_square(s)
    return _PAWN_ATTACKS[c][s]


def _build_lines() -> tuple[list[list[int]], list[list[int]]]:
    line = [[0] * 64 for _ in range(64)]
    between = [[0] * 64 for _ in range(64)]
    for s1 in range(64):
        for pt in (PieceType.BISHOP, PieceType.ROOK):
            for s2 in range(64):
                if _PSEUDO_ATTACKS[pt][s1] & (1 << s2):
                    line[s1][s2] = (
                        (attacks_bb(pt, s1, 0) & attacks_bb(pt, s2, 0))
                        | (1 << s1)
                        | (1 << s2)
                    )
                    between[s1][s2] = attacks_bb(pt, s1, 1 << s2) & attacks_bb(
                        pt, s2, 1 << s1
                    )
                between[s1][s2] |= 1 << s2
    return line, between


_LINE_BB, _BETWEEN_BB = _build_lines()


def line_bb(s1: int, s2: int) -> int:
    """Full edge-to-edge line through two aligned squares, or 0."""
    _check_square(s1)
    _check_square(s2)
    return _LINE_BB[s1][s2]


def between_bb(s1: int, s2: int) -> int:
    """Squares after s1 up to and including s2 along their line, or just s2."""
    _check_square(s1)
    _check_square(s2)
    return _BETWEEN_BB[s1][s2]


def aligned(s1: int, s2: int, s3: int) -> bool:
    """True if the three squares lie on one straight or diagonal line."""
    return bool(line_bb(s1, s2) & square_bb(s3))