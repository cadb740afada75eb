"""Material configuration: imbalance, game phase and default scale factors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from kestrelchess.bitboard import Color

__all__ = [
    "Score",
    "MaterialCount",
    "PAWN_VALUE_MG",
    "KNIGHT_VALUE_MG",
    "BISHOP_VALUE_MG",
    "ROOK_VALUE_MG",
    "QUEEN_VALUE_MG",
    "MIDGAME_LIMIT",
    "ENDGAME_LIMIT",
    "PHASE_ENDGAME",
    "PHASE_MIDGAME",
    "SCALE_FACTOR_DRAW",
    "SCALE_FACTOR_NORMAL",
    "imbalance",
    "material_imbalance",
    "game_phase",
    "default_scale_factors",
]

PAWN_VALUE_MG = 126
KNIGHT_VALUE_MG = 781
BISHOP_VALUE_MG = 825
ROOK_VALUE_MG = 1276
QUEEN_VALUE_MG = 2538

MIDGAME_LIMIT = 15258
ENDGAME_LIMIT = 3915

PHASE_ENDGAME = 0
PHASE_MIDGAME = 128

SCALE_FACTOR_DRAW = 0
SCALE_FACTOR_NORMAL = 64


def _tdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


@dataclass(frozen=True)
class Score:
    """A pair of middlegame and endgame values."""

    mg: int = 0
    eg: int = 0

    def __add__(self, other: "Score") -> "Score":
        return Score(self.mg + other.mg, self.eg + other.eg)

    def __sub__(self, other: "Score") -> "Score":
        return Score(self.mg - other.mg, self.eg - other.eg)

    def __neg__(self) -> "Score":
        return Score(-self.mg, -self.eg)

    def __mul__(self, k: int) -> "Score":
        return Score(self.mg * k, self.eg * k)

    __rmul__ = __mul__

    def __truediv__(self, k: int) -> "Score":
        """Divide each part, truncating toward zero."""
        return Score(_tdiv(self.mg, k), _tdiv(self.eg, k))


_S = Score

# Rows and columns: bishop pair, pawn, knight, bishop, rook, queen.
_QUADRATIC_OURS = (
    (_S(1419, 1455),),
    (_S(101, 28), _S(37, 39)),
    (_S(57, 64), _S(249, 187), _S(-49, -62)),
    (_S(0, 0), _S(118, 137), _S(10, 27), _S(0, 0)),
    (_S(-63, -68), _S(-5, 3), _S(100, 81), _S(132, 118), _S(-246, -244)),
    (_S(-210, -211), _S(37, 14), _S(147, 141), _S(161, 105), _S(-158, -174), _S(-9, -31)),
)

_QUADRATIC_THEIRS = (
    (),
    (_S(33, 30),),
    (_S(46, 18), _S(106, 84)),
    (_S(75, 35), _S(59, 44), _S(60, 15)),
    (_S(26, 35), _S(6, 22), _S(38, 39), _S(-12, -2)),
    (_S(97, 93), _S(100, 163), _S(-58, -91), _S(112, 192), _S(276, 225)),
)


@dataclass(frozen=True)
class MaterialCount:
    """Piece counts of one side, kings aside."""

    pawns: int = 0
    knights: int = 0
    bishops: int = 0
    rooks: int = 0
    queens: int = 0

    def __post_init__(self) -> None:
        for name in ("pawns", "knights", "bishops", "rooks", "queens"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    def _piece_counts(self) -> tuple[int, ...]:
        # The bishop pair is counted as an extra piece in the first slot.
        return (
            int(self.bishops > 1),
            self.pawns,
            self.knights,
            self.bishops,
            self.rooks,
            self.queens,
        )


def _coef(table: tuple[tuple[Score, ...], ...], pt1: int, pt2: int) -> Score:
    row = table[pt1]
    return row[pt2] if pt2 < len(row) else Score()


def imbalance(counts: Sequence[MaterialCount], us: int) -> Score:
    """Second-degree polynomial imbalance bonus of side `us`."""
    ours = counts[int(us)]._piece_counts()
    theirs = counts[int(us) ^ 1]._piece_counts()

    bonus = Score()
    for pt1, n1 in enumerate(ours):
        if not n1:
            continue
        v = _coef(_QUADRATIC_OURS, pt1, pt1) * n1
        for pt2 in range(pt1):
            v = (
                v
                + _coef(_QUADRATIC_OURS, pt1, pt2) * ours[pt2]
                + _coef(_QUADRATIC_THEIRS, pt1, pt2) * theirs[pt2]
            )
        bonus = bonus + v * n1
    return bonus


def material_imbalance(counts: Sequence[MaterialCount]) -> Score:
    """Imbalance from white's point of view, as stored for a material entry."""
    return (imbalance(counts, Color.WHITE) - imbalance(counts, Color.BLACK)) / 16


def game_phase(npm_white: int, npm_black: int) -> int:
    """Map total non-pawn material into the range [PHASE_ENDGAME, PHASE_MIDGAME]."""
    npm = min(max(npm_white + npm_black, ENDGAME_LIMIT), MIDGAME_LIMIT)
    return ((npm - ENDGAME_LIMIT) * PHASE_MIDGAME) // (MIDGAME_LIMIT - ENDGAME_LIMIT)


def default_scale_factors(
    npm_white: int, npm_black: int, pawns_white: int, pawns_black: int
) -> tuple[int, int]:
    """Scale factors for white and black given material alone.

    With no pawns and at most a bishop's worth of extra material, winning is
    hard: a draw below a rook's worth, otherwise a strongly reduced factor.
    """
    white = black = SCALE_FACTOR_NORMAL

    if not pawns_white and npm_white - npm_black <= BISHOP_VALUE_MG:
        if npm_white < ROOK_VALUE_MG:
            white = SCALE_FACTOR_DRAW
        else:
            white = 4 if npm_black <= BISHOP_VALUE_MG else 14

    if not pawns_black and npm_black - npm_white <= BISHOP_VALUE_MG:
        if npm_black < ROOK_VALUE_MG:
            black = SCALE_FACTOR_DRAW
        else:
            black = 4 if npm_white <= BISHOP_VALUE_MG else 14

    return white, black