"""King and pawn versus king bitbase built by retrograde classification."""

from __future__ import annotations

import functools
from enum import IntEnum

from kestrelchess.bitboard import (
    Color,
    PieceType,
    distance,
    file_of,
    iter_squares,
    make_square,
    pawn_attacks_from,
    pseudo_attacks,
    rank_of,
)

__all__ = ["Result", "MAX_INDEX", "build_bitbase", "probe"]

# side to move * pawn squares (files a-d, ranks 2-7) * white king * black king
MAX_INDEX = 2 * 24 * 64 * 64

_RANK_2 = 1
_RANK_7 = 6
_NORTH = 8


class Result(IntEnum):
    """Classification of a bitbase position; values combine as bit flags."""

    INVALID = 0
    UNKNOWN = 1
    DRAW = 2
    WIN = 4


_KING_ATTACKS = [pseudo_attacks(PieceType.KING, s) for s in range(64)]
_KING_MOVES = [tuple(iter_squares(b)) for b in _KING_ATTACKS]
_WHITE_PAWN_ATTACKS = [pawn_attacks_from(Color.WHITE, s) for s in range(64)]


def _index(stm: int, bksq: int, wksq: int, psq: int) -> int:
    """Pack a position into a bitbase index.

    bits 0-5 white king, 6-11 black king, 12 side to move,
    13-14 pawn file, 15-17 distance of the pawn from the seventh rank.
    """
    return (
        wksq
        | (bksq << 6)
        | (stm << 12)
        | (file_of(psq) << 13)
        | ((_RANK_7 - rank_of(psq)) << 15)
    )


def _decode(idx: int) -> tuple[int, int, int, int]:
    wksq = idx & 0x3F
    bksq = (idx >> 6) & 0x3F
    stm = (idx >> 12) & 0x01
    psq = make_square((idx >> 13) & 0x3, _RANK_7 - ((idx >> 15) & 0x7))
    return wksq, bksq, stm, psq


def _initial_result(idx: int) -> Result:
    wksq, bksq, stm, psq = _decode(idx)

    # Two pieces on one square, or a king that can be captured
    if (
        distance(wksq, bksq) <= 1
        or wksq == psq
        or bksq == psq
        or (stm == Color.WHITE and _WHITE_PAWN_ATTACKS[psq] & (1 << bksq))
    ):
        return Result.INVALID

    push = psq + _NORTH
    # The pawn promotes without being captured
    if (
        stm == Color.WHITE
        and rank_of(psq) == _RANK_7
        and wksq != push
        and (distance(bksq, push) > 1 or distance(wksq, push) == 1)
    ):
        return Result.WIN

    if stm == Color.BLACK:
        black = _KING_ATTACKS[bksq]
        white = _KING_ATTACKS[wksq]
        # Stalemate, or the black king takes an undefended pawn
        if not (black & ~(white | _WHITE_PAWN_ATTACKS[psq])) or (
            black & ~white & (1 << psq)
        ):
            return Result.DRAW

    return Result.UNKNOWN


def _successors(idx: int) -> tuple[int, ...]:
    wksq, bksq, stm, psq = _decode(idx)
    if stm == Color.BLACK:
        return tuple(_index(Color.WHITE, to, wksq, psq) for to in _KING_MOVES[bksq])

    succ = [_index(Color.BLACK, bksq, to, psq) for to in _KING_MOVES[wksq]]
    rank = rank_of(psq)
    push = psq + _NORTH
    if rank < _RANK_7:
        succ.append(_index(Color.BLACK, bksq, wksq, push))
    if rank == _RANK_2 and push != wksq and push != bksq:
        succ.append(_index(Color.BLACK, bksq, wksq, push + _NORTH))
    return tuple(succ)


@functools.lru_cache(maxsize=None)
def build_bitbase() -> bytes:
    """Classify every position and return one byte per index, 1 where white wins."""
    db = bytearray(_initial_result(i) for i in range(MAX_INDEX))

    pending = []
    for idx in range(MAX_INDEX):
        if db[idx] == Result.UNKNOWN:
            white_to_move = (idx >> 12) & 1 == Color.WHITE
            good = Result.WIN if white_to_move else Result.DRAW
            bad = Result.DRAW if white_to_move else Result.WIN
            pending.append((idx, _successors(idx), int(good), int(bad)))

    # White: one winning move wins, all drawing moves draw.
    # Black: one drawing move draws, all losing moves lose.
    changed = True
    while changed:
        changed = False
        still_unknown = []
        for entry in pending:
            idx, succ, good, bad = entry
            r = 0
            for j in succ:
                r |= db[j]
            if r & good:
                db[idx] = good
                changed = True
            elif r & Result.UNKNOWN:
                still_unknown.append(entry)
            else:
                db[idx] = bad
                changed = True
        pending = still_unknown

    return bytes(1 if r == Result.WIN else 0 for r in db)


def probe(wksq: int, wpsq: int, bksq: int, stm: int) -> bool:
    """True if white wins with king on wksq and pawn on wpsq against king on bksq.

    The pawn must stand on files a to d and ranks 2 to 7.
    """
    for s in (wksq, wpsq, bksq):
        if not 0 <= s < 64:
            raise ValueError(f"square out of range: {s}")
    if file_of(wpsq) > 3:
        raise ValueError("the pawn must be on files a to d")
    if not _RANK_2 <= rank_of(wpsq) <= _RANK_7:
        raise ValueError("the pawn must be on ranks 2 to 7")
    return bool(build_bitbase()[_index(int(stm), bksq, wksq, wpsq)])