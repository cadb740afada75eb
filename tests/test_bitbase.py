import pytest

from kestrelchess.bitbase import MAX_INDEX, build_bitbase, probe
from kestrelchess.bitboard import (
    Color,
    PieceType,
    distance,
    iter_squares,
    make_square,
    pawn_attacks_from,
    pseudo_attacks,
)


def sq(name):
    return make_square(ord(name[0]) - ord("a"), int(name[1]) - 1)


def test_bitbase_shape_and_contents():
    data = build_bitbase()
    assert len(data) == MAX_INDEX
    assert set(data) == {0, 1}


def test_bitbase_holds_both_wins_and_non_wins():
    wins = sum(build_bitbase())
    assert 0 < wins < MAX_INDEX


def test_free_promotion_is_win():
    for bk in ("h1", "h2", "g1", "f3"):
        assert probe(sq("a1"), sq("b7"), sq(bk), Color.WHITE)


def test_undefended_pawn_captured_is_draw():
    assert not probe(sq("a1"), sq("d4"), sq("e5"), Color.BLACK)


@pytest.mark.parametrize("stm", [Color.WHITE, Color.BLACK])
def test_rook_pawn_with_king_in_corner_draws(stm):
    assert not probe(sq("h1"), sq("a2"), sq("a8"), stm)


@pytest.mark.parametrize("stm", [Color.WHITE, Color.BLACK])
def test_king_on_sixth_in_front_of_pawn_wins(stm):
    assert probe(sq("d6"), sq("d5"), sq("d8"), stm)


def test_adjacent_kings_never_win():
    psq = sq("c4")
    for wk in range(64):
        for bk in iter_squares(pseudo_attacks(PieceType.KING, wk)):
            for stm in (Color.WHITE, Color.BLACK):
                assert not probe(wk, psq, bk, stm)


def test_black_to_move_win_has_only_losing_replies():
    wk, psq, bk = sq("d6"), sq("d5"), sq("d8")
    assert probe(wk, psq, bk, Color.BLACK)
    replies = [
        to
        for to in iter_squares(pseudo_attacks(PieceType.KING, bk))
        if distance(to, wk) > 1
        and to != psq
        and not pawn_attacks_from(Color.WHITE, psq) & (1 << to)
    ]
    assert replies
    for to in replies:
        assert probe(wk, psq, to, Color.WHITE)


def test_pawn_on_wrong_file_rejected():
    with pytest.raises(ValueError):
        probe(sq("a1"), sq("e4"), sq("h8"), Color.WHITE)


@pytest.mark.parametrize("pawn", ["b1", "b8"])
def test_pawn_on_wrong_rank_rejected(pawn):
    with pytest.raises(ValueError):
        probe(sq("h1"), sq(pawn), sq("h8"), Color.WHITE)