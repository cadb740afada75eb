import pytest

from kestrelchess.benchmark import DEFAULTS, START_FEN, main, setup_bench

NNUE_OFF = "setoption name Use NNUE value false"
NNUE_ON = "setoption name Use NNUE value true"


def _positions():
    return [f for f in DEFAULTS if "setoption" not in f]


def test_default_header_and_trailer():
    cmds = setup_bench(START_FEN)
    assert cmds[:3] == [
        "setoption name Threads value 1",
        "setoption name Hash value 16",
        "ucinewgame",
    ]
    assert cmds[-1] == NNUE_ON


def test_default_go_commands():
    cmds = setup_bench(START_FEN, "")
    gos = [c for c in cmds if c.startswith("go ")]
    assert len(gos) == len(_positions())
    assert set(gos) == {"go depth 13"}
    positions = [c[len("position fen "):] for c in cmds if c.startswith("position fen ")]
    assert positions == _positions()


def test_setoption_lines_pass_through():
    cmds = setup_bench(START_FEN)
    passed = [c for c in cmds if c.startswith("setoption name UCI_Chess960")]
    assert passed == [f for f in DEFAULTS if "setoption" in f]


def test_mixed_alternates_eval_type():
    cmds = setup_bench(START_FEN, ["16", "1", "13"])
    toggles = [c for c in cmds[:-1] if c in (NNUE_OFF, NNUE_ON)]
    assert toggles[0] == NNUE_OFF
    assert toggles[1] == NNUE_ON
    assert toggles == [NNUE_OFF if i % 2 == 0 else NNUE_ON for i in range(len(toggles))]


def test_classical_and_nnue_eval_types():
    classical = setup_bench(START_FEN, "16 1 13 default depth classical")
    assert NNUE_ON not in classical[:-1]
    assert classical.count(NNUE_OFF) == len(_positions())
    nnue = setup_bench(START_FEN, "16 1 13 default depth NNUE")
    assert NNUE_OFF not in nnue
    assert nnue.count(NNUE_ON) == len(_positions()) + 1


def test_current_position_with_movetime():
    fen = "8/8/8/8/8/6k1/6p1/6K1 w - -"
    cmds = setup_bench(fen, "64 4 5000 current movetime")
    assert cmds == [
        "setoption name Threads value 4",
        "setoption name Hash value 64",
        "ucinewgame",
        NNUE_OFF,
        f"position fen {fen}",
        "go movetime 5000",
        NNUE_ON,
    ]


def test_eval_limit_type():
    cmds = setup_bench(START_FEN, "16 1 13 current eval")
    assert "eval" in cmds
    assert not any(c.startswith("go") for c in cmds)


def test_fen_file_skips_blank_lines(tmp_path):
    path = tmp_path / "fens.txt"
    path.write_text(f"{START_FEN}\n\n{DEFAULTS[3]}\n")
    cmds = setup_bench(START_FEN, ["16", "1", "5", str(path), "perft"])
    positions = [c for c in cmds if c.startswith("position fen ")]
    assert positions == [f"position fen {START_FEN}", f"position fen {DEFAULTS[3]}"]
    assert cmds.count("go perft 5") == 2


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        setup_bench(START_FEN, ["16", "1", "13", str(tmp_path / "absent.fen")])


def test_main_prints_commands(capsys):
    assert main(["32", "2", "7", "current"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == setup_bench(START_FEN, ["32", "2", "7", "current"])


def test_main_reports_missing_file(tmp_path, capsys):
    missing = str(tmp_path / "absent.fen")
    assert main(["16", "1", "13", missing]) == 1
    assert f"Unable to open file {missing}" in capsys.readouterr().err