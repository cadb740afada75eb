# kestrelchess

Building blocks for a chess engine, in plain Python with no third-party
dependencies.

## Modules

- `kestrelchess.bitboard`: 64-bit bitboards as Python integers. The module
  has the `Color` and `PieceType` enums and square helpers (`file_of`,
  `rank_of`, `make_square`, `relative_rank`, `relative_square`, `distance`,
  `file_distance`, `rank_distance`, `edge_distance`). It also has bitboard
  operations (`square_bb`, `shift`, `popcount`, `lsb`, `msb`,
  `iter_squares`, `frontmost_sq`, `more_than_one`), pawn attacks
  (`pawn_attacks_bb`, `pawn_attacks_from`, `pawn_double_attacks_bb`) and
  piece attacks (`pseudo_attacks`, `attacks_bb`). The slider attacks are
  looked up through magic bitboards (`Magic`, `ROOK_MAGICS`,
  `BISHOP_MAGICS`). For lines between squares there are `line_bb`,
  `between_bb` and `aligned`. For pawn structure there are
  `forward_ranks_bb`, `forward_file_bb`, `pawn_attack_span` and
  `passed_pawn_span`. `pretty()` draws a bitboard in ASCII.
- `kestrelchess.bitbase`: the king-and-pawn versus king bitbase.
  `build_bitbase()` classifies every position by retrograde iteration.
  It returns one byte per index, set to 1 where white wins, and caches
  the result. `probe(wksq, wpsq, bksq, stm)` tells whether the side with
  the pawn wins. `Result` lists the classification values.
- `kestrelchess.material`: the material-evaluation terms, all driven by
  `MaterialCount` (pawns, knights, bishops, rooks, queens for one side).
  `imbalance` and `material_imbalance` give the quadratic imbalance term
  as a `Score` (middlegame and endgame pair). `game_phase` maps non-pawn
  material onto 0..128. `default_scale_factors` gives the scale factors
  for material-only draws.
- `kestrelchess.misc`: small helpers.
  - `PRNG`, the xorshift64* generator, with `rand64` and `sparse_rand`.
  - `RunningAverage`, an integer running average.
  - `HashTable(factory, size)`, a fixed-size table indexed by the low
    bits of a key.
  - `sigmoid`, an integer sigmoid.
  - `mul_hi64`, the high 64 bits of a 128-bit product.
  - `now()`, a millisecond monotonic clock.
- `kestrelchess.runtime`: process-level helpers.
  - `engine_info()` gives the engine name with a date or version stamp.
  - `DebugStats` keeps thread-safe hit and mean counters and produces a
    `report()`.
  - `CommandLine.from_argv0` works out the executable and working
    directories.
- `kestrelchess.benchmark`: `setup_bench()` builds the list of UCI commands
  that a benchmark run sends to an engine. `DEFAULTS` holds the default
  position set.

## Installation

```
pip install .
```

## Benchmark command lists

`setup_bench(current_fen, args)` takes the FEN of the current position and
up to six arguments, in this order:

1. Hash size in MB.
2. Number of threads.
3. Limit value.
4. Position source: `default`, `current`, or the path of a file with one
   FEN per line.
5. Limit type: `depth`, `perft`, `nodes`, `movetime` or `eval`.
6. Evaluation type: `mixed`, `classical` or `NNUE`.

`args` can be a string or a sequence of strings. Missing arguments default
to `16 1 13 default depth mixed`. A position file that cannot be opened
raises `OSError`.

```python
from kestrelchess.benchmark import START_FEN, setup_bench

commands = setup_bench(START_FEN, ["64", "4", "5000", "current", "movetime"])
for line in commands:
    print(line)
```

The `kestrelchess-bench` command prints the same list, one command per line.
With `current` it uses the standard starting position. If the position file
cannot be opened, it prints an error and exits with status 1.

```
kestrelchess-bench 16 1 5 default perft
```

## Bitboards

```python
from kestrelchess.bitboard import PieceType, attacks_bb, make_square, popcount, pretty

e4 = make_square(4, 3)
rook = attacks_bb(PieceType.ROOK, e4, 0)
print(popcount(rook))   # 14
print(pretty(rook))
```

## KPK bitbase

```python
from kestrelchess.bitbase import probe
from kestrelchess.bitboard import Color, make_square

win = probe(make_square(3, 5), make_square(3, 4), make_square(3, 7), Color.WHITE)
```

The pawn must stand on files a to d and ranks 2 to 7. Otherwise, or for an
off-board square, `probe` raises `ValueError`. The bitbase is built the first
time it is probed. Call `build_bitbase()` to build it up front.

## What the package does not do

There is no board or position representation, move generation, search or
full evaluation, and no UCI loop. `kestrelchess-bench` only prints the
benchmark commands. It does not run them against an engine.

## Tests

```
pip install .[test]
pytest
```