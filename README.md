# giuchess

A compact chess engine built on 64-bit bitboards. It reads commands on
standard input and answers on standard output, speaking either the XBoard
(WinBoard) protocol or the UCI protocol, so it can be registered as an
engine in a chess GUI. It has no dependencies beyond the Python standard
library.

## Installation

```
pip install .
```

## Running the engine

XBoard mode (the default):

```
giuchess
```

UCI mode:

```
giuchess uci
```

In a GUI, register `giuchess` as an XBoard engine, or `giuchess uci` as a
UCI engine.

### XBoard mode

Commands understood: `xboard`, `protover 2`, `new`, `force`, `go`,
`white`, `black`, `time N`, `otim N`, `quit`, and moves in coordinate
notation such as `e2e4` or `e7e8q`.

- The engine answers with `move <move>`.
- With no legal move it announces `1-0` or `0-1` for checkmate, and
  `1/2-1/2 {Stalemate}` otherwise.
- It announces `1/2-1/2 {insufficient material}` when each side has at most
  a king and one minor piece. It announces `1/2-1/2 {50 moves rule}` when the
  fifty-move counter reaches its limit. Either draw resets the board.
- The search depth is 5 plies. Below 3800 on the engine's clock (`time`) it
  drops to 4, and below 500 to 3.

### UCI mode

Commands are recognised by their prefix:

- `uci`: answers with `id name GiuChess-2.0`, `id author GiuChess`, three
  `option` lines (Hash, Threads, Depth) and `uciok`. Any line starting with
  `uci`, `ucinewgame` included, gets this same answer.
- `isready`: answers `readyok`.
- `position startpos [moves ...]`: sets up the starting position and plays
  the moves.
- `go [depth N] [movetime N] [wtime N] [btime N] [winc N] [binc N]
  [movestogo N] [infinite]`: searches, answers `bestmove <move>` and plays
  that move on the engine's board. If there is no legal move it answers
  `bestmove 0000`.
- `quit`: stops the engine.

Other lines are ignored. The default search depth is 5 plies.

## Using it as a library

```python
from giuchess.position import Position
from giuchess.search import Searcher

position = Position()
position.play("e2e4")
searcher = Searcher(position, depth=3)
best = searcher.search(1)   # 1: white made the last move, so black plays
print(best)                 # e.g. "e7e5"; the position itself is unchanged
```

`Searcher.search(color)` takes `1` when white moved last and `-1` when
black did. It returns the move in coordinate notation, or `None` when
there is no legal move.

The modules:

- `giuchess.bitboard`: board masks and helpers (`row_col`, `column`,
  `square_mask`, `iter_squares`, `render`).
- `giuchess.pieces`: `Color`, `Piece`, `starting_pieces`, `copy_side`,
  `occupancy`.
- `giuchess.moves`: the `Move` record, `move_text` and `format_moves`.
- `giuchess.attacks`: attack and legality tests (`is_illegal`,
  `is_legal_move`, `gives_check`, and others).
- `giuchess.movegen`: legal move generation per piece and per side, and
  `list_moves`.
- `giuchess.existence`: quick tests for whether a piece or a side has any
  legal move (`white_has_moves`, `black_has_moves`, and others).
- `giuchess.position`: `Position`, which plays moves (`play`, `apply`,
  `execute_move`) with captures, castling, en passant and promotion, and
  takes and restores snapshots.
- `giuchess.search`: `material`, `centre`, `evaluate` and the alpha-beta
  `Searcher`. The evaluation is material balance plus a bonus for central
  pieces plus a small random term, so the engine's choice among equal moves
  varies from run to run.
- `giuchess.xboard`: `XBoardEngine`, `is_move`, `insufficient_material`.
- `giuchess.uci`: `UciEngine`, `SearchParams`, `parse_go`, `square_index`,
  `square_name`.
- `giuchess.cli`: `main`, the entry point of the `giuchess` command.

Both engines take an output stream and a random generator, for example
`UciEngine(out=io.StringIO(), rng=random.Random(0))`, and their `run`
method accepts any iterable of command lines.

## Limitations

- FEN is not understood: `position fen ...` in UCI sets up the starting
  position instead.
- The UCI search always runs to a fixed depth. `movetime`, `wtime`, `btime`,
  `winc`, `binc`, `movestogo` and `infinite` are read but do not affect it.
  `stop` and `setoption` are ignored.
- There is no opening book, no pondering and no draw offers.
- Moves sent to the engine are not checked for legality. A move from an
  empty square is ignored.

## Running the tests

```
pip install .[test]
pytest
```