"""The engine's side of the UCI text protocol."""

from __future__ import annotations

import random
import re
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TextIO

from .pieces import Color
from .position import Position
from .search import START_DEPTH, Searcher

ENGINE_NAME = "GiuChess-2.0"
NULL_MOVE = "0000"

OPTIONS = (
    "option name Hash type spin default 32 min 1 max 1024",
    "option name Threads type spin default 1 min 1 max 1",
    "option name Depth type spin default 5 min 1 max 10",
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_INTEGER_PARAMS = {
    "depth": "depth",
    "movetime": "movetime",
    "wtime": "wtime",
    "btime": "btime",
    "winc": "winc",
    "binc": "binc",
    "movestogo": "movestogo",
}


@dataclass
class SearchParams:
    """Limits given by a ``go`` command."""

    depth: int = START_DEPTH
    movetime: int = 0
    wtime: int = 0
    btime: int = 0
    winc: int = 0
    binc: int = 0
    movestogo: int = 0
    infinite: bool = False


def _to_int(text: str) -> int:
    """Read a leading integer the lenient way: anything unreadable counts as 0."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_go(line: str) -> SearchParams:
    """Return the search parameters of a ``go`` command line."""
    values: dict[str, object] = {}
    tokens = iter(line.split()[1:])
    for token in tokens:
        if token in _INTEGER_PARAMS:
            value = next(tokens, None)
            if value is not None:
                values[_INTEGER_PARAMS[token]] = _to_int(value)
        elif token == "infinite":
            values["infinite"] = True
    return SearchParams(**values)


def square_index(text: str) -> int:
    """Return the index 0..63 (a1 = 0, h8 = 63) of a square name such as ``e4``."""
    if len(text) != 2:
        raise ValueError(f"not a square name: {text!r}")
    file = ord(text[0]) - ord("a")
    rank = ord(text[1]) - ord("1")
    if not (0 <= file <= 7 and 0 <= rank <= 7):
        raise ValueError(f"not a square name: {text!r}")
    return rank * 8 + file


def square_name(index: int) -> str:
    """Return the name of the square with index 0..63."""
    if not 0 <= index <= 63:
        raise ValueError(f"square index out of range: {index}")
    rank, file = divmod(index, 8)
    return chr(ord("a") + file) + chr(ord("1") + rank)


class UciEngine:
    """Reads UCI commands, keeps the game and answers with its best moves."""

    def __init__(self, out: TextIO | None = None, rng=None) -> None:
        self.out = out if out is not None else sys.stdout
        self.rng = rng if rng is not None else random.Random()
        self.position = Position()
        self.params = SearchParams()

    def _send(self, message: str) -> None:
        self.out.write(message + "\n")
        self.out.flush()

    def set_startpos(self) -> None:
        """Reset to the starting position with white to move."""
        self.position.reset()
        self.position.last_moved = Color.BLACK

    def parse_position(self, line: str) -> None:
        """Set up the position described by a ``position`` command line.

        FEN positions are not understood and fall back to the starting position.
        """
        tokens = line.split()
        if len(tokens) < 2:
            return
        if tokens[1] == "startpos":
            self.set_startpos()
            if len(tokens) > 2 and tokens[2] == "moves":
                start = line.find("moves")
                if start >= 0:
                    self.make_moves(line[start + 6:])
        elif tokens[1] == "fen":
            self.set_startpos()

    def make_moves(self, moves: str) -> None:
        """Play space-separated moves, stopping at the first one that is unreadable."""
        for token in moves.split():
            if not self.parse_move(token):
                break

    def parse_move(self, text: str) -> bool:
        """Play one move in coordinate notation; return False if it is too short.

        Only a five-character move keeps its promotion letter; anything longer
        is cut to its first four characters.
        """
        if len(text) < 4:
            return False
        self.position.play(text if len(text) == 5 else text[:4])
        return True

    def search_and_move(self) -> str | None:
        """Search for the side to move, announce the best move and play it.

        With no legal move the null move is announced and nothing is played.
        """
        color = 1 if self.position.last_moved is Color.WHITE else -1
        searcher = Searcher(self.position, self.params.depth, self.rng)
        best = searcher.search(color)
        if best is None:
            self._send(f"bestmove {NULL_MOVE}")
            return None
        self._send(f"bestmove {best}")
        self.position.play(best)
        return best

    def handle(self, line: str) -> bool:
        """Act on one command line; return False once ``quit`` is received.

        Commands are recognised by prefix, in order, so ``ucinewgame`` is
        answered like ``uci``.
        """
        if line.startswith("uci"):
            self._send(f"id name {ENGINE_NAME}")
            self._send("id author GiuChess")
            for option in OPTIONS:
                self._send(option)
            self._send("uciok")
        elif line.startswith("isready"):
            self._send("readyok")
        elif line.startswith("position"):
            self.parse_position(line)
        elif line.startswith("go"):
            self.params = parse_go(line)
            self.search_and_move()
        elif line.startswith("quit"):
            return False
        return True

    def run(self, lines: Iterable[str]) -> None:
        """Handle command lines until ``quit`` or the end of the input."""
        for raw in lines:
            line = raw.split("\n", 1)[0]
            if not self.handle(line):
                break