"""The engine's side of the XBoard/WinBoard text protocol."""

from __future__ import annotations

import logging
import random
import re
import sys
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import TextIO

from .movegen import compute_black_moves, compute_white_moves, list_moves
from .pieces import KING_INDEX, Piece
from .position import Position
from .search import START_DEPTH, Searcher

logger = logging.getLogger(__name__)

ZEITNOT = 3800
ZEITNOT2 = 500
FIFTY_MOVE_PLIES = 99

FEATURES = (
    'feature setboard=1 sigint=0 variants="normal" draw=1 reuse=1 '
    'myname="GiuChess-1.0" done=1\n'
)

_NUMBER_ARGUMENT = re.compile(r"^\s*\S+\s+([+-]?\d+)")


def is_move(text: str) -> bool:
    """Return whether ``text`` starts with a coordinate move such as ``e2e4``."""
    if len(text) < 4:
        return False
    return (
        "a" <= text[0] <= "h"
        and "1" <= text[1] <= "8"
        and "a" <= text[2] <= "h"
        and "1" <= text[3] <= "8"
    )


def _side_insufficient(side: Sequence[Piece]) -> bool:
    counts = Counter(
        piece.kind
        for index, piece in enumerate(side)
        if index != KING_INDEX and piece.alive
    )
    if counts["r"] + counts["q"] + counts["p"]:
        return False
    return counts["n"] + counts["b"] <= 1


def insufficient_material(position: Position) -> bool:
    """Return whether each side has at most a king and one minor piece."""
    return _side_insufficient(position.white) and _side_insufficient(position.black)


def _read_int(line: str) -> int | None:
    match = _NUMBER_ARGUMENT.match(line)
    return int(match.group(1)) if match else None


class XBoardEngine:
    """Reads XBoard commands, keeps the game and answers with its own moves."""

    def __init__(
        self, out: TextIO | None = None, rng=None, start_depth: int = START_DEPTH
    ) -> None:
        if start_depth < 3:
            raise ValueError(f"start depth must be at least 3, got {start_depth}")
        self.out = out if out is not None else sys.stdout
        self.rng = rng if rng is not None else random.Random()
        self.start_depth = start_depth
        self.position = Position()
        self.force = False
        self.mtime = 0
        self.otim = 0
        self.white_to_move = False
        self.first_move_done = False
        self.cont = 0

    def _write(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    def _depth(self) -> int:
        if self.mtime < ZEITNOT2:
            return self.start_depth - 2
        if self.mtime < ZEITNOT:
            return self.start_depth - 1
        return self.start_depth

    def fifty_moves(self) -> bool:
        """Return whether the fifty-move limit is reached, clearing the counter if so."""
        if self.position.rule50 == FIFTY_MOVE_PLIES:
            self.position.rule50 = 0
            return True
        return False

    def _move(self, white: bool) -> None:
        position = self.position
        if insufficient_material(position):
            self._write("1/2-1/2 {insufficient material}\n")
            position.reset()
            return
        if self.fifty_moves():
            self._write("1/2-1/2 {50 moves rule}\n")
            position.reset()
            return

        if white:
            compute_white_moves(position.white, position.black)
            movers = position.white
        else:
            compute_black_moves(position.white, position.black)
            movers = position.black
        if not list_moves(movers, self.rng):
            if movers[KING_INDEX].under_check:
                self._write("0-1\n" if white else "1-0\n")
            else:
                self._write("1/2-1/2 {Stalemate}\n")
            return

        searcher = Searcher(position, self._depth(), self.rng)
        best = searcher.search(-1 if white else 1)
        if best is None:
            return
        position.play(best)
        self._write(f"move {best}\n")

    def white_move(self) -> None:
        """Think for white and play its move, or announce the game's result."""
        self._move(white=True)

    def black_move(self) -> None:
        """Think for black and play its move, or announce the game's result."""
        self._move(white=False)

    def _reply(self) -> None:
        if self.white_to_move:
            self.white_move()
        else:
            self.black_move()

    def handle(self, line: str) -> bool:
        """Act on one command line; return False once ``quit`` is received."""
        if line == "xboard":
            self._write("\n")
        elif line == "protover 2":
            self._write("Chess\n")
            self._write(FEATURES)
        elif line == "new":
            self.first_move_done = False
            self.white_to_move = True
            self.force = False
            self.position.reset()
            self.cont = 0
        elif line == "force":
            self.force = True
        elif line == "quit":
            return False
        elif "time" in line:
            value = _read_int(line)
            if value is not None:
                self.mtime = value
            logger.debug("%d - %d", self.cont, self.mtime)
        elif "otim" in line:
            value = _read_int(line)
            if value is not None:
                self.otim = value
        elif line == "white":
            self.white_to_move = True
        elif line == "black":
            self.white_to_move = False
        elif line == "go":
            self.force = False
            self.cont += 1
            self._reply()
            self.first_move_done = True
        elif is_move(line):
            self.position.play(line)
            if not self.first_move_done:
                self.white_to_move = False
                self.first_move_done = True
            if not self.force:
                self.cont += 1
                self._reply()
        return True

    def run(self, lines: Iterable[str]) -> None:
        """Handle command lines until ``quit`` or the end of the input."""
        for raw in lines:
            line = raw[:-1] if raw.endswith("\n") else raw
            logger.debug("%s", line)
            if not self.handle(line):
                break