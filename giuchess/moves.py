"""Candidate moves and their coordinate notation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .bitboard import row_col
from .pieces import Color, Piece


def _square_name(bm: int) -> str:
    row, col = row_col(bm)
    return chr(ord("a") + col) + chr(ord("1") + row)


def move_text(origin: int, target: int, promotion: str | None) -> str:
    """Return coordinate notation such as ``e2e4`` or ``e7e8q``."""
    return _square_name(origin) + _square_name(target) + (promotion or "")


@dataclass(frozen=True)
class Move:
    """A move of piece ``order`` of ``color`` to the square mask ``target``."""

    order: int
    color: Color
    target: int
    promotion: str | None = None
    evaluation: float = 0.0

    def text(self, friends: Sequence[Piece]) -> str:
        """Return the move's notation, taking the origin from the mover's side."""
        return move_text(friends[self.order].pos, self.target, self.promotion)


def format_moves(
    moves: Iterable[Move], white: Sequence[Piece], black: Sequence[Piece]
) -> str:
    """Return one line of notation per move."""
    return "".join(
        move.text(white if move.color is Color.WHITE else black) + "\n"
        for move in moves
    )