"""Pieces, colours and the starting array of each side."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

PAWN_VALUE = 1.0
KNIGHT_VALUE = 2.9
BISHOP_VALUE = 3.1
ROOK_VALUE = 5.0
QUEEN_VALUE = 9.0

VALUES = {
    "p": PAWN_VALUE,
    "n": KNIGHT_VALUE,
    "b": BISHOP_VALUE,
    "r": ROOK_VALUE,
    "q": QUEEN_VALUE,
}

# The king's value carries the side's whole material.
KING_VALUE = (
    2 * ROOK_VALUE
    + 2 * KNIGHT_VALUE
    + 2 * BISHOP_VALUE
    + QUEEN_VALUE
    + 8 * PAWN_VALUE
)

BACK_RANK = "rnbqkbnr"
KING_INDEX = 4


class Color(Enum):
    WHITE = "W"
    BLACK = "B"

    def opposite(self) -> "Color":
        """Return the other colour."""
        return Color.BLACK if self is Color.WHITE else Color.WHITE


@dataclass
class Piece:
    """One man of a side; ``pos`` is a single-square mask, 0 once captured."""

    color: Color
    kind: str
    value: float
    pos: int = 0
    legal_moves: int = 0
    last_double_move: bool = False
    moved: bool = False
    under_check: bool = False

    @property
    def alive(self) -> bool:
        return self.pos != 0


def starting_pieces(color: Color) -> list[Piece]:
    """Return the sixteen pieces of ``color`` in their starting squares.

    Indices 0-7 are the back rank from the a-file, 8-15 the pawns.
    """
    back_shift, pawn_shift = (0, 8) if color is Color.WHITE else (56, 48)
    pieces = []
    for index, kind in enumerate(BACK_RANK):
        value = KING_VALUE if kind == "k" else VALUES[kind]
        pieces.append(Piece(color, kind, value, pos=1 << (back_shift + index)))
    for index in range(8):
        pieces.append(Piece(color, "p", PAWN_VALUE, pos=1 << (pawn_shift + index)))
    return pieces


def copy_side(pieces: Iterable[Piece]) -> list[Piece]:
    """Return independent copies of a side's pieces."""
    return [dataclasses.replace(piece) for piece in pieces]


def occupancy(pieces: Iterable[Piece]) -> int:
    """Return the mask of all squares occupied by ``pieces``."""
    mask = 0
    for piece in pieces:
        mask |= piece.pos
    return mask