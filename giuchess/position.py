"""The game state: both sides' pieces, the fifty-move counter, and move execution."""

from __future__ import annotations

from collections.abc import Sequence

from .attacks import gives_check
from .bitboard import FULL, column, square_mask
from .moves import Move
from .pieces import KING_INDEX, PAWN_VALUE, VALUES, Color, Piece, copy_side, starting_pieces

_PROMOTION_KINDS = ("q", "r", "b", "n")

Snapshot = tuple[list[Piece], list[Piece], int]


class Position:
    """Both sides' pieces plus the counters that moves update."""

    def __init__(self) -> None:
        self.white: list[Piece] = []
        self.black: list[Piece] = []
        self.rule50 = 0
        self.last_moved: Color | None = None
        self.reset()

    def reset(self) -> None:
        """Put every piece back on its starting square and clear the counter."""
        self.white[:] = starting_pieces(Color.WHITE)
        self.black[:] = starting_pieces(Color.BLACK)
        self.rule50 = 0

    def execute_move(
        self,
        order: int,
        friends: Sequence[Piece],
        enemies: Sequence[Piece],
        target: int,
        promotion: str | None,
    ) -> None:
        """Move ``friends[order]`` to ``target``, with captures, castling and promotion."""
        if promotion == "-":
            promotion = None
        mover = friends[order]
        if mover.kind == "p" and promotion is not None and promotion not in _PROMOTION_KINDS:
            raise ValueError(f"invalid promotion piece: {promotion!r}")

        self.last_moved = mover.color
        origin = mover.pos

        captured = next(
            (index for index, enemy in enumerate(enemies) if target & enemy.pos), None
        )
        if captured is not None:
            victim = enemies[captured]
            victim.pos = 0
            enemies[KING_INDEX].value -= victim.value
            self.rule50 = 0

        mover.pos = target

        if mover.kind == "p":
            self.rule50 = 0
            if promotion is not None:
                mover.kind = promotion
                mover.value = VALUES[promotion]
                friends[KING_INDEX].value += mover.value - PAWN_VALUE
            elif origin & ((target << 16) & FULL) or origin & (target >> 16):
                for index in range(8, 16):
                    friends[index].last_double_move = index == order
            else:
                for index in range(8, 16):
                    friends[index].last_double_move = False
                straight = origin & ((target << 8) & FULL) or origin & (target >> 8)
                if not straight and captured is None:
                    enemies[8 + column(target)].pos = 0
                    enemies[KING_INDEX].value -= PAWN_VALUE
        else:
            if captured is None:
                self.rule50 += 1
            for piece in friends:
                piece.last_double_move = False

        if mover.kind == "k":
            if origin & (target >> 2):
                friends[7].pos >>= 2
            if origin & ((target << 2) & FULL):
                friends[0].pos = (friends[0].pos << 3) & FULL

        enemies[KING_INDEX].under_check = gives_check(order, friends, enemies)
        mover.moved = True

    def play(self, text: str) -> None:
        """Play a move in coordinate notation such as ``e2e4`` or ``a7a8q``.

        Nothing happens when no piece stands on the origin square.
        """
        if len(text) < 4:
            raise ValueError(f"move too short: {text!r}")
        origin = square_mask(ord(text[1]) - ord("1"), ord(text[0]) - ord("a"))
        target = square_mask(ord(text[3]) - ord("1"), ord(text[2]) - ord("a"))
        promotion = text[4] if len(text) > 4 else None

        for index, (white, black) in enumerate(zip(self.white, self.black)):
            if white.pos == origin:
                self.execute_move(index, self.white, self.black, target, promotion)
                return
            if black.pos == origin:
                self.execute_move(index, self.black, self.white, target, promotion)
                return

    def apply(self, move: Move) -> None:
        """Play a generated move."""
        if move.color is Color.WHITE:
            self.execute_move(move.order, self.white, self.black, move.target, move.promotion)
        else:
            self.execute_move(move.order, self.black, self.white, move.target, move.promotion)

    def snapshot(self) -> Snapshot:
        """Return an independent copy of the pieces and the fifty-move counter."""
        return copy_side(self.white), copy_side(self.black), self.rule50

    def restore(self, snapshot: Snapshot) -> None:
        """Return to a state taken by :meth:`snapshot`; the snapshot stays reusable."""
        white, black, rule50 = snapshot
        self.white[:] = copy_side(white)
        self.black[:] = copy_side(black)
        self.rule50 = rule50