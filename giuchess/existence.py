"""Quick tests for whether a piece, or a whole side, has at least one legal move."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .attacks import is_legal_move, is_pawn_legal_move
from .bitboard import (
    BOTTOM,
    BOTTOMLEFT,
    BOTTOMRIGHT,
    COL1,
    COL8,
    FULL,
    LEFT,
    RIGHT,
    ROW1,
    ROW2,
    ROW4,
    ROW5,
    ROW7,
    ROW8,
    TOP,
    TOPLEFT,
    TOPRIGHT,
    column,
    row_col,
)
from .pieces import Piece, occupancy

_ROOK_DIRECTIONS = ((-1, LEFT), (1, RIGHT), (-8, BOTTOM), (8, TOP))
_BISHOP_DIRECTIONS = ((7, TOPLEFT), (9, TOPRIGHT), (-7, BOTTOMRIGHT), (-9, BOTTOMLEFT))

# (row delta, column delta, shift) in the order the jumps are tried.
_KNIGHT_JUMPS = (
    (2, 1, 17),
    (1, 2, 10),
    (-1, 2, -6),
    (-2, 1, -15),
    (-2, -1, -17),
    (-1, -2, -10),
    (1, -2, 6),
    (2, -1, 15),
)


def _shift(bm: int, step: int) -> int:
    if step >= 0:
        return (bm << step) & FULL
    return bm >> -step


def _masks(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> tuple[int, int, int]:
    """Return (own square, other friends, all enemies) masks."""
    pos = friends[order].pos
    return pos, occupancy(friends) & (pos ^ FULL), occupancy(enemies)


def _slides(
    order: int,
    friends: Sequence[Piece],
    enemies: Sequence[Piece],
    directions: Sequence[tuple[int, int]],
) -> bool:
    pos, friend_occ, enemy_occ = _masks(order, friends, enemies)
    for step, edge in directions:
        if pos & edge:
            continue
        work = pos
        while True:
            work = _shift(work, step)
            if work & friend_occ:
                break
            if work & enemy_occ:
                if is_legal_move(order, friends, enemies, work):
                    return True
                break
            if is_legal_move(order, friends, enemies, work):
                return True
            if work & edge or not work:
                break
    return False


def has_rook_move(order: int, friends: Sequence[Piece], enemies: Sequence[Piece]) -> bool:
    """Return whether ``friends[order]`` has a legal rook move."""
    return _slides(order, friends, enemies, _ROOK_DIRECTIONS)


def has_bishop_move(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> bool:
    """Return whether ``friends[order]`` has a legal bishop move."""
    return _slides(order, friends, enemies, _BISHOP_DIRECTIONS)


def has_queen_move(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> bool:
    """Return whether ``friends[order]`` has a legal queen move."""
    return has_rook_move(order, friends, enemies) or has_bishop_move(
        order, friends, enemies
    )


def has_knight_move(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> bool:
    """Return whether ``friends[order]`` has a legal knight move."""
    pos, friend_occ, _ = _masks(order, friends, enemies)
    row, col = row_col(pos)
    for d_row, d_col, step in _KNIGHT_JUMPS:
        if not (0 <= row + d_row <= 7 and 0 <= col + d_col <= 7):
            continue
        work = _shift(pos, step)
        if not work & friend_occ and is_legal_move(order, friends, enemies, work):
            return True
    return False


def _pawn_has_move(
    order: int,
    friends: Sequence[Piece],
    enemies: Sequence[Piece],
    forward: int,
    start_row: int,
    passant_row: int,
) -> bool:
    pos, friend_occ, enemy_occ = _masks(order, friends, enemies)
    occupied = friend_occ | enemy_occ
    left_step, right_step = (7, 9) if forward > 0 else (-9, -7)

    def legal(target: int) -> bool:
        return is_pawn_legal_move(order, friends, enemies, target)

    work = _shift(pos, forward)
    if not work & occupied:
        if legal(work):
            return True
        if pos & start_row:
            work = _shift(pos, 2 * forward)
            if not work & occupied and legal(work):
                return True

    if not pos & COL1:
        work = _shift(pos, left_step)
        if work & enemy_occ and legal(work):
            return True

    if not pos & COL8:
        work = _shift(pos, right_step)
        if work & enemy_occ and legal(work):
            return True

    if pos & passant_row:
        col = column(pos)
        if col != 7 and enemies[8 + col + 1].last_double_move:
            if legal(_shift(pos, right_step)):
                return True
        if col != 0 and enemies[8 + col - 1].last_double_move:
            if legal(_shift(pos, left_step)):
                return True

    return False


def has_white_pawn_move(
    order: int, white: Sequence[Piece], black: Sequence[Piece]
) -> bool:
    """Return whether the white pawn ``white[order]`` has a legal move."""
    return _pawn_has_move(order, white, black, 8, ROW2, ROW5)


def has_black_pawn_move(
    order: int, white: Sequence[Piece], black: Sequence[Piece]
) -> bool:
    """Return whether the black pawn ``black[order]`` has a legal move."""
    return _pawn_has_move(order, black, white, -8, ROW7, ROW4)


def has_king_move(order: int, friends: Sequence[Piece], enemies: Sequence[Piece]) -> bool:
    """Return whether the king ``friends[order]`` has a legal one-step move.

    Castling is not examined: a king that cannot step cannot castle either.
    """
    pos, friend_occ, _ = _masks(order, friends, enemies)

    def can(step: int) -> bool:
        work = _shift(pos, step)
        return not work & friend_occ and is_legal_move(order, friends, enemies, work)

    if not pos & ROW1:
        if can(-8):
            return True
        if not pos & COL1 and can(-9):
            return True
    if not pos & COL1:
        if can(-1):
            return True
        if not pos & ROW8 and can(7):
            return True
    if not pos & ROW8:
        if can(8):
            return True
        if not pos & COL8 and can(9):
            return True
    if not pos & COL8:
        if can(1):
            return True
        if not pos & ROW1 and can(-7):
            return True
    return False


_Checker = Callable[[int, Sequence[Piece], Sequence[Piece]], bool]

_CHECKERS: dict[str, _Checker] = {
    "r": has_rook_move,
    "n": has_knight_move,
    "b": has_bishop_move,
    "q": has_queen_move,
    "k": has_king_move,
}


def white_has_moves(white: Sequence[Piece], black: Sequence[Piece]) -> bool:
    """Return whether white has any legal move."""
    for index, piece in enumerate(white):
        if not piece.alive:
            continue
        if piece.kind == "p":
            if has_white_pawn_move(index, white, black):
                return True
        elif piece.kind in _CHECKERS and _CHECKERS[piece.kind](index, white, black):
            return True
    return False


def black_has_moves(white: Sequence[Piece], black: Sequence[Piece]) -> bool:
    """Return whether black has any legal move."""
    for index, piece in enumerate(black):
        if not piece.alive:
            continue
        if piece.kind == "p":
            if has_black_pawn_move(index, white, black):
                return True
        elif piece.kind in _CHECKERS and _CHECKERS[piece.kind](index, black, white):
            return True
    return False