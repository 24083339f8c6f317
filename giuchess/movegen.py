"""Generation of the legal destination squares of every piece of a side."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol

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
    iter_squares,
    row_col,
)
from .moves import Move
from .pieces import Piece, occupancy

PROMOTIONS = ("q", "r", "b", "n")


class _RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def _shift(bm: int, step: int) -> int:
    if step >= 0:
        return (bm << step) & FULL
    return bm >> -step


def _masks(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> tuple[int, int, int]:
    """Return (own square, other friends, all enemies) masks."""
    pos = friends[order].pos
    friend_occ = occupancy(friends) & (pos ^ FULL)
    return pos, friend_occ, occupancy(enemies)


def _slide(
    order: int,
    friends: Sequence[Piece],
    enemies: Sequence[Piece],
    directions: Sequence[tuple[int, int]],
) -> int:
    pos, friend_occ, enemy_occ = _masks(order, friends, enemies)
    result = 0
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
                    result |= work
                break
            if is_legal_move(order, friends, enemies, work):
                result |= work
            if work & edge or not work:
                break
    return result


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


def rook_moves(order: int, friends: Sequence[Piece], enemies: Sequence[Piece]) -> int:
    """Return the mask of legal rook moves of ``friends[order]``."""
    return _slide(order, friends, enemies, _ROOK_DIRECTIONS)


def bishop_moves(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> int:
    """Return the mask of legal bishop moves of ``friends[order]``."""
    return _slide(order, friends, enemies, _BISHOP_DIRECTIONS)


def queen_moves(order: int, friends: Sequence[Piece], enemies: Sequence[Piece]) -> int:
    """Return the mask of legal queen moves of ``friends[order]``."""
    return rook_moves(order, friends, enemies) | bishop_moves(order, friends, enemies)


def knight_moves(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> int:
    """Return the mask of legal knight moves of ``friends[order]``."""
    pos, friend_occ, _ = _masks(order, friends, enemies)
    row, col = row_col(pos)
    result = 0
    for d_row, d_col, step in _KNIGHT_JUMPS:
        if not (0 <= row + d_row <= 7 and 0 <= col + d_col <= 7):
            continue
        work = _shift(pos, step)
        if not work & friend_occ and is_legal_move(order, friends, enemies, work):
            result |= work
    return result


def _pawn_moves(
    order: int,
    friends: Sequence[Piece],
    enemies: Sequence[Piece],
    forward: int,
    start_row: int,
    passant_row: int,
) -> int:
    pos, friend_occ, enemy_occ = _masks(order, friends, enemies)
    occupied = friend_occ | enemy_occ
    sign = 1 if forward > 0 else -1
    # Capture shifts towards the a-file and the h-file.
    left_step, right_step = (7, 9) if sign > 0 else (-9, -7)
    result = 0

    work = _shift(pos, forward)
    if not work & occupied:
        if is_pawn_legal_move(order, friends, enemies, work):
            result |= work
        if pos & start_row:
            work = _shift(pos, 2 * forward)
            if not work & occupied and is_pawn_legal_move(
                order, friends, enemies, work
            ):
                result |= work

    if not pos & COL1:
        work = _shift(pos, left_step)
        if work & enemy_occ and is_pawn_legal_move(order, friends, enemies, work):
            result |= work

    if not pos & COL8:
        work = _shift(pos, right_step)
        if work & enemy_occ and is_pawn_legal_move(order, friends, enemies, work):
            result |= work

    if pos & passant_row:
        col = column(pos)
        if col != 7 and enemies[8 + col + 1].last_double_move:
            work = _shift(pos, right_step)
            if is_pawn_legal_move(order, friends, enemies, work):
                result |= work
        if col != 0 and enemies[8 + col - 1].last_double_move:
            work = _shift(pos, left_step)
            if is_pawn_legal_move(order, friends, enemies, work):
                result |= work

    return result


def white_pawn_moves(order: int, white: Sequence[Piece], black: Sequence[Piece]) -> int:
    """Return the mask of legal moves of the white pawn ``white[order]``."""
    return _pawn_moves(order, white, black, 8, ROW2, ROW5)


def black_pawn_moves(order: int, white: Sequence[Piece], black: Sequence[Piece]) -> int:
    """Return the mask of legal moves of the black pawn ``black[order]``."""
    return _pawn_moves(order, black, white, -8, ROW7, ROW4)


def king_moves(order: int, friends: Sequence[Piece], enemies: Sequence[Piece]) -> int:
    """Return the mask of legal king moves of ``friends[order]``, castling included."""
    pos, friend_occ, enemy_occ = _masks(order, friends, enemies)
    king = friends[order]
    result = 0

    def consider(step: int) -> None:
        nonlocal result
        work = _shift(pos, step)
        if not work & friend_occ and is_legal_move(order, friends, enemies, work):
            result |= work

    if not pos & ROW1:
        consider(-8)
        if not pos & COL1:
            consider(-9)
    if not pos & COL1:
        consider(-1)
        if not pos & ROW8:
            consider(7)
    if not pos & ROW8:
        consider(8)
        if not pos & COL8:
            consider(9)
    if not pos & COL8:
        consider(1)
        if not pos & ROW1:
            consider(-7)

    if king.moved:
        return result

    occupied = friend_occ | enemy_occ

    rook = friends[order + 3]
    if _shift(pos, 1) & result and not rook.moved and rook.alive:
        work = _shift(pos, 2)
        if not work & occupied:
            if king.under_check:
                return result
            if is_legal_move(order, friends, enemies, work):
                result |= work

    rook = friends[order - 4]
    if _shift(pos, -1) & result and not rook.moved and rook.alive:
        if not _shift(pos, -3) & occupied:
            work = _shift(pos, -2)
            if not work & occupied:
                if king.under_check:
                    return result
                if is_legal_move(order, friends, enemies, work):
                    result |= work

    return result


def compute_white_moves(white: Sequence[Piece], black: Sequence[Piece]) -> None:
    """Store in each living white piece the mask of its legal moves."""
    generators = {
        "r": rook_moves,
        "n": knight_moves,
        "b": bishop_moves,
        "q": queen_moves,
        "k": king_moves,
    }
    for index, piece in enumerate(white):
        if not piece.alive:
            continue
        if piece.kind == "p":
            piece.legal_moves = white_pawn_moves(index, white, black)
        elif piece.kind in generators:
            piece.legal_moves = generators[piece.kind](index, white, black)


def compute_black_moves(white: Sequence[Piece], black: Sequence[Piece]) -> None:
    """Store in each living black piece the mask of its legal moves."""
    generators = {
        "r": rook_moves,
        "n": knight_moves,
        "b": bishop_moves,
        "q": queen_moves,
        "k": king_moves,
    }
    for index, piece in enumerate(black):
        if not piece.alive:
            continue
        if piece.kind == "p":
            piece.legal_moves = black_pawn_moves(index, white, black)
        elif piece.kind in generators:
            piece.legal_moves = generators[piece.kind](index, black, white)


def list_moves(
    pieces: Sequence[Piece], rng: _RandomSource | None = None
) -> list[Move]:
    """Expand the stored legal-move masks of a side into a list of moves.

    Pieces are visited from a random starting index; the result lists the
    moves in the reverse of the order they were found. A pawn reaching the
    last rank yields one move per promotion piece.
    """
    source = rng if rng is not None else random
    start = source.randrange(16)
    found: list[Move] = []
    count = len(pieces)
    for offset in range(count):
        index = (offset + start) % count
        piece = pieces[index]
        if not piece.alive:
            continue
        for target in iter_squares(piece.legal_moves):
            if piece.kind == "p" and target & (ROW1 | ROW8):
                found.extend(
                    Move(index, piece.color, target, promotion)
                    for promotion in PROMOTIONS
                )
            else:
                found.append(Move(index, piece.color, target))
    found.reverse()
    return found