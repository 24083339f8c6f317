"""Attack detection: whether a piece reaches a king, and whether a move is legal."""

from __future__ import annotations

import itertools
from collections.abc import Sequence

from .bitboard import COL1, COL8, FULL, ROW4, ROW5, column, iter_squares, row_col
from .pieces import KING_INDEX, Color, Piece


def _shift(bm: int, step: int) -> int:
    """Shift a mask towards higher squares for positive steps, lower for negative."""
    if step >= 0:
        return (bm << step) & FULL
    return bm >> -step


def _occupancies(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> tuple[int, int, int]:
    """Return (friends except ``order``, all enemies, enemy king) masks."""
    friend_occ = enemy_occ = enemy_king = 0
    for index, (friend, enemy) in enumerate(zip(friends, enemies)):
        enemy_occ |= enemy.pos
        if enemy.kind == "k":
            enemy_king = enemy.pos
        if index != order:
            friend_occ |= friend.pos
    return friend_occ, enemy_occ, enemy_king


def _ray_reaches_king(
    start: int,
    step: int,
    count: int | None,
    friend_occ: int,
    enemy_occ: int,
    enemy_king: int,
) -> bool:
    """Walk a ray from ``start``; true if the first occupied square is the king."""
    work = start
    steps = range(count) if count is not None else itertools.count()
    for _ in steps:
        work = _shift(work, step)
        if not work:
            return False
        if work & friend_occ:
            return False
        if work & enemy_king:
            return True
        if work & enemy_occ:
            return False
    return False


def rook_attacks_king(
    order: int,
    friends: Sequence[Piece],
    enemies: Sequence[Piece],
    king_row: int,
    king_col: int,
) -> bool:
    """Return whether ``friends[order]`` reaches the enemy king along a rank or file."""
    pos = friends[order].pos
    row, col = row_col(pos)
    if king_row == row:
        occ = _occupancies(order, friends, enemies)
        if col > king_col:
            return _ray_reaches_king(pos, -1, col, *occ)
        return _ray_reaches_king(pos, 1, 7 - col, *occ)
    if king_col == col:
        occ = _occupancies(order, friends, enemies)
        if row > king_row:
            return _ray_reaches_king(pos, -8, row, *occ)
        return _ray_reaches_king(pos, 8, 7 - row, *occ)
    return False


def bishop_attacks_king(
    order: int,
    friends: Sequence[Piece],
    enemies: Sequence[Piece],
    king_row: int,
    king_col: int,
) -> bool:
    """Return whether ``friends[order]`` reaches the enemy king along a diagonal."""
    pos = friends[order].pos
    row, col = row_col(pos)
    delta_r = row - king_row
    delta_c = col - king_col
    if delta_r != delta_c and delta_r != -delta_c:
        return False
    occ = _occupancies(order, friends, enemies)
    if delta_r > 0 and delta_c > 0:
        step = -9
    elif delta_r > 0 and delta_c < 0:
        step = -7
    elif delta_r < 0 and delta_c > 0:
        step = 7
    else:
        step = 9
    return _ray_reaches_king(pos, step, None, *occ)


def queen_attacks_king(
    order: int,
    friends: Sequence[Piece],
    enemies: Sequence[Piece],
    king_row: int,
    king_col: int,
) -> bool:
    """Return whether ``friends[order]`` reaches the king as a rook or as a bishop."""
    return rook_attacks_king(
        order, friends, enemies, king_row, king_col
    ) or bishop_attacks_king(order, friends, enemies, king_row, king_col)


def knight_attacks_king(
    order: int,
    friends: Sequence[Piece],
    enemies: Sequence[Piece],
    king_row: int,
    king_col: int,
) -> bool:
    """Return whether the knight ``friends[order]`` attacks the king's square."""
    row, col = row_col(friends[order].pos)
    delta_r = abs(row - king_row)
    delta_c = abs(col - king_col)
    return (delta_r, delta_c) in ((2, 1), (1, 2))


def white_pawn_attacks_king(order: int, friends: Sequence[Piece], king_pos: int) -> bool:
    """Return whether the white pawn ``friends[order]`` attacks ``king_pos``."""
    pos = friends[order].pos
    if not pos & COL1 and _shift(pos, 7) & king_pos:
        return True
    return bool(not pos & COL8 and _shift(pos, 9) & king_pos)


def black_pawn_attacks_king(order: int, friends: Sequence[Piece], king_pos: int) -> bool:
    """Return whether the black pawn ``friends[order]`` attacks ``king_pos``."""
    pos = friends[order].pos
    if not pos & COL1 and _shift(pos, -9) & king_pos:
        return True
    return bool(not pos & COL8 and _shift(pos, -7) & king_pos)


def king_attacks_king(friends: Sequence[Piece], king_row: int, king_col: int) -> bool:
    """Return whether the king of ``friends`` stands next to the given square."""
    row, col = row_col(friends[KING_INDEX].pos)
    return abs(row - king_row) <= 1 and abs(col - king_col) <= 1


def is_illegal(order: int, friends: Sequence[Piece], enemies: Sequence[Piece]) -> bool:
    """Return whether an enemy piece attacks the king of ``friends``.

    Knights and pawns are only considered when the king itself moved or was in
    check; the enemy king only when the king moved.
    """
    king = friends[KING_INDEX]
    king_pos = king.pos
    king_row, king_col = row_col(king_pos)
    enemy_white = enemies[0].color is Color.WHITE
    mover_is_king = friends[order].kind == "k"

    for index, enemy in enumerate(enemies):
        if not enemy.alive:
            continue
        kind = enemy.kind
        if kind == "r":
            hit = rook_attacks_king(index, enemies, friends, king_row, king_col)
        elif kind == "b":
            hit = bishop_attacks_king(index, enemies, friends, king_row, king_col)
        elif kind == "q":
            hit = queen_attacks_king(index, enemies, friends, king_row, king_col)
        elif kind == "n":
            if not mover_is_king and not king.under_check:
                continue
            hit = knight_attacks_king(index, enemies, friends, king_row, king_col)
        elif kind == "k":
            if not mover_is_king:
                continue
            hit = king_attacks_king(enemies, king_row, king_col)
        else:
            if not mover_is_king and not king.under_check:
                continue
            if enemy_white:
                hit = white_pawn_attacks_king(index, enemies, king_pos)
            else:
                hit = black_pawn_attacks_king(index, enemies, king_pos)
        if hit:
            return True
    return False


def _en_passant_victim(
    mover: Piece, origin: int, target: int, captured: int | None
) -> int | None:
    """Return the index of the pawn an en-passant capture to ``target`` removes."""
    if captured is not None:
        return None
    if mover.color is Color.WHITE:
        if origin & ROW5 and target & (_shift(origin, 7) | _shift(origin, 9)):
            return 8 + column(target)
    elif origin & ROW4 and target & (_shift(origin, -7) | _shift(origin, -9)):
        return 8 + column(target)
    return None


def _try_move(
    order: int,
    friends: Sequence[Piece],
    enemies: Sequence[Piece],
    target: int,
    en_passant: bool,
) -> bool:
    """Play ``friends[order]`` to ``target`` on trial; true if the king stays safe."""
    mover = friends[order]
    origin = mover.pos
    mover.pos = target
    captured = next(
        (index for index, enemy in enumerate(enemies) if enemy.pos == target), None
    )
    if captured is not None:
        saved = target
        enemies[captured].pos = 0
    if en_passant:
        victim = _en_passant_victim(mover, origin, target, captured)
        if victim is not None:
            captured = victim
            saved = enemies[victim].pos
            enemies[victim].pos = 0
    try:
        return not is_illegal(order, friends, enemies)
    finally:
        mover.pos = origin
        if captured is not None:
            enemies[captured].pos = saved


def exists_legal_move(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> bool:
    """Return whether any of the candidate moves of ``friends[order]`` is legal."""
    piece = friends[order]
    en_passant = piece.kind == "p"
    return any(
        _try_move(order, friends, enemies, target, en_passant)
        for target in iter_squares(piece.legal_moves)
    )


def is_legal_move(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece], target: int
) -> bool:
    """Return whether moving ``friends[order]`` to ``target`` leaves the king safe."""
    return _try_move(order, friends, enemies, target, en_passant=False)


def is_pawn_legal_move(
    order: int, friends: Sequence[Piece], enemies: Sequence[Piece], target: int
) -> bool:
    """Like :func:`is_legal_move` for a pawn, taking en-passant captures into account."""
    return _try_move(order, friends, enemies, target, en_passant=True)


def gives_check(
    moved_order: int, friends: Sequence[Piece], enemies: Sequence[Piece]
) -> bool:
    """Return whether ``friends`` attack the enemy king after ``moved_order`` moved.

    Sliders are always examined (discovered checks); knights and pawns only
    when they are the piece that moved.
    """
    king_pos = enemies[KING_INDEX].pos
    king_row, king_col = row_col(king_pos)
    white = friends[0].color is Color.WHITE

    for index, friend in enumerate(friends):
        if not friend.alive:
            continue
        kind = friend.kind
        if kind == "r":
            hit = rook_attacks_king(index, friends, enemies, king_row, king_col)
        elif kind == "b":
            hit = bishop_attacks_king(index, friends, enemies, king_row, king_col)
        elif kind == "q":
            hit = queen_attacks_king(index, friends, enemies, king_row, king_col)
        elif kind == "n":
            if index != moved_order:
                continue
            hit = knight_attacks_king(index, friends, enemies, king_row, king_col)
        elif kind == "p":
            if index != moved_order:
                continue
            if white:
                hit = white_pawn_attacks_king(index, friends, king_pos)
            else:
                hit = black_pawn_attacks_king(index, friends, king_pos)
        else:
            continue
        if hit:
            return True
    return False