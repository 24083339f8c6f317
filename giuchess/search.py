"""Position evaluation and the alpha-beta search that picks the engine's move."""

from __future__ import annotations

import random

from .bitboard import CENTRE, PERBOR, PERIF
from .existence import black_has_moves, white_has_moves
from .movegen import compute_black_moves, compute_white_moves, list_moves
from .pieces import KING_INDEX
from .position import Position

START_DEPTH = 5
RULE50_THRESHOLD = 49
MATE_SCORE = 99.0
WINDOW = 200.0

_OFFICERS = (0, 1, 2, 3, 5, 6, 7)
_CENTRAL_PAWNS = (10, 11, 12, 13)


def material(position: Position) -> float:
    """Return white's material minus black's."""
    return position.white[KING_INDEX].value - position.black[KING_INDEX].value


def centre(position: Position, color: int) -> float:
    """Return the central-control bonus of black (``color`` 1) or white (``color`` -1).

    Officers score by ring (border ring, inner ring, centre); the four central
    pawn slots score only in the inner ring and the centre.
    """
    side = position.black if color == 1 else position.white
    score = 0.0
    for index in _OFFICERS:
        pos = side[index].pos
        if not pos:
            continue
        if pos & PERBOR:
            score += 0.01
        elif pos & PERIF:
            score += 0.1
        elif pos & CENTRE:
            score += 0.15
    for index in _CENTRAL_PAWNS:
        pos = side[index].pos
        if not pos:
            continue
        if pos & PERIF:
            score += 0.1
        elif pos & CENTRE:
            score += 0.3
    return score


def evaluate(position: Position, color: int, rng=None) -> float:
    """Score the position for the side to move; ``color`` is the side that just moved.

    ``color`` is 1 when white made the last move, -1 when black did. A side to
    move with no legal move scores -99 when in check and 0 otherwise; a long
    run without captures or pawn moves scores 0.
    """
    source = rng if rng is not None else random
    if color == 1:
        if not black_has_moves(position.white, position.black):
            return -MATE_SCORE if position.black[KING_INDEX].under_check else 0.0
        if position.rule50 >= RULE50_THRESHOLD:
            return 0.0
        return -material(position) + centre(position, 1) + source.randrange(10) / 50.0
    if not white_has_moves(position.white, position.black):
        return -MATE_SCORE if position.white[KING_INDEX].under_check else 0.0
    if position.rule50 >= RULE50_THRESHOLD:
        return 0.0
    return material(position) + centre(position, -1) + source.randrange(10) / 50.0


class Searcher:
    """Fixed-depth negamax search with alpha-beta pruning over a position."""

    def __init__(self, position: Position, depth: int = START_DEPTH, rng=None) -> None:
        if depth < 1:
            raise ValueError(f"search depth must be at least 1, got {depth}")
        self.position = position
        self.depth = depth
        self.rng = rng if rng is not None else random.Random()
        self.best_move: str | None = None

    def alphabeta(self, depth: int, alpha: float, beta: float, color: int) -> float:
        """Return the negamax score; at the root depth record the best move found."""
        position = self.position
        if depth == 0:
            return evaluate(position, color, self.rng)
        if color == 1:
            compute_black_moves(position.white, position.black)
            movers = position.black
        else:
            compute_white_moves(position.white, position.black)
            movers = position.white
        moves = list_moves(movers, self.rng)
        if not moves:
            if movers[KING_INDEX].under_check:
                return -MATE_SCORE - depth
            return 0.0

        saved = position.snapshot()
        best = alpha
        for move in moves:
            text = move.text(movers) if depth == self.depth else None
            position.apply(move)
            value = -self.alphabeta(depth - 1, -beta, -best, -color)
            position.restore(saved)
            if value >= beta:
                return beta
            if value > best:
                best = value
                if text is not None:
                    self.best_move = text
        return best

    def search(self, color: int) -> str | None:
        """Return the best move for the side that did not make the last move.

        ``color`` is 1 when white moved last (black to play), -1 otherwise.
        The position is left as it was.
        """
        if color not in (1, -1):
            raise ValueError(f"color must be 1 or -1, got {color}")
        self.best_move = None
        self.alphabeta(self.depth, -WINDOW, WINDOW, color)
        return self.best_move