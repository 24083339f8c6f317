import random

from giuchess.bitboard import square_mask
from giuchess.movegen import (
    bishop_moves,
    black_pawn_moves,
    compute_black_moves,
    compute_white_moves,
    king_moves,
    knight_moves,
    list_moves,
    queen_moves,
    rook_moves,
    white_pawn_moves,
)
from giuchess.pieces import Color, starting_pieces


def _sq(name):
    return square_mask(int(name[1]) - 1, ord(name[0]) - ord("a"))


def _squares(*names):
    mask = 0
    for name in names:
        mask |= _sq(name)
    return mask


def _start():
    return starting_pieces(Color.WHITE), starting_pieces(Color.BLACK)


def _bare(white_king, black_king):
    white, black = _start()
    for piece in white + black:
        piece.pos = 0
    white[4].pos = _sq(white_king)
    black[4].pos = _sq(black_king)
    return white, black


class _FixedStart:
    def randrange(self, stop):
        return 0


def test_start_position_white_has_twenty_moves():
    white, black = _start()
    compute_white_moves(white, black)
    assert len(list_moves(white, random.Random(1))) == 20


def test_start_position_black_matches_white_count():
    white, black = _start()
    compute_white_moves(white, black)
    compute_black_moves(white, black)
    assert len(list_moves(black, random.Random(2))) == len(
        list_moves(white, random.Random(2))
    )


def test_start_knight_and_pawn_moves():
    white, black = _start()
    assert knight_moves(1, white, black) == _squares("a3", "c3")
    assert white_pawn_moves(12, white, black) == _squares("e3", "e4")
    assert black_pawn_moves(12, white, black) == _squares("e6", "e5")


def test_start_rook_and_king_are_blocked():
    white, black = _start()
    assert rook_moves(0, white, black) == 0
    assert king_moves(4, white, black) == 0


def test_bishop_on_open_board():
    white, black = _bare("a8", "h1")
    white[2].pos = _sq("d4")
    expected = _squares(
        "c5", "b6", "a7", "e3", "f2", "g1", "e5", "f6", "g7", "h8", "c3", "b2", "a1"
    )
    assert bishop_moves(2, white, black) == expected


def test_queen_is_union_of_rook_and_bishop():
    white, black = _bare("a8", "h1")
    white[3].pos = _sq("d4")
    black[0].pos = _sq("d7")
    assert queen_moves(3, white, black) == rook_moves(3, white, black) | bishop_moves(
        3, white, black
    )


def test_pinned_rook_only_moves_along_pin():
    white, black = _bare("e1", "a8")
    white[0].pos = _sq("e2")
    black[0].pos = _sq("e8")
    expected = _squares("e3", "e4", "e5", "e6", "e7", "e8")
    assert rook_moves(0, white, black) == expected


def test_knight_in_corner():
    white, black = _bare("e1", "e8")
    white[1].pos = _sq("a1")
    assert knight_moves(1, white, black) == _squares("b3", "c2")


def test_short_castle_available():
    white, black = _start()
    white[5].pos = 0
    white[6].pos = 0
    assert king_moves(4, white, black) == _squares("f1", "g1")


def test_short_castle_refused_when_in_check_or_moved():
    white, black = _start()
    white[5].pos = 0
    white[6].pos = 0
    white[4].under_check = True
    assert king_moves(4, white, black) == _sq("f1")
    white[4].under_check = False
    white[7].moved = True
    assert king_moves(4, white, black) == _sq("f1")
    white[7].moved = False
    white[4].moved = True
    assert king_moves(4, white, black) == _sq("f1")


def test_long_castle_available():
    white, black = _start()
    for index in (1, 2, 3):
        white[index].pos = 0
    assert king_moves(4, white, black) == _squares("d1", "c1")


def test_en_passant_requires_double_move_flag():
    white, black = _bare("e1", "e8")
    white[12].pos = _sq("e5")
    black[11].pos = _sq("d5")
    assert white_pawn_moves(12, white, black) == _sq("e6")
    black[11].last_double_move = True
    assert white_pawn_moves(12, white, black) == _squares("e6", "d6")


def test_promotion_expands_to_four_moves():
    white, black = _bare("a1", "h8")
    white[8].pos = _sq("b7")
    compute_white_moves(white, black)
    pawn_moves = [m for m in list_moves(white, random.Random(3)) if m.order == 8]
    assert sorted(m.promotion for m in pawn_moves) == ["b", "n", "q", "r"]
    assert all(m.target == _sq("b8") for m in pawn_moves)


def test_list_moves_order_is_reversed_discovery():
    white, black = _start()
    compute_white_moves(white, black)
    moves = list_moves(white, _FixedStart())
    assert moves[-1].order == 1
    assert moves[-1].target == _sq("a3")
    assert moves[0].order == 15
    assert moves[0].target == _sq("h4")
    assert all(m.color is Color.WHITE and m.promotion is None for m in moves)


def test_list_moves_set_independent_of_start():
    white, black = _start()
    compute_white_moves(white, black)
    first = list_moves(white, random.Random(5))
    again = list_moves(white, random.Random(5))
    other = list_moves(white, _FixedStart())
    assert first == again
    assert set(first) == set(other)


def test_compute_skips_dead_pieces():
    white, black = _bare("e1", "e8")
    white[0].legal_moves = 123
    compute_white_moves(white, black)
    assert white[0].legal_moves == 123
    assert all(m.order == 4 for m in list_moves(white, random.Random(0)))