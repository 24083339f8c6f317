import io
import random
import re

import pytest

from giuchess.bitboard import square_mask
from giuchess.pieces import Color, starting_pieces
from giuchess.position import Position
from giuchess.xboard import XBoardEngine, insufficient_material, is_move

MOVE_LINE = re.compile(r"^move [a-h][1-8][a-h][1-8][qrbn]?\n$")


def make_engine():
    out = io.StringIO()
    return XBoardEngine(out=out, rng=random.Random(0), start_depth=3), out


def kings_only():
    position = Position()
    for side in (position.white, position.black):
        for index, piece in enumerate(side):
            if index != 4:
                piece.pos = 0
    return position


def stalemate_position():
    position = Position()
    for index, piece in enumerate(position.white):
        if index not in (3, 4):
            piece.pos = 0
    position.white[3].pos = square_mask(5, 1)
    for index, piece in enumerate(position.black):
        if index != 4:
            piece.pos = 0
    position.black[4].pos = square_mask(7, 0)
    return position


@pytest.mark.parametrize(
    "text,expected",
    [("e2e4", True), ("a7a8q", True), ("e2e", False), ("i2e4", False), ("e9e4", False), ("new", False)],
)
def test_is_move(text, expected):
    assert is_move(text) is expected


def test_insufficient_material_cases():
    assert insufficient_material(Position()) is False
    position = kings_only()
    assert insufficient_material(position) is True
    position.white[1].pos = square_mask(0, 1)
    assert insufficient_material(position) is True
    position.white[6].pos = square_mask(0, 6)
    assert insufficient_material(position) is False


def test_insufficient_material_with_pawn():
    position = kings_only()
    position.black[8].pos = square_mask(6, 0)
    assert insufficient_material(position) is False


def test_xboard_and_protover():
    engine, out = make_engine()
    assert engine.handle("xboard") is True
    assert out.getvalue() == "\n"
    engine.handle("protover 2")
    text = out.getvalue()
    assert text.startswith("\nChess\n")
    assert "done=1" in text and text.endswith("\n")


def test_quit_stops_run():
    engine, out = make_engine()
    assert engine.handle("quit") is False
    engine.run(["quit\n", "xboard\n"])
    assert out.getvalue() == ""


def test_time_and_otim():
    engine, _ = make_engine()
    engine.handle("time 1234")
    engine.handle("otim 777")
    assert engine.mtime == 1234
    assert engine.otim == 777


def test_white_black_commands():
    engine, _ = make_engine()
    engine.handle("white")
    assert engine.white_to_move is True
    engine.handle("black")
    assert engine.white_to_move is False


def test_force_mode_records_move_silently():
    engine, out = make_engine()
    engine.run(["new\n", "force\n", "e2e4\n"])
    assert out.getvalue() == ""
    assert engine.position.white[12].pos == square_mask(3, 4)
    assert engine.cont == 0


def test_reply_to_opponent_move():
    engine, out = make_engine()
    engine.run(["new\n", "e2e4\n"])
    assert MOVE_LINE.match(out.getvalue())
    assert engine.white_to_move is False
    assert engine.position.last_moved is Color.BLACK
    assert engine.cont == 1


def test_go_plays_for_white():
    engine, out = make_engine()
    engine.handle("new")
    engine.handle("go")
    assert MOVE_LINE.match(out.getvalue())
    assert engine.position.last_moved is Color.WHITE
    assert engine.first_move_done is True


def test_fifty_moves():
    engine, _ = make_engine()
    engine.position.rule50 = 98
    assert engine.fifty_moves() is False
    engine.position.rule50 = 99
    assert engine.fifty_moves() is True
    assert engine.position.rule50 == 0


def test_fifty_move_draw_announced():
    engine, out = make_engine()
    engine.position.rule50 = 99
    engine.white_move()
    assert out.getvalue() == "1/2-1/2 {50 moves rule}\n"


def test_insufficient_material_draw_resets():
    engine, out = make_engine()
    engine.position = kings_only()
    engine.white_move()
    assert out.getvalue() == "1/2-1/2 {insufficient material}\n"
    expected = [piece.pos for piece in starting_pieces(Color.WHITE)]
    assert [piece.pos for piece in engine.position.white] == expected


def test_white_mated():
    engine, out = make_engine()
    for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
        engine.position.play(text)
    engine.white_move()
    assert out.getvalue() == "0-1\n"


def test_black_stalemated():
    engine, out = make_engine()
    engine.position = stalemate_position()
    engine.black_move()
    assert out.getvalue() == "1/2-1/2 {Stalemate}\n"


def test_start_depth_too_small():
    with pytest.raises(ValueError):
        XBoardEngine(out=io.StringIO(), start_depth=2)