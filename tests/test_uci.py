import io
import random

import pytest

from giuchess.bitboard import square_mask
from giuchess.pieces import Color
from giuchess.search import START_DEPTH
from giuchess.uci import SearchParams, UciEngine, parse_go, square_index, square_name
from giuchess.xboard import is_move


def make_engine():
    out = io.StringIO()
    return UciEngine(out=out, rng=random.Random(0)), out


def test_square_corners():
    assert square_index("a1") == 0
    assert square_index("h8") == 63
    assert square_name(0) == "a1"
    assert square_name(63) == "h8"


def test_square_round_trip():
    for index in range(64):
        assert square_index(square_name(index)) == index


@pytest.mark.parametrize("text", ["i1", "a9", "e", "e44", ""])
def test_square_index_rejects_bad_names(text):
    with pytest.raises(ValueError):
        square_index(text)


@pytest.mark.parametrize("index", [-1, 64])
def test_square_name_rejects_bad_index(index):
    with pytest.raises(ValueError):
        square_name(index)


def test_parse_go_defaults():
    assert parse_go("go") == SearchParams()
    assert parse_go("go").depth == START_DEPTH


def test_parse_go_all_fields():
    params = parse_go(
        "go depth 3 movetime 7 wtime 1000 btime 2000 winc 10 binc 20 movestogo 30 infinite"
    )
    assert params == SearchParams(
        depth=3,
        movetime=7,
        wtime=1000,
        btime=2000,
        winc=10,
        binc=20,
        movestogo=30,
        infinite=True,
    )


def test_parse_go_unreadable_number_is_zero():
    assert parse_go("go depth abc").depth == 0


def test_parse_go_missing_value_keeps_default():
    assert parse_go("go depth").depth == START_DEPTH


def test_uci_answers_identity_and_uciok():
    engine, out = make_engine()
    assert engine.handle("uci") is True
    lines = out.getvalue().splitlines()
    assert lines[0] == "id name GiuChess-2.0"
    assert lines[-1] == "uciok"
    assert "option name Depth type spin default 5 min 1 max 10" in lines


def test_ucinewgame_matches_uci_prefix():
    engine, out = make_engine()
    engine.handle("ucinewgame")
    assert out.getvalue().splitlines()[-1] == "uciok"


def test_isready():
    engine, out = make_engine()
    engine.handle("isready")
    assert out.getvalue() == "readyok\n"


def test_quit_stops():
    engine, _ = make_engine()
    assert engine.handle("quit") is False


def test_position_startpos_moves():
    engine, _ = make_engine()
    engine.parse_position("position startpos moves e2e4 e7e5")
    assert engine.position.white[12].pos == square_mask(3, 4)
    assert engine.position.black[12].pos == square_mask(4, 4)
    assert engine.position.last_moved is Color.BLACK


def test_position_startpos_resets():
    engine, _ = make_engine()
    engine.parse_position("position startpos moves e2e4")
    engine.parse_position("position startpos")
    assert engine.position.white[12].pos == square_mask(1, 4)
    assert engine.position.last_moved is Color.BLACK


def test_position_fen_falls_back_to_startpos():
    engine, _ = make_engine()
    engine.parse_position("position startpos moves d2d4")
    engine.parse_position("position fen 8/8/8/8/8/8/8/8 w - - 0 1")
    assert engine.position.white[11].pos == square_mask(1, 3)


def test_parse_move_too_short():
    engine, _ = make_engine()
    assert engine.parse_move("e2") is False
    assert engine.position.white[12].pos == square_mask(1, 4)


def test_parse_move_long_text_is_truncated():
    engine, _ = make_engine()
    assert engine.parse_move("e2e4zz") is True
    assert engine.position.white[12].pos == square_mask(3, 4)
    assert engine.position.white[12].kind == "p"


def test_make_moves_stops_at_bad_token():
    engine, _ = make_engine()
    engine.make_moves("e2e4 xx d2d4")
    assert engine.position.white[12].pos == square_mask(3, 4)
    assert engine.position.white[11].pos == square_mask(1, 3)


def test_go_plays_for_white_then_black():
    engine, out = make_engine()
    engine.handle("position startpos")
    engine.handle("go depth 1")
    first = out.getvalue().splitlines()[-1]
    assert first.startswith("bestmove ")
    move = first.split()[1]
    assert is_move(move)
    assert move[1] in "12"
    assert engine.position.last_moved is Color.WHITE

    engine.handle("go depth 1")
    second = out.getvalue().splitlines()[-1].split()[1]
    assert second[1] in "78"
    assert engine.position.last_moved is Color.BLACK


def test_go_when_mated_announces_null_move():
    engine, out = make_engine()
    engine.handle("position startpos moves f2f3 e7e5 g2g4 d8h4")
    before = [piece.pos for piece in engine.position.white]
    engine.handle("go depth 1")
    assert out.getvalue() == "bestmove 0000\n"
    assert [piece.pos for piece in engine.position.white] == before


def test_run_stops_at_quit():
    engine, out = make_engine()
    engine.run(["isready\n", "quit\n", "isready\n"])
    assert out.getvalue() == "readyok\n"