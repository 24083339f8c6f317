"""64-bit square masks: board constants and conversions between masks and squares."""

from __future__ import annotations

from collections.abc import Iterator

FULL = 0xFFFFFFFFFFFFFFFF

BOTTOM = 0x00000000000000FF
TOP = 0xFF00000000000000
LEFT = 0x0101010101010101
RIGHT = 0x8080808080808080

TOPLEFT = 0xFF01010101010101
TOPRIGHT = 0xFF80808080808080
BOTTOMLEFT = 0x01010101010101FF
BOTTOMRIGHT = 0x80808080808080FF

ROW1 = 0x00000000000000FF
ROW2 = 0x000000000000FF00
ROW3 = 0x0000000000FF0000
ROW4 = 0x00000000FF000000
ROW5 = 0x000000FF00000000
ROW6 = 0x0000FF0000000000
ROW7 = 0x00FF000000000000
ROW8 = 0xFF00000000000000

COL1 = 0x0101010101010101
COL2 = 0x0202020202020202
COL3 = 0x0404040404040404
COL4 = 0x0808080808080808
COL5 = 0x1010101010101010
COL6 = 0x2020202020202020
COL7 = 0x4040404040404040
COL8 = 0x8080808080808080

ROWS = (ROW1, ROW2, ROW3, ROW4, ROW5, ROW6, ROW7, ROW8)
COLS = (COL1, COL2, COL3, COL4, COL5, COL6, COL7, COL8)

BORDER = 0xFF818181818181FF
PERBOR = 0x007E424242427E00
PERIF = 0x00003C24243C0000
CENTRE = (ROW4 | ROW5) & (COL4 | COL5)


def row_col(bm: int) -> tuple[int, int]:
    """Return the lowest occupied row and column of a mask; (7, 7) for an empty one."""
    return _lowest(bm, ROWS), _lowest(bm, COLS)


def column(bm: int) -> int:
    """Return the lowest occupied column of a mask; 7 for an empty one."""
    return _lowest(bm, COLS)


def _lowest(bm: int, lines: tuple[int, ...]) -> int:
    return next((index for index, line in enumerate(lines) if bm & line), 7)


def square_mask(row: int, col: int) -> int:
    """Return the single-square mask for a row and a column, both 0..7."""
    if not (0 <= row <= 7 and 0 <= col <= 7):
        raise ValueError(f"square out of board: row={row} col={col}")
    return 1 << (row * 8 + col)


def iter_squares(mask: int) -> Iterator[int]:
    """Yield the single-square masks set in ``mask``, from a1 upwards."""
    mask &= FULL
    while mask:
        low = mask & -mask
        yield low
        mask ^= low


def render(bm: int) -> str:
    """Draw a mask as an 8x8 grid of 0/1, rank 8 first, followed by a blank line."""
    lines = []
    for row in range(7, -1, -1):
        cells = "".join(
            ("1 " if bm & (1 << (row * 8 + col)) else "0 ") for col in range(8)
        )
        lines.append(cells + "\n")
    return "".join(lines) + "\n"