"""Dot-matrix glyph table.

Every character is drawn on a 5x5 cell. Cell indices run row by row::

    00 01 02 03 04
    05 06 07 08 09
    10 11 12 13 14
    15 16 17 18 19
    20 21 22 23 24

``CHARMAP`` lists, per character, the indices of the lit pixels in the order
they are *drawn*; the running-point animation follows that order, so it is
part of the glyph and not just a set. A pixel may be listed twice (``A`` and
``X`` cross themselves), which the point registry stores as a second
generation.
"""

import re
from typing import Optional, Tuple

from pyrsistent import PMap, pmap

from event_registration.types import Point

CELL_SIZE = 5

CELL_POINTS: Tuple[Point, ...] = tuple(
    (x, y) for y in range(CELL_SIZE) for x in range(CELL_SIZE)
)

CHARMAP: PMap[str, Tuple[int, ...]] = pmap(
    {
        "A": (20, 15, 10, 5, 1, 2, 3, 9, 14, 19, 24, 10, 11, 12, 13, 14),
        "C": (4, 3, 2, 1, 0, 5, 10, 15, 20, 21, 22, 23, 24),
        "E": (4, 3, 2, 1, 0, 5, 10, 15, 20, 21, 22, 23, 24, 11, 12),
        "L": (0, 5, 10, 15, 20, 21, 22, 23, 24),
        "S": (4, 3, 2, 1, 0, 5, 10, 11, 12, 13, 14, 19, 24, 23, 22, 21, 20),
        "T": (0, 1, 2, 3, 4, 7, 12, 17, 22),
        "X": (0, 6, 12, 18, 24, 4, 8, 12, 16, 20),
        "0": (4, 3, 2, 1, 0, 5, 10, 15, 20, 21, 22, 23, 24, 19, 14, 9, 11, 17),
        "2": (0, 1, 2, 3, 4, 9, 14, 13, 12, 11, 16, 21, 22, 23, 24),
        "_": (20, 21, 22, 23, 24),
        " ": (),
    }
)
"""Character -> drawing order of lit cell indices."""

LINE_BREAK = re.compile(r"\r?\n")


def glyph_points(char: str) -> Optional[Tuple[Point, ...]]:
    """Return the lit offsets of ``char`` in drawing order.

    Returns ``None`` for characters without a glyph; the space glyph is an
    empty tuple.
    """
    indices = CHARMAP.get(char)
    if indices is None:
        return None
    return tuple(CELL_POINTS[index] for index in indices)


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` and ``\\r\\n``."""
    return LINE_BREAK.split(text)


def supports(text: object) -> bool:
    """Return True if every character of ``text`` can be drawn."""
    if not isinstance(text, str):
        return False
    return all(char in CHARMAP for line in split_lines(text) for char in line)
