"""8x8 bitmap font used for on-screen text.

Each glyph is eight rows of eight pixels. In each row the most significant
bit is the leftmost pixel. Letters are case-insensitive. Characters without
a glyph render as blank cells.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

GLYPH_WIDTH = 8
GLYPH_HEIGHT = 8

Glyph = Tuple[int, int, int, int, int, int, int, int]

BLANK: Glyph = (0, 0, 0, 0, 0, 0, 0, 0)

_LETTERS: Dict[str, Glyph] = {
    "A": (0b00111100, 0b01100110, 0b01100110, 0b01111110,
          0b01100110, 0b01100110, 0b01100110, 0b00000000),
    "B": (0b01111100, 0b01100110, 0b01100110, 0b01111100,
          0b01100110, 0b01100110, 0b01111100, 0b00000000),
    "C": (0b00011110, 0b00110000, 0b01100000, 0b01100000,
          0b01100000, 0b00110000, 0b00011110, 0b00000000),
    "D": (0b01111000, 0b01101100, 0b01100110, 0b01100110,
          0b01100110, 0b01101100, 0b01111000, 0b00000000),
    "E": (0b01111110, 0b01100000, 0b01100000, 0b01111000,
          0b01100000, 0b01100000, 0b01111110, 0b00000000),
    "F": (0b01111110, 0b01100000, 0b01100000, 0b01111000,
          0b01100000, 0b01100000, 0b01100000, 0b00000000),
    "G": (0b00111100, 0b01100110, 0b01100000, 0b01101110,
          0b01100110, 0b01100110, 0b00111110, 0b00000000),
    "H": (0b01100110, 0b01100110, 0b01100110, 0b01111110,
          0b01100110, 0b01100110, 0b01100110, 0b00000000),
    "I": (0b00111100, 0b00011000, 0b00011000, 0b00011000,
          0b00011000, 0b00011000, 0b00111100, 0b00000000),
    "J": (0b00000110, 0b00000110, 0b00000110, 0b00000110,
          0b00000110, 0b01100110, 0b00111100, 0b00000000),
    "K": (0b11000110, 0b11001100, 0b11011000, 0b11110000,
          0b11011000, 0b11001100, 0b11000110, 0b00000000),
    "L": (0b01100000, 0b01100000, 0b01100000, 0b01100000,
          0b01100000, 0b01100000, 0b01111110, 0b00000000),
    "M": (0b11000110, 0b11101110, 0b11111110, 0b11010110,
          0b11000110, 0b11000110, 0b11000110, 0b00000000),
    "N": (0b11000110, 0b11100110, 0b11110110, 0b11011110,
          0b11001110, 0b11000110, 0b11000110, 0b00000000),
    "O": (0b00111100, 0b01100110, 0b01100110, 0b01100110,
          0b01100110, 0b01100110, 0b00111100, 0b00000000),
    "P": (0b01111100, 0b01100110, 0b01100110, 0b01111100,
          0b01100000, 0b01100000, 0b01100000, 0b00000000),
    "Q": (0b01111000, 0b11001100, 0b11001100, 0b11001100,
          0b11001100, 0b11011100, 0b01111110, 0b00000000),
    "R": (0b01111100, 0b01100110, 0b01100110, 0b01111100,
          0b01101100, 0b01100110, 0b01100110, 0b00000000),
    "S": (0b00111100, 0b01100110, 0b01110000, 0b00111100,
          0b00001110, 0b01100110, 0b00111100, 0b00000000),
    "T": (0b01111110, 0b00011000, 0b00011000, 0b00011000,
          0b00011000, 0b00011000, 0b00011000, 0b00000000),
    "U": (0b01100110, 0b01100110, 0b01100110, 0b01100110,
          0b01100110, 0b01100110, 0b00111100, 0b00000000),
    "V": (0b01100110, 0b01100110, 0b01100110, 0b01100110,
          0b00111100, 0b00111100, 0b00011000, 0b00000000),
    "W": (0b11000110, 0b11000110, 0b11000110, 0b11010110,
          0b11111110, 0b11101110, 0b11000110, 0b00000000),
    "X": (0b11000011, 0b01100110, 0b00111100, 0b00011000,
          0b00111100, 0b01100110, 0b11000011, 0b00000000),
    "Y": (0b11000011, 0b01100110, 0b00111100, 0b00011000,
          0b00011000, 0b00011000, 0b00011000, 0b00000000),
    "Z": (0b11111110, 0b00001100, 0b00011000, 0b00110000,
          0b01100000, 0b11000000, 0b11111110, 0b00000000),
}

_OPEN_BRACKET: Glyph = (0b00001100, 0b00011000, 0b00110000, 0b00110000,
                        0b00110000, 0b00011000, 0b00001100, 0b00000000)
_CLOSE_BRACKET: Glyph = (0b00110000, 0b00011000, 0b00001100, 0b00001100,
                         0b00001100, 0b00011000, 0b00110000, 0b00000000)

_SYMBOLS: Dict[str, Glyph] = {
    "-": (0b00000000, 0b00000000, 0b00000000, 0b01111110,
          0b00000000, 0b00000000, 0b00000000, 0b00000000),
    "(": _OPEN_BRACKET,
    "[": _OPEN_BRACKET,
    "{": _OPEN_BRACKET,
    ")": _CLOSE_BRACKET,
    "]": _CLOSE_BRACKET,
    "}": _CLOSE_BRACKET,
    ",": (0b00000000, 0b00000000, 0b00000000, 0b00000000,
          0b00000000, 0b00011000, 0b00011000, 0b00110000),
    ".": (0b00000000, 0b00000000, 0b00000000, 0b00000000,
          0b00000000, 0b00011000, 0b00011000, 0b00000000),
    "!": (0b00011000, 0b00011000, 0b00011000, 0b00011000,
          0b00011000, 0b00000000, 0b00011000, 0b00000000),
    "&": (0b00111000, 0b01101100, 0b01101000, 0b01110110,
          0b11011100, 0b11001110, 0b01111011, 0b00000000),
    "'": (0b00011000, 0b00011000, 0b00110000, 0b00000000,
          0b00000000, 0b00000000, 0b00000000, 0b00000000),
    "0": (0b00111100, 0b01100110, 0b01101110, 0b01111110,
          0b01110110, 0b01100110, 0b00111100, 0b00000000),
    "1": (0b00011000, 0b00111000, 0b01111000, 0b00011000,
          0b00011000, 0b00011000, 0b00011000, 0b00000000),
    "2": (0b00111100, 0b01100110, 0b00000110, 0b00001100,
          0b00011000, 0b00110000, 0b01111110, 0b00000000),
    "3": (0b00111100, 0b01100110, 0b00000110, 0b00011100,
          0b00000110, 0b01100110, 0b00111100, 0b00000000),
    "4": (0b00011100, 0b00111100, 0b01101100, 0b11001100,
          0b11111110, 0b00001100, 0b00001100, 0b00000000),
    "5": (0b01111110, 0b01100000, 0b01111100, 0b00000110,
          0b00000110, 0b01100110, 0b00111100, 0b00000000),
    "6": (0b00011100, 0b00110000, 0b01100000, 0b01111100,
          0b01100110, 0b01100110, 0b00111100, 0b00000000),
    "7": (0b01111110, 0b00000110, 0b00000110, 0b00001100,
          0b00011000, 0b00011000, 0b00011000, 0b00000000),
    "8": (0b00111100, 0b01100110, 0b01100110, 0b00111100,
          0b01100110, 0b01100110, 0b00111100, 0b00000000),
    "9": (0b00111100, 0b01100110, 0b01100110, 0b00111110,
          0b00000110, 0b00001100, 0b00111000, 0b00000000),
}

_GLYPHS: Dict[str, Glyph] = {
    **_LETTERS,
    **{letter.lower(): rows for letter, rows in _LETTERS.items()},
    **_SYMBOLS,
}


def _check_char(char: str) -> None:
    if not isinstance(char, str) or len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")


def _check_colour(name: str, value: int) -> None:
    if not isinstance(value, int) or not 0 <= value <= 0xFFFF:
        raise ValueError(f"{name} {value!r} is not an RGB565 value")


def glyph(char: str) -> Glyph:
    """Return the eight row bitmaps for a character; unknown characters are blank."""
    _check_char(char)
    return _GLYPHS.get(char, BLANK)


def render_glyph(char: str, color: int, bgcolor: int) -> List[int]:
    """Return the 64 RGB565 pixels of a character, row by row, left to right.

    Set bits take ``color`` and clear bits take ``bgcolor``.
    """
    _check_colour("color", color)
    _check_colour("bgcolor", bgcolor)
    return [
        color if row & (0x80 >> column) else bgcolor
        for row in glyph(char)
        for column in range(GLYPH_WIDTH)
    ]