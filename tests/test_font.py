import string

import pytest

from dmgpanel.font import BLANK, GLYPH_HEIGHT, GLYPH_WIDTH, glyph, render_glyph

FG = 0xFFFF
BG = 0x0000


def test_glyph_a_matches_source_bitmap():
    assert glyph("A") == (
        0b00111100,
        0b01100110,
        0b01100110,
        0b01111110,
        0b01100110,
        0b01100110,
        0b01100110,
        0b00000000,
    )


def test_glyph_comma_uses_last_row():
    assert glyph(",")[7] == 0b00110000


@pytest.mark.parametrize("letter", string.ascii_uppercase)
def test_letters_are_case_insensitive(letter):
    assert glyph(letter.lower()) == glyph(letter)


@pytest.mark.parametrize("letter", string.ascii_uppercase)
def test_letters_have_blank_bottom_row_and_content(letter):
    rows = glyph(letter)
    assert len(rows) == GLYPH_HEIGHT
    assert rows[7] == 0
    assert any(rows)


def test_bracket_families_share_glyphs():
    assert glyph("(") == glyph("[") == glyph("{")
    assert glyph(")") == glyph("]") == glyph("}")
    assert glyph("(") != glyph(")")


@pytest.mark.parametrize(
    "char, row, expected",
    [
        ("0", 0, 0b00111100),
        ("1", 0, 0b00011000),
        ("2", 6, 0b01111110),
        ("3", 3, 0b00011100),
        ("4", 4, 0b11111110),
        ("5", 2, 0b01111100),
        ("6", 0, 0b00011100),
        ("7", 0, 0b01111110),
        ("8", 3, 0b00111100),
        ("9", 3, 0b00111110),
        ("-", 3, 0b01111110),
        (",", 5, 0b00011000),
        (".", 5, 0b00011000),
        ("!", 0, 0b00011000),
        ("&", 6, 0b01111011),
        ("'", 2, 0b00110000),
    ],
)
def test_supported_symbols_match_source_rows(char, row, expected):
    rows = glyph(char)
    assert len(rows) == GLYPH_HEIGHT
    assert rows[row] == expected
    assert len(BLANK) == GLYPH_HEIGHT
    assert rows != tuple(BLANK)


@pytest.mark.parametrize("char", [" ", "_", "#", "?", "é"])
def test_unknown_characters_are_blank(char):
    assert glyph(char) == BLANK


@pytest.mark.parametrize("bad", ["", "ab", None, 65])
def test_glyph_rejects_non_single_characters(bad):
    with pytest.raises(ValueError):
        glyph(bad)


def test_render_first_row_of_a():
    pixels = render_glyph("A", FG, BG)
    assert pixels[:GLYPH_WIDTH] == [BG, BG, FG, FG, FG, FG, BG, BG]


@pytest.mark.parametrize("char", list("AKWX09&,") + [" "])
def test_render_matches_bitmap_bits(char):
    pixels = render_glyph(char, FG, BG)
    assert len(pixels) == GLYPH_WIDTH * GLYPH_HEIGHT
    lit = sum(bin(row).count("1") for row in glyph(char))
    assert pixels.count(FG) == lit
    assert pixels.count(BG) == 64 - lit


def test_render_blank_is_all_background():
    assert render_glyph("?", 0x1234, 0x0F0F) == [0x0F0F] * 64


def test_render_same_colours_gives_uniform_cell():
    assert set(render_glyph("M", 0xF800, 0xF800)) == {0xF800}


def test_render_swapping_colours_inverts():
    normal = render_glyph("Q", FG, BG)
    inverted = render_glyph("Q", BG, FG)
    assert all(a != b for a, b in zip(normal, inverted))


@pytest.mark.parametrize("color, bgcolor", [(-1, 0), (0, 0x10000), (0x10000, 0)])
def test_render_rejects_out_of_range_colours(color, bgcolor):
    with pytest.raises(ValueError):
        render_glyph("A", color, bgcolor)


def test_render_rejects_bad_char():
    with pytest.raises(ValueError):
        render_glyph("AB", FG, BG)