import pytest

from dmgpanel.autopalette import auto_assign_palette, palette_id_for
from dmgpanel.palettes import DMG_PALETTE, get_colour_palette


@pytest.mark.parametrize(
    "checksum,title,expected",
    [
        (0x14, "POKEMON RED", (0x10, 0x01)),
        (0x46, "METROID2", (0x14, 0x05)),
        (0x46, "SUPER MARIOLAND", (0x0A, 0x03)),
        (0xDB, "TETRIS", (0x07, 0x00)),
        (0x70, "ZELDA", (0x11, 0x05)),
        (0x00, "", (0x1C, 0x03)),
        (0xB3, "MOGURANYA", (0x00, 0x03)),
        (0xB3, "TETRIS ATTACK", (0x05, 0x04)),
        (0xB3, "KIRBY2", (0x08, 0x05)),
        (0xF4, "GAME&WATCH", (0x1C, 0x05)),
        (0xF4, "G&W GALLERY", (0x04, 0x03)),
        (0x16, "BATMAN", (0x0D, 0x05)),
        (0x16, "SUPERDONKEYKONG", (0x0C, 0x05)),
    ],
)
def test_palette_id_matches_source_table(checksum, title, expected):
    assert palette_id_for(checksum, title) == expected


def test_unknown_checksum_gives_dmg_id():
    assert palette_id_for(0x02, "UNKNOWN") == (0xFF, 0xFF)
    assert auto_assign_palette(0x02, "UNKNOWN") == DMG_PALETTE


def test_short_title_uses_fallback_branch():
    assert palette_id_for(0x46, "AB") == palette_id_for(0x46, "ABCX")


@pytest.mark.parametrize("checksum", range(256))
def test_auto_palette_agrees_with_id(checksum):
    title = "TITLE"
    ids = palette_id_for(checksum, title)
    assert auto_assign_palette(checksum, title) == get_colour_palette(*ids)


@pytest.mark.parametrize("checksum", range(256))
@pytest.mark.parametrize("title", ["POKEMON RED", "SUPER MARIOLAND", "ABC ", "KIRBY"])
def test_known_checksums_never_fall_back_to_dmg(checksum, title):
    ids = palette_id_for(checksum, title)
    if ids != (0xFF, 0xFF):
        assert get_colour_palette(*ids) != DMG_PALETTE or ids == (0xFF, 0xFF)
    assert len(ids) == 2


@pytest.mark.parametrize("checksum", [-1, 256, 0x1FF])
def test_out_of_range_checksum_raises(checksum):
    with pytest.raises(ValueError):
        palette_id_for(checksum, "TITLE")


def test_disambiguation_differs_for_pokemon_blue_and_vegas_stakes():
    blue = auto_assign_palette(0x61, "POKEMON BLUE")
    vegas = auto_assign_palette(0x61, "VEGAS STAKES")
    assert blue == get_colour_palette(0x0B, 0x01)
    assert vegas == get_colour_palette(0x0E, 0x05)
    assert blue != vegas