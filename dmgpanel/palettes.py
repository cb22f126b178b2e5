"""RGB565 colour palettes for monochrome Game Boy output.

The palette table holds the configurations that the Game Boy Color boot ROM
selects by entry ID and shuffling flags. Each palette is a triplet of
four-shade rows: OBJ0, OBJ1 and BG.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple

logger = logging.getLogger(__name__)

NUMBER_OF_MANUAL_PALETTES = 13

# Bits of a pixel value that select the palette row (OBJ0, OBJ1 or BG).
_PALETTE_ROW_BITS = 0x30
_SHADE_BITS = 0x03

Row = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Palette:
    """A triplet of four-shade RGB565 rows: two sprite rows and a background row."""

    obj0: Row
    obj1: Row
    bg: Row

    def __post_init__(self) -> None:
        for name in ("obj0", "obj1", "bg"):
            row = tuple(getattr(self, name))
            if len(row) != 4:
                raise ValueError(f"{name} must hold 4 shades, got {len(row)}")
            for shade in row:
                if not isinstance(shade, int) or not 0 <= shade <= 0xFFFF:
                    raise ValueError(f"{name} shade {shade!r} is not an RGB565 value")
            object.__setattr__(self, name, row)

    def as_rows(self) -> Tuple[Row, Row, Row]:
        """Return the rows in table order: OBJ0, OBJ1, BG."""
        return (self.obj0, self.obj1, self.bg)

    def lookup(self, pixel: int) -> int:
        """Return the RGB565 colour for a pixel value produced by the emulator core.

        Bits 4-5 choose the row (0 = OBJ0, 1 = OBJ1, 2 = BG) and bits 0-1 the shade.
        """
        row_index = (pixel & _PALETTE_ROW_BITS) >> 4
        rows = self.as_rows()
        if row_index >= len(rows):
            raise ValueError(f"pixel 0x{pixel:02X} selects no palette row")
        return rows[row_index][pixel & _SHADE_BITS]


_FB80: Row = (0xFFFF, 0xFB80, 0x9200, 0x0000)
_AD70: Row = (0xFFFF, 0xAD70, 0x438F, 0x0000)
_5DFF: Row = (0xFFFF, 0x5DFF, 0xF800, 0x001F)
_FE28: Row = (0xFE28, 0xFEA0, 0x91C0, 0x4800)
_FC30: Row = (0xFFFF, 0xFC30, 0x91C7, 0x0000)
_653F_HI: Row = (0xFFFF, 0xFFFF, 0x653F, 0x001F)
_FD6C: Row = (0xFFFF, 0xFD6C, 0x8180, 0x0000)
_57E0: Row = (0xFFFF, 0x57E0, 0xFA00, 0x0000)
_FCE0: Row = (0xFFFF, 0xFCE0, 0xF800, 0x0000)
_FFE0: Row = (0xFFFF, 0xFFE0, 0xF800, 0x0000)
_A4FF: Row = (0xA4FF, 0xFFE0, 0x0300, 0x0000)
_FB0A: Row = (0xFB0A, 0xD000, 0x6000, 0x0000)
_653F: Row = (0xFFFF, 0x653F, 0x001F, 0x0000)
_0000_FC30: Row = (0x0000, 0xFFFF, 0xFC30, 0x91C7)
_8C7B: Row = (0xFFFF, 0x8C7B, 0x5291, 0x0000)
_7FE6: Row = (0xFFFF, 0x7FE6, 0x0420, 0x0000)
_0318: Row = (0xFFFF, 0x7FE6, 0x0318, 0x0000)
_0430: Row = (0x0000, 0x0430, 0xFEE0, 0xFFFF)
_B634: Row = (0xB634, 0x8CCF, 0x63AA, 0x31C4)
_FFF4: Row = (0xFFF4, 0xFCB2, 0x94BF, 0x0000)
_FE60: Row = (0xFFFF, 0xFE60, 0x9B00, 0x0000)
_DMG: Row = (0xDFEA, 0xAE68, 0x74E6, 0x4388)


def _p(obj0: Row, obj1: Row, bg: Row) -> Palette:
    return Palette(obj0, obj1, bg)


DMG_PALETTE = _p(_DMG, _DMG, _DMG)

_PALETTES: dict[tuple[int, int], Palette] = {
    (0x00, 0x01): _p(_FB80, _AD70, _AD70),
    (0x00, 0x03): _p(_FB80, _FB80, _AD70),
    (0x00, 0x05): _p(_FB80, _5DFF, _AD70),
    (0x01, 0x05): _p(_FE28, _FC30, (0xFFF3, 0x95BF, 0x64AE, 0x01C7)),
    (0x02, 0x05): _p(_653F_HI, _FD6C, (0x6FE0, 0xFFFF, 0xFA89, 0x0000)),
    (0x03, 0x05): _p(_653F_HI, _FC30, (0x56E0, 0xFC20, 0xFFE0, 0xFFFF)),
    (0x04, 0x03): _p(_FC30, _FC30, (0xFFFF, 0x7FE0, 0xB380, 0x0000)),
    (0x05, 0x00): _p(_57E0, _57E0, _57E0),
    (0x05, 0x03): _p(_FC30, _FC30, _57E0),
    (0x05, 0x04): _p(_57E0, _5DFF, _57E0),
    (0x06, 0x00): _p(_FCE0, _FCE0, _FCE0),
    (0x06, 0x03): _p(_FC30, _FC30, _FCE0),
    (0x06, 0x04): _p(_FCE0, _5DFF, _FCE0),
    (0x07, 0x00): _p(_FFE0, _FFE0, _FFE0),
    (0x07, 0x04): _p(_FFE0, _5DFF, _FFE0),
    (0x08, 0x00): _p(_A4FF, _A4FF, _A4FF),
    (0x08, 0x03): _p(_FB0A, _FB0A, _A4FF),
    (0x08, 0x05): _p(_FB0A, (0x001F, 0xFFFF, 0xFFEF, 0x043F), _A4FF),
    (0x09, 0x05): _p(_FB80, _653F, (0xFFF9, 0x677D, 0x9C26, 0x5ACB)),
    (0x0A, 0x03): _p(_0000_FC30, _0000_FC30, (0xB5BF, 0xFFF2, 0xAAC8, 0x0000)),
    (0x0B, 0x01): _p(_FC30, _653F, _653F),
    (0x0B, 0x02): _p(_653F, _FC30, _653F),
    (0x0B, 0x05): _p(_FC30, (0xFFFF, 0xFFEF, 0x043F, 0xF800), _653F),
    (0x0C, 0x02): _p(_8C7B, _FE28, _8C7B),
    (0x0C, 0x03): _p(_FE28, _FE28, _8C7B),
    (0x0C, 0x05): _p(_FE28, _5DFF, _8C7B),
    (0x0D, 0x01): _p(_FC30, _8C7B, _8C7B),
    (0x0D, 0x03): _p(_FC30, _FC30, _8C7B),
    (0x0D, 0x05): _p(_FC30, _FD6C, _8C7B),
    (0x0E, 0x03): _p(_FC30, _FC30, _7FE6),
    (0x0E, 0x05): _p(_FC30, _653F, _7FE6),
    (0x0F, 0x03): _p(_653F, _653F, _FD6C),
    (0x0F, 0x05): _p(_653F, _7FE6, _FD6C),
    (0x10, 0x01): _p(_7FE6, _FC30, _FC30),
    (0x10, 0x05): _p(_7FE6, _653F, _FC30),
    (0x11, 0x05): _p((0xFFFF, 0x07E0, 0x3420, 0x0240), _653F, _FC30),
    (0x12, 0x00): _p(_FD6C, _FD6C, _FD6C),
    (0x12, 0x03): _p(_7FE6, _7FE6, _FD6C),
    (0x12, 0x05): _p(_7FE6, _653F, _FD6C),
    (0x13, 0x00): _p(_0430, _0430, _0430),
    (0x14, 0x05): _p((0xFFE0, 0xF800, 0x6000, 0x0000), _7FE6, _653F),
    (0x15, 0x05): _p(_FD6C, _653F, _AD70),
    (0x16, 0x00): _p(_B634, _B634, _B634),
    (0x17, 0x00): _p(_FFF4, _FFF4, _FFF4),
    (0x18, 0x05): _p(_FC30, _7FE6, _653F),
    (0x19, 0x03): _p(_FD6C, _FD6C, (0xFF38, 0xCCF0, 0x8345, 0x5981)),
    (0x1A, 0x05): _p(_653F, _7FE6, (0xFFFF, 0xFFE0, 0x7A40, 0x0000)),
    (0x1B, 0x00): _p(_FE60, _FE60, _FE60),
    (0x1C, 0x01): _p(_FC30, _0318, _0318),
    (0x1C, 0x03): _p(_FC30, _FC30, _0318),
    (0x1C, 0x05): _p(_FC30, _653F, _0318),
    (0xFF, 0xFF): DMG_PALETTE,
}

# Manual selections in the order the boot ROM stores them, with their button combos.
_MANUAL_SELECTIONS: tuple[tuple[int, int], ...] = (
    (0x05, 0x00),  # Right
    (0x07, 0x00),  # A + Down
    (0x12, 0x00),  # Up
    (0x13, 0x00),  # B + Right
    (0x16, 0x00),  # B + Left (Game Boy Pocket greys)
    (0x17, 0x00),  # Down
    (0x19, 0x03),  # B + Up
    (0x1C, 0x03),  # A + Right
    (0x0D, 0x05),  # A + Left
    (0x10, 0x05),  # A + Up
    (0x18, 0x05),  # Left
    (0x1A, 0x05),  # B + Down
    (0xFF, 0xFF),  # A + B (original DMG greens)
)


def get_colour_palette(table_entry: int, shuffling_flags: int) -> Palette:
    """Return the palette for a boot-ROM entry ID and shuffling flags.

    Unknown combinations fall back to the original DMG green palette.
    """
    logger.info(
        "get_colour_palette(table_entry=0x%02X,shuffling_flags=0x%02X)",
        table_entry,
        shuffling_flags,
    )
    palette = _PALETTES.get((table_entry, shuffling_flags))
    if palette is None:
        logger.error(
            "get_colour_palette: No palette found for table_entry=0x%02X shuffling_flags=0x%02X",
            table_entry,
            shuffling_flags,
        )
        return DMG_PALETTE
    return palette


def manual_assign_palette(selection: int) -> Palette:
    """Return the manually selected palette; out-of-range selections give the DMG palette."""
    logger.info("manual_assign_palette(%d)", selection)
    if 0 <= selection < NUMBER_OF_MANUAL_PALETTES:
        return get_colour_palette(*_MANUAL_SELECTIONS[selection])
    return get_colour_palette(0xFF, 0xFF)