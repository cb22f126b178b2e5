"""Front-end pieces around the emulator core.

This module covers scaling emulator scanlines onto the 220x176 panel, paging
through ROM files, loading and storing cartridge RAM, and cycling through
the manual colour palettes.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from dmgpanel.palettes import (
    DMG_PALETTE,
    NUMBER_OF_MANUAL_PALETTES,
    Palette,
    manual_assign_palette,
)

logger = logging.getLogger(__name__)

LCD_WIDTH = 160
LCD_HEIGHT = 144
PANEL_LINE_PIXELS = 220
PANEL_LINES = 176
FILES_PER_PAGE = 22
CART_RAM_SIZE = 32768
ROM_SUFFIX = ".gb"

PathLike = Union[str, "os.PathLike[str]"]


def scale_line(pixels: Sequence[int], palette: Palette) -> List[int]:
    """Convert one emulator scanline to 220 RGB565 pixels, stretching it horizontally."""
    if len(pixels) != LCD_WIDTH:
        raise ValueError(f"a scanline holds {LCD_WIDTH} pixels, got {len(pixels)}")
    return [
        palette.lookup(pixels[min(x * LCD_WIDTH // PANEL_LINE_PIXELS, LCD_WIDTH - 1)])
        for x in range(PANEL_LINE_PIXELS)
    ]


def lcd_lines_for(line: int) -> range:
    """Return the panel lines that show emulator line ``line``.

    Stretching 144 lines to 176 draws some lines once and others twice.
    """
    if not 0 <= line < LCD_HEIGHT:
        raise ValueError(f"line must be in 0..{LCD_HEIGHT - 1}, got {line}")
    start = line * PANEL_LINES // LCD_HEIGHT
    end = (line + 1) * PANEL_LINES // LCD_HEIGHT
    return range(start, end)


def _rom_files(directory: PathLike) -> List[str]:
    with os.scandir(directory) as entries:
        return sorted(
            entry.name
            for entry in entries
            if entry.is_file() and entry.name.lower().endswith(ROM_SUFFIX)
        )


def list_rom_page(directory: PathLike, page: int) -> List[str]:
    """Return the names of the ROM files on a page of up to 22 entries."""
    if page < 0:
        raise ValueError("page must not be negative")
    start = page * FILES_PER_PAGE
    return _rom_files(directory)[start:start + FILES_PER_PAGE]


def read_cart_ram(path: PathLike, save_size: int) -> bytearray:
    """Return cartridge RAM, filled from a save file when the cartridge has one.

    A cartridge with no save RAM (``save_size`` of 0) gets zeroed RAM without
    touching the file system.
    """
    if save_size < 0:
        raise ValueError("save size must not be negative")
    ram = bytearray(CART_RAM_SIZE)
    if save_size > 0:
        data = Path(path).read_bytes()
        if len(data) > CART_RAM_SIZE:
            raise ValueError(
                f"save file holds {len(data)} bytes, cartridge RAM is {CART_RAM_SIZE}"
            )
        ram[: len(data)] = data
    logger.info("read_cart_ram(%s) COMPLETE (%d bytes)", path, save_size)
    return ram


def write_cart_ram(path: PathLike, ram: Sequence[int], save_size: int) -> int:
    """Write the first ``save_size`` bytes of cartridge RAM; return the count written."""
    if save_size < 0:
        raise ValueError("save size must not be negative")
    if save_size > len(ram):
        raise ValueError(f"save size {save_size} exceeds RAM of {len(ram)} bytes")
    written = 0
    if save_size > 0:
        written = Path(path).write_bytes(bytes(ram[:save_size]))
    logger.info("write_cart_ram(%s) COMPLETE (%d bytes)", path, save_size)
    return written


@dataclass
class PaletteCycler:
    """Steps through the manual palettes with the select+left/right hotkeys."""

    selection: int = 0
    palette: Palette = field(default=DMG_PALETTE)

    def next(self) -> Palette:
        """Move to the next manual palette, stopping at the last one."""
        if self.selection < NUMBER_OF_MANUAL_PALETTES - 1:
            self.selection += 1
            self.palette = manual_assign_palette(self.selection)
        return self.palette

    def previous(self) -> Palette:
        """Move to the previous manual palette, stopping at the first one."""
        if self.selection > 0:
            self.selection -= 1
            self.palette = manual_assign_palette(self.selection)
        return self.palette


class RomSelector:
    """Pages through the ROM files of a directory and tracks the highlighted one."""

    def __init__(self, directory: PathLike) -> None:
        self.directory = Path(directory)
        self.page = 0
        self.selected = 0
        self.files: List[str] = list_rom_page(self.directory, self.page)

    def _load(self) -> None:
        self.files = list_rom_page(self.directory, self.page)
        self.selected = 0

    def move_down(self) -> int:
        """Highlight the next file, wrapping to the first."""
        if self.files:
            self.selected = (self.selected + 1) % len(self.files)
        return self.selected

    def move_up(self) -> int:
        """Highlight the previous file, wrapping to the last."""
        if self.files:
            self.selected = (self.selected - 1) % len(self.files)
        return self.selected

    def next_page(self) -> int:
        """Show the next page; stay on the current one if the next is empty."""
        self.page += 1
        self._load()
        if not self.files:
            self.page -= 1
            self._load()
        return self.page

    def previous_page(self) -> int:
        """Show the previous page, if there is one."""
        if self.page > 0:
            self.page -= 1
            self._load()
        return self.page

    def selected_file(self) -> Optional[Path]:
        """Return the path of the highlighted file, or None when the page is empty."""
        if not self.files:
            return None
        return self.directory / self.files[self.selected]