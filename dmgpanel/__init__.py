"""Game Boy colour palettes, an ILI9225 panel driver, an 8x8 font and ROM selector helpers."""

__version__ = "0.1.0"
__all__ = ["palettes", "autopalette", "font", "ili9225", "frontend"]