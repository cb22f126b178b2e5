# dmgpanel

Building blocks for a handheld Game Boy (DMG) front end:

- `dmgpanel.palettes` – the RGB565 colour palettes the colour boot ROM picks
  by entry ID and shuffling flags, plus the 13 manual palettes.
- `dmgpanel.autopalette` – automatic palette choice from a cartridge title
  checksum and title.
- `dmgpanel.font` – an 8x8 bitmap font.
- `dmgpanel.ili9225` – a driver for the ILI9225 176x220 LCD controller that
  talks through a replaceable `Bus`.
- `dmgpanel.frontend` – scaling emulator scanlines onto the panel, paging
  through ROM files, cartridge RAM files and palette cycling.

The package has no dependencies outside the standard library.

## Install

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Palettes

A `Palette` is a frozen dataclass with three rows of four RGB565 shades:
`obj0`, `obj1` and `bg`. Building one with a row that is not four 16-bit
values raises `ValueError`.

```python
from dmgpanel.palettes import DMG_PALETTE, get_colour_palette, manual_assign_palette

palette = get_colour_palette(0x05, 0x00)
obj0, obj1, bg = palette.as_rows()

# Emulator pixel bytes carry the row in bits 4-5 (0 OBJ0, 1 OBJ1, 2 BG)
# and the shade in bits 0-1.
colour = palette.lookup(0x21)          # BG row, shade 1

# Unknown (entry, flags) pairs give the original DMG greens.
assert get_colour_palette(0x42, 0x00) == DMG_PALETTE

# Manual palettes 0..12; any other selection gives DMG_PALETTE.
manual = manual_assign_palette(3)
```

`Palette.lookup` raises `ValueError` for a pixel whose row bits are 3.

### Automatic choice

```python
from dmgpanel.autopalette import auto_assign_palette, palette_id_for

palette_id_for(0x70, "ZELDA")          # (0x11, 0x05)
palette_id_for(0x46, "METROID2")       # 4th character 'R' -> (0x14, 0x05)
zelda = auto_assign_palette(0x70, "ZELDA")
```

Checksums that share a value are told apart by the fourth character of the
title. Unknown checksums give `(0xFF, 0xFF)`, the DMG palette; a checksum
outside 0..255 raises `ValueError`.

## Font

```python
from dmgpanel.font import glyph, render_glyph

rows = glyph("A")                      # eight row bitmaps, MSB is the left pixel
cells = render_glyph("A", 0xFFFF, 0x0000)   # 64 RGB565 values, row by row
```

Letters are case-insensitive; digits and `- ( ) [ ] { } , . ! & '` have
glyphs; any other single character is blank. Passing anything but one
character, or a colour outside 0..0xFFFF, raises `ValueError`.

## Panel driver

`ILI9225` sends every register write and pixel stream through a `Bus`. The
base `Bus` keeps the reset, register-select, chip-select and backlight levels
as attributes (`rst`, `rs`, `cs`, `led`), adds up delays in `elapsed_ms`, and
appends each call to `events`:

- `("rst" | "rs" | "cs" | "led", level)`
- `("write", rs_level, halfwords)`
- `("delay", ms)`

Subclass it and override `set_rst`, `set_rs`, `set_cs`, `set_led`,
`write16` and `delay_ms` to drive real pins.

```python
from dmgpanel.ili9225 import Bus, ColorMode, ILI9225, Register

bus = Bus()
lcd = ILI9225(bus)
lcd.init()                             # reset, power-up and setup sequence; returns 0
lcd.fill(0x0000)                       # the whole 220x176 drawing area
lcd.fill_rect(31, 16, 160, 144, 0x0000)
lcd.text("TETRIS.GB", 0, 0, 0xFFFF, 0x0000)
lcd.display_control(False, ColorMode.EIGHT_COLOUR)

words = [w for event in bus.events if event[0] == "write" for w in event[2]]
```

Other operations: `set_window`, `set_x`, `set_address`, `write_pixels`,
`write_pixels_start` / `write_pixels_end`, `power_control`, `set_gate_scan`,
`set_drive_freq`, `pixel` and `blit`. `set_window` raises `ValueError` for an
empty or off-screen window, `write_pixels` for an empty pixel list, and
`blit` when the buffer is shorter than `w * h`. `text` stops once the next
character would start past x = 216. Register indices are in the `Register`
enum.

## Front end helpers

```python
from dmgpanel.frontend import (
    PaletteCycler, RomSelector, lcd_lines_for, list_rom_page,
    read_cart_ram, scale_line, write_cart_ram,
)
from dmgpanel.palettes import DMG_PALETTE

row = scale_line([0x20] * 160, DMG_PALETTE)   # 160 pixels -> 220 RGB565 colours
lcd_lines_for(0)                              # range(0, 1)

names = list_rom_page("roms", 0)              # sorted *.gb names, 22 per page

selector = RomSelector("roms")
selector.move_down()                          # wraps around the page
selector.next_page()                          # stays put if the next page is empty
path = selector.selected_file()               # Path, or None on an empty page

ram = read_cart_ram("roms/TETRIS.sav", 8192)  # 32768-byte bytearray
write_cart_ram("roms/TETRIS.sav", ram, 8192)  # returns bytes written

cycler = PaletteCycler()                      # selection 0, DMG palette
cycler.next()                                 # manual palette 1 .. up to 12
```

`read_cart_ram` with a save size of 0 returns zeroed RAM without opening the
file; a save file larger than 32768 bytes raises `ValueError`.
`write_cart_ram` with a save size of 0 writes nothing and returns 0.

## What this package does not do

There is no emulator core here: nothing runs Game Boy code, produces
scanlines, computes a title checksum or generates sound. There is no
command-line program and no hardware access; driving a real panel or reading
buttons needs a `Bus` subclass and input handling of your own.