"""Driver for the ILI9225 176x220 RGB565 LCD controller over a 16-bit SPI link.

The controller is driven through a :class:`Bus`, which owns the reset,
register-select, chip-select and backlight lines and the SPI writes. The base
:class:`Bus` keeps the line levels and records every transaction, which makes it
usable as an in-memory panel; subclass it to drive real pins.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Sequence, Tuple

from dmgpanel.font import GLYPH_HEIGHT, GLYPH_WIDTH, render_glyph

DEVICE_CODE = 0x9225

SCREEN_WIDTH = 176
SCREEN_HEIGHT = 220

# The panel is mounted rotated: drawing coordinates run 0..219 across and 0..175 down.
_LAST_COLUMN = 219
_TEXT_LAST_X = 27 * 8


class Register(IntEnum):
    """ILI9225 register indices."""

    DRIVER_CODE_READ = 0x00
    START_OSCILLATION = 0x00
    DRIVER_OUTPUT_CTRL = 0x01
    LCD_AC_DRIVING_CTRL = 0x02
    ENTRY_MODE = 0x03
    DISPLAY_CTRL = 0x07
    BLANK_PERIOD_CTRL = 0x08
    FRAME_CYCLE_CTRL = 0x0B
    INTERFACE_CTRL = 0x0C
    OSC_CTRL = 0x0F
    PWR_CTRL1 = 0x10
    PWR_CTRL2 = 0x11
    PWR_CTRL3 = 0x12
    PWR_CTRL4 = 0x13
    PWR_CTRL5 = 0x14
    VCI_RECYCLING = 0x15
    RAM_ADDR_SET1 = 0x20
    RAM_ADDR_SET2 = 0x21
    GRAM_RW = 0x22
    SOFT_RESET = 0x28
    GATE_SCAN_CTRL = 0x30
    VERT_SCROLL_CTRL1 = 0x31
    VERT_SCROLL_CTRL2 = 0x32
    VERT_SCROLL_CTRL3 = 0x33
    PART_DRIVING_POS1 = 0x34
    PART_DRIVING_POS2 = 0x35
    HORI_WIN_ADDR1 = 0x36
    HORI_WIN_ADDR2 = 0x37
    VERT_WIN_ADDR1 = 0x38
    VERT_WIN_ADDR2 = 0x39
    GAMMA_CTRL1 = 0x50
    GAMMA_CTRL2 = 0x51
    GAMMA_CTRL3 = 0x52
    GAMMA_CTRL4 = 0x53
    GAMMA_CTRL5 = 0x54
    GAMMA_CTRL6 = 0x55
    GAMMA_CTRL7 = 0x56
    GAMMA_CTRL8 = 0x57
    GAMMA_CTRL9 = 0x58
    GAMMA_CTRL10 = 0x59
    NV_MEM_DATA_PROG = 0x60
    NV_MEM_CTRL = 0x61
    NV_MEM_STAT = 0x62
    NV_MEM_PROTECTION_KEY = 0x63
    NV_MEM_ID_CODE = 0x65
    MTP_TEST_KEY = 0x80
    MTP_CTRL_REG = 0x81
    MTP_DATA_READ = 0x82


class ColorMode(IntEnum):
    """Display colour depth: full colour or the low-power 8-colour idle mode."""

    FULL = 0
    EIGHT_COLOUR = 1


Event = Tuple


class Bus:
    """Control lines and SPI link to the panel.

    Line levels are kept as attributes and every call is appended to
    ``events``: ``("rst"|"rs"|"cs"|"led", level)``, ``("write", rs, halfwords)``
    and ``("delay", ms)``.
    """

    def __init__(self) -> None:
        self.rst = False
        self.rs = False
        self.cs = True
        self.led = False
        self.elapsed_ms = 0
        self.events: List[Event] = []

    def set_rst(self, state: bool) -> None:
        self.rst = bool(state)
        self.events.append(("rst", self.rst))

    def set_rs(self, state: bool) -> None:
        self.rs = bool(state)
        self.events.append(("rs", self.rs))

    def set_cs(self, state: bool) -> None:
        self.cs = bool(state)
        self.events.append(("cs", self.cs))

    def set_led(self, state: bool) -> None:
        self.led = bool(state)
        self.events.append(("led", self.led))

    def write16(self, halfwords: Iterable[int]) -> None:
        """Send 16-bit words over SPI, most significant bit first."""
        words = tuple(halfwords)
        for word in words:
            if not isinstance(word, int) or not 0 <= word <= 0xFFFF:
                raise ValueError(f"{word!r} is not a 16-bit value")
        self.events.append(("write", self.rs, words))

    def delay_ms(self, ms: int) -> None:
        if ms < 0:
            raise ValueError("delay must not be negative")
        self.elapsed_ms += ms
        self.events.append(("delay", ms))


_POWER_RESET_REGS = (
    Register.PWR_CTRL1,
    Register.PWR_CTRL2,
    Register.PWR_CTRL3,
    Register.PWR_CTRL4,
    Register.PWR_CTRL5,
)

_POWER_ON_SEQUENCE = (
    (Register.PWR_CTRL2, 0x0018),
    (Register.PWR_CTRL3, 0x6121),
    (Register.PWR_CTRL4, 0x006F),
    (Register.PWR_CTRL5, 0x495F),
    (Register.PWR_CTRL1, 0x0800),
)

_SETUP_SEQUENCE = (
    (Register.DRIVER_OUTPUT_CTRL, 0x011C),
    (Register.LCD_AC_DRIVING_CTRL, 0x0100),
    (Register.ENTRY_MODE, 0x1018),
    (Register.DISPLAY_CTRL, 0x0000),
    (Register.BLANK_PERIOD_CTRL, 0x0808),
    (Register.FRAME_CYCLE_CTRL, 0x1100),
    (Register.INTERFACE_CTRL, 0x0000),
    (Register.OSC_CTRL, 0x0701),
    (Register.VCI_RECYCLING, 0x0020),
    (Register.RAM_ADDR_SET1, 0x0000),
    (Register.RAM_ADDR_SET2, 0x0000),
    (Register.GATE_SCAN_CTRL, 0x0000),
    (Register.VERT_SCROLL_CTRL1, 0x00DB),
    (Register.VERT_SCROLL_CTRL2, 0x0000),
    (Register.VERT_SCROLL_CTRL3, 0x0000),
    (Register.PART_DRIVING_POS1, 0x00DB),
    (Register.PART_DRIVING_POS2, 0x0000),
    (Register.HORI_WIN_ADDR1, 0x00AF),
    (Register.HORI_WIN_ADDR2, 0x0000),
    (Register.VERT_WIN_ADDR1, 0x00DB),
    (Register.VERT_WIN_ADDR2, 0x0000),
    (Register.GAMMA_CTRL1, 0x0000),
    (Register.GAMMA_CTRL2, 0x0808),
    (Register.GAMMA_CTRL3, 0x080A),
    (Register.GAMMA_CTRL4, 0x000A),
    (Register.GAMMA_CTRL5, 0x0A08),
    (Register.GAMMA_CTRL6, 0x0808),
    (Register.GAMMA_CTRL7, 0x0000),
    (Register.GAMMA_CTRL8, 0x0A00),
    (Register.GAMMA_CTRL9, 0x0710),
    (Register.GAMMA_CTRL10, 0x0710),
    (Register.DISPLAY_CTRL, 0x0012),
)


class ILI9225:
    """High-level operations on an ILI9225 panel attached to a :class:`Bus`."""

    def __init__(self, bus: Bus) -> None:
        self.bus = bus

    # Low-level transfers.

    def _write_register(self, reg: int) -> None:
        self.bus.set_rs(False)
        self.bus.set_cs(False)
        self.bus.write16((reg & 0xFFFF,))
        self.bus.set_cs(True)

    def _write_data(self, data: int) -> None:
        self.bus.set_rs(True)
        self.bus.set_cs(False)
        self.bus.write16((data & 0xFFFF,))
        self.bus.set_cs(True)

    def _set_register(self, reg: int, data: int) -> None:
        self._write_register(reg)
        self._write_data(data)

    def _stream(self, pixels: Sequence[int]) -> None:
        self.write_pixels_start()
        self.bus.write16(pixels)
        self.write_pixels_end()

    def _open_drawing_window(self, x: int, y: int, w: int, h: int) -> None:
        self._set_register(Register.ENTRY_MODE, 0x1018)
        self._set_register(Register.HORI_WIN_ADDR1, y + h - 1)
        self._set_register(Register.HORI_WIN_ADDR2, y)
        self._set_register(Register.VERT_WIN_ADDR1, _LAST_COLUMN - x)
        self._set_register(Register.VERT_WIN_ADDR2, _LAST_COLUMN - (x + w - 1))
        self._set_register(Register.RAM_ADDR_SET1, y)
        self._set_register(Register.RAM_ADDR_SET2, _LAST_COLUMN - x)

    # Public operations.

    def init(self) -> int:
        """Reset and configure the panel, then switch the display and backlight on.

        Returns 0: the device code cannot be read back over a write-only link.
        """
        bus = self.bus
        bus.set_rst(True)
        bus.set_cs(True)
        bus.set_rs(False)
        bus.delay_ms(1)

        bus.set_rst(False)
        bus.delay_ms(10)

        bus.set_rst(True)
        bus.delay_ms(50)

        bus.set_led(False)

        for reg in _POWER_RESET_REGS:
            self._set_register(reg, 0x0000)
        bus.delay_ms(40)

        for reg, data in _POWER_ON_SEQUENCE:
            self._set_register(reg, data)
        bus.delay_ms(10)

        self._set_register(Register.PWR_CTRL2, 0x103B)
        bus.delay_ms(50)

        for reg, data in _SETUP_SEQUENCE:
            self._set_register(reg, data)
        bus.delay_ms(50)

        self._set_register(Register.DISPLAY_CTRL, 0x1017)
        bus.delay_ms(50)

        bus.set_led(True)
        return 0

    def display_control(self, invert: bool, colour_mode: ColorMode) -> None:
        """Switch the display on, optionally inverted and in the given colour mode."""
        data = 0x0013 | (int(bool(invert)) << 2) | (int(colour_mode) << 3)
        self._set_register(Register.DISPLAY_CTRL, data)

    def set_window(self, hor_start: int, hor_end: int, vert_start: int, vert_end: int) -> None:
        """Restrict drawing to a window and move the address counter to its start."""
        if not hor_start < hor_end:
            raise ValueError("hor_start must be below hor_end")
        if not hor_end < SCREEN_WIDTH:
            raise ValueError(f"hor_end must be below {SCREEN_WIDTH}")
        if not vert_start < vert_end:
            raise ValueError("vert_start must be below vert_end")
        if not vert_end < SCREEN_HEIGHT:
            raise ValueError(f"vert_end must be below {SCREEN_HEIGHT}")
        self._set_register(Register.HORI_WIN_ADDR1, hor_end)
        self._set_register(Register.HORI_WIN_ADDR2, hor_start)
        self._set_register(Register.VERT_WIN_ADDR1, vert_end)
        self._set_register(Register.VERT_WIN_ADDR2, vert_start)
        self._set_register(Register.RAM_ADDR_SET1, hor_start)
        self._set_register(Register.RAM_ADDR_SET2, vert_start)

    def set_x(self, x: int) -> None:
        self._set_register(Register.RAM_ADDR_SET1, x & 0xFF)

    def set_address(self, x: int, y: int) -> None:
        self._set_register(Register.RAM_ADDR_SET1, x & 0xFF)
        self._set_register(Register.RAM_ADDR_SET2, y & 0xFF)

    def write_pixels(self, pixels: Sequence[int]) -> None:
        """Write RGB565 pixels to graphics RAM at the current address."""
        pixels = tuple(pixels)
        if not pixels:
            raise ValueError("no pixels to write")
        self._stream(pixels)

    def write_pixels_start(self) -> None:
        """Select graphics RAM and hold chip-select low for a pixel stream."""
        self._write_register(Register.GRAM_RW)
        self.bus.set_rs(True)
        self.bus.set_cs(False)

    def write_pixels_end(self) -> None:
        self.bus.set_cs(True)

    def power_control(self, drive_power: int, sleep: bool) -> None:
        data = ((drive_power & 0xFF) << 8) | int(bool(sleep))
        self._set_register(Register.PWR_CTRL1, data)

    def set_gate_scan(self, hor_start: int, hor_end: int) -> None:
        self._set_register(Register.DRIVER_OUTPUT_CTRL, 0x0100 | (hor_end // 8))
        self._set_register(Register.GATE_SCAN_CTRL, hor_start // 8)

    def set_drive_freq(self, f: int) -> None:
        """Set the oscillator frequency step (0-15) and keep the oscillator running."""
        self._set_register(Register.OSC_CTRL, ((f & 0x000F) << 8) | 1)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        """Fill a w x h rectangle whose top-left corner is at (x, y)."""
        self._open_drawing_window(x, y, w, h)
        self._stream([color] * max(w * h, 0))

    def fill(self, color: int) -> None:
        self.fill_rect(0, 0, SCREEN_HEIGHT, SCREEN_WIDTH, color)

    def pixel(self, x: int, y: int, color: int) -> None:
        self._set_register(Register.RAM_ADDR_SET1, y)
        self._set_register(Register.RAM_ADDR_SET2, _LAST_COLUMN - x)
        self._set_register(Register.GRAM_RW, color)

    def blit(self, fbuf: Sequence[int], x: int, y: int, w: int, h: int) -> None:
        """Copy a row-major w x h block of RGB565 pixels to (x, y)."""
        count = w * h
        if count < 0 or len(fbuf) < count:
            raise ValueError(f"buffer holds {len(fbuf)} pixels, {count} needed")
        self._open_drawing_window(x, y, w, h)
        self._stream(list(fbuf[:count]))

    def text(self, s: str, x: int, y: int, color: int, bgcolor: int) -> None:
        """Draw a string in the 8x8 font; text running off the right edge is cut."""
        for char in s:
            self.blit(render_glyph(char, color, bgcolor), x, y, GLYPH_WIDTH, GLYPH_HEIGHT)
            x += GLYPH_WIDTH
            if x > _TEXT_LAST_X:
                break