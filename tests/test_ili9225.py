import pytest

from dmgpanel.font import render_glyph
from dmgpanel.ili9225 import Bus, ColorMode, ILI9225, Register


def register_writes(bus):
    """Decode the bus trace into (register, data words) pairs."""
    result = []
    current = None
    for event in bus.events:
        if event[0] != "write":
            continue
        _, rs, words = event
        if not rs:
            current = words[0]
        else:
            result.append((current, words))
    return result


def single_writes(bus):
    return [(reg, words[0]) for reg, words in register_writes(bus) if len(words) == 1]


@pytest.fixture
def panel():
    return ILI9225(Bus())


def test_init_returns_zero_and_turns_on_display(panel):
    assert panel.init() == 0
    writes = single_writes(panel.bus)
    assert writes[-1] == (Register.DISPLAY_CTRL, 0x1017)
    assert (Register.ENTRY_MODE, 0x1018) in writes
    assert (Register.OSC_CTRL, 0x0701) in writes
    assert panel.bus.led is True


def test_init_reset_pulse_and_first_writes(panel):
    panel.init()
    rst_levels = [e[1] for e in panel.bus.events if e[0] == "rst"]
    assert rst_levels == [True, False, True]
    writes = single_writes(panel.bus)
    assert writes[:5] == [
        (Register.PWR_CTRL1, 0),
        (Register.PWR_CTRL2, 0),
        (Register.PWR_CTRL3, 0),
        (Register.PWR_CTRL4, 0),
        (Register.PWR_CTRL5, 0),
    ]
    assert writes[5] == (Register.PWR_CTRL2, 0x0018)


def test_init_backlight_off_before_on(panel):
    panel.init()
    led_levels = [e[1] for e in panel.bus.events if e[0] == "led"]
    assert led_levels == [False, True]


def test_every_write_happens_with_chip_selected(panel):
    panel.init()
    panel.fill_rect(1, 2, 3, 4, 0x1234)
    cs = True
    for event in panel.bus.events:
        if event[0] == "cs":
            cs = event[1]
        elif event[0] == "write":
            assert cs is False
    assert panel.bus.cs is True


def test_display_control_full_colour(panel):
    panel.display_control(False, ColorMode.FULL)
    assert single_writes(panel.bus) == [(Register.DISPLAY_CTRL, 0x0013)]


def test_display_control_bits(panel):
    panel.display_control(False, ColorMode.FULL)
    panel.display_control(True, ColorMode.FULL)
    panel.display_control(False, ColorMode.EIGHT_COLOUR)
    base, inverted, idle = (data for _, data in single_writes(panel.bus))
    assert inverted ^ base == 1 << 2
    assert idle ^ base == 1 << 3


def test_set_window_writes_bounds(panel):
    panel.set_window(10, 100, 20, 200)
    assert single_writes(panel.bus) == [
        (Register.HORI_WIN_ADDR1, 100),
        (Register.HORI_WIN_ADDR2, 10),
        (Register.VERT_WIN_ADDR1, 200),
        (Register.VERT_WIN_ADDR2, 20),
        (Register.RAM_ADDR_SET1, 10),
        (Register.RAM_ADDR_SET2, 20),
    ]


@pytest.mark.parametrize(
    "args",
    [(5, 5, 0, 10), (0, 176, 0, 10), (0, 10, 9, 9), (0, 10, 0, 220)],
)
def test_set_window_rejects_bad_bounds(panel, args):
    with pytest.raises(ValueError):
        panel.set_window(*args)
    assert panel.bus.events == []


def test_set_address(panel):
    panel.set_address(7, 9)
    panel.set_x(3)
    assert single_writes(panel.bus) == [
        (Register.RAM_ADDR_SET1, 7),
        (Register.RAM_ADDR_SET2, 9),
        (Register.RAM_ADDR_SET1, 3),
    ]


def test_write_pixels_streams_to_gram(panel):
    panel.write_pixels([1, 2, 3])
    assert register_writes(panel.bus) == [(Register.GRAM_RW, (1, 2, 3))]


def test_write_pixels_rejects_empty(panel):
    with pytest.raises(ValueError):
        panel.write_pixels([])


def test_bus_rejects_out_of_range_word():
    bus = Bus()
    with pytest.raises(ValueError):
        bus.write16([0x10000])


def test_write_pixels_start_end_frames_stream(panel):
    panel.write_pixels_start()
    assert panel.bus.cs is False and panel.bus.rs is True
    panel.bus.write16([5, 6])
    panel.write_pixels_end()
    assert panel.bus.cs is True
    assert register_writes(panel.bus) == [(Register.GRAM_RW, (5, 6))]


def test_power_control(panel):
    panel.power_control(0x08, False)
    panel.power_control(0x08, True)
    (_, awake), (_, asleep) = single_writes(panel.bus)
    assert awake == 0x0800
    assert asleep == awake | 1


def test_set_drive_freq_masks_to_four_bits(panel):
    panel.set_drive_freq(0x17)
    panel.set_drive_freq(0x07)
    (reg_a, high), (reg_b, low) = single_writes(panel.bus)
    assert reg_a == reg_b == Register.OSC_CTRL
    assert high == low
    assert low == 0x0701


def test_set_gate_scan(panel):
    panel.set_gate_scan(16, 64)
    writes = single_writes(panel.bus)
    assert writes[0][0] == Register.DRIVER_OUTPUT_CTRL
    assert writes[0][1] & 0xFF00 == 0x0100
    assert writes[0][1] & 0xFF == 64 // 8
    assert writes[1] == (Register.GATE_SCAN_CTRL, 16 // 8)


def test_fill_rect_pixels_and_window(panel):
    panel.fill_rect(31, 16, 160, 144, 0x0000)
    writes = register_writes(panel.bus)
    gram = [words for reg, words in writes if reg == Register.GRAM_RW]
    assert len(gram) == 1
    assert len(gram[0]) == 160 * 144
    assert set(gram[0]) == {0x0000}
    singles = dict((reg, words[0]) for reg, words in writes[:7])
    assert singles[Register.HORI_WIN_ADDR2] == 16
    assert singles[Register.HORI_WIN_ADDR1] == 16 + 144 - 1
    assert singles[Register.VERT_WIN_ADDR1] == 219 - 31
    assert singles[Register.VERT_WIN_ADDR2] == 219 - (31 + 160 - 1)


def test_fill_covers_whole_screen(panel):
    panel.fill(0xFFFF)
    gram = [w for reg, w in register_writes(panel.bus) if reg == Register.GRAM_RW]
    assert len(gram[0]) == 220 * 176
    assert set(gram[0]) == {0xFFFF}


def test_pixel(panel):
    panel.pixel(0, 5, 0xF800)
    assert single_writes(panel.bus) == [
        (Register.RAM_ADDR_SET1, 5),
        (Register.RAM_ADDR_SET2, 219),
        (Register.GRAM_RW, 0xF800),
    ]


def test_blit_sends_buffer(panel):
    fbuf = list(range(6))
    panel.blit(fbuf, 0, 0, 3, 2)
    gram = [w for reg, w in register_writes(panel.bus) if reg == Register.GRAM_RW]
    assert gram == [tuple(fbuf)]


def test_blit_rejects_short_buffer(panel):
    with pytest.raises(ValueError):
        panel.blit([0] * 10, 0, 0, 4, 4)


def test_text_renders_glyphs(panel):
    panel.text("Ab", 0, 8, 0xFFFF, 0xF800)
    gram = [w for reg, w in register_writes(panel.bus) if reg == Register.GRAM_RW]
    assert gram == [
        tuple(render_glyph("A", 0xFFFF, 0xF800)),
        tuple(render_glyph("b", 0xFFFF, 0xF800)),
    ]


def test_text_advances_eight_columns(panel):
    panel.text("xy", 16, 0, 0xFFFF, 0x0000)
    starts = [w[0] for reg, w in register_writes(panel.bus) if reg == Register.RAM_ADDR_SET2]
    assert starts == [219 - 16, 219 - 24]


def test_text_truncates_at_right_edge(panel):
    panel.text("A" * 40, 0, 0, 0xFFFF, 0x0000)
    gram = [w for reg, w in register_writes(panel.bus) if reg == Register.GRAM_RW]
    assert len(gram) == 28


def test_bus_records_delays():
    bus = Bus()
    ILI9225(bus).init()
    delays = [e[1] for e in bus.events if e[0] == "delay"]
    assert sum(delays) == bus.elapsed_ms
    assert delays[:3] == [1, 10, 50]