"""Automatic palette assignment for monochrome games.

The Game Boy Color boot ROM hashes the cartridge header title and uses the
result to pick a palette entry ID and shuffling flags. Some hashes collide;
those are told apart by the fourth character of the title.
"""

from __future__ import annotations

import logging
from typing import Mapping, Tuple

from dmgpanel.palettes import Palette, get_colour_palette

logger = logging.getLogger(__name__)

PaletteId = Tuple[int, int]

DEFAULT_PALETTE_ID: PaletteId = (0xFF, 0xFF)

# Checksums that map to exactly one palette.
_SINGLE: Mapping[int, PaletteId] = {
    0x00: (0x1C, 0x03),
    0x01: (0x0F, 0x05),  # Arcade Classic No. 4 - Defender & Joust
    0x0C: (0x12, 0x00),  # Nigel Mansell's World Championship Racing
    0x10: (0x0F, 0x05),  # Super R.C. Pro-Am
    0x14: (0x10, 0x01),  # Pokemon - Red Version, Game Boy Camera Gold
    0x15: (0x07, 0x00),  # Pocket Monsters - Pikachu
    0x17: (0x0E, 0x05),  # Othello
    0x19: (0x06, 0x03),  # Donkey Kong
    0x1D: (0x08, 0x03),  # Kirby's Pinball Land
    0x29: (0x0F, 0x05),  # Mega Man III
    0x2B: (0x0F, 0x05),  # Mega Man V
    0x34: (0x04, 0x03),  # Game Boy Gallery (Japan)
    0x35: (0x12, 0x00),  # Mario's Picross
    0x36: (0x03, 0x05),  # Baseball
    0x39: (0x0F, 0x03),  # Dynablaster
    0x3C: (0x0B, 0x02),  # Dr. Mario
    0x3D: (0x05, 0x03),  # Yoshi
    0x3E: (0x06, 0x04),  # Yoshi no Cookie
    0x3F: (0x1C, 0x03),  # Tetris Plus
    0x43: (0x0F, 0x03),  # The Chessmaster
    0x49: (0x08, 0x05),  # Kirby's Dream Land
    0x4B: (0x0E, 0x03),  # Play Action Football
    0x4E: (0x0B, 0x05),  # Wave Race
    0x50: (0x0C, 0x05),  # Castlevania II - Belmont's Revenge
    0x52: (0x0F, 0x05),  # Street Fighter II
    0x58: (0x16, 0x00),  # X
    0x59: (0x00, 0x05),  # Wario Land - Super Mario Land 3
    0x5C: (0x08, 0x05),  # Hoshi no Kirby
    0x5D: (0x0F, 0x05),  # Battle Arena Toshinden
    0x67: (0x12, 0x00),  # Kirby's Star Stacker
    0x68: (0x0F, 0x05),  # Adventures of Lolo, Mega Man II
    0x69: (0x07, 0x04),  # Tetris Flash
    0x6B: (0x0C, 0x05),  # The Castlevania Adventure, Donkey Kong Land III
    0x6D: (0x0F, 0x05),  # The King of Fighters '95
    0x6F: (0x1B, 0x00),  # Pocket Camera
    0x70: (0x11, 0x05),  # The Legend of Zelda - Link's Awakening
    0x71: (0x06, 0x00),  # Tetris Blast
    0x75: (0x12, 0x00),  # Picross 2
    0x86: (0x01, 0x05),  # Donkey Kong Land
    0x88: (0x08, 0x00),  # Alleyway
    0x8B: (0x0E, 0x05),  # Mystic Quest
    0x8C: (0x00, 0x01),  # Radar Mission
    0x90: (0x0E, 0x03),  # Nintendo World Cup
    0x92: (0x12, 0x00),  # F-1 Race
    0x95: (0x05, 0x04),  # Yoshi no Panepon
    0x97: (0x0F, 0x03),  # King of the Zoo
    0x99: (0x12, 0x00),  # Kirby no Kirakira Kids
    0x9A: (0x0E, 0x03),  # Arcade Classic No. 1 - Asteroids & Missile Command
    0x9C: (0x0C, 0x02),  # Pinocchio
    0x9D: (0x0D, 0x05),  # Killer Instinct
    0xA2: (0x12, 0x05),  # Star Wars
    0xA8: (0x01, 0x05),  # Super Donkey Kong GB
    0xAA: (0x1C, 0x01),  # James Bond 007, Pocket Monsters Midori
    0xB7: (0x12, 0x00),  # Game Boy Gallery (Europe)
    0xBD: (0x0E, 0x03),  # Toy Story
    0xC9: (0x09, 0x05),  # Super Mario Land 2 - 6 Golden Coins
    0xCE: (0x02, 0x05),  # Top Ranking Tennis
    0xD1: (0x02, 0x05),  # Tennis
    0xDB: (0x07, 0x00),  # Tetris
    0xE0: (0x06, 0x04),  # Yoshi's Cookie
    0xE8: (0x13, 0x00),  # Space Invaders
    0xF0: (0x02, 0x05),  # Top Rank Tennis
    0xF2: (0x07, 0x04),  # Qix
    0xF6: (0x0F, 0x05),  # Mega Man - Dr. Wily's Revenge
    0xF7: (0x12, 0x05),  # A Boy and His Blob
    0xFF: (0x06, 0x00),  # Balloon Kid
}

# Colliding checksums: rules keyed by the fourth title character, then a fallback.
_DISAMBIGUATED: Mapping[int, Tuple[Mapping[str, PaletteId], PaletteId]] = {
    0x0D: ({"E": (0x0C, 0x03)}, (0x07, 0x04)),  # Pocket Bomberman / Tetris 2
    0x16: ({"M": (0x0D, 0x05)}, (0x0C, 0x05)),  # Batman / Donkey Kong Land (Japan)
    0x18: ({"I": (0x1C, 0x03)}, (0x0C, 0x05)),  # Wario Blast / Donkey Kong Land (Japan)
    0x27: ({"B": (0x08, 0x05)}, (0x0E, 0x05)),  # Kirby's Block Ball / Magnetic Soccer
    0x28: ({"A": (0x13, 0x00)}, (0x0E, 0x03)),  # Arcade Classic No. 3 / Golf
    0x46: ({"E": (0x0A, 0x03)}, (0x14, 0x05)),  # Super Mario Land / Metroid II
    0x61: ({"A": (0x0E, 0x05)}, (0x0B, 0x01)),  # Vegas Stakes / Pokemon - Blue Version
    0x66: ({"E": (0x04, 0x03)}, (0x1C, 0x03)),  # Game Boy Gallery 2 / Arcade Classic No. 2
    0x6A: ({"K": (0x0C, 0x05)}, (0x05, 0x03)),  # Donkey Kong Land 2 / Mario & Yoshi
    0xA5: ({"R": (0x12, 0x03)}, (0x13, 0x00)),  # Battletoads / Solar Striker
    0xB3: (
        {"U": (0x00, 0x03), "R": (0x05, 0x04)},  # Mole Mania / Tetris Attack
        (0x08, 0x05),  # Kirby's Dream Land 2
    ),
    0xBF: ({"C": (0x02, 0x05)}, (0x0D, 0x03)),  # Soccer / Kid Icarus
    0xC6: ({" ": (0x1C, 0x03)}, (0x00, 0x05)),  # Ken Griffey Jr. / Game Boy Wars
    0xD3: ({"R": (0x0D, 0x01)}, (0x15, 0x05)),  # Kaeru no Tame ni / Wario Land II
    0xF4: ({" ": (0x04, 0x03)}, (0x1C, 0x05)),  # Game & Watch Gallery / Pac-In-Time
}


def _disambiguation_character(game_title: str) -> str:
    """Return the fourth character of the title, or an empty string if it is shorter."""
    return game_title[3] if len(game_title) > 3 else ""


def palette_id_for(game_checksum: int, game_title: str) -> PaletteId:
    """Return the (entry ID, shuffling flags) pair the boot ROM would choose.

    Checksums the boot ROM does not know give the DMG palette ID (0xFF, 0xFF).
    """
    if not 0 <= game_checksum <= 0xFF:
        raise ValueError(f"checksum {game_checksum!r} is not a byte")
    single = _SINGLE.get(game_checksum)
    if single is not None:
        return single
    rules = _DISAMBIGUATED.get(game_checksum)
    if rules is not None:
        by_char, fallback = rules
        return by_char.get(_disambiguation_character(game_title), fallback)
    logger.error("auto_assign_palette: No palette found for checksum 0x%02X.", game_checksum)
    return DEFAULT_PALETTE_ID


def auto_assign_palette(game_checksum: int, game_title: str) -> Palette:
    """Return the palette for a game, chosen from its title checksum and title."""
    logger.info("auto_assign_palette(0x%02X,%s)", game_checksum, game_title)
    return get_colour_palette(*palette_id_for(game_checksum, game_title))