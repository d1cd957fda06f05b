"""Tests for the colour table and NES colour conversion."""
import pytest

from nestiles import (
    COLOURS,
    PIXEL_TO_COLOUR,
    UnknownColourError,
    get_nes_palettes,
    tile_to_nes_colours,
)
from conftest import BLACK, GREY, PINK, WHITE, solid_tile


def test_colour_table_is_closed():
    assert len(COLOURS) == 6
    assert len(PIXEL_TO_COLOUR) == 6
    assert all(0 <= slot <= 3 for (pixel, slot, nesColour) in COLOURS.values())


def test_marker_colours_share_slots():
    assert COLOURS["white"][1] == COLOURS["light-green"][1] == 2
    assert COLOURS["pink"][1] == COLOURS["dark-green"][1] == 3


def test_tile_to_nes_colours():
    tile = (GREY, BLACK, WHITE, PINK) * 16
    assert tile_to_nes_colours(tile)[:4] == (0x00, 0x0f, 0x30, 0x25)
    assert len(tile_to_nes_colours(tile)) == 64


def test_tile_to_nes_colours_invalid():
    with pytest.raises(UnknownColourError):
        tile_to_nes_colours(solid_tile(0xff808080))


def test_nes_palettes():
    assert get_nes_palettes() == (
        (0x00, 0x0f, 0x2a, 0x1a),
        (0x00, 0x0f, 0x30, 0x25),
    )
