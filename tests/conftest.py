import pytest

import nestiles

GREY       = nestiles.COLOURS["grey"][0]
BLACK      = nestiles.COLOURS["black"][0]
LIGHTGREEN = nestiles.COLOURS["light-green"][0]
DARKGREEN  = nestiles.COLOURS["dark-green"][0]
WHITE      = nestiles.COLOURS["white"][0]
PINK       = nestiles.COLOURS["pink"][0]


def solid_tile(pixel):
    return 64 * (pixel,)


def grid_from_tiles(tiles):
    """Build a 128*128 pixel grid from 256 tiles in name table order."""
    grid = [[None] * 128 for _ in range(128)]
    for (pos, tile) in enumerate(tiles):
        (tileY, tileX) = divmod(pos, 16)
        for (i, pixel) in enumerate(tile):
            (y, x) = divmod(i, 8)
            grid[tileY * 8 + y][tileX * 8 + x] = pixel
    return grid


@pytest.fixture
def grey_grid():
    return [[GREY] * 128 for _ in range(128)]


@pytest.fixture
def mixed_tiles():
    """256 tiles cycling through four distinct tiles, plus one pink tile."""
    striped = tuple(
        (BLACK, LIGHTGREEN, DARKGREEN, GREY)[i % 4] for i in range(64)
    )
    cycle = (
        solid_tile(GREY), striped, solid_tile(BLACK), solid_tile(DARKGREEN)
    )
    tiles = [cycle[(pos // 3) % 4] for pos in range(256)]
    tiles[37] = solid_tile(PINK)
    return tiles
