# encode a 128*128 image into NES name table, pattern table and attribute
# table data

import itertools

# --- "constants" -------------------------------------------------------------

# NES hardware-specific values; don't change these
TILE_SIZE      = 8  # tile width and height in pixels
BYTES_PER_TILE = 16  # pattern table bytes per tile (two bitplanes)

# size of input image
TILE_COUNT = 16                      # width and height in tiles
IMAGE_SIZE = TILE_COUNT * TILE_SIZE  # width and height in pixels

UNUSED_COLOUR = 0x00  # NES colour index

# colours allowed in the input image;
# key=name, value=(ARGB pixel value, palette slot, NES colour index);
# white and pink share their slots with light and dark green
COLOURS = {
    "grey":        (0xffc3c3c3, 0, 0x00),
    "black":       (0xff000000, 1, 0x0f),
    "light-green": (0xff68ff10, 2, 0x2a),
    "dark-green":  (0xff18a686, 3, 0x1a),
    "white":       (0xffffffff, 2, 0x30),
    "pink":        (0xfff9459b, 3, 0x25),
}

# a block with any of these colours uses background palette 1
PALETTE_B_COLOURS = ("white", "pink")

# {ARGB pixel value: colour name, ...}
PIXEL_TO_COLOUR = dict((c[0], n) for (n, c) in COLOURS.items())

PALETTE_B_PIXELS = frozenset(COLOURS[n][0] for n in PALETTE_B_COLOURS)

# --- errors ------------------------------------------------------------------

class NesDataError(Exception):
    pass

class DimensionError(NesDataError):
    # the image or a tile has the wrong size
    pass

class UnknownColourError(NesDataError):
    # a pixel is not one of COLOURS
    pass

class MalformedBitGroupError(NesDataError):
    # bits_to_byte() got something other than 8 ints of 0-1
    pass

# --- tiles -------------------------------------------------------------------

def get_tiles(grid):
    # generate each tile as a tuple of (TILE_SIZE * TILE_SIZE) pixel values
    #   grid: IMAGE_SIZE rows of IMAGE_SIZE ARGB ints

    if len(grid) != IMAGE_SIZE or any(len(row) != IMAGE_SIZE for row in grid):
        raise DimensionError(f"Image must be {IMAGE_SIZE}*{IMAGE_SIZE} pixels.")

    for y in range(0, IMAGE_SIZE, TILE_SIZE):
        for x in range(0, IMAGE_SIZE, TILE_SIZE):
            yield tuple(
                grid[y+ty][x+tx] & 0xffffffff
                for ty in range(TILE_SIZE)
                for tx in range(TILE_SIZE)
            )

def is_valid_tile(tile):
    # correct size and only known pixel values?
    return (
            len(tile) == TILE_SIZE * TILE_SIZE
        and all(p in PIXEL_TO_COLOUR for p in tile)
    )

def validate_tiles(tiles):
    # raise an error on the first invalid tile;
    #   tiles: tiles in name table order

    for (pos, tile) in enumerate(tiles):
        if len(tile) != TILE_SIZE * TILE_SIZE:
            raise DimensionError(
                f"Tile {pos} has {len(tile)} pixels instead of "
                f"{TILE_SIZE * TILE_SIZE}."
            )
        for (i, pixel) in enumerate(tile):
            if pixel not in PIXEL_TO_COLOUR:
                raise UnknownColourError(
                    "Unsupported colour 0x{:08x} in tile {} (x={}, y={}).".format(
                        pixel, pos, i % TILE_SIZE, i // TILE_SIZE
                    )
                )

def assign_tile_numbers(tiles):
    # assign an index to each distinct tile, in order of first occurrence
    #   tiles:  tiles in name table order, with duplicates
    #   return: {tile: index, ...}

    tileNumbers = {}
    for tile in tiles:
        tileNumbers.setdefault(tile, len(tileNumbers))
    return tileNumbers

def get_nametable(tiles, tileNumbers):
    # return: index of each tile in tiles
    return [tileNumbers[t] for t in tiles]

# --- pattern table -----------------------------------------------------------

def bits_to_byte(bits):
    # 8 ints of 0-1 to a byte; the first one is the most significant bit
    bits = tuple(bits)
    if len(bits) != 8:
        raise MalformedBitGroupError(f"Expected 8 bits, got {len(bits)}.")
    if not all(isinstance(b, int) and b in (0, 1) for b in bits):
        raise MalformedBitGroupError(f"Bits must be 0 or 1: {bits}")
    return sum(b << (7 - i) for (i, b) in enumerate(bits))

def get_palette_slots(tile):
    # return: palette slot (0-3) of each pixel
    if not is_valid_tile(tile):
        raise UnknownColourError("Cannot encode an invalid tile.")
    return tuple(COLOURS[PIXEL_TO_COLOUR[p]][1] for p in tile)

def encode_tile(tile):
    # encode a tile into NES format
    #   return: (low_bitplane, high_bitplane); TILE_SIZE bytes each, one per
    #           pixel row

    slots = get_palette_slots(tile)
    return tuple(
        bytes(
            bits_to_byte((s >> bp) & 1 for s in slots[y:y+TILE_SIZE])
            for y in range(0, TILE_SIZE * TILE_SIZE, TILE_SIZE)
        ) for bp in range(2)
    )

def get_pattern_table(tileNumbers):
    # encode distinct tiles in index order
    #   tileNumbers: from assign_tile_numbers()
    #   return:      BYTES_PER_TILE bytes per tile

    tiles = sorted(tileNumbers, key=lambda t: tileNumbers[t])
    return bytes(itertools.chain.from_iterable(
        itertools.chain.from_iterable(encode_tile(t)) for t in tiles
    ))

# --- attribute table ---------------------------------------------------------

def partition_2d(sideSize, elements):
    # split a square grid into 2*2 groups
    #   sideSize: width and height of grid
    #   elements: grid cells in row-major order
    #   return:   a list of (sideSize // 2) ** 2 groups, row-major;
    #             each group is (top_left, top_right, bottom_left, bottom_right)

    if sideSize % 2:
        raise ValueError("Grid width must be even.")
    if len(elements) != sideSize * sideSize:
        raise ValueError(
            f"Expected {sideSize * sideSize} cells, got {len(elements)}."
        )

    groups = []
    for y in range(0, sideSize, 2):
        for x in range(0, sideSize, 2):
            i = y * sideSize + x
            groups.append((
                elements[i           ], elements[i+1         ],
                elements[i+sideSize  ], elements[i+sideSize+1],
            ))
    return groups

def get_block_palette(block):
    # which background palette (0-1) a 2*2-tile block uses
    return 1 if any(p in PALETTE_B_PIXELS for t in block for p in t) else 0

def encode_attribute_byte(palettes):
    # palettes: palette of top left, top right, bottom left, bottom right block
    return (
           palettes[0]
        | (palettes[1] << 2)
        | (palettes[2] << 4)
        | (palettes[3] << 6)
    )

def get_attribute_table(tiles):
    # tiles:  (TILE_COUNT * TILE_COUNT) tiles in name table order
    # return: one byte per 4*4 tiles

    blockPalettes = [
        get_block_palette(b) for b in partition_2d(TILE_COUNT, list(tiles))
    ]
    return bytes(
        encode_attribute_byte(p)
        for p in partition_2d(TILE_COUNT // 2, blockPalettes)
    )

# --- NES colours -------------------------------------------------------------

def tile_to_nes_colours(tile):
    # return: NES colour index of each pixel
    if not is_valid_tile(tile):
        raise UnknownColourError("Cannot convert an invalid tile.")
    return tuple(COLOURS[PIXEL_TO_COLOUR[p]][2] for p in tile)

def get_nes_palettes():
    # return: (palette_0, palette_1); 4 NES colour indexes each

    palette0 = 4 * [UNUSED_COLOUR]
    for (name, (pixel, slot, nesColour)) in COLOURS.items():
        if name not in PALETTE_B_COLOURS:
            palette0[slot] = nesColour

    palette1 = palette0.copy()
    for name in PALETTE_B_COLOURS:
        (pixel, slot, nesColour) = COLOURS[name]
        palette1[slot] = nesColour

    return (tuple(palette0), tuple(palette1))

# -----------------------------------------------------------------------------

def encode_image(grid):
    # grid:   IMAGE_SIZE rows of IMAGE_SIZE ARGB ints
    # return: (name_table, pattern_table, attribute_table) as bytes

    tiles = list(get_tiles(grid))
    validate_tiles(tiles)

    tileNumbers = assign_tile_numbers(tiles)

    return (
        bytes(get_nametable(tiles, tileNumbers)),
        get_pattern_table(tileNumbers),
        get_attribute_table(tiles),
    )
