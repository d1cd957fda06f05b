# convert a 128*128 image into NES name table, pattern table and attribute
# table data

import os, sys
try:
    from PIL import Image
except ImportError:
    sys.exit("Pillow module required. See https://python-pillow.org")

import nestiles

DEFAULT_INPUT_FILE = "ralsei.bmp"

# files to write
NT_OUT_FILE = "ralsei-nametable.bin"
PT_OUT_FILE = "ralsei-pattern-table.bin"
AT_OUT_FILE = "ralsei-attribute-table.bin"

COLOUR_LIST = " ".join(
    "{}=0x{:08x}".format(n, c[0]) for (n, c) in nestiles.COLOURS.items()
)

HELP_TEXT = f"""\
Convert an image into NES name table, pattern table and attribute table data.
Argument: input file (default: {DEFAULT_INPUT_FILE})
Input file must be {nestiles.IMAGE_SIZE}*{nestiles.IMAGE_SIZE} pixels. \
Colours allowed (ARGB):
{COLOUR_LIST}
Writes {NT_OUT_FILE}, {PT_OUT_FILE} and {AT_OUT_FILE}.\
"""

def image_to_grid(image):
    # return: rows of ARGB ints

    if image.width != nestiles.IMAGE_SIZE or image.height != nestiles.IMAGE_SIZE:
        raise nestiles.DimensionError(
            "Image must be {0}*{0} pixels.".format(nestiles.IMAGE_SIZE)
        )

    if image.mode != "RGBA":
        image = image.convert("RGBA")
    pixels = image.load()

    return [
        [
            (a << 24) | (r << 16) | (g << 8) | b
            for (r, g, b, a) in (pixels[x, y] for x in range(image.width))
        ] for y in range(image.height)
    ]

def write_bytes(fileName, data):
    with open(fileName, "wb") as handle:
        handle.write(bytes(data))

def main():
    # parse command line argument
    if len(sys.argv) > 2 or sys.argv[1:] in (["-h"], ["--help"]):
        sys.exit(HELP_TEXT)
    inputFile = sys.argv[1] if len(sys.argv) == 2 else DEFAULT_INPUT_FILE
    if not os.path.isfile(inputFile):
        sys.exit("Input file not found.")

    # read input file
    try:
        with open(inputFile, "rb") as handle:
            image = Image.open(handle)
            grid = image_to_grid(image)
    except OSError:
        sys.exit("Error reading input file.")
    except nestiles.NesDataError as e:
        sys.exit(f"Error: {e}")

    # encode all data before writing anything
    try:
        (ntData, ptData, atData) = nestiles.encode_image(grid)
    except nestiles.NesDataError as e:
        sys.exit(f"Error: {e}")

    print("Input file: {}, {}*{} tiles, {} distinct tiles".format(
        os.path.basename(inputFile), nestiles.TILE_COUNT, nestiles.TILE_COUNT,
        len(ptData) // nestiles.BYTES_PER_TILE
    ))
    print("Blocks using palette 1: {} of {}".format(
        sum(bin(b).count("1") for b in atData), len(atData) * 4
    ))
    print("NES palettes: {}".format(", ".join(
        " ".join(f"0x{c:02x}" for c in p) for p in nestiles.get_nes_palettes()
    )))

    for (fileName, data) in (
        (NT_OUT_FILE, ntData), (PT_OUT_FILE, ptData), (AT_OUT_FILE, atData)
    ):
        try:
            write_bytes(fileName, data)
        except OSError:
            sys.exit(f"Error writing {fileName}")

    print(f"Wrote {NT_OUT_FILE}, {PT_OUT_FILE} and {AT_OUT_FILE}")

if __name__ == "__main__":
    main()
