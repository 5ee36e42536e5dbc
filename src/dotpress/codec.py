"""Conversions out of the monochrome grid.

The grid is only ever produced by dithering; there is no conversion back
from a bitmap.
"""

import numpy as np
from PIL import Image

from dotpress.errors import ParameterOutOfRange
from dotpress.models.raster import MonochromeGrid, OutputBitmap

INK_RGBA = (0, 0, 0, 255)
PAPER_RGBA = (255, 255, 255, 255)


def grid_to_preview_bitmap(grid: MonochromeGrid, scale: int = 1) -> OutputBitmap:
    """Render a grid as a black and white RGBA bitmap.

    Args:
        grid: Grid to render.
        scale: Each cell becomes a scale x scale block of pixels.

    Returns:
        OutputBitmap of size (width * scale, height * scale).

    Raises:
        ParameterOutOfRange: If scale is less than 1.
    """
    if scale < 1:
        raise ParameterOutOfRange("scale", scale, "must be at least 1")

    cells = grid.cells
    if scale > 1:
        cells = np.repeat(np.repeat(cells, scale, axis=0), scale, axis=1)

    pixels = np.empty((*cells.shape, 4), dtype=np.uint8)
    pixels[...] = PAPER_RGBA
    pixels[cells] = INK_RGBA
    return OutputBitmap(pixels)


def grid_to_image(grid: MonochromeGrid) -> Image.Image:
    """Convert a grid to a Pillow mode "1" image.

    PIL mode "1": 0 = black (ink), 255 = white.
    """
    gray = np.where(grid.cells, 0, 255).astype(np.uint8)
    return Image.fromarray(gray).convert("1", dither=Image.Dither.NONE)


def bytes_per_row(width: int) -> int:
    """Bytes needed for one packed row, padded to a whole byte."""
    return (width + 7) // 8


def pack_grid(grid: MonochromeGrid) -> bytes:
    """Pack a grid into the layout printer drivers consume.

    8 pixels per byte, most significant bit first, 1 = ink. Rows whose width
    is not a multiple of 8 are padded with zero (no ink) bits. Command
    framing is left to the printer driver.
    """
    if grid.width == 0 or grid.height == 0:
        return b""
    return np.packbits(grid.cells, axis=1, bitorder="big").tobytes()
