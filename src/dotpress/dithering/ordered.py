"""Ordered (Bayer matrix) dithering."""

from functools import lru_cache

import numpy as np

from dotpress.dithering.base import BaseDitherer, threshold_floor
from dotpress.models.options import CELL_SIZE_MAX, CELL_SIZE_MIN, DitherConfig, DitherMethod

# Canonical 4x4 Bayer index ordering
BAYER_4X4 = (
    (0, 8, 2, 10),
    (12, 4, 14, 6),
    (3, 11, 1, 9),
    (15, 7, 13, 5),
)


def matrix_size_for(requested: int) -> int:
    """Clamp to 2-16 and round up to the next power of two."""
    size = max(CELL_SIZE_MIN, min(CELL_SIZE_MAX, requested))
    return 1 << (size - 1).bit_length()


def bayer_index_matrix(size: int) -> np.ndarray:
    """Return the size x size Bayer index matrix, values 0..size**2 - 1.

    Built recursively: each step replaces index m with the 2x2 block
    [[4m, 4m + 2], [4m + 3, 4m + 1]].
    """
    if size < 1 or size & (size - 1):
        raise ValueError(f"Bayer matrix size must be a power of two, got {size}")
    if size == 1:
        return np.zeros((1, 1), dtype=np.int64)
    if size == 4:
        return np.array(BAYER_4X4, dtype=np.int64)

    smaller = 4 * bayer_index_matrix(size // 2)
    return np.block([[smaller, smaller + 2], [smaller + 3, smaller + 1]])


@lru_cache(maxsize=8)
def bayer_threshold_matrix(size: int) -> np.ndarray:
    """Bayer matrix rescaled to 0-255. Read-only, shared between calls."""
    index = bayer_index_matrix(size)
    matrix = index * 255 // (size * size - 1)
    matrix.setflags(write=False)
    return matrix


def tile(matrix: np.ndarray, height: int, width: int) -> np.ndarray:
    """Repeat a square matrix over an image so that cell [y, x] = matrix[y % n, x % n]."""
    n = matrix.shape[0]
    reps = (-(-height // n), -(-width // n))
    return np.tile(matrix, reps)[:height, :width]


class OrderedDitherer(BaseDitherer):
    """Compare each pixel against the threshold shifted by a tiled Bayer matrix.

    cutoff = threshold + (matrix[y % n][x % n] - 128) // 2, kept within
    [1, 255] so flat black and flat white stay solid.
    """

    method = DitherMethod.ORDERED_BAYER

    def _dither(self, gray: np.ndarray, config: DitherConfig) -> np.ndarray:
        height, width = gray.shape
        matrix = bayer_threshold_matrix(matrix_size_for(config.bayer_matrix_size))
        cutoff = config.threshold + (tile(matrix, height, width) - 128) // 2
        cutoff = np.clip(cutoff, threshold_floor(config.threshold), 255)
        return gray < cutoff
