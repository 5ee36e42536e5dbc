"""Clustered-dot halftone dithering.

Each cell_size x cell_size cell holds one round dot that grows from the
cell centre as the image gets darker. Positions in the cell are ranked by
distance from the centre; a pixel is inked when the local darkness covers
its rank. A mid-gray (128) cell is therefore about half inked, solid black
fully inked, and white left empty.
"""

from functools import lru_cache

import numpy as np

from dotpress.dithering.base import BaseDitherer, threshold_floor
from dotpress.dithering.ordered import tile
from dotpress.models.options import (
    CELL_SIZE_MAX,
    CELL_SIZE_MIN,
    DEFAULT_THRESHOLD,
    DitherConfig,
    DitherMethod,
)


@lru_cache(maxsize=16)
def spot_cutoffs(cell_size: int) -> np.ndarray:
    """Per-position gray cutoffs for one halftone cell.

    The pixel nearest the centre gets the highest cutoff (inked first), the
    corners the lowest. Ties in distance are broken in row-major order.
    Values lie strictly inside (0, 255).
    """
    n = cell_size
    centre = (n - 1) / 2
    ys, xs = np.mgrid[0:n, 0:n]
    distance = np.hypot(xs - centre, ys - centre).ravel()

    order = np.argsort(distance, kind="stable")
    rank = np.empty(n * n, dtype=np.float64)
    rank[order] = np.arange(n * n)

    cutoffs = (255.0 - (rank + 0.5) * 255.0 / (n * n)).reshape(n, n)
    cutoffs.setflags(write=False)
    return cutoffs


class HalftoneDitherer(BaseDitherer):
    """Halftone screen with dots centred in fixed cells.

    The threshold biases the screen the same way it biases the ordered
    method: 128 is neutral, higher values ink more.
    """

    method = DitherMethod.HALFTONE

    def _dither(self, gray: np.ndarray, config: DitherConfig) -> np.ndarray:
        height, width = gray.shape
        cell_size = max(CELL_SIZE_MIN, min(CELL_SIZE_MAX, config.halftone_cell_size))
        bias = config.threshold - DEFAULT_THRESHOLD
        cutoff = tile(spot_cutoffs(cell_size), height, width) + bias
        cutoff = np.clip(cutoff, threshold_floor(config.threshold), 255)
        return gray < cutoff
