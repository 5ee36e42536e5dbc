"""Error diffusion ditherers (Floyd-Steinberg, Atkinson)."""

import numpy as np

from dotpress.dithering.base import BaseDitherer
from dotpress.models.options import DitherConfig, DitherMethod


class ErrorDiffusionDitherer(BaseDitherer):
    """Scan left to right, top to bottom, pushing quantisation error forward.

    Subclasses define KERNEL as (dy, dx, weight) entries in write order,
    and DIVISOR. A neighbour receives error * weight / DIVISOR. Shares that
    would land outside the image are dropped, never wrapped or clamped.
    """

    KERNEL: tuple[tuple[int, int, int], ...] = ()
    DIVISOR: int = 1

    def _dither(self, gray: np.ndarray, config: DitherConfig) -> np.ndarray:
        height, width = gray.shape
        threshold = config.threshold
        shares = [(dy, dx, weight / self.DIVISOR) for dy, dx, weight in self.KERNEL]

        # Working copy as nested lists; scalar access is much cheaper than
        # indexing a numpy array one element at a time.
        values: list[list[float]] = gray.astype(np.float64).tolist()
        ink: list[list[bool]] = []

        for y in range(height):
            row = values[y]
            row_ink = [False] * width
            for x in range(width):
                old = row[x]
                new = 0.0 if old < threshold else 255.0
                row_ink[x] = new == 0.0
                error = old - new
                if error == 0.0:
                    continue
                for dy, dx, share in shares:
                    ny = y + dy
                    nx = x + dx
                    if ny < height and 0 <= nx < width:
                        values[ny][nx] += error * share
            ink.append(row_ink)

        return np.array(ink, dtype=bool)


class FloydSteinbergDitherer(ErrorDiffusionDitherer):
    """Classic Floyd-Steinberg: 7/16 right, 3/16, 5/16, 1/16 on the next row."""

    method = DitherMethod.FLOYD_STEINBERG
    KERNEL = (
        (0, 1, 7),
        (1, -1, 3),
        (1, 0, 5),
        (1, 1, 1),
    )
    DIVISOR = 16


class AtkinsonDitherer(ErrorDiffusionDitherer):
    """Atkinson dithering.

    Each of six neighbours gets a full eighth of the error, so only 6/8 of
    it is propagated. Highlights and shadows come out cleaner and lighter
    than with Floyd-Steinberg.
    """

    method = DitherMethod.ATKINSON
    KERNEL = (
        (0, 1, 1),
        (0, 2, 1),
        (1, -1, 1),
        (1, 0, 1),
        (1, 1, 1),
        (2, 0, 1),
    )
    DIVISOR = 8
