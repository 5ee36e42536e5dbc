"""Abstract base class for dithering algorithms."""

from abc import ABC, abstractmethod

import numpy as np

from dotpress.errors import InvalidImageDimensions, ParameterOutOfRange
from dotpress.models.options import DitherConfig, DitherMethod
from dotpress.models.raster import MonochromeGrid


class BaseDitherer(ABC):
    """Abstract base class for all dithering algorithms.

    Ditherers hold no per-call state, so one instance can serve
    concurrent calls on independent images.
    """

    method: DitherMethod

    def dither(self, gray: np.ndarray, config: DitherConfig) -> MonochromeGrid:
        """Reduce a grayscale view to a boolean ink grid.

        Args:
            gray: (height, width) array of luminance values in 0-255.
            config: Dither settings; only the fields this method reads apply.

        Returns:
            MonochromeGrid with the same dimensions as gray.

        Raises:
            InvalidImageDimensions: If gray has a zero dimension.
            ParameterOutOfRange: If gray is not two-dimensional.
        """
        gray = np.asarray(gray)
        if gray.ndim != 2:
            raise ParameterOutOfRange("gray", gray.shape, "expected a (height, width) array")
        height, width = gray.shape
        if width == 0 or height == 0:
            raise InvalidImageDimensions(width, height)
        return MonochromeGrid(self._dither(gray, config))

    @abstractmethod
    def _dither(self, gray: np.ndarray, config: DitherConfig) -> np.ndarray:
        """Compute the ink mask.

        Implementations must not modify gray.

        Returns:
            (height, width) boolean array, True for ink.
        """
        pass


def threshold_floor(threshold: int) -> int:
    """Lowest cutoff an ordered method may use for a base threshold.

    Keeps solid black inked under any positive threshold even where the
    matrix offset would push the cutoff to zero or below.
    """
    return min(1, threshold)
