"""Plain threshold quantisation."""

import numpy as np

from dotpress.dithering.base import BaseDitherer
from dotpress.models.options import DitherConfig, DitherMethod


class ThresholdDitherer(BaseDitherer):
    """Ink every pixel darker than the threshold."""

    method = DitherMethod.THRESHOLD

    def _dither(self, gray: np.ndarray, config: DitherConfig) -> np.ndarray:
        return gray < config.threshold
