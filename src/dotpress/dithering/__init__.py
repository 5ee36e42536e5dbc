"""Dithering algorithms for dotpress."""

import numpy as np

from dotpress.dithering.base import BaseDitherer
from dotpress.dithering.error_diffusion import (
    AtkinsonDitherer,
    ErrorDiffusionDitherer,
    FloydSteinbergDitherer,
)
from dotpress.dithering.halftone import HalftoneDitherer
from dotpress.dithering.ordered import OrderedDitherer
from dotpress.dithering.threshold import ThresholdDitherer
from dotpress.errors import UnsupportedDitherMethod
from dotpress.models.options import DitherConfig, DitherMethod
from dotpress.models.raster import MonochromeGrid

__all__ = [
    "AtkinsonDitherer",
    "BaseDitherer",
    "ErrorDiffusionDitherer",
    "FloydSteinbergDitherer",
    "HalftoneDitherer",
    "OrderedDitherer",
    "ThresholdDitherer",
    "apply_dithering",
    "create_ditherer",
]


def create_ditherer(method: DitherMethod | str) -> BaseDitherer:
    """Factory function to create the ditherer for a method."""
    ditherer_classes: dict[DitherMethod, type[BaseDitherer]] = {
        DitherMethod.THRESHOLD: ThresholdDitherer,
        DitherMethod.FLOYD_STEINBERG: FloydSteinbergDitherer,
        DitherMethod.ATKINSON: AtkinsonDitherer,
        DitherMethod.ORDERED_BAYER: OrderedDitherer,
        DitherMethod.HALFTONE: HalftoneDitherer,
    }
    try:
        method = DitherMethod(method)
    except ValueError as e:
        raise UnsupportedDitherMethod(method) from e
    ditherer_class = ditherer_classes.get(method)
    if not ditherer_class:
        raise UnsupportedDitherMethod(method)
    return ditherer_class()


def apply_dithering(gray: np.ndarray, config: DitherConfig) -> MonochromeGrid:
    """Dither a grayscale view with the method named in config."""
    return create_ditherer(config.method).dither(gray, config)
