"""Raster transforms applied before dithering."""

from dotpress.imaging.scaler import rotate, scale_to_width, scaled_size
from dotpress.imaging.tone import adjust_tone, contrast_factor, invert, to_grayscale

__all__ = [
    "adjust_tone",
    "contrast_factor",
    "invert",
    "rotate",
    "scale_to_width",
    "scaled_size",
    "to_grayscale",
]
