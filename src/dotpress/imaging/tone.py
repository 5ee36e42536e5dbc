"""Tone adjustment and luminance derivation."""

import numpy as np

from dotpress.models.options import DEFAULT_BRIGHTNESS, DEFAULT_CONTRAST, ToneConfig
from dotpress.models.raster import RasterImage


def contrast_factor(contrast: int) -> float:
    """Return the channel multiplier for a contrast slider value.

    The slider is a percentage with 100 as neutral. It is re-centred to a
    signed level in [-100, 100] before entering the usual
    259 * (C + 255) / (255 * (259 - C)) curve, so 100% gives exactly 1.0.
    """
    level = contrast - DEFAULT_CONTRAST
    return (259 * (level + 255)) / (255 * (259 - level))


def adjust_tone(raster: RasterImage, tone: ToneConfig) -> RasterImage:
    """Apply contrast then brightness to the colour channels.

    Alpha is left untouched. Inversion is a separate step, see invert().

    Args:
        raster: Source raster, not modified.
        tone: Tone settings.

    Returns:
        New raster with adjusted channels.
    """
    pixels = raster.to_array()
    factor = contrast_factor(tone.contrast)
    shift = tone.brightness - DEFAULT_BRIGHTNESS

    rgb = pixels[..., :3].astype(np.float64)
    adjusted = factor * (rgb - 128.0) + 128.0 + shift
    pixels[..., :3] = np.clip(np.rint(adjusted), 0, 255).astype(np.uint8)
    return RasterImage(pixels)


def invert(raster: RasterImage) -> RasterImage:
    """Return a raster with the colour channels inverted, alpha kept."""
    pixels = raster.to_array()
    pixels[..., :3] = 255 - pixels[..., :3]
    return RasterImage(pixels)


def to_grayscale(raster: RasterImage) -> np.ndarray:
    """Derive the single luminance channel used by every ditherer.

    Unweighted mean of red, green and blue, floored to an integer.

    Returns:
        (height, width) uint8 array.
    """
    rgb = raster.pixels[..., :3].astype(np.uint16)
    return (rgb.sum(axis=2) // 3).astype(np.uint8)
