"""Pytest configuration and fixtures."""

import numpy as np
import pytest
from PIL import Image

from dotpress.models.raster import RasterImage


def raster_from_gray(gray: np.ndarray | list[list[int]]) -> RasterImage:
    """Build an opaque raster whose three colour channels equal gray."""
    gray = np.asarray(gray, dtype=np.uint8)
    pixels = np.empty((*gray.shape, 4), dtype=np.uint8)
    pixels[..., 0] = gray
    pixels[..., 1] = gray
    pixels[..., 2] = gray
    pixels[..., 3] = 255
    return RasterImage(pixels)


@pytest.fixture
def solid_raster():
    """Factory for flat single-colour rasters."""

    def _make(width: int, height: int, value: int = 128) -> RasterImage:
        return raster_from_gray(np.full((height, width), value, dtype=np.uint8))

    return _make


@pytest.fixture
def gradient_image() -> Image.Image:
    """768x400 RGB image with a horizontal black-to-white ramp."""
    ramp = np.linspace(0, 255, 768).astype(np.uint8)
    gray = np.tile(ramp, (400, 1))
    rgb = np.stack([gray, gray, gray], axis=2)
    return Image.fromarray(rgb)
