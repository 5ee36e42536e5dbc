"""Configuration models and pixel buffer types for dotpress."""

from dotpress.models.options import (
    PRINTER_WIDTH,
    DitherConfig,
    DitherMethod,
    ProcessingOptions,
    ToneConfig,
)
from dotpress.models.raster import (
    MonochromeGrid,
    OutputBitmap,
    ProcessingResult,
    RasterImage,
)

__all__ = [
    "PRINTER_WIDTH",
    "DitherConfig",
    "DitherMethod",
    "MonochromeGrid",
    "OutputBitmap",
    "ProcessingOptions",
    "ProcessingResult",
    "RasterImage",
    "ToneConfig",
]
