"""dotpress: image to 1-bit dot grid conversion for thermal receipt printers."""

from dotpress.codec import grid_to_image, grid_to_preview_bitmap, pack_grid
from dotpress.dithering import apply_dithering, create_ditherer
from dotpress.errors import (
    InvalidImageDimensions,
    ParameterOutOfRange,
    PipelineError,
    ProcessingError,
    UnsupportedDitherMethod,
)
from dotpress.models import (
    PRINTER_WIDTH,
    DitherConfig,
    DitherMethod,
    MonochromeGrid,
    OutputBitmap,
    ProcessingOptions,
    ProcessingResult,
    RasterImage,
    ToneConfig,
)
from dotpress.pipeline import ProcessingPipeline, process_image

__version__ = "0.1.0"

__all__ = [
    "PRINTER_WIDTH",
    "DitherConfig",
    "DitherMethod",
    "InvalidImageDimensions",
    "MonochromeGrid",
    "OutputBitmap",
    "ParameterOutOfRange",
    "PipelineError",
    "ProcessingError",
    "ProcessingOptions",
    "ProcessingPipeline",
    "ProcessingResult",
    "RasterImage",
    "ToneConfig",
    "UnsupportedDitherMethod",
    "apply_dithering",
    "create_ditherer",
    "grid_to_image",
    "grid_to_preview_bitmap",
    "pack_grid",
    "process_image",
]
