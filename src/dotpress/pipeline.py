"""Processing pipeline: scale, tone, invert, dither, preview."""

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from PIL import Image

from dotpress.codec import grid_to_preview_bitmap
from dotpress.dithering import apply_dithering
from dotpress.errors import PipelineError, ProcessingError
from dotpress.imaging import adjust_tone, invert, rotate, scale_to_width, to_grayscale
from dotpress.models.options import PRINTER_WIDTH, DitherConfig, ProcessingOptions, ToneConfig
from dotpress.models.raster import ProcessingResult, RasterImage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProcessingPipeline:
    """Turns an original image into a printable monochrome grid.

    Every call starts again from the original image it is given. Passing a
    previously dithered result back in is allowed but will not reproduce the
    same grid, since dithering is lossy.

    The pipeline keeps no state between calls and may be shared across
    threads.
    """

    def __init__(self, printer_width: int = PRINTER_WIDTH) -> None:
        """Initialize the pipeline.

        Args:
            printer_width: Print head width in dots. Used when a call does not
                give target_width, and caps any target_width that does.
        """
        self.printer_width = printer_width

    def process(
        self,
        image: RasterImage | Image.Image,
        tone_config: ToneConfig,
        dither_config: DitherConfig,
        target_width: int | None = None,
        *,
        maintain_aspect_ratio: bool = True,
        target_height: int | None = None,
        rotation: int = 0,
        preview_scale: int = 1,
    ) -> ProcessingResult:
        """Run the full pipeline on one image.

        Order is fixed: rotate, scale, tone-adjust, invert (if requested),
        dither, render preview.

        Args:
            image: Original decoded image. Pillow images are converted to RGBA.
            tone_config: Brightness, contrast and invert settings.
            dither_config: Dither method and parameters.
            target_width: Output width; defaults to the printer width and is
                clamped to it.
            maintain_aspect_ratio: Derive height from the source aspect ratio.
            target_height: Explicit output height, overrides the aspect ratio.
            rotation: Clockwise rotation in degrees, multiple of 90.
            preview_scale: Pixel size of one grid cell in the preview.

        Returns:
            ProcessingResult with preview bitmap and monochrome grid.

        Raises:
            InvalidImageDimensions: If the source or target size is invalid.
            UnsupportedDitherMethod: If the method has no implementation.
            ParameterOutOfRange: For parameters that cannot be clamped.
            PipelineError: If a stage fails for any other reason.
        """
        started = time.perf_counter()
        # Never dither wider than the print head
        width = self.printer_width
        if target_width is not None:
            width = min(target_width, self.printer_width)

        if isinstance(image, Image.Image):
            raster = self._run("decode", RasterImage.from_image, image)
        else:
            raster = image

        raster = self._run("rotate", rotate, raster, rotation)
        raster = self._run(
            "scale",
            lambda: scale_to_width(
                raster,
                width,
                maintain_aspect_ratio=maintain_aspect_ratio,
                target_height=target_height,
            ),
        )
        raster = self._run("tone", adjust_tone, raster, tone_config)
        if tone_config.invert:
            raster = self._run("invert", invert, raster)

        gray = self._run("grayscale", to_grayscale, raster)
        grid = self._run("dither", apply_dithering, gray, dither_config)
        preview = self._run("preview", grid_to_preview_bitmap, grid, preview_scale)

        logger.debug(
            f"Processed {grid.width}x{grid.height} with {dither_config.method} "
            f"in {(time.perf_counter() - started) * 1000:.1f} ms"
        )
        return ProcessingResult(preview_bitmap=preview, monochrome_grid=grid)

    def process_options(
        self,
        image: RasterImage | Image.Image,
        options: ProcessingOptions,
    ) -> ProcessingResult:
        """Run the pipeline with settings taken from a ProcessingOptions profile."""
        return self.process(
            image,
            options.tone,
            options.dither,
            options.target_width,
            maintain_aspect_ratio=options.maintain_aspect_ratio,
            target_height=options.target_height,
            rotation=options.rotation,
            preview_scale=options.preview_scale,
        )

    @staticmethod
    def _run(stage: str, func: Callable[..., T], *args: object) -> T:
        """Run one stage, folding unexpected failures into a PipelineError."""
        try:
            return func(*args)
        except ProcessingError:
            raise
        except Exception as e:
            raise PipelineError(stage, str(e)) from e


_default_pipeline = ProcessingPipeline()


def process_image(
    image: RasterImage | Image.Image,
    tone_config: ToneConfig,
    dither_config: DitherConfig,
    target_width: int = PRINTER_WIDTH,
) -> ProcessingResult:
    """Process an image with the default pipeline.

    Shorthand for ProcessingPipeline().process(...).
    """
    return _default_pipeline.process(image, tone_config, dither_config, target_width)
