"""Scaling and rotation to the printer's fixed width."""

import logging
import math

from PIL import Image

from dotpress.errors import InvalidImageDimensions, ParameterOutOfRange
from dotpress.models.options import PRINTER_WIDTH
from dotpress.models.raster import RasterImage

logger = logging.getLogger(__name__)

# Pillow's bilinear filter widens its support when shrinking, so
# downscaling is antialiased rather than point-sampled.
RESAMPLE = Image.Resampling.BILINEAR

_ROTATIONS = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def scaled_size(
    source_width: int,
    source_height: int,
    target_width: int = PRINTER_WIDTH,
    maintain_aspect_ratio: bool = True,
    target_height: int | None = None,
) -> tuple[int, int]:
    """Compute the (width, height) of the working raster.

    Args:
        source_width: Width of the original image.
        source_height: Height of the original image.
        target_width: Output width, normally the printer width.
        maintain_aspect_ratio: Derive height from the source aspect ratio.
            When False the source height is kept.
        target_height: Explicit output height. Takes precedence over
            maintain_aspect_ratio.

    Returns:
        Tuple of (width, height).

    Raises:
        InvalidImageDimensions: If the source or target size is not positive.
    """
    if source_width <= 0 or source_height <= 0:
        raise InvalidImageDimensions(source_width, source_height)
    if target_width <= 0 or (target_height is not None and target_height <= 0):
        raise InvalidImageDimensions(target_width, target_height or 0, what="target")

    if target_height is not None:
        return target_width, target_height
    if not maintain_aspect_ratio:
        return target_width, source_height

    # round half up; very wide sources still get one row
    height = math.floor(target_width * source_height / source_width + 0.5)
    return target_width, max(1, height)


def scale_to_width(
    raster: RasterImage,
    target_width: int = PRINTER_WIDTH,
    maintain_aspect_ratio: bool = True,
    target_height: int | None = None,
) -> RasterImage:
    """Resample a raster to the printer width.

    See scaled_size() for how the output height is chosen.
    """
    width, height = scaled_size(
        raster.width,
        raster.height,
        target_width,
        maintain_aspect_ratio=maintain_aspect_ratio,
        target_height=target_height,
    )
    logger.debug(f"Scaling {raster.width}x{raster.height} -> {width}x{height}")
    resized = raster.to_image().resize((width, height), RESAMPLE)
    return RasterImage.from_image(resized)


def rotate(raster: RasterImage, degrees: int) -> RasterImage:
    """Rotate clockwise by a multiple of 90 degrees."""
    if degrees % 90 != 0:
        raise ParameterOutOfRange("rotation", degrees, "must be a multiple of 90 degrees")
    degrees %= 360
    if degrees == 0:
        return raster
    return RasterImage.from_image(raster.to_image().transpose(_ROTATIONS[degrees]))
