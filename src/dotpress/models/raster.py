"""Pixel buffer types passed between pipeline stages."""

import io
from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageOps

from dotpress.errors import InvalidImageDimensions, ParameterOutOfRange

WHITE = (255, 255, 255)


def _frozen(array: np.ndarray) -> np.ndarray:
    """Return a private read-only copy of an array."""
    result = np.array(array, copy=True)
    result.setflags(write=False)
    return result


class RasterImage:
    """Decoded RGBA image, immutable once created.

    Pixels are stored as a (height, width, 4) uint8 array. Every
    transformation produces a new RasterImage.
    """

    def __init__(self, pixels: np.ndarray) -> None:
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ParameterOutOfRange(
                "pixels", pixels.shape, "expected a (height, width, 4) RGBA array"
            )
        height, width = pixels.shape[:2]
        if width <= 0 or height <= 0:
            raise InvalidImageDimensions(width, height)
        if pixels.dtype != np.uint8:
            if not np.issubdtype(pixels.dtype, np.number) or np.issubdtype(
                pixels.dtype, np.complexfloating
            ):
                raise ParameterOutOfRange("pixels", pixels.dtype, "expected numeric channel values")
            if not np.all(np.isfinite(pixels)) or pixels.min() < 0 or pixels.max() > 255:
                raise ParameterOutOfRange(
                    "pixels",
                    (pixels.min(), pixels.max()),
                    "channel values must be within 0-255",
                )
        self._pixels = _frozen(pixels.astype(np.uint8, copy=False))

    @classmethod
    def from_image(cls, image: Image.Image) -> "RasterImage":
        """Create a raster from a Pillow image of any mode."""
        if image.width <= 0 or image.height <= 0:
            raise InvalidImageDimensions(image.width, image.height)
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.asarray(image))

    @classmethod
    def from_bytes(cls, data: bytes) -> "RasterImage":
        """Decode an encoded image (PNG, JPEG, ...), honouring EXIF orientation."""
        with Image.open(io.BytesIO(data)) as image:
            image = ImageOps.exif_transpose(image)
            return cls.from_image(image)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height), Pillow order."""
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (height, width, 4) view of the pixel data."""
        return self._pixels

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the pixel data."""
        return self._pixels.copy()

    def to_image(self) -> Image.Image:
        """Return the raster as a new RGBA Pillow image."""
        return Image.fromarray(self._pixels.copy())

    def flatten_alpha(self, background: tuple[int, int, int] = WHITE) -> "RasterImage":
        """Composite onto an opaque background.

        Transparent regions of logos would otherwise keep whatever colour
        the encoder left under them, usually black.
        """
        base = Image.new("RGBA", self.size, (*background, 255))
        return RasterImage.from_image(Image.alpha_composite(base, self.to_image()))

    def __repr__(self) -> str:
        return f"RasterImage(width={self.width}, height={self.height})"


class MonochromeGrid:
    """Boolean ink grid, True means print a black dot.

    Indexed as grid[y, x]. Dimensions always match the raster it was
    dithered from.
    """

    def __init__(self, cells: np.ndarray) -> None:
        cells = np.asarray(cells, dtype=bool)
        if cells.ndim != 2:
            raise ParameterOutOfRange("cells", cells.shape, "expected a (height, width) array")
        self._cells = _frozen(cells)

    @classmethod
    def from_rows(cls, rows: list[list[bool]]) -> "MonochromeGrid":
        """Build a grid from row-major nested lists."""
        return cls(np.array(rows, dtype=bool))

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def cells(self) -> np.ndarray:
        """Read-only (height, width) boolean array."""
        return self._cells

    @property
    def ink_count(self) -> int:
        """Number of dots that will be printed."""
        return int(np.count_nonzero(self._cells))

    def __getitem__(self, key):
        return self._cells[key]

    def to_rows(self) -> list[list[bool]]:
        return self._cells.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MonochromeGrid):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MonochromeGrid(width={self.width}, height={self.height}, ink={self.ink_count})"


class OutputBitmap:
    """Black and white RGBA preview of a MonochromeGrid.

    Display only; never fed back into processing.
    """

    def __init__(self, pixels: np.ndarray) -> None:
        pixels = np.asarray(pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ParameterOutOfRange(
                "pixels", pixels.shape, "expected a (height, width, 4) RGBA array"
            )
        self._pixels = _frozen(pixels)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def to_image(self) -> Image.Image:
        """Return the preview as a new RGBA Pillow image."""
        return Image.fromarray(self._pixels.copy())

    def to_png(self, format: str = "PNG") -> bytes:
        """Encode the preview for storage or display.

        Args:
            format: Pillow image format name.

        Returns:
            Encoded image bytes.
        """
        buffer = io.BytesIO()
        self.to_image().save(buffer, format=format)
        return buffer.getvalue()

    def __repr__(self) -> str:
        return f"OutputBitmap(width={self.width}, height={self.height})"


@dataclass(frozen=True)
class ProcessingResult:
    """Output of one pipeline run."""

    preview_bitmap: OutputBitmap
    monochrome_grid: MonochromeGrid
