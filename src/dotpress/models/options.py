"""Tone, dither and processing option models."""

import math
import numbers
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dotpress.errors import ParameterOutOfRange

# Print head width of the reference 48 mm printer, in dots
PRINTER_WIDTH = 384

DEFAULT_BRIGHTNESS = 128  # Range: 0-255
DEFAULT_CONTRAST = 100  # Range: 0-200 (percent)
DEFAULT_THRESHOLD = 128  # Range: 0-255
DEFAULT_BAYER_MATRIX_SIZE = 4
DEFAULT_HALFTONE_CELL_SIZE = 4

BRIGHTNESS_MIN, BRIGHTNESS_MAX = 0, 255
CONTRAST_MIN, CONTRAST_MAX = 0, 200
THRESHOLD_MIN, THRESHOLD_MAX = 0, 255
CELL_SIZE_MIN, CELL_SIZE_MAX = 2, 16


def clamp_parameter(name: str, value: Any, low: int, high: int) -> Any:
    """Round a numeric slider value and clamp it into [low, high].

    Non-numeric values are passed through so pydantic reports them as
    validation errors. Non-finite numbers cannot be clamped and are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return value
    if not math.isfinite(value):
        raise ParameterOutOfRange(name, value, "value must be finite")
    return max(low, min(high, int(math.floor(value + 0.5))))


class DitherMethod(StrEnum):
    """Supported dithering algorithms."""

    THRESHOLD = "threshold"
    FLOYD_STEINBERG = "floyd_steinberg"
    ATKINSON = "atkinson"
    ORDERED_BAYER = "bayer"
    HALFTONE = "halftone"

    @classmethod
    def _missing_(cls, value: object) -> "DitherMethod | None":
        if not isinstance(value, str):
            return None
        value = value.lower()
        for member in cls:
            if member.value == value:
                return member

        # Names used by the editor's saved projects; "none" is plain threshold
        aliases = {
            "none": cls.THRESHOLD,
            "steinberg": cls.FLOYD_STEINBERG,
            "floydsteinberg": cls.FLOYD_STEINBERG,
            "floyd-steinberg": cls.FLOYD_STEINBERG,
            "ordered": cls.ORDERED_BAYER,
            "ordered_bayer": cls.ORDERED_BAYER,
            "pattern": cls.HALFTONE,
        }
        return aliases.get(value)


class ToneConfig(BaseModel):
    """Brightness/contrast/invert settings applied before dithering.

    Brightness 128 and contrast 100 are the neutral slider positions.
    """

    model_config = ConfigDict(frozen=True)

    brightness: int = DEFAULT_BRIGHTNESS
    contrast: int = DEFAULT_CONTRAST
    invert: bool = False

    @field_validator("brightness", mode="before")
    @classmethod
    def _clamp_brightness(cls, value: Any) -> Any:
        return clamp_parameter("brightness", value, BRIGHTNESS_MIN, BRIGHTNESS_MAX)

    @field_validator("contrast", mode="before")
    @classmethod
    def _clamp_contrast(cls, value: Any) -> Any:
        return clamp_parameter("contrast", value, CONTRAST_MIN, CONTRAST_MAX)

    @property
    def is_neutral(self) -> bool:
        """True if the tone stage leaves pixel values unchanged."""
        return (
            self.brightness == DEFAULT_BRIGHTNESS
            and self.contrast == DEFAULT_CONTRAST
            and not self.invert
        )


class DitherConfig(BaseModel):
    """Dithering method and its parameters.

    bayer_matrix_size is only read by the ordered method and
    halftone_cell_size only by the halftone method.
    """

    model_config = ConfigDict(frozen=True)

    method: DitherMethod = DitherMethod.FLOYD_STEINBERG
    threshold: int = DEFAULT_THRESHOLD
    bayer_matrix_size: int = DEFAULT_BAYER_MATRIX_SIZE
    halftone_cell_size: int = DEFAULT_HALFTONE_CELL_SIZE

    @field_validator("method", mode="before")
    @classmethod
    def _resolve_method_alias(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, DitherMethod):
            return DitherMethod(value)
        return value

    @field_validator("threshold", mode="before")
    @classmethod
    def _clamp_threshold(cls, value: Any) -> Any:
        return clamp_parameter("threshold", value, THRESHOLD_MIN, THRESHOLD_MAX)

    @field_validator("bayer_matrix_size", "halftone_cell_size", mode="before")
    @classmethod
    def _clamp_cell_size(cls, value: Any, info: Any) -> Any:
        return clamp_parameter(info.field_name, value, CELL_SIZE_MIN, CELL_SIZE_MAX)


class ProcessingOptions(BaseModel):
    """Everything needed for one pipeline run, as stored in a profile."""

    model_config = ConfigDict(frozen=True)

    tone: ToneConfig = Field(default_factory=ToneConfig)
    dither: DitherConfig = Field(default_factory=DitherConfig)
    target_width: int | None = None  # None means the configured printer width
    target_height: int | None = None  # Explicit height overrides the aspect ratio
    maintain_aspect_ratio: bool = True
    rotation: int = 0  # Degrees clockwise, multiple of 90
    preview_scale: int = 1

    @field_validator("target_width", "target_height")
    @classmethod
    def _check_target_size(cls, value: int | None, info: Any) -> int | None:
        if value is not None and value <= 0:
            raise ParameterOutOfRange(info.field_name, value, "must be positive")
        return value

    @field_validator("rotation")
    @classmethod
    def _check_rotation(cls, value: int) -> int:
        if value % 90 != 0:
            raise ParameterOutOfRange("rotation", value, "must be a multiple of 90 degrees")
        return value % 360

    @field_validator("preview_scale")
    @classmethod
    def _check_preview_scale(cls, value: int) -> int:
        if value < 1:
            raise ParameterOutOfRange("preview_scale", value, "must be at least 1")
        return value
