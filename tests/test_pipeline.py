"""Tests for the processing pipeline."""

import numpy as np
import pytest
from PIL import Image

from dotpress.errors import (
    InvalidImageDimensions,
    ParameterOutOfRange,
    PipelineError,
    ProcessingError,
)
from dotpress.models.options import DitherConfig, DitherMethod, ProcessingOptions, ToneConfig
from dotpress.models.raster import MonochromeGrid, RasterImage
from dotpress.pipeline import ProcessingPipeline, process_image


@pytest.fixture
def pipeline():
    """Create a pipeline with the default printer width."""
    return ProcessingPipeline()


@pytest.fixture
def gradient_raster(gradient_image) -> RasterImage:
    return RasterImage.from_image(gradient_image)


class TestProcess:
    def test_scales_to_printer_width(self, pipeline, gradient_raster):
        result = pipeline.process(gradient_raster, ToneConfig(), DitherConfig())
        assert result.monochrome_grid.size == (384, 200)
        assert result.preview_bitmap.size == (384, 200)

    def test_accepts_pillow_image(self, pipeline, gradient_image):
        result = pipeline.process(gradient_image, ToneConfig(), DitherConfig())
        assert result.monochrome_grid.size == (384, 200)

    @pytest.mark.parametrize("method", list(DitherMethod))
    def test_every_method_runs(self, pipeline, gradient_raster, method):
        result = pipeline.process(gradient_raster, ToneConfig(), DitherConfig(method=method))
        grid = result.monochrome_grid
        assert grid.size == (384, 200)
        # Ramp runs black to white: left edge inked, right edge clear
        assert grid.cells[:, :8].mean() > 0.9
        assert grid.cells[:, -8:].mean() < 0.1

    def test_preview_matches_grid(self, pipeline, gradient_raster):
        result = pipeline.process(gradient_raster, ToneConfig(), DitherConfig())
        black = (result.preview_bitmap.pixels[..., 0] == 0)
        np.testing.assert_array_equal(black, result.monochrome_grid.cells)

    def test_preview_scale(self, pipeline, solid_raster):
        result = pipeline.process(
            solid_raster(10, 10), ToneConfig(), DitherConfig(), 20, preview_scale=2
        )
        assert result.monochrome_grid.size == (20, 20)
        assert result.preview_bitmap.size == (40, 40)

    def test_deterministic(self, pipeline, gradient_raster):
        tone = ToneConfig(brightness=140, contrast=120)
        dither = DitherConfig(method=DitherMethod.ATKINSON, threshold=110)
        first = pipeline.process(gradient_raster, tone, dither)
        second = pipeline.process(gradient_raster, tone, dither)
        assert first.monochrome_grid == second.monochrome_grid

    def test_original_untouched(self, pipeline, gradient_raster):
        before = gradient_raster.to_array()
        pipeline.process(gradient_raster, ToneConfig(brightness=30, invert=True), DitherConfig())
        np.testing.assert_array_equal(gradient_raster.pixels, before)

    def test_no_state_between_calls(self, pipeline, gradient_raster):
        """A call after other edits matches a call on a fresh pipeline."""
        dither = DitherConfig(method=DitherMethod.FLOYD_STEINBERG, threshold=150)
        pipeline.process(gradient_raster, ToneConfig(contrast=180), DitherConfig())
        pipeline.process(gradient_raster, ToneConfig(invert=True), dither)
        edited = pipeline.process(gradient_raster, ToneConfig(brightness=100), dither)
        fresh = ProcessingPipeline().process(gradient_raster, ToneConfig(brightness=100), dither)
        assert edited.monochrome_grid == fresh.monochrome_grid

    def test_invert_swaps_ink(self, pipeline, solid_raster):
        raster = solid_raster(8, 8, 0)
        plain = pipeline.process(raster, ToneConfig(), DitherConfig(method="threshold"), 8)
        inverted = pipeline.process(
            raster, ToneConfig(invert=True), DitherConfig(method="threshold"), 8
        )
        assert plain.monochrome_grid.ink_count == 64
        assert inverted.monochrome_grid.ink_count == 0

    def test_brightness_applied_before_dither(self, pipeline, solid_raster):
        raster = solid_raster(4, 4, 120)
        dither = DitherConfig(method=DitherMethod.THRESHOLD, threshold=128)
        neutral = pipeline.process(raster, ToneConfig(), dither, 4)
        brighter = pipeline.process(raster, ToneConfig(brightness=140), dither, 4)
        assert neutral.monochrome_grid.ink_count == 16
        assert brighter.monochrome_grid.ink_count == 0

    def test_invert_happens_after_tone(self, pipeline, solid_raster):
        """Brightening then inverting darkens the result."""
        raster = solid_raster(4, 4, 120)
        dither = DitherConfig(method=DitherMethod.THRESHOLD, threshold=128)
        result = pipeline.process(raster, ToneConfig(brightness=148, invert=True), dither, 4)
        # 120 + 20 = 140, inverted 115 < 128 -> ink
        assert result.monochrome_grid.ink_count == 16

    def test_explicit_target_height(self, pipeline, gradient_raster):
        result = pipeline.process(
            gradient_raster, ToneConfig(), DitherConfig(), 384, target_height=64
        )
        assert result.monochrome_grid.size == (384, 64)

    def test_rotation_before_scaling(self, pipeline, gradient_raster):
        result = pipeline.process(
            gradient_raster, ToneConfig(), DitherConfig(), 200, rotation=90
        )
        # 768x400 rotated -> 400x768, scaled to 200 wide -> 200x384
        assert result.monochrome_grid.size == (200, 384)

    def test_custom_printer_width(self, gradient_raster):
        pipeline = ProcessingPipeline(printer_width=576)
        result = pipeline.process(gradient_raster, ToneConfig(), DitherConfig())
        assert result.monochrome_grid.size == (576, 300)

    def test_target_width_clamped_to_printer_width(self, solid_raster):
        pipeline = ProcessingPipeline(printer_width=384)
        result = pipeline.process(solid_raster(100, 10), ToneConfig(), DitherConfig(), 1000)
        assert result.monochrome_grid.width <= pipeline.printer_width
        assert result.monochrome_grid.size == (384, 38)


class TestProcessErrors:
    def test_invalid_target_width(self, pipeline, solid_raster):
        with pytest.raises(InvalidImageDimensions):
            pipeline.process(solid_raster(4, 4), ToneConfig(), DitherConfig(), 0)

    def test_zero_size_pillow_image(self, pipeline):
        with pytest.raises(InvalidImageDimensions):
            pipeline.process(Image.new("RGB", (0, 0)), ToneConfig(), DitherConfig())

    def test_invalid_preview_scale(self, pipeline, solid_raster):
        with pytest.raises(ParameterOutOfRange):
            pipeline.process(solid_raster(4, 4), ToneConfig(), DitherConfig(), preview_scale=0)

    def test_unexpected_failure_is_aggregated(self, pipeline):
        with pytest.raises(PipelineError) as exc_info:
            pipeline.process("not an image", ToneConfig(), DitherConfig())  # type: ignore[arg-type]
        assert isinstance(exc_info.value, ProcessingError)
        assert exc_info.value.stage == "scale"
        assert exc_info.value.__cause__ is not None


class TestProcessOptions:
    def test_uses_profile_settings(self, pipeline, gradient_raster):
        options = ProcessingOptions(
            tone=ToneConfig(contrast=130),
            dither=DitherConfig(method=DitherMethod.HALFTONE, halftone_cell_size=6),
            target_width=192,
            preview_scale=2,
        )
        result = pipeline.process_options(gradient_raster, options)
        assert result.monochrome_grid.size == (192, 100)
        assert result.preview_bitmap.size == (384, 200)

    def test_no_aspect_ratio(self, pipeline, gradient_raster):
        options = ProcessingOptions(maintain_aspect_ratio=False)
        result = pipeline.process_options(gradient_raster, options)
        assert result.monochrome_grid.size == (384, 400)


class TestProcessImage:
    def test_concrete_scaling_scenario(self, gradient_image):
        """768x400 at printer width 384 with aspect preserved is 384x200."""
        result = process_image(gradient_image, ToneConfig(), DitherConfig())
        assert isinstance(result.monochrome_grid, MonochromeGrid)
        assert result.monochrome_grid.size == (384, 200)
