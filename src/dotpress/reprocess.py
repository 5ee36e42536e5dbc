"""Re-run the pipeline for several editor layers at once."""

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from PIL import Image

from dotpress.models.options import ProcessingOptions
from dotpress.models.raster import ProcessingResult, RasterImage
from dotpress.pipeline import ProcessingPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class LayerJob:
    """One image layer to reprocess.

    original is the image as first imported, never a dithered result.
    target_width/target_height carry the layer's on-canvas size after the
    user resized it; None falls back to the processing options.
    """

    original: RasterImage | Image.Image
    target_width: int | None = None
    target_height: int | None = None


def reprocess_layers(
    layers: Mapping[str, LayerJob],
    options: ProcessingOptions,
    pipeline: ProcessingPipeline | None = None,
    max_workers: int | None = None,
) -> dict[str, ProcessingResult]:
    """Process every layer from its original with the same options.

    Layers are independent and run on a thread pool. If any layer fails its
    exception is raised and no results are returned.

    Args:
        layers: Layer name to job.
        options: Tone and dither settings shared by all layers.
        pipeline: Pipeline to use; a default one is created if omitted.
        max_workers: Thread pool size, None for the executor default.

    Returns:
        Layer name to result, in the same order as layers.
    """
    pipeline = pipeline or ProcessingPipeline()

    def run(job: LayerJob) -> ProcessingResult:
        return pipeline.process(
            job.original,
            options.tone,
            options.dither,
            job.target_width if job.target_width is not None else options.target_width,
            maintain_aspect_ratio=options.maintain_aspect_ratio,
            target_height=(
                job.target_height if job.target_height is not None else options.target_height
            ),
            rotation=options.rotation,
            preview_scale=options.preview_scale,
        )

    if not layers:
        return {}

    logger.debug(f"Reprocessing {len(layers)} layer(s) with {options.dither.method}")
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {name: executor.submit(run, job) for name, job in layers.items()}
        return {name: future.result() for name, future in futures.items()}
