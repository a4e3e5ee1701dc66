"""
BackgroundRemovalPipeline: Main orchestration class
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import numpy as np

from .buffer import as_rgba_view
from .config import PipelineConfig
from .errors import DecodeError, PipelineCancelled, PipelineError
from .image_io import (
    DEFAULT_DOWNLOAD_NAME,
    crop_to_opaque,
    decode_rgba,
    encode_png,
    load_rgba,
    save_png,
    to_image,
)
from .logger import PipelineLogger
from .stages import (
    apply_mask,
    combine_masks,
    detect_edges,
    refine_edges,
    sample_background_colors,
    segment_by_color,
    to_grayscale,
)

ProgressSink = Callable[[int], Any]
CancelCheck = Callable[[], bool]


class ProgressTracker:
    """Emits each progress checkpoint once, in increasing order"""

    CHECKPOINTS = (20, 40, 60, 80, 90, 100)

    def __init__(self, sink: Optional[ProgressSink] = None):
        self.sink = sink
        self.value = 0
        self.emitted: list[int] = []

    def advance(self, value: int):
        if value not in self.CHECKPOINTS:
            raise ValueError(f"Unknown progress checkpoint: {value}")
        if value <= self.value:
            raise ValueError(f"Progress must increase: {self.value} -> {value}")

        self.value = value
        self.emitted.append(value)
        if self.sink is not None:
            self.sink(value)


@dataclass(frozen=True)
class StageArtifacts:
    gray: np.ndarray
    edges: np.ndarray
    samples: list[tuple[int, int, int]]
    foreground: np.ndarray
    combined: np.ndarray


class BackgroundRemovalPipeline:
    """
    Classical single-image background removal pipeline

    Stages:
    1. Grayscale conversion (BT.601 luma)
    2. Edge detection (Sobel magnitude)
    3. Background color sampling (corners + edge midpoints)
    4. Color segmentation (Euclidean RGB distance)
    5. Mask combination (strong edge OR color foreground)
    6. Alpha masking (in place)
    7. Edge refinement (density filter)

    Stages run strictly in order; progress checkpoints 20/40/60/80/90/100
    are emitted at the stage boundaries.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        logger: Optional[PipelineLogger] = None,
    ):
        self.config = config or PipelineConfig()
        self.logger = logger or PipelineLogger()

    def run(
        self,
        pixels: Any,
        width: int,
        height: int,
        progress: Optional[ProgressSink] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> np.ndarray:
        """
        Replace the alpha channel of an RGBA8 buffer in place

        Args:
            pixels: Interleaved RGBA8 storage, width * height * 4 bytes
            width: Image width
            height: Image height
            progress: Called with 20, 40, 60, 80, 90, 100 at stage boundaries
            should_cancel: Polled before each stage; truthy cancels the run

        Returns:
            (height, width, 4) array sharing memory with ``pixels``

        Raises:
            InputError: If the buffer does not match width/height
            PipelineCancelled: If ``should_cancel`` returned True
            PipelineError: If a stage failed
        """
        image = as_rgba_view(pixels, width, height)
        tracker = ProgressTracker(progress)

        owns_log = self.logger.current_image is None
        if owns_log:
            self.logger.start_image(f"<buffer {width}x{height}>")

        try:
            gray = self._stage("s1_grayscale", should_cancel, to_grayscale, image)
            tracker.advance(20)

            edges = self._stage("s2_edges", should_cancel, detect_edges, gray)
            del gray
            tracker.advance(40)

            samples = self._stage(
                "s3_sampling",
                should_cancel,
                sample_background_colors,
                image,
                self.config.sample_positions,
            )
            foreground = self._stage(
                "s4_segmentation",
                should_cancel,
                segment_by_color,
                image,
                samples,
                self.config.color_threshold,
            )
            tracker.advance(60)

            combined = self._stage(
                "s5_combine",
                should_cancel,
                combine_masks,
                edges,
                foreground,
                self.config.edge_threshold,
            )
            tracker.advance(80)

            self._stage("s6_alpha", should_cancel, apply_mask, image, combined)
            tracker.advance(90)

            if self.config.refine_edges:
                self._stage(
                    "s7_refinement",
                    should_cancel,
                    refine_edges,
                    image,
                    self.config.refine_radius,
                    self.config.refine_density,
                )
            else:
                self._check_cancelled("s7_refinement", should_cancel)
                self.logger.log_stage("s7_refinement", method="skipped")
            tracker.advance(100)
        finally:
            if owns_log:
                self.logger.finish_image()

        return image

    def compute_masks(self, pixels: Any, width: int, height: int) -> StageArtifacts:
        """
        Run stages 1-5 without touching the buffer and return the artifacts

        Raises:
            InputError: If the buffer does not match width/height
        """
        image = as_rgba_view(pixels, width, height)
        gray = to_grayscale(image)
        edges = detect_edges(gray)
        samples = sample_background_colors(image, self.config.sample_positions)
        foreground = segment_by_color(image, samples, self.config.color_threshold)
        combined = combine_masks(edges, foreground, self.config.edge_threshold)
        return StageArtifacts(
            gray=gray,
            edges=edges,
            samples=samples,
            foreground=foreground,
            combined=combined,
        )

    def process(
        self, input_path: Path, progress: Optional[ProgressSink] = None
    ) -> Path:
        """
        Process a single image file through the full pipeline

        Args:
            input_path: Path to input image
            progress: Progress sink passed to run()

        Returns:
            Path to output PNG

        Raises:
            DecodeError: If the input cannot be read or decoded
            SurfaceError: If the RGBA raster cannot be produced or saved
            PipelineError: If processing fails
        """
        input_path = Path(input_path)
        self.logger.start_image(input_path)
        self.logger.log_info(f"Processing: {input_path}")

        try:
            pixels, width, height = load_rgba(
                input_path, self.config.max_file_bytes, self.config.max_image_pixels
            )
            self.logger.log_info(f"  Image size: {width}x{height}")

            self.run(pixels, width, height, progress=progress)

            result_img = to_image(pixels, width, height)

            # Autocrop if requested
            if self.config.autocrop:
                result_img, bbox = crop_to_opaque(result_img)
                if bbox:
                    self.logger.log_info(
                        f"  Cropped {width}x{height} → {result_img.size[0]}x{result_img.size[1]}"
                    )
                else:
                    self.logger.log_warning("  Nothing opaque left, skipping autocrop")

            output_path = self._compute_output_path(input_path)
            save_png(result_img, output_path)
            self.logger.log_info(f"  Saved → {output_path}")

            self.logger.save_image_log()

            return output_path

        except Exception as e:
            self.logger.log_error(f"Pipeline failed: {e}", exc_info=True)
            self.logger.save_image_log()
            raise

    def process_bytes(
        self, data: bytes, progress: Optional[ProgressSink] = None
    ) -> bytes:
        """
        Remove the background from encoded image bytes and return PNG bytes

        Nothing is written to disk; the run record stays in memory. Autocrop and
        the output path only apply to file processing.

        Raises:
            DecodeError: If the bytes are too large or cannot be decoded
            SurfaceError: If the RGBA raster cannot be produced or encoded
            PipelineError: If processing fails
        """
        if len(data) > self.config.max_file_bytes:
            raise DecodeError(
                f"Image data too large: {len(data) / 1024 / 1024:.1f}MB "
                f"(max {self.config.max_file_bytes / 1024 / 1024:.1f}MB)"
            )

        pixels, width, height = decode_rgba(data, self.config.max_image_pixels)
        self.run(pixels, width, height, progress=progress)
        return encode_png(pixels, width, height)

    def _stage(
        self,
        name: str,
        should_cancel: Optional[CancelCheck],
        func: Callable[..., Any],
        *args: Any,
    ) -> Any:
        self._check_cancelled(name, should_cancel)

        try:
            return func(*args, logger=self.logger)
        except PipelineError:
            raise
        except Exception as e:
            self.logger.log_error(f"{name} failed: {e}", exc_info=True)
            raise PipelineError(f"{name} failed: {e}") from e

    def _check_cancelled(self, name: str, should_cancel: Optional[CancelCheck]):
        if should_cancel is not None and should_cancel():
            self.logger.log_warning(f"Cancelled before {name}")
            raise PipelineCancelled(f"Cancelled before {name}")

    def _compute_output_path(self, input_path: Path) -> Path:
        """
        Compute output path

        Args:
            input_path: Input image path

        Returns:
            Output path
        """
        if self.config.output_path is not None:
            if self.config.output_path.is_dir():
                return self.config.output_path / DEFAULT_DOWNLOAD_NAME
            return self.config.output_path

        # Default: same directory, add _transparent suffix
        return input_path.with_name(f"{input_path.stem}_transparent.png")
