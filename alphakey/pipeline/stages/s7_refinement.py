"""
Stage 7: Density-Based Edge Refinement
"""

from typing import Optional

import numpy as np
from scipy import ndimage

from ..logger import PipelineLogger


def refine_edges(
    image: np.ndarray,
    radius: int = 2,
    density: float = 0.7,
    logger: Optional[PipelineLogger] = None,
) -> int:
    """
    Erode opaque pixels that sit in sparsely opaque neighbourhoods

    Algorithm:
    1. Count opaque pixels (alpha > 0) in the (2r+1)^2 window around each
       pixel, self included, on a snapshot of the alpha channel
    2. An opaque pixel at least ``radius`` away from every border whose
       count is below (2r+1)^2 * density becomes transparent
    3. Pixels within ``radius`` of the border are never touched

    Opacity is only ever removed. All counts are taken before any write,
    so the result does not depend on scan order.

    Args:
        image: RGBA image (H, W, 4), alpha modified in place
        radius: Window half-size
        density: Minimum opaque ratio to survive
        logger: Logger instance

    Returns:
        Number of pixels made transparent
    """
    h, w = image.shape[:2]
    alpha = image[:, :, 3]
    window = 2 * radius + 1
    min_count = window * window * density

    eroded = 0
    if h > 2 * radius and w > 2 * radius:
        opaque = alpha > 0
        counts = ndimage.convolve(
            opaque.astype(np.int32),
            np.ones((window, window), dtype=np.int32),
            mode="constant",
            cval=0,
        )

        eligible = np.zeros((h, w), dtype=bool)
        eligible[radius : h - radius, radius : w - radius] = True

        sparse = eligible & opaque & (counts < min_count)
        eroded = int(np.count_nonzero(sparse))
        alpha[sparse] = 0

    if logger is not None:
        logger.log_stage(
            "s7_refinement",
            method="density_filter",
            radius=radius,
            density=density,
            min_count=min_count,
            pixels_eroded=eroded,
        )

    return eroded
