"""
Stage 3: Background Color Sampling
"""

from typing import Optional, Sequence

import numpy as np

from ..logger import PipelineLogger

ColorSample = tuple[int, int, int]


def sample_positions(width: int, height: int) -> list[tuple[int, int]]:
    """
    Canonical (x, y) sample coordinates

    Four corners (top-left, top-right, bottom-left, bottom-right) followed by
    the four edge midpoints (top, bottom, left, right). Tiny images produce
    duplicate coordinates.
    """
    right, bottom = width - 1, height - 1
    mid_x, mid_y = width // 2, height // 2
    return [
        (0, 0),
        (right, 0),
        (0, bottom),
        (right, bottom),
        (mid_x, 0),
        (mid_x, bottom),
        (0, mid_y),
        (right, mid_y),
    ]


def sample_background_colors(
    image: np.ndarray,
    positions: Optional[Sequence[tuple[int, int]]] = None,
    logger: Optional[PipelineLogger] = None,
) -> list[ColorSample]:
    """
    Read the RGB colors assumed to be background

    Args:
        image: RGBA image (H, W, 4)
        positions: (x, y) coordinates to sample; defaults to the eight
            canonical border points. Out-of-range coordinates are clamped.
        logger: Logger instance

    Returns:
        List of (R, G, B) samples, one per position, in position order
    """
    h, w = image.shape[:2]
    custom = positions is not None
    if positions is None:
        positions = sample_positions(w, h)

    samples: list[ColorSample] = []
    for x, y in positions:
        x = min(max(int(x), 0), w - 1)
        y = min(max(int(y), 0), h - 1)
        r, g, b = image[y, x, :3]
        samples.append((int(r), int(g), int(b)))

    if logger is not None:
        logger.log_stage(
            "s3_sampling",
            method="custom" if custom else "border_points",
            positions=[list(p) for p in positions],
            samples=[list(s) for s in samples],
            unique_colors=len(set(samples)),
        )

    return samples
