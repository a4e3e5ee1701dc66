"""
Stage 4: Color Distance Segmentation
"""

from typing import Optional, Sequence

import numpy as np

from ..logger import PipelineLogger

FOREGROUND = 255
BACKGROUND = 0


def segment_by_color(
    image: np.ndarray,
    samples: Sequence[tuple[int, int, int]],
    threshold: float = 30.0,
    logger: Optional[PipelineLogger] = None,
) -> np.ndarray:
    """
    Classify pixels by Euclidean RGB distance to the background samples

    A pixel is background (0) when any sample lies strictly closer than
    ``threshold``; otherwise it is foreground (255). Only the existence of
    a match matters, so duplicate samples are tested once.

    Args:
        image: RGBA image (H, W, 4)
        samples: Background colors (R, G, B)
        threshold: Distance below which a pixel matches a sample
        logger: Logger instance

    Returns:
        Foreground mask (H, W) with values in {0, 255}
    """
    rgb = image[:, :, :3].astype(np.float64)
    background = np.zeros(image.shape[:2], dtype=bool)

    for sample in dict.fromkeys(tuple(s) for s in samples):
        diff = rgb - np.asarray(sample, dtype=np.float64)
        distance = np.sqrt(np.sum(diff * diff, axis=2))
        background |= distance < threshold

    mask = np.where(background, BACKGROUND, FOREGROUND).astype(np.uint8)

    if logger is not None:
        fg_pixels = int(np.count_nonzero(mask))
        logger.log_stage(
            "s4_segmentation",
            method="euclidean_rgb",
            threshold=threshold,
            foreground_pixels=fg_pixels,
            background_pixels=int(mask.size - fg_pixels),
        )

    return mask
