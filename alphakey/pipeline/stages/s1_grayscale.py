"""
Stage 1: Luminance-weighted grayscale conversion
"""

from typing import Optional

import numpy as np

from ..logger import PipelineLogger

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def to_grayscale(
    image: np.ndarray, logger: Optional[PipelineLogger] = None
) -> np.ndarray:
    """
    Reduce an RGBA image to 8-bit luminance

    gray = 0.299 R + 0.587 G + 0.114 B, truncated toward zero.
    The input is not modified.

    Args:
        image: RGBA image (H, W, 4), uint8
        logger: Logger instance

    Returns:
        Grayscale map (H, W), uint8
    """
    r = image[:, :, 0].astype(np.float64)
    g = image[:, :, 1].astype(np.float64)
    b = image[:, :, 2].astype(np.float64)

    gray = (r * LUMA_WEIGHTS[0] + g * LUMA_WEIGHTS[1] + b * LUMA_WEIGHTS[2]).astype(
        np.uint8
    )

    if logger is not None:
        logger.log_stage(
            "s1_grayscale",
            method="bt601_luma",
            mean_luminance=float(gray.mean()),
        )

    return gray
