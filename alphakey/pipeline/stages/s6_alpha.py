"""
Stage 6: Write the combined mask into the alpha channel
"""

from typing import Optional

import numpy as np

from ..logger import PipelineLogger


def apply_mask(
    image: np.ndarray, mask: np.ndarray, logger: Optional[PipelineLogger] = None
) -> None:
    """
    Replace the alpha channel of ``image`` with ``mask`` in place

    RGB channels are left untouched.
    """
    if mask.shape != image.shape[:2]:
        raise ValueError(f"Mask shape {mask.shape} does not match image {image.shape[:2]}")

    image[:, :, 3] = mask

    if logger is not None:
        logger.log_stage(
            "s6_alpha",
            opaque_pixels=int(np.count_nonzero(mask)),
            transparent_pixels=int(mask.size - np.count_nonzero(mask)),
        )
