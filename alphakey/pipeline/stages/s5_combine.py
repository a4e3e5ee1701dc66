"""
Stage 5: Edge + Color Mask Fusion
"""

from typing import Optional

import numpy as np

from ..logger import PipelineLogger


def combine_masks(
    edges: np.ndarray,
    foreground: np.ndarray,
    edge_threshold: int = 30,
    logger: Optional[PipelineLogger] = None,
) -> np.ndarray:
    """
    OR-fuse strong edges with the color foreground mask

    combined = 255 if edge > edge_threshold or foreground == 255 else 0.
    A strong edge keeps a pixel even when its color matches the background,
    which preserves object silhouettes.

    Args:
        edges: Edge map (H, W), uint8
        foreground: Foreground mask (H, W), values in {0, 255}
        edge_threshold: Magnitude a pixel must exceed to count as an edge
        logger: Logger instance

    Returns:
        Combined mask (H, W) with values in {0, 255}
    """
    if edges.shape != foreground.shape:
        raise ValueError(
            f"Mask shapes differ: edges={edges.shape}, foreground={foreground.shape}"
        )

    strong_edges = edges > edge_threshold
    color_fg = foreground == 255
    combined = np.where(strong_edges | color_fg, 255, 0).astype(np.uint8)

    if logger is not None:
        logger.log_stage(
            "s5_combine",
            method="or",
            edge_threshold=edge_threshold,
            kept_pixels=int(np.count_nonzero(combined)),
            edge_only_pixels=int(np.count_nonzero(strong_edges & ~color_fg)),
        )

    return combined
