"""
Stage 2: Sobel Edge Detection
"""

from typing import Optional

import cv2
import numpy as np

from ..logger import PipelineLogger

# Magnitude above which the mask combiner treats a pixel as edge evidence.
# Only used here for reporting.
STRONG_EDGE_REPORT_THRESHOLD = 30


def detect_edges(
    gray: np.ndarray, logger: Optional[PipelineLogger] = None
) -> np.ndarray:
    """
    Compute the Sobel gradient magnitude of a grayscale map

    Algorithm:
    1. Horizontal and vertical 3x3 Sobel responses (gx, gy)
    2. Magnitude sqrt(gx^2 + gy^2), clamped to 255 and truncated to uint8
    3. The one-pixel border ring has no full neighbourhood and stays 0

    Args:
        gray: Grayscale map (H, W), uint8
        logger: Logger instance

    Returns:
        Edge map (H, W), uint8
    """
    h, w = gray.shape
    edges = np.zeros((h, w), dtype=np.uint8)

    if h >= 3 and w >= 3:
        gx = cv2.Sobel(gray, cv2.CV_64F, 1, 0, ksize=3)
        gy = cv2.Sobel(gray, cv2.CV_64F, 0, 1, ksize=3)
        magnitude = np.sqrt(gx[1:-1, 1:-1] ** 2 + gy[1:-1, 1:-1] ** 2)
        edges[1:-1, 1:-1] = np.minimum(magnitude, 255.0).astype(np.uint8)

    if logger is not None:
        logger.log_stage(
            "s2_edges",
            method="sobel_3x3",
            interior_pixels=max(0, h - 2) * max(0, w - 2),
            strong_edge_pixels=int(np.count_nonzero(edges > STRONG_EDGE_REPORT_THRESHOLD)),
            max_magnitude=int(edges.max()),
        )

    return edges
