"""
Pipeline Stages
"""

from .s1_grayscale import to_grayscale
from .s2_edges import detect_edges
from .s3_sampling import sample_background_colors, sample_positions
from .s4_segmentation import segment_by_color
from .s5_combine import combine_masks
from .s6_alpha import apply_mask
from .s7_refinement import refine_edges

__all__ = [
    "to_grayscale",
    "detect_edges",
    "sample_positions",
    "sample_background_colors",
    "segment_by_color",
    "combine_masks",
    "apply_mask",
    "refine_edges",
]
