"""
PipelineConfig: Configuration for background removal pipeline
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .errors import ConfigError


@dataclass
class PipelineConfig:
    """Configuration for background removal pipeline"""

    # Stage 3/4: Background sampling + color segmentation
    color_threshold: float = 30.0  # Euclidean RGB distance, strict <
    sample_positions: Optional[Sequence[tuple[int, int]]] = None  # (x, y); None = 8 canonical points

    # Stage 5: Mask combination
    edge_threshold: int = 30  # Gradient magnitude, strict >

    # Stage 7: Edge refinement
    refine_edges: bool = True
    refine_radius: int = 2
    refine_density: float = 0.7

    # Input
    max_file_bytes: int = 5 * 1024 * 1024  # 5MB
    max_image_pixels: int = 20_000_000

    # Output
    autocrop: bool = False
    output_path: Optional[Path] = None

    def __post_init__(self):
        if self.color_threshold < 0:
            raise ConfigError(f"color_threshold must be >= 0, got {self.color_threshold}")
        if not 0 <= self.edge_threshold <= 255:
            raise ConfigError(f"edge_threshold must be in [0, 255], got {self.edge_threshold}")
        if self.refine_radius < 0:
            raise ConfigError(f"refine_radius must be >= 0, got {self.refine_radius}")
        if not 0.0 < self.refine_density <= 1.0:
            raise ConfigError(f"refine_density must be in (0, 1], got {self.refine_density}")
        if self.max_file_bytes <= 0:
            raise ConfigError(f"max_file_bytes must be > 0, got {self.max_file_bytes}")
        if self.max_image_pixels <= 0:
            raise ConfigError(f"max_image_pixels must be > 0, got {self.max_image_pixels}")
        if self.output_path is not None:
            self.output_path = Path(self.output_path)
        if self.sample_positions is not None:
            self.sample_positions = tuple(
                (int(x), int(y)) for x, y in self.sample_positions
            )
            if not self.sample_positions:
                raise ConfigError("sample_positions must not be empty")

    @property
    def refine_window(self) -> int:
        """Side length of the square refinement window"""
        return 2 * self.refine_radius + 1

    @property
    def refine_min_count(self) -> float:
        """Opaque neighbour count below which a pixel is eroded"""
        return self.refine_window * self.refine_window * self.refine_density
