"""
alphakey: training-free background removal for RGBA images
"""

from .pipeline import (
    BackgroundRemovalPipeline,
    ConfigError,
    DecodeError,
    InputError,
    PipelineCancelled,
    PipelineConfig,
    PipelineError,
    PipelineLogger,
    SurfaceError,
)

__version__ = "0.1.0"

__all__ = [
    "BackgroundRemovalPipeline",
    "PipelineConfig",
    "PipelineLogger",
    "PipelineError",
    "InputError",
    "DecodeError",
    "SurfaceError",
    "PipelineCancelled",
    "ConfigError",
]
