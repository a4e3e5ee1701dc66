"""
Classical Multi-Stage Background Removal Pipeline
"""

from .config import PipelineConfig
from .errors import (
    ConfigError,
    DecodeError,
    InputError,
    PipelineCancelled,
    PipelineError,
    SurfaceError,
)
from .logger import PipelineLogger
from .pipeline import BackgroundRemovalPipeline, ProgressTracker, StageArtifacts

__all__ = [
    "BackgroundRemovalPipeline",
    "PipelineLogger",
    "PipelineConfig",
    "ProgressTracker",
    "StageArtifacts",
    "PipelineError",
    "InputError",
    "DecodeError",
    "SurfaceError",
    "PipelineCancelled",
    "ConfigError",
]
