"""
Exception hierarchy for the background removal pipeline
"""


class PipelineError(Exception):
    """Base exception for background removal errors"""


class InputError(PipelineError):
    """Raised when the pixel buffer does not match its stated dimensions"""


class DecodeError(PipelineError):
    """Raised when a source image cannot be read or decoded"""


class SurfaceError(PipelineError):
    """Raised when an RGBA raster cannot be produced or written"""


class PipelineCancelled(PipelineError):
    """Raised when a run is cancelled at a stage boundary"""


class ConfigError(PipelineError, ValueError):
    """Raised for invalid pipeline configuration values"""
