"""
PixelBuffer validation: expose caller-owned RGBA8 storage as a (H, W, 4) view
"""

from typing import Any

import numpy as np

from .errors import InputError

CHANNELS = 4


def validate_dimensions(width: Any, height: Any) -> tuple[int, int]:
    """Reject non-integer or non-positive image dimensions"""
    if isinstance(width, bool) or isinstance(height, bool):
        raise InputError(f"Invalid image dimensions: {width}x{height}")
    try:
        w, h = int(width), int(height)
    except (TypeError, ValueError) as e:
        raise InputError(f"Invalid image dimensions: {width}x{height}") from e
    if w != width or h != height or w <= 0 or h <= 0:
        raise InputError(f"Invalid image dimensions: {width}x{height}")
    return w, h


def as_rgba_view(pixels: Any, width: int, height: int) -> np.ndarray:
    """
    Wrap an interleaved RGBA8 buffer as a writable (height, width, 4) array

    Accepts a uint8 ndarray (flat or (H, W, 4)) or any writable object
    exporting the buffer protocol with 1-byte items (bytearray, array('B'),
    memoryview). The returned array shares memory with ``pixels`` so writes
    to the alpha channel are visible to the caller.

    Raises:
        InputError: If dimensions are invalid, the length does not equal
            width * height * 4, or the storage cannot be mutated in place
    """
    w, h = validate_dimensions(width, height)
    expected = w * h * CHANNELS

    if isinstance(pixels, np.ndarray):
        array = pixels
        if array.dtype != np.uint8:
            raise InputError(f"Pixel buffer must be uint8, got {array.dtype}")
        if array.ndim == 3:
            if array.shape != (h, w, CHANNELS):
                raise InputError(
                    f"Pixel array shape {array.shape} does not match {w}x{h} RGBA"
                )
        elif array.ndim != 1:
            raise InputError(f"Pixel array must be flat or (H, W, 4), got {array.shape}")
    else:
        try:
            view = memoryview(pixels)
        except TypeError as e:
            raise InputError(
                f"Unsupported pixel buffer type: {type(pixels).__name__}"
            ) from e
        if view.itemsize != 1:
            raise InputError(f"Pixel buffer items must be 8-bit, got {view.itemsize} bytes")
        try:
            array = np.frombuffer(view, dtype=np.uint8)
        except ValueError as e:
            raise InputError(f"Pixel buffer is not contiguous: {e}") from e

    if array.size != expected:
        raise InputError(
            f"Pixel buffer length {array.size} does not match {w}x{h}x{CHANNELS} = {expected}"
        )
    if not array.flags.writeable:
        raise InputError("Pixel buffer is read-only; alpha must be written in place")
    if not array.flags.c_contiguous:
        raise InputError("Pixel buffer must be C-contiguous")

    return array.reshape(h, w, CHANNELS)
