"""
Image I/O: decode files into RGBA8 buffers and encode results as PNG
"""

import base64
import io
from pathlib import Path
from typing import Any, Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from .buffer import as_rgba_view
from .errors import DecodeError, SurfaceError

DEFAULT_DOWNLOAD_NAME = "processed_image.png"


def read_image_bytes(path: Path, max_bytes: int) -> bytes:
    """
    Read an image file after checking that it exists and fits the size limit

    Raises:
        DecodeError: If the file is missing, empty or too large
    """
    if not path.exists():
        raise DecodeError(f"File does not exist: {path}")

    if not path.is_file():
        raise DecodeError(f"Not a file: {path}")

    file_size = path.stat().st_size
    if file_size == 0:
        raise DecodeError(f"File is empty: {path}")

    if file_size > max_bytes:
        raise DecodeError(
            f"File too large: {file_size / 1024 / 1024:.1f}MB "
            f"(max {max_bytes / 1024 / 1024:.1f}MB)"
        )

    try:
        return path.read_bytes()
    except OSError as e:
        raise DecodeError(f"Error reading image: {e}") from e


def decode_rgba(data: bytes, max_pixels: Optional[int] = None) -> tuple[bytearray, int, int]:
    """
    Decode encoded image bytes into an interleaved RGBA8 buffer

    Only the first frame of multi-frame images is used.

    Args:
        data: Encoded image bytes
        max_pixels: Reject images with more than this many pixels

    Returns:
        (pixels, width, height)

    Raises:
        DecodeError: If the bytes are not a readable image or are too large
        SurfaceError: If the decoded image cannot be rasterized to RGBA
    """
    if not data:
        raise DecodeError("Image data is empty")

    try:
        with Image.open(io.BytesIO(data)) as img:
            # Verify image integrity
            img.verify()
            width, height = img.size
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large: {e}") from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise DecodeError(f"Invalid or corrupted image: {e}") from e

    if width <= 0 or height <= 0:
        raise DecodeError(f"Invalid image dimensions: {width}x{height}")
    if max_pixels is not None and width * height > max_pixels:
        raise DecodeError(
            f"Image too large in pixels: {width}x{height} (max {max_pixels:,})"
        )

    # Reopen for actual processing (verify() invalidates the image)
    try:
        with Image.open(io.BytesIO(data)) as img:
            try:
                img.load()
            except OSError as e:
                raise DecodeError(f"Cannot decode image: {e}") from e

            try:
                rgba = img.convert("RGBA")
                pixels = bytearray(rgba.tobytes())
            except (OSError, ValueError) as e:
                raise SurfaceError(f"Cannot rasterize image to RGBA: {e}") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large: {e}") from e

    return pixels, width, height


def load_rgba(
    path: Path, max_bytes: int, max_pixels: Optional[int] = None
) -> tuple[bytearray, int, int]:
    """Read and decode an image file into an RGBA8 buffer"""
    return decode_rgba(read_image_bytes(path, max_bytes), max_pixels)


def to_image(pixels: Any, width: int, height: int) -> Image.Image:
    """Wrap an RGBA8 buffer as a PIL image (copies the data)"""
    view = as_rgba_view(pixels, width, height)
    return Image.fromarray(np.ascontiguousarray(view))


def crop_to_opaque(img: Image.Image) -> tuple[Image.Image, Optional[tuple[int, int, int, int]]]:
    """Crop an RGBA image to the bounding box of its non-transparent pixels"""
    bbox = img.getchannel("A").getbbox()
    if bbox is None:
        return img, None
    return img.crop(bbox), bbox


def save_png(img: Image.Image, path: Path) -> Path:
    """
    Save an image as PNG

    Raises:
        SurfaceError: If the image cannot be written
    """
    try:
        img.save(path, "PNG", optimize=True)
    except (OSError, ValueError) as e:
        raise SurfaceError(f"Cannot write {path}: {e}") from e
    return path


def encode_png(pixels: Any, width: int, height: int) -> bytes:
    """Encode an RGBA8 buffer as PNG bytes"""
    out = io.BytesIO()
    try:
        to_image(pixels, width, height).save(out, format="PNG")
    except (OSError, ValueError) as e:
        raise SurfaceError(f"Cannot encode PNG: {e}") from e
    return out.getvalue()


def to_data_url(png_bytes: bytes) -> str:
    """Return a ``data:image/png;base64,...`` URL for PNG bytes"""
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
