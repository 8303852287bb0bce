"""Thumbnail size calculation and downscaling."""

from typing import Tuple

from ..core import InvalidParameterError, PixelBuffer
from ..oiio import OiioAdapter


def calculate_thumbnail_size(width: int, height: int, size: int) -> Tuple[int, int]:
    """
    Fit ``width`` x ``height`` inside a ``size`` x ``size`` box.

    The long side becomes ``size`` and the short side is scaled by the aspect
    ratio and truncated, never below 1 pixel. Images that already fit are
    left at their own size.

    Returns:
        (width, height) tuple
    """
    if size <= 0:
        raise InvalidParameterError(f"Thumbnail size must be positive, got {size}")
    if width <= 0 or height <= 0:
        return 0, 0
    if width <= size and height <= size:
        return width, height

    aspect_ratio = width / height
    if aspect_ratio > 1:
        target_w, target_h = size, size / aspect_ratio
    else:
        target_w, target_h = size * aspect_ratio, size

    return max(1, int(target_w)), max(1, int(target_h))


def downscale(buffer: PixelBuffer, size: int) -> PixelBuffer:
    """Return a copy of ``buffer`` fitted inside ``size`` x ``size``."""
    target_w, target_h = calculate_thumbnail_size(buffer.width, buffer.height, size)
    if (target_w, target_h) == (buffer.width, buffer.height):
        return buffer.copy()

    return OiioAdapter.resize(buffer, target_w, target_h)
