"""
Neighborhood and position-dependent operators.

``convolute`` applies a square kernel with zero contribution from positions
outside the image, so edge pixels darken under kernels whose weights sum to
one. The output is always a separate array from the input. ``vignette`` and
``noise`` live here as well since they depend on pixel position or on a
random source rather than on the pixel value alone.
"""

import logging
import math
from typing import Any, Optional

import numpy as np

from ..core import kernel_side
from .filters import check_parameters
from .pixel_ops import compose_rgba

logger = logging.getLogger(__name__)


def convolute(pixels: np.ndarray, kernel: Any) -> np.ndarray:
    """
    Convolve R, G and B with ``kernel``; alpha is copied from the source.

    Args:
        pixels: ``(H, W, 4)`` uint8 array, never modified
        kernel: flat or square nested weights with an odd side

    Returns:
        New ``(H, W, 4)`` uint8 array
    """
    check_parameters("convolute", kernel=kernel)

    side = kernel_side(kernel)
    half = side // 2
    weights = np.asarray(kernel, dtype=np.float64).reshape((side, side))
    height, width = pixels.shape[:2]

    # Zero padding makes out-of-bounds taps contribute nothing
    padded = np.zeros((height + 2 * half, width + 2 * half, 3), dtype=np.float64)
    padded[half:half + height, half:half + width] = pixels[..., :3]

    acc = np.zeros((height, width, 3), dtype=np.float64)
    # Row-major tap order keeps the per-pixel summation order fixed
    for ky in range(side):
        for kx in range(side):
            weight = weights[ky, kx]
            acc += padded[ky:ky + height, kx:kx + width] * weight

    return compose_rgba(pixels, acc[..., 0], acc[..., 1], acc[..., 2])


def sharpen_kernel(amount: float) -> list:
    """3x3 sharpen kernel for ``amount``."""
    a = amount
    return [
        0, -1 * a, 0,
        -1 * a, 1 + 4 * a, -1 * a,
        0, -1 * a, 0,
    ]


def sharpen(pixels: np.ndarray, amount: float = 1.0) -> np.ndarray:
    """Sharpen via :func:`convolute` with a cross-shaped kernel."""
    check_parameters("sharpen", amount=amount)
    return convolute(pixels, sharpen_kernel(amount))


def vignette(pixels: np.ndarray, amount: float = 0.5) -> np.ndarray:
    """Darken pixels in proportion to their distance from the centre."""
    check_parameters("vignette", amount=amount)

    height, width = pixels.shape[:2]
    if width == 0 or height == 0:
        return pixels.copy()

    cx = width / 2
    cy = height / 2
    max_dist = math.sqrt(cx * cx + cy * cy)

    dx = np.arange(width, dtype=np.float64)[None, :] - cx
    dy = np.arange(height, dtype=np.float64)[:, None] - cy
    dist = np.sqrt(dx * dx + dy * dy)
    factor = 1 - (dist / max_dist) * amount

    rgb = pixels[..., :3].astype(np.float64)
    return compose_rgba(
        pixels,
        np.maximum(0, rgb[..., 0] * factor),
        np.maximum(0, rgb[..., 1] * factor),
        np.maximum(0, rgb[..., 2] * factor),
    )


def noise(
    pixels: np.ndarray,
    amount: float = 20.0,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Add one uniform random offset in ``[-amount/2, amount/2)`` per pixel.

    The same offset is applied to R, G and B of a pixel and redrawn for every
    pixel. Pass a seeded ``numpy.random.Generator`` for reproducible output;
    without one a fresh unseeded generator is used.
    """
    check_parameters("noise", amount=amount)

    if rng is None:
        logger.debug("noise: no generator supplied, output is not reproducible")
        rng = np.random.default_rng()

    height, width = pixels.shape[:2]
    delta = (rng.random((height, width)) - 0.5) * amount

    rgb = pixels[..., :3].astype(np.float64)
    return compose_rgba(
        pixels,
        rgb[..., 0] + delta,
        rgb[..., 1] + delta,
        rgb[..., 2] + delta,
    )
