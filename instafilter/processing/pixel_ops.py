"""
Per-pixel colour operators.

Every operator takes an ``(H, W, 4)`` uint8 RGBA array and returns a new
array; the input is left untouched. Results are rounded to the nearest
integer (ties to even) and clamped to [0, 255], which is what storing a real
value into a clamped byte buffer does. Alpha is copied through unchanged.
"""

from typing import Sequence

import numpy as np

from ..core import hsv_to_rgb_array, rgb_to_hsv_array
from .filters import check_parameters


# BT.709 luma, used by grayscale
LUMA_709 = (0.2126, 0.7152, 0.0722)

# BT.601 (CCIR 601) luma, used by the fast saturation operator
LUMA_601 = (0.2989, 0.5870, 0.1140)


def _split(pixels: np.ndarray):
    """Return float64 R, G, B planes."""
    rgb = pixels[..., :3].astype(np.float64)
    return rgb[..., 0], rgb[..., 1], rgb[..., 2]


def _to_uint8(values: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def compose_rgba(pixels: np.ndarray, r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Assemble a new RGBA array from real-valued planes and the source alpha."""
    out = np.empty_like(pixels)
    out[..., 0] = _to_uint8(r)
    out[..., 1] = _to_uint8(g)
    out[..., 2] = _to_uint8(b)
    out[..., 3] = pixels[..., 3]
    return out


def grayscale(pixels: np.ndarray) -> np.ndarray:
    """Replace each channel with the BT.709 luma of the pixel."""
    r, g, b = _split(pixels)
    luma = LUMA_709[0] * r + LUMA_709[1] * g + LUMA_709[2] * b
    return compose_rgba(pixels, luma, luma, luma)


def sepia(pixels: np.ndarray, adj: float) -> np.ndarray:
    """Apply the sepia matrix scaled by ``adj`` (0 = unchanged, 1 = full)."""
    check_parameters("sepia", adj=adj)
    r, g, b = _split(pixels)
    out_r = (r * (1 - (0.607 * adj))) + (g * 0.769 * adj) + (b * 0.189 * adj)
    out_g = (r * 0.349 * adj) + (g * (1 - (0.314 * adj))) + (b * 0.168 * adj)
    out_b = (r * 0.272 * adj) + (g * 0.534 * adj) + (b * (1 - (0.869 * adj)))
    return compose_rgba(pixels, out_r, out_g, out_b)


def invert(pixels: np.ndarray) -> np.ndarray:
    """255 - channel for R, G and B."""
    out = pixels.copy()
    out[..., :3] = 255 - pixels[..., :3]
    return out


def brightness(pixels: np.ndarray, adj: float) -> np.ndarray:
    """Add ``round(255 * adj)`` to every channel."""
    check_parameters("brightness", adj=adj)
    # Halves round up, as Math.round does
    offset = int(np.floor(255 * adj + 0.5))
    shifted = pixels[..., :3].astype(np.int16) + offset
    out = pixels.copy()
    out[..., :3] = np.clip(shifted, 0, 255).astype(np.uint8)
    return out


def hue_saturation(pixels: np.ndarray, adj: float) -> np.ndarray:
    """Scale saturation in HSV space by ``adj`` and clamp it to [0, 1]."""
    check_parameters("hue_saturation", adj=adj)
    hsv = rgb_to_hsv_array(pixels[..., :3])
    hsv[..., 1] = np.clip(hsv[..., 1] * adj, 0.0, 1.0)
    rgb = hsv_to_rgb_array(hsv)
    return compose_rgba(pixels, rgb[..., 0], rgb[..., 1], rgb[..., 2])


def saturation(pixels: np.ndarray, adj: float) -> np.ndarray:
    """
    Fast saturation: push each channel away from (or towards) BT.601 gray.

    ``adj`` = 0 is identity, -1 is fully gray, positive values saturate.
    """
    check_parameters("saturation", adj=adj)
    r, g, b = _split(pixels)
    gray = LUMA_601[0] * r + LUMA_601[1] * g + LUMA_601[2] * b
    return compose_rgba(
        pixels,
        np.clip(-gray * adj + r * (1 + adj), 0, 255),
        np.clip(-gray * adj + g * (1 + adj), 0, 255),
        np.clip(-gray * adj + b * (1 + adj), 0, 255),
    )


def contrast_factor(adj: float) -> float:
    """The 259/255 contrast curve slope for ``adj`` in [-1, 1]."""
    adj_value = adj * 255
    return (259 * (adj_value + 255)) / (255 * (259 - adj_value))


def contrast(pixels: np.ndarray, adj: float) -> np.ndarray:
    """Stretch channels around 128 by the 259/255 contrast factor."""
    check_parameters("contrast", adj=adj)
    factor = contrast_factor(adj)
    r, g, b = _split(pixels)
    return compose_rgba(
        pixels,
        factor * (r - 128) + 128,
        factor * (g - 128) + 128,
        factor * (b - 128) + 128,
    )


def color_filter(pixels: np.ndarray, color: Sequence[float], adj: float) -> np.ndarray:
    """Blend every channel linearly towards the flat overlay ``color``."""
    check_parameters("color_filter", color=color, adj=adj)
    r, g, b = _split(pixels)
    return compose_rgba(
        pixels,
        r - (r - color[0]) * adj,
        g - (g - color[1]) * adj,
        b - (b - color[2]) * adj,
    )


def rgb_adjust(pixels: np.ndarray, multipliers: Sequence[float]) -> np.ndarray:
    """Multiply each channel by its own factor."""
    check_parameters("rgb_adjust", multipliers=multipliers)
    r, g, b = _split(pixels)
    return compose_rgba(pixels, r * multipliers[0], g * multipliers[1], b * multipliers[2])
