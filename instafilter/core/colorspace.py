"""
RGB <-> HSV conversion.

Scalar helpers follow the classic max-channel-branch formulation; the array
variants apply exactly the same arithmetic over ``(..., 3)`` arrays so the
hue/saturation operator matches the scalar path bit for bit.
"""

import math
from typing import Tuple

import numpy as np


def rgb_to_hsv(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """
    Convert 0-255 RGB channels to HSV.

    Returns (h, s, v), each in [0, 1]. Achromatic colours get hue 0. When
    several channels share the maximum, the first of R, G, B wins.
    """
    r /= 255
    g /= 255
    b /= 255

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    v = max_c
    d = max_c - min_c
    s = 0.0 if max_c == 0 else d / max_c

    if max_c == min_c:
        h = 0.0
    else:
        if max_c == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif max_c == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return h, s, v


def hsv_to_rgb(h: float, s: float, v: float) -> Tuple[float, float, float]:
    """
    Convert HSV (each in [0, 1]) to real-valued RGB in [0, 255].

    Callers round and clamp; this function does neither.
    """
    i = math.floor(h * 6)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    sector = i % 6
    if sector == 0:
        r, g, b = v, t, p
    elif sector == 1:
        r, g, b = q, v, p
    elif sector == 2:
        r, g, b = p, v, t
    elif sector == 3:
        r, g, b = p, q, v
    elif sector == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return r * 255, g * 255, b * 255


def rgb_to_hsv_array(rgb: np.ndarray) -> np.ndarray:
    """Vectorised :func:`rgb_to_hsv` over an ``(..., 3)`` array of 0-255 values."""
    rgb = rgb.astype(np.float64) / 255
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    max_c = rgb.max(axis=-1)
    min_c = rgb.min(axis=-1)
    d = max_c - min_c
    chromatic = max_c != min_c

    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(max_c == 0, 0.0, d / max_c)
        safe_d = np.where(chromatic, d, 1.0)
        # np.select takes the first matching condition: R, then G, then B.
        h = np.select(
            [max_c == r, max_c == g],
            [(g - b) / safe_d + np.where(g < b, 6.0, 0.0), (b - r) / safe_d + 2],
            default=(r - g) / safe_d + 4,
        )
    h = np.where(chromatic, h / 6, 0.0)

    return np.stack([h, s, max_c], axis=-1)


def hsv_to_rgb_array(hsv: np.ndarray) -> np.ndarray:
    """Vectorised :func:`hsv_to_rgb`; returns unrounded values in [0, 255]."""
    h, s, v = hsv[..., 0], hsv[..., 1], hsv[..., 2]

    i = np.floor(h * 6)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    sector = np.mod(i, 6).astype(np.int64)
    conditions = [sector == k for k in range(6)]
    r = np.select(conditions, [v, q, p, p, t, v])
    g = np.select(conditions, [t, v, v, q, p, p])
    b = np.select(conditions, [p, p, t, v, v, q])

    return np.stack([r, g, b], axis=-1) * 255


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp ``value`` to ``[min_val, max_val]``."""
    return min(max(value, min_val), max_val)


def clamp_rgb(r: float, g: float, b: float) -> Tuple[int, int, int]:
    """Round and clamp real RGB values to 0-255 integers."""
    return (
        int(clamp(round(r), 0, 255)),
        int(clamp(round(g), 0, 255)),
        int(clamp(round(b), 0, 255)),
    )
