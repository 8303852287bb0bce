"""Strength blending between an unfiltered snapshot and its filtered result."""

import numpy as np

from ..core import PixelBuffer, ValidationEngine


def blend(original: PixelBuffer, filtered: PixelBuffer, strength: float) -> PixelBuffer:
    """
    Linearly interpolate R, G and B from ``original`` towards ``filtered``.

    ``strength`` 0 returns a copy of ``original`` and 1 a copy of ``filtered``,
    both bit-exact. In between, each channel is
    ``round(original * (1 - strength) + filtered * strength)`` clamped to
    [0, 255]; alpha is taken from ``filtered``.
    """
    ValidationEngine.raise_for_issues(
        ValidationEngine.validate_strength(strength)
        + ValidationEngine.validate_buffer_pair(original, filtered),
        "blend",
    )

    if strength == 1:
        return filtered.copy()
    if strength == 0:
        return original.copy()

    src = original.data[..., :3].astype(np.float64)
    dst = filtered.data[..., :3].astype(np.float64)
    mixed = src * (1 - strength) + dst * strength

    out = filtered.data.copy()
    out[..., :3] = np.clip(np.rint(mixed), 0, 255).astype(np.uint8)
    return PixelBuffer(width=filtered.width, height=filtered.height, data=out)
