"""Core types, errors, colour math and validation for instafilter."""

from .errors import (
    FilterEngineError,
    InvalidParameterError,
    UnknownFilterError,
    ResourceUnavailableError,
)
from .types import (
    CHANNELS,
    FilterCategory,
    ValidationSeverity,
    ValidationIssue,
    PixelBuffer,
    EffectsSpec,
    ThumbnailBatchResult,
)
from .colorspace import (
    rgb_to_hsv,
    hsv_to_rgb,
    rgb_to_hsv_array,
    hsv_to_rgb_array,
    clamp,
    clamp_rgb,
)
from .validation import ValidationEngine, kernel_side

__all__ = [
    "FilterEngineError",
    "InvalidParameterError",
    "UnknownFilterError",
    "ResourceUnavailableError",
    "CHANNELS",
    "FilterCategory",
    "ValidationSeverity",
    "ValidationIssue",
    "PixelBuffer",
    "EffectsSpec",
    "ThumbnailBatchResult",
    "rgb_to_hsv",
    "hsv_to_rgb",
    "rgb_to_hsv_array",
    "hsv_to_rgb_array",
    "clamp",
    "clamp_rgb",
    "ValidationEngine",
    "kernel_side",
]
