"""
Core data types for the filter engine.

All types use @dataclass and Enum for structured representations.
No loose dicts at the internal API boundary.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional

import numpy as np

from .errors import InvalidParameterError


CHANNELS = 4


class FilterCategory(Enum):
    """Style family a filter belongs to. Declaration order is display order."""
    GOOGLE = "google"
    VINTAGE = "vintage"
    BW = "bw"
    WARM = "warm"
    COOL = "cool"
    VIVID = "vivid"
    SOFT = "soft"
    ARTISTIC = "artistic"

    @property
    def label(self) -> str:
        """Human-readable category name."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    FilterCategory.GOOGLE: "Google Style",
    FilterCategory.VINTAGE: "Vintage",
    FilterCategory.BW: "Black & White",
    FilterCategory.WARM: "Warm",
    FilterCategory.COOL: "Cool",
    FilterCategory.VIVID: "Vivid",
    FilterCategory.SOFT: "Soft",
    FilterCategory.ARTISTIC: "Artistic",
}


class ValidationSeverity(Enum):
    """Validation issue severity."""
    ERROR = auto()
    WARNING = auto()


@dataclass
class ValidationIssue:
    """A validation problem."""
    severity: ValidationSeverity
    code: str
    message: str
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.severity.name}] {self.code}: {self.message}"


@dataclass
class PixelBuffer:
    """
    A width x height grid of RGBA samples.

    ``data`` is a ``(height, width, 4)`` uint8 array. Whoever holds the buffer
    owns it; engine operations never mutate a buffer they were handed and
    always return a fresh one.
    """
    width: int
    height: int
    data: np.ndarray

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise InvalidParameterError(
                f"Buffer dimensions must be non-negative, got {self.width}x{self.height}"
            )
        expected = (self.height, self.width, CHANNELS)
        if not isinstance(self.data, np.ndarray) or self.data.shape != expected:
            shape = getattr(self.data, "shape", None)
            raise InvalidParameterError(
                f"Buffer data must have shape {expected}, got {shape}"
            )
        if self.data.dtype != np.uint8:
            raise InvalidParameterError(
                f"Buffer data must be uint8, got {self.data.dtype}"
            )

    @classmethod
    def from_bytes(cls, width: int, height: int, raw: bytes) -> "PixelBuffer":
        """Build a buffer from tightly packed RGBA bytes (row-major)."""
        expected = width * height * CHANNELS
        if len(raw) != expected:
            raise InvalidParameterError(
                f"Expected {expected} bytes for a {width}x{height} RGBA buffer, got {len(raw)}"
            )
        data = np.frombuffer(bytes(raw), dtype=np.uint8).reshape((height, width, CHANNELS))
        return cls(width=width, height=height, data=data.copy())

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Wrap a copy of an ``(H, W, 4)`` uint8 array."""
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise InvalidParameterError(
                f"Expected an (H, W, {CHANNELS}) array, got shape {array.shape}"
            )
        height, width = array.shape[:2]
        return cls(width=width, height=height, data=np.array(array, dtype=np.uint8, copy=True))

    @classmethod
    def empty(cls) -> "PixelBuffer":
        """A 0x0 buffer, used as a placeholder thumbnail."""
        return cls(width=0, height=0, data=np.zeros((0, 0, CHANNELS), dtype=np.uint8))

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def copy(self) -> "PixelBuffer":
        """Deep copy of this buffer."""
        return PixelBuffer(width=self.width, height=self.height, data=self.data.copy())

    def to_bytes(self) -> bytes:
        """Return tightly packed RGBA bytes for the encode collaborator."""
        return self.data.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )


@dataclass(frozen=True)
class EffectsSpec:
    """Optional post effects; ``None`` or 0 leaves an effect off."""
    vignette: Optional[float] = None  # 0-1, larger allowed
    noise: Optional[float] = None  # 0-100
    sharpen: Optional[float] = None  # 0-2

    def is_noop(self) -> bool:
        return not any(v and v > 0 for v in (self.vignette, self.noise, self.sharpen))


@dataclass
class ThumbnailBatchResult:
    """Outcome of one thumbnail generation run."""
    generation_id: int
    thumbnails: Dict[str, PixelBuffer] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)
    cancelled: bool = False

    @property
    def succeeded(self) -> List[str]:
        """Ids rendered without a failure."""
        return [fid for fid in self.thumbnails if fid not in self.failures]
