"""
Operator definitions for the processing pipeline.

Each operator is a pixel or neighborhood transform identified by a string id.
Its parameters are declared here with types and bounds; a FilterStep binds an
operator id to concrete parameter values so that a whole filter can be held
as plain data.
"""

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core import (
    InvalidParameterError,
    ValidationEngine,
    ValidationIssue,
    ValidationSeverity,
)


class ParameterType(Enum):
    """Type of operator parameter."""
    FLOAT = auto()
    COLOR = auto()  # (r, g, b) target colour, 0-255 each
    VECTOR = auto()  # (r, g, b) per-channel multipliers
    KERNEL = auto()  # square matrix of weights, odd side


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class FilterParameter:
    """A single declared parameter of an operator."""
    name: str
    param_type: ParameterType
    default: Any = None
    min_val: Optional[float] = None
    max_val: Optional[float] = None
    description: str = ""

    def validate(self, value: Any) -> Tuple[bool, str]:
        """Validate a parameter value. Returns (is_valid, error_message)."""

        if self.param_type == ParameterType.FLOAT:
            if not _is_number(value) or not math.isfinite(value):
                return False, f"{self.name} must be a finite number"
            if self.min_val is not None and value < self.min_val:
                return False, f"{self.name} must be >= {self.min_val}, got {value}"
            if self.max_val is not None and value > self.max_val:
                return False, f"{self.name} must be <= {self.max_val}, got {value}"

        elif self.param_type in (ParameterType.COLOR, ParameterType.VECTOR):
            if isinstance(value, (str, bytes)) or not hasattr(value, "__len__") or len(value) != 3:
                return False, f"{self.name} must have exactly 3 components"
            for component in value:
                if not _is_number(component) or not math.isfinite(component):
                    return False, f"{self.name} components must be finite numbers"
                if self.min_val is not None and component < self.min_val:
                    return False, f"{self.name} components must be >= {self.min_val}"
                if self.max_val is not None and component > self.max_val:
                    return False, f"{self.name} components must be <= {self.max_val}"

        elif self.param_type == ParameterType.KERNEL:
            issues = ValidationEngine.validate_kernel(value)
            if issues:
                return False, f"{self.name}: {issues[0].message}"

        return True, ""


@dataclass(frozen=True)
class OperatorDefinition:
    """Declared signature of one operator."""
    op_id: str
    name: str
    parameters: Tuple[FilterParameter, ...] = ()
    description: str = ""

    def get_parameter(self, name: str) -> Optional[FilterParameter]:
        """Get a parameter by name."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None


def _freeze(value: Any) -> Any:
    """Turn nested lists into tuples so step parameters stay immutable."""
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if hasattr(value, "tolist"):
        return _freeze(value.tolist())
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class FilterStep:
    """One (operator, parameters) entry of a pipeline."""
    op_id: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {name: _freeze(value) for name, value in dict(self.params).items()}
        object.__setattr__(self, "params", MappingProxyType(frozen))

    def get(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize step to dictionary."""
        return {
            "op": self.op_id,
            "params": {name: _thaw(value) for name, value in self.params.items()},
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "FilterStep":
        """Deserialize step from dictionary."""
        op_id = data.get("op")
        if not op_id:
            raise InvalidParameterError("Filter step is missing its 'op' field")
        return FilterStep(op_id=op_id, params=data.get("params", {}))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterStep):
            return NotImplemented
        return self.op_id == other.op_id and dict(self.params) == dict(other.params)

    def __hash__(self) -> int:
        return hash((self.op_id, tuple(sorted(self.params.items()))))

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self.params.items())
        return f"{self.op_id}({args})"


# ============================================================================
# OPERATOR DEFINITIONS
# ============================================================================

GRAYSCALE = OperatorDefinition(
    op_id="grayscale",
    name="Grayscale",
    description="BT.709 luma written to all three channels",
)

SEPIA = OperatorDefinition(
    op_id="sepia",
    name="Sepia",
    parameters=(
        FilterParameter(
            name="adj",
            param_type=ParameterType.FLOAT,
            default=1.0,
            min_val=0.0,
            max_val=1.0,
            description="0 = unchanged, 1 = full sepia",
        ),
    ),
)

INVERT = OperatorDefinition(
    op_id="invert",
    name="Invert",
    description="255 - channel",
)

BRIGHTNESS = OperatorDefinition(
    op_id="brightness",
    name="Brightness",
    parameters=(
        FilterParameter(
            name="adj",
            param_type=ParameterType.FLOAT,
            default=0.0,
            min_val=-1.0,
            max_val=1.0,
            description="-1 = darker, 0 = unchanged, 1 = lighter",
        ),
    ),
)

HUE_SATURATION = OperatorDefinition(
    op_id="hue_saturation",
    name="Hue/Saturation",
    parameters=(
        FilterParameter(
            name="adj",
            param_type=ParameterType.FLOAT,
            default=1.0,
            min_val=0.0,
            description="HSV saturation multiplier (1 = unchanged)",
        ),
    ),
    description="Saturation scaled in HSV space; slower, more accurate",
)

SATURATION = OperatorDefinition(
    op_id="saturation",
    name="Saturation",
    parameters=(
        FilterParameter(
            name="adj",
            param_type=ParameterType.FLOAT,
            default=0.0,
            min_val=-1.0,
            description="-1 = gray, 0 = unchanged, > 0 = more saturated",
        ),
    ),
    description="Distance from BT.601 gray scaled per channel; fast approximation",
)

CONTRAST = OperatorDefinition(
    op_id="contrast",
    name="Contrast",
    parameters=(
        FilterParameter(
            name="adj",
            param_type=ParameterType.FLOAT,
            default=0.0,
            min_val=-1.0,
            max_val=1.0,
            description="-1 to 1, 0 = unchanged",
        ),
    ),
)

COLOR_FILTER = OperatorDefinition(
    op_id="color_filter",
    name="Color Filter",
    parameters=(
        FilterParameter(
            name="color",
            param_type=ParameterType.COLOR,
            default=(255, 255, 255),
            min_val=0.0,
            max_val=255.0,
            description="Overlay colour (r, g, b)",
        ),
        FilterParameter(
            name="adj",
            param_type=ParameterType.FLOAT,
            default=0.0,
            min_val=0.0,
            max_val=1.0,
            description="Blend amount towards the overlay colour",
        ),
    ),
)

RGB_ADJUST = OperatorDefinition(
    op_id="rgb_adjust",
    name="RGB Adjust",
    parameters=(
        FilterParameter(
            name="multipliers",
            param_type=ParameterType.VECTOR,
            default=(1.0, 1.0, 1.0),
            min_val=0.0,
            description="Per-channel multipliers (r, g, b)",
        ),
    ),
)

CONVOLUTE = OperatorDefinition(
    op_id="convolute",
    name="Convolution",
    parameters=(
        FilterParameter(
            name="kernel",
            param_type=ParameterType.KERNEL,
            default=(0, 0, 0, 0, 1, 0, 0, 0, 0),
            description="Square kernel with odd side, flat or nested",
        ),
    ),
)

SHARPEN = OperatorDefinition(
    op_id="sharpen",
    name="Sharpen",
    parameters=(
        FilterParameter(
            name="amount",
            param_type=ParameterType.FLOAT,
            default=1.0,
            min_val=0.0,
            description="Sharpening strength",
        ),
    ),
)

VIGNETTE = OperatorDefinition(
    op_id="vignette",
    name="Vignette",
    parameters=(
        FilterParameter(
            name="amount",
            param_type=ParameterType.FLOAT,
            default=0.5,
            min_val=0.0,
            description="Corner darkening; above 1 blacks out the far corners",
        ),
    ),
)

NOISE = OperatorDefinition(
    op_id="noise",
    name="Noise",
    parameters=(
        FilterParameter(
            name="amount",
            param_type=ParameterType.FLOAT,
            default=20.0,
            min_val=0.0,
            description="Peak-to-peak noise in channel units",
        ),
    ),
    description="Random per-pixel offset; not reproducible unless seeded",
)


# Registry of all available operators
OPERATOR_REGISTRY: Dict[str, OperatorDefinition] = {
    op.op_id: op
    for op in (
        GRAYSCALE,
        SEPIA,
        INVERT,
        BRIGHTNESS,
        HUE_SATURATION,
        SATURATION,
        CONTRAST,
        COLOR_FILTER,
        RGB_ADJUST,
        CONVOLUTE,
        SHARPEN,
        VIGNETTE,
        NOISE,
    )
}


def get_operator(op_id: str) -> Optional[OperatorDefinition]:
    """Look up an operator definition. Returns None if not found."""
    return OPERATOR_REGISTRY.get(op_id)


def validate_step(step: FilterStep) -> List[ValidationIssue]:
    """Check a step against its operator definition."""
    issues = []

    definition = get_operator(step.op_id)
    if definition is None:
        issues.append(
            ValidationIssue(
                severity=ValidationSeverity.ERROR,
                code="UNKNOWN_OPERATOR",
                message=f"Unknown operator '{step.op_id}'.",
                context={"op": step.op_id},
            )
        )
        return issues

    for name in step.params:
        if definition.get_parameter(name) is None:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="UNKNOWN_PARAMETER",
                    message=f"{definition.name} has no parameter '{name}'.",
                    context={"op": step.op_id, "parameter": name},
                )
            )

    for param in definition.parameters:
        if param.name not in step.params:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="MISSING_PARAMETER",
                    message=f"{definition.name} requires parameter '{param.name}'.",
                    context={"op": step.op_id, "parameter": param.name},
                )
            )
            continue
        is_valid, error = param.validate(step.params[param.name])
        if not is_valid:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="INVALID_PARAMETER",
                    message=f"{definition.name}: {error}",
                    context={"op": step.op_id, "parameter": param.name},
                )
            )

    return issues


def check_parameters(op_id: str, **params: Any) -> None:
    """Raise InvalidParameterError unless ``params`` satisfy ``op_id``."""
    ValidationEngine.raise_for_issues(validate_step(FilterStep(op_id, params)), op_id)


def create_step(op_id: str, **params: Any) -> FilterStep:
    """
    Build a validated step, filling omitted parameters with their defaults.

    Raises InvalidParameterError for unknown operators or bad values.
    """
    definition = get_operator(op_id)
    if definition is None:
        raise InvalidParameterError(f"Unknown operator '{op_id}'")
    values = {param.name: param.default for param in definition.parameters}
    values.update(params)
    step = FilterStep(op_id=op_id, params=values)
    ValidationEngine.raise_for_issues(validate_step(step), op_id)
    return step
