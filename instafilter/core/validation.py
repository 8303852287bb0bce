"""
Validation engine for filter parameters.

Structured validation rules that must pass before any pixel is touched.
Returns ValidationIssue lists; ERROR severity blocks the operation.
"""

import math
import numbers
from typing import Any, Iterable, List, Tuple

import numpy as np

from .errors import InvalidParameterError
from .types import PixelBuffer, ValidationIssue, ValidationSeverity


class ValidationEngine:
    """Validates kernels, strength factors and buffers."""

    @staticmethod
    def validate_kernel(weights: Any) -> List[ValidationIssue]:
        """
        Validate a convolution kernel.

        Accepts a flat sequence of weights or a square 2-D sequence/array.
        The weight count must be a perfect square with an odd side.
        """
        issues = []

        try:
            flat = np.asarray(weights, dtype=np.float64).ravel()
        except (TypeError, ValueError) as e:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="KERNEL_NOT_NUMERIC",
                    message=f"Kernel weights must be real numbers: {e}",
                    context={},
                )
            )
            return issues

        count = flat.size
        side = int(round(math.sqrt(count))) if count else 0
        if count == 0 or side * side != count or side % 2 == 0:
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="INVALID_KERNEL_SIZE",
                    message=f"Kernel must have an odd square number of weights, got {count}.",
                    context={"weight_count": count},
                )
            )
            return issues

        if not np.all(np.isfinite(flat)):
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="NON_FINITE_KERNEL",
                    message="Kernel weights must be finite.",
                    context={},
                )
            )

        return issues

    @staticmethod
    def validate_strength(strength: Any) -> List[ValidationIssue]:
        """Strength must be a real number in [0, 1]."""
        issues = []

        if isinstance(strength, (bool, np.bool_)) or not isinstance(strength, numbers.Real):
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="STRENGTH_NOT_NUMERIC",
                    message=f"Strength must be a number, got {type(strength).__name__}.",
                    context={"strength": strength},
                )
            )
        elif not (0.0 <= strength <= 1.0):
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="STRENGTH_OUT_OF_RANGE",
                    message=f"Strength must be within [0, 1], got {strength}.",
                    context={"strength": strength},
                )
            )

        return issues

    @staticmethod
    def validate_buffer_pair(original: PixelBuffer, other: PixelBuffer) -> List[ValidationIssue]:
        """Two buffers taking part in a blend must share dimensions."""
        issues = []

        if (original.width, original.height) != (other.width, other.height):
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="BUFFER_SIZE_MISMATCH",
                    message=(
                        f"Buffers differ in size: {original.width}x{original.height} "
                        f"vs {other.width}x{other.height}."
                    ),
                    context={
                        "original": (original.width, original.height),
                        "other": (other.width, other.height),
                    },
                )
            )

        return issues

    @staticmethod
    def split_issues(
        issues: Iterable[ValidationIssue],
    ) -> Tuple[List[ValidationIssue], List[ValidationIssue]]:
        """Return (errors, warnings)."""
        errors = []
        warnings = []
        for issue in issues:
            if issue.severity == ValidationSeverity.ERROR:
                errors.append(issue)
            else:
                warnings.append(issue)
        return errors, warnings

    @staticmethod
    def raise_for_issues(issues: Iterable[ValidationIssue], context: str = "") -> None:
        """Raise InvalidParameterError if any ERROR issue is present."""
        errors, _ = ValidationEngine.split_issues(issues)
        if not errors:
            return
        prefix = f"{context}: " if context else ""
        message = prefix + "; ".join(issue.message for issue in errors)
        raise InvalidParameterError(message, errors)


def kernel_side(weights: Any) -> int:
    """Side length of an already validated kernel."""
    count = np.asarray(weights, dtype=np.float64).size
    return int(round(math.sqrt(count)))
