import numpy as np
import pytest

from instafilter.core import (
    EffectsSpec,
    InvalidParameterError,
    PixelBuffer,
    ValidationEngine,
    ValidationIssue,
    ValidationSeverity,
    kernel_side,
)


def codes(issues):
    return [issue.code for issue in issues]


def test_kernel_rules():
    assert ValidationEngine.validate_kernel([0] * 9) == []
    assert ValidationEngine.validate_kernel(np.ones((7, 7))) == []
    assert codes(ValidationEngine.validate_kernel([1] * 8)) == ["INVALID_KERNEL_SIZE"]
    assert codes(ValidationEngine.validate_kernel([1] * 16)) == ["INVALID_KERNEL_SIZE"]
    assert codes(ValidationEngine.validate_kernel([[1, "x"]])) == ["KERNEL_NOT_NUMERIC"]
    assert codes(ValidationEngine.validate_kernel([float("inf")])) == ["NON_FINITE_KERNEL"]
    assert kernel_side([[0] * 5] * 5) == 5


def test_strength_rules():
    assert ValidationEngine.validate_strength(0) == []
    assert ValidationEngine.validate_strength(1.0) == []
    assert codes(ValidationEngine.validate_strength(1.5)) == ["STRENGTH_OUT_OF_RANGE"]
    assert codes(ValidationEngine.validate_strength(None)) == ["STRENGTH_NOT_NUMERIC"]


def test_raise_for_issues_ignores_warnings():
    warning = ValidationIssue(ValidationSeverity.WARNING, "NOTE", "just a note")
    ValidationEngine.raise_for_issues([warning])

    error = ValidationIssue(ValidationSeverity.ERROR, "BAD", "really bad")
    with pytest.raises(InvalidParameterError) as excinfo:
        ValidationEngine.raise_for_issues([warning, error], "thing")
    assert str(excinfo.value) == "thing: really bad"
    assert excinfo.value.issues == [error]
    assert str(error) == "[ERROR] BAD: really bad"


def test_pixel_buffer_from_bytes():
    raw = bytes(range(16))
    buffer = PixelBuffer.from_bytes(2, 2, raw)
    assert tuple(buffer.data[0, 1]) == (4, 5, 6, 7)
    assert buffer.to_bytes() == raw

    with pytest.raises(InvalidParameterError):
        PixelBuffer.from_bytes(2, 2, raw[:-1])


def test_pixel_buffer_shape_checks():
    with pytest.raises(InvalidParameterError):
        PixelBuffer(width=2, height=2, data=np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(InvalidParameterError):
        PixelBuffer(width=1, height=1, data=np.zeros((1, 1, 4), dtype=np.float32))
    with pytest.raises(InvalidParameterError):
        PixelBuffer.from_array(np.zeros((4, 4), dtype=np.uint8))


def test_pixel_buffer_copy_and_empty(random_buffer):
    clone = random_buffer.copy()
    assert clone == random_buffer
    clone.data[0, 0, 0] ^= 0xFF
    assert clone != random_buffer

    empty = PixelBuffer.empty()
    assert empty.is_empty
    assert empty.to_bytes() == b""


def test_effects_spec_noop():
    assert EffectsSpec().is_noop()
    assert EffectsSpec(vignette=0, noise=0.0).is_noop()
    assert not EffectsSpec(sharpen=0.5).is_noop()


@pytest.mark.parametrize("strength", [np.float32(0.25), np.float64(1.0), np.int64(0), np.uint8(1)])
def test_numpy_real_strengths_accepted(strength):
    assert ValidationEngine.validate_strength(strength) == []


def test_numpy_strength_range_still_checked():
    assert codes(ValidationEngine.validate_strength(np.float32(1.5))) == ["STRENGTH_OUT_OF_RANGE"]
