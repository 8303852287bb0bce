import numpy as np
import pytest

from instafilter.core import InvalidParameterError
from instafilter.processing import pixel_ops


def rgb(pixels, y=0, x=0):
    return tuple(int(c) for c in pixels[y, x, :3])


def test_grayscale_leaves_white_unchanged(white):
    out = pixel_ops.grayscale(white.data)
    assert np.array_equal(out, white.data)


def test_grayscale_equalises_channels(random_buffer):
    out = pixel_ops.grayscale(random_buffer.data)
    assert np.array_equal(out[..., 0], out[..., 1])
    assert np.array_equal(out[..., 1], out[..., 2])


def test_invert_white_gives_opaque_black(white):
    out = pixel_ops.invert(white.data)
    assert np.all(out[..., :3] == 0)
    assert np.all(out[..., 3] == 255)


def test_invert_twice_is_identity(random_buffer):
    once = pixel_ops.invert(random_buffer.data)
    assert np.array_equal(pixel_ops.invert(once), random_buffer.data)


def test_full_sepia_on_white(white):
    out = pixel_ops.sepia(white.data, 1)
    assert rgb(out) == (255, 255, 239)
    assert out[0, 0, 3] == 255


@pytest.mark.parametrize(
    "op, kwargs",
    [
        (pixel_ops.sepia, {"adj": 0}),
        (pixel_ops.brightness, {"adj": 0}),
        (pixel_ops.contrast, {"adj": 0}),
        (pixel_ops.saturation, {"adj": 0}),
        (pixel_ops.color_filter, {"color": (10, 20, 30), "adj": 0}),
        (pixel_ops.rgb_adjust, {"multipliers": (1, 1, 1)}),
    ],
)
def test_neutral_parameters_are_identity(random_buffer, op, kwargs):
    out = op(random_buffer.data, **kwargs)
    assert np.array_equal(out, random_buffer.data)
    assert out is not random_buffer.data


def test_brightness_rounds_half_up_and_clamps(make_solid):
    gray = make_solid(1, 1, (100, 250, 0, 255))
    out = pixel_ops.brightness(gray.data, 0.1)
    # round(25.5) == 26
    assert rgb(out) == (126, 255, 26)

    assert rgb(pixel_ops.brightness(gray.data, 0.5)) == (228, 255, 128)
    assert rgb(pixel_ops.brightness(gray.data, -1)) == (0, 0, 0)


def test_brightness_rejects_out_of_range():
    with pytest.raises(InvalidParameterError):
        pixel_ops.brightness(np.zeros((1, 1, 4), dtype=np.uint8), 1.5)


def test_contrast_factor_is_one_at_zero():
    assert pixel_ops.contrast_factor(0) == 1.0
    assert pixel_ops.contrast_factor(1) == pytest.approx(129.5)


def test_full_contrast_splits_around_128(make_solid):
    data = np.concatenate(
        [
            make_solid(1, 1, (128, 129, 127, 255)).data,
            make_solid(1, 1, (0, 255, 128, 255)).data,
        ],
        axis=1,
    )
    out = pixel_ops.contrast(data, 1)
    assert rgb(out, 0, 0) == (128, 255, 0)
    assert rgb(out, 0, 1) == (0, 255, 128)


def test_saturation_minus_one_is_bt601_gray(make_solid):
    red = make_solid(1, 1, (255, 0, 0, 255))
    out = pixel_ops.saturation(red.data, -1)
    assert rgb(out) == (76, 76, 76)


def test_saturation_rejects_below_minus_one(random_buffer):
    with pytest.raises(InvalidParameterError):
        pixel_ops.saturation(random_buffer.data, -2)


def test_hue_saturation_zero_desaturates_to_value(make_solid):
    red = make_solid(1, 1, (255, 0, 0, 255))
    assert rgb(pixel_ops.hue_saturation(red.data, 0)) == (255, 255, 255)


def test_hue_saturation_one_is_identity(random_buffer):
    out = pixel_ops.hue_saturation(random_buffer.data, 1)
    assert np.array_equal(out, random_buffer.data)


def test_hue_saturation_clamps_saturation(make_solid):
    teal = make_solid(1, 1, (0, 128, 128, 255))
    # s is already 1, scaling further cannot push channels below 0
    assert rgb(pixel_ops.hue_saturation(teal.data, 3)) == (0, 128, 128)


def test_color_filter_full_overlay(white):
    out = pixel_ops.color_filter(white.data, (0, 0, 0), 1)
    assert np.all(out[..., :3] == 0)


def test_color_filter_partial_overlay(make_solid):
    gray = make_solid(1, 1, (100, 100, 100, 255))
    assert rgb(pixel_ops.color_filter(gray.data, (200, 0, 100), 0.5)) == (150, 50, 100)


def test_color_filter_rejects_bad_colour(white):
    with pytest.raises(InvalidParameterError):
        pixel_ops.color_filter(white.data, (300, 0, 0), 0.5)
    with pytest.raises(InvalidParameterError):
        pixel_ops.color_filter(white.data, (0, 0), 0.5)


def test_rgb_adjust_scales_channels(make_solid):
    gray = make_solid(1, 1, (100, 100, 100, 255))
    assert rgb(pixel_ops.rgb_adjust(gray.data, (2, 1, 0.5))) == (200, 100, 50)
    assert rgb(pixel_ops.rgb_adjust(gray.data, (3, 3, 3))) == (255, 255, 255)
    with pytest.raises(InvalidParameterError):
        pixel_ops.rgb_adjust(gray.data, (-1, 1, 1))


@pytest.mark.parametrize(
    "op, kwargs",
    [
        (pixel_ops.grayscale, {}),
        (pixel_ops.invert, {}),
        (pixel_ops.sepia, {"adj": 0.7}),
        (pixel_ops.brightness, {"adj": 0.3}),
        (pixel_ops.contrast, {"adj": -0.4}),
        (pixel_ops.saturation, {"adj": 0.8}),
        (pixel_ops.hue_saturation, {"adj": 1.4}),
        (pixel_ops.color_filter, {"color": (255, 0, 0), "adj": 0.2}),
    ],
)
def test_operators_keep_alpha_and_input(random_buffer, op, kwargs):
    before = random_buffer.data.copy()
    out = op(random_buffer.data, **kwargs)
    assert out.dtype == np.uint8
    assert out.shape == before.shape
    assert np.array_equal(out[..., 3], before[..., 3])
    assert np.array_equal(random_buffer.data, before)
