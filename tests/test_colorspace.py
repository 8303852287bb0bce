import numpy as np
import pytest

from instafilter.core import (
    clamp,
    clamp_rgb,
    hsv_to_rgb,
    hsv_to_rgb_array,
    rgb_to_hsv,
    rgb_to_hsv_array,
)


@pytest.mark.parametrize(
    "rgb, expected_hue",
    [
        ((255, 0, 0), 0.0),
        ((0, 255, 0), 1 / 3),
        ((0, 0, 255), 2 / 3),
        ((255, 255, 0), 1 / 6),
        ((255, 0, 255), 5 / 6),
    ],
)
def test_rgb_to_hsv_primary_hues(rgb, expected_hue):
    h, s, v = rgb_to_hsv(*rgb)
    assert h == pytest.approx(expected_hue)
    assert s == 1.0
    assert v == 1.0


def test_rgb_to_hsv_achromatic_has_zero_hue():
    h, s, v = rgb_to_hsv(128, 128, 128)
    assert h == 0.0
    assert s == 0.0
    assert v == pytest.approx(128 / 255)

    assert rgb_to_hsv(0, 0, 0) == (0.0, 0.0, 0.0)


def test_hsv_to_rgb_white_and_red():
    assert hsv_to_rgb(0.0, 0.0, 1.0) == (255.0, 255.0, 255.0)
    r, g, b = hsv_to_rgb(0.0, 1.0, 1.0)
    assert (r, g, b) == (255.0, 0.0, 0.0)


@pytest.mark.parametrize(
    "rgb",
    [(12, 200, 99), (255, 255, 255), (0, 0, 0), (1, 2, 3), (250, 10, 128), (77, 77, 200)],
)
def test_round_trip_is_exact_after_rounding(rgb):
    assert clamp_rgb(*hsv_to_rgb(*rgb_to_hsv(*rgb))) == rgb


def test_array_conversion_matches_scalar():
    rng = np.random.default_rng(7)
    rgb = rng.integers(0, 256, size=(40, 3))
    # Include ties between channels
    rgb[:4] = [[200, 200, 10], [10, 200, 200], [90, 10, 90], [50, 50, 50]]

    hsv = rgb_to_hsv_array(rgb)
    for row, expected in zip(hsv, rgb):
        assert tuple(row) == pytest.approx(rgb_to_hsv(*(int(c) for c in expected)))

    back = hsv_to_rgb_array(hsv)
    for row, source in zip(back, hsv):
        assert tuple(row) == pytest.approx(hsv_to_rgb(*source))


def test_clamp_helpers():
    assert clamp(300, 0, 255) == 255
    assert clamp(-4, 0, 255) == 0
    assert clamp_rgb(-3.2, 127.6, 400) == (0, 128, 255)


def test_round_trip_over_every_rgb_value():
    gb = np.stack(
        np.meshgrid(np.arange(256), np.arange(256), indexing="ij"), axis=-1
    ).reshape(-1, 2)
    rgb = np.empty((gb.shape[0], 3), dtype=np.int64)
    rgb[:, 1:] = gb
    for red in range(256):
        rgb[:, 0] = red
        back = np.clip(np.rint(hsv_to_rgb_array(rgb_to_hsv_array(rgb))), 0, 255)
        assert np.array_equal(back, rgb), red
