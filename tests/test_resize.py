import numpy as np
import pytest

from instafilter.core import InvalidParameterError, ResourceUnavailableError
from instafilter.oiio import OiioAdapter
from instafilter.processing import calculate_thumbnail_size, downscale


@pytest.mark.parametrize(
    "width, height, size, expected",
    [
        (300, 150, 150, (150, 75)),
        (150, 300, 150, (75, 150)),
        (1000, 333, 150, (150, 49)),
        (1000, 1, 150, (150, 1)),
        (400, 400, 150, (150, 150)),
        (100, 50, 150, (100, 50)),
        (0, 10, 150, (0, 0)),
    ],
)
def test_calculate_thumbnail_size(width, height, size, expected):
    assert calculate_thumbnail_size(width, height, size) == expected


def test_calculate_thumbnail_size_rejects_bad_size():
    with pytest.raises(InvalidParameterError):
        calculate_thumbnail_size(10, 10, 0)


def test_downscale_small_buffer_is_copied(random_buffer):
    out = downscale(random_buffer, 150)
    assert out == random_buffer
    assert out.data is not random_buffer.data


def test_downscale_large_buffer(make_solid):
    big = make_solid(300, 200, (40, 80, 120, 255))
    out = downscale(big, 150)
    assert (out.width, out.height) == (150, 100)
    assert out.data.dtype == np.uint8
    assert np.all(np.abs(out.data.astype(int) - (40, 80, 120, 255)) <= 1)


def test_adapter_round_trip(random_buffer):
    imagebuf = OiioAdapter.to_imagebuf(random_buffer)
    assert OiioAdapter.from_imagebuf(imagebuf) == random_buffer


def test_adapter_rejects_empty_buffer():
    from instafilter.core import PixelBuffer

    with pytest.raises(ResourceUnavailableError):
        OiioAdapter.resize(PixelBuffer.empty(), 10, 10)


def test_oiio_version_string():
    assert isinstance(OiioAdapter.get_oiio_version(), str)
