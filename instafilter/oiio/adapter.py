"""
OpenImageIO adapter for robust, version-safe interaction.

Converts PixelBuffers to and from ImageBuf objects and wraps the
ImageBufAlgo calls the engine needs. Any OIIO failure is reported as
ResourceUnavailableError.
"""

import logging
import threading

import numpy as np
import OpenImageIO as oiio

from ..core import CHANNELS, PixelBuffer, ResourceUnavailableError

logger = logging.getLogger(__name__)


class OiioAdapter:
    """Thin wrapper for robust OIIO bindings."""

    # OIIO calls are serialised; ImageBuf is not documented as thread-safe
    _oiio_lock = threading.Lock()

    @staticmethod
    def to_imagebuf(buffer: PixelBuffer) -> oiio.ImageBuf:
        """Copy a PixelBuffer into a new 8-bit RGBA ImageBuf."""
        spec = oiio.ImageSpec(buffer.width, buffer.height, CHANNELS, oiio.UINT8)
        spec.channelnames = ("R", "G", "B", "A")
        spec.alpha_channel = 3
        imagebuf = oiio.ImageBuf(spec)
        if not imagebuf.set_pixels(oiio.ROI(), np.ascontiguousarray(buffer.data)):
            raise ResourceUnavailableError(f"ImageBuf.set_pixels failed: {imagebuf.geterror()}")
        return imagebuf

    @staticmethod
    def from_imagebuf(imagebuf: oiio.ImageBuf) -> PixelBuffer:
        """Read an ImageBuf back as an RGBA PixelBuffer."""
        spec = imagebuf.spec()
        if spec.nchannels != CHANNELS:
            raise ResourceUnavailableError(
                f"Expected a {CHANNELS}-channel image, got {spec.nchannels} channels"
            )
        pixels = imagebuf.get_pixels(oiio.UINT8)
        if pixels is None:
            raise ResourceUnavailableError(f"ImageBuf.get_pixels failed: {imagebuf.geterror()}")
        data = np.asarray(pixels, dtype=np.uint8).reshape((spec.height, spec.width, CHANNELS))
        return PixelBuffer(width=spec.width, height=spec.height, data=data.copy())

    @staticmethod
    def resize(buffer: PixelBuffer, width: int, height: int) -> PixelBuffer:
        """
        Resample ``buffer`` to ``width`` x ``height``.

        Uses ImageBufAlgo.resize with OIIO's default filter for the scale
        factor. The input buffer is not modified.
        """
        if buffer.is_empty:
            raise ResourceUnavailableError("Cannot resize an empty buffer")

        with OiioAdapter._oiio_lock:
            try:
                source = OiioAdapter.to_imagebuf(buffer)
                roi = oiio.ROI(0, width, 0, height, 0, 1, 0, CHANNELS)
                result = oiio.ImageBufAlgo.resize(source, roi=roi)
            except ResourceUnavailableError:
                raise
            except Exception as e:
                raise ResourceUnavailableError(f"resize to {width}x{height} failed: {e}") from e

            if result is None or result.has_error:
                error = result.geterror() if result is not None else "no result"
                raise ResourceUnavailableError(f"resize to {width}x{height} failed: {error}")

            resized = OiioAdapter.from_imagebuf(result)

        logger.debug(
            "Resized %dx%d -> %dx%d", buffer.width, buffer.height, resized.width, resized.height
        )
        return resized

    @staticmethod
    def get_oiio_version() -> str:
        """Return OIIO version string."""
        if hasattr(oiio, "__version__"):
            return str(oiio.__version__)
        return "unknown"
