"""OpenImageIO bindings used for resampling buffers."""

from .adapter import OiioAdapter

__all__ = ["OiioAdapter"]
