"""
instafilter - Instagram-style photo filters for RGBA pixel buffers.

Filters are declarative pipelines of per-pixel and neighborhood operators
applied with numpy. Decoding and encoding images is left to the caller;
the engine only ever sees PixelBuffers.
"""

__version__ = "1.0.0"

from .core import (
    EffectsSpec,
    FilterCategory,
    FilterEngineError,
    InvalidParameterError,
    PixelBuffer,
    ResourceUnavailableError,
    ThumbnailBatchResult,
    UnknownFilterError,
)
from .processing import (
    FILTER_CATALOG,
    FilterPipeline,
    FilterSpec,
    blend,
    get_all_categories,
    get_filter_by_id,
    get_filters_by_category,
    list_filter_ids,
)
from .services import (
    FilterEngine,
    Settings,
    ThumbnailBatcher,
    apply_effects,
    apply_filter,
    cancel_thumbnails,
    catalog_from_json,
    catalog_to_json,
    generate_thumbnails,
)

__all__ = [
    "__version__",
    "EffectsSpec",
    "FilterCategory",
    "FilterEngineError",
    "InvalidParameterError",
    "PixelBuffer",
    "ResourceUnavailableError",
    "ThumbnailBatchResult",
    "UnknownFilterError",
    "FILTER_CATALOG",
    "FilterPipeline",
    "FilterSpec",
    "blend",
    "get_all_categories",
    "get_filter_by_id",
    "get_filters_by_category",
    "list_filter_ids",
    "FilterEngine",
    "Settings",
    "ThumbnailBatcher",
    "apply_effects",
    "apply_filter",
    "cancel_thumbnails",
    "catalog_from_json",
    "catalog_to_json",
    "generate_thumbnails",
]
