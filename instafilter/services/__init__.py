"""Services module initialization."""
from .settings import Settings
from .thumbnail_runner import BatchProgress, ThumbnailBatcher
from .catalog_serializer import CatalogSerializer, catalog_from_json, catalog_to_json
from .engine import (
    FilterEngine,
    get_default_engine,
    apply_filter,
    apply_effects,
    generate_thumbnails,
    cancel_thumbnails,
)

__all__ = [
    "Settings",
    "BatchProgress",
    "ThumbnailBatcher",
    "CatalogSerializer",
    "catalog_to_json",
    "catalog_from_json",
    "FilterEngine",
    "get_default_engine",
    "apply_filter",
    "apply_effects",
    "generate_thumbnails",
    "cancel_thumbnails",
]
