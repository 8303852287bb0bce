"""
Processing system for instafilter.

Provides the pixel operators, declarative filter pipelines and the named
filter catalog. Pipelines are stored as immutable step lists and applied
sequentially to RGBA PixelBuffers with numpy.
"""

from .filters import (
    ParameterType,
    FilterParameter,
    OperatorDefinition,
    FilterStep,
    OPERATOR_REGISTRY,
    get_operator,
    validate_step,
    check_parameters,
    create_step,
)
from .pipeline import FilterPipeline, FilterSpec
from .executor import ProcessingExecutor
from .presets import (
    FILTER_CATALOG,
    FILTER_REGISTRY,
    NORMAL_FILTER_ID,
    get_filter_by_id,
    require_filter,
    list_filter_ids,
    get_filters_by_category,
    get_all_categories,
)
from .blend import blend
from .resize import calculate_thumbnail_size, downscale

__all__ = [
    "ParameterType",
    "FilterParameter",
    "OperatorDefinition",
    "FilterStep",
    "FilterPipeline",
    "FilterSpec",
    "ProcessingExecutor",
    # Operator helpers
    "OPERATOR_REGISTRY",
    "get_operator",
    "validate_step",
    "check_parameters",
    "create_step",
    # Catalog
    "FILTER_CATALOG",
    "FILTER_REGISTRY",
    "NORMAL_FILTER_ID",
    "get_filter_by_id",
    "require_filter",
    "list_filter_ids",
    "get_filters_by_category",
    "get_all_categories",
    # Buffers
    "blend",
    "calculate_thumbnail_size",
    "downscale",
]
