"""
Filter catalog.

Every named filter is a FilterSpec whose pipeline lists its operators in
execution order. The catalog is built once at import time and never changes.
"""

from typing import Any, Dict, List, Optional, Tuple

from ..core import FilterCategory, UnknownFilterError
from .pipeline import FilterPipeline, FilterSpec


def _preset(
    filter_id: str,
    name: str,
    category: FilterCategory,
    description: str,
    *steps: Tuple[str, Dict[str, Any]],
) -> FilterSpec:
    return FilterSpec(
        filter_id=filter_id,
        name=name,
        category=category,
        pipeline=FilterPipeline.of(*steps),
        description=description,
    )


def _tint(r: int, g: int, b: int, adj: float) -> Tuple[str, Dict[str, Any]]:
    """color_filter step from the familiar ``[r, g, b, adj]`` overlay form."""
    return "color_filter", {"color": (r, g, b), "adj": adj}


def _adj(op_id: str, adj: float) -> Tuple[str, Dict[str, Any]]:
    return op_id, {"adj": adj}


def _rgb(r: float, g: float, b: float) -> Tuple[str, Dict[str, Any]]:
    return "rgb_adjust", {"multipliers": (r, g, b)}


def _sharpen(amount: float) -> Tuple[str, Dict[str, Any]]:
    return "sharpen", {"amount": amount}


_GRAYSCALE = ("grayscale", {})


FILTER_CATALOG: Tuple[FilterSpec, ...] = (
    _preset("normal", "Normal", FilterCategory.SOFT, "No filter applied"),

    # Google Photos style
    _preset(
        "google-style", "Google Style", FilterCategory.GOOGLE,
        "Vivid blues and greens with extra contrast and sharpness",
        _adj("saturation", 0.35),
        _adj("contrast", 0.12),
        _rgb(0.98, 1.0, 1.12),
        _adj("brightness", 0.05),
        _sharpen(0.3),
    ),
    _preset(
        "google-pop", "Google Pop", FilterCategory.GOOGLE, "Strong colour pop",
        _adj("saturation", 0.5),
        _adj("contrast", 0.18),
        _rgb(1.02, 1.05, 1.15),
        _sharpen(0.4),
    ),
    _preset(
        "google-vivid", "Google Vivid", FilterCategory.GOOGLE, "Maximum colour enhancement",
        _adj("saturation", 0.6),
        _adj("contrast", 0.2),
        _rgb(1.0, 1.02, 1.18),
        _adj("brightness", 0.03),
        _sharpen(0.5),
    ),
    _preset(
        "google-natural", "Google Natural", FilterCategory.GOOGLE, "Subtle, natural enhancement",
        _adj("saturation", 0.2),
        _adj("contrast", 0.08),
        _rgb(1.0, 1.02, 1.08),
        _sharpen(0.2),
    ),
    _preset(
        "google-hdr", "Google HDR", FilterCategory.GOOGLE, "HDR-like dynamic range",
        _adj("saturation", 0.4),
        _adj("contrast", 0.22),
        _rgb(1.02, 1.04, 1.12),
        _adj("brightness", -0.02),
        _sharpen(0.35),
    ),

    # Vintage & retro
    _preset(
        "clarendon", "Clarendon", FilterCategory.VINTAGE, "Light to lighter, dark to darker",
        _adj("brightness", 0.1),
        _adj("contrast", 0.1),
        _adj("saturation", 0.15),
    ),
    _preset(
        "gingham", "Gingham", FilterCategory.VINTAGE, "Vintage-inspired, muted colors",
        _adj("sepia", 0.04),
        _adj("contrast", -0.15),
    ),
    _preset(
        "reyes", "Reyes", FilterCategory.VINTAGE, "Dusty vintage look",
        _adj("sepia", 0.4),
        _adj("brightness", 0.13),
        _adj("contrast", -0.05),
    ),
    _preset(
        "stinson", "Stinson", FilterCategory.VINTAGE, "Washed out colors",
        _adj("brightness", 0.1),
        _adj("sepia", 0.3),
    ),
    _preset(
        "earlybird", "Earlybird", FilterCategory.VINTAGE, "Sepia tint, warm temperature",
        _tint(255, 165, 40, 0.2),
    ),
    _preset(
        "toaster", "Toaster", FilterCategory.VINTAGE, "Aged, burnt look",
        _adj("sepia", 0.1),
        _tint(255, 145, 0, 0.2),
    ),
    _preset(
        "walden", "Walden", FilterCategory.VINTAGE, "Increased exposure, yellow tint",
        _adj("brightness", 0.1),
        _tint(255, 255, 0, 0.2),
    ),
    _preset(
        "1977", "1977", FilterCategory.VINTAGE, "Rosy, brighter, faded look",
        _tint(255, 25, 0, 0.15),
        _adj("brightness", 0.1),
    ),
    _preset(
        "brooklyn", "Brooklyn", FilterCategory.VINTAGE, "Cool tint with sepia",
        _tint(25, 240, 252, 0.05),
        _adj("sepia", 0.3),
    ),

    # Black & white
    _preset(
        "moon", "Moon", FilterCategory.BW, "B/W with increased brightness",
        _GRAYSCALE,
        _adj("contrast", -0.04),
        _adj("brightness", 0.1),
    ),
    _preset(
        "willow", "Willow", FilterCategory.BW, "Monochromatic with purple tones",
        _GRAYSCALE,
        _tint(100, 28, 210, 0.03),
        _adj("brightness", 0.1),
    ),
    _preset(
        "inkwell", "Inkwell", FilterCategory.BW, "Classic black and white",
        _GRAYSCALE,
    ),

    # Warm tones
    _preset(
        "lark", "Lark", FilterCategory.WARM, "Brightens and intensifies colors",
        _adj("brightness", 0.08),
        _rgb(1, 1.03, 1.05),
        _adj("saturation", 0.12),
    ),
    _preset(
        "juno", "Juno", FilterCategory.WARM, "Intensifies red and yellow hues",
        _rgb(1.01, 1.04, 1),
        _adj("saturation", 0.3),
    ),
    _preset(
        "amaro", "Amaro", FilterCategory.WARM, "Adds light with center focus",
        _adj("saturation", 0.3),
        _adj("brightness", 0.15),
    ),
    _preset(
        "mayfair", "Mayfair", FilterCategory.WARM, "Warm pink tone",
        _tint(230, 115, 108, 0.05),
        _adj("saturation", 0.15),
    ),
    _preset(
        "rise", "Rise", FilterCategory.WARM, "Glow with softer lighting",
        _tint(255, 170, 0, 0.1),
        _adj("brightness", 0.09),
        _adj("saturation", 0.1),
    ),
    _preset(
        "valencia", "Valencia", FilterCategory.WARM, "Antique feel, warm colors",
        _tint(255, 225, 80, 0.08),
        _adj("saturation", 0.1),
        _adj("contrast", 0.05),
    ),
    _preset(
        "kelvin", "Kelvin", FilterCategory.WARM, "Radiant glow, high saturation",
        _tint(255, 140, 0, 0.1),
        _rgb(1.15, 1.05, 1),
        _adj("saturation", 0.35),
    ),
    _preset(
        "nashville", "Nashville", FilterCategory.WARM, "Nostalgic pink tint",
        _tint(220, 115, 188, 0.12),
        _adj("contrast", -0.05),
    ),
    _preset(
        "vesper", "Vesper", FilterCategory.WARM, "Subtle yellow tint",
        _tint(255, 225, 0, 0.05),
        _adj("brightness", 0.06),
        _adj("contrast", 0.06),
    ),
    _preset(
        "ashby", "Ashby", FilterCategory.WARM, "Golden glow, vintage feel",
        _tint(255, 160, 25, 0.1),
        _adj("brightness", 0.1),
    ),
    _preset(
        "charmes", "Charmes", FilterCategory.WARM, "High contrast, red tint",
        _tint(255, 50, 80, 0.12),
        _adj("contrast", 0.05),
    ),
    _preset(
        "ginza", "Ginza", FilterCategory.WARM, "Bright with warm glow",
        _adj("sepia", 0.06),
        _adj("brightness", 0.1),
    ),

    # Cool tones
    _preset(
        "hudson", "Hudson", FilterCategory.COOL, "Icy illusion, cool tint",
        _rgb(1, 1, 1.25),
        _adj("contrast", 0.1),
        _adj("brightness", 0.15),
    ),
    _preset(
        "slumber", "Slumber", FilterCategory.COOL, "Dreamy, desaturated look",
        _adj("brightness", 0.1),
        _adj("saturation", -0.5),
    ),
    _preset(
        "aden", "Aden", FilterCategory.COOL, "Blue/pink natural look",
        _tint(228, 130, 225, 0.13),
        _adj("saturation", -0.2),
    ),
    _preset(
        "perpetua", "Perpetua", FilterCategory.COOL, "Pastel look for portraits",
        _rgb(1.05, 1.1, 1),
    ),
    _preset(
        "crema", "Crema", FilterCategory.COOL, "Creamy, balanced tones",
        _rgb(1.04, 1, 1.02),
        _adj("saturation", -0.05),
    ),
    _preset(
        "ludwig", "Ludwig", FilterCategory.COOL, "Subtle desaturation",
        _adj("brightness", 0.05),
        _adj("saturation", -0.03),
    ),

    # High contrast / vivid
    _preset(
        "xpro2", "X-Pro II", FilterCategory.VIVID, "Vibrant with golden tint",
        _tint(255, 255, 0, 0.07),
        _adj("saturation", 0.2),
        _adj("contrast", 0.15),
    ),
    _preset(
        "lofi", "Lo-Fi", FilterCategory.VIVID, "Rich color, strong shadows",
        _adj("contrast", 0.15),
        _adj("saturation", 0.2),
    ),
    _preset(
        "hefe", "Hefe", FilterCategory.VIVID, "High contrast and saturation",
        _adj("contrast", 0.1),
        _adj("saturation", 0.15),
    ),
    _preset(
        "brannan", "Brannan", FilterCategory.VIVID, "High contrast, metallic tint",
        _adj("contrast", 0.2),
        _tint(140, 10, 185, 0.1),
    ),
    _preset(
        "sutro", "Sutro", FilterCategory.VIVID, "Dark edges, dramatic shadows",
        _adj("brightness", -0.1),
        _adj("saturation", -0.1),
    ),
    _preset(
        "skyline", "Skyline", FilterCategory.VIVID, "Bright and vivid",
        _adj("saturation", 0.35),
        _adj("brightness", 0.1),
    ),
    _preset(
        "dogpatch", "Dogpatch", FilterCategory.VIVID, "High contrast, washed highlights",
        _adj("contrast", 0.15),
        _adj("brightness", 0.1),
    ),
    _preset(
        "maven", "Maven", FilterCategory.VIVID, "Dark with yellow tint",
        _tint(225, 240, 0, 0.1),
        _adj("saturation", 0.25),
        _adj("contrast", 0.05),
    ),
    _preset(
        "helena", "Helena", FilterCategory.VIVID, "Orange and teal vibe",
        _tint(208, 208, 86, 0.2),
        _adj("contrast", 0.15),
    ),

    # Soft / faded
    _preset(
        "sierra", "Sierra", FilterCategory.SOFT, "Faded, softer look",
        _adj("contrast", -0.15),
        _adj("saturation", 0.1),
    ),
)

# Registry of all available filters
FILTER_REGISTRY: Dict[str, FilterSpec] = {spec.filter_id: spec for spec in FILTER_CATALOG}

if len(FILTER_REGISTRY) != len(FILTER_CATALOG):
    raise RuntimeError("Duplicate filter id in FILTER_CATALOG")

NORMAL_FILTER_ID = "normal"


def get_filter_by_id(filter_id: str) -> Optional[FilterSpec]:
    """Look up a filter by ID. Returns None if filter not found."""
    return FILTER_REGISTRY.get(filter_id)


def require_filter(filter_id: str) -> FilterSpec:
    """Look up a filter by ID, raising UnknownFilterError if it does not exist."""
    spec = FILTER_REGISTRY.get(filter_id)
    if spec is None:
        raise UnknownFilterError(filter_id)
    return spec


def list_filter_ids() -> List[str]:
    """All filter ids in catalog order."""
    return [spec.filter_id for spec in FILTER_CATALOG]


def get_filters_by_category(category: FilterCategory) -> List[FilterSpec]:
    """Get all filters in a specific category."""
    return [spec for spec in FILTER_CATALOG if spec.category == category]


def get_all_categories() -> List[FilterCategory]:
    """Get every category that has at least one filter, in display order."""
    used = {spec.category for spec in FILTER_CATALOG}
    return [category for category in FilterCategory if category in used]
