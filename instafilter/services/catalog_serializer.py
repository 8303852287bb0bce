"""
Filter catalog serialization and deserialization.

Handles saving and loading of filter catalogs to/from JSON. Loaded filters
are validated step by step so a catalog file can never smuggle in an
operator with out-of-range parameters.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from ..core import InvalidParameterError
from ..processing import FILTER_CATALOG, FilterSpec


class CatalogSerializer:
    """
    Serializes and deserializes filter catalogs to/from JSON.

    The top-level object carries a ``format_version`` so older files can be
    recognised if the layout ever changes.
    """

    # Format version for future compatibility
    FORMAT_VERSION = "1.0"

    @staticmethod
    def serialize(specs: Iterable[FilterSpec]) -> Dict[str, Any]:
        """Convert filter specs to a serializable dictionary."""
        return {
            "format_version": CatalogSerializer.FORMAT_VERSION,
            "filters": [spec.to_dict() for spec in specs],
        }

    @staticmethod
    def deserialize(data: Dict[str, Any]) -> Tuple[FilterSpec, ...]:
        """
        Convert a dictionary back to filter specs, in file order.

        Raises:
            InvalidParameterError: unsupported version, duplicate ids or an
                invalid filter entry
        """
        version = data.get("format_version", "1.0")
        if version != CatalogSerializer.FORMAT_VERSION:
            raise InvalidParameterError(
                f"Unsupported catalog format version: {version}. "
                f"Expected {CatalogSerializer.FORMAT_VERSION}"
            )

        specs = []
        seen = set()
        for index, entry in enumerate(data.get("filters", [])):
            try:
                spec = FilterSpec.from_dict(entry)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise InvalidParameterError(f"Failed to deserialize filter #{index}: {e}") from e

            if spec.filter_id in seen:
                raise InvalidParameterError(f"Duplicate filter id '{spec.filter_id}'")
            seen.add(spec.filter_id)

            is_valid, errors = spec.pipeline.validate()
            if not is_valid:
                raise InvalidParameterError(
                    f"Filter '{spec.filter_id}' has an invalid pipeline: {'; '.join(errors)}"
                )
            specs.append(spec)

        return tuple(specs)

    @staticmethod
    def save_to_file(specs: Iterable[FilterSpec], file_path: Path) -> None:
        """Save a catalog to a JSON file."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w") as f:
            json.dump(CatalogSerializer.serialize(specs), f, indent=2)

    @staticmethod
    def load_from_file(file_path: Path) -> Tuple[FilterSpec, ...]:
        """Load a catalog from a JSON file."""
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Catalog file not found: {file_path}")
        with open(file_path, "r") as f:
            data = json.load(f)
        return CatalogSerializer.deserialize(data)


def catalog_to_json(specs: Optional[Iterable[FilterSpec]] = None, indent: int = 2) -> str:
    """Serialize ``specs`` (the built-in catalog by default) to a JSON string."""
    if specs is None:
        specs = FILTER_CATALOG
    return json.dumps(CatalogSerializer.serialize(specs), indent=indent)


def catalog_from_json(text: str) -> Tuple[FilterSpec, ...]:
    """Parse a JSON string produced by :func:`catalog_to_json`."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidParameterError(f"Catalog is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidParameterError("Catalog JSON must be an object")
    return CatalogSerializer.deserialize(data)
