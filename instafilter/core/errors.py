"""
Exception hierarchy for the filter engine.

Parameter problems fail fast with InvalidParameterError; problems producing
a buffer in the first place surface as ResourceUnavailableError so callers
such as the thumbnail batcher can substitute a placeholder.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .types import ValidationIssue


class FilterEngineError(Exception):
    """Base class for all engine errors."""


class InvalidParameterError(FilterEngineError, ValueError):
    """A parameter, kernel, strength or buffer failed validation."""

    def __init__(self, message: str, issues: Optional[List["ValidationIssue"]] = None):
        super().__init__(message)
        self.issues = list(issues) if issues else []


class UnknownFilterError(InvalidParameterError):
    """No filter with the requested id exists in the catalog."""

    def __init__(self, filter_id: str):
        super().__init__(f"Unknown filter id: {filter_id!r}")
        self.filter_id = filter_id


class ResourceUnavailableError(FilterEngineError, RuntimeError):
    """A collaborator could not produce the buffer the engine needs."""
