"""
Processing pipeline management.

A pipeline is an immutable, ordered chain of operator steps applied one after
another. A FilterSpec names a pipeline and files it under a category.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from ..core import FilterCategory, InvalidParameterError, PixelBuffer
from .filters import FilterStep, create_step, validate_step


@dataclass(frozen=True)
class FilterPipeline:
    """Container for an ordered sequence of operator steps."""

    steps: Tuple[FilterStep, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))

    @classmethod
    def of(cls, *steps: Tuple[str, Dict[str, Any]]) -> "FilterPipeline":
        """Build a validated pipeline from ``(op_id, params)`` pairs."""
        return cls(tuple(create_step(op_id, **params) for op_id, params in steps))

    def with_step(self, step: FilterStep) -> "FilterPipeline":
        """Return a new pipeline with ``step`` appended."""
        return FilterPipeline(self.steps + (step,))

    def without_step(self, index: int) -> "FilterPipeline":
        """Return a new pipeline with the step at ``index`` removed."""
        if not 0 <= index < len(self.steps):
            raise IndexError(f"No step at index {index}")
        return FilterPipeline(self.steps[:index] + self.steps[index + 1:])

    def moved(self, from_index: int, to_index: int) -> "FilterPipeline":
        """Return a new pipeline with one step moved to another position."""
        if not (0 <= from_index < len(self.steps) and 0 <= to_index < len(self.steps)):
            raise IndexError(f"Cannot move step {from_index} to {to_index}")
        steps = list(self.steps)
        steps.insert(to_index, steps.pop(from_index))
        return FilterPipeline(tuple(steps))

    def get_step(self, index: int) -> Optional[FilterStep]:
        """Get a step by index."""
        if 0 <= index < len(self.steps):
            return self.steps[index]
        return None

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate all steps in pipeline. Returns (is_valid, errors)."""
        errors = []
        for i, step in enumerate(self.steps):
            for issue in validate_step(step):
                errors.append(f"Step {i} ({step.op_id}): {issue.message}")
        return len(errors) == 0, errors

    def is_empty(self) -> bool:
        """Check if pipeline has any steps."""
        return len(self.steps) == 0

    def apply(self, buffer: PixelBuffer, rng: Optional[np.random.Generator] = None) -> PixelBuffer:
        """Run every step in order; see :class:`ProcessingExecutor`."""
        from .executor import ProcessingExecutor
        return ProcessingExecutor().execute(buffer, self, rng=rng)

    def __len__(self) -> int:
        """Return number of steps in pipeline."""
        return len(self.steps)

    def __iter__(self) -> Iterator[FilterStep]:
        """Iterate over steps in pipeline."""
        return iter(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pipeline to dictionary."""
        return {"steps": [step.to_dict() for step in self.steps]}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "FilterPipeline":
        """Deserialize pipeline from dictionary."""
        return FilterPipeline(tuple(FilterStep.from_dict(s) for s in data.get("steps", [])))


@dataclass(frozen=True)
class FilterSpec:
    """A named, categorised filter."""

    filter_id: str
    name: str
    category: FilterCategory
    pipeline: FilterPipeline = field(default_factory=FilterPipeline)
    description: str = ""

    def __post_init__(self) -> None:
        if not self.filter_id:
            raise InvalidParameterError("Filter id must not be empty")

    @property
    def is_identity(self) -> bool:
        return self.pipeline.is_empty()

    def apply(self, buffer: PixelBuffer, rng: Optional[np.random.Generator] = None) -> PixelBuffer:
        return self.pipeline.apply(buffer, rng=rng)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize filter to dictionary."""
        return {
            "id": self.filter_id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "pipeline": self.pipeline.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "FilterSpec":
        """Deserialize filter from dictionary."""
        filter_id = data.get("id")
        if not filter_id:
            raise InvalidParameterError("Filter entry is missing its 'id' field")
        try:
            category = FilterCategory(data.get("category"))
        except ValueError:
            raise InvalidParameterError(
                f"Filter '{filter_id}' has unknown category {data.get('category')!r}"
            ) from None
        return FilterSpec(
            filter_id=filter_id,
            name=data.get("name", filter_id),
            category=category,
            pipeline=FilterPipeline.from_dict(data.get("pipeline", {})),
            description=data.get("description", ""),
        )
