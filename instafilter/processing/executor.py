"""
Processing executor - applies pipeline steps to pixel buffers.

This module bridges the declarative pipeline to the numpy operators in
pixel_ops and convolution, dispatching each step by operator id.
"""

import logging
from typing import Optional

import numpy as np

from ..core import PixelBuffer, ValidationEngine
from . import convolution, pixel_ops
from .filters import FilterStep, validate_step
from .pipeline import FilterPipeline

logger = logging.getLogger(__name__)


class ProcessingExecutor:
    """Executes a processing pipeline on PixelBuffer objects."""

    def execute(
        self,
        buffer: PixelBuffer,
        pipeline: FilterPipeline,
        rng: Optional[np.random.Generator] = None,
    ) -> PixelBuffer:
        """
        Apply all steps in pipeline to the buffer sequentially.

        Every step is validated before the first one runs, so a bad parameter
        anywhere in the chain fails the call without doing any pixel work.

        Args:
            buffer: Input buffer, left unmodified
            pipeline: Pipeline with steps in execution order
            rng: Random source for noise steps

        Returns:
            New processed buffer
        """
        issues = []
        for step in pipeline:
            issues.extend(validate_step(step))
        ValidationEngine.raise_for_issues(issues, "Invalid pipeline")

        pixels = buffer.data
        for index, step in enumerate(pipeline):
            logger.debug("Step %d: %r on %dx%d", index, step, buffer.width, buffer.height)
            pixels = self._apply_step(pixels, step, rng)

        if pixels is buffer.data:
            pixels = pixels.copy()
        return PixelBuffer(width=buffer.width, height=buffer.height, data=pixels)

    def _apply_step(
        self,
        pixels: np.ndarray,
        step: FilterStep,
        rng: Optional[np.random.Generator] = None,
    ) -> np.ndarray:
        """Apply a single validated step. Returns a new array."""
        op = step.op_id

        if op == "grayscale":
            return pixel_ops.grayscale(pixels)

        elif op == "sepia":
            return pixel_ops.sepia(pixels, step.get("adj"))

        elif op == "invert":
            return pixel_ops.invert(pixels)

        elif op == "brightness":
            return pixel_ops.brightness(pixels, step.get("adj"))

        elif op == "hue_saturation":
            return pixel_ops.hue_saturation(pixels, step.get("adj"))

        elif op == "saturation":
            return pixel_ops.saturation(pixels, step.get("adj"))

        elif op == "contrast":
            return pixel_ops.contrast(pixels, step.get("adj"))

        elif op == "color_filter":
            return pixel_ops.color_filter(pixels, step.get("color"), step.get("adj"))

        elif op == "rgb_adjust":
            return pixel_ops.rgb_adjust(pixels, step.get("multipliers"))

        elif op == "convolute":
            return convolution.convolute(pixels, step.get("kernel"))

        elif op == "sharpen":
            return convolution.sharpen(pixels, step.get("amount"))

        elif op == "vignette":
            return convolution.vignette(pixels, step.get("amount"))

        elif op == "noise":
            return convolution.noise(pixels, step.get("amount"), rng=rng)

        else:
            raise ValueError(f"Unknown operator: {op}")
