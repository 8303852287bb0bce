"""
Top-level filter engine.

FilterEngine ties the catalog, the executor, strength blending and the
thumbnail batcher together. The module-level functions delegate to a shared
default engine built from the default settings.
"""

import logging
import threading
from typing import Dict, Iterable, Optional

import numpy as np

from ..core import (
    EffectsSpec,
    InvalidParameterError,
    PixelBuffer,
    ResourceUnavailableError,
    ThumbnailBatchResult,
    ValidationEngine,
)
from ..processing import (
    FilterPipeline,
    ProcessingExecutor,
    blend,
    create_step,
    downscale,
    list_filter_ids,
    require_filter,
)
from ..oiio import OiioAdapter
from ..utils import get_logger
from .settings import Settings
from .thumbnail_runner import ThumbnailBatcher

logger = logging.getLogger(__name__)

# Post effects run in this order
EFFECT_ORDER = ("sharpen", "noise", "vignette")


class FilterEngine:
    """Applies catalog filters, post effects and thumbnail generation."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        executor: Optional[ProcessingExecutor] = None,
    ):
        self.settings = settings if settings is not None else Settings()
        get_logger(self.settings.log_level)
        logger.debug("OpenImageIO version: %s", OiioAdapter.get_oiio_version())
        self.executor = executor if executor is not None else ProcessingExecutor()
        self.batcher = ThumbnailBatcher(
            batch_size=self.settings.batch_size,
            max_workers=self.settings.max_workers,
            executor=self.executor,
        )

    def apply_filter(
        self,
        buffer: PixelBuffer,
        filter_id: str,
        strength: float = 1.0,
        rng: Optional[np.random.Generator] = None,
    ) -> PixelBuffer:
        """
        Apply the catalog filter ``filter_id`` to ``buffer``.

        ``strength`` below 1 blends the result with the unfiltered buffer.
        The "normal" filter returns an unchanged copy.

        Raises:
            InvalidParameterError: strength outside [0, 1]
            UnknownFilterError: no filter with that id
        """
        ValidationEngine.raise_for_issues(
            ValidationEngine.validate_strength(strength), "apply_filter"
        )
        spec = require_filter(filter_id)

        if spec.is_identity:
            return buffer.copy()

        logger.debug("Applying filter '%s' at strength %s", filter_id, strength)
        filtered = self.executor.execute(buffer, spec.pipeline, rng=rng)
        if strength < 1:
            return blend(buffer, filtered, strength)
        return filtered

    def apply_effects(
        self,
        buffer: PixelBuffer,
        vignette: Optional[float] = None,
        noise: Optional[float] = None,
        sharpen: Optional[float] = None,
        rng: Optional[np.random.Generator] = None,
        effects: Optional[EffectsSpec] = None,
    ) -> PixelBuffer:
        """
        Apply sharpen, then noise, then vignette.

        An effect runs only when its amount is greater than 0. Amounts may
        be given individually or as an EffectsSpec, not both.
        """
        if effects is not None:
            if any(v is not None for v in (vignette, noise, sharpen)):
                raise InvalidParameterError("Pass effect amounts or an EffectsSpec, not both")
        else:
            effects = EffectsSpec(vignette=vignette, noise=noise, sharpen=sharpen)

        amounts = {
            "sharpen": effects.sharpen,
            "noise": effects.noise,
            "vignette": effects.vignette,
        }
        pipeline = FilterPipeline()
        for op_id in EFFECT_ORDER:
            amount = amounts[op_id]
            if amount is None:
                continue
            # create_step rejects negative amounts before any pixel work
            step = create_step(op_id, amount=amount)
            if amount > 0:
                pipeline = pipeline.with_step(step)

        return self.executor.execute(buffer, pipeline, rng=rng)

    def generate_thumbnail_batch(
        self,
        buffer: Optional[PixelBuffer],
        filter_ids: Optional[Iterable[str]] = None,
        size: Optional[int] = None,
    ) -> ThumbnailBatchResult:
        """Like :meth:`generate_thumbnails` but returns the full batch result."""
        ids = list(filter_ids) if filter_ids is not None else list_filter_ids()
        specs = [require_filter(fid) for fid in ids]

        if size is None:
            size = self.settings.thumbnail_size
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise InvalidParameterError(f"Thumbnail size must be a positive integer, got {size!r}")

        preview = None
        if buffer is not None and not buffer.is_empty:
            try:
                preview = downscale(buffer, size)
            except ResourceUnavailableError:
                logger.exception("Could not downscale %dx%d preview", buffer.width, buffer.height)

        return self.batcher.generate(preview, specs)

    def generate_thumbnails(
        self,
        buffer: Optional[PixelBuffer],
        filter_ids: Optional[Iterable[str]] = None,
        size: Optional[int] = None,
    ) -> Dict[str, PixelBuffer]:
        """
        Render one thumbnail per filter, fitted inside ``size`` x ``size``.

        Filters that fail (or every filter, when ``buffer`` is missing) map to
        an empty placeholder buffer. A run that was cancelled or superseded
        by a newer one returns an empty dict.

        Raises:
            UnknownFilterError: any id in ``filter_ids`` is unknown
        """
        result = self.generate_thumbnail_batch(buffer, filter_ids, size)
        if result.cancelled:
            logger.info("Discarding thumbnails of stale generation %d", result.generation_id)
            return {}
        return dict(result.thumbnails)

    def cancel_thumbnails(self) -> None:
        """Make any running thumbnail generation stale."""
        self.batcher.cancel()


_default_engine: Optional[FilterEngine] = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> FilterEngine:
    """Return the shared engine, creating it on first use."""
    global _default_engine
    with _default_engine_lock:
        if _default_engine is None:
            _default_engine = FilterEngine()
        return _default_engine


def apply_filter(
    buffer: PixelBuffer,
    filter_id: str,
    strength: float = 1.0,
    rng: Optional[np.random.Generator] = None,
) -> PixelBuffer:
    return get_default_engine().apply_filter(buffer, filter_id, strength=strength, rng=rng)


def apply_effects(
    buffer: PixelBuffer,
    vignette: Optional[float] = None,
    noise: Optional[float] = None,
    sharpen: Optional[float] = None,
    rng: Optional[np.random.Generator] = None,
    effects: Optional[EffectsSpec] = None,
) -> PixelBuffer:
    return get_default_engine().apply_effects(
        buffer, vignette=vignette, noise=noise, sharpen=sharpen, rng=rng, effects=effects
    )


def generate_thumbnails(
    buffer: Optional[PixelBuffer],
    filter_ids: Optional[Iterable[str]] = None,
    size: Optional[int] = None,
) -> Dict[str, PixelBuffer]:
    return get_default_engine().generate_thumbnails(buffer, filter_ids=filter_ids, size=size)


def cancel_thumbnails() -> None:
    get_default_engine().cancel_thumbnails()
