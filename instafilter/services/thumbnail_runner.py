"""
Batched thumbnail generation.

Renders one preview per filter on a ThreadPoolExecutor, a fixed number of
filters at a time. Every call to ``generate`` starts a new generation;
results from an older generation are discarded once a newer one (or an
explicit ``cancel``) has begun.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Iterable, List, Optional

from ..core import (
    InvalidParameterError,
    PixelBuffer,
    ResourceUnavailableError,
    ThumbnailBatchResult,
)
from ..processing import FilterSpec, ProcessingExecutor

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
BatchCallback = Callable[[Dict[str, PixelBuffer]], None]


class BatchProgress:
    """Thread-safe progress counter for parallel thumbnail workers."""

    def __init__(self, total: int):
        self.lock = threading.Lock()
        self.completed = 0
        self.total = total

    def increment(self) -> int:
        """
        Increment progress counter.
        Returns the number of completed thumbnails.
        """
        with self.lock:
            self.completed += 1
            return self.completed

    def get_percent(self) -> int:
        """Get current progress percentage."""
        with self.lock:
            if self.total == 0:
                return 100
            return int((self.completed / self.total) * 100)

    def get_completed(self) -> int:
        """Get number of completed thumbnails."""
        with self.lock:
            return self.completed


class ThumbnailBatcher:
    """Generates filter thumbnails in cancellable batches."""

    DEFAULT_BATCH_SIZE = 6

    def __init__(
        self,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_workers: Optional[int] = None,
        executor: Optional[ProcessingExecutor] = None,
        on_progress: Optional[ProgressCallback] = None,
        on_batch: Optional[BatchCallback] = None,
    ):
        if batch_size <= 0:
            raise InvalidParameterError(f"batch_size must be positive, got {batch_size}")
        if max_workers is not None and max_workers <= 0:
            raise InvalidParameterError(f"max_workers must be positive, got {max_workers}")

        self.batch_size = batch_size
        self.max_workers = max_workers if max_workers is not None else batch_size
        self.executor = executor if executor is not None else ProcessingExecutor()
        self.on_progress = on_progress
        self.on_batch = on_batch

        self._lock = threading.Lock()
        self._generation = 0
        self._latest: Dict[str, PixelBuffer] = {}

    @property
    def current_generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def latest_results(self) -> Dict[str, PixelBuffer]:
        """Thumbnails merged by the most recent generation."""
        with self._lock:
            return dict(self._latest)

    def is_stale(self, generation_id: int) -> bool:
        """True once a newer generation or a cancel has superseded ``generation_id``."""
        with self._lock:
            return generation_id != self._generation

    def cancel(self) -> None:
        """Mark the running generation stale; it stops before its next batch."""
        with self._lock:
            self._generation += 1
            generation = self._generation
        logger.info("Thumbnail generation cancelled (now at generation %d)", generation)

    def generate(
        self,
        preview: Optional[PixelBuffer],
        specs: Iterable[FilterSpec],
    ) -> ThumbnailBatchResult:
        """
        Render ``preview`` through every spec, ``batch_size`` specs at a time.

        Each batch is awaited before the next one starts. A filter that
        raises gets an empty placeholder thumbnail and a ``failures`` entry;
        the rest of the batch is unaffected.

        Args:
            preview: Downscaled source buffer, or None if decoding failed
            specs: Filters to render, in display order

        Returns:
            ThumbnailBatchResult for this generation. ``cancelled`` is set
            when the run was superseded; its thumbnails are then partial and
            were not merged into ``latest_results``.
        """
        specs = list(specs)
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._latest = {}

        result = ThumbnailBatchResult(generation_id=generation)
        logger.debug("Generation %d: %d thumbnails", generation, len(specs))

        if preview is None or preview.is_empty:
            error = ResourceUnavailableError("Preview buffer is unavailable")
            logger.error("Generation %d: %s", generation, error)
            placeholders = {spec.filter_id: PixelBuffer.empty() for spec in specs}
            result.thumbnails.update(placeholders)
            result.failures.update({fid: str(error) for fid in placeholders})
            if not self._merge(generation, placeholders):
                result.cancelled = True
            return result

        progress = BatchProgress(len(specs))
        for start in range(0, len(specs), self.batch_size):
            if self.is_stale(generation):
                logger.info("Generation %d is stale, stopping before batch at %d", generation, start)
                result.cancelled = True
                return result

            batch = specs[start:start + self.batch_size]
            thumbnails = self._run_batch(preview, batch, result.failures, progress)
            result.thumbnails.update(thumbnails)

            if not self._merge(generation, thumbnails):
                logger.info("Generation %d went stale during a batch, discarding it", generation)
                result.cancelled = True
                return result

            if self.on_batch is not None:
                self.on_batch(dict(thumbnails))

        logger.debug(
            "Generation %d finished: %d ok, %d failed",
            generation,
            len(result.succeeded),
            len(result.failures),
        )
        return result

    def _merge(self, generation: int, thumbnails: Dict[str, PixelBuffer]) -> bool:
        """Merge into latest_results unless ``generation`` is stale."""
        with self._lock:
            if generation != self._generation:
                return False
            self._latest.update(thumbnails)
            return True

    def _run_batch(
        self,
        preview: PixelBuffer,
        batch: List[FilterSpec],
        failures: Dict[str, str],
        progress: BatchProgress,
    ) -> Dict[str, PixelBuffer]:
        """Render one batch concurrently. Returns thumbnails in batch order."""
        rendered: Dict[str, PixelBuffer] = {}
        num_workers = min(self.max_workers, len(batch))

        with ThreadPoolExecutor(max_workers=num_workers) as pool:
            # Each worker gets its own copy of the preview
            futures = {
                pool.submit(self._render, preview.copy(), spec): spec
                for spec in batch
            }

            for future in as_completed(futures):
                spec = futures[future]
                try:
                    rendered[spec.filter_id] = future.result()
                except Exception as e:
                    logger.exception("Thumbnail for filter '%s' failed", spec.filter_id)
                    rendered[spec.filter_id] = PixelBuffer.empty()
                    failures[spec.filter_id] = str(e) or type(e).__name__

                completed = progress.increment()
                if self.on_progress is not None:
                    self.on_progress(completed, progress.total)

        return {spec.filter_id: rendered[spec.filter_id] for spec in batch}

    def _render(self, buffer: PixelBuffer, spec: FilterSpec) -> PixelBuffer:
        return self.executor.execute(buffer, spec.pipeline)
