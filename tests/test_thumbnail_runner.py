import threading

import pytest

from instafilter.core import FilterCategory, InvalidParameterError, PixelBuffer
from instafilter.processing import (
    FilterPipeline,
    FilterSpec,
    FilterStep,
    ProcessingExecutor,
    require_filter,
)
from instafilter.services import BatchProgress, ThumbnailBatcher

IDS = ["normal", "inkwell", "clarendon", "1977", "moon"]


def broken_spec() -> FilterSpec:
    # Eight weights is not a square kernel; only caught when executed
    step = FilterStep("convolute", {"kernel": (1,) * 8})
    return FilterSpec("broken", "Broken", FilterCategory.ARTISTIC, FilterPipeline((step,)))


def specs(ids=IDS):
    return [require_filter(fid) for fid in ids]


def test_generates_every_thumbnail_in_order(random_buffer):
    batcher = ThumbnailBatcher(batch_size=2)
    result = batcher.generate(random_buffer, specs())

    assert not result.cancelled
    assert list(result.thumbnails) == IDS
    assert result.failures == {}
    assert result.succeeded == IDS
    assert result.thumbnails["inkwell"] == require_filter("inkwell").apply(random_buffer)
    assert batcher.latest_results.keys() == result.thumbnails.keys()


def test_batches_and_progress(random_buffer):
    batches = []
    progress = []
    batcher = ThumbnailBatcher(
        batch_size=2,
        max_workers=2,
        on_batch=lambda thumbs: batches.append(list(thumbs)),
        on_progress=lambda done, total: progress.append((done, total)),
    )
    batcher.generate(random_buffer, specs())

    assert batches == [IDS[0:2], IDS[2:4], IDS[4:5]]
    assert [done for done, _ in progress] == [1, 2, 3, 4, 5]
    assert all(total == 5 for _, total in progress)


def test_failing_filter_gets_placeholder(random_buffer):
    batcher = ThumbnailBatcher(batch_size=6)
    result = batcher.generate(random_buffer, specs(["normal"]) + [broken_spec()] + specs(["moon"]))

    assert result.thumbnails["broken"].is_empty
    assert "broken" in result.failures
    assert result.succeeded == ["normal", "moon"]
    assert not result.thumbnails["moon"].is_empty


def test_missing_preview_gives_placeholders():
    batcher = ThumbnailBatcher()
    for preview in (None, PixelBuffer.empty()):
        result = batcher.generate(preview, specs())
        assert list(result.thumbnails) == IDS
        assert all(thumb.is_empty for thumb in result.thumbnails.values())
        assert all("unavailable" in msg for msg in result.failures.values())
        assert result.succeeded == []


def test_cancel_stops_before_next_batch(random_buffer):
    batcher = ThumbnailBatcher(batch_size=2)
    batcher.on_batch = lambda thumbs: batcher.cancel()

    result = batcher.generate(random_buffer, specs())
    assert result.cancelled
    assert list(result.thumbnails) == IDS[:2]


def test_newer_generation_supersedes_older(random_buffer):
    batcher = ThumbnailBatcher(batch_size=2)
    nested = {}

    def start_newer(thumbs):
        if "started" not in nested:
            nested["started"] = True
            nested["result"] = batcher.generate(random_buffer, specs(["sierra"]))

    batcher.on_batch = start_newer
    older = batcher.generate(random_buffer, specs())
    newer = nested["result"]

    assert older.cancelled
    assert not newer.cancelled
    assert newer.generation_id > older.generation_id
    assert list(batcher.latest_results) == ["sierra"]


def test_batch_that_goes_stale_is_not_merged(random_buffer):
    class CancellingExecutor(ProcessingExecutor):
        def execute(self, buffer, pipeline, rng=None):
            batcher.cancel()
            return super().execute(buffer, pipeline, rng=rng)

    batcher = ThumbnailBatcher(batch_size=2, executor=CancellingExecutor())
    result = batcher.generate(random_buffer, specs())

    assert result.cancelled
    assert batcher.latest_results == {}


def test_workers_get_their_own_copy(random_buffer):
    seen = []
    lock = threading.Lock()

    class RecordingExecutor(ProcessingExecutor):
        def execute(self, buffer, pipeline, rng=None):
            with lock:
                seen.append(buffer.data)
            return super().execute(buffer, pipeline, rng=rng)

    batcher = ThumbnailBatcher(batch_size=3, executor=RecordingExecutor())
    batcher.generate(random_buffer, specs(IDS[:3]))

    assert len(seen) == 3
    assert all(data is not random_buffer.data for data in seen)
    assert len({id(data) for data in seen}) == 3


def test_empty_spec_list(random_buffer):
    result = ThumbnailBatcher().generate(random_buffer, [])
    assert result.thumbnails == {}
    assert not result.cancelled


def test_invalid_configuration():
    with pytest.raises(InvalidParameterError):
        ThumbnailBatcher(batch_size=0)
    with pytest.raises(InvalidParameterError):
        ThumbnailBatcher(max_workers=0)


def test_batch_progress():
    progress = BatchProgress(4)
    assert progress.increment() == 1
    assert progress.get_completed() == 1
    assert progress.get_percent() == 25
    assert BatchProgress(0).get_percent() == 100
