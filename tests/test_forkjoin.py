"""Tests for the fork/join runner: coverage, concurrency and failure propagation."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from ppm_parallel import InvalidParameter, TaskFailure, fork_join, fork_join_rows, per_index


@pytest.mark.parametrize("cutoff", [1, 2, 3, 7, 64, 10000])
@pytest.mark.parametrize("workers", [1, 2, 4])
def test_every_index_written_exactly_once(cutoff, workers):
    n = 513
    counts = np.zeros(n, dtype=np.int64)

    def bump(i):
        counts[i] += 1

    fork_join(per_index(bump), n, cutoff=cutoff, workers=workers)
    assert (counts == 1).all()


def test_sub_range_only():
    seen = np.zeros(20, dtype=np.int64)

    def compute(start, end):
        seen[start:end] += 1

    fork_join(compute, 15, start=5, cutoff=2, workers=3)
    assert seen.tolist() == [0] * 5 + [1] * 10 + [0] * 5


def test_empty_range_is_noop():
    calls = []
    fork_join(lambda s, e: calls.append((s, e)), 0)
    fork_join(lambda s, e: calls.append((s, e)), 4, start=4)
    assert calls == []


@pytest.mark.parametrize("start,end", [(5, 3), (-1, 4)])
def test_invalid_range_rejected(start, end):
    with pytest.raises(InvalidParameter):
        fork_join(lambda s, e: None, end, start=start)


def test_invalid_cutoff_rejected():
    with pytest.raises(InvalidParameter):
        fork_join(lambda s, e: None, 10, cutoff=0)


def test_leaves_respect_cutoff():
    ranges = []
    lock = threading.Lock()

    def compute(start, end):
        with lock:
            ranges.append((start, end))

    fork_join(compute, 1000, cutoff=100, workers=4)
    assert all(end - start < 100 for start, end in ranges)
    assert sorted(ranges)[0][0] == 0
    assert sum(end - start for start, end in ranges) == 1000


def test_halves_run_on_several_threads():
    idents = set()
    lock = threading.Lock()

    def compute(start, end):
        time.sleep(0.002)
        with lock:
            idents.add(threading.get_ident())

    fork_join(compute, 256, cutoff=8, workers=4)
    assert len(idents) > 1


def test_single_worker_nested_joins_do_not_deadlock():
    out = np.zeros(300, dtype=np.int64)

    def compute(start, end):
        out[start:end] = np.arange(start, end)

    fork_join(compute, 300, cutoff=1, workers=1)
    assert out.tolist() == list(range(300))


def test_failure_propagates_as_task_failure():
    def compute(start, end):
        if start <= 77 < end:
            raise ValueError("bad pixel")

    with pytest.raises(TaskFailure) as excinfo:
        fork_join(compute, 200, cutoff=4, workers=4)
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert excinfo.value.start <= 77 < excinfo.value.end


def test_failure_joins_siblings_and_releases_threads():
    baseline = threading.active_count()
    finished = []
    lock = threading.Lock()

    def compute(start, end):
        if start == 0:
            raise RuntimeError("boom")
        time.sleep(0.001)
        with lock:
            finished.append((start, end))

    with pytest.raises(TaskFailure):
        fork_join(compute, 128, cutoff=8, workers=4)
    snapshot = list(finished)
    time.sleep(0.05)
    # Nothing keeps running after the caller sees the failure
    assert finished == snapshot
    assert threading.active_count() == baseline


def test_shared_executor_is_reused():
    out = np.zeros(100, dtype=np.int64)

    def compute(start, end):
        out[start:end] += 1

    with ThreadPoolExecutor(max_workers=2) as executor:
        fork_join(compute, 100, cutoff=10, executor=executor)
        fork_join(compute, 100, cutoff=3, executor=executor)
    assert (out == 2).all()


def test_rows_variant_converts_pixel_cutoff():
    bands = []
    lock = threading.Lock()

    def compute_rows(row_start, row_end):
        with lock:
            bands.append((row_start, row_end))

    # 100 pixels per row, cutoff of 250 pixels -> bands of at most 2 rows
    fork_join_rows(compute_rows, 16, 100, cutoff=250, workers=2)
    assert all(end - start <= 2 for start, end in bands)
    assert sum(end - start for start, end in bands) == 16
