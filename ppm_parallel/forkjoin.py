"""Recursive fork/join over a half-open index range on a ThreadPoolExecutor."""
import logging
from concurrent.futures import ThreadPoolExecutor

from .config import ForkJoinConfig
from .errors import InvalidParameter, TaskFailure

logger = logging.getLogger(__name__)


def per_index(f):
    """Adapt a per-index function ``f(i)`` to the ``compute(start, end)`` form."""
    def compute(start, end):
        for i in range(start, end):
            f(i)
    return compute


def _compute_directly(compute, start, end):
    try:
        compute(start, end)
    except TaskFailure:
        raise
    except Exception as exc:
        raise TaskFailure(f"task [{start}, {end}) failed: {exc}", start, end) from exc


def _fork_join(executor, compute, start, end, cutoff):
    if end <= start:
        return
    # A single index cannot be split further whatever the cutoff
    if end - start < max(cutoff, 2):
        _compute_directly(compute, start, end)
        return

    mid = start + (end - start) // 2
    # Upper half goes to the pool; the parent reclaims it below if no worker started it,
    # so a thread only ever blocks on work that is already running
    upper = executor.submit(_fork_join, executor, compute, mid, end, cutoff)
    try:
        _fork_join(executor, compute, start, mid, cutoff)
    except BaseException:
        if not upper.cancel():
            # Sibling is running; let it finish before reporting
            upper.exception()
        raise

    if upper.cancel():
        _fork_join(executor, compute, mid, end, cutoff)
    else:
        upper.result()


def _resolve(config, cutoff, workers):
    if config is None:
        return ForkJoinConfig.from_env(cutoff=cutoff, workers=workers)
    return config.override(cutoff=cutoff, workers=workers)


def fork_join(compute, end, start=0, cutoff=None, workers=None, executor=None, config=None):
    """Run ``compute(start, end)`` over [start, end), split across threads."""
    if not 0 <= start <= end:
        raise InvalidParameter(f"invalid task range [{start}, {end})")
    config = _resolve(config, cutoff, workers)
    if end == start:
        return

    if executor is not None:
        _fork_join(executor, compute, start, end, config.cutoff)
        return

    logger.debug("fork_join [%d, %d) cutoff=%d workers=%d", start, end, config.cutoff, config.workers)
    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        _fork_join(executor, compute, start, end, config.cutoff)


def fork_join_rows(compute_rows, height, width, cutoff=None, workers=None, executor=None, config=None):
    config = _resolve(config, cutoff, workers)
    # cutoff is in pixels; convert to whole rows
    row_cutoff = max(1, -(-config.cutoff // max(width, 1)))
    fork_join(compute_rows, height, cutoff=row_cutoff, executor=executor, config=config)
