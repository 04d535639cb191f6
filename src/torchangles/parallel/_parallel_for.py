"""Grain-tuned parallel sweep over independent indices.

The kernels in this package describe their work as "apply an independent
functor to every row of a table". This module dispatches that work either
serially or as contiguous chunks on a thread pool. torch releases the GIL
inside its ops, so chunked vectorized work scales across threads.

torch also has its own intra-op thread pool. Both pools together can
oversubscribe the CPU, so callers should keep chunks below torch's intra-op
grain (32768 values), where torch runs each op on the calling thread. The
angle kernels cap their chunks accordingly.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from torchangles.parallel._threads import get_num_threads

logger = logging.getLogger(__name__)

DEFAULT_GRAIN_SIZE = 1000

_worker_state = threading.local()


def _in_worker() -> bool:
    return getattr(_worker_state, "active", False)


def parallel_for_chunks(
    n: int,
    func: Callable[[int, int], None],
    grain_size: int = DEFAULT_GRAIN_SIZE,
) -> bool:
    """Apply `func(start, stop)` over contiguous ranges covering [0, n).

    [0, n) is split into ceil(n / grain_size) ranges of `grain_size` indices
    (the last may be shorter). The ranges depend only on `n` and `grain_size`,
    so results never depend on the thread count. They run on the calling
    thread when there is a single range, when only one thread is configured,
    or when called from inside another sweep's worker. Otherwise they are
    dispatched to a thread pool.

    Ranges never overlap, so `func` may write `output[start:stop]` without
    locking. No ordering between ranges is guaranteed.

    Args:
        n: Number of indices
        func: Callable receiving a half-open range (start, stop)
        grain_size: Number of indices per range (a tuning hint)

    Returns:
        True if the work was dispatched to the thread pool, False if it ran serially.

    Raises:
        ValueError: If `grain_size` < 1.
        Exception: The first exception raised by `func`, after all ranges finish.
    """
    if grain_size < 1:
        raise ValueError(f"`grain_size` must be >= 1, but got {grain_size=}.")
    if n <= 0:
        return False

    n_threads = get_num_threads()
    ranges = [(start, min(start + grain_size, n)) for start in range(0, n, grain_size)]
    nested = _in_worker()

    if len(ranges) == 1 or n_threads <= 1 or nested:
        logger.debug(
            "Serial sweep: n=%d grain_size=%d n_threads=%d nested=%s",
            n,
            grain_size,
            n_threads,
            nested,
        )
        for start, stop in ranges:
            func(start, stop)
        return False

    n_workers = min(n_threads, len(ranges))
    logger.debug(
        "Parallel sweep: n=%d grain_size=%d n_chunks=%d n_workers=%d",
        n,
        grain_size,
        len(ranges),
        n_workers,
    )

    def run(start: int, stop: int) -> None:
        _worker_state.active = True
        try:
            func(start, stop)
        finally:
            _worker_state.active = False

    with ThreadPoolExecutor(max_workers=n_workers) as pool:
        futures = [pool.submit(run, start, stop) for start, stop in ranges]

    ### Surface the first failure once every chunk has settled
    for future in futures:
        future.result()

    return True


def parallel_for(
    n: int,
    func: Callable[[int], None],
    grain_size: int = DEFAULT_GRAIN_SIZE,
) -> bool:
    """Apply `func(i)` for every i in range(n), possibly in parallel.

    Every call completes before this returns. Calls for distinct indices must
    not share mutable state beyond disjoint output slices.

    Returns:
        True if the work was dispatched to the thread pool, False if it ran serially.
    """

    def run_range(start: int, stop: int) -> None:
        for i in range(start, stop):
            func(i)

    return parallel_for_chunks(n, run_range, grain_size=grain_size)
