"""Thread-count configuration for the parallel sweep.

Resolution order: a runtime override from `set_num_threads`, then the
TORCHANGLES_NUM_THREADS environment variable, then `os.cpu_count()`.
"""

import os

NUM_THREADS_ENV_VAR = "TORCHANGLES_NUM_THREADS"

_num_threads_override: int | None = None


def set_num_threads(n_threads: int | None) -> None:
    """Override the number of worker threads used by `parallel_for`.

    Args:
        n_threads: Positive thread count, or None to clear the override.
    """
    global _num_threads_override
    if n_threads is not None and n_threads < 1:
        raise ValueError(f"`n_threads` must be a positive integer, but got {n_threads=}.")
    _num_threads_override = n_threads


def get_num_threads() -> int:
    """Number of worker threads a parallel sweep may use."""
    if _num_threads_override is not None:
        return _num_threads_override

    value = os.environ.get(NUM_THREADS_ENV_VAR)
    if value:
        try:
            n_threads = int(value)
        except ValueError:
            raise ValueError(
                f"{NUM_THREADS_ENV_VAR} must be a positive integer, but got {value!r}."
            ) from None
        if n_threads < 1:
            raise ValueError(
                f"{NUM_THREADS_ENV_VAR} must be a positive integer, but got {value!r}."
            )
        return n_threads

    return os.cpu_count() or 1
