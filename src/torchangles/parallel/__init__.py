from torchangles.parallel._parallel_for import (
    DEFAULT_GRAIN_SIZE,
    parallel_for,
    parallel_for_chunks,
)
from torchangles.parallel._threads import (
    NUM_THREADS_ENV_VAR,
    get_num_threads,
    set_num_threads,
)

__all__ = [
    "DEFAULT_GRAIN_SIZE",
    "NUM_THREADS_ENV_VAR",
    "parallel_for",
    "parallel_for_chunks",
    "get_num_threads",
    "set_num_threads",
]
